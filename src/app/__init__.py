"""
Top-level Streamlit app package.

This package hosts the interactive Education-Health story (Streamlit + Altair),
decoupled from the ehstory.* library modules. ehstory decides what each scene
shows; the Streamlit shell and the Altair adapter live here.

CLI entrypoint (configured in pyproject.toml):
    ehstory-app = app.main:main
"""
