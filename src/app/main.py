"""
Education-Health story app entrypoint.

This module provides the CLI entrypoint to launch the Streamlit UI. It defers
all UI composition to the app.ui package and exists solely to start Streamlit
programmatically or render directly when already running under Streamlit.

Usage:
    - Python execution (hands process to Streamlit):
        python -m app.main --data data/processed_data.json --scene 2

    - Streamlit direct:
        streamlit run src/app/main.py -- --data data/processed_data.json
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

from app.ui import streamlit_app


def _build_parser(add_help: bool = True) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Education-Health Story", add_help=add_help)
    parser.add_argument(
        "--data",
        default=None,
        help="Path or http(s) URL of the JSON observation array (overrides EHSTORY_DATA_SOURCE).",
    )
    parser.add_argument(
        "--scene",
        type=int,
        choices=(1, 2, 3),
        default=None,
        help="Scene to open on first load.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint that launches Streamlit with the story UI.

    If already executing within a Streamlit server (environment variable
    STREAMLIT_SERVER_PORT is set), this function renders the app directly.
    Otherwise, it execs "python -m streamlit run <this_module>" passing the
    supported options through after "--".

    Args:
        argv (list[str] | None): Optional list of CLI arguments. If None,
            sys.argv[1:] is used.

    Examples:
        ehstory-app --data data/processed_data.json
        streamlit run src/app/main.py -- --scene 3
    """
    args = list(sys.argv[1:] if argv is None else argv)
    ns = _build_parser().parse_args(args)

    # If invoked within Streamlit, just render
    if os.environ.get("STREAMLIT_SERVER_PORT"):
        streamlit_app(default_data=ns.data, default_scene=ns.scene)
        return

    # Otherwise, exec streamlit run on this module to take over the process
    app_path = Path(__file__).resolve()
    cmd = [sys.executable, "-m", "streamlit", "run", str(app_path)]

    passthrough: list[str] = []
    if ns.data:
        passthrough += ["--data", ns.data]
    if ns.scene is not None:
        passthrough += ["--scene", str(ns.scene)]
    if passthrough:
        cmd += ["--"] + passthrough

    try:
        os.execv(sys.executable, cmd)
    except OSError:
        subprocess.run(cmd, check=False)


if __name__ == "__main__":
    # Support: --data, --scene after '--' when using `streamlit run`
    try:
        ns, _ = _build_parser(add_help=False).parse_known_args(sys.argv[1:])
        streamlit_app(default_data=ns.data, default_scene=ns.scene)
    except SystemExit:
        # Fallback to no-arg render
        streamlit_app()
