from __future__ import annotations

import os
from pathlib import Path

import pytest

from app import main as app_main


def test_main_renders_inline(monkeypatch, tmp_path) -> None:
    called = {}

    def fake_streamlit_app(*, default_data=None, default_scene=None):
        called["default_data"] = default_data
        called["default_scene"] = default_scene

    monkeypatch.setenv("STREAMLIT_SERVER_PORT", "1")
    # Patch the imported symbol used inside app.main (not the package attribute)
    monkeypatch.setattr(app_main, "streamlit_app", fake_streamlit_app, raising=True)

    data = str(tmp_path / "processed_data.json")
    app_main.main(["--data", data, "--scene", "2"])

    assert called["default_data"] == data
    assert called["default_scene"] == 2


def test_main_execs_streamlit(monkeypatch, tmp_path) -> None:
    # Ensure not in Streamlit context
    monkeypatch.delenv("STREAMLIT_SERVER_PORT", raising=False)

    captured = {}

    def fake_execv(exe: str, cmd: list[str]) -> None:
        captured["exe"] = exe
        captured["cmd"] = cmd
        # Prevent process handoff
        raise SystemExit

    monkeypatch.setattr(os, "execv", fake_execv, raising=True)

    data = str(tmp_path / "processed_data.json")
    with pytest.raises(SystemExit):
        app_main.main(["--data", data, "--scene", "3"])

    assert captured["cmd"][0] == captured["exe"]
    assert captured["cmd"][1:4] == ["-m", "streamlit", "run"]
    expected_main_path = str(Path(app_main.__file__).resolve())
    assert captured["cmd"][4] == expected_main_path
    dashdash_idx = captured["cmd"].index("--")
    passthrough = captured["cmd"][dashdash_idx + 1 :]
    assert passthrough == ["--data", data, "--scene", "3"]


def test_main_without_options_passes_nothing_through(monkeypatch) -> None:
    monkeypatch.delenv("STREAMLIT_SERVER_PORT", raising=False)
    captured = {}

    def fake_execv(exe: str, cmd: list[str]) -> None:
        captured["cmd"] = cmd
        raise SystemExit

    monkeypatch.setattr(os, "execv", fake_execv, raising=True)

    with pytest.raises(SystemExit):
        app_main.main([])

    assert "--" not in captured["cmd"]


def test_main_rejects_unknown_scene() -> None:
    with pytest.raises(SystemExit):
        app_main.main(["--scene", "4"])
