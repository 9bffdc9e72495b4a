import importlib.util
import subprocess
import sys
from pathlib import Path

import pytest


SETUP_PATH = Path(__file__).resolve().parent.parent / "scripts" / "setup.py"


@pytest.fixture
def setup_script():
    spec = importlib.util.spec_from_file_location("element_extractor_setup", SETUP_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_setup_installs_project_then_chromium(setup_script, monkeypatch):
    commands = []

    def fake_run(cmd, **kwargs):
        commands.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(setup_script.subprocess, "run", fake_run)
    setup_script.main()

    assert commands == [
        [sys.executable, "-m", "pip", "install", "-e", str(setup_script.PROJECT_ROOT)],
        [sys.executable, "-m", "playwright", "install", "chromium"],
    ]


def test_setup_stops_on_failed_install(setup_script, monkeypatch, capsys):
    commands = []

    def fake_run(cmd, **kwargs):
        commands.append(cmd)
        raise subprocess.CalledProcessError(1, cmd, stderr="no network")

    monkeypatch.setattr(setup_script.subprocess, "run", fake_run)

    with pytest.raises(SystemExit) as exc_info:
        setup_script.main()

    assert exc_info.value.code == 1
    assert len(commands) == 1
    out = capsys.readouterr().out
    assert "failed (exit 1)" in out
    assert "no network" in out
