import subprocess
from pathlib import Path
from types import SimpleNamespace

import pytest

from streamhub.services.media import storage


@pytest.fixture
def ffprobe(monkeypatch):
    def _install(stdout="", returncode=0, error=None):
        def fake_run(cmd, **kwargs):
            if error is not None:
                raise error
            return SimpleNamespace(returncode=returncode, stdout=stdout)
        monkeypatch.setattr(storage.subprocess, "run", fake_run)
    return _install


def test_duration_read_from_container_format(ffprobe):
    ffprobe('{"format": {"duration": "12.34567"}}')
    assert storage.probe_duration(Path("clip.mp4")) == 12.346


@pytest.mark.parametrize("stdout", ["not json", "[]", '{"format": {"duration": "N/A"}}', ""])
def test_unusable_ffprobe_output_gives_zero(ffprobe, stdout):
    ffprobe(stdout)
    assert storage.probe_duration(Path("clip.mp4")) == 0.0


def test_ffprobe_failures_give_zero(ffprobe):
    ffprobe(returncode=1)
    assert storage.probe_duration(Path("clip.mp4")) == 0.0
    ffprobe(error=FileNotFoundError("ffprobe"))
    assert storage.probe_duration(Path("clip.mp4")) == 0.0
    ffprobe(error=subprocess.TimeoutExpired("ffprobe", 30))
    assert storage.probe_duration(Path("clip.mp4")) == 0.0
