import sys
import pathlib

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
import subprocess
from pathlib import Path
from types import SimpleNamespace

import pytest

import audiosplit.core.cutting as cutting
from audiosplit.core.planner import CutInstruction
from audiosplit.core.timestamps import MalformedField


def test_build_command_with_end():
    ins = CutInstruction("in.mp3", "0:00:10.000", "0:00:20.000", "2.mp3")

    cmd = cutting.build_command(ins, "out")

    assert cmd == [
        "ffmpeg", "-v", "error", "-n",
        "-ss", "0:00:10.000",
        "-to", "0:00:20.000",
        "-i", "in.mp3",
        str(Path("out") / "2.mp3"),
    ]


def test_build_command_tail_has_no_to():
    ins = CutInstruction("in.mp3", "0:00:30.000", None, "4.mp3")

    cmd = cutting.build_command(ins, ffmpeg="/opt/ffmpeg", overwrite=True)

    assert cmd[0] == "/opt/ffmpeg"
    assert "-y" in cmd
    assert "-to" not in cmd
    assert cmd[-1] == "4.mp3"


def test_split_audio_runs_ffmpeg_in_order(tmp_path, monkeypatch):
    calls = []

    def fake_run(cmd, check):
        calls.append(cmd)
        Path(cmd[-1]).write_text("seg")
        return SimpleNamespace(returncode=0)

    monkeypatch.setattr(cutting.subprocess, "run", fake_run)
    out_dir = tmp_path / "parts"

    planned = cutting.split_audio("in.mp3", ["30", "10", "20"], "mp3", str(out_dir))

    assert len(planned) == 4
    assert [c[-1] for c in calls] == [str(out_dir / f"{i}.mp3") for i in range(1, 5)]
    assert [c[c.index("-ss") + 1] for c in calls] == [
        "0:00:00.000", "0:00:10.000", "0:00:20.000", "0:00:30.000",
    ]
    assert "-to" not in calls[-1]
    assert (out_dir / "4.mp3").exists()


def test_split_audio_parses_everything_before_running(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(cutting.subprocess, "run", lambda cmd, check: calls.append(cmd))

    with pytest.raises(MalformedField):
        cutting.split_audio("in.mp3", ["10", "bad", "30"], "mp3", str(tmp_path / "o"))

    assert calls == []
    assert not (tmp_path / "o").exists()


def test_split_audio_stops_on_first_failure(tmp_path, monkeypatch):
    calls = []

    def fake_run(cmd, check):
        calls.append(cmd)
        if len(calls) == 2:
            raise subprocess.CalledProcessError(1, cmd)

    monkeypatch.setattr(cutting.subprocess, "run", fake_run)

    with pytest.raises(cutting.ExternalToolFailure) as err:
        cutting.split_audio("in.mp3", ["10", "20", "30"], "mp3", str(tmp_path))

    assert len(calls) == 2
    assert err.value.instruction.output == "2.mp3"
    assert isinstance(err.value.__cause__, subprocess.CalledProcessError)


def test_missing_ffmpeg_is_external_failure(tmp_path, monkeypatch):
    def fake_run(cmd, check):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(cutting.subprocess, "run", fake_run)
    ins = CutInstruction("in.mp3", "0:00:00.000", None, "1.mp3")

    with pytest.raises(cutting.ExternalToolFailure, match="1.mp3"):
        cutting.extract_part(ins, str(tmp_path), ffmpeg="no-such-ffmpeg")


def test_dry_run_does_not_invoke_ffmpeg(tmp_path, monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(cutting.subprocess, "run", lambda cmd, check: calls.append(cmd))

    planned = cutting.split_audio(
        "in.mp3", ["10"], "mp3", str(tmp_path / "o"), dry_run=True
    )

    assert calls == []
    assert len(planned) == 2
    assert not (tmp_path / "o").exists()
    out = capsys.readouterr().out
    assert "Running: ffmpeg" in out
    assert "2 segment(s) planned" in out
