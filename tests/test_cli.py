from __future__ import annotations

import json
import struct
import wave
from pathlib import Path

from click.testing import CliRunner

from pcmwave.cli import main


def test_tone_writes_wav(isolated_home, tmp_path: Path) -> None:
    out = tmp_path / "tone.wav"
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["tone", str(out), "--duration", "0.25", "--sample-rate", "8000", "--bits", "8"],
    )
    assert result.exit_code == 0, result.output
    with wave.open(str(out), "rb") as wf:
        assert wf.getframerate() == 8000
        assert wf.getsampwidth() == 1
        assert wf.getnframes() == 2000


def test_tone_uses_env_defaults(isolated_home, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("PCMWAVE_SAMPLE_RATE", "16000")
    out = tmp_path / "tone.wav"
    result = CliRunner().invoke(main, ["tone", str(out), "--duration", "0.1"])
    assert result.exit_code == 0, result.output
    with wave.open(str(out), "rb") as wf:
        assert wf.getframerate() == 16000
        assert wf.getsampwidth() == 2


def test_tone_strict_rejects_loud_amplitude(isolated_home, tmp_path: Path) -> None:
    out = tmp_path / "loud.wav"
    result = CliRunner().invoke(
        main, ["tone", str(out), "--amplitude", "2.0", "--duration", "0.01", "--strict"]
    )
    assert result.exit_code != 0
    assert "outside [-1.0, 1.0]" in result.output
    assert not out.exists()


def test_encode_from_stdin_to_stdout(isolated_home) -> None:
    result = CliRunner().invoke(
        main,
        ["encode", "-", "--sample-rate", "8000", "--bits", "8"],
        input="0.0\n# comment\n\n1.0\n-1.0  # trailing\n",
    )
    assert result.exit_code == 0, result.output
    data = result.stdout_bytes
    assert len(data) == 47
    assert struct.unpack_from("<I", data, 40)[0] == 3
    assert data[44:] == bytes([127, 254, 0])


def test_encode_reports_bad_line(isolated_home, tmp_path: Path) -> None:
    result = CliRunner().invoke(main, ["encode", str(tmp_path / "x.wav")], input="0.5\nloud\n")
    assert result.exit_code != 0
    assert "line 2" in result.output


def test_encode_bad_env_config(isolated_home, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("PCMWAVE_BITS_PER_SAMPLE", "12")
    result = CliRunner().invoke(main, ["encode", str(tmp_path / "x.wav")], input="0.5\n")
    assert result.exit_code != 0
    assert "PCMWAVE_BITS_PER_SAMPLE" in result.output


def test_info_json(isolated_home) -> None:
    result = CliRunner().invoke(
        main,
        ["info", "--channels", "2", "--sample-rate", "44100", "--bits", "16", "--samples", "10", "--json"],
    )
    assert result.exit_code == 0, result.output
    fields = json.loads(result.output)
    assert fields["subchunk2_size"] == 40
    assert fields["chunk_size"] == 76
    assert fields["file_size"] == 84
    assert fields["block_align"] == 4


def test_info_rejects_unsupported_bits(isolated_home) -> None:
    result = CliRunner().invoke(main, ["info", "--bits", "24"])
    assert result.exit_code != 0


def test_encode_rejects_format_too_large_for_header(isolated_home, tmp_path: Path) -> None:
    out = tmp_path / "x.wav"
    result = CliRunner().invoke(
        main,
        ["encode", str(out), "--sample-rate", "4000000000", "--channels", "2"],
        input="0.0\n",
    )
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "byte_rate" in result.output
    assert not out.exists()


def test_info_sizes_large_counts_without_samples(isolated_home) -> None:
    result = CliRunner().invoke(
        main, ["info", "--bits", "16", "--channels", "1", "--samples", "2000000000", "--json"]
    )
    assert result.exit_code == 0, result.output
    fields = json.loads(result.output)
    assert fields["subchunk2_size"] == 4000000000
    assert fields["chunk_size"] == 4000000036


def test_info_rejects_count_that_overflows_chunk_size(isolated_home) -> None:
    result = CliRunner().invoke(main, ["info", "--bits", "16", "--samples", "3000000000"])
    assert result.exit_code != 0
    assert "chunk_size" in result.output


def test_stereo_tone_has_matching_payload(isolated_home, tmp_path: Path) -> None:
    out = tmp_path / "stereo.wav"
    result = CliRunner().invoke(
        main,
        ["tone", str(out), "--channels", "2", "--sample-rate", "8000", "--duration", "0.1"],
    )
    assert result.exit_code == 0, result.output
    with wave.open(str(out), "rb") as wf:
        assert wf.getnchannels() == 2
        assert wf.getnframes() == 800
        assert len(wf.readframes(800)) == 800 * 4
