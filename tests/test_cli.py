from pathlib import Path

import orjson
from typer.testing import CliRunner

from encword.cli import app

runner = CliRunner()


def test_decode_segment_file_to_json(tmp_path: Path):
    segments = tmp_path / "segments.json"
    segments.write_bytes(
        orjson.dumps(
            [
                {"clear": "Subject: "},
                {"encoding": "B", "charset": "utf-8", "data": "w6l0w6k="},
                {"encoding": "B", "charset": "utf-8", "data": "!!!"},
            ]
        )
    )
    out = tmp_path / "out.json"
    result = runner.invoke(app, ["decode", str(segments), "--output", str(out)])
    assert result.exit_code == 0, result.output
    payload = orjson.loads(out.read_bytes())
    assert payload["text"] == "Subject: été!!!"
    assert payload["warnings"][0]["stage"] == "encoding"
    assert [s["fallback"] for s in payload["segments"]] == [False, False, True]


def test_decode_text_format_from_sample(tmp_path: Path):
    sample = tmp_path / "sample.json"
    assert runner.invoke(app, ["sample", "--output", str(sample)]).exit_code == 0
    out = tmp_path / "out.txt"
    result = runner.invoke(app, ["decode", str(sample), "-f", "text", "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8") == "Café au lait - été"


def test_decode_rejects_missing_file_and_bad_format(tmp_path: Path):
    assert runner.invoke(app, ["decode", str(tmp_path / "missing.json")]).exit_code != 0
    sample = tmp_path / "sample.json"
    runner.invoke(app, ["sample", "-o", str(sample)])
    assert runner.invoke(app, ["decode", str(sample), "-f", "arrow"]).exit_code != 0


def test_word_command_decodes_single_segment():
    result = runner.invoke(app, ["word", "SGVsbG8=", "--encoding", "B"])
    assert result.exit_code == 0, result.output
    assert "Hello" in result.output
