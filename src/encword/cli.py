import logging
from pathlib import Path

import orjson
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler

from encword.errors import SegmentFormatError
from encword.evaluator import Evaluation, evaluate_report
from encword.segments import EncodedSegment, load_segments, sample_segments, segment_to_mapping

app = typer.Typer(help="Decode MIME encoded-word segments into readable text.")
console = Console()
SUPPORTED_FORMATS = {"json", "text"}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _check_format(format: str) -> str:
    fmt = format.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise typer.BadParameter(f"Unsupported format '{format}'. Choose from {SUPPORTED_FORMATS}.")
    return fmt


def _payload(result: Evaluation) -> dict[str, object]:
    return {
        "text": result.text,
        "segments": [
            {**segment_to_mapping(o.segment), "text": o.text, "fallback": o.fallback}
            for o in result.outcomes
        ],
        "warnings": [
            {"index": w.index, "stage": w.stage, "value": w.value, "error": w.error}
            for w in result.warnings
        ],
    }


def _emit(result: Evaluation, fmt: str, output: Path | None) -> None:
    if fmt == "text":
        body = result.text.encode("utf-8")
    else:
        body = orjson.dumps(_payload(result), option=orjson.OPT_INDENT_2)
    if output:
        output.write_bytes(body)
        console.print(f"[bold green]Wrote decoded output[/] to {output}")
    elif fmt == "text":
        console.print(result.text, markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(body.decode(), markup=False, highlight=False, soft_wrap=True)


@app.command()
def decode(
    input: Path = typer.Argument(..., help="Segment file (.json, .yml, .yaml) to evaluate."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write the decoded output."
    ),
    format: str = typer.Option("json", "--format", "-f", help="Output format: json | text."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at INFO level."),
) -> None:
    """Evaluate a segment file into a single decoded string."""
    fmt = _check_format(format)
    _configure_logging(verbose)
    if not input.is_file():
        raise typer.BadParameter(f"Input file not found: {input}")
    try:
        segments = load_segments(input)
    except (SegmentFormatError, orjson.JSONDecodeError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"Invalid segment file {input}: {exc}") from exc

    logging.getLogger(__name__).info("Read %d segments from %s", len(segments), input)
    _emit(evaluate_report(segments), fmt, output)


@app.command()
def word(
    data: str = typer.Argument(..., help="Encoded payload, e.g. 'SGVsbG8='."),
    encoding: str = typer.Option("Q", "--encoding", "-e", help="Transfer encoding tag (B or Q)."),
    charset: str = typer.Option("utf-8", "--charset", "-c", help="Charset label."),
    format: str = typer.Option("text", "--format", "-f", help="Output format: json | text."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at INFO level."),
) -> None:
    """Evaluate a single encoded segment given on the command line."""
    fmt = _check_format(format)
    _configure_logging(verbose)
    segment = EncodedSegment(
        data=data.encode("utf-8"), encoding=encoding, charset=charset.encode("utf-8")
    )
    _emit(evaluate_report([segment]), fmt, None)


@app.command()
def sample(
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write the sample segment file."
    ),
) -> None:
    """Print a sample segment file to start from."""
    body = orjson.dumps(sample_segments(), option=orjson.OPT_INDENT_2)
    if output:
        output.write_bytes(body)
        console.print(f"[bold green]Wrote sample segments[/] to {output}")
    else:
        console.print(body.decode(), markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
