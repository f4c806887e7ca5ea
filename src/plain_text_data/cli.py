"""Console script for plain_text_data."""

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from plain_text_data import utils
from plain_text_data.plain_text_data import ParseOptions, parse

app = typer.Typer()
console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    json = "json"
    yaml = "yaml"


def _unescape(token: str) -> str:
    return token.replace("\\t", "\t")


def _build_options(
    config: Path | None,
    comment: list[str] | None,
    no_comment: bool,
    delimiter: str | None,
    forgiving: str | None,
    quiet: bool,
) -> ParseOptions:
    data = {}
    if config is not None:
        data = utils.yaml_loads(config.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {config} must contain a mapping")
    if no_comment:
        data["comment"] = False
    elif comment:
        data["comment"] = [_unescape(c) for c in comment]
    if delimiter is not None:
        data["delimiter"] = _unescape(delimiter)
    if forgiving is not None:
        data["forgiving"] = forgiving
    if quiet:
        data["log"] = False
    options = ParseOptions.from_mapping(data)
    options.logger = lambda message: err_console.print(
        message, markup=False, emoji=False, highlight=False, soft_wrap=True
    )
    return options


@app.command()
def main(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    comment: Optional[list[str]] = typer.Option(
        None, "--comment", "-c", help="Comment token, repeat for several"
    ),
    no_comment: bool = typer.Option(False, "--no-comment", help="Keep comments"),
    delimiter: Optional[str] = typer.Option(
        None, "--delimiter", "-d", help="Key/value delimiter, `\\t` for a tab"
    ),
    forgiving: Optional[str] = typer.Option(
        None, "--forgiving", "-f", help="Duplicate policy: strict, true or fix"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not log duplicates"),
    config: Optional[Path] = typer.Option(
        None, "--config", exists=True, dir_okay=False, help="YAML file of options"
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.json, "--format", help="Output format"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
):
    """Convert a plain-text data file to JSON or YAML."""
    try:
        options = _build_options(
            config, comment, no_comment, delimiter, forgiving, quiet
        )
        value = parse(file.read_text(encoding="utf-8-sig"), options)
    except ValueError as e:
        err_console.print(
            f"[red]{escape(str(e))}[/red]", emoji=False, highlight=False, soft_wrap=True
        )
        raise typer.Exit(code=1)

    if output_format is OutputFormat.yaml:
        text = utils.yaml_dumps(value)
    else:
        text = utils.json_dumps(value) + "\n"

    if output is not None:
        output.write_text(text, encoding="utf-8")
    else:
        console.out(text, end="", highlight=False)


if __name__ == "__main__":
    app()
