"""
preview.py
==========
Dry-run command: expands a webhook payload and prints the document
records that would be sent for signature, without calling the provider.

Usage:
  esign-preview payload.json
  cat payload.json | esign-preview -
"""

import json
import sys
from collections import Counter
from pathlib import Path

import typer

from .exceptions import ValidationError
from .expander import expand_records

app = typer.Typer(name="esign-preview", help="Preview document records for a signing webhook payload")


@app.command()
def preview(
    payload_file: str = typer.Argument("-", help="Path to a JSON payload, or '-' for stdin"),
    indent: int = typer.Option(2, help="JSON indentation for the printed records"),
) -> None:
    """Expand signingRequests[] and print one record per document."""
    try:
        if payload_file == "-":
            raw = json.load(sys.stdin)
        else:
            raw = json.loads(Path(payload_file).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        typer.echo(f"Could not read payload: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        records = expand_records(raw)
    except ValidationError as e:
        typer.echo(f"Invalid payload: {e.message}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps([r.model_dump() for r in records], indent=indent))

    typer.echo(f"Document records: {len(records)}", err=True)
    for name, count in Counter(r.patient_name for r in records).items():
        typer.echo(f"  - {name or '(no name)'}: {count} documents", err=True)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
