"""Main CLI entry point for the xray-jaeger-mapper.

This module provides a command-line interface using Typer around the mapper:
1.  Loading configuration (environment and `.env`).
2.  Reading an X-Ray trace payload from a file or stdin.
3.  Parsing and validating it, including BatchGetTraces responses whose
    segment documents are JSON-encoded strings.
4.  Mapping every trace to the Jaeger-UI model (xray_jaeger_mapper.mapper).
5.  Writing the resulting JSON to a file or stdout.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import find_dotenv, load_dotenv

from .config import get_settings
from .document import TraceDocumentError
from .mapper import map_trace_document
from .mapping.processes import MERGE_POLICIES
from .mapping.segment_walker import MalformedTraceError

app = typer.Typer(help="AWS X-Ray to Jaeger trace mapper CLI")

logger = logging.getLogger(__name__)


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


@app.callback()
def main() -> None:
    """xray-jaeger-mapper CLI.

    Use a subcommand like 'transform' to run a conversion.
    """
    env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file)
        logger.debug("Loaded environment from %s", env_file)


@app.command(help="Convert an X-Ray trace (or BatchGetTraces response) to Jaeger JSON.")
def transform(
    source: str = typer.Argument(..., help="Path to the X-Ray trace JSON, or '-' for stdin"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the result here instead of stdout"
    ),
    indent: Optional[int] = typer.Option(
        None, help="JSON indentation (overrides OUTPUT_INDENT)"
    ),
    max_depth: Optional[int] = typer.Option(
        None, min=1, help="Maximum subsegment nesting (overrides MAX_SUBSEGMENT_DEPTH)"
    ),
    merge_policy: Optional[str] = typer.Option(
        None,
        help="Duplicate process policy: last, first or merge (overrides PROCESS_MERGE_POLICY)",
    ),
) -> None:
    """Map every trace in SOURCE and emit the Jaeger-UI payload.

    A single trace produces one JSON object; a batch or list produces a JSON
    list with one object per trace.
    """
    try:
        settings = get_settings()
    except RuntimeError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    logging.basicConfig(level=settings.LOG_LEVEL)

    if merge_policy is not None:
        merge_policy = merge_policy.strip().lower()
        if merge_policy not in MERGE_POLICIES:
            typer.echo(f"Unknown merge policy {merge_policy!r}", err=True)
            raise typer.Exit(code=2)

    try:
        raw = json.loads(_read_input(source))
    except OSError as e:
        typer.echo(f"Cannot read {source}: {e}", err=True)
        raise typer.Exit(code=1)
    except json.JSONDecodeError as e:
        typer.echo(f"{source} is not valid JSON: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        traces = map_trace_document(
            raw,
            max_depth=max_depth,
            merge_policy=merge_policy,  # type: ignore[arg-type]
        )
    except (TraceDocumentError, MalformedTraceError) as e:
        typer.echo(f"Failed to map trace: {e}", err=True)
        raise typer.Exit(code=1)

    payloads = [t.to_payload() for t in traces]
    is_batch = isinstance(raw, list) or (isinstance(raw, dict) and "Traces" in raw)
    result = payloads if is_batch else payloads[0]
    effective_indent = indent if indent is not None else settings.OUTPUT_INDENT
    text = json.dumps(result, indent=effective_indent, ensure_ascii=False, allow_nan=False)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %d trace(s) to %s", len(payloads), output)
    else:
        typer.echo(text)
    for t in traces:
        logger.debug("Trace %s: %d span(s), %d process(es)", t.traceID, len(t.spans), len(t.processes))


if __name__ == "__main__":  # pragma: no cover
    app()
