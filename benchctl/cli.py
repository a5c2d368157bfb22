"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from benchctl.core.config_loader import LoadedConfig, load_config
from benchctl.core.errors import ConfigError
from benchctl.core.model import BenchConfig
from benchctl.core.service import BenchService
from benchctl.sinks.file import FileLogSink

app = typer.Typer(
    help="Simulated hardware control bench driven by commands on stdin",
    add_completion=False,
)


def _load(config_path: Path) -> LoadedConfig:
    try:
        return load_config(config_path)
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        return LoadedConfig(config=BenchConfig(), warnings=())


def _build_service(config_path: Path, log_dir: Path) -> BenchService:
    loaded = _load(config_path)
    for warning in loaded.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    return BenchService(loaded.config, sink=FileLogSink(log_dir))


@app.command()
def main(
    config_path: Path = typer.Argument(..., help="Bench configuration file (text or YAML)"),
    log_dir: Path = typer.Argument(..., help="Directory receiving per-port log files on exit"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging on stderr"),
) -> None:
    """Read commands from stdin until 'exit' and run them against the bench."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    service = _build_service(config_path, log_dir)
    stdin = typer.get_text_stream("stdin")
    for result in service.run(stdin):
        if result.success:
            if result.message:
                typer.echo(result.message)
        else:
            typer.echo(f"Error: {result.message}", err=True)
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
