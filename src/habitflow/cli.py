"""Command line entry points for HabitFlow."""

from __future__ import annotations

import os

import click


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for the database and logs (overrides HABITFLOW_DATA_DIR).",
)
def cli(data_dir: str | None) -> None:
    """HabitFlow personal habit tracker."""

    if data_dir:
        os.environ["HABITFLOW_DATA_DIR"] = data_dir


@cli.command("run")
def run() -> None:
    """Open the desktop window."""

    import flet as ft

    from .config import BaseConfig
    from .desktop.app import make_main

    ft.app(target=make_main(BaseConfig()))


@cli.command("init-db")
def init_db() -> None:
    """Create the database schema and print its location."""

    from .config import BaseConfig
    from .infra.database import bootstrap_database

    config = BaseConfig()
    engine, _ = bootstrap_database(config)
    click.echo(f"Database ready: {engine.url}")
    engine.dispose()


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
