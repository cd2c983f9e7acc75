"""CLI for the ``registrar`` package.

Two menu-driven consoles are exposed as Typer subcommands:

- ``registrar treks``: mountain trek registrations.
- ``registrar feasts``: customers and feast orders.

Environment variables (``REGISTRAR_DATA_DIR``, ``REGISTRAR_LOG_LEVEL``) are
loaded from a local ``.env`` using ``python-dotenv`` before anything else.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import load_dotenv

from .logging_setup import configure_logging

app = typer.Typer(add_completion=False, help="Registration and feast order consoles.")

DATA_DIR_OPTION = typer.Option(
    None,
    "--data-dir",
    help="Directory holding the CSV reference files and .dat stores (env REGISTRAR_DATA_DIR).",
    file_okay=False,
    dir_okay=True,
)


def _banner(title: str) -> None:
    line = "=" * (len(title) + 4)
    typer.echo(f"{line}\n| {title} |\n{line}")


@app.command("treks")
def treks_cmd(data_dir: Path | None = DATA_DIR_OPTION) -> None:
    """Run the mountain trek registration console."""

    # Local imports keep `--help` fast
    from .api import open_trek_book
    from .config import load_settings
    from .term_ui import Terminal
    from .workflows import RegistrationDesk

    settings = load_settings(data_dir)
    book = open_trek_book(settings)
    if book.skipped_mountains:
        typer.echo(f"Warning: skipped {book.skipped_mountains} malformed mountain row(s).", err=True)
    if not book.mountains:
        typer.echo(f"Warning: no mountains loaded from {settings.mountains_path}.", err=True)

    _banner("Mountain Hiking Registration")
    desk = RegistrationDesk(book.registrations, book.mountains, Terminal(), dump=book.dump)
    try:
        desk.run()
    except (KeyboardInterrupt, EOFError):
        typer.echo("\nInterrupted; unsaved changes were discarded.", err=True)
        raise typer.Exit(130) from None


@app.command("feasts")
def feasts_cmd(data_dir: Path | None = DATA_DIR_OPTION) -> None:
    """Run the customer and feast order console."""

    from .api import open_feast_book
    from .config import load_settings
    from .term_ui import Terminal
    from .workflows import FeastDesk

    settings = load_settings(data_dir)
    book = open_feast_book(settings)
    if book.skipped_menus:
        typer.echo(f"Warning: skipped {book.skipped_menus} malformed menu row(s).", err=True)
    if not book.menus:
        typer.echo(f"Warning: no feast menus loaded from {settings.menus_path}.", err=True)

    _banner("Traditional Feast Order Management")
    desk = FeastDesk(
        book.customers,
        book.orders,
        book.menus,
        Terminal(),
        customer_dump=book.customer_dump,
        order_dump=book.order_dump,
    )
    try:
        desk.run()
    except (KeyboardInterrupt, EOFError):
        typer.echo("\nInterrupted; unsaved changes were discarded.", err=True)
        raise typer.Exit(130) from None


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    *,
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (falls back to REGISTRAR_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


if __name__ == "__main__":  # pragma: no cover
    app()
