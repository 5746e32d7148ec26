"""CLI for the ``passbook`` package.

This module exposes callable command handlers (``cmd_show``,
``cmd_summary``, ``cmd_export_csv``) and a Typer-based console interface.
Environment variables (``DATABASE_URL`` and the ``PASSBOOK_*`` settings) are
loaded from a local ``.env`` using ``python-dotenv`` before delegating to
command logic. Business logic lives in ``passbook.api``.

A ledger is read either from a JSON snapshot (``--snapshot``) or from the SQL
store (``--database-url`` / ``DATABASE_URL``).
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from typer.models import OptionInfo

from .api import build_passbook, passbook_page
from .config import Settings, load_settings
from .exceptions import AccountNotFound, MalformedRecordError, UpstreamFetchFailure
from .logging_setup import configure_logging
from .models import CreditBasis, Passbook, TieBreak
from .repository import LedgerSourceRepository

# ---- Small module-level helpers used by CLI commands -------------------------


def _open_repository(
    *, snapshot: Path | None, database_url: str | None
) -> LedgerSourceRepository:
    """Pick the ledger source: snapshot file first, then the SQL store.

    Raises ``ValueError`` when neither is configured.
    """

    if snapshot is not None:
        from .ingest import JsonSnapshotRepository

        return JsonSnapshotRepository.from_path(snapshot)
    if database_url:
        from .persistence import SqlLedgerRepository

        return SqlLedgerRepository(database_url)
    raise ValueError("no ledger source: pass --snapshot or set DATABASE_URL")


def _load_passbook(
    ledger_id: str,
    *,
    snapshot: Path | None,
    database_url: str | None,
    basis: str | None,
    tie_break: str | None,
    settings: Settings,
) -> Passbook | None:
    """Build the passbook for the CLI, printing errors to stderr.

    Returns ``None`` on failure (the message has already been written).
    """

    try:
        credit_basis = CreditBasis(basis) if basis else settings.credit_basis
        order = TieBreak(tie_break) if tie_break else settings.tie_break
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    try:
        repository = _open_repository(
            snapshot=snapshot, database_url=database_url or settings.database_url
        )
    except FileNotFoundError:
        print(f"Error: File not found: {snapshot}", file=sys.stderr)
        return None
    except OSError as e:
        print(f"Error: failed to read '{snapshot}': {e}", file=sys.stderr)
        return None
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    try:
        return build_passbook(
            repository,
            ledger_id,
            basis=credit_basis,
            tie_break=order,
            include_account=True,
        )
    except AccountNotFound as e:
        print(f"Error: {e}", file=sys.stderr)
    except UpstreamFetchFailure as e:
        print(f"Error: {e} (retryable)", file=sys.stderr)
    except MalformedRecordError as e:
        print(f"Error: malformed {e.kind} record: {e}", file=sys.stderr)
    return None


def _heading(passbook: Passbook) -> str:
    if passbook.account is not None:
        return f"{passbook.account.display_name} ({passbook.account_id})"
    return passbook.account_id


# ---- Command handlers ---------------------------------------------------------


def cmd_show(
    ledger_id: str,
    *,
    snapshot: Path | None = None,
    database_url: str | None = None,
    basis: str | None = None,
    tie_break: str | None = None,
    page: int = 1,
    page_size: int | None = None,
) -> int:
    """Print one page of the statement followed by the summary totals.

    Returns ``0`` on success and ``1`` on any error (written to stderr).
    """

    from .render import build_statement_table, build_summary_table

    settings = load_settings()
    passbook = _load_passbook(
        ledger_id,
        snapshot=snapshot,
        database_url=database_url,
        basis=basis,
        tie_break=tie_break,
        settings=settings,
    )
    if passbook is None:
        return 1

    size = page_size if page_size is not None else settings.page_size
    try:
        current = passbook_page(passbook, page=page, page_size=size)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    console = Console()
    console.print(
        build_statement_table(current.items, start=current.first_index, title=_heading(passbook))
    )
    console.print(
        f"Page {current.page} of {max(1, current.total_pages)} "
        f"({current.total_items} entries)"
    )
    console.print(build_summary_table(passbook.summary))
    return 0


def cmd_summary(
    ledger_id: str,
    *,
    snapshot: Path | None = None,
    database_url: str | None = None,
    basis: str | None = None,
) -> int:
    """Print total credit, total debit and balance for the ledger."""

    from .render import build_summary_table

    settings = load_settings()
    passbook = _load_passbook(
        ledger_id,
        snapshot=snapshot,
        database_url=database_url,
        basis=basis,
        tie_break=None,
        settings=settings,
    )
    if passbook is None:
        return 1
    Console().print(build_summary_table(passbook.summary, title=_heading(passbook)))
    return 0


def cmd_export_csv(
    ledger_id: str,
    out: Path,
    *,
    snapshot: Path | None = None,
    database_url: str | None = None,
    basis: str | None = None,
    tie_break: str | None = None,
) -> int:
    """Write the full statement (most recent first) to ``out`` as CSV."""

    from .render import write_statement_csv

    settings = load_settings()
    passbook = _load_passbook(
        ledger_id,
        snapshot=snapshot,
        database_url=database_url,
        basis=basis,
        tie_break=tie_break,
        settings=settings,
    )
    if passbook is None:
        return 1
    try:
        with open(out, "w", encoding="utf-8", newline="") as f:
            rows = write_statement_csv(passbook.entries, f)
    except OSError as e:
        print(f"Error: failed to write '{out}': {e}", file=sys.stderr)
        return 1
    print(f"Wrote {rows} rows to {out}")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Weaver ledger passbook: running-balance statements from challans and "
        "payment vouchers. Loads DATABASE_URL and PASSBOOK_* from a local .env."
    ),
)


# Module-level option objects used through Annotated (ruff B008). Inside
# Annotated the first positional is a param decl, so defaults stay on the
# parameters below.
LEDGER_ID_OPTION: OptionInfo = typer.Option(
    ...,  # required
    "--ledger-id",
    help="Ledger (business partner) id",
)
SNAPSHOT_OPTION: OptionInfo = typer.Option(
    "--snapshot",
    help="Read from a JSON snapshot instead of the database",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files
)
DATABASE_URL_OPTION: OptionInfo = typer.Option(
    "--database-url", help="Override DATABASE_URL (falls back to env var)."
)
BASIS_OPTION: OptionInfo = typer.Option(
    "--basis",
    help="Challan credit basis: quality_rate or vendor_invoice (env PASSBOOK_CREDIT_BASIS).",
)
TIE_BREAK_OPTION: OptionInfo = typer.Option(
    "--tie-break",
    help="Same-day voucher order: input_order or id (env PASSBOOK_VOUCHER_TIE_BREAK).",
)
PAGE_OPTION: OptionInfo = typer.Option("--page", help="1-based page number.")
PAGE_SIZE_OPTION: OptionInfo = typer.Option(
    "--page-size",
    help="Entries per page (falls back to PASSBOOK_PAGE_SIZE, default 25).",
)
OUT_OPTION: OptionInfo = typer.Option(
    ...,  # required
    "--out",
    help="Destination CSV path.",
    dir_okay=False,
)


@app.command("show")
def show_cmd(
    ledger_id: Annotated[str, LEDGER_ID_OPTION],
    snapshot: Annotated[Path | None, SNAPSHOT_OPTION] = None,
    database_url: Annotated[str | None, DATABASE_URL_OPTION] = None,
    basis: Annotated[str | None, BASIS_OPTION] = None,
    tie_break: Annotated[str | None, TIE_BREAK_OPTION] = None,
    page: Annotated[int, PAGE_OPTION] = 1,
    page_size: Annotated[int | None, PAGE_SIZE_OPTION] = None,
) -> None:
    """Show one page of the statement, most recent entry first."""

    rc = cmd_show(
        ledger_id,
        snapshot=snapshot,
        database_url=database_url,
        basis=basis,
        tie_break=tie_break,
        page=page,
        page_size=page_size,
    )
    raise typer.Exit(rc)


@app.command("summary")
def summary_cmd(
    ledger_id: Annotated[str, LEDGER_ID_OPTION],
    snapshot: Annotated[Path | None, SNAPSHOT_OPTION] = None,
    database_url: Annotated[str | None, DATABASE_URL_OPTION] = None,
    basis: Annotated[str | None, BASIS_OPTION] = None,
) -> None:
    """Show total credit, total debit and balance."""

    rc = cmd_summary(ledger_id, snapshot=snapshot, database_url=database_url, basis=basis)
    raise typer.Exit(rc)


@app.command("export-csv")
def export_csv_cmd(
    ledger_id: Annotated[str, LEDGER_ID_OPTION],
    snapshot: Annotated[Path | None, SNAPSHOT_OPTION] = None,
    database_url: Annotated[str | None, DATABASE_URL_OPTION] = None,
    basis: Annotated[str | None, BASIS_OPTION] = None,
    tie_break: Annotated[str | None, TIE_BREAK_OPTION] = None,
    *,
    out: Annotated[Path, OUT_OPTION],
) -> None:
    """Export the full statement as CSV."""

    rc = cmd_export_csv(
        ledger_id,
        out,
        snapshot=snapshot,
        database_url=database_url,
        basis=basis,
        tie_break=tie_break,
    )
    raise typer.Exit(rc)


@app.callback()
def _root() -> None:
    """Load ``.env`` from the current directory and configure logging."""

    # override=False keeps variables already set in the environment
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    # Central logging setup so child loggers inherit configuration
    configure_logging()


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m passbook.cli`
    app()
