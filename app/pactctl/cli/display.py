"""Shared Rich display functions for results and diffs.

Provides reusable table builders and summary printers used by the sync,
unlink, diff and import commands.
"""

from collections.abc import Iterable

from rich.table import Table

from pactctl.core.diff import DiffItem, DiffResult
from pactctl.models.result import Result, ResultSummary, summarize_results
from pactctl.utils.formatting import console


def format_tally(summary: ResultSummary) -> str:
    """Format the ``X applied, Y skipped, Z failed`` line."""
    return f"{summary.applied} applied, {summary.skipped} skipped, {summary.failed} failed"


def create_results_table(results: list[Result], title: str = "Results") -> Table:
    """Create a Rich table displaying apply or sync results.

    Successful results show "OK", already satisfied ones "SKIP" and
    failed ones "FAIL" with the error message.

    Args:
        results: Results to display.
        title: Table title.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Module", width=10)
    table.add_column("Type", width=9)
    table.add_column("Name", no_wrap=True)
    table.add_column("Message")

    for result in results:
        if result.failed:
            status = "[error]FAIL[/error]"
            message = result.error or "unknown error"
        elif result.skipped:
            status = "[skipped]SKIP[/skipped]"
            message = result.message
        else:
            status = "[success]OK[/success]"
            message = result.message

        table.add_row(
            status,
            result.module,
            result.category.value,
            result.name,
            f"[muted]{message}[/muted]",
        )

    return table


def print_results_summary(results: Iterable[Result]) -> ResultSummary:
    """Print the tally line for a batch.

    Returns:
        The summary that was printed.
    """
    summary = summarize_results(results)
    style = "error" if summary.has_failures else "success"
    console.print(f"\n[{style}]{format_tally(summary)}[/{style}]")
    return summary


_DIFF_CLASSES: tuple[tuple[str, str, str], ...] = (
    ("local_only", "[+]", "local_only"),
    ("pact_only", "[-]", "pact_only"),
    ("synced", "[=]", "synced"),
)


def _add_diff_rows(table: Table, items: tuple[DiffItem, ...], icon: str, style: str) -> None:
    for item in items:
        table.add_row(
            f"[{style}]{icon}[/{style}]",
            item.type,
            f"[{style}]{item.name}[/{style}]",
            f"[muted]{item.value or ''}[/muted]",
        )


def create_diff_table(result: DiffResult, show_synced: bool = True) -> Table:
    """Create a table for one module's diff.

    Rows are ordered LocalOnly ``[+]``, PactOnly ``[-]``, then Synced ``[=]``.

    Args:
        result: Classification of one module.
        show_synced: Include Synced rows.

    Returns:
        Rich Table configured for diff display.
    """
    table = Table(
        title=result.module,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Type", width=12)
    table.add_column("Name", no_wrap=True)
    table.add_column("Value")

    for attribute, icon, style in _DIFF_CLASSES:
        if attribute == "synced" and not show_synced:
            continue
        _add_diff_rows(table, getattr(result, attribute), icon, style)
    return table


def print_diff_summary(results: list[DiffResult]) -> None:
    """Print LocalOnly and PactOnly counts across modules."""
    local_only = sum(len(result.local_only) for result in results)
    pact_only = sum(len(result.pact_only) for result in results)
    synced = sum(len(result.synced) for result in results)

    if not local_only and not pact_only:
        console.print("\n[success]Machine is in sync with the manifest.[/success]")
        return

    console.print(
        f"\nSummary: [local_only]{local_only} local only[/local_only], "
        f"[pact_only]{pact_only} pact only[/pact_only], "
        f"[synced]{synced} synced[/synced]"
    )
