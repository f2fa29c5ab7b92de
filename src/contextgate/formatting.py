"""Pretty-print support for contextgate output objects.

Uses rich library for formatted terminal output.
Functions access object attributes dynamically to avoid importing
domain models at module level.
"""
from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


def _make_console(file: Any = None) -> Console:
    """Create a Console, optionally writing to a file-like object."""
    if file is not None:
        return Console(file=file, force_terminal=True, width=100)
    return Console()


def _flag_line(info: Text, label: str, lost: bool) -> None:
    info.append(f"  {label:<11}", style="dim")
    if lost:
        info.append("lost\n", style="bold red")
    else:
        info.append("kept\n", style="bold green")


def pprint_verdict(verdict: Any, *, file: Any = None) -> None:
    """Pretty-print a fidelity Verdict.

    Shows the saving ratio against its threshold, each preservation check,
    and the reason codes in order.

    Args:
        verdict: A Verdict instance.
        file: Optional file-like object for output (used in tests).
    """
    console = _make_console(file)

    status_style = "green" if verdict.passed else "red"
    header = Text()
    header.append("Fidelity gate ", style="bold")
    header.append("PASSED" if verdict.passed else "FAILED", style=f"bold {status_style}")

    info = Text()
    info.append("  saving:    ", style="dim")
    ratio_ok = verdict.saving_ratio >= verdict.required_saving_ratio
    info.append(
        f"{verdict.saving_ratio:.1%}",
        style="bold green" if ratio_ok else "bold red",
    )
    info.append(f" (required {verdict.required_saving_ratio:.1%}, ", style="dim")
    info.append(f"{verdict.before_length} -> {verdict.after_length} chars)\n", style="dim")
    _flag_line(info, "constraints", verdict.missing_constraints)
    _flag_line(info, "todos", verdict.missing_pending_todos)
    _flag_line(info, "evidence", verdict.missing_evidence_refs)
    if verdict.reason_codes:
        info.append("  reasons:   ", style="dim")
        info.append(", ".join(str(code) for code in verdict.reason_codes), style="yellow")

    console.print(Panel(info, title=header, border_style=status_style, expand=False))
