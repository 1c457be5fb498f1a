"""Colored status output for install and discovery flows."""

from __future__ import annotations

from rich.console import Console

console = Console()


def print_success(*lines: str) -> None:
    for line in lines:
        console.print(line, style="green", markup=False, highlight=False)


def print_failure(*lines: str) -> None:
    for line in lines:
        console.print(line, style="red", markup=False, highlight=False)
