"""Rich formatting and display for analysis results."""

import json

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import FileAnalysis, Hints, ImportKind, RustImports


def format_line(line_number: int | None) -> str:
    """Format a 1-based line number for display."""
    return f"line {line_number}" if line_number is not None else "-"


def format_imports_table(title: str, result: RustImports) -> Table:
    """Create Rich table listing the crates a file depends on."""
    table = Table(title=title)

    table.add_column("Crate", style="cyan", no_wrap=True)
    table.add_column("Needed for", style="magenta")
    table.add_column("First seen", justify="right")

    for name in result.imports:
        table.add_row(name, Text("all builds", style="green"), format_line(result.first_line(name, ImportKind.NORMAL)))
    for name in result.test_imports:
        table.add_row(
            name, Text("tests only", style="yellow"), format_line(result.first_line(name, ImportKind.TEST_ONLY))
        )

    return table


def format_hints(hints: Hints) -> str:
    """Format the structural hints as a single line of markup."""
    flags = [
        ("main", hints.has_main),
        ("tests", hints.has_test),
        ("proc-macro", hints.has_proc_macro),
    ]
    parts = [f"[green]{label}[/green]" if value else f"[dim]no {label}[/dim]" for label, value in flags]
    return "Hints: " + ", ".join(parts)


def display_analysis(console: Console, analysis: FileAnalysis) -> None:
    """Display the result or the error for one file."""
    if analysis.result is None:
        console.print(f"[red]Error: {analysis.error}[/red]")
        return

    result = analysis.result
    if not result.imports and not result.test_imports:
        console.print(f"[yellow]No external crates found in {analysis.path}.[/yellow]")
    else:
        console.print(format_imports_table(str(analysis.path), result))
    console.print(format_hints(result.hints))


def display_results(console: Console, analyses: list[FileAnalysis]) -> None:
    """Display complete analysis results for every file."""
    if not analyses:
        console.print("[yellow]No files analyzed.[/yellow]")
        return

    for analysis in analyses:
        display_analysis(console, analysis)

    failed = sum(1 for a in analyses if not a.ok)
    if failed:
        console.print(f"\n[yellow]Warning: {failed} of {len(analyses)} file(s) could not be analyzed[/yellow]")


def results_to_json(analyses: list[FileAnalysis]) -> str:
    """Serialize results as a JSON document keyed by file path."""
    document: dict[str, object] = {}
    for analysis in analyses:
        if analysis.result is not None:
            document[str(analysis.path)] = analysis.result.to_dict()
        else:
            document[str(analysis.path)] = {"error": analysis.error}
    return json.dumps(document, indent=2, sort_keys=True)
