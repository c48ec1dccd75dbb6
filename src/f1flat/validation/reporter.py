"""
Console reporter for store verification results.

Formats results using Rich for clear, colored output.
"""

from rich.console import Console
from rich.table import Table

from f1flat.validation.core import TableCheck


class ConsoleReporter:
    """Formats and displays verification results to the console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def print_results(self, results: list[TableCheck]) -> None:
        """
        Print verification results as a formatted table.

        Args:
            results: One check per table.
        """
        table = Table(title="Store Verification Results", show_header=True)
        table.add_column("Table", style="cyan", no_wrap=True)
        table.add_column("Status", justify="center")
        table.add_column("Rows", justify="right")
        table.add_column("FK violations", justify="right")
        table.add_column("Details", style="dim")

        for result in results:
            row_count = str(result.row_count) if result.row_count is not None else "-"
            table.add_row(
                result.table,
                self._format_status(result),
                row_count,
                str(result.fk_violations),
                self._format_details(result),
            )

        self.console.print(table)
        self._print_summary(results)
        self._print_detailed_errors(results)

    def _format_status(self, result: TableCheck) -> str:
        if not result.exists:
            return "[yellow]Missing[/yellow]"
        if result.passed:
            return "[green]Pass[/green]"
        return "[red]Fail[/red]"

    def _format_details(self, result: TableCheck) -> str:
        if not result.exists:
            return "Table not found"
        if result.passed:
            return "OK"
        problems = []
        if result.schema_valid is False:
            problems.append("schema")
        if result.fk_violations:
            problems.append("foreign keys")
        if result.missing_indexes:
            problems.append(f"indexes: {', '.join(result.missing_indexes)}")
        return "; ".join(problems)

    def _print_summary(self, results: list[TableCheck]) -> None:
        total = len(results)
        passed = sum(1 for r in results if r.passed)
        missing = sum(1 for r in results if not r.exists)

        self.console.print()
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(f"  Total tables: {total}")
        self.console.print(f"  [green]Passed: {passed}[/green]")
        self.console.print(f"  [red]Failed: {total - passed - missing}[/red]")
        self.console.print(f"  [yellow]Missing: {missing}[/yellow]")

    def _print_detailed_errors(self, results: list[TableCheck]) -> None:
        failed = [r for r in results if r.exists and r.error_message]
        if not failed:
            return

        self.console.print()
        self.console.print("[bold red]Schema Errors:[/bold red]")
        for result in failed:
            self.console.print()
            self.console.print(f"[bold]{result.table}[/bold] ({result.entity}):")
            for line in (result.error_message or "").split("\n"):
                self.console.print(f"  {line}")
