"""Rich UI components for terminal interface"""

from typing import List

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from .models import EventResult, FileDetail, Report, ReportSummary
from .reporter import reporter


console = Console()


def print_error(message: str):
    """Print error message"""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str):
    """Print success message"""
    console.print(f"[bold green]✓[/bold green] {message}")


def print_info(message: str):
    """Print info message"""
    console.print(f"[cyan]ℹ[/cyan] {message}")


def print_warning(message: str):
    """Print warning message"""
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_event(result: EventResult, relative_path: str, verbose: bool = True):
    """Print one processed watcher event, plus any warnings it produced"""
    for warning in result.warnings:
        print_warning(warning)

    if not result.ok:
        print_error(f"{result.kind} {relative_path}: {result.error}")
        return

    if not verbose:
        return

    if result.kind == 'change' and result.delta is not None:
        console.print(
            f"[dim]{relative_path}[/dim] "
            f"[green]+{result.delta.added}[/green] [red]-{result.delta.removed}[/red]"
        )
    elif result.kind == 'delete':
        console.print(f"[dim]{relative_path}[/dim] [red]deleted[/red]")


def display_summary(summary: ReportSummary):
    """Display the session summary table"""
    table = Table(title="Project Summary", show_header=True, box=box.ROUNDED)
    table.add_column("Metric", style="bold cyan")
    table.add_column("Value")

    languages = "\n".join(
        f"[yellow]{ext}[/yellow] ({count} files)" for ext, count in summary.top_languages
    ) or "-"

    table.add_row("Total Time", f"[green]{summary.total_time}[/green]")
    table.add_row("Start Time", f"[yellow]{summary.start_time}[/yellow]")
    table.add_row("End Time", f"[yellow]{summary.end_time}[/yellow]")
    table.add_row("Files Tracked", str(summary.total_files))
    table.add_row("Total Additions", f"[green]+{summary.total_additions}[/green]")
    table.add_row("Total Deletions", f"[red]-{summary.total_deletions}[/red]")
    table.add_row("Top Languages", languages)

    console.print(table)


def display_file_table(details: List[FileDetail], limit: int = 10):
    """Display the most changed files and a detail view of the top one"""
    if not details:
        console.print("[dim]No file changes recorded.[/dim]")
        return

    ranked = reporter.sort_by_changes(details, limit)

    table = Table(title="Top Modified Files", show_header=True, box=box.ROUNDED)
    table.add_column("File", style="blue")
    table.add_column("Additions", style="green", justify="right")
    table.add_column("Deletions", style="red", justify="right")
    table.add_column("Changes", justify="right")
    table.add_column("Active Time", style="yellow")
    table.add_column("Last Modified", style="dim")

    for detail in ranked:
        table.add_row(
            detail.file,
            f"+{detail.additions}",
            f"-{detail.deletions}",
            str(detail.changes),
            detail.active_time,
            detail.last_modified
        )

    console.print(table)

    top = ranked[0]
    detail_table = Table(title="Most Active File", show_header=True, box=box.ROUNDED)
    detail_table.add_column("Metric", style="bold cyan")
    detail_table.add_column("Value")

    detail_table.add_row("File", f"[blue]{top.file}[/blue]")
    detail_table.add_row("Total Changes", str(top.changes))
    detail_table.add_row("Additions", f"[green]+{top.additions}[/green]")
    detail_table.add_row("Deletions", f"[red]-{top.deletions}[/red]")
    detail_table.add_row("Active Time", f"[yellow]{top.active_time}[/yellow]")
    detail_table.add_row("Total Edits", str(top.total_edits))
    detail_table.add_row("Avg. Edit Size", f"{top.average_edit_size:.2f} lines per edit")
    detail_table.add_row("First Modified", top.first_modified)
    detail_table.add_row("Last Modified", top.last_modified)

    console.print(detail_table)


def display_dependencies(dependencies: List[str]):
    """Display declared project dependencies"""
    if not dependencies:
        return

    table = Table(title="Project Dependencies", show_header=False, box=box.ROUNDED)
    table.add_column("Dependency", style="magenta")

    for dep in sorted(dependencies):
        table.add_row(dep)

    console.print(table)
    console.print(f"[dim]Total dependencies: {len(dependencies)}[/dim]")


def display_report(report: Report, top_files: int = 10):
    """Display the full session report"""
    console.print("\n")
    display_summary(report.summary)
    display_file_table(report.file_details, top_files)
    display_dependencies(report.summary.dependencies)


def display_tracking_started(project_path: str, idle_minutes: int):
    """Display the tracking banner"""
    panel = Panel(
        f"[bold]{project_path}[/bold]\n"
        f"Idle threshold: {idle_minutes} minutes\n\n"
        "[dim]Press Ctrl+C to stop and generate the report[/dim]",
        box=box.ROUNDED,
        border_style="cyan",
        title="Tracking"
    )
    console.print(panel)
