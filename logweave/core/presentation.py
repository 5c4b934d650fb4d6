"""Terminal rendering of records and collection summaries."""

from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from logweave.core.collector import CollectionResult
from logweave.models import LogRecord

def format_timestamp(record: LogRecord) -> str:
    moment = record.datetime
    text = moment.strftime("%Y-%m-%d %H:%M:%S")
    if moment.microsecond:
        text += f".{moment.microsecond:06d}"
    return text

def header(record: LogRecord) -> str:
    """Header line of a record: ``service@host -- [timestamp]``."""
    return f"{record.service}@{record.hostname} -- [{format_timestamp(record)}]"

def render(record: LogRecord) -> str:
    """Plain text rendering: header, tab-indented message, blank line."""
    return f"{header(record)}\n\t{record.message}\n\n"

def print_records(records: Iterable[LogRecord], console: Optional[Console] = None) -> int:
    """Print records with a highlighted header.

    Message text is printed verbatim, rich markup in log lines is not
    interpreted.

    Returns:
        Number of records printed
    """
    console = console or Console()
    count = 0
    for record in records:
        console.print(Text(header(record), style="yellow"))
        console.print(Text("\t" + record.message))
        console.print()
        count += 1
    return count

def print_summary(result: CollectionResult, console: Optional[Console] = None) -> None:
    """Print per-source outcome and line counts as a table."""
    console = console or Console(stderr=True)
    table = Table(title="Sources")
    table.add_column("Source", style="cyan")
    table.add_column("Status")
    table.add_column("Parsed", justify="right")
    table.add_column("Appended", justify="right")
    table.add_column("Dropped", justify="right")
    table.add_column("Error", style="red")

    for source in result.results:
        report = source.report
        table.add_row(
            source.name,
            "[green]ok[/green]" if source.ok else "[red]failed[/red]",
            str(report.parsed) if report else "-",
            str(report.appended) if report else "-",
            str(report.dropped) if report else "-",
            Text(source.error or "")
        )

    console.print(table)
    console.print(
        f"{len(result.succeeded)} succeeded, {len(result.failed)} failed; "
        f"{result.lines_parsed} entries parsed, {result.lines_dropped} dropped"
    )
