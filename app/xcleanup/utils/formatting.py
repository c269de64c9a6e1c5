"""Rich console output shared by the CLI commands.

Messages are escaped before printing: cleanup paths routinely contain
square brackets, which Rich would otherwise read as markup.
"""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "#f53263",
        "info": "#0ec1c8",
        "emergency": "bold #f53263",
        "file": "#69B9A1",
        "dir": "#0e8ac8",
    }
)

# Shared console instances; highlighting off so paths and sizes print as-is
console = Console(theme=THEME, highlight=False)
err_console = Console(theme=THEME, stderr=True, highlight=False)

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def create_table(title: str) -> Table:
    """Create a table with the shared header and border styles."""
    return Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )


def format_size(size_bytes: int | None) -> str:
    """Format a byte count with binary units, e.g. ``1.5 KB``."""
    size = float(size_bytes or 0)
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    if unit == 0:
        return f"{int(size)} B"
    return f"{size:.1f} {_SIZE_UNITS[unit]}"


def mode_label(emergency: bool) -> str:
    """Styled name of the cleanup mode."""
    return "[emergency]EMERGENCY[/]" if emergency else "STANDARD"


def print_info(message: str) -> None:
    console.print(f"[info]{escape(message)}[/]")


def print_success(message: str) -> None:
    console.print(f"[success]{escape(message)}[/]")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_path(label: str, path: Path | str) -> None:
    """Print a labelled path on one line, never wrapped."""
    console.print(f"{label}: {escape(str(path))}", soft_wrap=True)
