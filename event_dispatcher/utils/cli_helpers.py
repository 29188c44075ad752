"""CLI helper functions for formatted console output."""

from rich.console import Console

console = Console()


def print_message(msg: str, icon: str = "", indent: int = 0, style: str | None = None):
    """Base function for printing formatted messages.

    Args:
        msg: Message to display
        icon: Optional icon prefix
        indent: Number of spaces to indent
        style: Optional rich style for the line
    """
    prefix = " " * indent
    console.print(f"{prefix}{icon}{msg}", style=style, markup=False, highlight=False)


def print_error(msg: str, indent: int = 0):
    """Print error message with icon."""
    print_message(msg, icon="❗️", indent=indent, style="red")


def print_warning(msg: str, indent: int = 0):
    """Print warning message with icon."""
    print_message(msg, icon="⚠️", indent=indent, style="yellow")


def print_info(msg: str, indent: int = 2):
    """Print info message with default 2-space indent."""
    print_message(msg, indent=indent)
