"""Utility functions for the Cloudinary CLI.

Provides clipboard operations, output formatting, option parsing
and console helpers.
"""

import pyperclip
from rich.console import Console

from .errors import UsageError
from .models import UploadResult


console = Console()


def copy_to_clipboard(text: str) -> bool:
    """Copy text to system clipboard.

    Args:
        text: Text to copy

    Returns:
        True if successful, False otherwise
    """
    try:
        pyperclip.copy(text)
        return True
    except pyperclip.PyperclipException:
        return False


def format_plain(results: list[UploadResult]) -> str:
    """Format upload results as plain text URLs."""
    return '\n'.join(r.url for r in results)


def format_markdown(results: list[UploadResult]) -> str:
    """Format upload results as Markdown image syntax.

    Args:
        results: List of upload results

    Returns:
        Markdown image tags, the public id used as alt text
    """
    return '\n'.join(f"![{r.public_id}]({r.url})" for r in results)


def format_html(results: list[UploadResult]) -> str:
    """Format upload results as HTML img tags.

    Args:
        results: List of upload results

    Returns:
        HTML img tags with alt and, when known, size attributes
    """
    lines = []
    for r in results:
        size = ''
        if r.width and r.height:
            size = f' width="{r.width}" height="{r.height}"'
        lines.append(f'<img src="{r.url}" alt="{r.public_id}"{size}>')
    return '\n'.join(lines)


def format_output(results: list[UploadResult], format_type: str) -> str:
    """Format upload results based on output format setting.

    Args:
        results: List of upload results
        format_type: Output format (plain, markdown, html)

    Returns:
        Formatted output string
    """
    formatters = {
        'plain': format_plain,
        'markdown': format_markdown,
        'html': format_html,
    }

    formatter = formatters.get(format_type, format_plain)
    return formatter(results)


def parse_option_pairs(pairs: list[str]) -> dict[str, str]:
    """Parse ``key=value`` command line arguments.

    Args:
        pairs: Strings such as ``w=100`` or ``crop=fill``

    Returns:
        Dictionary of options, later keys win

    Raises:
        UsageError: If an argument has no ``=`` or an empty key
    """
    options = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        key = key.strip()
        if not sep or not key:
            raise UsageError(f"Expected key=value, got '{pair}'")
        options[key] = value
    return options


def print_success(message: str) -> None:
    """Print a success message with checkmark."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message with X mark."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message with exclamation mark."""
    console.print(f"[yellow]![/yellow] {message}")
