"""
Formatting helpers shared by the analyzers.
"""

from pathlib import Path
from typing import Union

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(size: int) -> str:
    """Format a byte count with one decimal, e.g. ``12.5 MB``.

    Args:
        size: Size in bytes

    Returns:
        Human-readable size string
    """
    value = float(size)
    for unit in BYTE_UNITS[:-1]:
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} {BYTE_UNITS[-1]}"


def relative_posix(path: Union[str, Path], root: Union[str, Path]) -> str:
    """Path relative to ``root`` with forward slashes, or the path itself."""
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return Path(path).as_posix()
