"""
Console output helpers for the ztcentral CLI.
"""
import sys

COLORS = {
    "red": "\033[91m",
    "green": "\033[92m",
    "yellow": "\033[93m",
    "blue": "\033[94m",
    "default": "\033[0m",
}


def print_colored(message: str, color: str = "default", file=None) -> None:
    """Prints ``message`` in ``color`` when the stream is a terminal."""
    file = file or sys.stdout
    if hasattr(file, "isatty") and file.isatty():
        color_code = COLORS.get(color, COLORS["default"])
        message = f"{color_code}{message}{COLORS['default']}"
    print(message, file=file)
