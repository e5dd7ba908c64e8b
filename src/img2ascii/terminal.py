import os
import sys


def get_terminal_width(default: int = 80) -> int:
    """Columns of the attached terminal, or ``default`` when stdout is not a tty."""
    if not sys.stdout.isatty():
        return default
    try:
        columns = os.get_terminal_size().columns
    except OSError:
        return default
    # Some ptys report a size of 0x0
    return columns if columns > 0 else default
