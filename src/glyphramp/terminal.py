import os
import sys


def output_width(fallback: int, margin: int = 1) -> int:
    """Columns available on the attached terminal, less ``margin``.

    Returns ``fallback`` when stdout is redirected or the size can't be read.
    """
    if not sys.stdout.isatty():
        return fallback
    try:
        columns = os.get_terminal_size(sys.stdout.fileno()).columns
    except (OSError, ValueError):
        return fallback
    return max(1, columns - margin)
