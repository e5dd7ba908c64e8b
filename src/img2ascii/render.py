import re
from typing import Protocol

from img2ascii.grid import CellGrid

RESET = "\033[0m"

_SGR = re.compile(r"\033\[[0-9;]*m")

_HTML_ESCAPES = {"<": "&lt;", ">": "&gt;", "&": "&amp;"}

HTML_HEADER = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
pre {
  font-family: monospace;
  line-height: 1;
  font-size: 8px;
}
</style>
</head>
<body>
<pre>
"""

HTML_FOOTER = "</pre></body></html>"


class Renderer(Protocol):
    def __call__(self, grid: CellGrid) -> str:
        """Turn a cell grid into text."""
        ...


def render_plain(grid: CellGrid) -> str:
    return "".join(line + "\n" for line in grid.chars())


def render_ansi(grid: CellGrid, colour: bool = False) -> str:
    """Wrap each character in an ANSI truecolor foreground escape when ``colour`` is set."""
    if not colour:
        return render_plain(grid)
    out = []
    for row in grid:
        for cell in row:
            r, g, b = cell.colour
            out.append(f"\033[38;2;{r};{g};{b}m{cell.char}{RESET}")
        out.append("\n")
    return "".join(out)


def render_html(grid: CellGrid) -> str:
    out = [HTML_HEADER]
    for row in grid:
        for cell in row:
            r, g, b = cell.colour
            char = _HTML_ESCAPES.get(cell.char, cell.char)
            out.append(f'<span style="color: rgb({r},{g},{b})">{char}</span>')
        out.append("\n")
    out.append(HTML_FOOTER)
    return "".join(out)


def strip_ansi(text: str) -> str:
    return _SGR.sub("", text)
