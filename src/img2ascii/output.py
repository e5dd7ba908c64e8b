from enum import Enum
from functools import partial
from pathlib import Path

from img2ascii.grid import CellGrid
from img2ascii.render import Renderer, render_ansi, render_html, render_plain


class OutputFormat(str, Enum):
    TXT = "txt"
    HTML = "html"
    ANSI = "ansi"

    @property
    def extension(self) -> str:
        return self.value


def output_filename(image_path: str | Path, fmt: OutputFormat) -> str:
    """``<stem of image_path>.<ext>``, falling back to ``output`` for an empty stem."""
    stem = Path(image_path).stem or "output"
    return f"{stem}.{fmt.extension}"


def renderer_for(fmt: OutputFormat, colour: bool = False) -> Renderer:
    renderers: dict[OutputFormat, Renderer] = {
        OutputFormat.TXT: render_plain,
        OutputFormat.HTML: render_html,
        OutputFormat.ANSI: partial(render_ansi, colour=colour),
    }
    return renderers[fmt]


def render_for_format(grid: CellGrid, fmt: OutputFormat, colour: bool = False) -> str:
    return renderer_for(fmt, colour)(grid)


def write_output(
    grid: CellGrid,
    image_path: str | Path,
    fmt: OutputFormat,
    colour: bool = False,
    directory: str | Path = ".",
) -> Path:
    path = Path(directory) / output_filename(image_path, fmt)
    path.write_text(render_for_format(grid, fmt, colour), encoding="utf-8")
    return path
