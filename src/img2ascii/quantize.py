import numpy as np

from img2ascii.charsets import DEFAULT_RAMP, EDGE_RAMP
from img2ascii.grid import Cell, CellGrid, Edge, EdgeBuffer, PixelBuffer
from img2ascii.sampling import luminance

BLANK = Cell(" ", (0, 0, 0))


def ramp_indices(lum: np.ndarray, ramp_length: int) -> np.ndarray:
    """Map integer luminance to ramp positions, clamped to the last entry."""
    return np.minimum(lum * ramp_length // 256, ramp_length - 1)


def quantize(img: PixelBuffer, ramp: str = DEFAULT_RAMP) -> CellGrid:
    """One cell per pixel: shape from luminance, colour from the original RGB."""
    if not ramp:
        raise ValueError("Character ramp is empty")
    rgb = img.rgb
    indices = ramp_indices(luminance(rgb), len(ramp))
    rows = []
    for y in range(img.height):
        rows.append(
            tuple(
                Cell(ramp[indices[y, x]], (int(rgb[y, x, 0]), int(rgb[y, x, 1]), int(rgb[y, x, 2])))
                for x in range(img.width)
            )
        )
    return CellGrid(tuple(rows))


def quantize_edges(edges: EdgeBuffer, ramp: str = EDGE_RAMP) -> CellGrid:
    """Edge pixels take the glyph for their direction class; the rest are blank."""
    if not ramp:
        raise ValueError("Character ramp is empty")
    last = len(ramp) - 1
    rows = []
    for row in edges:
        cells = []
        for p in row:
            if isinstance(p, Edge):
                cells.append(Cell(ramp[min(p.direction, last)], p.colour))
            else:
                cells.append(BLANK)
        rows.append(tuple(cells))
    return CellGrid(tuple(rows))
