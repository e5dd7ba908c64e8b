from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, NamedTuple

import numpy as np
from PIL import Image

from img2ascii.errors import InvalidDimensions

RGB = tuple[int, int, int]


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Read-only RGBA pixels, stored as a (height, width, 4) uint8 array."""

    pixels: np.ndarray

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"Expected a (height, width, 4) array, got shape {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {self.pixels.dtype}")
        h, w = self.pixels.shape[:2]
        if w == 0 or h == 0:
            raise InvalidDimensions(w, h)
        # Own a private copy so freezing it leaves the caller's array writable
        pixels = np.array(self.pixels)
        pixels.flags.writeable = False
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_array(cls, array) -> PixelBuffer:
        """Build from an (h, w, 3) RGB or (h, w, 4) RGBA array. RGB gets opaque alpha."""
        array = np.asarray(array, dtype=np.uint8)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Expected an RGB or RGBA array, got shape {array.shape}")
        if array.shape[2] == 3:
            alpha = np.full((*array.shape[:2], 1), 255, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=2)
        return cls(array)

    @classmethod
    def from_image(cls, image: Image.Image | str | Path) -> PixelBuffer:
        if not isinstance(image, Image.Image):
            image = Image.open(image)
        return cls(np.array(image.convert("RGBA"), dtype=np.uint8))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[:, :, :3]

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))


class Cell(NamedTuple):
    char: str
    colour: RGB


@dataclass(frozen=True)
class CellGrid:
    rows: tuple[tuple[Cell, ...], ...]

    def __post_init__(self):
        widths = {len(row) for row in self.rows}
        if len(widths) > 1:
            raise ValueError(f"Ragged cell grid, row widths: {sorted(widths)}")

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[tuple[Cell, ...]]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> tuple[Cell, ...]:
        return self.rows[index]

    def chars(self) -> list[str]:
        """One string per row."""
        return ["".join(cell.char for cell in row) for row in self.rows]

    def colours(self) -> np.ndarray:
        """(rows, cols, 3) uint8 array of cell colours."""
        out = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        for r, row in enumerate(self.rows):
            for c, cell in enumerate(row):
                out[r, c] = cell.colour
        return out


@dataclass(frozen=True)
class NoEdge:
    pass


class Edge(NamedTuple):
    colour: RGB
    direction: int


NO_EDGE = NoEdge()
EdgePixel = NoEdge | Edge


@dataclass(frozen=True)
class EdgeBuffer:
    """Per-pixel edge results, same dimensions as the image they came from."""

    width: int
    height: int
    pixels: tuple[tuple[EdgePixel, ...], ...]

    def __post_init__(self):
        if len(self.pixels) != self.height or any(len(row) != self.width for row in self.pixels):
            raise ValueError(f"Edge pixels do not match {self.width}x{self.height}")

    def __getitem__(self, xy: tuple[int, int]) -> EdgePixel:
        x, y = xy
        return self.pixels[y][x]

    def __iter__(self) -> Iterator[tuple[EdgePixel, ...]]:
        return iter(self.pixels)

    def edge_count(self) -> int:
        return sum(1 for row in self.pixels for p in row if isinstance(p, Edge))
