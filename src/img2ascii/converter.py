from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from img2ascii.charsets import DEFAULT_RAMP, EDGE_RAMP
from img2ascii.edges import detect_edges
from img2ascii.errors import InvalidDimensions
from img2ascii.grid import CellGrid, PixelBuffer
from img2ascii.quantize import quantize, quantize_edges
from img2ascii.render import render_ansi
from img2ascii.sampling import resample

DEFAULT_WIDTH = 80
DEFAULT_EDGE_THRESHOLD = 100


@dataclass(frozen=True)
class ConvertOptions:
    width: int = DEFAULT_WIDTH
    height: int | None = None
    colour: bool = False
    edges: bool = False
    edge_threshold: int = DEFAULT_EDGE_THRESHOLD

    def __post_init__(self):
        if self.width <= 0 or (self.height is not None and self.height <= 0):
            raise InvalidDimensions(self.width, self.height or 0, f"Invalid output size: {self.width}x{self.height}")
        if not 0 <= self.edge_threshold <= 255:
            raise ValueError(f"Edge threshold must be in 0..255, got {self.edge_threshold}")


def image_to_cells(
    image: PixelBuffer | Image.Image | str | Path,
    options: ConvertOptions | None = None,
) -> CellGrid:
    if options is None:
        options = ConvertOptions()
    if not isinstance(image, PixelBuffer):
        image = PixelBuffer.from_image(image)

    resized = resample(image, options.width, options.height)
    if options.edges:
        return quantize_edges(detect_edges(resized, options.edge_threshold), EDGE_RAMP)
    return quantize(resized, DEFAULT_RAMP)


def image_to_ascii(
    image: PixelBuffer | Image.Image | str | Path,
    options: ConvertOptions | None = None,
) -> str:
    if options is None:
        options = ConvertOptions()
    return render_ansi(image_to_cells(image, options), colour=options.colour)
