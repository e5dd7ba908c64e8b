import logging
import math

import numpy as np

from img2ascii.errors import InvalidDimensions
from img2ascii.grid import PixelBuffer

logger = logging.getLogger(__name__)

# Terminal cells are roughly twice as tall as wide; empirical factor, keep as is
CHAR_ASPECT = 0.43

LUMA_WEIGHTS = (np.float32(0.299), np.float32(0.587), np.float32(0.114))


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Integer luminance in [0, 255] for an (..., 3) array of 8-bit RGB."""
    rgb = np.asarray(rgb, dtype=np.float32)
    wr, wg, wb = LUMA_WEIGHTS
    lum = wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2]
    return np.clip(lum.astype(np.int32), 0, 255)


def compute_height(source_width: int, source_height: int, target_width: int) -> int:
    """Rows needed to keep the source aspect ratio at ``target_width`` columns."""
    if source_width == 0 or source_height == 0:
        raise InvalidDimensions(source_width, source_height)
    rows = target_width * (source_height / source_width) * CHAR_ASPECT
    return math.floor(rows + 0.5)


def resample(source: PixelBuffer, target_width: int, target_height: int | None = None) -> PixelBuffer:
    """Nearest-neighbour resize to exactly ``target_width`` x ``target_height``.

    When ``target_height`` is omitted it is derived from the source aspect
    ratio, corrected for the shape of a terminal character cell.
    """
    sw, sh = source.size
    if sw == 0 or sh == 0:
        raise InvalidDimensions(sw, sh, f"Source image is empty ({sw}x{sh})")
    if target_height is None:
        target_height = compute_height(sw, sh, target_width)
    if target_width <= 0 or target_height <= 0:
        raise InvalidDimensions(
            target_width, target_height, f"Cannot resample {sw}x{sh} to {target_width}x{target_height}"
        )

    xs = np.arange(target_width) * sw // target_width
    ys = np.arange(target_height) * sh // target_height
    logger.debug("Resampling %dx%d -> %dx%d", sw, sh, target_width, target_height)
    return PixelBuffer(source.pixels[ys[:, None], xs[None, :]])
