import numpy as np
from PIL import Image

from img2ascii.grid import PixelBuffer


def solid(width, height, colour=(255, 0, 0, 255)):
    """PixelBuffer filled with a single RGBA colour."""
    return PixelBuffer.from_image(Image.new("RGBA", (width, height), colour))


def vertical_step(width, height, split, left=(0, 0, 0), right=(255, 255, 255)):
    """Columns < split are ``left``, the rest ``right``."""
    array = np.full((height, width, 3), right, dtype=np.uint8)
    array[:, :split] = left
    return PixelBuffer.from_array(array)


def horizontal_step(width, height, split, top=(0, 0, 0), bottom=(255, 255, 255)):
    array = np.full((height, width, 3), bottom, dtype=np.uint8)
    array[:split, :] = top
    return PixelBuffer.from_array(array)
