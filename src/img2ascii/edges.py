"""Sobel edge detection with directional encoding.

Each interior pixel's luminance is convolved with the two Sobel kernels. The
gradient magnitude decides whether the pixel is an edge, and the gradient
angle picks one of four direction classes, which index ``EDGE_RAMP``.
Opposite directions (180 degrees apart) share a class.
"""

import logging
import math

import numpy as np

from img2ascii.charsets import DIAGONAL_DOWN, DIAGONAL_UP, HORIZONTAL, VERTICAL
from img2ascii.grid import NO_EDGE, Edge, EdgeBuffer, EdgePixel, PixelBuffer
from img2ascii.sampling import luminance

logger = logging.getLogger(__name__)

# Horizontal gradient, responds to vertical edges
SOBEL_GX = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.int32)

# Vertical gradient, responds to horizontal edges
SOBEL_GY = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.int32)

SECTORS = 8
SECTOR_WIDTH = np.float32(math.pi / 4)

# Sector (counter-clockwise from 0 rad) -> direction class
SECTOR_CLASSES = np.array(
    [HORIZONTAL, DIAGONAL_UP, VERTICAL, DIAGONAL_DOWN, HORIZONTAL, DIAGONAL_UP, VERTICAL, DIAGONAL_DOWN],
    dtype=np.int32,
)


def _convolve_interior(lum: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """3x3 correlation over the interior; result is (h - 2, w - 2)."""
    h, w = lum.shape
    out = np.zeros((h - 2, w - 2), dtype=np.int32)
    for ky in range(3):
        for kx in range(3):
            k = kernel[ky, kx]
            if k:
                out += k * lum[ky : ky + h - 2, kx : kx + w - 2]
    return out


def _sectors(gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    angle = np.arctan2(gy.astype(np.float32), gx.astype(np.float32))
    angle = np.where(angle < 0, angle + np.float32(2 * math.pi), angle)
    # Half-sector offset centres sector 0 on 0 rad
    return (angle / SECTOR_WIDTH + np.float32(0.5)).astype(np.int32) % SECTORS


def _magnitude(gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    magnitude = np.sqrt((gx * gx + gy * gy).astype(np.float32))
    return np.minimum(magnitude, 255).astype(np.uint8)


def direction_class(angle: float) -> int:
    """Direction class for a gradient angle in radians (any range)."""
    sector = _sectors(np.array([math.cos(angle)]), np.array([math.sin(angle)]))
    return int(SECTOR_CLASSES[sector[0]])


def sobel_gradients(img: PixelBuffer) -> tuple[np.ndarray, np.ndarray]:
    """Interior Gx and Gy arrays, each (height - 2, width - 2)."""
    lum = luminance(img.rgb)
    return _convolve_interior(lum, SOBEL_GX), _convolve_interior(lum, SOBEL_GY)


def edge_magnitudes(img: PixelBuffer) -> np.ndarray:
    """Clamped integer gradient magnitude for every pixel; the border is 0."""
    out = np.zeros((img.height, img.width), dtype=np.uint8)
    if img.width < 3 or img.height < 3:
        return out
    out[1:-1, 1:-1] = _magnitude(*sobel_gradients(img))
    return out


def detect_edges(img: PixelBuffer, threshold: int = 100) -> EdgeBuffer:
    """Mark pixels whose gradient magnitude reaches ``threshold``.

    A pixel is an edge when its magnitude is non-zero and ``>= threshold``;
    a flat region is never an edge, even at threshold 0. Border pixels, and
    every pixel of an image smaller than 3x3, are ``NO_EDGE``.
    """
    if not 0 <= threshold <= 255:
        raise ValueError(f"Edge threshold must be in 0..255, got {threshold}")

    w, h = img.size
    classes = np.full((h, w), -1, dtype=np.int32)
    if w >= 3 and h >= 3:
        gx, gy = sobel_gradients(img)
        magnitude = _magnitude(gx, gy)
        is_edge = (magnitude > 0) & (magnitude >= threshold)
        interior = classes[1:-1, 1:-1]
        interior[is_edge] = SECTOR_CLASSES[_sectors(gx, gy)][is_edge]

    rgb = img.rgb
    rows: list[tuple[EdgePixel, ...]] = []
    for y in range(h):
        row: list[EdgePixel] = []
        for x in range(w):
            direction = int(classes[y, x])
            if direction < 0:
                row.append(NO_EDGE)
            else:
                r, g, b = rgb[y, x]
                row.append(Edge((int(r), int(g), int(b)), direction))
        rows.append(tuple(row))

    edges = EdgeBuffer(width=w, height=h, pixels=tuple(rows))
    logger.debug("Detected %d edge pixels in %dx%d (threshold %d)", edges.edge_count(), w, h, threshold)
    return edges
