"""
Pixel-art sprite maps and the images built from them.

Maps use one character per pixel; '.' is transparent.
"""

from typing import Dict, Sequence, Tuple

import numpy as np
from PIL import Image

from .config import SHIP_PIXEL
from .utils import clamp

RGB = Tuple[int, int, int]

SHIP_MAP = [
    "......WW......",
    ".....WCWC.....",
    "....WWCCWW....",
    "....WCCCCW....",
    "...WCCCCCCW...",
    "..WWCCCCCCWW..",
    ".WGGCCCCCCGGW.",
    "WGGGWCCCCWGGGW",
    "WGGWWCCCCWWGGW",
    ".WW.WCCCCW.WW.",
    "....WWWWWW....",
    ".....WEEW.....",
    ".....WEEW.....",
    "......EE......",
]

SHIP_COLORS: Dict[str, RGB] = {
    "W": (200, 210, 230),
    "C": (160, 180, 210),
    "G": (80, 95, 120),
    "E": (255, 140, 30),
}

ASTEROID_MAPS = [
    [
        "...####...",
        "..#OO##D..",
        ".#OO####D.",
        "##O######D",
        "##########",
        "#D########",
        ".D######D.",
        "..D####D..",
        "...D##D...",
    ],
    [
        "..D####D..",
        ".D#OO###D.",
        "D#OO#####D",
        "###O######",
        "##########",
        "##########",
        "D########D",
        ".D######D.",
        "..DD##DD..",
    ],
    [
        "....##....",
        "..D####...",
        ".D#OO##D..",
        "D##O####D.",
        "##########",
        "D########D",
        ".D#####D..",
        "..D###D...",
        "...DDD....",
    ],
]


def pixel_image(pixel_map: Sequence[str], colors: Dict[str, RGB], px: int) -> Image.Image:
    """Rasterise a character map into an RGBA image with ``px``-sized pixels"""
    rows, cols = len(pixel_map), len(pixel_map[0])
    data = np.zeros((rows, cols, 4), dtype=np.uint8)
    for r, line in enumerate(pixel_map):
        for c, ch in enumerate(line):
            if ch in colors:
                data[r, c, :3] = colors[ch]
                data[r, c, 3] = 255
    data = data.repeat(px, axis=0).repeat(px, axis=1)
    return Image.fromarray(data, "RGBA")


def asteroid_colors(tint: RGB) -> Dict[str, RGB]:
    r, g, b = tint

    def shade(dr, dg, db) -> RGB:
        return (int(clamp(r + dr, 0, 255)), int(clamp(g + dg, 0, 255)), int(clamp(b + db, 0, 255)))

    return {"#": (r, g, b), "O": shade(45, 40, 30), "D": shade(-35, -30, -25)}


def asteroid_image(template: int, tint: RGB, radius: float) -> Image.Image:
    pixel_map = ASTEROID_MAPS[template % len(ASTEROID_MAPS)]
    px = max(2, int(radius * 2) // max(len(pixel_map[0]), len(pixel_map)))
    return pixel_image(pixel_map, asteroid_colors(tint), px)


def _value_noise(rng: np.random.Generator, size: int, cells: int = 8) -> np.ndarray:
    """Smooth noise in [0, 1] by bilinear upsampling of a coarse random grid"""
    coarse = rng.random((cells + 1, cells + 1))
    pos = np.linspace(0, cells, size, endpoint=False)
    i = pos.astype(int)
    f = pos - i
    f = f * f * (3 - 2 * f)
    top = coarse[i][:, i] * (1 - f)[None, :] + coarse[i][:, i + 1] * f[None, :]
    bottom = coarse[i + 1][:, i] * (1 - f)[None, :] + coarse[i + 1][:, i + 1] * f[None, :]
    return top * (1 - f)[:, None] + bottom * f[:, None]


def earth_image(rng: np.random.Generator, grid: int = 50, px: int = 4) -> Image.Image:
    """Pixelated globe: oceans, coast and land from a noise field, blue rim"""
    noise = _value_noise(rng, grid)
    yy, xx = np.mgrid[0:grid, 0:grid]
    d = np.hypot(xx - grid / 2, yy - grid / 2)

    data = np.zeros((grid, grid, 4), dtype=np.float64)
    depth = 0.6 + 0.4 * np.clip(noise / 0.48, 0, 1)
    ocean = np.stack([30 * depth, 80 * depth, 200 * depth], axis=-1)
    data[..., :3] = ocean
    data[noise > 0.48, :3] = (180, 170, 130)
    data[noise > 0.52, :3] = (120, 150, 80)
    data[noise > 0.65, :3] = (140, 180, 100)

    edge = np.clip((grid / 2 - d) / 4, 0, 1)[..., None]
    rim = np.array([100, 160, 255], dtype=np.float64)
    data[..., :3] = rim * (1 - edge) + data[..., :3] * edge
    data[..., 3] = np.where(d <= grid / 2, 255, 0)

    image = data.astype(np.uint8).repeat(px, axis=0).repeat(px, axis=1)
    return Image.fromarray(image, "RGBA")


def ship_image() -> Image.Image:
    return pixel_image(SHIP_MAP, SHIP_COLORS, SHIP_PIXEL)

