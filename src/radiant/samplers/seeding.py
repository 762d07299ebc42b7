"""Per-worker sampler isolation.

Rendering work is split into square tiles of pixels. Every tile is rendered
with its own sampler clone, seeded from the tile's position in the tile
grid, so results only depend on how the image is tiled, never on which
thread picks up which tile or in what order.

Seed derivation:
    seed = base_seed * (nx * ny) + ty * nx + tx

where (nx, ny) is the tile grid size and (tx, ty) the tile coordinate.
Distinct tiles get distinct seeds, and changing base_seed moves every tile
to a disjoint range of sequences.

Example:
    >>> n_tiles = tile_count(640, 480)
    >>> samplers = samplers_for_tiles(sampler, n_tiles)
    >>> tile_sampler = samplers[(3, 2)]
"""

import logging
from collections.abc import Iterator

from radiant.samplers.base import Sampler

logger = logging.getLogger(__name__)

# Tile edge length in pixels
TILE_SIZE = 16


def tile_count(width: int, height: int, tile_size: int = TILE_SIZE) -> tuple[int, int]:
    """Number of tiles covering an image, rounding partial tiles up.

    Raises:
        ValueError: If any argument is not positive.
    """
    if width <= 0 or height <= 0 or tile_size <= 0:
        raise ValueError(
            f"Image and tile sizes must be positive, got {width}x{height}, tile_size={tile_size}"
        )
    return (width + tile_size - 1) // tile_size, (height + tile_size - 1) // tile_size


def iter_tiles(n_tiles: tuple[int, int]) -> Iterator[tuple[int, int]]:
    """Yield tile coordinates row by row."""
    nx, ny = n_tiles
    for ty in range(ny):
        for tx in range(nx):
            yield tx, ty


def tile_bounds(
    tile: tuple[int, int],
    width: int,
    height: int,
    tile_size: int = TILE_SIZE,
) -> tuple[tuple[int, int], tuple[int, int]]:
    """Pixel bounds of a tile as ((x0, y0), (x1, y1)), upper bounds exclusive."""
    tx, ty = tile
    x0 = tx * tile_size
    y0 = ty * tile_size
    return (x0, y0), (min(x0 + tile_size, width), min(y0 + tile_size, height))


def tile_seed(tile: tuple[int, int], n_tiles: tuple[int, int], base_seed: int = 0) -> int:
    """Derive the random sequence index for a tile.

    Args:
        tile: Tile coordinate (tx, ty).
        n_tiles: Tile grid size (nx, ny).
        base_seed: Non-negative render-level seed.

    Returns:
        The sequence index for the tile's sampler.

    Raises:
        ValueError: If the tile lies outside the grid or base_seed is negative.
    """
    tx, ty = tile
    nx, ny = n_tiles
    if not (0 <= tx < nx and 0 <= ty < ny):
        raise ValueError(f"Tile {tile} is outside the {nx}x{ny} tile grid")
    if base_seed < 0:
        raise ValueError(f"base_seed must be non-negative, got {base_seed}")
    return base_seed * nx * ny + ty * nx + tx


def samplers_for_tiles(
    sampler: Sampler,
    n_tiles: tuple[int, int],
    base_seed: int = 0,
) -> dict[tuple[int, int], Sampler]:
    """Clone a sampler once per tile with the tile's seed.

    Args:
        sampler: The configured prototype sampler (arrays already requested).
        n_tiles: Tile grid size (nx, ny).
        base_seed: Render-level seed.

    Returns:
        Mapping from tile coordinate to that tile's independent sampler.
    """
    samplers = {
        tile: sampler.clone_with_seed(tile_seed(tile, n_tiles, base_seed))
        for tile in iter_tiles(n_tiles)
    }
    logger.debug("Cloned %d tile samplers (base seed %d)", len(samplers), base_seed)
    return samplers
