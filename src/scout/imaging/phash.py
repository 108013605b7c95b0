"""
DCT-based perceptual hash (pHash) over a 32x32 luminance grid.

The grid is transformed with an orthonormal 2D DCT-II, the top-left 8x8
block of low-frequency coefficients is thresholded against its median
(excluding the DC term), and the 64 resulting bits are packed into
16 lowercase hex characters.
"""

import math
from typing import List, Sequence, Tuple, Union

from pydantic import ValidationError

from ..errors import InputError
from ..schemas.base import PHASH_BITS, PHASH_HEX_LENGTH, PerceptualHash

GRID_SIZE = 32
BLOCK_SIZE = 8

Grid = Union[Sequence[Sequence[float]], bytes, bytearray]
Matrix = List[List[float]]


def cosine_table(size: int) -> Tuple[Tuple[float, ...], ...]:
    """table[u][x] = cos((2x + 1) * u * pi / 2N)"""
    return tuple(
        tuple(math.cos((2 * x + 1) * u * math.pi / (2 * size)) for x in range(size))
        for u in range(size)
    )


_COSINES = cosine_table(GRID_SIZE)


def _scale(k: int) -> float:
    return math.sqrt(0.5) if k == 0 else 1.0


def dct_2d(matrix: Sequence[Sequence[float]]) -> Matrix:
    """
    Separable, orthonormally scaled 2D DCT-II of a square matrix.

    out[v][u] = (2/N) * c(u) * c(v) * sum_y sum_x m[y][x] cos[u][x] cos[v][y]
    with c(0) = 1/sqrt(2) and c(k) = 1 otherwise.
    """
    n = len(matrix)
    if n == 0 or any(len(row) != n for row in matrix):
        raise InputError("DCT input must be a non-empty square matrix")
    cos =_COSINES if n == GRID_SIZE else cosine_table(n)

    # Transform rows: rows[y][u]
    rows = [
        [sum(row[x] * cos[u][x] for x in range(n)) for u in range(n)]
        for row in matrix
    ]

    norm = 2.0 / n
    out: Matrix = []
    for v in range(n):
        cos_v = cos[v]
        scale_v = norm * _scale(v)
        out.append(
            [
                scale_v * _scale(u) * sum(cos_v[y] * rows[y][u] for y in range(n))
                for u in range(n)
            ]
        )
    return out


def median(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def bits_to_hex(bits: str, length: int = PHASH_HEX_LENGTH) -> str:
    """Pack a binary string into hex, padded or truncated to `length` chars."""
    if not bits:
        return "0" * length
    padded = bits.ljust(-(-len(bits) // 4) * 4, "0")
    hex_digits = "".join(
        format(int(padded[i : i + 4], 2), "x") for i in range(0, len(padded), 4)
    )
    return hex_digits[:length].rjust(length, "0")


def _as_grid(grid: Grid) -> Matrix:
    if grid is None:
        raise InputError("No image grid supplied")

    if isinstance(grid, (bytes, bytearray)):
        if len(grid) != GRID_SIZE * GRID_SIZE:
            raise InputError(
                f"Flat grid must hold {GRID_SIZE * GRID_SIZE} bytes, got {len(grid)}"
            )
        return [
            [float(b) for b in grid[y * GRID_SIZE : (y + 1) * GRID_SIZE]]
            for y in range(GRID_SIZE)
        ]

    try:
        rows = [[float(value) for value in row] for row in grid]
    except (TypeError, ValueError):
        raise InputError("Grid must be a sequence of rows of numbers")

    if len(rows) != GRID_SIZE or any(len(row) != GRID_SIZE for row in rows):
        raise InputError(f"Grid must be {GRID_SIZE}x{GRID_SIZE}")
    return rows


def compute_phash(grid: Grid) -> PerceptualHash:
    """
    Fingerprint a decoded 32x32 luminance grid.

    Args:
        grid: 32 rows of 32 values (0-255), or 1024 row-major bytes

    Returns:
        PerceptualHash with a 16-char lowercase hex digest

    Raises:
        InputError: grid missing or not 32x32
    """
    coefficients = dct_2d(_as_grid(grid))

    block = [
        coefficients[y][x] for y in range(BLOCK_SIZE) for x in range(BLOCK_SIZE)
    ]
    # The DC term is left out of the median but still gets a bit of its own
    threshold = median(block[1:])
    bits = "".join("1" if value > threshold else "0" for value in block)

    return PerceptualHash(hash=bits_to_hex(bits[:PHASH_BITS]))


def hamming_distance(left: Union[PerceptualHash, str], right: Union[PerceptualHash, str]) -> int:
    """Number of differing bits between two fingerprints."""
    if not isinstance(left, PerceptualHash):
        try:
            left = PerceptualHash(hash=str(left).lower())
        except ValidationError:
            raise InputError(f"Not a 16-char hex fingerprint: {left!r}")
    return left.distance(right)
