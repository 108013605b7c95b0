"""Perceptual image hashing and the image-source adapter that feeds it."""

from .loader import decode_luminance_grid, fingerprint_image, load_image_bytes
from .phash import compute_phash, dct_2d, hamming_distance

__all__ = [
    "compute_phash",
    "dct_2d",
    "hamming_distance",
    "decode_luminance_grid",
    "fingerprint_image",
    "load_image_bytes",
]
