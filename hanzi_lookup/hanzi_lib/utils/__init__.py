"""Utility functions for path geometry.

Example usage::

    from hanzi_lib.utils import resample_path, smooth_path
"""

from .geometry import (
    angle_between,
    catmull_rom_chain,
    drop_consecutive_duplicates,
    quantize_angle,
    resample_path,
    smooth_path,
)

__all__ = [
    'angle_between', 'catmull_rom_chain', 'drop_consecutive_duplicates',
    'quantize_angle', 'resample_path', 'smooth_path',
]
