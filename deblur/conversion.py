"""
Conversion of float images to byte images for display.
"""

import numpy as np

from .utils import as_real_image
from .tracing import trace_function


def _to_uchar(img, scale):
    return np.clip(np.rint(img * scale), 0, 255).astype(np.uint8)


@trace_function()
def float_to_uchar(src):
    """
    Convert a float image to uint8.

    Images already in [0, 1) are scaled by 255. Anything else is shifted so
    its minimum is 0 and then scaled by 255 (if it now fits below 1) or by
    255 / max.

    Parameters
    ----------
    src : ndarray
        Real 2-D image

    Returns
    -------
    dst : ndarray
        uint8 image
    """
    src = as_real_image(src, 'src')
    values = src.astype(np.float64)
    if values.size == 0:
        return np.zeros(values.shape, dtype=np.uint8)

    vmin, vmax = values.min(), values.max()
    if vmin >= 0 and vmax < 1:
        return _to_uchar(values, 255.0)

    shifted = values - vmin
    vmax = shifted.max()
    if vmax < 1:
        return _to_uchar(shifted, 255.0)
    return _to_uchar(shifted, 255.0 / vmax)


@trace_function()
def gradient_to_uchar(src):
    """
    Stretch a signed gradient image onto the full uint8 range.

    The minimum maps to 0 and the maximum to 255. A constant image maps to 0.
    """
    src = as_real_image(src, 'src')
    values = src.astype(np.float64)
    if values.size == 0:
        return np.zeros(values.shape, dtype=np.uint8)

    shifted = values - values.min()
    value_range = shifted.max()
    if value_range == 0:
        return np.zeros(values.shape, dtype=np.uint8)
    return _to_uchar(shifted, 255.0 / value_range)
