"""
MATLAB-style 2-D linear convolution with FULL/SAME/VALID output shapes.
"""

from enum import Enum

import numpy as np
from scipy.signal import convolve2d

from .utils import as_real_image
from .tracing import trace_function


class ConvShape(Enum):
    """Output size policy of ``conv2`` (same meaning as MATLAB's conv2)."""
    FULL = 'full'
    SAME = 'same'
    VALID = 'valid'


def _as_shape(shape):
    if isinstance(shape, ConvShape):
        return shape
    if isinstance(shape, str):
        try:
            return ConvShape(shape.lower())
        except ValueError:
            pass
    raise ValueError(f"Invalid shape {shape!r}. Choose 'full', 'same' or 'valid'.")


@trace_function()
def conv2(src, kernel, shape=ConvShape.FULL):
    """
    2-D linear convolution with zero boundary conditions.

    The source is zero-padded by ``kernel.shape - 1`` on every side and
    convolved with the kernel. Only the window whose samples are computed
    entirely from the padded grid is kept, so the border policy of the
    underlying primitive never reaches the output. That FULL-shaped result
    is then cropped:

        src    = 1 2 3 4          kernel = 0.5 0 0.5

        full   = 0.5 1 2 3 1.5 2
        same   =     1 2 3 1.5
        valid  =       2 3

    Parameters
    ----------
    src : ndarray
        Real 2-D image
    kernel : ndarray
        Real 2-D kernel; odd and even sizes are both valid
    shape : ConvShape or str
        FULL (src + k - 1), SAME (src) or VALID (src - k + 1)

    Returns
    -------
    result : ndarray
        Convolved image. VALID gives an empty array along any axis where the
        kernel is larger than the source.
    """
    shape = _as_shape(shape)
    src = as_real_image(src, 'src')
    kernel = as_real_image(kernel, 'kernel')

    kh, kw = kernel.shape
    h, w = src.shape
    pad_y, pad_x = kh - 1, kw - 1

    zero_padded = np.pad(np.asarray(src, dtype=np.float64),
                         ((pad_y, pad_y), (pad_x, pad_x)), mode='constant')
    full = convolve2d(zero_padded, np.asarray(kernel, dtype=np.float64), mode='valid')
    full_h, full_w = full.shape

    if shape is ConvShape.FULL:
        return full

    if shape is ConvShape.SAME:
        height, width = h, w
        # +1 rounds the offset up for even kernels
        top = (full_h - height + 1) // 2
        left = (full_w - width + 1) // 2
    else:
        height = max(h - kh + 1, 0)
        width = max(w - kw + 1, 0)
        top = (full_h - height) // 2
        left = (full_w - width) // 2

    return full[top:top + height, left:left + width].copy()
