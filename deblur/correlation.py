"""
Masked normalized cross-correlation of two gradient fields.
"""

import numpy as np

from .utils import as_real_image, as_mask, check_same_shape
from .tracing import trace_function


@trace_function()
def cross_correlation(x, y, mask=None):
    """
    Normalized cross-correlation coefficient of ``x`` and ``y`` over a mask.

    Computes E / (sqrt(dev_x) * sqrt(dev_y)) with
    E = sum((x - mu_x) * (y - mu_y)) and dev = sum((v - mu_v)^2) taken over
    the masked cells only. The 1/N factors cancel and are left out.

    Parameters
    ----------
    x, y : ndarray
        Real floating point images of identical shape
    mask : ndarray, optional
        Cells with a value > 0 participate. All cells if None.

    Returns
    -------
    r : float
        Correlation coefficient in [-1, 1]. If either image is constant over
        the mask (or the mask is empty) the result is nan or inf; callers
        must guard against that themselves.
    """
    x = as_real_image(x, 'x', floating=True)
    y = as_real_image(y, 'y', floating=True)
    check_same_shape(x, y, ('x', 'y'))

    if mask is None:
        region = np.ones(x.shape, dtype=bool)
    else:
        region = as_mask(mask, x.shape)

    xs = x[region].astype(np.float64)
    ys = y[region].astype(np.float64)

    with np.errstate(divide='ignore', invalid='ignore'):
        dx = xs - xs.mean() if xs.size else xs
        dy = ys - ys.mean() if ys.size else ys

        expected = np.sum(dx * dy)
        deviation_x = np.sqrt(np.sum(dx * dx))
        deviation_y = np.sqrt(np.sum(dy * dy))

        return float(np.float64(expected) / (deviation_x * deviation_y))
