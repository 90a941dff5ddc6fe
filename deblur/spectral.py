"""
Spectral helpers around the 2-D discrete Fourier transform.

All transforms produce full complex spectra (no packed real-input layout).
"""

import numpy as np
from scipy.fft import fft2, next_fast_len

from .utils import as_real_image, split_planes, check_same_shape
from .tracing import trace_function


@trace_function()
def fft(src):
    """
    Forward transform with padding to a transform-efficient size.

    Parameters
    ----------
    src : ndarray
        Real floating point image, or complex image

    Returns
    -------
    spectrum : ndarray
        Complex spectrum. For real input the image is zero-padded on the
        bottom/right to the next fast FFT size first, so the spectrum may be
        larger than ``src``. Complex input is transformed as is.
    """
    src = np.asarray(src)
    if np.iscomplexobj(src):
        if src.ndim != 2:
            raise ValueError(f"src must be a 2D array, got shape {src.shape}")
        return fft2(src.copy())

    src = as_real_image(src, 'src', floating=True)
    h, w = src.shape
    m = next_fast_len(h)
    n = next_fast_len(w)

    padded = np.zeros((m, n), dtype=np.result_type(src.dtype, np.complex64))
    padded[:h, :w] = src
    return fft2(padded)


@trace_function()
def dft(src):
    """
    Forward transform of a real image without any padding.

    The output has exactly the shape of ``src``.
    """
    src = as_real_image(src, 'src', floating=True)
    return fft2(src.astype(np.result_type(src.dtype, np.complex64)))


@trace_function()
def swap_quadrants(image):
    """
    Swap the quadrants of a spectrum in place so the origin is at the center.

    Top-left is exchanged with bottom-right and top-right with bottom-left.
    Calling it twice restores the original layout.

    Parameters
    ----------
    image : ndarray
        Real, complex or (H, W, 2) array with an even number of rows and
        columns. Trim odd spectra by one row/column before calling.
    """
    if not isinstance(image, np.ndarray) or image.ndim < 2:
        raise ValueError("image must be an ndarray with at least 2 dimensions")
    rows, cols = image.shape[:2]
    if rows % 2 or cols % 2:
        raise ValueError(f"swap_quadrants needs even dimensions, got {rows}x{cols}")

    cy, cx = rows // 2, cols // 2

    # copies avoid reading from a quadrant that was already overwritten
    top_left = image[:cy, :cx].copy()
    image[:cy, :cx] = image[cy:, cx:]
    image[cy:, cx:] = top_left

    top_right = image[:cy, cx:].copy()
    image[:cy, cx:] = image[cy:, :cx]
    image[cy:, :cx] = top_right


@trace_function()
def log_magnitude_spectrum(spectrum):
    """
    Viewable log-magnitude image of a spectrum.

    Computes log(1 + |F|), crops to even dimensions, centers the zero
    frequency and min-max normalizes into [0, 1]. A constant magnitude gives
    an all-zero image.

    Parameters
    ----------
    spectrum : ndarray
        Complex image or (H, W, 2) real/imaginary planes

    Returns
    -------
    display : ndarray
        float64 image in [0, 1]
    """
    re, im = split_planes(spectrum)
    magnitude = np.log(np.hypot(re, im).astype(np.float64) + 1.0)

    rows, cols = magnitude.shape
    magnitude = magnitude[:rows & -2, :cols & -2].copy()
    swap_quadrants(magnitude)

    if magnitude.size == 0:
        return magnitude
    vmin, vmax = magnitude.min(), magnitude.max()
    if vmax > vmin:
        return (magnitude - vmin) / (vmax - vmin)
    return np.zeros_like(magnitude)


@trace_function()
def real_part(spectrum):
    """Real plane of a complex (or (H, W, 2)) spectrum."""
    re, _ = split_planes(spectrum)
    return re


def _normalize_plane(plane):
    vmin, vmax = float(plane.min()), float(plane.max())
    scale = max(abs(vmin), abs(vmax))
    if scale == 0:
        return plane.copy()
    # [vmin, vmax] -> [vmin / scale, vmax / scale], so 0 stays at 0
    return plane / scale


@trace_function()
def normalize_one(src):
    """
    Sign-preserving normalization.

    The largest magnitude is scaled to 1 and the zero point is kept, unlike
    plain min-max normalization. Complex data is normalized per plane.

    Parameters
    ----------
    src : ndarray
        Real 2-D image, complex 2-D image or (H, W, 2) two-plane array

    Returns
    -------
    dst : ndarray
        Normalized image in the same representation as ``src``. An all-zero
        plane is returned unchanged.
    """
    src = np.asarray(src)
    if src.ndim == 2 and not np.iscomplexobj(src):
        src = as_real_image(src, 'src', floating=True)
        return _normalize_plane(src)

    re, im = split_planes(src, 'src')
    re, im = _normalize_plane(re), _normalize_plane(im)
    if np.iscomplexobj(src):
        return re + 1j * im
    return np.stack([re, im], axis=2)


@trace_function()
def normed_gradients(gx, gy):
    """
    Gradient magnitude sqrt(gx^2 + gy^2) of two derivative images.

    Parameters
    ----------
    gx, gy : ndarray
        Real images of identical shape (horizontal / vertical derivative)

    Returns
    -------
    gradient : ndarray
        Pointwise gradient magnitude
    """
    gx = as_real_image(gx, 'gx')
    gy = as_real_image(gy, 'gy')
    check_same_shape(gx, gy, ('gx', 'gy'))
    return np.sqrt(np.square(gx, dtype=np.float64) + np.square(gy, dtype=np.float64))
