"""
Input validation helpers shared by the toolkit modules.
"""

import numpy as np


def as_real_image(img, name='image', floating=False):
    """
    Check that ``img`` is a real-valued 2-D array and return it as ndarray.

    Parameters
    ----------
    img : array_like
        Candidate image
    name : str
        Argument name used in error messages
    floating : bool
        If True, integer images are rejected as well

    Returns
    -------
    img : ndarray
        The input as an ndarray (not copied)
    """
    img = np.asarray(img)
    if img.ndim != 2:
        raise ValueError(f"{name} must be a 2D array, got shape {img.shape}")
    if np.iscomplexobj(img):
        raise ValueError(f"{name} must be real-valued, got dtype {img.dtype}")
    if floating and not np.issubdtype(img.dtype, np.floating):
        raise ValueError(f"{name} must be a floating point image, got dtype {img.dtype}")
    if not floating and not (np.issubdtype(img.dtype, np.number) or img.dtype == bool):
        raise ValueError(f"{name} must be numeric, got dtype {img.dtype}")
    return img


def split_planes(img, name='spectrum'):
    """
    Split a complex image into (real, imag) planes.

    Accepts complex 2-D arrays and two-plane float arrays of shape (H, W, 2).
    """
    img = np.asarray(img)
    if np.iscomplexobj(img) and img.ndim == 2:
        return img.real.copy(), img.imag.copy()
    if img.ndim == 3 and img.shape[2] == 2 and not np.iscomplexobj(img):
        return img[:, :, 0].copy(), img[:, :, 1].copy()
    raise ValueError(f"{name} must be complex 2D or a (H, W, 2) two-plane array, "
                     f"got dtype {img.dtype} with shape {img.shape}")


def check_same_shape(a, b, names=('x', 'y')):
    """Raise ValueError unless ``a`` and ``b`` share the same 2-D shape."""
    if a.shape[:2] != b.shape[:2]:
        raise ValueError(f"{names[0]} and {names[1]} must have the same shape, "
                         f"got {a.shape[:2]} and {b.shape[:2]}")


def as_mask(mask, shape, name='mask'):
    """
    Convert a mask to a boolean membership array of the given shape.

    ``None`` yields an empty mask. Any cell with a value > 0 is a member.
    """
    if mask is None:
        return np.zeros(shape, dtype=bool)
    mask = np.asarray(mask)
    if mask.shape != tuple(shape):
        raise ValueError(f"{name} must have shape {tuple(shape)}, got {mask.shape}")
    if np.iscomplexobj(mask):
        raise ValueError(f"{name} must be real-valued, got dtype {mask.dtype}")
    return mask > 0
