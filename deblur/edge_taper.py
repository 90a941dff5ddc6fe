"""
Edge tapering for images with blacked-out border or occlusion regions.

Occluded samples (value <= threshold) are filled from their neighbours so
that the hard zero boundary does not cause ringing in a later frequency
domain step. Pixels inside the region-of-interest mask are never changed.
"""

import numpy as np
from scipy.ndimage import gaussian_filter

from .utils import as_mask, check_same_shape
from .tracing import trace, trace_function

OCCLUSION_THRESHOLD = 0
DEFAULT_IMAGE_KSIZE = 19
DEFAULT_FINAL_KSIZE = 51
DEFAULT_IMAGE_WEIGHT = 0.3


def _run_bounds(in_run):
    """Return (starts, stops) of the True runs of a 1-D boolean array."""
    edges = np.flatnonzero(np.diff(np.concatenate(([0], in_run.astype(np.int8), [0]))))
    return edges[::2], edges[1::2]


def _fill_line(values, in_run, out):
    """
    Fill every run of a single line, writing into ``out``.

    ``left`` is the sample before the run (0 at the line start). A run
    terminated by a sample outside the run takes that sample as ``right``
    and the filled span includes it. A run reaching the line end uses
    ``left`` for both halves. The span is split at
    ``start + (end - start) // 2``: the first half gets ``left`` and the
    rest up to and including ``end`` gets ``right``.
    """
    n = len(values)
    starts, stops = _run_bounds(in_run)
    for start, stop in zip(starts, stops):
        left = values[start - 1] if start > 0 else 0
        if stop < n:
            end = stop
            right = values[stop]
        else:
            end = n - 1
            right = left
        mid = start + (end - start) // 2
        out[start:mid] = left
        out[mid:end + 1] = right
    return len(starts)


def _fill_runs(values, in_run, axis=1):
    """
    Midpoint-fill all runs along one axis.

    Parameters
    ----------
    values : ndarray
        2-D image the fill values are read from
    in_run : ndarray
        Boolean array, True where a sample belongs to a run to be filled
    axis : int
        1 scans rows left to right, 0 scans columns top to bottom

    Returns
    -------
    filled : ndarray
        Copy of ``values`` with all runs filled
    n_runs : int
        Number of runs found
    """
    if axis not in (0, 1):
        raise ValueError(f"axis must be 0 or 1, got {axis}")
    filled = values.copy()

    # Transposed views let one row scan serve both directions
    if axis == 0:
        lines, predicate, out = values.T, in_run.T, filled.T
    else:
        lines, predicate, out = values, in_run, filled

    n_runs = 0
    for line, line_run, line_out in zip(lines, predicate, out):
        n_runs += _fill_line(line, line_run, line_out)
    return filled, n_runs


def _saturate(img):
    """Round and clip to the uint8 range."""
    return np.clip(np.rint(img), 0, 255).astype(np.uint8)


def _gaussian_sigma(ksize):
    """Sigma OpenCV derives for a Gaussian kernel of size ``ksize``."""
    return 0.3 * ((ksize - 1) * 0.5 - 1) + 0.8


def gaussian_blur(img, ksize):
    """
    Gaussian blur of a byte image with a square ``ksize`` x ``ksize`` kernel.

    The kernel support is cut at the kernel radius and borders are mirrored
    without repeating the edge sample. Sigma follows OpenCV's size rule;
    for ksize <= 7 OpenCV uses fixed tabulated kernels instead, so small
    kernels only approximate ``cv2.GaussianBlur`` (within a few grey levels).
    """
    if ksize < 1 or ksize % 2 == 0:
        raise ValueError(f"Gaussian kernel size must be positive and odd, got {ksize}")
    sigma = _gaussian_sigma(ksize)
    radius = (ksize - 1) // 2
    blurred = gaussian_filter(np.asarray(img, dtype=np.float64), sigma=sigma,
                              mode='mirror', truncate=radius / sigma)
    return _saturate(blurred)


def _as_byte_image(img, name):
    img = np.asarray(img)
    if img.ndim != 2 or img.dtype != np.uint8:
        raise ValueError(f"{name} must be a 2D uint8 image, got dtype {img.dtype} "
                         f"with shape {img.shape}")
    return img


@trace_function()
def edge_taper(src, mask, image, threshold=OCCLUSION_THRESHOLD,
               image_ksize=DEFAULT_IMAGE_KSIZE, final_ksize=DEFAULT_FINAL_KSIZE,
               image_weight=DEFAULT_IMAGE_WEIGHT, verbose='none'):
    """
    Fill the occluded regions of ``src`` with smoothly blended values.

    1. Runs of samples <= ``threshold`` are filled row by row and column by
       column from their neighbours, split at the run midpoint.
    2. Both fills are averaged.
    3. Runs inside ``mask`` are re-filled row by row from the values just
       outside the mask, so the later blur does not carry the mask interior
       over its border.
    4. The result is mixed with a blurred ``image``, blurred again, and
       ``src`` is copied back into the mask.

    Parameters
    ----------
    src : ndarray
        uint8 image with occluded (black) regions
    mask : ndarray or None
        Region of interest (> 0). Its pixels keep their ``src`` values.
        None means an empty mask.
    image : ndarray
        uint8 reference image of the same shape, blended in after filling
    threshold : int
        Samples <= threshold count as occluded (default: 0)
    image_ksize : int
        Gaussian kernel size applied to ``image`` (default: 19)
    final_ksize : int
        Gaussian kernel size applied to the composite (default: 51)
    image_weight : float
        Weight of the blurred reference in the composite (default: 0.3)
    verbose : str
        'none', 'brief', or 'all'

    Returns
    -------
    dst : ndarray
        Tapered uint8 image
    """
    src = _as_byte_image(src, 'src')
    image = _as_byte_image(image, 'image')
    check_same_shape(src, image, ('src', 'image'))
    region = as_mask(mask, src.shape)
    if not 0.0 <= image_weight <= 1.0:
        raise ValueError(f"image_weight must be in [0, 1], got {image_weight}")

    occluded = src <= threshold
    if verbose in ('brief', 'all'):
        print(f"Edge taper on {src.shape[1]}x{src.shape[0]} image, "
              f"{int(occluded.sum())} occluded pixels, {int(region.sum())} mask pixels")

    values = src.astype(np.float64)
    with trace("fill_occluded"):
        tapered_horizontal, n_horizontal = _fill_runs(values, occluded, axis=1)
        tapered_vertical, n_vertical = _fill_runs(values, occluded, axis=0)
    if verbose == 'all':
        print(f"  Horizontal runs: {n_horizontal}, vertical runs: {n_vertical}")

    dst = _saturate(0.5 * tapered_horizontal + 0.5 * tapered_vertical)

    with trace("fill_mask"):
        dst, n_mask = _fill_runs(dst, region, axis=1)
    if verbose == 'all':
        print(f"  Mask runs: {n_mask}")

    with trace("blend"):
        image_gauss = gaussian_blur(image, image_ksize)
        dst = _saturate((1.0 - image_weight) * dst + image_weight * image_gauss.astype(np.float64))
        dst = gaussian_blur(dst, final_ksize)

    dst[region] = src[region]
    return dst
