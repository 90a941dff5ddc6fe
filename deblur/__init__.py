# Numeric helpers for frequency-domain blind deconvolution:
# MATLAB-style conv2, masked cross-correlation, spectrum utilities
# and edge tapering of occluded image borders.

from .convolution import ConvShape, conv2
from .correlation import cross_correlation
from .spectral import (
    fft,
    dft,
    swap_quadrants,
    log_magnitude_spectrum,
    real_part,
    normalize_one,
    normed_gradients,
)
from .edge_taper import edge_taper, gaussian_blur
from .conversion import float_to_uchar, gradient_to_uchar
from .tracing import tracer, trace
