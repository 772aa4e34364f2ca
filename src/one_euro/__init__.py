"""Adaptive low-pass ("One Euro") filtering of noisy, irregularly sampled signals.

The package is layered leaves first: smoothing factors (:mod:`one_euro.alpha`),
the exponential low-pass primitive (:mod:`one_euro.lowpass`), the per-stream
adaptive state (:mod:`one_euro.state`) and the parameter holder that drives it
(:mod:`one_euro.filter`).
"""

# Importing * is a bad practice and you should be punished for using it
__all__: list[str] = []
