"""Autocorrelation time estimation for single Markov chains.

The estimators follow the FFT approach and the automatic windowing of
Sokal (1989) as popularised by the emcee documentation. Unlike ensemble
samplers, the walks in this package produce one chain per run, so every
routine here works on a single chain of shape ``(n_samples,)`` or
``(n_samples, n_dims)``.
"""

import numpy as np
import numpy.typing as npt

from .types import FloatArray


def next_pow_two(n: int) -> int:
    """Smallest power of two that is ``>= n``."""
    return 1 if n <= 1 else 1 << (int(n) - 1).bit_length()


def autocorr_func_1d(x: npt.ArrayLike, norm: bool = True) -> FloatArray:
    """Autocorrelation function of a scalar series, computed with an FFT.

    Parameters
    ----------
    x : array_like
        1D series.
    norm : bool, optional
        Divide by the zero-lag value. Default is True. A constant series has
        a zero-lag value of zero; its normalised autocorrelation is returned
        as one at lag zero and zero elsewhere.

    Returns
    -------
    FloatArray
        Autocorrelation at lags ``0, ..., len(x) - 1``.

    Raises
    ------
    ValueError
        If ``x`` is not one-dimensional.
    """
    series = np.atleast_1d(np.asarray(x, dtype=float))
    if series.ndim != 1:
        raise ValueError("invalid dimensions for 1D autocorrelation function")
    n_fft = 2 * next_pow_two(len(series))

    spectrum = np.fft.rfft(series - series.mean(), n=n_fft)
    acf = np.fft.irfft(spectrum * np.conjugate(spectrum), n=n_fft)[: len(series)]

    if norm:
        if acf[0] == 0.0:
            acf = np.zeros_like(acf)
            acf[0] = 1.0
        else:
            acf = acf / acf[0]
    return acf


def auto_window(taus: FloatArray, c: float) -> int:
    """First lag ``m`` with ``m >= c * taus[m]`` (Sokal windowing).

    Falls back to the last lag if the window never closes.
    """
    still_open = np.arange(len(taus)) < c * taus
    if np.any(~still_open):
        return int(np.argmin(still_open))
    return len(taus) - 1


def integrated_autocorr_time(chain: npt.ArrayLike, c: float = 5.0) -> FloatArray:
    """Integrated autocorrelation time of each coordinate of a chain.

    Parameters
    ----------
    chain : array_like
        Chain of shape ``(n_samples,)`` or ``(n_samples, n_dims)`` in
        generation order.
    c : float, optional
        Window size factor. Default is 5.0.

    Returns
    -------
    FloatArray
        One autocorrelation time per coordinate, shape ``(n_dims,)``.
    """
    samples = np.asarray(chain, dtype=float)
    if samples.ndim == 1:
        samples = samples[:, np.newaxis]

    taus = np.empty(samples.shape[1])
    for dim in range(samples.shape[1]):
        cumulative = 2.0 * np.cumsum(autocorr_func_1d(samples[:, dim])) - 1.0
        taus[dim] = cumulative[auto_window(cumulative, c)]
    return taus
