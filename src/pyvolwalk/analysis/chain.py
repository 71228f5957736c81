"""Diagnostics for sample sequences produced by the drivers."""

from dataclasses import dataclass

import numpy as np

from ..samplers.generator import SampleSequence
from ..utils.autocorr import integrated_autocorr_time
from ..utils.types import FloatArray, PointArray


@dataclass
class ChainDiagnostics:
    """Per-coordinate autocorrelation summary of one chain."""

    autocorr_time: FloatArray
    effective_sample_size: FloatArray
    mean: FloatArray
    std: FloatArray

    @property
    def min_effective_sample_size(self) -> float:
        """Effective sample size of the worst mixing coordinate."""
        return float(np.min(self.effective_sample_size))


def thin_sequence(sequence: SampleSequence, discard: int = 0, thin: int = 1) -> PointArray:
    """Points of a sequence with burn-in removed and thinning applied.

    Parameters
    ----------
    sequence : SampleSequence
        Output of one of the sample drivers.
    discard : int, optional
        Number of initial points to drop. Default is 0.
    thin : int, optional
        Keep every ``thin``-th point. Default is 1.

    Returns
    -------
    PointArray
        Array of shape (n_kept, dim).
    """
    if discard < 0 or thin < 1:
        raise ValueError("discard must be non-negative and thin positive.")
    return sequence.points[discard::thin]


def get_chain_diagnostics(
    sequence: SampleSequence,
    discard: int = 0,
    thin: int = 1,
    c: float = 5.0,
) -> ChainDiagnostics:
    """Estimate how well a chain mixes, coordinate by coordinate.

    The sequence must be in generation order, which every driver guarantees.
    The effective sample size is the number of kept points divided by the
    integrated autocorrelation time.

    Parameters
    ----------
    sequence : SampleSequence
        Output of one of the sample drivers.
    discard : int, optional
        Number of initial points to drop as burn-in. Default is 0.
    thin : int, optional
        Thinning factor applied before the estimate. Default is 1.
    c : float, optional
        Window size factor of the autocorrelation estimate. Default is 5.0.

    Returns
    -------
    ChainDiagnostics
        Autocorrelation times, effective sample sizes, means and standard
        deviations, each of shape (dim,).

    Examples
    --------
    >>> diagnostics = get_chain_diagnostics(samples, discard=100)
    >>> diagnostics.min_effective_sample_size
    """
    points = thin_sequence(sequence, discard=discard, thin=thin)
    if len(points) < 2:
        raise ValueError("At least two points are needed for chain diagnostics.")

    taus = integrated_autocorr_time(points, c=c)
    return ChainDiagnostics(
        autocorr_time=taus,
        effective_sample_size=len(points) / np.maximum(taus, 1.0),
        mean=points.mean(axis=0),
        std=points.std(axis=0),
    )
