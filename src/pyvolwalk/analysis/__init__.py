"""Analysis tools for sampled chains.

This module provides utilities for inspecting the output of the sample
drivers:

- Burn-in removal and thinning of a sample sequence
- Integrated autocorrelation times and effective sample sizes per coordinate
"""

from .chain import ChainDiagnostics, get_chain_diagnostics, thin_sequence

__all__ = [
    "ChainDiagnostics",
    "get_chain_diagnostics",
    "thin_sequence",
]
