"""Utility functions and types for pyVolWalk.

This module contains the pieces shared by the walks, the bodies and the
analysis tools:

- Array type aliases and the membership enum
- Protocols describing the convex-body oracles the walks query
- Custom exception classes for configuration and input errors
- Autocorrelation time estimation for single chains
"""
