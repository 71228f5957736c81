"""Custom exceptions for pyVolWalk.

This module defines the exception hierarchy for the pyVolWalk package.
Walk steps never raise these: they are reserved for configuration and
driver inputs, which are checked before a chain starts.
"""


class PyVolWalkError(Exception):
    """Base exception class for all pyVolWalk-specific errors.

    This is the root exception class from which all other pyVolWalk
    exceptions inherit. It can be used to catch any pyVolWalk-related
    error in a general exception handler.
    """

    pass


class InputError(PyVolWalkError):
    """Raised when required inputs are missing or invalid.

    This exception is raised when:
    - A walk configuration holds an unknown walk type or an invalid constant
    - A start point has the wrong dimension
    - A body does not offer the oracle methods the selected walk needs

    Parameters
    ----------
    msg : str, optional
        Human-readable error message describing the input problem.
    """

    def __init__(self, msg="Invalid or missing input parameters"):
        super().__init__(msg)
