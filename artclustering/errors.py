"""
Exceptions raised by the ART modules.

A mismatch during classification is not an error; it is reported with the
``MISMATCH`` label instead.
"""

# Label reported by classify when no category resonates
MISMATCH = -1


class ARTError(Exception):
    """Base class for all errors raised by artclustering."""


class ConfigurationError(ARTError, ValueError):
    """The module or its data configuration cannot process the given input."""


class InvariantError(ARTError, RuntimeError):
    """Internal state was used in a way that indicates a caller bug."""
