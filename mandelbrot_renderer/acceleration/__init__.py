"""Optional compiled backends."""

import importlib.util


def is_numba_available() -> bool:
    """Check if Numba can be imported."""
    return importlib.util.find_spec("numba") is not None


__all__ = ["is_numba_available"]
