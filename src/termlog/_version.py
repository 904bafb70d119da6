"""
Version information for termlog.

This file is the canonical source for version numbers. setup.py carries
the same string; tests/test_version.py fails if the two drift apart.
"""

# Version components - edit these for version bumps
MAJOR = 0
MINOR = 3
PATCH = 0
PHASE = None  # None, "alpha", "beta", "rc1", etc.

__version__ = "0.3.0"
__app_name__ = "termlog"


def get_version():
    """Return the version string."""
    return __version__


def get_pip_version():
    """Return a PEP 440 version (alpha/beta mapped to a0/b0)."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    phase_map = {"alpha": "a0", "beta": "b0"}
    if PHASE:
        base += phase_map.get(PHASE, PHASE)
    return base
