"""Shared test fixtures for the termlog test suite."""

import pytest

from termlog import Logger

from helpers import Sink


# ---------------------------------------------------------------------------
# Stream fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def out():
    """Buffer standing in for stdout."""
    return Sink("<stdout>")


@pytest.fixture
def err():
    """Buffer standing in for stderr."""
    return Sink("<stderr>")


@pytest.fixture
def keys():
    """Factory for a key_reader that replays the given keys in order."""
    def _make(*sequence):
        it = iter(sequence)
        return lambda: next(it)
    return _make


# ---------------------------------------------------------------------------
# Logger fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def logger(out, err):
    """A Logger wired to the out/err buffers with the default routing."""
    return Logger(stdout=out, stderr=err)
