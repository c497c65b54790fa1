import pytest


class ConstantSource:
    """Degenerate random source: every draw returns the same value."""

    def __init__(self, seed=1, value=0):
        self.value = value
        self.seed = seed

    def uniform_int(self):
        return self.value

    def uniform_float(self):
        return 0.0

    def reseed(self, seed):
        self.seed = seed


@pytest.fixture
def constant_source():
    return ConstantSource
