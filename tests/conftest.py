import random

import pytest


class FixedRandom:
    """Stands in for a random source that always returns the same value."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def rng():
    return random.Random(20240601)


@pytest.fixture
def fixed_random():
    return FixedRandom
