import random

import pytest


class ScriptedRng:
    """Randomness stub whose choice() picks scripted cells, or the first free cell."""

    def __init__(self, picks=None):
        self.picks = list(picks or [])
        self.calls = []

    def choice(self, seq):
        self.calls.append(list(seq))
        if self.picks:
            pick = self.picks.pop(0)
            assert pick in seq, f"scripted pick {pick} is not a free cell"
            return pick
        return seq[0]


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def seeded_rng():
    return random.Random(1234)
