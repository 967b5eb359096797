"""Pytest configuration and fixtures for genetics engine tests."""

import random
from pathlib import Path
from typing import Iterable, List, Optional

import pytest

from equine.genetics.profile import BreedGeneticProfile

DATA_DIR = Path(__file__).resolve().parents[1] / "data" / "breeds"


class ScriptedRandom(random.Random):
    """Random source that replays scripted draws, for steering specific branches.

    ``random()`` returns the scripted floats in order and ``randrange()``
    the scripted ints. Running out of script fails the test, which also
    catches code that takes more draws than expected.
    """

    def __init__(self, floats: Iterable[float] = (), ints: Optional[Iterable[int]] = None) -> None:
        super().__init__(0)
        self.floats: List[float] = list(floats)
        self.ints: List[int] = list(ints or [])
        self.float_calls = 0
        self.int_calls = 0

    def random(self) -> float:
        if not self.floats:
            raise AssertionError("ScriptedRandom: random() called more times than scripted")
        self.float_calls += 1
        return self.floats.pop(0)

    def randrange(self, start, stop=None, step=1):
        if not self.ints:
            raise AssertionError("ScriptedRandom: randrange() called more times than scripted")
        self.int_calls += 1
        return self.ints.pop(0)

    @property
    def exhausted(self) -> bool:
        return not self.floats and not self.ints


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def scripted_rng():
    """Factory for a ScriptedRandom: ``scripted_rng([0.1, 0.7], ints=[0, 1])``."""
    return ScriptedRandom


@pytest.fixture
def generic_profile_data():
    import orjson

    return orjson.loads((DATA_DIR / "generic.json").read_bytes())


@pytest.fixture
def generic_profile(generic_profile_data):
    return BreedGeneticProfile.from_dict(generic_profile_data)


@pytest.fixture
def thoroughbred_profile():
    import orjson

    return BreedGeneticProfile.from_dict(orjson.loads((DATA_DIR / "thoroughbred.json").read_bytes()))


@pytest.fixture
def empty_profile():
    """A profile with no tables at all."""
    return BreedGeneticProfile.from_dict({})
