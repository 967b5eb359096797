"""Tests for engine configuration and the exception hierarchy."""

import pytest

from equine.config import GeneticsConfig
from equine.config.engine_config import DEFAULT_CONFIG
from equine.exceptions import (
    BreedingInputError,
    ConfigurationError,
    EquineError,
    GeneticsError,
    InvalidAllelePairError,
)
from equine.util.rng import MissingRNGError, create_rng, require_rng_param


class TestGeneticsConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.max_inheritance_attempts == 10
        assert DEFAULT_CONFIG.full_white_alleles == frozenset({"W13"})
        assert DEFAULT_CONFIG.gray_stage_ages == (3, 6, 9, 12)
        assert DEFAULT_CONFIG.appaloosa_age_bands == (4, 8)
        assert DEFAULT_CONFIG.bloody_shoulder_base_chance == pytest.approx(0.001)

    def test_full_white_alleles_frozen(self):
        config = GeneticsConfig(full_white_alleles=["W13", "W5"])
        assert config.full_white_alleles == frozenset({"W13", "W5"})

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_inheritance_attempts": 0},
            {"gray_stage_ages": (3, 2, 9, 12)},
            {"gray_stage_ages": (3, 6, 9)},
            {"appaloosa_age_bands": (8, 4)},
            {"bloody_shoulder_base_chance": 1.5},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ConfigurationError):
            GeneticsConfig(**kwargs)


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(GeneticsError, EquineError)
        assert issubclass(InvalidAllelePairError, GeneticsError)
        assert issubclass(ConfigurationError, EquineError)
        assert issubclass(BreedingInputError, EquineError)
        assert issubclass(BreedingInputError, ValueError)


class TestRngHelpers:
    def test_require_rng(self):
        with pytest.raises(MissingRNGError, match="somewhere"):
            require_rng_param(None, "somewhere")

    def test_create_rng_seeded(self):
        assert create_rng(5).random() == create_rng(5).random()
