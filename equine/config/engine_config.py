"""Lightweight runtime configuration for the genetics engine."""

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from equine.config.genetics import (
    BLOODY_SHOULDER_BASE_CHANCE,
    FULL_WHITE_ALLELES,
    GRAY_STAGE_DARK_DAPPLE_MAX_AGE,
    GRAY_STAGE_GRAY_MAX_AGE,
    GRAY_STAGE_LIGHT_DAPPLE_MAX_AGE,
    GRAY_STAGE_WHITE_MAX_AGE,
    APPALOOSA_LIGHT_MAX_AGE,
    APPALOOSA_MODERATE_MAX_AGE,
    MAX_INHERITANCE_ATTEMPTS,
)
from equine.exceptions import ConfigurationError


@dataclass(frozen=True)
class GeneticsConfig:
    """Tunable knobs for phenotype resolution and inheritance.

    Attributes:
        max_inheritance_attempts: Draws per locus before the fallback pair is used.
        full_white_alleles: Dominant White alleles that whiten the entire coat.
        gray_stage_ages: Inclusive upper ages for the Gray, Dark Dapple,
            Light Dapple and White Gray stages.
        appaloosa_age_bands: Inclusive upper ages for Light and Moderate
            Appaloosa severity.
        bloody_shoulder_base_chance: Chance before the breed multiplier.
    """

    max_inheritance_attempts: int = MAX_INHERITANCE_ATTEMPTS
    full_white_alleles: FrozenSet[str] = FULL_WHITE_ALLELES
    gray_stage_ages: Tuple[int, int, int, int] = (
        GRAY_STAGE_GRAY_MAX_AGE,
        GRAY_STAGE_DARK_DAPPLE_MAX_AGE,
        GRAY_STAGE_LIGHT_DAPPLE_MAX_AGE,
        GRAY_STAGE_WHITE_MAX_AGE,
    )
    appaloosa_age_bands: Tuple[int, int] = (
        APPALOOSA_LIGHT_MAX_AGE,
        APPALOOSA_MODERATE_MAX_AGE,
    )
    bloody_shoulder_base_chance: float = BLOODY_SHOULDER_BASE_CHANCE

    def __post_init__(self) -> None:
        if self.max_inheritance_attempts < 1:
            raise ConfigurationError(
                f"max_inheritance_attempts must be >= 1, got {self.max_inheritance_attempts}"
            )
        if len(self.gray_stage_ages) != 4 or list(self.gray_stage_ages) != sorted(self.gray_stage_ages):
            raise ConfigurationError(
                f"gray_stage_ages must be four ascending ages, got {self.gray_stage_ages}"
            )
        if len(self.appaloosa_age_bands) != 2 or self.appaloosa_age_bands[0] > self.appaloosa_age_bands[1]:
            raise ConfigurationError(
                f"appaloosa_age_bands must be two ascending ages, got {self.appaloosa_age_bands}"
            )
        if not 0.0 <= self.bloody_shoulder_base_chance <= 1.0:
            raise ConfigurationError(
                f"bloody_shoulder_base_chance must be in [0, 1], got {self.bloody_shoulder_base_chance}"
            )
        object.__setattr__(self, "full_white_alleles", frozenset(self.full_white_alleles))


DEFAULT_CONFIG = GeneticsConfig()
