"""Phenotype resolution: genotype + breed profile + age -> visible appearance.

This is the entry point collaborators call. It runs the coat cascade in
``equine.genetics.expression``, renders the display name from the
resulting ``CoatState``, and rolls face/leg markings from the breed's
marking bias.

Resolution never raises for malformed genotype or profile content: bad
sections are treated as absent and logged, so a horse with damaged data
still gets a (degraded) colour.
"""

from __future__ import annotations

import logging
import random as pyrandom
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from equine.config.engine_config import GeneticsConfig
from equine.config.genetics import DEFAULT_SHADE
from equine.genetics.coat import CoatState, render_display_color
from equine.genetics.expression import express_coat
from equine.genetics.genotype import Genotype
from equine.genetics.markings import PhenotypicMarkings, resolve_markings
from equine.genetics.profile import BreedGeneticProfile
from equine.util.rng import require_rng_param

logger = logging.getLogger(__name__)


@dataclass
class PhenotypeResult:
    """Resolved appearance of one horse.

    Only ``final_display_color``, ``phenotypic_markings`` and
    ``determined_shade`` are persisted; ``shade_key`` and ``coat`` are kept
    for debugging.
    """

    final_display_color: str
    phenotypic_markings: PhenotypicMarkings = field(default_factory=PhenotypicMarkings)
    determined_shade: str = DEFAULT_SHADE
    shade_key: str = ""
    coat: Optional[CoatState] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "final_display_color": self.final_display_color,
            "phenotypic_markings": self.phenotypic_markings.to_dict(),
            "determined_shade": self.determined_shade,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "PhenotypeResult":
        return cls(
            final_display_color=str(data.get("final_display_color", "")),
            phenotypic_markings=PhenotypicMarkings.from_dict(data.get("phenotypic_markings")),
            determined_shade=str(data.get("determined_shade", DEFAULT_SHADE)),
        )


def _as_genotype(genotype: Any) -> Genotype:
    if isinstance(genotype, Genotype):
        return genotype
    if genotype is None or isinstance(genotype, Mapping):
        return Genotype.from_dict(genotype)
    logger.warning("determine_phenotype: unusable genotype %r; treating as empty", genotype)
    return Genotype()


def _as_profile(profile: Any) -> Optional[BreedGeneticProfile]:
    if profile is None or isinstance(profile, BreedGeneticProfile):
        return profile
    if isinstance(profile, Mapping):
        return BreedGeneticProfile.from_dict(profile)
    logger.warning("determine_phenotype: unusable breed profile %r; ignoring", profile)
    return None


def _as_age(age: Any) -> float:
    if isinstance(age, bool) or not isinstance(age, (int, float)):
        logger.warning("determine_phenotype: non-numeric age %r; using 0", age)
        return 0.0
    return float(age)


def determine_phenotype(
    genotype: Any,
    profile: Any = None,
    age: float = 0,
    *,
    rng: Optional[pyrandom.Random] = None,
    config: Optional[GeneticsConfig] = None,
) -> PhenotypeResult:
    """Resolve a horse's display colour and markings.

    Random draws happen in a fixed order: shade, Appaloosa sub-pattern,
    bloody shoulder, face marking, then legs LF, RF, LH, RH. The same
    genotype, profile, age and draw sequence always give the same result.

    Args:
        genotype: Genotype (or flat genotype mapping)
        profile: BreedGeneticProfile, raw profile mapping, or None
        age: Age in years (drives Gray and Appaloosa staging)
        rng: Random number generator
        config: Optional engine configuration

    Returns:
        PhenotypeResult
    """
    rng = require_rng_param(rng, "determine_phenotype")
    genotype = _as_genotype(genotype)
    profile = _as_profile(profile)
    age = _as_age(age)

    coat = express_coat(genotype, profile, age, rng=rng, config=config)
    markings = resolve_markings(profile.marking_bias if profile else None, coat, rng)
    display = render_display_color(coat)

    logger.debug("Resolved phenotype %r (shade %s, key %s)", display, coat.shade, coat.shade_key)
    return PhenotypeResult(
        final_display_color=display,
        phenotypic_markings=markings,
        determined_shade=coat.shade or DEFAULT_SHADE,
        shade_key=coat.shade_key,
        coat=coat,
    )
