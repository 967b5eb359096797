"""Store-horse creation and foal breeding workflows.

These functions compose the engine for the two places horses come into
being: bought from the store (genotype generated from the breed profile)
and born (genotype inherited from sire and dam). Both resolve the
phenotype immediately; ``refresh_phenotype`` re-derives it later as the
horse ages.
"""

from __future__ import annotations

import logging
import random as pyrandom
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional

from equine.config.engine_config import GeneticsConfig
from equine.exceptions import BreedingInputError
from equine.genetics.generator import generate_genotype
from equine.genetics.genotype import Genotype
from equine.genetics.inheritance import calculate_foal_genotype
from equine.genetics.phenotype import PhenotypeResult, determine_phenotype
from equine.genetics.profile import BreedGeneticProfile, coerce_profile
from equine.schemas import BreedRecord, HorseRecord
from equine.util.rng import require_rng_param

logger = logging.getLogger(__name__)


@dataclass
class HorseGenetics:
    """Genotype and resolved phenotype of one horse at a given age."""

    genotype: Genotype
    phenotype: Optional[PhenotypeResult]
    age: float = 0
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "age": self.age,
            "genetics": self.genotype.to_dict(),
            **(self.phenotype.to_dict() if self.phenotype is not None else {}),
        }

    def to_record(self, *, breed: Optional[str] = None) -> HorseRecord:
        return HorseRecord.from_engine(self.genotype, self.phenotype, age=self.age, name=self.name, breed=breed)


def _profile_of(profile: Any) -> Optional[BreedGeneticProfile]:
    if isinstance(profile, BreedRecord):
        return profile.to_profile()
    return coerce_profile(profile)


def _parent_genotype(parent: Any, role: str) -> Genotype:
    if parent is None:
        raise BreedingInputError(f"Cannot breed: {role} is missing")
    if isinstance(parent, HorseGenetics):
        genotype = parent.genotype
    elif isinstance(parent, HorseRecord):
        genotype = parent.to_genotype()
    elif isinstance(parent, Genotype):
        genotype = parent
    elif isinstance(parent, Mapping):
        genotype = Genotype.from_dict(parent.get("genetics", parent))
    else:
        raise BreedingInputError(f"Cannot breed: {role} has unsupported type {type(parent).__name__}")
    if not genotype:
        raise BreedingInputError(f"Cannot breed: {role} has no genetics")
    return genotype


def create_store_horse(
    profile: Any,
    *,
    rng: Optional[pyrandom.Random] = None,
    age: float = 0,
    name: Optional[str] = None,
    config: Optional[GeneticsConfig] = None,
) -> HorseGenetics:
    """Generate a fresh horse from its breed profile and resolve its appearance."""
    rng = require_rng_param(rng, "create_store_horse")
    breed_profile = _profile_of(profile)
    genotype = generate_genotype(breed_profile, rng=rng)
    phenotype = determine_phenotype(genotype, breed_profile, age, rng=rng, config=config)
    logger.info("Created store horse %s: %s", name or "<unnamed>", phenotype.final_display_color)
    return HorseGenetics(genotype=genotype, phenotype=phenotype, age=age, name=name)


def breed_foal(
    sire: Any,
    dam: Any,
    foal_profile: Any,
    *,
    rng: Optional[pyrandom.Random] = None,
    name: Optional[str] = None,
    config: Optional[GeneticsConfig] = None,
) -> HorseGenetics:
    """Breed a newborn foal from two parents.

    Args:
        sire: HorseGenetics, HorseRecord, Genotype or flat genotype mapping
        dam: Same as ``sire``
        foal_profile: The foal breed's profile (BreedRecord, profile or mapping)
        rng: Random number generator
        name: Optional foal name
        config: Optional engine configuration

    Raises:
        BreedingInputError: If a parent or the profile is missing, or a
            parent carries no genetics. Raised before any draw is taken.
    """
    sire_genotype = _parent_genotype(sire, "sire")
    dam_genotype = _parent_genotype(dam, "dam")
    if foal_profile is None:
        raise BreedingInputError("Cannot breed: foal breed profile is missing")
    rng = require_rng_param(rng, "breed_foal")
    profile = _profile_of(foal_profile)

    genotype = calculate_foal_genotype(sire_genotype, dam_genotype, profile, rng=rng, config=config)
    phenotype = determine_phenotype(genotype, profile, 0, rng=rng, config=config)
    logger.info("Foal %s born: %s", name or "<unnamed>", phenotype.final_display_color)
    return HorseGenetics(genotype=genotype, phenotype=phenotype, age=0, name=name)


def refresh_phenotype(
    genetics: HorseGenetics,
    profile: Any,
    *,
    age: float,
    rng: Optional[pyrandom.Random] = None,
    config: Optional[GeneticsConfig] = None,
) -> HorseGenetics:
    """Re-derive the phenotype at a new age; the genotype is unchanged."""
    rng = require_rng_param(rng, "refresh_phenotype")
    phenotype = determine_phenotype(genetics.genotype, _profile_of(profile), age, rng=rng, config=config)
    previous = genetics.phenotype.final_display_color if genetics.phenotype is not None else None
    if phenotype.final_display_color != previous:
        logger.debug(
            "Phenotype of %s changed at age %s: %s -> %s",
            genetics.name or "<unnamed>",
            age,
            previous,
            phenotype.final_display_color,
        )
    return HorseGenetics(genotype=genetics.genotype, phenotype=phenotype, age=age, name=genetics.name)
