"""Mendelian-style inheritance of coat-colour genotypes.

A foal receives one allele from each parent at every inherited locus. The
foal's breed profile constrains the result: a combined pair that the breed
does not allow (or explicitly forbids) is discarded and redrawn, up to a
bounded number of attempts, after which a profile-approved fallback pair
is used.

The inheritance system does NOT model linkage or chromosome positions;
each locus is drawn independently.
"""

from __future__ import annotations

import logging
import random as pyrandom
from typing import Any, Dict, Optional

from equine.config.engine_config import DEFAULT_CONFIG, GeneticsConfig
from equine.config.genetics import BOOLEAN_MODIFIERS, MODIFIER_PARENT_COIN, RECESSIVE_FALLBACK_PAIRS
from equine.exceptions import BreedingInputError
from equine.genetics.alleles import AllelePair
from equine.genetics.genotype import Genotype
from equine.genetics.profile import BreedGeneticProfile, coerce_profile
from equine.genetics.weighted import NO_SELECTION, select_weighted
from equine.util.rng import require_rng_param

logger = logging.getLogger(__name__)


def _coerce_genotype(genotype: Any) -> Optional[Genotype]:
    if genotype is None or isinstance(genotype, Genotype):
        return genotype
    return Genotype.from_dict(genotype)


def pick_parent_allele(pair: AllelePair, rng: pyrandom.Random) -> str:
    """Pass one of the parent's two alleles on, uniformly at random."""
    return pair.alleles[rng.randrange(2)]


def combine_alleles(allele1: str, allele2: str, locus: Optional[str] = None) -> AllelePair:
    """Combine one allele from each parent into a canonically ordered pair."""
    return AllelePair.of(allele1, allele2, locus)


def _synthesize_pair(
    locus: str,
    profile: BreedGeneticProfile,
    rng: pyrandom.Random,
) -> Optional[AllelePair]:
    weights = profile.weights_for(locus)
    if not weights:
        return None
    label = select_weighted(weights, rng=rng)
    if label is NO_SELECTION:
        return None
    return AllelePair.try_parse(label, locus)


def _fallback_pair(locus: str, profile: BreedGeneticProfile) -> Optional[AllelePair]:
    allowed = profile.allowed_pairs(locus)
    if not allowed:
        logger.error(
            "No allowed pairs defined for %s in %s; locus omitted from foal. Review breed profile.",
            locus,
            profile.name or "foal profile",
        )
        return None

    fallback = next((p for p in allowed if p in RECESSIVE_FALLBACK_PAIRS), allowed[0])
    pair = AllelePair.parse(fallback, locus)
    if profile.is_disallowed(locus, pair):
        logger.error(
            "Fallback pair %s for %s is also disallowed in %s; locus omitted from foal. Review breed profile.",
            pair,
            locus,
            profile.name or "foal profile",
        )
        return None
    return pair


def inherit_locus(
    locus: str,
    sire_pair: AllelePair,
    dam_pair: AllelePair,
    profile: BreedGeneticProfile,
    *,
    rng: pyrandom.Random,
    max_attempts: int,
) -> Optional[AllelePair]:
    """Draw a foal pair for one locus, honouring the profile's constraints.

    Returns None when neither the draws nor the fallback yield a legal pair.
    """
    for _ in range(max_attempts):
        candidate = combine_alleles(
            pick_parent_allele(sire_pair, rng),
            pick_parent_allele(dam_pair, rng),
            locus,
        )
        if not profile.is_allowed(locus, candidate):
            continue
        if profile.is_disallowed(locus, candidate):
            continue
        return candidate

    logger.warning(
        "No valid pair for %s from %s x %s after %d attempts; using fallback",
        locus,
        sire_pair,
        dam_pair,
        max_attempts,
    )
    return _fallback_pair(locus, profile)


def _roll_prevalence(prevalence: Optional[float], rng: pyrandom.Random) -> bool:
    if prevalence is None:
        return False
    return rng.random() < prevalence


def inherit_modifier(
    sire_value: Optional[bool],
    dam_value: Optional[bool],
    prevalence: Optional[float],
    rng: pyrandom.Random,
) -> bool:
    """Inherit one boolean modifier.

    Both parents agree: the foal matches them. They disagree: a coin flip
    either passes the True value on or re-rolls against breed prevalence.
    Only one parent defined: coin flip between that parent's value and a
    prevalence roll. Neither defined: prevalence roll.
    """
    if sire_value is not None and dam_value is not None:
        if sire_value == dam_value:
            return sire_value
        if rng.random() < MODIFIER_PARENT_COIN:
            return True
        return _roll_prevalence(prevalence, rng)

    known = sire_value if sire_value is not None else dam_value
    if known is not None:
        if rng.random() < MODIFIER_PARENT_COIN:
            return known
        return _roll_prevalence(prevalence, rng)

    return _roll_prevalence(prevalence, rng)


def calculate_foal_genotype(
    sire: Any,
    dam: Any,
    foal_profile: Any,
    *,
    rng: Optional[pyrandom.Random] = None,
    config: Optional[GeneticsConfig] = None,
) -> Genotype:
    """Compute a foal's genotype from its parents and its breed profile.

    Args:
        sire: Sire Genotype (or flat genotype mapping)
        dam: Dam Genotype (or flat genotype mapping)
        foal_profile: The foal breed's BreedGeneticProfile (or raw mapping)
        rng: Random number generator
        config: Optional engine configuration

    Returns:
        The foal's Genotype

    Raises:
        BreedingInputError: If sire, dam, or foal profile is missing
    """
    if sire is None or dam is None or foal_profile is None:
        missing = [n for n, v in (("sire", sire), ("dam", dam), ("foal_profile", foal_profile)) if v is None]
        raise BreedingInputError(f"Cannot calculate foal genetics: missing {', '.join(missing)}")
    rng = require_rng_param(rng, "calculate_foal_genotype")
    config = config or DEFAULT_CONFIG
    sire_genotype = _coerce_genotype(sire)
    dam_genotype = _coerce_genotype(dam)
    profile = coerce_profile(foal_profile)

    if profile.allowed_alleles is not None:
        loci_to_inherit = list(profile.allowed_alleles)
    else:
        loci_to_inherit = list(sire_genotype.loci)

    loci: Dict[str, AllelePair] = {}
    for locus in loci_to_inherit:
        sire_pair = sire_genotype.pair(locus)
        dam_pair = dam_genotype.pair(locus)

        if sire_pair is None or dam_pair is None:
            synthesized = _synthesize_pair(locus, profile, rng)
            if synthesized is not None:
                loci[locus] = synthesized
            else:
                logger.debug("Locus %s missing on a parent and not synthesizable; omitted", locus)
            continue

        pair = inherit_locus(
            locus,
            sire_pair,
            dam_pair,
            profile,
            rng=rng,
            max_attempts=config.max_inheritance_attempts,
        )
        if pair is not None:
            loci[locus] = pair

    modifiers: Dict[str, bool] = {}
    for modifier in profile.boolean_modifiers_prevalence:
        if modifier not in BOOLEAN_MODIFIERS:
            continue
        modifiers[modifier] = inherit_modifier(
            sire_genotype.modifier(modifier),
            dam_genotype.modifier(modifier),
            profile.prevalence(modifier),
            rng,
        )

    foal = Genotype(loci=loci, modifiers=modifiers)
    logger.debug("Calculated foal genotype %s", foal.to_dict())
    return foal
