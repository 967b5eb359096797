"""Genotype generation for freshly created (store-bought) horses."""

from __future__ import annotations

import logging
import random as pyrandom
from typing import Any, Dict, Optional

from equine.genetics.alleles import AllelePair
from equine.genetics.genotype import Genotype
from equine.genetics.profile import coerce_profile
from equine.genetics.weighted import NO_SELECTION, select_weighted
from equine.util.rng import require_rng_param

logger = logging.getLogger(__name__)


def generate_genotype(
    profile: Any,
    *,
    rng: Optional[pyrandom.Random] = None,
) -> Genotype:
    """Generate a complete starting genotype from a breed's genetic profile.

    Each locus in ``allele_weights`` gets one weighted draw. A draw that
    lands on a pair the breed disallows is dropped rather than re-rolled:
    the locus is left absent and a warning points at the profile, whose
    weights should never make such a pair reachable.

    Each modifier in ``boolean_modifiers_prevalence`` is set by one uniform
    draw against its prevalence; an invalid prevalence defaults the
    modifier to False without consuming a draw.

    Args:
        profile: BreedGeneticProfile, raw profile mapping, or None
        rng: Random number generator

    Returns:
        The generated Genotype (empty if no profile was given)
    """
    rng = require_rng_param(rng, "generate_genotype")
    profile = coerce_profile(profile)
    if profile is None:
        logger.warning("generate_genotype: no breed genetic profile; returning empty genotype")
        return Genotype()

    loci: Dict[str, AllelePair] = {}
    for locus, weights in profile.allele_weights.items():
        label = select_weighted(weights, rng=rng)
        if label is NO_SELECTION:
            logger.warning("Could not determine allele pair for %s; locus omitted", locus)
            continue
        pair = AllelePair.try_parse(label, locus)
        if pair is None:
            logger.warning("Weighted label %r for %s is not an allele pair; locus omitted", label, locus)
            continue
        if profile.is_disallowed(locus, pair):
            logger.warning(
                "Generated disallowed pair %s for %s in %s; locus omitted",
                pair,
                locus,
                profile.name or "profile",
            )
            continue
        loci[locus] = pair

    modifiers: Dict[str, bool] = {}
    for modifier, raw in profile.boolean_modifiers_prevalence.items():
        prevalence = profile.prevalence(modifier)
        if prevalence is None:
            logger.warning("Invalid prevalence %r for modifier %s; defaulting to False", raw, modifier)
            modifiers[modifier] = False
            continue
        modifiers[modifier] = rng.random() < prevalence

    genotype = Genotype(loci=loci, modifiers=modifiers)
    logger.debug("Generated genotype %s", genotype.to_dict())
    return genotype
