"""Breed genetic profile: per-breed allele frequencies, legality and bias tables.

Profiles are read-only reference data owned by the breed record. The
engine never mutates them. ``BreedGeneticProfile.from_dict`` accepts the
raw JSON structure stored on breed records and degrades gracefully on
malformed sections (logged, replaced with empty defaults) so one bad
section never blocks horse creation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from equine.config.genetics import DEFAULT_MAX_LEGS_MARKED
from equine.genetics.alleles import AllelePair, canonical_pair_set
from equine.genetics.genotype import resolve_locus_name

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _mapping_section(data: Mapping[str, Any], key: str, *, context: str) -> Dict[str, Any]:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        logger.warning("%s: section %s is not a mapping (%r); using empty", context, key, section)
        return {}
    return dict(section)


def _multiplier(section: Mapping[str, Any], key: str, *, context: str) -> float:
    value = section.get(key)
    if value is None:
        return 1.0
    if not _is_number(value):
        logger.warning("%s: %s=%r is not numeric; using 1.0", context, key, value)
        return 1.0
    return float(value)


@dataclass(frozen=True)
class MarkingBias:
    """Face and leg marking probability tables.

    Attributes:
        face: Face marking -> weight
        legs_general_probability: Chance each leg is considered for a marking;
            None disables leg markings
        leg_specific_probabilities: Leg marking -> weight
        max_legs_marked: Cap on legs that end up with a real marking
    """

    face: Mapping[str, Any] = field(default_factory=dict)
    legs_general_probability: Optional[float] = None
    leg_specific_probabilities: Mapping[str, Any] = field(default_factory=dict)
    max_legs_marked: int = DEFAULT_MAX_LEGS_MARKED

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, context: str = "marking_bias") -> "MarkingBias":
        face = _mapping_section(data, "face", context=context)
        legs = _mapping_section(data, "leg_specific_probabilities", context=context)
        general = data.get("legs_general_probability")
        if general is not None and not _is_number(general):
            logger.warning("%s: legs_general_probability=%r is not numeric; legs disabled", context, general)
            general = None
        max_legs = data.get("max_legs_marked", DEFAULT_MAX_LEGS_MARKED)
        if not _is_number(max_legs):
            logger.warning("%s: max_legs_marked=%r is not numeric; using %d", context, max_legs, DEFAULT_MAX_LEGS_MARKED)
            max_legs = DEFAULT_MAX_LEGS_MARKED
        return cls(
            face=MappingProxyType(face),
            legs_general_probability=float(general) if general is not None else None,
            leg_specific_probabilities=MappingProxyType(legs),
            max_legs_marked=int(max_legs),
        )


@dataclass(frozen=True)
class AdvancedMarkingsBias:
    """Multipliers for rare cosmetic events."""

    snowflake_probability_multiplier: float = 1.0
    frost_probability_multiplier: float = 1.0
    bloody_shoulder_probability_multiplier: float = 1.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, context: str = "advanced_markings_bias") -> "AdvancedMarkingsBias":
        return cls(
            snowflake_probability_multiplier=_multiplier(data, "snowflake_probability_multiplier", context=context),
            frost_probability_multiplier=_multiplier(data, "frost_probability_multiplier", context=context),
            bloody_shoulder_probability_multiplier=_multiplier(
                data, "bloody_shoulder_probability_multiplier", context=context
            ),
        )


@dataclass(frozen=True)
class BreedGeneticProfile:
    """Per-breed genetics configuration.

    Attributes:
        name: Breed name (diagnostics only)
        allele_weights: Locus -> allele-pair label -> weight, used for generation
        disallowed_combinations: Locus -> forbidden pairs (canonical strings)
        allowed_alleles: Locus -> permitted pairs (canonical strings), or None
            when the breed places no restriction on foals
        boolean_modifiers_prevalence: Modifier -> probability in [0, 1]
        shade_bias: Shade key -> shade name -> weight
        marking_bias: Face/leg marking tables
        advanced_markings_bias: Rare cosmetic event multipliers
    """

    name: str = ""
    allele_weights: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    disallowed_combinations: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    allowed_alleles: Optional[Mapping[str, Tuple[str, ...]]] = None
    boolean_modifiers_prevalence: Mapping[str, Any] = field(default_factory=dict)
    shade_bias: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    marking_bias: Optional[MarkingBias] = None
    advanced_markings_bias: AdvancedMarkingsBias = field(default_factory=AdvancedMarkingsBias)

    # =========================================================================
    # Queries
    # =========================================================================

    def weights_for(self, locus: str) -> Optional[Mapping[str, Any]]:
        return self.allele_weights.get(locus)

    def allowed_pairs(self, locus: str) -> Optional[Tuple[str, ...]]:
        """Permitted pairs for *locus*, or None when unrestricted."""
        if self.allowed_alleles is None:
            return None
        return self.allowed_alleles.get(locus)

    def is_allowed(self, locus: str, pair: AllelePair) -> bool:
        allowed = self.allowed_pairs(locus)
        return allowed is None or str(pair) in allowed

    def is_disallowed(self, locus: str, pair: AllelePair) -> bool:
        return str(pair) in self.disallowed_combinations.get(locus, ())

    def prevalence(self, modifier: str) -> Optional[float]:
        """Valid prevalence for *modifier*, or None if missing or out of range."""
        value = self.boolean_modifiers_prevalence.get(modifier)
        if _is_number(value) and 0.0 <= value <= 1.0:
            return float(value)
        return None

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BreedGeneticProfile":
        """Build a profile from the raw JSON structure stored on breed records."""
        if not isinstance(data, Mapping):
            raise TypeError(f"breed genetic profile must be a mapping, got {type(data).__name__}")
        name = str(data.get("name") or "")
        context = f"profile {name!r}" if name else "profile"

        weights: Dict[str, Mapping[str, Any]] = {}
        for locus, table in _mapping_section(data, "allele_weights", context=context).items():
            if not isinstance(table, Mapping):
                logger.warning("%s: allele_weights[%s] is not a mapping; skipped", context, locus)
                continue
            weights[resolve_locus_name(locus)] = MappingProxyType(dict(table))

        disallowed = {
            resolve_locus_name(locus): canonical_pair_set(pairs, resolve_locus_name(locus))
            for locus, pairs in _mapping_section(data, "disallowed_combinations", context=context).items()
            if _is_pair_list(pairs, locus, context)
        }

        allowed: Optional[Dict[str, Tuple[str, ...]]] = None
        if data.get("allowed_alleles") is not None:
            allowed = {
                resolve_locus_name(locus): canonical_pair_set(pairs, resolve_locus_name(locus))
                for locus, pairs in _mapping_section(data, "allowed_alleles", context=context).items()
                if _is_pair_list(pairs, locus, context)
            }

        shade_bias: Dict[str, Mapping[str, Any]] = {}
        for key, table in _mapping_section(data, "shade_bias", context=context).items():
            if isinstance(table, Mapping):
                shade_bias[key] = MappingProxyType(dict(table))
            else:
                logger.warning("%s: shade_bias[%s] is not a mapping; skipped", context, key)

        marking_section = data.get("marking_bias")
        marking_bias = None
        if isinstance(marking_section, Mapping):
            marking_bias = MarkingBias.from_dict(marking_section, context=f"{context}.marking_bias")
        elif marking_section is not None:
            logger.warning("%s: marking_bias is not a mapping; markings disabled", context)

        advanced = AdvancedMarkingsBias.from_dict(
            _mapping_section(data, "advanced_markings_bias", context=context),
            context=f"{context}.advanced_markings_bias",
        )

        return cls(
            name=name,
            allele_weights=MappingProxyType(weights),
            disallowed_combinations=MappingProxyType(disallowed),
            allowed_alleles=MappingProxyType(allowed) if allowed is not None else None,
            boolean_modifiers_prevalence=MappingProxyType(
                _mapping_section(data, "boolean_modifiers_prevalence", context=context)
            ),
            shade_bias=MappingProxyType(shade_bias),
            marking_bias=marking_bias,
            advanced_markings_bias=advanced,
        )


def _is_pair_list(pairs: Any, locus: str, context: str) -> bool:
    if isinstance(pairs, (list, tuple)):
        return True
    logger.warning("%s: pair list for %s is not a list (%r); skipped", context, locus, pairs)
    return False


def coerce_profile(profile: Any) -> Optional[BreedGeneticProfile]:
    """Accept either a built profile, a raw mapping, or None."""
    if profile is None or isinstance(profile, BreedGeneticProfile):
        return profile
    return BreedGeneticProfile.from_dict(profile)
