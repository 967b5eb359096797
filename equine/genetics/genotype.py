"""Genotype: the complete (or partial) genetic makeup of one horse.

A genotype maps locus names to ``AllelePair`` values and boolean-modifier
names to flags. It is immutable once built; generation and inheritance
produce new genotypes rather than editing existing ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from equine.config.genetics import BOOLEAN_MODIFIERS, LOCUS_ALIASES
from equine.genetics.alleles import AllelePair
from equine.genetics.loci import get_locus_spec

logger = logging.getLogger(__name__)


def resolve_locus_name(name: str) -> str:
    """Map historical locus spellings onto engine names."""
    resolved = LOCUS_ALIASES.get(name, name)
    if resolved != name:
        logger.debug("Locus alias %s -> %s", name, resolved)
    return resolved


@dataclass(frozen=True)
class Genotype:
    """Represents a horse's coat-colour genotype.

    Attributes:
        loci: Locus name -> allele pair (unknown loci are simply absent)
        modifiers: Boolean modifier name -> flag
    """

    loci: Mapping[str, AllelePair] = field(default_factory=dict)
    modifiers: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "loci", MappingProxyType(dict(self.loci)))
        object.__setattr__(self, "modifiers", MappingProxyType(dict(self.modifiers)))

    # =========================================================================
    # Queries
    # =========================================================================

    def pair(self, locus: str) -> Optional[AllelePair]:
        return self.loci.get(locus)

    def has_allele(self, locus: str, symbol: str) -> bool:
        pair = self.loci.get(locus)
        return pair is not None and pair.has(symbol)

    def is_homozygous(self, locus: str, symbol: str) -> bool:
        pair = self.loci.get(locus)
        return pair is not None and pair.is_homozygous(symbol)

    def is_heterozygous(self, locus: str, symbol1: str, symbol2: str) -> bool:
        pair = self.loci.get(locus)
        return pair is not None and pair.is_heterozygous(symbol1, symbol2)

    def modifier(self, name: str) -> Optional[bool]:
        """Return the modifier flag, or None when the modifier is undefined."""
        return self.modifiers.get(name)

    def flag(self, name: str) -> bool:
        return self.modifiers.get(name) is True

    def __contains__(self, key: object) -> bool:
        return key in self.loci or key in self.modifiers

    def __bool__(self) -> bool:
        return bool(self.loci) or bool(self.modifiers)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Flat persisted form: locus -> ``"A/a"``, modifier -> bool."""
        out: Dict[str, Any] = {locus: str(pair) for locus, pair in self.loci.items()}
        out.update(self.modifiers)
        return out

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Genotype":
        """Build a genotype from the flat persisted form.

        Boolean values (and the known modifier names) become modifiers;
        everything else is parsed as an allele pair. Unparsable entries are
        logged and dropped rather than failing the whole record.
        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            logger.warning("Genotype expected a mapping, got %s; treated as empty", type(data).__name__)
            return cls()
        loci: Dict[str, AllelePair] = {}
        modifiers: Dict[str, bool] = {}
        for raw_key, value in data.items():
            key = resolve_locus_name(str(raw_key))
            if isinstance(value, bool) or key in BOOLEAN_MODIFIERS:
                if isinstance(value, bool):
                    modifiers[key] = value
                else:
                    logger.warning("Genotype modifier %s has non-boolean value %r; ignored", key, value)
                continue
            pair = AllelePair.try_parse(value, key)
            if pair is None:
                logger.warning("Genotype locus %s has malformed allele pair %r; ignored", key, value)
                continue
            loci[key] = pair
        return cls(loci=loci, modifiers=modifiers)

    def validate(self) -> Dict[str, Any]:
        """Check allele symbols against the locus catalogue; returns a dict with any issues."""
        issues: List[str] = []
        for locus, pair in self.loci.items():
            spec = get_locus_spec(locus)
            if spec is None:
                continue
            for symbol in pair.alleles:
                if not spec.accepts(symbol):
                    issues.append(f"genotype.{locus}: allele {symbol!r} not in {sorted(spec.alphabet)}")
        for name in self.modifiers:
            if name not in BOOLEAN_MODIFIERS:
                issues.append(f"genotype.{name}: unknown boolean modifier")
        return {"ok": not issues, "issues": issues}

    def assert_valid(self) -> None:
        """Raise ValueError if validation finds problems (debug aid)."""
        result = self.validate()
        if result["ok"]:
            return
        issues = "\n".join(result["issues"])
        raise ValueError(f"Invalid genotype:\n{issues}")
