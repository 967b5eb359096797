"""Allele pair value type.

An ``AllelePair`` is the two symbols an individual carries at one locus.
Pairs are unordered biologically; the type stores them in canonical order
(more dominant first, see ``equine.genetics.loci``) so ``"n/Cr"`` and
``"Cr/n"`` compare equal and serialize identically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from equine.exceptions import InvalidAllelePairError
from equine.genetics.loci import order_alleles

PAIR_SEPARATOR = "/"

# Breed data spells Pearl both "prl" and "Prl", and the plain recessive both "n" and "N"
_CASE_INSENSITIVE_SYMBOLS = frozenset({"prl", "n"})


def _symbols_match(symbol: str, wanted: str) -> bool:
    if wanted.lower() in _CASE_INSENSITIVE_SYMBOLS:
        return symbol.lower() == wanted.lower()
    return symbol == wanted


@dataclass(frozen=True)
class AllelePair:
    """Two allele symbols at one locus, in canonical order.

    Attributes:
        first: The more dominant symbol
        second: The other symbol
    """

    first: str
    second: str

    @classmethod
    def of(cls, allele1: str, allele2: str, locus: Optional[str] = None) -> "AllelePair":
        """Build a canonically ordered pair from two symbols in any order."""
        for symbol in (allele1, allele2):
            if not isinstance(symbol, str) or not symbol.strip() or PAIR_SEPARATOR in symbol:
                raise InvalidAllelePairError(f"Invalid allele symbol: {symbol!r}")
        first, second = order_alleles(allele1.strip(), allele2.strip(), locus)
        return cls(first, second)

    @classmethod
    def parse(cls, text: str, locus: Optional[str] = None) -> "AllelePair":
        """Parse ``"A/a"`` into a canonical pair.

        Raises:
            InvalidAllelePairError: If *text* is not two non-empty symbols
                separated by a single ``/``.
        """
        if not isinstance(text, str):
            raise InvalidAllelePairError(f"Allele pair must be a string, got {type(text).__name__}")
        parts = text.split(PAIR_SEPARATOR)
        if len(parts) != 2:
            raise InvalidAllelePairError(f"Allele pair must look like 'A/a', got {text!r}")
        return cls.of(parts[0], parts[1], locus)

    @classmethod
    def try_parse(cls, text: object, locus: Optional[str] = None) -> Optional["AllelePair"]:
        """Parse *text*, returning None instead of raising on malformed input."""
        try:
            return cls.parse(text, locus)  # type: ignore[arg-type]
        except InvalidAllelePairError:
            return None

    @property
    def alleles(self) -> Tuple[str, str]:
        return (self.first, self.second)

    def has(self, symbol: str) -> bool:
        """True if either allele is *symbol*."""
        return any(_symbols_match(a, symbol) for a in self.alleles)

    def count(self, symbol: str) -> int:
        return sum(1 for a in self.alleles if _symbols_match(a, symbol))

    def is_homozygous(self, symbol: Optional[str] = None) -> bool:
        """True if both alleles are the same (and equal *symbol* when given)."""
        if symbol is None:
            return self.first == self.second
        return self.count(symbol) == 2

    def is_heterozygous(self, symbol1: str, symbol2: str) -> bool:
        """True if the pair is exactly one *symbol1* and one *symbol2*."""
        a, b = self.alleles
        return (_symbols_match(a, symbol1) and _symbols_match(b, symbol2)) or (
            _symbols_match(a, symbol2) and _symbols_match(b, symbol1)
        )

    def matching(self, prefix: str) -> Tuple[str, ...]:
        """Distinct alleles starting with *prefix*, in pair order."""
        seen = []
        for allele in self.alleles:
            if allele.startswith(prefix) and allele not in seen:
                seen.append(allele)
        return tuple(seen)

    def __str__(self) -> str:
        return f"{self.first}{PAIR_SEPARATOR}{self.second}"


def canonical_pair_text(text: object, locus: Optional[str] = None) -> Optional[str]:
    """Canonical string form of *text*, or None if it does not parse."""
    pair = AllelePair.try_parse(text, locus)
    return str(pair) if pair is not None else None


def canonical_pair_set(texts: Iterable[object], locus: Optional[str] = None) -> Tuple[str, ...]:
    """Canonicalize a list of pair strings, dropping unparsable entries, keeping order."""
    out = []
    for text in texts:
        canonical = canonical_pair_text(text, locus)
        if canonical is not None and canonical not in out:
            out.append(canonical)
    return tuple(out)
