"""Locus catalogue: allele alphabets and explicit dominance ranks.

Each locus the colour taxonomy knows about is declared here with the
symbols it accepts and how dominant each symbol is. Canonical pair
ordering reads these ranks instead of guessing from symbol spelling; the
fixed symbol sets below are only consulted for symbols a locus does not
declare (new breeds occasionally carry alleles ahead of the catalogue).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterable, Optional, Tuple


class Dominance(IntEnum):
    """Ordering rank of an allele within a pair (higher is written first)."""

    RECESSIVE = 0
    INTERMEDIATE = 1
    DOMINANT = 2


# Symbol-spelling heuristics for alleles the catalogue does not declare
RECESSIVE_SYMBOLS = frozenset(
    {"n", "w", "patn1", "nd1", "nd2", "lp", "g", "rn", "to", "o", "sb1", "mu",
     "e", "a", "ch", "cr", "z", "prl", "d"}
)
DOMINANT_SYMBOLS = frozenset({"Ch", "Cr", "Z", "Prl", "D", "Mu", "Lp", "Rn", "To", "O", "Sb1"})


def heuristic_rank(symbol: str) -> Dominance:
    """Rank an undeclared symbol from its spelling."""
    if symbol in DOMINANT_SYMBOLS:
        return Dominance.DOMINANT
    if symbol in RECESSIVE_SYMBOLS:
        return Dominance.RECESSIVE
    return Dominance.INTERMEDIATE


@dataclass(frozen=True)
class LocusSpec:
    """Declarative description of one gene locus.

    Attributes:
        name: Locus key as it appears in genotypes and breed profiles
        ranks: Allele symbol -> dominance rank
        description: Human-readable gene name
    """

    name: str
    ranks: Dict[str, Dominance] = field(default_factory=dict)
    description: str = ""

    @property
    def alphabet(self) -> frozenset:
        return frozenset(self.ranks)

    def accepts(self, symbol: str) -> bool:
        return symbol in self.ranks

    def rank(self, symbol: str) -> Dominance:
        declared = self.ranks.get(symbol)
        return declared if declared is not None else heuristic_rank(symbol)


def _spec(name: str, description: str, dominant: Iterable[str], recessive: Iterable[str],
          intermediate: Iterable[str] = ()) -> LocusSpec:
    ranks: Dict[str, Dominance] = {}
    for symbol in recessive:
        ranks[symbol] = Dominance.RECESSIVE
    for symbol in intermediate:
        ranks[symbol] = Dominance.INTERMEDIATE
    for symbol in dominant:
        ranks[symbol] = Dominance.DOMINANT
    return LocusSpec(name=name, ranks=ranks, description=description)


_NUMBERED_W = tuple(f"W{i}" for i in range(1, 40))
_NUMBERED_SW = tuple(f"SW{i}" for i in range(1, 11))
_NUMBERED_EDXW = ("EDXW1", "EDXW2", "EDXW3")

LOCUS_SPECS: Dict[str, LocusSpec] = {
    spec.name: spec
    for spec in (
        _spec("E_Extension", "Extension (red/black pigment)", ["E"], ["e"]),
        _spec("A_Agouti", "Agouti (black pigment distribution)", ["A"], ["a"]),
        _spec("Cr_Cream", "Cream dilution", ["Cr"], ["n", "N"]),
        _spec("D_Dun", "Dun dilution", ["D"], ["nd2", "n", "N"], ["nd1"]),
        _spec("CH_Champagne", "Champagne dilution", ["Ch"], ["n", "N", "ch"]),
        _spec("Z_Silver", "Silver dilution", ["Z"], ["n", "N", "z"]),
        _spec("PRL_Pearl", "Pearl dilution (Cr written here for compound carriers)", ["Prl", "prl", "Cr"], ["n", "N"]),
        _spec("G_Gray", "Progressive graying", ["G"], ["g"]),
        _spec("W_DominantWhite", "Dominant White series", _NUMBERED_W, ["w"]),
        _spec("TO_Tobiano", "Tobiano spotting", ["TO", "To"], ["to"]),
        _spec("O_FrameOvero", "Frame Overo spotting", ["O"], ["n", "N", "o"]),
        _spec("SB1_Sabino1", "Sabino-1 spotting", ["SB1", "Sb1"], ["n", "N", "sb1"]),
        _spec("SW_SplashWhite", "Splash White series", _NUMBERED_SW, ["n", "N"]),
        _spec("EDXW", "Eden White series", _NUMBERED_EDXW, ["n", "N"]),
        _spec("LP_LeopardComplex", "Leopard Complex", ["LP", "Lp"], ["lp"]),
        _spec("PATN1_Pattern1", "Pattern-1 leopard modifier", ["PATN1"], ["patn1", "n", "N"]),
        _spec("MFSD12_Mushroom", "Mushroom dilution", ["Mu"], ["N", "n", "mu"]),
        _spec("Rn_Roan", "Classic roan", ["Rn"], ["rn", "n", "N"]),
        _spec("BR1_Brindle1", "Brindle-1 (X-linked)", ["BR1"], ["N", "n", "Y"]),
    )
}


def get_locus_spec(locus: Optional[str]) -> Optional[LocusSpec]:
    """Return the catalogue entry for *locus*, or None for unknown loci."""
    if locus is None:
        return None
    return LOCUS_SPECS.get(locus)


def allele_rank(locus: Optional[str], symbol: str) -> Dominance:
    """Dominance rank of *symbol* at *locus*, falling back to spelling heuristics."""
    spec = get_locus_spec(locus)
    if spec is not None:
        return spec.rank(symbol)
    return heuristic_rank(symbol)


def order_alleles(first: str, second: str, locus: Optional[str] = None) -> Tuple[str, str]:
    """Return the two symbols in canonical order: more dominant first.

    Equal ranks fall back to lexicographic order so the result never
    depends on which parent contributed which allele.
    """
    rank_first = allele_rank(locus, first)
    rank_second = allele_rank(locus, second)
    if rank_first != rank_second:
        return (first, second) if rank_first > rank_second else (second, first)
    return (first, second) if first <= second else (second, first)
