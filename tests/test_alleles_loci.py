"""Tests for allele pairs and the locus dominance catalogue."""

import pytest

from equine.exceptions import GeneticsError, InvalidAllelePairError
from equine.genetics.alleles import AllelePair, canonical_pair_set, canonical_pair_text
from equine.genetics.loci import LOCUS_SPECS, Dominance, allele_rank, get_locus_spec, heuristic_rank, order_alleles


class TestDominanceOrdering:
    @pytest.mark.parametrize(
        "locus,a,b,expected",
        [
            ("E_Extension", "e", "E", ("E", "e")),
            ("Cr_Cream", "n", "Cr", ("Cr", "n")),
            ("D_Dun", "nd2", "D", ("D", "nd2")),
            ("D_Dun", "nd2", "nd1", ("nd1", "nd2")),
            ("W_DominantWhite", "w", "W20", ("W20", "w")),
            ("SW_SplashWhite", "n", "SW3", ("SW3", "n")),
            ("MFSD12_Mushroom", "N", "Mu", ("Mu", "N")),
        ],
    )
    def test_dominant_first(self, locus, a, b, expected):
        assert order_alleles(a, b, locus) == expected
        assert order_alleles(b, a, locus) == expected

    def test_equal_rank_falls_back_to_lexicographic(self):
        assert order_alleles("W5", "W13", "W_DominantWhite") == ("W13", "W5")

    def test_unknown_locus_uses_symbol_sets(self):
        assert heuristic_rank("cr") is Dominance.RECESSIVE
        assert heuristic_rank("Cr") is Dominance.DOMINANT
        assert order_alleles("to", "To") == ("To", "to")

    def test_unknown_symbol_at_known_locus_uses_heuristic(self):
        assert allele_rank("E_Extension", "n") is Dominance.RECESSIVE
        assert allele_rank("E_Extension", "Zz") is Dominance.INTERMEDIATE

    def test_catalogue_covers_breed_loci(self):
        for locus in ("E_Extension", "A_Agouti", "Cr_Cream", "D_Dun", "CH_Champagne", "Z_Silver",
                      "PRL_Pearl", "G_Gray", "Rn_Roan", "W_DominantWhite", "TO_Tobiano",
                      "O_FrameOvero", "SB1_Sabino1", "SW_SplashWhite", "EDXW",
                      "LP_LeopardComplex", "PATN1_Pattern1", "MFSD12_Mushroom"):
            assert locus in LOCUS_SPECS
        assert get_locus_spec("W_DominantWhite").accepts("W39")
        assert get_locus_spec("nope") is None


class TestAllelePair:
    def test_parse_is_canonical(self):
        assert AllelePair.parse("n/Cr", "Cr_Cream") == AllelePair.parse("Cr/n", "Cr_Cream")
        assert str(AllelePair.parse("n/Cr", "Cr_Cream")) == "Cr/n"

    @pytest.mark.parametrize("text", ["Cr", "Cr/n/n", "/n", "Cr/", "", 5, None])
    def test_parse_rejects_malformed(self, text):
        with pytest.raises(InvalidAllelePairError):
            AllelePair.parse(text)

    def test_error_hierarchy(self):
        assert issubclass(InvalidAllelePairError, GeneticsError)
        assert issubclass(InvalidAllelePairError, ValueError)

    def test_try_parse_returns_none(self):
        assert AllelePair.try_parse("garbage") is None

    def test_zygosity(self):
        pair = AllelePair.parse("Cr/Cr", "Cr_Cream")
        assert pair.is_homozygous()
        assert pair.is_homozygous("Cr")
        assert pair.count("Cr") == 2
        het = AllelePair.parse("nd1/nd2", "D_Dun")
        assert het.is_heterozygous("nd2", "nd1")
        assert not het.is_homozygous()

    def test_pearl_matches_either_case(self):
        pair = AllelePair.parse("Prl/prl", "PRL_Pearl")
        assert pair.count("prl") == 2
        assert pair.is_homozygous("prl")

    def test_plain_recessive_matches_either_case(self):
        assert AllelePair.parse("N/N", "MFSD12_Mushroom").is_homozygous("n")

    def test_matching_prefix_is_distinct(self):
        assert AllelePair.parse("SW1/SW1").matching("SW") == ("SW1",)
        assert AllelePair.parse("SW2/SW1", "SW_SplashWhite").matching("SW") == ("SW1", "SW2")


class TestCanonicalHelpers:
    def test_canonical_pair_text(self):
        assert canonical_pair_text("n/Cr", "Cr_Cream") == "Cr/n"
        assert canonical_pair_text("bad") is None

    def test_canonical_pair_set_dedupes_and_drops(self):
        assert canonical_pair_set(["n/Cr", "Cr/n", "bad", "n/n"], "Cr_Cream") == ("Cr/n", "n/n")
