"""Coat-colour genetics engine for horses.

This package provides:

- Weighted selection over labelled outcomes (weighted)
- Allele pairs with per-locus dominance ordering (loci, alleles)
- Genotypes and breed genetic profiles (genotype, profile)
- Genotype generation for store-bought horses (generator)
- Phenotype resolution: display colour and markings (phenotype)
- Mendelian-style foal inheritance (inheritance)

All generative functions take an explicit ``rng`` keyword argument.
"""

# Re-export main classes for package convenience
from equine.genetics.alleles import AllelePair
from equine.genetics.coat import BaseColor, CoatState, render_display_color
from equine.genetics.generator import generate_genotype
from equine.genetics.genotype import Genotype
from equine.genetics.inheritance import calculate_foal_genotype, inherit_locus, inherit_modifier
from equine.genetics.loci import LOCUS_SPECS, Dominance, LocusSpec
from equine.genetics.markings import PhenotypicMarkings
from equine.genetics.phenotype import PhenotypeResult, determine_phenotype
from equine.genetics.profile import AdvancedMarkingsBias, BreedGeneticProfile, MarkingBias
from equine.genetics.weighted import NO_SELECTION, select_weighted

__all__ = [
    # Core types
    "AllelePair",
    "Genotype",
    "BreedGeneticProfile",
    "MarkingBias",
    "AdvancedMarkingsBias",
    # Locus catalogue
    "LOCUS_SPECS",
    "LocusSpec",
    "Dominance",
    # Selection
    "NO_SELECTION",
    "select_weighted",
    # Generation and inheritance
    "generate_genotype",
    "calculate_foal_genotype",
    "inherit_locus",
    "inherit_modifier",
    # Phenotype
    "BaseColor",
    "CoatState",
    "PhenotypeResult",
    "PhenotypicMarkings",
    "determine_phenotype",
    "render_display_color",
]
