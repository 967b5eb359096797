"""Horse coat-colour genetics: generation, phenotype resolution and breeding."""

from equine.breeding import HorseGenetics, breed_foal, create_store_horse, refresh_phenotype
from equine.exceptions import BreedingInputError, EquineError

__all__ = [
    "HorseGenetics",
    "create_store_horse",
    "breed_foal",
    "refresh_phenotype",
    "EquineError",
    "BreedingInputError",
]
