"""Equine genetics exception hierarchy.

Centralised base classes so callers can catch engine failures narrowly
instead of reaching for bare ``except Exception`` blocks.
"""


class EquineError(Exception):
    """Root of all equine-genetics domain exceptions."""


class GeneticsError(EquineError):
    """Genotype parsing, generation, or inheritance failure."""


class InvalidAllelePairError(GeneticsError, ValueError):
    """An allele pair string could not be parsed (expected ``"A/a"``)."""


class ConfigurationError(EquineError):
    """Invalid or missing configuration."""


class BreedingInputError(EquineError, ValueError):
    """A breeding request is missing a sire, dam, or foal breed profile."""
