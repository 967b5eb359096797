"""RNG utilities for deterministic genetics.

Every generative function in the engine receives its random source as an
explicit argument. These helpers fail loudly when one is missing rather
than silently creating an unseeded fallback, so replayed draw sequences in
tests stay exact.
"""

import random
from typing import Optional


class MissingRNGError(RuntimeError):
    """Raised when an RNG is required but was not supplied.

    This indicates a bug in the calling code: the breeding and store
    workflows must hand their RNG down to every engine call.
    """
    pass


def require_rng_param(rng: Optional[random.Random], context: str) -> random.Random:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Args:
        rng: The RNG that should have been provided
        context: Description of where this is called from (for error messages)

    Returns:
        The validated RNG

    Raises:
        MissingRNGError: If rng is None

    Example:
        def generate_genotype(profile, *, rng=None):
            rng = require_rng_param(rng, "generate_genotype")
    """
    if rng is None:
        raise MissingRNGError(
            f"RNG required: {context}. Pass a random.Random instance explicitly."
        )
    return rng


def create_rng(seed: Optional[int] = None) -> random.Random:
    """Create a fresh RNG, seeded when *seed* is given.

    This is the one sanctioned place to construct a generator; callers
    create it once per workflow and pass it down.
    """
    return random.Random(seed)
