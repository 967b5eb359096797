"""Configuration package for the equine genetics engine.

Named constants live in ``equine.config.genetics``; ``GeneticsConfig`` in
``equine.config.engine_config`` bundles the tunable ones for callers that
want to override them per run.
"""

from equine.config.engine_config import GeneticsConfig

__all__ = ["GeneticsConfig"]
