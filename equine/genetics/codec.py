"""Genotype and phenotype serialization helpers.

This module is the persistence boundary for ``Genotype`` and
``PhenotypeResult``. The stored forms are flat JSON objects with sorted
keys so two equal genotypes always serialize to identical bytes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Union

import orjson

from equine.genetics.genotype import Genotype
from equine.genetics.phenotype import PhenotypeResult

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_DUMP_OPTIONS = orjson.OPT_SORT_KEYS


def genotype_to_dict(genotype: Genotype) -> Dict[str, Any]:
    """Flat form: locus -> ``"A/a"``, modifier -> bool."""
    return genotype.to_dict()


def genotype_from_dict(data: Any) -> Genotype:
    """Rebuild a genotype, dropping malformed entries (logged)."""
    if data is not None and not isinstance(data, dict):
        logger.warning("genotype_from_dict: expected an object, got %s", type(data).__name__)
        return Genotype()
    return Genotype.from_dict(data)


def dumps_genotype(genotype: Genotype) -> bytes:
    return orjson.dumps(genotype_to_dict(genotype), option=_DUMP_OPTIONS)


def loads_genotype(payload: Union[bytes, str]) -> Genotype:
    """Parse JSON produced by ``dumps_genotype``.

    Raises:
        orjson.JSONDecodeError: If *payload* is not valid JSON
    """
    return genotype_from_dict(orjson.loads(payload))


def phenotype_to_dict(result: PhenotypeResult) -> Dict[str, Any]:
    return result.to_dict()


def dumps_phenotype(result: PhenotypeResult) -> bytes:
    return orjson.dumps(phenotype_to_dict(result), option=_DUMP_OPTIONS)


def loads_phenotype(payload: Union[bytes, str]) -> PhenotypeResult:
    data = orjson.loads(payload)
    if not isinstance(data, dict):
        logger.warning("loads_phenotype: expected an object, got %s", type(data).__name__)
        data = {}
    return PhenotypeResult.from_dict(data)


def horse_genetics_to_dict(genotype: Genotype, phenotype: PhenotypeResult, age: float) -> Dict[str, Any]:
    """Combined record stored for one horse."""
    return {
        "schema_version": SCHEMA_VERSION,
        "age": age,
        "genotype": genotype_to_dict(genotype),
        "phenotype": phenotype_to_dict(phenotype),
    }


def dumps_horse_genetics(genotype: Genotype, phenotype: PhenotypeResult, age: float) -> bytes:
    return orjson.dumps(horse_genetics_to_dict(genotype, phenotype, age), option=_DUMP_OPTIONS)


def horse_genetics_from_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Inverse of ``horse_genetics_to_dict``; returns ``genotype``/``phenotype``/``age``."""
    schema_version = data.get("schema_version")
    if schema_version is not None and schema_version != SCHEMA_VERSION:
        logger.debug("Deserializing horse genetics schema_version=%s (expected %s)", schema_version, SCHEMA_VERSION)
    return {
        "genotype": genotype_from_dict(data.get("genotype")),
        "phenotype": PhenotypeResult.from_dict(data.get("phenotype") or {}),
        "age": data.get("age", 0),
    }
