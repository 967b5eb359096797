"""Data models for the records the genetics engine reads and writes.

Breed and horse records are owned by collaborators (breed management,
horse persistence). These models validate them at the boundary and
convert to and from the engine's own types.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator

from equine.genetics.genotype import Genotype
from equine.genetics.phenotype import PhenotypeResult
from equine.genetics.profile import BreedGeneticProfile


class BreedRecord(BaseModel):
    """A breed and its raw genetic profile."""

    id: Optional[int] = None
    name: str
    genetic_profile: Dict[str, Any] = Field(default_factory=dict)

    def to_profile(self) -> BreedGeneticProfile:
        data = dict(self.genetic_profile)
        data.setdefault("name", self.name)
        return BreedGeneticProfile.from_dict(data)


class PhenotypeData(BaseModel):
    """Persisted phenotype fields of a horse."""

    final_display_color: str
    phenotypic_markings: Dict[str, Any] = Field(default_factory=dict)
    determined_shade: str = "standard"


class HorseRecord(BaseModel):
    """A horse as stored by the persistence layer."""

    id: Optional[int] = None
    name: Optional[str] = None
    breed: Optional[str] = None
    age: float = Field(default=0, ge=0)
    genetics: Dict[str, Union[bool, str]] = Field(default_factory=dict)
    phenotype: Optional[PhenotypeData] = None

    @field_validator("genetics")
    @classmethod
    def _check_pairs(cls, value: Dict[str, Union[bool, str]]) -> Dict[str, Union[bool, str]]:
        for key, entry in value.items():
            if isinstance(entry, str) and entry.count("/") != 1:
                raise ValueError(f"genetics.{key}: allele pair must look like 'A/a', got {entry!r}")
        return value

    def to_genotype(self) -> Genotype:
        return Genotype.from_dict(self.genetics)

    @classmethod
    def from_engine(
        cls,
        genotype: Genotype,
        phenotype: Optional[PhenotypeResult] = None,
        *,
        age: float = 0,
        name: Optional[str] = None,
        breed: Optional[str] = None,
    ) -> "HorseRecord":
        return cls(
            name=name,
            breed=breed,
            age=age,
            genetics=genotype.to_dict(),
            phenotype=PhenotypeData(**phenotype.to_dict()) if phenotype is not None else None,
        )


class BreedingRequest(BaseModel):
    """Inputs to one breeding: both parents and the foal's breed."""

    sire: HorseRecord
    dam: HorseRecord
    foal_breed: BreedRecord
    seed: Optional[int] = None
