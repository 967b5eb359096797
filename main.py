"""Main entry point for the horse coat-colour genetics engine.

This module provides command-line access to the engine:
- generate: create store horses from a breed profile
- breed: breed a foal from two parent genotypes
- phenotype: resolve a stored genotype at a given age
"""

import argparse
import logging
import sys
from pathlib import Path

import orjson

from equine.breeding import breed_foal, create_store_horse
from equine.exceptions import EquineError
from equine.genetics.genotype import Genotype
from equine.genetics.phenotype import determine_phenotype
from equine.genetics.profile import BreedGeneticProfile
from equine.util.rng import create_rng

logger = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 2


class InputFileError(EquineError):
    """An input file could not be read or parsed."""


def load_json(path: str) -> dict:
    try:
        data = orjson.loads(Path(path).read_bytes())
    except OSError as e:
        raise InputFileError(f"Cannot read {path}: {e}") from e
    except orjson.JSONDecodeError as e:
        raise InputFileError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise InputFileError(f"{path}: expected a JSON object")
    return data


def load_profile(path: str) -> BreedGeneticProfile:
    data = load_json(path)
    data.setdefault("name", Path(path).stem)
    return BreedGeneticProfile.from_dict(data)


def load_genotype(path: str) -> Genotype:
    data = load_json(path)
    genetics = data.get("genetics", data)
    if not isinstance(genetics, dict):
        raise InputFileError(f"{path}: genetics must be a JSON object, got {type(genetics).__name__}")
    return Genotype.from_dict(genetics)


def emit(record: dict) -> None:
    sys.stdout.write(orjson.dumps(record, option=orjson.OPT_SORT_KEYS).decode("utf-8") + "\n")


def run_generate(args: argparse.Namespace) -> None:
    profile = load_profile(args.breed)
    rng = create_rng(args.seed)
    for index in range(args.count):
        horse = create_store_horse(profile, rng=rng, age=args.age, name=f"{profile.name} #{index + 1}")
        emit(horse.to_dict())


def run_breed(args: argparse.Namespace) -> None:
    profile = load_profile(args.breed)
    sire = load_genotype(args.sire)
    dam = load_genotype(args.dam)
    foal = breed_foal(sire, dam, profile, rng=create_rng(args.seed))
    emit(foal.to_dict())


def run_phenotype(args: argparse.Namespace) -> None:
    profile = load_profile(args.breed)
    genotype = load_genotype(args.genotype)
    result = determine_phenotype(genotype, profile, args.age, rng=create_rng(args.seed))
    emit({"age": args.age, "genetics": genotype.to_dict(), **result.to_dict()})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Horse coat-colour genetics engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Five store horses from the generic profile, reproducibly
  python main.py generate --breed data/breeds/generic.json --count 5 --seed 42

  # Breed a foal
  python main.py breed --breed data/breeds/thoroughbred.json --sire sire.json --dam dam.json

  # What does this horse look like at age 7?
  python main.py phenotype --breed data/breeds/generic.json --genotype horse.json --age 7
        """,
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Create store horses from a breed profile")
    generate.add_argument("--breed", required=True, metavar="PROFILE.json", help="Breed genetic profile")
    generate.add_argument("--age", type=float, default=0, help="Age in years (default: 0)")
    generate.add_argument("--count", type=int, default=1, help="Number of horses (default: 1)")
    generate.add_argument("--seed", type=int, default=None, help="Random seed (optional)")
    generate.set_defaults(handler=run_generate)

    breed = subparsers.add_parser("breed", help="Breed a foal from two parent genotypes")
    breed.add_argument("--breed", required=True, metavar="PROFILE.json", help="Foal breed genetic profile")
    breed.add_argument("--sire", required=True, metavar="GENOTYPE.json", help="Sire genotype or horse record")
    breed.add_argument("--dam", required=True, metavar="GENOTYPE.json", help="Dam genotype or horse record")
    breed.add_argument("--seed", type=int, default=None, help="Random seed (optional)")
    breed.set_defaults(handler=run_breed)

    phenotype = subparsers.add_parser("phenotype", help="Resolve a stored genotype at an age")
    phenotype.add_argument("--breed", required=True, metavar="PROFILE.json", help="Breed genetic profile")
    phenotype.add_argument("--genotype", required=True, metavar="GENOTYPE.json", help="Genotype or horse record")
    phenotype.add_argument("--age", type=float, required=True, help="Age in years")
    phenotype.add_argument("--seed", type=int, default=None, help="Random seed (optional)")
    phenotype.set_defaults(handler=run_phenotype)

    return parser


def main(argv=None) -> int:
    """Parse command-line arguments and run the chosen command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s:%(name)s:%(message)s",
    )

    try:
        args.handler(args)
    except (EquineError, TypeError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        sys.stderr.write(f"error: {e}\n")
        return EXIT_INPUT_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())
