"""Structured coat state and its rendering to display strings.

The phenotype cascade records what each gene did as explicit tags on a
``CoatState`` (base colour, cream stage, dun stage, ...). Display names
and shade lookup keys are derived from those tags here, in one place, so
later cascade stages never need to pattern-match on earlier output text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Tuple

from equine.config.genetics import UNDEFINED_PHENOTYPE

logger = logging.getLogger(__name__)


class BaseColor(str, Enum):
    CHESTNUT = "Chestnut"
    BAY = "Bay"
    BLACK = "Black"


class CreamStage(IntEnum):
    NONE = 0
    SINGLE = 1
    DOUBLE = 2


class DunStage(Enum):
    """Dun locus expression: real dun, or a non-dun primitive-marking variant."""

    NONE = "none"
    DUN = "dun"
    PRIMITIVE = "primitive"  # nd1/nd1
    FAINT_PRIMITIVE = "faint_primitive"  # nd1/nd2


class PearlStage(Enum):
    NONE = "none"
    PEARL = "pearl"  # prl/prl without cream
    PEARL_CREAM = "pearl_cream"  # prl/n + Cr/n
    HOMOZYGOUS_PEARL_CREAM = "homozygous_pearl_cream"  # prl/prl + Cr/n
    DOUBLE_CREAM_PEARL = "double_cream_pearl"  # prl/prl + Cr/Cr


class RoanCategory(str, Enum):
    RED = "Red Roan"
    BAY = "Bay Roan"
    BLUE = "Blue Roan"


PRIMITIVE_DESCRIPTORS = {
    DunStage.PRIMITIVE: "(Non-Dun 1 - Primitive Markings)",
    DunStage.FAINT_PRIMITIVE: "(Non-Dun 2 - Faint Primitive Markings)",
}

# =============================================================================
# Naming tables
# =============================================================================

_CREAM_NAMES: Dict[Tuple[BaseColor, CreamStage], str] = {
    (BaseColor.CHESTNUT, CreamStage.NONE): "Chestnut",
    (BaseColor.CHESTNUT, CreamStage.SINGLE): "Palomino",
    (BaseColor.CHESTNUT, CreamStage.DOUBLE): "Cremello",
    (BaseColor.BAY, CreamStage.NONE): "Bay",
    (BaseColor.BAY, CreamStage.SINGLE): "Buckskin",
    (BaseColor.BAY, CreamStage.DOUBLE): "Perlino",
    (BaseColor.BLACK, CreamStage.NONE): "Black",
    (BaseColor.BLACK, CreamStage.SINGLE): "Smoky Black",
    (BaseColor.BLACK, CreamStage.DOUBLE): "Smoky Cream",
}

_DUN_NAMES = {
    "Black": "Grulla",
    "Smoky Black": "Grulla",
    "Bay": "Bay Dun",
    "Buckskin": "Buckskin Dun",
    "Chestnut": "Red Dun",
    "Mushroom Chestnut": "Red Dun",
    "Palomino": "Palomino Dun",
}

_CHAMPAGNE_PREFIX = {
    BaseColor.CHESTNUT: "Gold",
    BaseColor.BAY: "Amber",
    BaseColor.BLACK: "Classic",
}


def _build_champagne_table() -> Dict[Tuple[BaseColor, CreamStage, bool], Tuple[str, str]]:
    table: Dict[Tuple[BaseColor, CreamStage, bool], Tuple[str, str]] = {}
    for base, prefix in _CHAMPAGNE_PREFIX.items():
        double_source = _CREAM_NAMES[(base, CreamStage.DOUBLE)]
        for dun_active in (False, True):
            dun = " Dun" if dun_active else ""
            plain = f"{prefix}{dun} Champagne"
            cream = f"{prefix} Cream{dun} Champagne"
            ivory = f"Ivory{dun} Champagne ({double_source})"
            table[(base, CreamStage.NONE, dun_active)] = (plain, plain)
            table[(base, CreamStage.SINGLE, dun_active)] = (cream, cream)
            table[(base, CreamStage.DOUBLE, dun_active)] = (ivory, cream)
    return table


# (base, cream stage, dun active) -> (display name, shade key)
CHAMPAGNE_TABLE = _build_champagne_table()

# Champagne shade keys rewritten under Silver so lookups land on the base pigment
_SILVER_KEY_REWRITES = (("Classic", "Black"), ("Amber", "Bay"), ("Gold", "Chestnut"))

# Single-cream colours relabelled "<colour> Pearl", matched in order anywhere in the name
_PEARL_CREAM_RELABELS = (
    "Palomino",
    "Buckskin",
    "Smoky Black",
    "Gold Cream Champagne",
    "Amber Cream Champagne",
    "Classic Cream Champagne",
)

# Colours that already imply a flaxen mane
FLAXEN_IMPLIED = ("palomino", "cremello")

# Words of the dilution name kept when Roan replaces the primary colour
_ROAN_KEPT_WORDS = ("dun", "champagne", "pearl")


# =============================================================================
# State
# =============================================================================


@dataclass
class CoatState:
    """Working record for one phenotype resolution.

    The cascade fills this in stage by stage; nothing here is persisted.
    """

    base: BaseColor = BaseColor.BLACK
    mushroom: bool = False
    cream: CreamStage = CreamStage.NONE
    dun: DunStage = DunStage.NONE
    champagne: bool = False
    silver: bool = False
    pearl: PearlStage = PearlStage.NONE

    # Shade
    shade: Optional[str] = None
    shade_key: str = ""
    shade_prefix: Optional[str] = None

    # Cosmetic modifiers
    sooty: bool = False
    flaxen_prefix: bool = False
    flaxen_descriptor: bool = False
    pangare: bool = False
    rabicano: bool = False

    # Patterns
    roan: Optional[RoanCategory] = None
    full_white: bool = False
    white_patterns: List[str] = field(default_factory=list)
    appaloosa: Optional[str] = None
    gray: Optional[str] = None

    # Body marking flags
    mottling: bool = False
    striping: bool = False
    bloody_shoulder: bool = False

    @property
    def dun_active(self) -> bool:
        return self.dun is DunStage.DUN

    @property
    def primitive_descriptor(self) -> Optional[str]:
        return PRIMITIVE_DESCRIPTORS.get(self.dun)


# =============================================================================
# Rendering
# =============================================================================


def _cream_name(state: CoatState) -> str:
    if state.mushroom and state.cream is CreamStage.NONE:
        return "Mushroom Chestnut"
    return _CREAM_NAMES[(state.base, state.cream)]


def _silver_key(key: str) -> str:
    for old, new in _SILVER_KEY_REWRITES:
        key = re.sub(old, new, key, count=1, flags=re.IGNORECASE)
    return f"Silver {key}"


def _collapse_pearl(text: str) -> str:
    text = re.sub(r"Pearl Cream Pearl", "Pearl Cream", text, flags=re.IGNORECASE)
    return re.sub(r"Pearl Pearl", "Pearl", text, flags=re.IGNORECASE)


def _apply_pearl(state: CoatState, name: str, key: str) -> Tuple[str, str]:
    pearl = state.pearl
    if pearl is PearlStage.PEARL:
        if state.base is BaseColor.CHESTNUT:
            return "Apricot", "Apricot"
        return f"{name} Pearl", f"{key} Pearl"
    if pearl in (PearlStage.PEARL_CREAM, PearlStage.HOMOZYGOUS_PEARL_CREAM):
        for colour in _PEARL_CREAM_RELABELS:
            if colour in name:
                relabel = f"{colour} Pearl"
                return relabel, relabel
        descriptor = "Homozygous Pearl Cream" if pearl is PearlStage.HOMOZYGOUS_PEARL_CREAM else "Pearl Cream"
        return f"{name} {descriptor}", f"{key} {descriptor}"
    if pearl is PearlStage.DOUBLE_CREAM_PEARL and "pearl" not in name.lower():
        return f"{name} (Pearl)", f"{key} (Pearl)"
    return name, key


def dilution_name_and_key(state: CoatState) -> Tuple[str, str]:
    """Colour name and shade key after base, dilution, silver and pearl stages."""
    name = _cream_name(state)
    key = name

    if state.dun_active:
        name = _DUN_NAMES.get(name, f"{name} Dun")
        key = name

    if state.champagne:
        entry = CHAMPAGNE_TABLE.get((state.base, state.cream, state.dun_active))
        if entry is None:
            fallback = f"{_CHAMPAGNE_PREFIX.get(state.base, 'Classic')} Champagne"
            logger.warning(
                "Unmapped champagne combination base=%s cream=%s dun=%s; using %s",
                state.base.value,
                state.cream.name,
                state.dun_active,
                fallback,
            )
            entry = (fallback, fallback)
        name, key = entry

    if state.silver and "silver" not in name.lower():
        name = f"Silver {name}"
        key = _silver_key(key)
        if key.lower().startswith("silver silver"):
            key = key[len("Silver "):]

    if state.pearl is not PearlStage.NONE:
        name, key = _apply_pearl(state, name, key)
        name = _collapse_pearl(name)
        key = _collapse_pearl(key)

    return name, key


def shade_lookup_key(state: CoatState) -> str:
    """Shade-bias key for the current state (Sooty-prefixed when sooty)."""
    _, key = dilution_name_and_key(state)
    if state.sooty and not key.lower().startswith("sooty"):
        key = f"Sooty {key}"
    return key


def _roan_phrase(state: CoatState, name: str) -> str:
    roan_name = state.roan.value
    kept: List[str] = []
    for word in name.split():
        lower = word.lower()
        if any(marker in lower for marker in _ROAN_KEPT_WORDS) and lower not in roan_name.lower():
            if word not in kept:
                kept.append(word)
    phrase = " ".join([roan_name] + kept)
    if state.flaxen_prefix and state.roan is RoanCategory.RED:
        phrase = f"Flaxen {phrase}"
    return phrase


def primary_color_phrase(state: CoatState) -> str:
    """Shade + colour portion of the display name."""
    name, _ = dilution_name_and_key(state)
    if state.roan is not None:
        core = _roan_phrase(state, name)
    elif state.flaxen_prefix:
        core = f"Flaxen {name}"
    else:
        core = name
    if state.shade_prefix:
        return f"{state.shade_prefix} {core}"
    return core


def _dedupe(tokens: List[str]) -> List[str]:
    seen = set()
    out = []
    for token in tokens:
        token = " ".join(token.split())
        if not token or token.lower() in seen:
            continue
        seen.add(token.lower())
        out.append(token)
    return out


def display_tokens(state: CoatState) -> List[str]:
    """Ordered, de-duplicated display tokens.

    Full white and Gray are sole tokens. Otherwise the order is
    ``[Sooty] [shade + colour] [white patterns] [Appaloosa] [cosmetic]``.
    """
    if state.full_white:
        return ["White"]
    if state.gray:
        return [state.gray]

    tokens: List[str] = []
    if state.sooty:
        tokens.append("Sooty")
    tokens.append(primary_color_phrase(state))
    tokens.extend(state.white_patterns)
    if state.appaloosa:
        tokens.append(state.appaloosa)
    if state.flaxen_descriptor:
        tokens.append("Flaxen")
    if state.pangare:
        tokens.append("Pangare")
    if state.rabicano:
        tokens.append("Rabicano")
    if state.primitive_descriptor and not state.dun_active:
        tokens.append(state.primitive_descriptor)
    return _dedupe(tokens)


def render_display_color(state: CoatState) -> str:
    """Final display colour string for *state*."""
    text = " ".join(display_tokens(state))
    text = re.sub(r"\s+", " ", text).strip()
    if text:
        return text
    return state.base.value if state.base else UNDEFINED_PHENOTYPE
