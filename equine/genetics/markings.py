"""Face, leg and body markings.

Face and leg markings are independent of coat colour and are driven only
by the breed's ``marking_bias``. Body-marking flags (mottling, striping,
bloody shoulder) come from the coat cascade and are copied in here so the
persisted marking structure lives in one place.
"""

from __future__ import annotations

import logging
import random as pyrandom
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from equine.config.genetics import LEG_ORDER, NO_MARKING
from equine.genetics.coat import CoatState
from equine.genetics.profile import MarkingBias
from equine.genetics.weighted import NO_SELECTION, select_weighted

logger = logging.getLogger(__name__)


def _no_legs() -> Dict[str, str]:
    return {leg: NO_MARKING for leg in LEG_ORDER}


@dataclass
class PhenotypicMarkings:
    """Markings of one horse.

    Attributes:
        face: Face marking name, or ``"none"``
        legs: Leg code (LF/RF/LH/RH) -> marking name, or ``"none"``
        mottling: Leopard-complex skin mottling (None when not applicable)
        striping: Leopard-complex hoof striping (None when not applicable)
        bloody_shoulder: Gray-only body marking (None when not applicable)
    """

    face: str = NO_MARKING
    legs: Dict[str, str] = field(default_factory=_no_legs)
    mottling: Optional[bool] = None
    striping: Optional[bool] = None
    bloody_shoulder: Optional[bool] = None

    @property
    def marked_leg_count(self) -> int:
        return sum(1 for marking in self.legs.values() if marking != NO_MARKING)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"face": self.face, "legs": dict(self.legs)}
        if self.mottling is not None:
            out["mottling"] = self.mottling
        if self.striping is not None:
            out["striping"] = self.striping
        if self.bloody_shoulder is not None:
            out["body_markings"] = {"bloody_shoulder": self.bloody_shoulder}
        return out

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PhenotypicMarkings":
        if not data:
            return cls()
        legs = _no_legs()
        for leg, marking in (data.get("legs") or {}).items():
            if leg in legs:
                legs[leg] = str(marking)
        body = data.get("body_markings") or {}
        return cls(
            face=str(data.get("face", NO_MARKING)),
            legs=legs,
            mottling=data.get("mottling"),
            striping=data.get("striping"),
            bloody_shoulder=body.get("bloody_shoulder"),
        )


def roll_face_marking(bias: Optional[MarkingBias], rng: pyrandom.Random) -> str:
    if bias is None or not bias.face:
        return NO_MARKING
    picked = select_weighted(bias.face, rng=rng)
    return NO_MARKING if picked is NO_SELECTION else str(picked)


def roll_leg_markings(bias: Optional[MarkingBias], rng: pyrandom.Random) -> Dict[str, str]:
    """Roll each leg in LF, RF, LH, RH order.

    A leg is considered only while fewer than ``max_legs_marked`` legs carry
    a real marking; once the cap is reached the remaining legs take no draws.
    """
    legs = _no_legs()
    if bias is None or not bias.leg_specific_probabilities or bias.legs_general_probability is None:
        return legs

    marked = 0
    for leg in LEG_ORDER:
        if marked >= bias.max_legs_marked:
            break
        if rng.random() >= bias.legs_general_probability:
            continue
        picked = select_weighted(bias.leg_specific_probabilities, rng=rng)
        if picked is NO_SELECTION:
            continue
        legs[leg] = str(picked)
        if legs[leg] != NO_MARKING:
            marked += 1
    return legs


def resolve_markings(
    bias: Optional[MarkingBias],
    coat: CoatState,
    rng: pyrandom.Random,
) -> PhenotypicMarkings:
    """Combine rolled face/leg markings with the coat's body-marking flags."""
    markings = PhenotypicMarkings(
        face=roll_face_marking(bias, rng),
        legs=roll_leg_markings(bias, rng),
    )
    if coat.mottling:
        markings.mottling = True
    if coat.striping:
        markings.striping = True
    if coat.bloody_shoulder:
        markings.bloody_shoulder = True
    return markings
