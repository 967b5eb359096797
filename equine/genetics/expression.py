"""Gene expression logic for translating genotype to coat colour.

This module contains the ordered cascade of stages that turn a genotype
into a ``CoatState``. Each stage reads the genotype and records what the
gene did as structured tags; later stages may override earlier ones
(Gray and full Dominant White override nearly everything). Display text
is derived from the finished state in ``equine.genetics.coat``.

Stage order matters and is fixed:

1. base colour          7. pearl            13. leopard complex
2. mushroom             8. sooty key        14. gray
3. cream                9. shade            15. rabicano
4. dun                 10. cosmetics        16. primitive markings
5. champagne           11. roan             17. (rendering)
6. silver              12. white patterns
"""

from __future__ import annotations

import logging
import random as pyrandom
from typing import Dict, Optional

from equine.config.engine_config import DEFAULT_CONFIG, GeneticsConfig
from equine.config.genetics import (
    BLANKET_CHANCE,
    DEFAULT_SHADE,
    DEFAULT_SHADE_KEY,
    FROST_BASE_WEIGHT,
    MINIMAL_WHITE_ALLELE,
    NEUTRAL_SHADES,
    SNOWFLAKE_BASE_WEIGHT,
)
from equine.genetics.coat import (
    FLAXEN_IMPLIED,
    BaseColor,
    CoatState,
    CreamStage,
    DunStage,
    PearlStage,
    RoanCategory,
    dilution_name_and_key,
    shade_lookup_key,
)
from equine.genetics.genotype import Genotype
from equine.genetics.profile import BreedGeneticProfile
from equine.genetics.weighted import NO_SELECTION, select_weighted

logger = logging.getLogger(__name__)

_GRAY_TONES = {
    BaseColor.BLACK: "Steel",
    BaseColor.BAY: "Steel",
    BaseColor.CHESTNUT: "Rose",
}

_ROAN_CATEGORIES = {
    BaseColor.CHESTNUT: RoanCategory.RED,
    BaseColor.BAY: RoanCategory.BAY,
    BaseColor.BLACK: RoanCategory.BLUE,
}


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


# =============================================================================
# Stages 1-7: base colour and dilutions
# =============================================================================


def apply_base_color(state: CoatState, genotype: Genotype) -> None:
    if genotype.is_homozygous("E_Extension", "e"):
        state.base = BaseColor.CHESTNUT
    elif genotype.has_allele("A_Agouti", "A"):
        state.base = BaseColor.BAY
    else:
        state.base = BaseColor.BLACK


def apply_mushroom(state: CoatState, genotype: Genotype) -> None:
    if state.base is BaseColor.CHESTNUT and genotype.has_allele("MFSD12_Mushroom", "Mu"):
        state.mushroom = True


def apply_cream(state: CoatState, genotype: Genotype) -> None:
    pair = genotype.pair("Cr_Cream")
    if pair is None:
        return
    copies = pair.count("Cr")
    if copies == 1:
        state.cream = CreamStage.SINGLE
    elif copies == 2:
        state.cream = CreamStage.DOUBLE


def apply_dun(state: CoatState, genotype: Genotype) -> None:
    if genotype.has_allele("D_Dun", "D"):
        state.dun = DunStage.DUN
    elif genotype.is_homozygous("D_Dun", "nd1"):
        state.dun = DunStage.PRIMITIVE
    elif genotype.is_heterozygous("D_Dun", "nd1", "nd2"):
        state.dun = DunStage.FAINT_PRIMITIVE


def apply_champagne(state: CoatState, genotype: Genotype) -> None:
    if genotype.has_allele("CH_Champagne", "Ch"):
        state.champagne = True


def apply_silver(state: CoatState, genotype: Genotype) -> None:
    """Silver only dilutes black pigment, so it is carried but unseen on chestnut."""
    if genotype.has_allele("Z_Silver", "Z") and not genotype.is_homozygous("E_Extension", "e"):
        if state.base in (BaseColor.BLACK, BaseColor.BAY):
            state.silver = True


def apply_pearl(state: CoatState, genotype: Genotype) -> None:
    pair = genotype.pair("PRL_Pearl")
    if pair is None:
        return
    copies = pair.count("prl")
    homozygous = copies == 2
    heterozygous = copies == 1
    single_cream = state.cream is CreamStage.SINGLE
    double_cream = state.cream is CreamStage.DOUBLE

    if not (homozygous or (heterozygous and single_cream)):
        return
    if homozygous and not single_cream and not double_cream:
        state.pearl = PearlStage.PEARL
    elif single_cream:
        state.pearl = PearlStage.HOMOZYGOUS_PEARL_CREAM if homozygous else PearlStage.PEARL_CREAM
    elif homozygous and double_cream:
        state.pearl = PearlStage.DOUBLE_CREAM_PEARL


# =============================================================================
# Stages 8-10: sooty, shade, cosmetic modifiers
# =============================================================================


def apply_sooty(state: CoatState, genotype: Genotype) -> None:
    if genotype.flag("sooty"):
        state.sooty = True


def _shade_table(state: CoatState, key: str, shade_bias) -> Optional[Dict]:
    if key in shade_bias:
        return shade_bias[key]
    if state.base.value in shade_bias:
        return shade_bias[state.base.value]
    first_word = key.split(" ")[0]
    if first_word in shade_bias:
        return shade_bias[first_word]
    return shade_bias.get(DEFAULT_SHADE_KEY)


def apply_shade(
    state: CoatState,
    profile: Optional[BreedGeneticProfile],
    rng: pyrandom.Random,
) -> None:
    """Pick a shade from the breed's shade bias and decide whether it prefixes the name.

    Lookup order: exact shade key, base colour, first word of the key,
    then ``Default``. No table means ``standard``.
    """
    key = shade_lookup_key(state)
    state.shade_key = key
    shade_bias = profile.shade_bias if profile is not None else {}
    table = _shade_table(state, key, shade_bias)

    shade = DEFAULT_SHADE
    if table is not None:
        picked = select_weighted(table, rng=rng)
        if picked is not NO_SELECTION:
            shade = str(picked)
    state.shade = shade

    name, _ = dilution_name_and_key(state)
    shade_lower = shade.lower()
    name_lower = name.lower()
    if shade_lower not in NEUTRAL_SHADES and shade_lower not in name_lower and "gray" not in name_lower:
        state.shade_prefix = _capitalize_first(shade)


def apply_cosmetics(state: CoatState, genotype: Genotype) -> None:
    """Flaxen (chestnut-derived only), pangare descriptors."""
    if genotype.flag("flaxen") and state.base is BaseColor.CHESTNUT:
        name, _ = dilution_name_and_key(state)
        if name in ("Chestnut", "Mushroom Chestnut"):
            state.flaxen_prefix = True
        elif not any(implied in name.lower() for implied in FLAXEN_IMPLIED):
            state.flaxen_descriptor = True
    if genotype.flag("pangare"):
        state.pangare = True


# =============================================================================
# Stages 11-16: patterns
# =============================================================================


def apply_roan(state: CoatState, genotype: Genotype) -> None:
    if not genotype.has_allele("Rn_Roan", "Rn"):
        return
    # Shade is the only stage before this one that can put gray into the name
    if state.shade and "gray" in state.shade.lower():
        return
    state.roan = _ROAN_CATEGORIES[state.base]


def apply_white_patterns(state: CoatState, genotype: Genotype, config: GeneticsConfig) -> None:
    """Dominant White, Frame Overo, Tobiano, Sabino, Splash and Eden White."""
    w_pair = genotype.pair("W_DominantWhite")
    w_alleles = w_pair.matching("W") if w_pair is not None else ()
    if w_alleles:
        if any(allele in config.full_white_alleles for allele in w_alleles):
            state.full_white = True
            return
        if MINIMAL_WHITE_ALLELE in w_alleles:
            state.white_patterns.append("Minimal White")
        else:
            state.white_patterns.append("Dominant White")

    frame = genotype.pair("O_FrameOvero")
    if frame is not None and frame.has("O") and not frame.is_homozygous("O"):
        state.white_patterns.append("Frame Overo")
    if genotype.has_allele("TO_Tobiano", "TO") or genotype.has_allele("TO_Tobiano", "To"):
        state.white_patterns.append("Tobiano")
    if genotype.has_allele("SB1_Sabino1", "SB1") or genotype.has_allele("SB1_Sabino1", "Sb1"):
        state.white_patterns.append("Sabino")

    splash = genotype.pair("SW_SplashWhite")
    for allele in splash.matching("SW") if splash is not None else ():
        state.white_patterns.append(f"Splash White {allele[len('SW'):]}")
    eden = genotype.pair("EDXW")
    for allele in eden.matching("EDXW") if eden is not None else ():
        state.white_patterns.append(f"Eden White {allele[len('EDXW'):]}")


def _appaloosa_severity(age: float, config: GeneticsConfig) -> str:
    light_max, moderate_max = config.appaloosa_age_bands
    if age <= light_max:
        return "Light"
    if age <= moderate_max:
        return "Moderate"
    return "Heavy"


def _snowflake_or_frost(profile: Optional[BreedGeneticProfile], rng: pyrandom.Random) -> str:
    bias = profile.advanced_markings_bias if profile is not None else None
    snow_mult = bias.snowflake_probability_multiplier if bias else 1.0
    frost_mult = bias.frost_probability_multiplier if bias else 1.0
    choices = {
        "Snowflake": SNOWFLAKE_BASE_WEIGHT * max(0.0, snow_mult),
        "Frost": FROST_BASE_WEIGHT * max(0.0, frost_mult),
    }
    choices = {label: weight for label, weight in choices.items() if weight > 0}
    if choices:
        picked = select_weighted(choices, rng=rng)
        if picked is not NO_SELECTION:
            return picked
    return "Snowflake" if rng.random() < 0.5 else "Frost"


def apply_leopard_complex(
    state: CoatState,
    genotype: Genotype,
    profile: Optional[BreedGeneticProfile],
    age: float,
    rng: pyrandom.Random,
    config: GeneticsConfig,
) -> None:
    lp = genotype.pair("LP_LeopardComplex")
    if lp is None:
        return
    copies = lp.count("LP") + lp.count("Lp")
    if copies == 0:
        return
    state.mottling = True
    state.striping = True
    pattern1 = genotype.has_allele("PATN1_Pattern1", "PATN1")

    if copies == 2:
        state.appaloosa = "Fewspot Leopard Appaloosa" if pattern1 else "Snowcap Appaloosa"
    elif pattern1:
        state.appaloosa = "Leopard Appaloosa"
    else:
        severity = _appaloosa_severity(age, config)
        modifier = _snowflake_or_frost(profile, rng)
        underlying = "Blanket Appaloosa" if rng.random() < BLANKET_CHANCE else "Varnish Roan Appaloosa"
        state.appaloosa = f"{severity} {modifier} {underlying}"


def gray_stage_name(base: BaseColor, age: float, config: GeneticsConfig) -> str:
    """Age-staged gray term (Steel for black/bay bases, Rose for chestnut)."""
    gray_max, dark_max, light_max, white_max = config.gray_stage_ages
    tone = _GRAY_TONES.get(base, "")
    if age <= gray_max:
        stage = "Gray"
    elif age <= dark_max:
        stage = "Dark Dapple Gray"
    elif age <= light_max:
        stage = "Light Dapple Gray"
    elif age <= white_max:
        return "White Gray"
    else:
        return "Fleabitten Gray"
    return f"{tone} {stage}".strip()


def apply_gray(
    state: CoatState,
    genotype: Genotype,
    profile: Optional[BreedGeneticProfile],
    age: float,
    rng: pyrandom.Random,
    config: GeneticsConfig,
) -> None:
    if not genotype.has_allele("G_Gray", "G"):
        return
    state.gray = gray_stage_name(state.base, age, config)

    multiplier = profile.advanced_markings_bias.bloody_shoulder_probability_multiplier if profile else 1.0
    chance = config.bloody_shoulder_base_chance * max(0.0, multiplier)
    if rng.random() < chance:
        state.bloody_shoulder = True


def apply_rabicano(state: CoatState, genotype: Genotype) -> None:
    if genotype.flag("rabicano") and not state.full_white and not state.gray:
        state.rabicano = True


# =============================================================================
# Cascade
# =============================================================================


def express_coat(
    genotype: Genotype,
    profile: Optional[BreedGeneticProfile],
    age: float,
    *,
    rng: pyrandom.Random,
    config: Optional[GeneticsConfig] = None,
) -> CoatState:
    """Run the full cascade and return the finished coat state."""
    config = config or DEFAULT_CONFIG
    state = CoatState()

    apply_base_color(state, genotype)
    apply_mushroom(state, genotype)
    apply_cream(state, genotype)
    apply_dun(state, genotype)
    apply_champagne(state, genotype)
    apply_silver(state, genotype)
    apply_pearl(state, genotype)
    apply_sooty(state, genotype)
    apply_shade(state, profile, rng)
    apply_cosmetics(state, genotype)
    apply_roan(state, genotype)

    apply_white_patterns(state, genotype, config)
    if not state.full_white:
        apply_leopard_complex(state, genotype, profile, age, rng, config)
        apply_gray(state, genotype, profile, age, rng, config)
    apply_rabicano(state, genotype)

    logger.debug(
        "Expressed coat base=%s cream=%s dun=%s champagne=%s silver=%s pearl=%s shade=%s",
        state.base.value,
        state.cream.name,
        state.dun.value,
        state.champagne,
        state.silver,
        state.pearl.value,
        state.shade,
    )
    return state
