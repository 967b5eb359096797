"""Genetics-specific configuration constants."""

# =============================================================================
# Loci and modifiers
# =============================================================================

# Boolean (non-Mendelian) coat modifiers stored beside the loci
BOOLEAN_MODIFIERS = ("sooty", "flaxen", "pangare", "rabicano")

# Historical spellings found in breed data, mapped onto engine locus names
LOCUS_ALIASES = {
    "Ch_Champagne": "CH_Champagne",
    "Prl_Pearl": "PRL_Pearl",
}

# =============================================================================
# Inheritance
# =============================================================================

MAX_INHERITANCE_ATTEMPTS = 10

# Fallback pairs tried first when every inheritance attempt is rejected
RECESSIVE_FALLBACK_PAIRS = (
    "n/n",
    "w/w",
    "e/e",
    "a/a",
    "g/g",
    "rn/rn",
    "lp/lp",
    "to/to",
    "nd2/nd2",
    "patn1/patn1",
)

# Chance that a parent's allele wins a one-true-one-false modifier split
MODIFIER_PARENT_COIN = 0.5

# =============================================================================
# White patterns
# =============================================================================

# Dominant White alleles that turn the whole coat white
FULL_WHITE_ALLELES = frozenset({"W13"})
MINIMAL_WHITE_ALLELE = "W20"

# =============================================================================
# Gray staging (upper age bound in years, inclusive)
# =============================================================================

GRAY_STAGE_GRAY_MAX_AGE = 3
GRAY_STAGE_DARK_DAPPLE_MAX_AGE = 6
GRAY_STAGE_LIGHT_DAPPLE_MAX_AGE = 9
GRAY_STAGE_WHITE_MAX_AGE = 12
# Older than WHITE_MAX_AGE = Fleabitten

BLOODY_SHOULDER_BASE_CHANCE = 0.001  # 0.1% before breed multiplier

# =============================================================================
# Appaloosa (heterozygous leopard without Pattern-1)
# =============================================================================

APPALOOSA_LIGHT_MAX_AGE = 4
APPALOOSA_MODERATE_MAX_AGE = 8
# Older than MODERATE_MAX_AGE = Heavy

SNOWFLAKE_BASE_WEIGHT = 0.5
FROST_BASE_WEIGHT = 0.5
BLANKET_CHANCE = 0.5  # Otherwise Varnish Roan

# =============================================================================
# Markings
# =============================================================================

LEG_ORDER = ("LF", "RF", "LH", "RH")
DEFAULT_MAX_LEGS_MARKED = 4
NO_MARKING = "none"

# =============================================================================
# Display
# =============================================================================

DEFAULT_SHADE = "standard"
NEUTRAL_SHADES = frozenset({"standard", "medium"})
DEFAULT_SHADE_KEY = "Default"
UNDEFINED_PHENOTYPE = "Undefined Phenotype"
