"""Domain enumerations and controlled vocabularies for board games."""
from enum import Enum


class PlayDuration(str, Enum):
    SHORT = "SHORT"
    MEDIUM = "MEDIUM"
    LONG = "LONG"


class FirstPlayComplexity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class AgeRange(str, Enum):
    AGE_3_PLUS = "3+"
    AGE_6_PLUS = "6+"
    AGE_8_PLUS = "8+"
    AGE_10_PLUS = "10+"
    AGE_12_PLUS = "12+"
    AGE_14_PLUS = "14+"
    AGE_16_PLUS = "16+"
    AGE_18_PLUS = "18+"


PLAY_DURATION_VALUES = tuple(member.value for member in PlayDuration)
FIRST_PLAY_COMPLEXITY_VALUES = tuple(member.value for member in FirstPlayComplexity)
AGE_RANGE_VALUES = tuple(member.value for member in AgeRange)

# Intended ordering of the closed enums, used by the semantic sort ordering.
PLAY_DURATION_RANK = {"SHORT": 0, "MEDIUM": 1, "LONG": 2}
FIRST_PLAY_COMPLEXITY_RANK = {"LOW": 0, "MEDIUM": 1, "HIGH": 2}

# Vocabularies offered by the admin form. The core treats categories and
# mechanics as open string sets; membership is checked only at the form edge.
CATEGORIES = (
    "Stratégie",
    "Famille",
    "Abstrait",
    "Ambiance",
    "Coopératif",
    "Expert",
    "Petit jeu",
    "Négociation",
    "Autre",
)

MECHANICS = (
    "Jet de dés",
    "Draft",
    "Placement d'ouvriers",
    "Pattern Building",
    "Collecte de ressources",
    "Construction de routes",
    "Majorité",
    "Gestion de main",
    "Autre",
)

AWARD_NAMES = (
    "Spiel des Jahres",
    "Kennerspiel des Jahres",
    "As d'Or",
    "Golden Geek",
    "Autre",
)
