"""
Game constants and enumerations for the SCM simulator.
"""

from enum import Enum, IntEnum


class Season(str, Enum):
    """Seasons in cycle order. Turn t falls in SEASON_ORDER[t % 4]."""
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


class LifecycleStage(IntEnum):
    """Product lifecycle stages. Values are the forward-only order."""
    INTRODUCTION = 0
    GROWTH = 1
    MATURITY = 2
    DECLINE = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "LifecycleStage":
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"Unknown lifecycle stage: {label}") from None


class Difficulty(str, Enum):
    """AI difficulty modes."""
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


class InvestmentKind(str, Enum):
    """Long-term investment types a player can fund between turns."""
    RD = "rd"
    FACILITY = "facility"


class PlayerKind(str, Enum):
    """Who decides a player's orders."""
    HUMAN = "human"
    AI = "ai"


SEASON_ORDER = (Season.SPRING, Season.SUMMER, Season.AUTUMN, Season.WINTER)

# Stage: (growth, decline) demand factors
LIFECYCLE_FACTORS = {
    LifecycleStage.INTRODUCTION: (0.10, 0.05),
    LifecycleStage.GROWTH: (0.20, 0.10),
    LifecycleStage.MATURITY: (0.05, 0.05),
    LifecycleStage.DECLINE: (0.00, 0.20),
}

DIFFICULTY_COEFFICIENTS = {
    Difficulty.EASY: 0.5,
    Difficulty.NORMAL: 1.0,
    Difficulty.HARD: 2.0,
}

# Stable id reserved for the shadow AI competitor; seated players start at 1
AI_PLAYER_ID = 0
