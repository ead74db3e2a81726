from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


# Terminal scores, always from the computer's (SYMBOLS[1]) point of view
SCORE_WIN = 10
SCORE_LOSS = -10
SCORE_DRAW = 0


class Difficulty(Enum):
    RANDOM = "random"
    OPTIMAL = "optimal"


@dataclass(frozen=True)
class AILevelConfig:
    menu_key: str
    label: str
    use_search: bool


AI_LEVELS: Dict[Difficulty, AILevelConfig] = {
    Difficulty.RANDOM: AILevelConfig(menu_key="1", label="Possible", use_search=False),
    Difficulty.OPTIMAL: AILevelConfig(menu_key="2", label="Impossible", use_search=True),
}


def difficulty_from_menu_key(key: str) -> Optional[Difficulty]:
    """Map a stripped menu answer ("1"/"2") to a Difficulty, None if unrecognized."""
    for difficulty, cfg in AI_LEVELS.items():
        if cfg.menu_key == key:
            return difficulty
    return None
