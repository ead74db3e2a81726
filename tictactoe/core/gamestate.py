from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from tictactoe.core.board import Cell
from tictactoe.core.move import Move


@dataclass
class GameState:
    """Represents complete game state."""
    current_player: Cell
    winner: Optional[Cell] = None
    is_draw: bool = False
    move_history: List[Tuple[Move, Cell]] = field(default_factory=list)
    step: int = 0

    def is_game_over(self) -> bool:
        return self.winner is not None or self.is_draw

    def record_move(self, move: Move, mark: Cell) -> None:
        self.move_history.append((move, mark))

    def switch_turn(self) -> None:
        self.current_player = self.current_player.opponent()
        self.step += 1
