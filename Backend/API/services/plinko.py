# Board and path share one Xorshift32 stream: row_count*(row_count+1)/2 draws, then row_count.
import logging
from dataclasses import dataclass

from services.board import Board, board_fingerprint, generate_board
from services.errors import InvalidInput, OutOfRange
from services.rng import Xorshift32

logger = logging.getLogger(__name__)

ROWS = 12
COLUMN_STEP = 0.01
LEFT = "LEFT"    # toward bin 0
RIGHT = "RIGHT"  # toward bin row_count


@dataclass(frozen=True)
class PathDecision:
    row: int
    peg_index: int
    left_bias: float
    adjusted_bias: float
    random_value: float
    decision: str

    def to_dict(self) -> dict:
        return {
            "row": self.row,
            "peg_index": self.peg_index,
            "left_bias": self.left_bias,
            "adjusted_bias": self.adjusted_bias,
            "random_value": self.random_value,
            "decision": self.decision,
        }


@dataclass(frozen=True)
class Outcome:
    board: Board
    board_hash: str
    path: tuple[PathDecision, ...]
    landing_index: int

    def to_dict(self) -> dict:
        return {
            "board": self.board.to_dict(),
            "board_hash": self.board_hash,
            "path": [d.to_dict() for d in self.path],
            "bin_index": self.landing_index,
        }


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def simulate_path(board: Board, column_choice: int, rng: Xorshift32,
                  row_count: int, center_column: int) -> tuple[tuple[PathDecision, ...], int]:
    adjustment = (column_choice - center_column) * COLUMN_STEP
    position = 0
    path = []
    for r in range(row_count):
        peg_index = min(position, r)
        try:
            peg = board.rows[r][peg_index]
        except IndexError:
            raise OutOfRange(f"board has no peg at row {r}, index {peg_index}") from None
        adjusted = _clamp(peg.left_bias + adjustment, 0.0, 1.0)
        v = rng.next()
        decision = LEFT if v < adjusted else RIGHT
        if decision == RIGHT:
            position += 1
        path.append(PathDecision(r, peg_index, peg.left_bias, adjusted, v, decision))
    return tuple(path), position


def _validate(column_choice, row_count, center_column) -> int:
    if isinstance(row_count, bool) or not isinstance(row_count, int) or row_count < 1:
        raise InvalidInput(f"row_count must be a positive integer, got {row_count!r}")
    if isinstance(column_choice, bool) or not isinstance(column_choice, int):
        raise InvalidInput(f"column_choice must be an integer, got {column_choice!r}")
    if not 0 <= column_choice <= row_count:
        raise InvalidInput(f"column_choice {column_choice} outside 0-{row_count}")
    if center_column is None:
        return row_count // 2
    if isinstance(center_column, bool) or not isinstance(center_column, int):
        raise InvalidInput(f"center_column must be an integer, got {center_column!r}")
    if not 0 <= center_column <= row_count:
        raise InvalidInput(f"center_column {center_column} outside 0-{row_count}")
    return center_column


def compute_outcome(combined_seed: str, column_choice: int, row_count: int = ROWS,
                    center_column: int | None = None) -> Outcome:
    center = _validate(column_choice, row_count, center_column)
    rng = Xorshift32(combined_seed)
    board = generate_board(rng, row_count)
    board_hash = board_fingerprint(board)
    path, landing_index = simulate_path(board, column_choice, rng, row_count, center)
    return Outcome(board, board_hash, path, landing_index)


def replay(combined_seed: str, column_choice: int, expected_landing_index: int,
           expected_board_hash: str, row_count: int = ROWS,
           center_column: int | None = None) -> bool:
    outcome = compute_outcome(combined_seed, column_choice, row_count, center_column)
    matches = (outcome.landing_index == expected_landing_index
               and outcome.board_hash == expected_board_hash)
    if not matches:
        logger.info("replay mismatch: bin %s vs expected %s, board %s vs expected %s",
                    outcome.landing_index, expected_landing_index,
                    outcome.board_hash, expected_board_hash)
    return matches
