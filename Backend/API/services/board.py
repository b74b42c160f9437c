# row r holds r+1 pegs, left bias in [0.4, 0.6]
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from services.errors import InvalidInput
from services.fairness import sha256_hex
from services.rng import Xorshift32

BIAS_SPREAD = 0.2
_SIX_PLACES = Decimal("0.000001")


def round6(value: float) -> float:
    # Decimal(float) is the exact binary value, so ties are real ties: same result as JS toFixed(6)
    return float(Decimal(value).quantize(_SIX_PLACES, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Peg:
    left_bias: float


@dataclass(frozen=True)
class Board:
    rows: tuple[tuple[Peg, ...], ...]

    def __post_init__(self):
        for r, row in enumerate(self.rows):
            if len(row) != r + 1:
                raise InvalidInput(f"row {r} has {len(row)} pegs, expected {r + 1}")

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict:
        return {"rows": [[p.left_bias for p in row] for row in self.rows]}

    @classmethod
    def from_biases(cls, rows: list[list[float]]) -> "Board":
        return cls(tuple(tuple(Peg(float(b)) for b in row) for row in rows))


def generate_board(rng: Xorshift32, row_count: int) -> Board:
    rows = []
    for r in range(row_count):
        row = []
        for _ in range(r + 1):
            v = rng.next()
            row.append(Peg(round6(0.5 + (v - 0.5) * BIAS_SPREAD)))
        rows.append(tuple(row))
    return Board(tuple(rows))


def canonical_board_text(board: Board) -> str:
    """Fingerprint input: {"rows":[[{"leftBias":0.422123}],[...],...]}

    No whitespace; biases in shortest round-trip decimal form (repr), which
    for values in [0.4, 0.6] is the same text JSON.stringify produces.
    """
    rows = ",".join(
        "[" + ",".join('{"leftBias":%r}' % peg.left_bias for peg in row) + "]"
        for row in board.rows
    )
    return '{"rows":[' + rows + "]}"


def board_fingerprint(board: Board) -> str:
    return sha256_hex(canonical_board_text(board))
