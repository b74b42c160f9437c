import math
from decimal import Decimal

from services.errors import InvalidInput, OutOfRange

# bin -> multiplier, edges pay most
DEFAULT_PAYTABLES = {
    12: [16, 9, 2, 1.4, 1.1, 1, 0.5, 1, 1.1, 1.4, 2, 9, 16],
    16: [0.3, 0.5, 0.8, 0.9, 1, 1.2, 1.7, 2.5, 5.6, 2.5, 1.7, 1.2, 1, 0.9, 0.8, 0.5, 0.3],
}


class Paytable:
    def __init__(self, multipliers):
        values = tuple(float(m) for m in multipliers)
        if not values:
            raise InvalidInput("paytable needs at least one bin")
        if any(not math.isfinite(m) or m < 0 for m in values):
            raise InvalidInput("paytable multipliers must be finite and >= 0")
        n = len(values) - 1
        for i in range(len(values)):
            if values[i] != values[n - i]:
                raise InvalidInput(f"paytable not symmetric: bin {i}={values[i]} vs bin {n - i}={values[n - i]}")
        self._multipliers = values

    @property
    def rows(self) -> int:
        return len(self._multipliers) - 1

    @property
    def multipliers(self) -> tuple[float, ...]:
        return self._multipliers

    def __len__(self) -> int:
        return len(self._multipliers)

    def multiplier_for(self, landing_index: int) -> float:
        if isinstance(landing_index, bool) or not 0 <= landing_index < len(self._multipliers):
            raise OutOfRange(f"bin {landing_index} outside paytable 0-{self.rows}")
        return self._multipliers[landing_index]

    def payout(self, amount: Decimal, landing_index: int) -> Decimal:
        return Decimal(amount) * Decimal(str(self.multiplier_for(landing_index)))

    def nominal_rtp(self) -> float:
        """Expected return assuming every peg is a fair 50/50 split."""
        n = self.rows
        return sum(math.comb(n, k) / 2 ** n * m for k, m in enumerate(self._multipliers))

    def to_list(self) -> list[dict]:
        return [{"bin": i, "multiplier": m} for i, m in enumerate(self._multipliers)]

    def __repr__(self) -> str:
        return f"Paytable(rows={self.rows})"


def load_paytable(rows: int, raw: str | None = None) -> Paytable:
    if raw:
        try:
            values = [float(x) for x in raw.split(",")]
        except ValueError:
            raise InvalidInput(f"paytable override is not a comma separated list of numbers: {raw!r}") from None
    elif rows in DEFAULT_PAYTABLES:
        values = DEFAULT_PAYTABLES[rows]
    else:
        raise InvalidInput(f"no default paytable for {rows} rows; set PLINKO_PAYTABLE")
    if len(values) != rows + 1:
        raise InvalidInput(f"paytable for {rows} rows needs {rows + 1} bins, got {len(values)}")
    return Paytable(values)


DEFAULT_PAYTABLE = Paytable(DEFAULT_PAYTABLES[12])


def multiplier_for(landing_index: int, table: Paytable = DEFAULT_PAYTABLE) -> float:
    return table.multiplier_for(landing_index)
