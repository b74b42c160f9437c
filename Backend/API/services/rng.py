from services.errors import InvalidInput

MASK32 = 0xFFFF_FFFF
TWO_32 = float(0x1_0000_0000)
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def seed_to_state(seed_hex: str) -> int:
    """First 8 hex chars of the combined seed, big-endian uint32. Zero maps to 1."""
    head = seed_hex[:8] if isinstance(seed_hex, str) else ""
    # int(x, 16) would also take "0x", "_" and signs
    if len(head) != 8 or any(c not in HEX_DIGITS for c in head):
        raise InvalidInput(f"seed must start with 8 hex characters, got {head!r}")
    return int(head, 16) or 1


class Xorshift32:
    """xorshift32 (13, 17, 5). One instance per round; not thread safe."""

    def __init__(self, seed_hex: str):
        self._state = seed_to_state(seed_hex)

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        x = self._state
        x ^= (x << 13) & MASK32
        x ^= x >> 17
        x ^= (x << 5) & MASK32
        self._state = x & MASK32
        return self._state / TWO_32  # [0,1)

    def next_n(self, count: int) -> list[float]:
        if count < 0:
            raise InvalidInput("count must be >= 0")
        return [self.next() for _ in range(count)]

    def __repr__(self) -> str:
        return f"Xorshift32(state=0x{self._state:08x})"
