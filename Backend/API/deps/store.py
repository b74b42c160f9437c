import copy
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum


class RoundStatus(str, Enum):
    CREATED = "CREATED"
    STARTED = "STARTED"
    REVEALED = "REVEALED"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RoundRecord:
    server_seed: str
    nonce: str
    commit_hex: str
    rows: int
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: RoundStatus = RoundStatus.CREATED
    created_at: datetime = field(default_factory=utcnow)
    client_seed: str | None = None
    combined_seed: str | None = None
    board_hash: str | None = None
    drop_column: int | None = None
    bin_index: int | None = None
    multiplier: float | None = None
    amount: Decimal | None = None
    path: list[dict] = field(default_factory=list)
    revealed_at: datetime | None = None

    @property
    def payout(self) -> Decimal | None:
        if self.amount is None or self.multiplier is None:
            return None
        return self.amount * Decimal(str(self.multiplier))


class RoundStore:
    def __init__(self):
        self._rounds: dict[str, RoundRecord] = {}
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self, round_id: str):
        """Yield a working copy of one round (None if unknown); stored back only if the block succeeds."""
        with self._lock:
            record = self._rounds.get(round_id)
            work = copy.deepcopy(record) if record else None
            yield work
            if work is not None:
                self._rounds[round_id] = work

    def add(self, record: RoundRecord) -> RoundRecord:
        with self._lock:
            self._rounds[record.id] = copy.deepcopy(record)
        return copy.deepcopy(record)

    def get(self, round_id: str) -> RoundRecord | None:
        with self._lock:
            record = self._rounds.get(round_id)
            return copy.deepcopy(record) if record else None

    def list_revealed(self, limit: int = 20) -> list[RoundRecord]:
        with self._lock:
            # newest insert first so equal timestamps still list newest first
            revealed = [r for r in reversed(self._rounds.values()) if r.status == RoundStatus.REVEALED]
            revealed.sort(key=lambda r: r.revealed_at, reverse=True)
            return [copy.deepcopy(r) for r in revealed[:limit]]

    def clear(self) -> None:
        with self._lock:
            self._rounds.clear()


STORE = RoundStore()


def get_store() -> RoundStore:
    return STORE
