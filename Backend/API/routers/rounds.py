import logging
from decimal import Decimal
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from deps.config import SERVER_SEED_BYTES, get_paytable
from deps.store import RoundRecord, RoundStatus, RoundStore, get_store, utcnow
from services.fairness import (
    combine, commit, generate_client_seed, generate_nonce, generate_server_seed, verify_commit,
)
from services.payout import Paytable
from services.plinko import compute_outcome

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rounds", tags=["rounds"])


class StartIn(BaseModel):
    client_seed: str | None = Field(default=None, max_length=256)
    amount: Decimal = Field(gt=0, max_digits=38, decimal_places=8)
    drop_column: int = Field(ge=0)


def _not_found(round_id: str) -> HTTPException:
    return HTTPException(404, f"Round {round_id} not found")


def _verify_link(r: RoundRecord) -> str:
    return "/verify?" + urlencode({
        "server_seed": r.server_seed, "client_seed": r.client_seed,
        "nonce": r.nonce, "drop_column": r.drop_column,
    })


def _round_view(r: RoundRecord) -> dict:
    # server seed stays hidden until the round is revealed
    out = {
        "round_id": r.id,
        "status": r.status.value,
        "created_at": r.created_at.isoformat(),
        "nonce": r.nonce,
        "commit_hex": r.commit_hex,
        "rows": r.rows,
    }
    if r.status in (RoundStatus.STARTED, RoundStatus.REVEALED):
        out.update({
            "client_seed": r.client_seed,
            "drop_column": r.drop_column,
            "bin_index": r.bin_index,
            "multiplier": r.multiplier,
            "amount": str(r.amount),
            "payout": str(r.payout),
            "board_hash": r.board_hash,
            "path": r.path,
        })
    if r.status == RoundStatus.REVEALED:
        out.update({
            "server_seed": r.server_seed,
            "combined_seed": r.combined_seed,
            "revealed_at": r.revealed_at.isoformat(),
            "verify_link": _verify_link(r),
        })
    return out


@router.post("/commit")
def commit_round(store: RoundStore = Depends(get_store), paytable: Paytable = Depends(get_paytable)):
    server_seed = generate_server_seed(SERVER_SEED_BYTES)
    nonce = generate_nonce()
    record = store.add(RoundRecord(
        server_seed=server_seed, nonce=nonce,
        commit_hex=commit(server_seed, nonce), rows=paytable.rows,
    ))
    logger.info("round %s committed: %s", record.id, record.commit_hex)
    return {"round_id": record.id, "commit_hex": record.commit_hex, "nonce": record.nonce, "rows": record.rows}


@router.post("/{round_id}/start")
def start_round(round_id: str, body: StartIn,
                store: RoundStore = Depends(get_store), paytable: Paytable = Depends(get_paytable)):
    client_seed = body.client_seed or generate_client_seed()
    with store.transaction(round_id) as r:
        if r is None:
            raise _not_found(round_id)
        if r.status != RoundStatus.CREATED:
            raise HTTPException(409, f"Round {round_id} is {r.status.value}, expected CREATED")

        combined = combine(r.server_seed, client_seed, r.nonce)
        outcome = compute_outcome(combined, body.drop_column, r.rows)
        multiplier = paytable.multiplier_for(outcome.landing_index)

        r.status = RoundStatus.STARTED
        r.client_seed = client_seed
        r.combined_seed = combined
        r.board_hash = outcome.board_hash
        r.drop_column = body.drop_column
        r.bin_index = outcome.landing_index
        r.multiplier = multiplier
        r.amount = body.amount
        r.path = [d.to_dict() for d in outcome.path]

    logger.info("round %s started: column=%s bin=%s x%s", round_id, r.drop_column, r.bin_index, multiplier)
    return {
        "round_id": round_id,
        "client_seed": client_seed,
        "board_hash": r.board_hash,
        "rows": r.rows,
        "path": r.path,
        "bin_index": r.bin_index,
        "multiplier": multiplier,
        "payout": str(r.payout),
    }


@router.post("/{round_id}/reveal")
def reveal_round(round_id: str, store: RoundStore = Depends(get_store)):
    with store.transaction(round_id) as r:
        if r is None:
            raise _not_found(round_id)
        if r.status != RoundStatus.STARTED:
            raise HTTPException(409, f"Round {round_id} is {r.status.value}, expected STARTED")
        r.status = RoundStatus.REVEALED
        r.revealed_at = utcnow()

    commit_ok = verify_commit(r.commit_hex, r.server_seed, r.nonce)
    if not commit_ok:
        logger.error("round %s: stored commit does not match revealed seed", round_id)
    logger.info("round %s revealed", round_id)
    return {
        "round_id": round_id,
        "server_seed": r.server_seed,
        "client_seed": r.client_seed,
        "nonce": r.nonce,
        "commit_hex": r.commit_hex,
        "combined_seed": r.combined_seed,
        "commit_verified": commit_ok,
    }


@router.get("/{round_id}")
def get_round(round_id: str, store: RoundStore = Depends(get_store)):
    r = store.get(round_id)
    if r is None:
        raise _not_found(round_id)
    return _round_view(r)


@router.get("")
def list_rounds(limit: int = Query(20, ge=1, le=100), store: RoundStore = Depends(get_store)):
    rounds = [_round_view(r) for r in store.list_revealed(limit)]
    return {"rounds": rounds, "count": len(rounds), "limit": limit}
