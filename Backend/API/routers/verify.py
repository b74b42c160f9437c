from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from deps.config import get_paytable
from services.fairness import verify_round
from services.payout import Paytable
from services.plinko import compute_outcome, replay

router = APIRouter(prefix="/verify", tags=["verify"])


class ReplayIn(BaseModel):
    combined_seed: str = Field(min_length=8)
    drop_column: int = Field(ge=0)
    expected_bin_index: int
    expected_board_hash: str


@router.get("")
def verify(server_seed: str = Query(min_length=1), client_seed: str = Query(min_length=1),
           nonce: str = Query(min_length=1), drop_column: int = Query(ge=0),
           commit_hex: str | None = None, paytable: Paytable = Depends(get_paytable)):
    """Recompute a round from its revealed seeds. Needs no server state."""
    check = verify_round(commit_hex or "", server_seed, client_seed, nonce)
    outcome = compute_outcome(check.combined_seed, drop_column, paytable.rows)
    computed = {
        "commit_hex": check.commit_hex,
        "combined_seed": check.combined_seed,
        "board_hash": outcome.board_hash,
        "bin_index": outcome.landing_index,
        "multiplier": paytable.multiplier_for(outcome.landing_index),
        "path": [d.to_dict() for d in outcome.path],
    }
    if commit_hex is not None:
        computed["commit_matches"] = check.commit_matches
    return {
        "inputs": {"server_seed": server_seed, "client_seed": client_seed,
                   "nonce": nonce, "drop_column": drop_column},
        "computed": computed,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/replay")
def replay_round(body: ReplayIn, paytable: Paytable = Depends(get_paytable)):
    ok = replay(body.combined_seed, body.drop_column, body.expected_bin_index,
                body.expected_board_hash, paytable.rows)
    return {"matches": ok}
