import hashlib
import secrets
from dataclasses import dataclass

from services.errors import InvalidInput


def sha256_hex(data: str | bytes) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def _require(name: str, value: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidInput(f"{name} must be a non-empty string")
    return value


def commit(server_seed: str, nonce: str) -> str:
    _require("server_seed", server_seed)
    _require("nonce", nonce)
    return sha256_hex(f"{server_seed}:{nonce}")


def combine(server_seed: str, client_seed: str, nonce: str) -> str:
    _require("server_seed", server_seed)
    _require("client_seed", client_seed)
    _require("nonce", nonce)
    return sha256_hex(f"{server_seed}:{client_seed}:{nonce}")


def verify_commit(commit_hex: str, server_seed: str, nonce: str) -> bool:
    return commit(server_seed, nonce) == commit_hex


@dataclass(frozen=True)
class RoundVerification:
    commit_hex: str
    combined_seed: str
    commit_matches: bool

    def to_dict(self) -> dict:
        return {
            "commit_hex": self.commit_hex,
            "combined_seed": self.combined_seed,
            "commit_matches": self.commit_matches,
        }


def verify_round(commit_hex: str, server_seed: str, client_seed: str, nonce: str) -> RoundVerification:
    recomputed = commit(server_seed, nonce)
    return RoundVerification(
        commit_hex=recomputed,
        combined_seed=combine(server_seed, client_seed, nonce),
        commit_matches=recomputed == commit_hex,
    )


# -- seed material ------------------------------------------------------------

def generate_server_seed(n_bytes: int = 32) -> str:
    if n_bytes < 16:
        raise InvalidInput("server seed needs at least 16 bytes of entropy")
    return secrets.token_hex(n_bytes)


def generate_nonce() -> str:
    return str(secrets.randbelow(1_000_000))


def generate_client_seed() -> str:
    return secrets.token_hex(8)
