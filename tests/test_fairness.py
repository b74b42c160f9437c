"""Tests for hashing and the commit-reveal protocol."""

import pytest

from services.errors import InvalidInput
from services.fairness import (
    combine, commit, generate_client_seed, generate_nonce, generate_server_seed,
    sha256_hex, verify_commit, verify_round,
)

from conftest import CLIENT_SEED, COMBINED_SEED, COMMIT_HEX, NONCE, SERVER_SEED


class TestSha256:
    def test_known_digest(self):
        assert sha256_hex("test") == "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"

    def test_bytes_and_str_agree(self):
        assert sha256_hex("héllo") == sha256_hex("héllo".encode("utf-8"))

    def test_lowercase_64_chars(self):
        digest = sha256_hex("anything")
        assert len(digest) == 64
        assert digest == digest.lower()


class TestCommit:
    def test_vector(self):
        assert commit(SERVER_SEED, NONCE) == COMMIT_HEX

    def test_pure(self):
        assert commit(SERVER_SEED, NONCE) == commit(SERVER_SEED, NONCE)

    def test_delimiter_prevents_field_shifting(self):
        assert commit("ab", "c") != commit("a", "bc")

    @pytest.mark.parametrize("seed,nonce", [("", "1"), ("abc", ""), (None, "1")])
    def test_rejects_empty_material(self, seed, nonce):
        with pytest.raises(InvalidInput):
            commit(seed, nonce)


class TestCombine:
    def test_vector(self):
        assert combine(SERVER_SEED, CLIENT_SEED, NONCE) == COMBINED_SEED

    def test_pure(self):
        assert combine(SERVER_SEED, CLIENT_SEED, NONCE) == combine(SERVER_SEED, CLIENT_SEED, NONCE)

    def test_client_seed_changes_result(self):
        assert combine(SERVER_SEED, "other", NONCE) != COMBINED_SEED

    def test_rejects_empty_client_seed(self):
        with pytest.raises(InvalidInput):
            combine(SERVER_SEED, "", NONCE)


class TestVerifyCommit:
    def test_accepts_matching_commit(self):
        assert verify_commit(COMMIT_HEX, SERVER_SEED, NONCE) is True

    def test_rejects_every_single_char_mutation(self):
        for i, ch in enumerate(COMMIT_HEX):
            replacement = "0" if ch != "0" else "1"
            mutated = COMMIT_HEX[:i] + replacement + COMMIT_HEX[i + 1:]
            assert verify_commit(mutated, SERVER_SEED, NONCE) is False, f"position {i}"

    def test_malformed_digest_is_just_false(self):
        assert verify_commit("invalid_commit_hex", SERVER_SEED, NONCE) is False

    def test_wrong_nonce(self):
        assert verify_commit(COMMIT_HEX, SERVER_SEED, "43") is False


class TestVerifyRound:
    def test_recomputes_everything(self):
        result = verify_round(COMMIT_HEX, SERVER_SEED, CLIENT_SEED, NONCE)
        assert result.commit_matches
        assert result.commit_hex == COMMIT_HEX
        assert result.combined_seed == COMBINED_SEED

    def test_reports_mismatch(self):
        result = verify_round("00" * 32, SERVER_SEED, CLIENT_SEED, NONCE)
        assert not result.commit_matches
        assert result.to_dict()["commit_hex"] == COMMIT_HEX


class TestSeedMaterial:
    def test_server_seed_is_hex_of_requested_size(self):
        seed = generate_server_seed(32)
        assert len(seed) == 64
        int(seed, 16)

    def test_server_seed_minimum_entropy(self):
        with pytest.raises(InvalidInput):
            generate_server_seed(8)

    def test_server_seeds_differ(self):
        assert generate_server_seed() != generate_server_seed()

    def test_nonce_is_numeric(self):
        for _ in range(50):
            nonce = generate_nonce()
            assert nonce.isdigit()
            assert 0 <= int(nonce) < 1_000_000

    def test_client_seed(self):
        seed = generate_client_seed()
        assert len(seed) == 16
        assert seed != generate_client_seed()
