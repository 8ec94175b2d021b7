"""
Tests for the byte encoding of cards and proofs.
"""

import pytest

from ECCMP.errors import CryptographicError, InvalidParameters
import ECCMP.encoding as encoding
import ECCMP.toolbox as toolbox


@pytest.fixture(scope="module")
def reveal_proof(pp, players, masked_deck):
    pk, sk, _ = players[0]
    return toolbox.compute_reveal_token(pp, sk, pk, masked_deck[0])[1]


class TestProofEncoding:

    def test_dleq_proof_is_192_bytes(self, curve, reveal_proof):
        assert len(encoding.encode_dleq_proof(curve, reveal_proof)) == 192

    def test_dleq_proof_decodes(self, curve, reveal_proof):
        data = encoding.encode_dleq_proof(curve, reveal_proof)
        assert encoding.decode_dleq_proof(curve, data) == reveal_proof

    def test_dleq_proof_wrong_length(self, curve, reveal_proof):
        data = encoding.encode_dleq_proof(curve, reveal_proof)
        with pytest.raises(InvalidParameters):
            encoding.decode_dleq_proof(curve, data[:-1])

    def test_point_not_on_curve(self, curve, reveal_proof):
        data = bytearray(encoding.encode_dleq_proof(curve, reveal_proof))
        data[31] ^= 1
        with pytest.raises(CryptographicError):
            encoding.decode_dleq_proof(curve, bytes(data))

    def test_key_ownership_proof(self, pp, curve, players):
        pk, sk, info = players[0]
        proof = toolbox.prove_key_ownership(pp, pk, sk, info)
        data = encoding.encode_key_ownership_proof(curve, proof)
        assert len(data) == 128
        decoded = encoding.decode_key_ownership_proof(curve, data)
        assert toolbox.verify_key_ownership(pp, pk, info, decoded)


class TestDeckEncoding:

    def test_deck(self, curve, masked_deck):
        data = encoding.encode_deck(curve, masked_deck)
        assert len(data) == 4 + 8 * 128
        assert encoding.decode_deck(curve, data) == list(masked_deck)

    def test_trailing_bytes(self, curve, masked_deck):
        data = encoding.encode_deck(curve, masked_deck) + b"\x00"
        with pytest.raises(InvalidParameters):
            encoding.decode_deck(curve, data)

    def test_truncated(self, curve, masked_deck):
        data = encoding.encode_deck(curve, masked_deck)
        with pytest.raises(InvalidParameters):
            encoding.decode_deck(curve, data[:-10])


class TestShuffleProofEncoding:

    def test_decoded_proof_verifies(self, pp, curve, shared_key, masked_deck):
        deck, proof = toolbox.shuffle_and_remask(
            pp, shared_key, masked_deck,
            toolbox.random_masking_factors(pp, len(masked_deck)),
            toolbox.random_permutation(pp, len(masked_deck)))
        data = encoding.encode_shuffle_proof(curve, proof)
        decoded = encoding.decode_shuffle_proof(curve, data)
        assert decoded == proof
        assert toolbox.verify_shuffle(pp, shared_key, masked_deck, deck,
                                      decoded)

    def test_truncated(self, pp, curve, shared_key, masked_deck):
        _, proof = toolbox.shuffle_and_remask(
            pp, shared_key, masked_deck[:2], [5, 6],
            toolbox.random_permutation(pp, 2))
        data = encoding.encode_shuffle_proof(curve, proof)
        with pytest.raises(InvalidParameters):
            encoding.decode_shuffle_proof(curve, data[:-1])
