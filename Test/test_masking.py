"""
Tests for masking and re-masking with their equality proofs.
"""

import pytest

from ECCMP.datatypes import AggregatePublicKey, Card, MaskedCard
from ECCMP.eccwrapper import ShortPoint
from ECCMP.errors import (CryptographicError, InvalidCardIndex,
                          InvalidParameters, MentalPokerError)
import ECCMP.toolbox as toolbox


@pytest.fixture
def card(card_encoding):
    return card_encoding.cards()[3]


class TestMask:

    def test_elgamal_components(self, pp, curve, shared_key, card):
        masked, _ = toolbox.mask(pp, shared_key, card, 12345)
        assert masked.randomness == curve.multiplication(12345,
                                                         pp.generator_g)
        assert masked.ciphertext == curve.addition(
            card.point, curve.multiplication(12345, shared_key.point))

    def test_valid_proof(self, pp, shared_key, card):
        alpha = pp.curve.rand_gen.get_random_value()
        masked, proof = toolbox.mask(pp, shared_key, card, alpha)
        assert toolbox.verify_mask(pp, shared_key, card, masked, proof)

    def test_wrong_card(self, pp, shared_key, card, card_encoding):
        masked, proof = toolbox.mask(pp, shared_key, card, 777)
        other = card_encoding.cards()[4]
        assert not toolbox.verify_mask(pp, shared_key, other, masked, proof)

    def test_tampered_cipher(self, pp, curve, shared_key, card):
        masked, proof = toolbox.mask(pp, shared_key, card, 777)
        forged = masked._replace(
            ciphertext=curve.addition(masked.ciphertext, pp.generator_g))
        assert not toolbox.verify_mask(pp, shared_key, card, forged, proof)

    def test_tampered_challenge(self, pp, shared_key, card):
        masked, proof = toolbox.mask(pp, shared_key, card, 777)
        forged = proof._replace(challenge=(proof.challenge + 1)
                                % pp.curve.order)
        assert not toolbox.verify_mask(pp, shared_key, card, masked, forged)

    def test_fresh_masking_differs(self, pp, shared_key, card):
        first, _ = toolbox.mask(pp, shared_key, card, 11)
        second, _ = toolbox.mask(pp, shared_key, card, 12)
        assert first != second

    @pytest.mark.parametrize("alpha", [0, -1, None])
    def test_invalid_alpha(self, pp, shared_key, card, alpha):
        if alpha is None:
            alpha = pp.curve.order
        with pytest.raises(CryptographicError):
            toolbox.mask(pp, shared_key, card, alpha)

    def test_identity_shared_key(self, pp, curve, card):
        with pytest.raises(CryptographicError):
            toolbox.mask(pp, AggregatePublicKey(curve.IDENTITY), card, 5)

    def test_negative_card_index(self, pp, shared_key, card):
        with pytest.raises(InvalidCardIndex):
            toolbox.mask(pp, shared_key, Card(card.point, -1), 5)

    def test_wrong_type(self, pp, shared_key, card):
        with pytest.raises(InvalidParameters):
            toolbox.mask(pp, shared_key.point, card, 5)

    def test_mask_deck_length_mismatch(self, pp, shared_key, card_encoding):
        with pytest.raises(InvalidParameters):
            toolbox.mask_deck(pp, shared_key, card_encoding.cards(), [1, 2])


class TestRemask:

    def test_valid_proof(self, pp, shared_key, masked_deck):
        remasked, proof = toolbox.remask(pp, shared_key, masked_deck[0], 99)
        assert toolbox.verify_remask(pp, shared_key, masked_deck[0],
                                     remasked, proof)

    def test_cipher_changes(self, pp, shared_key, masked_deck):
        remasked, _ = toolbox.remask(pp, shared_key, masked_deck[0], 99)
        assert remasked != masked_deck[0]

    def test_plaintext_preserved(self, pp, shared_key, masked_deck, reveal,
                                 card_encoding):
        remasked, _ = toolbox.remask(pp, shared_key, masked_deck[2], 4242)
        card = toolbox.unmask(pp, reveal(remasked), remasked, card_encoding)
        assert card == card_encoding.cards()[2]

    def test_wrong_original(self, pp, shared_key, masked_deck):
        remasked, proof = toolbox.remask(pp, shared_key, masked_deck[0], 99)
        assert not toolbox.verify_remask(pp, shared_key, masked_deck[1],
                                         remasked, proof)

    def test_remasked_with_other_key(self, pp, curve, shared_key, masked_deck):
        other = AggregatePublicKey(curve.multiplication(3, shared_key.point))
        remasked, proof = toolbox.remask(pp, other, masked_deck[0], 99)
        assert not toolbox.verify_remask(pp, shared_key, masked_deck[0],
                                         remasked, proof)

    def test_unchanged_cipher_rejected(self, pp, shared_key, masked_deck):
        _, proof = toolbox.remask(pp, shared_key, masked_deck[0], 99)
        assert not toolbox.verify_remask(pp, shared_key, masked_deck[0],
                                         masked_deck[0], proof)

    def test_invalid_alpha(self, pp, shared_key, masked_deck):
        with pytest.raises(CryptographicError):
            toolbox.remask(pp, shared_key, masked_deck[0], 0)

    def test_wrong_type(self, pp, shared_key, masked_deck):
        with pytest.raises(InvalidParameters):
            toolbox.remask(pp, shared_key, tuple(masked_deck[0]) + (1,), 5)

    def test_masked_card_is_immutable(self, masked_deck):
        with pytest.raises(AttributeError):
            masked_deck[0].randomness = None
        assert isinstance(masked_deck[0], MaskedCard)


def off_curve(curve, point):
    return ShortPoint(point.x, (point.y + 1) % curve.prime)


class TestOffCurveInputs:

    def test_verify_mask_ciphertext(self, pp, curve, shared_key, card):
        masked, proof = toolbox.mask(pp, shared_key, card, 777)
        forged = masked._replace(ciphertext=off_curve(curve,
                                                      masked.ciphertext))
        with pytest.raises(CryptographicError):
            toolbox.verify_mask(pp, shared_key, card, forged, proof)

    def test_verify_mask_card(self, pp, curve, shared_key, card):
        masked, proof = toolbox.mask(pp, shared_key, card, 777)
        forged = Card(off_curve(curve, card.point), card.index)
        with pytest.raises(CryptographicError):
            toolbox.verify_mask(pp, shared_key, forged, masked, proof)

    def test_remask(self, pp, curve, shared_key, masked_deck):
        forged = masked_deck[0]._replace(
            randomness=off_curve(curve, masked_deck[0].randomness))
        with pytest.raises(CryptographicError):
            toolbox.remask(pp, shared_key, forged, 99)

    @pytest.mark.parametrize("which", ["original", "remasked"])
    def test_verify_remask(self, pp, curve, shared_key, masked_deck, which):
        original = masked_deck[0]
        remasked, proof = toolbox.remask(pp, shared_key, original, 99)
        if which == "original":
            original = original._replace(
                ciphertext=off_curve(curve, original.ciphertext))
        else:
            remasked = remasked._replace(
                ciphertext=off_curve(curve, remasked.ciphertext))
        with pytest.raises(CryptographicError):
            toolbox.verify_remask(pp, shared_key, original, remasked, proof)

    def test_errors_share_base_class(self, pp, curve, shared_key, card):
        masked, proof = toolbox.mask(pp, shared_key, card, 777)
        forged = masked._replace(ciphertext=off_curve(curve,
                                                      masked.ciphertext))
        with pytest.raises(MentalPokerError):
            toolbox.verify_mask(pp, shared_key, card, forged, proof)

    def test_curve_arithmetic(self, curve):
        with pytest.raises(CryptographicError):
            curve.addition(off_curve(curve, curve.generator), curve.generator)
