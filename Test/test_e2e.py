"""
End-to-end game: setup, key aggregation, masking, one shuffle per player,
private dealing and opening of the remaining cards.
"""

import logging

from ECCMP.cards import CardEncoding, create_standard_deck
import ECCMP.encoding as encoding
import ECCMP.toolbox as toolbox

NUM_CARDS = 8
INFOS = [b"p0", b"p1", b"p2", b"p3"]


def test_full_game(caplog):
    caplog.set_level(logging.INFO, logger="ECCMP")
    pp = toolbox.setup(NUM_CARDS, len(INFOS))
    curve = pp.curve
    card_encoding = CardEncoding(curve, create_standard_deck()[:NUM_CARDS])
    assert "Set up game for 8 cards and 4 players" in caplog.text

    keys = [toolbox.player_keygen(pp) for _ in INFOS]
    entries = []
    for (pk, sk), info in zip(keys, INFOS):
        proof = toolbox.prove_key_ownership(pp, pk, sk, info)
        data = encoding.encode_key_ownership_proof(curve, proof)
        entries.append(
            (pk, encoding.decode_key_ownership_proof(curve, data), info))
    shared_key = toolbox.compute_aggregate_key(pp, entries)

    deck, proofs = toolbox.mask_deck(pp, shared_key, card_encoding.cards())
    for card, masked, proof in zip(card_encoding.cards(), deck, proofs):
        assert toolbox.verify_mask(pp, shared_key, card, masked, proof)

    for _ in INFOS:
        permutation = toolbox.random_permutation(pp, NUM_CARDS)
        factors = toolbox.random_masking_factors(pp, NUM_CARDS)
        shuffled, proof = toolbox.shuffle_and_remask(pp, shared_key, deck,
                                                     factors, permutation)
        proof = encoding.decode_shuffle_proof(
            curve, encoding.encode_shuffle_proof(curve, proof))
        assert toolbox.verify_shuffle(pp, shared_key, deck, shuffled, proof)
        deck = shuffled

    revealed = []
    for masked in deck:
        tokens = []
        for pk, sk in keys:
            token, proof = toolbox.compute_reveal_token(pp, sk, pk, masked)
            proof = encoding.decode_dleq_proof(
                curve, encoding.encode_dleq_proof(curve, proof))
            tokens.append((token, proof, pk))
        revealed.append(toolbox.unmask(pp, tokens, masked, card_encoding))

    assert sorted(card.index for card in revealed) == list(range(NUM_CARDS))
    assert all(card_encoding.point_to_card(card.point) == card
               for card in revealed)
