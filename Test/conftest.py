import pytest

from ECCMP.cards import CardEncoding, create_standard_deck
from ECCMP.eccwrapper import get_curve
import ECCMP.toolbox as toolbox

NUM_CARDS = 8
NUM_PLAYERS = 4
PLAYER_INFOS = [b"alice", b"bob", b"carol", b"dave"]


@pytest.fixture(scope="session")
def curve():
    return get_curve()


@pytest.fixture(scope="session")
def pp(curve):
    return toolbox.setup(NUM_CARDS, NUM_PLAYERS, curve)


@pytest.fixture(scope="session")
def players(pp):
    """(pk, sk, info) for every player"""
    var0 = []
    for info in PLAYER_INFOS:
        pk, sk = toolbox.player_keygen(pp)
        var0.append((pk, sk, info))
    return var0


@pytest.fixture(scope="session")
def shared_key(pp, players):
    entries = [(pk, toolbox.prove_key_ownership(pp, pk, sk, info), info)
               for pk, sk, info in players]
    return toolbox.compute_aggregate_key(pp, entries)


@pytest.fixture(scope="session")
def card_encoding(curve):
    return CardEncoding(curve, create_standard_deck()[:NUM_CARDS])


@pytest.fixture(scope="session")
def masked_deck(pp, shared_key, card_encoding):
    deck, _ = toolbox.mask_deck(pp, shared_key, card_encoding.cards())
    return deck


def reveal_tokens(pp, players, masked_card):
    """Reveal token entries of all players for masked_card"""
    var0 = []
    for pk, sk, _ in players:
        token, proof = toolbox.compute_reveal_token(pp, sk, pk, masked_card)
        var0.append((token, proof, pk))
    return var0


@pytest.fixture
def reveal(pp, players):
    return lambda masked_card: reveal_tokens(pp, players, masked_card)
