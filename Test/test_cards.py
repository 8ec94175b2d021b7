"""
Tests for classic cards and their curve point encoding.
"""

import pytest

from ECCMP.cards import (CardEncoding, ClassicCard, Suite, Value,
                         create_standard_deck, format_card)
from ECCMP.datatypes import Card
from ECCMP.errors import InvalidCardIndex


@pytest.fixture(scope="module")
def full_encoding(curve):
    return CardEncoding(curve)


class TestClassicCard:

    def test_standard_deck(self):
        deck = create_standard_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52
        assert deck[0] == ClassicCard(Value.TWO, Suite.CLUB)
        assert deck[-1] == ClassicCard(Value.ACE, Suite.SPADE)

    def test_format(self):
        assert format_card(ClassicCard(Value.TEN, Suite.HEART)) == "10♥"
        assert str(ClassicCard(Value.QUEEN, Suite.SPADE)) == "Q♠"


class TestCardEncoding:

    def test_bijection(self, full_encoding):
        assert len(full_encoding) == 52
        assert full_encoding.validate()

    def test_index_points(self, curve, full_encoding):
        cards = full_encoding.cards()
        assert cards[0].point == curve.generator
        assert cards[9].point == curve.multiplication(10, curve.generator)
        assert [c.index for c in cards] == list(range(52))

    def test_round_trip(self, full_encoding):
        classic = ClassicCard(Value.KING, Suite.DIAMOND)
        point = full_encoding.card_to_point(classic)
        card = full_encoding.point_to_card(point)
        assert full_encoding.card_by_index(card.index) == classic
        assert full_encoding.index_of(classic) == card.index

    def test_card_to_point_by_card(self, full_encoding):
        card = full_encoding.cards()[7]
        assert full_encoding.card_to_point(card) == card.point

    @pytest.mark.parametrize("index", [-1, 52, 100])
    def test_card_to_point_invalid_index(self, curve, full_encoding, index):
        with pytest.raises(InvalidCardIndex):
            full_encoding.card_to_point(Card(curve.generator, index))

    def test_card_to_point_unknown_card(self, card_encoding):
        with pytest.raises(InvalidCardIndex):
            card_encoding.card_to_point(ClassicCard(Value.ACE, Suite.SPADE))

    def test_unknown_point(self, curve, full_encoding):
        point = curve.multiplication(1000, curve.generator)
        assert full_encoding.point_to_card(point) is None

    def test_out_of_range_index(self, full_encoding):
        assert full_encoding.card_by_index(52) is None
        assert full_encoding.card_by_index(-1) is None

    def test_partial_deck(self, card_encoding):
        assert len(card_encoding) == 8
        assert card_encoding.index_of(
            ClassicCard(Value.ACE, Suite.SPADE)) is None

    def test_duplicate_cards_fail_validation(self, curve):
        card = ClassicCard(Value.TWO, Suite.CLUB)
        assert not CardEncoding(curve, [card, card]).validate()
