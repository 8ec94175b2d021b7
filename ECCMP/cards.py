# ! /usr/bin/env python
# -*- coding: utf-8 -*-
# ===================================================================
# cards.py
#
# 18.10.2026
#
# @desc: Classic playing cards and their representation as elliptic
#        curve points. Card i of the deck is forced to the curve as
#        (i+1)*G, so the encoding is a fixed bijection known to every
#        player.
# ===================================================================
from enum import Enum
from typing import NamedTuple

from ECCMP.datatypes import Card, create_card_index
from ECCMP.errors import InvalidCardIndex


class Suite(Enum):
    CLUB = "♣"
    DIAMOND = "♦"
    HEART = "♥"
    SPADE = "♠"


class Value(Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


class ClassicCard(NamedTuple):
    value: Value
    suite: Suite

    def __str__(self):
        return format_card(self)


def format_card(card):
    """e.g. 10 of hearts -> '10♥'"""
    return card.value.value + card.suite.value


def create_standard_deck():
    """52 cards, all values of clubs, then diamonds, hearts and spades

    Returns:
        List[ClassicCard]
    """
    return [ClassicCard(value, suite) for suite in Suite for value in Value]


class CardEncoding:
    """Bijection between classic cards and curve points

    Attributes:
        curve (Fastecdsa): elliptic curve
        deck (List[ClassicCard]): cards in index order
    """
    def __init__(self, curve, deck=None):
        """
        Args:
            curve (Fastecdsa): elliptic curve
            deck (List[ClassicCard]): cards to encode, default standard deck
        """
        self.curve = curve
        self.deck = list(deck) if deck is not None else create_standard_deck()

        self._cards = []
        self._by_point = {}
        self._by_card = {}
        for i, classic in enumerate(self.deck):
            card = Card(self.curve.multiplication(i + 1,
                                                  self.curve.generator),
                        create_card_index(i))
            self._cards.append(card)
            self._by_point[card.point] = card
            self._by_card[classic] = card

    def __len__(self):
        return len(self._cards)

    def cards(self):
        """All encoded cards in index order

        Returns:
            List[Card]
        """
        return list(self._cards)

    def card_to_point(self, card):
        """Curve point of a Card or ClassicCard

        Args:
            card (Card | ClassicCard): card

        Returns:
            ShortPoint
        """
        if isinstance(card, ClassicCard):
            if card not in self._by_card:
                raise InvalidCardIndex(
                    "Card {} is not part of the deck".format(card))
            return self._by_card[card].point

        index = create_card_index(card.index)
        if index >= len(self._cards):
            raise InvalidCardIndex(
                "Invalid card index: {}. Deck has {} cards.".format(
                    index, len(self._cards)))
        return self._cards[index].point

    def point_to_card(self, point):
        """Card for a curve point

        Args:
            point (ShortPoint): unmasked card point

        Returns:
            Card or None if the point encodes no card
        """
        return self._by_point.get(point)

    def card_by_index(self, index):
        """ClassicCard at index, None if out of range"""
        if 0 <= index < len(self.deck):
            return self.deck[index]
        return None

    def index_of(self, classic):
        """Index of a ClassicCard, None if it is not part of the deck"""
        card = self._by_card.get(classic)
        return None if card is None else card.index

    def validate(self):
        """Check that the encoding is a bijection

        Returns:
            bool: True if every card maps to a distinct point and back
        """
        if len(self._by_point) != len(self.deck) or \
                len(self._by_card) != len(self.deck):
            return False
        for i, classic in enumerate(self.deck):
            card = self._by_card[classic]
            if card.index != i or self._by_point.get(card.point) != card:
                return False
        return True
