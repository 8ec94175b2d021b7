# ! /usr/bin/env python
# -*- coding: utf-8 -*-
# ===================================================================
# datatypes.py
#
# 18.10.2026
#
# @desc: Game parameters, keys, cards and proof values exchanged between
#        players. All values are immutable, every protocol step creates
#        new ones.
# ===================================================================
from typing import NamedTuple, Optional, Tuple

from ECCMP.eccwrapper import Fastecdsa, ShortPoint
from ECCMP.errors import InvalidCardIndex, InvalidPermutation


class Parameters(NamedTuple):
    """Game parameters, created once by setup

    Attributes:
        m (int): number of cards in the deck
        n (int): number of players
        curve (Fastecdsa): elliptic curve
        generator_g (ShortPoint): primary generator G
        generator_h (ShortPoint): secondary generator H, log_G(H) unknown
        commit_key (Tuple[ShortPoint]): pedersen commitment generators
        commit_h (ShortPoint): pedersen blinding generator
    """
    m: int
    n: int
    curve: Fastecdsa
    generator_g: ShortPoint
    generator_h: ShortPoint
    commit_key: Tuple[ShortPoint, ...]
    commit_h: ShortPoint


class PlayerPublicKey(NamedTuple):
    point: ShortPoint


class PlayerSecretKey(NamedTuple):
    scalar: int

    def __repr__(self):
        return "PlayerSecretKey(<hidden>)"


class AggregatePublicKey(NamedTuple):
    point: ShortPoint


class Card(NamedTuple):
    """Plaintext card, a curve point and its index in the card encoding"""
    point: ShortPoint
    index: int


class MaskedCard(NamedTuple):
    """ElGamal cipher (c1, c2) = (alpha*G, card + alpha*shared_key)"""
    randomness: ShortPoint
    ciphertext: ShortPoint


class RevealToken(NamedTuple):
    token: ShortPoint


class ZKProofKeyOwnership(NamedTuple):
    commitment: ShortPoint
    challenge: int
    response: int


class ZKProofDLEQ(NamedTuple):
    """Equality of discrete logarithms: same x in X = x*A and Y = x*B"""
    commitment_g: ShortPoint
    commitment_h: ShortPoint
    challenge: int
    response: int


# masking, remasking and reveal proofs share the same shape
ZKProofMasking = ZKProofDLEQ
ZKProofRemasking = ZKProofDLEQ
ZKProofReveal = ZKProofDLEQ


class Permutation(NamedTuple):
    mapping: Tuple[int, ...]
    size: int


class OpeningProof(NamedTuple):
    commitment: ShortPoint
    opening: int
    randomness: int


class ZKProofShuffle(NamedTuple):
    """Shuffle argument

    Attributes:
        commitments: commitments to the permutation polynomial coefficients
        challenges: the single Fiat-Shamir challenge
        responses: coefficient responses followed by masking factor
            responses
        permutation_commitments: commitments to the masking factors
        polynomial_evaluations: permutation polynomial at the challenge
        opening_proofs: opening of every coefficient commitment
    """
    commitments: Tuple[ShortPoint, ...]
    challenges: Tuple[int, ...]
    responses: Tuple[int, ...]
    permutation_commitments: Tuple[ShortPoint, ...]
    polynomial_evaluations: Tuple[int, ...]
    opening_proofs: Tuple[OpeningProof, ...]


class ShuffleStatement(NamedTuple):
    original_deck: Tuple[MaskedCard, ...]
    shuffled_deck: Tuple[MaskedCard, ...]


class ShuffleWitness(NamedTuple):
    permutation: Permutation
    masking_factors: Tuple[int, ...]


def create_card_index(index):
    """Validate a deck position

    Args:
        index (int): non-negative position

    Returns:
        int: index
    """
    if not isinstance(index, int) or isinstance(index, bool) or index < 0:
        raise InvalidCardIndex(
            "Invalid card index: {}. Must be a non-negative integer.".format(
                index))
    return index


def create_permutation(mapping, size: Optional[int] = None):
    """Validate that mapping is a bijection on [0, size)

    Args:
        mapping (Sequence[int]): mapping[i] is the source position of the
            card placed at position i
        size (int): expected size, defaults to len(mapping)

    Returns:
        Permutation
    """
    mapping = tuple(mapping)
    if size is None:
        size = len(mapping)
    if len(mapping) != size:
        raise InvalidPermutation(
            "Invalid permutation: {} entries for size {}".format(
                len(mapping), size))

    seen = set()
    for value in mapping:
        if not isinstance(value, int) or isinstance(value, bool) \
                or not 0 <= value < size:
            raise InvalidPermutation(
                "Invalid permutation: value {} is out of range [0, {}]".format(
                    value, size - 1))
        if value in seen:
            raise InvalidPermutation(
                "Invalid permutation: duplicate value {}".format(value))
        seen.add(value)

    return Permutation(mapping, size)
