# ! /usr/bin/env python
# -*- coding: utf-8 -*-
# ===================================================================
# encoding.py
#
# 18.10.2026
#
# @desc: Byte encoding of cards and proofs for transport between
#        players. Coordinates and scalars are fixed-width big-endian
#        integers, width = byte length of the field prime (32 for
#        secp256k1). The point at infinity is encoded as zeros.
#
#        DLEQ proof (masking/remasking/reveal): P.x P.y Q.x Q.y c e
#        key ownership proof:                   R.x R.y c e
#        masked card:                           c1.x c1.y c2.x c2.y
#        shuffle proof: six 4-byte counts, then the fields in order
# ===================================================================
from ECCMP.datatypes import (MaskedCard, OpeningProof, ZKProofDLEQ,
                             ZKProofKeyOwnership, ZKProofShuffle)
from ECCMP.errors import InvalidParameters

COUNT_BYTES = 4


class _Reader:
    """Sequential reader over an encoded byte string"""
    def __init__(self, curve, data):
        self.curve = curve
        self.data = bytes(data)
        self.offset = 0

    def take(self, size):
        if self.offset + size > len(self.data):
            raise InvalidParameters(
                "Encoding truncated at offset {}".format(self.offset))
        var0 = self.data[self.offset:self.offset + size]
        self.offset += size
        return var0

    def scalar(self):
        return int.from_bytes(self.take(self.curve.width), "big")

    def point(self):
        return self.curve.decode_point(self.take(2 * self.curve.width))

    def count(self):
        return int.from_bytes(self.take(COUNT_BYTES), "big")

    def finish(self):
        if self.offset != len(self.data):
            raise InvalidParameters("{} trailing bytes in encoding".format(
                len(self.data) - self.offset))


def _expect_length(curve, data, fields):
    expected = fields * curve.width
    if len(data) != expected:
        raise InvalidParameters(
            "Invalid byte array length: expected {}, got {}".format(
                expected, len(data)))


def encode_dleq_proof(curve, proof):
    """Encode a masking, remasking or reveal proof

    Args:
        curve (Fastecdsa): elliptic curve
        proof (ZKProofDLEQ): proof

    Returns:
        bytes: 6*width bytes, 192 on secp256k1
    """
    return curve.encode_point(proof.commitment_g) + \
        curve.encode_point(proof.commitment_h) + \
        curve.encode_int(proof.challenge) + curve.encode_int(proof.response)


def decode_dleq_proof(curve, data):
    """Inverse of encode_dleq_proof"""
    _expect_length(curve, data, 6)
    reader = _Reader(curve, data)
    return ZKProofDLEQ(reader.point(), reader.point(), reader.scalar(),
                       reader.scalar())


def encode_key_ownership_proof(curve, proof):
    """Encode a key ownership proof

    Returns:
        bytes: 4*width bytes
    """
    return curve.encode_point(proof.commitment) + \
        curve.encode_int(proof.challenge) + curve.encode_int(proof.response)


def decode_key_ownership_proof(curve, data):
    """Inverse of encode_key_ownership_proof"""
    _expect_length(curve, data, 4)
    reader = _Reader(curve, data)
    return ZKProofKeyOwnership(reader.point(), reader.scalar(),
                               reader.scalar())


def encode_masked_card(curve, card):
    return curve.encode_point(card.randomness) + \
        curve.encode_point(card.ciphertext)


def decode_masked_card(curve, data):
    _expect_length(curve, data, 4)
    reader = _Reader(curve, data)
    return MaskedCard(reader.point(), reader.point())


def encode_deck(curve, deck):
    """Count followed by the encoded masked cards"""
    return len(deck).to_bytes(COUNT_BYTES, "big") + \
        b"".join(encode_masked_card(curve, card) for card in deck)


def decode_deck(curve, data):
    reader = _Reader(curve, data)
    deck = [MaskedCard(reader.point(), reader.point())
            for _ in range(reader.count())]
    reader.finish()
    return deck


def encode_shuffle_proof(curve, proof):
    """Encode a shuffle proof

    Args:
        curve (Fastecdsa): elliptic curve
        proof (ZKProofShuffle): proof

    Returns:
        bytes
    """
    var0 = bytearray()
    for field in proof:
        var0 += len(field).to_bytes(COUNT_BYTES, "big")

    var0 += b"".join(curve.encode_point(c) for c in proof.commitments)
    var0 += b"".join(curve.encode_int(c) for c in proof.challenges)
    var0 += b"".join(curve.encode_int(r) for r in proof.responses)
    var0 += b"".join(curve.encode_point(c)
                     for c in proof.permutation_commitments)
    var0 += b"".join(curve.encode_int(e)
                     for e in proof.polynomial_evaluations)
    for opening in proof.opening_proofs:
        var0 += curve.encode_point(opening.commitment)
        var0 += curve.encode_int(opening.opening)
        var0 += curve.encode_int(opening.randomness)
    return bytes(var0)


def decode_shuffle_proof(curve, data):
    """Inverse of encode_shuffle_proof"""
    reader = _Reader(curve, data)
    counts = [reader.count() for _ in ZKProofShuffle._fields]

    commitments = tuple(reader.point() for _ in range(counts[0]))
    challenges = tuple(reader.scalar() for _ in range(counts[1]))
    responses = tuple(reader.scalar() for _ in range(counts[2]))
    permutation_commitments = tuple(reader.point()
                                    for _ in range(counts[3]))
    evaluations = tuple(reader.scalar() for _ in range(counts[4]))
    openings = tuple(OpeningProof(reader.point(), reader.scalar(),
                                  reader.scalar())
                     for _ in range(counts[5]))
    reader.finish()
    return ZKProofShuffle(commitments, challenges, responses,
                          permutation_commitments, evaluations, openings)
