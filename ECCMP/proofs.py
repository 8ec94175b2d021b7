# ! /usr/bin/env python
# -*- coding: utf-8 -*-
# ===================================================================
# proofs.py
#
# 18.10.2026
#
# @desc: Non-interactive zero-knowledge proofs made non-interactive with
#        the Fiat-Shamir heuristic:
#        POK  - Schnorr proof of knowledge of x with X = x*G, bound to a
#               context point (e.g. the announced player identity)
#        PEQ  - Chaum-Pedersen proof of equality of discrete logarithms,
#               x with X = x*A and Y = x*B for arbitrary bases A, B. Used
#               for masking (G, pk), remasking (G, pk) and reveal (G, c1).
# ===================================================================
import logging

from ECCMP.datatypes import ZKProofDLEQ, ZKProofKeyOwnership

logger = logging.getLogger(__name__)


class PokProver:
    """Prover for knowledge of the discrete logarithm of public to base
    generator

    Attributes:
        curve (Fastecdsa): elliptic curve
        generator (ShortPoint): base point
        public (ShortPoint): public = secret*generator
        secret (int): discrete logarithm
        context (ShortPoint): point bound into the challenge
    """
    def __init__(self, curve, generator, public, secret, context):
        self.curve = curve
        self.generator = generator
        self.public = public
        self.secret = secret
        self.context = context

    def pok_nizk(self):
        """Commitment R = r*G, challenge c = H(R, X, G, context),
        response s = r + c*x mod order

        Returns:
            ZKProofKeyOwnership
        """
        nonce = self.curve.rand_gen.get_random_value()
        commitment = self.curve.multiplication(nonce, self.generator)
        challenge = self.curve.hash_points(commitment, self.public,
                                           self.generator, self.context)
        response = (nonce + challenge * self.secret) % self.curve.order
        return ZKProofKeyOwnership(commitment, challenge, response)


class PokVerifier:
    """Verifier for PokProver"""
    def __init__(self, curve, generator, public, context):
        self.curve = curve
        self.generator = generator
        self.public = public
        self.context = context

    def pok_nizk(self, proof):
        """Check c == H(R, X, G, context) and s*G == R + c*X

        Args:
            proof (ZKProofKeyOwnership): proof

        Returns:
            bool: True if verification successful, False else
        """
        if not self.curve.is_valid_point(proof.commitment):
            return False
        if not (self.curve.is_valid_scalar(proof.challenge, allow_zero=True)
                and self.curve.is_valid_scalar(proof.response,
                                               allow_zero=True)):
            return False

        expected = self.curve.hash_points(proof.commitment, self.public,
                                          self.generator, self.context)
        if expected != proof.challenge:
            logger.debug("Key ownership challenge mismatch")
            return False

        lhs = self.curve.multiplication(proof.response, self.generator)
        rhs = self.curve.addition(
            proof.commitment,
            self.curve.multiplication(proof.challenge, self.public))
        return lhs == rhs


class PeqProver:
    """Prover for equality of discrete logarithms x = log_A(X) = log_B(Y)

    Attributes:
        curve (Fastecdsa): elliptic curve
        base_a (ShortPoint): first base
        base_b (ShortPoint): second base
        image_a (ShortPoint): X = x*A
        image_b (ShortPoint): Y = x*B
        secret (int): x
    """
    def __init__(self, curve, base_a, base_b, image_a, image_b, secret):
        self.curve = curve
        self.base_a = base_a
        self.base_b = base_b
        self.image_a = image_a
        self.image_b = image_b
        self.secret = secret

    def peq_nizk(self):
        """Commitments P = r*A, Q = r*B, challenge c = H(P, Q, X, Y),
        response e = r + c*x mod order

        Returns:
            ZKProofDLEQ
        """
        nonce = self.curve.rand_gen.get_random_value()
        commitment_a = self.curve.multiplication(nonce, self.base_a)
        commitment_b = self.curve.multiplication(nonce, self.base_b)
        challenge = self.curve.hash_points(commitment_a, commitment_b,
                                           self.image_a, self.image_b)
        response = (nonce + challenge * self.secret) % self.curve.order
        return ZKProofDLEQ(commitment_a, commitment_b, challenge, response)


class PeqVerifier:
    """Verifier for PeqProver"""
    def __init__(self, curve, base_a, base_b, image_a, image_b):
        self.curve = curve
        self.base_a = base_a
        self.base_b = base_b
        self.image_a = image_a
        self.image_b = image_b

    def peq_nizk(self, proof):
        """Check c == H(P, Q, X, Y), e*A == P + c*X and e*B == Q + c*Y

        Args:
            proof (ZKProofDLEQ): proof

        Returns:
            bool: True if verification successful, False else
        """
        if not (self.curve.is_valid_point(proof.commitment_g)
                and self.curve.is_valid_point(proof.commitment_h)):
            return False
        if not (self.curve.is_valid_point(self.image_a)
                and self.curve.is_valid_point(self.image_b)):
            return False
        if not (self.curve.is_valid_scalar(proof.challenge, allow_zero=True)
                and self.curve.is_valid_scalar(proof.response,
                                               allow_zero=True)):
            return False

        expected = self.curve.hash_points(proof.commitment_g,
                                          proof.commitment_h,
                                          self.image_a, self.image_b)
        if expected != proof.challenge:
            logger.debug("Equality proof challenge mismatch")
            return False

        lhs1 = self.curve.multiplication(proof.response, self.base_a)
        rhs1 = self.curve.addition(
            proof.commitment_g,
            self.curve.multiplication(proof.challenge, self.image_a))

        lhs2 = self.curve.multiplication(proof.response, self.base_b)
        rhs2 = self.curve.addition(
            proof.commitment_h,
            self.curve.multiplication(proof.challenge, self.image_b))

        return lhs1 == rhs1 and lhs2 == rhs2
