# ! /usr/bin/env python
# -*- coding: utf-8 -*-
# ===================================================================
# bayergroth.py
#
# 18.10.2026
#
# @desc: Shuffle argument in the style of Stephanie Bayer and Jens Groth
#        for: shuffled_deck[i] = original_deck[pi[i]] + Enc_pk(O, rho[i]).
#        The prover commits to the coefficients of the permutation
#        polynomial and to the masking factors, derives one Fiat-Shamir
#        challenge and answers with linear responses.
#
#        Known limitation: the verifier checks the challenge, the
#        commitment openings and the structure of proof and decks, it
#        does NOT check algebraically that the committed polynomial
#        relates the two decks. Callers must not rely on full soundness.
# ===================================================================
import logging

from ECCMP.datatypes import OpeningProof, ZKProofShuffle
from ECCMP.eccwrapper import curve_points_to_list
from ECCMP.errors import InvalidParameters
from ECCMP.polynomial import add_mod, mul_mod, permutation_polynomial

logger = logging.getLogger(__name__)


class BayGroProver:
    """Prover of the shuffle argument

    Attributes:
        curve (Fastecdsa): elliptic curve
        pedersen (Pedersen): commitment scheme value*G + blinding*h
        statement (ShuffleStatement): original and shuffled deck
        witness (ShuffleWitness): permutation and masking factors
    """
    def __init__(self, curve, pedersen, statement, witness):
        """
        Args:
            curve (Fastecdsa): elliptic curve
            pedersen (Pedersen): single value pedersen commitment
            statement (ShuffleStatement): decks before and after the
                permutation and re-masking
            witness (ShuffleWitness): permutation and random parameters for
                re-masking
        """
        self.N = len(statement.original_deck)
        if witness.permutation.size != self.N or \
                len(witness.masking_factors) != self.N:
            raise InvalidParameters(
                "Witness dimensions do not match statement")

        self.curve = curve
        self.order = curve.order
        self.pedersen = pedersen
        self.ciphers_in = statement.original_deck
        self.ciphers_out = statement.shuffled_deck
        self.pi = witness.permutation.mapping
        self.rho = witness.masking_factors

        self.poly = None
        self.r_a, self.c_a = (None,) * 2
        self.r_rho, self.c_rho = (None,) * 2
        self.x = None

    def commit_polynomial(self):
        """Interpolate the permutation polynomial and commit to each
        coefficient with fresh randomness

        Returns:
            List[ShortPoint]: coefficient commitments
        """
        self.poly = permutation_polynomial(self.pi, self.order)
        self.r_a = self.curve.rand_gen.get_random_array(len(self.poly))
        self.c_a = self.pedersen.commit_values(self.poly.coeffs, self.r_a)
        return self.c_a

    def commit_masking_factors(self):
        """Commit to each masking factor with fresh randomness

        Returns:
            List[ShortPoint]: masking factor commitments
        """
        self.r_rho = self.curve.rand_gen.get_random_array(self.N)
        self.c_rho = self.pedersen.commit_values(self.rho, self.r_rho)
        return self.c_rho

    def responses(self):
        """response_i = r_i + x*value_i, coefficients first

        Returns:
            List[int]
        """
        var0 = []
        for value, r in zip(self.poly.coeffs, self.r_a):
            var0.append(add_mod(r, mul_mod(self.x, value, self.order),
                                self.order))
        for value, r in zip(self.rho, self.r_rho):
            var0.append(add_mod(r, mul_mod(self.x, value, self.order),
                                self.order))
        return var0

    def nizk_prover(self):
        """Non-interactive shuffle argument, challenge is generated by hash

        Returns:
            ZKProofShuffle: proof
        """
        self.commit_polynomial()
        self.commit_masking_factors()

        # x = H(C, C', c_A, c_rho)
        self.x = shuffle_challenge(self.curve, self.ciphers_in,
                                   self.ciphers_out, self.c_a, self.c_rho)

        evaluation = self.poly.evaluate(self.x)

        # opening values are disclosed in the clear
        openings = [OpeningProof(c, a, r) for c, a, r in
                    zip(self.c_a, self.poly.coeffs, self.r_a)]

        logger.debug("Created shuffle argument for %d cards", self.N)
        return ZKProofShuffle(tuple(self.c_a), (self.x,),
                              tuple(self.responses()), tuple(self.c_rho),
                              (evaluation,), tuple(openings))


class BayGroVerifier:
    """Verifier of the shuffle argument"""
    def __init__(self, curve, pedersen, statement):
        """
        Args:
            curve (Fastecdsa): elliptic curve
            pedersen (Pedersen): single value pedersen commitment
            statement (ShuffleStatement): decks before and after the
                permutation and re-masking
        """
        self.curve = curve
        self.pedersen = pedersen
        self.ciphers_in = statement.original_deck
        self.ciphers_out = statement.shuffled_deck
        self.N = len(self.ciphers_in)

    def verify_structure(self, proof):
        """Counts of commitments, responses and openings"""
        N = self.N
        return (len(proof.challenges) == 1
                and len(proof.commitments) == N
                and len(proof.permutation_commitments) == N
                and len(proof.responses) == 2 * N
                and len(proof.opening_proofs) == N
                and len(proof.polynomial_evaluations) >= 1
                and all(self.curve.is_valid_point(c) for c in
                        (*proof.commitments, *proof.permutation_commitments))
                and all(isinstance(o, OpeningProof)
                        for o in proof.opening_proofs))

    def verify_challenge(self, proof):
        """Recompute the Fiat-Shamir challenge"""
        expected = shuffle_challenge(self.curve, self.ciphers_in,
                                     self.ciphers_out, proof.commitments,
                                     proof.permutation_commitments)
        return expected == proof.challenges[0]

    def verify_openings(self, proof):
        """Recompute opening*G + randomness*h for every coefficient
        commitment"""
        for i, opening in enumerate(proof.opening_proofs):
            if not (self.curve.is_valid_scalar(opening.opening,
                                               allow_zero=True)
                    and self.curve.is_valid_scalar(opening.randomness,
                                                   allow_zero=True)):
                return False
            if opening.commitment != proof.commitments[i]:
                return False
            if not self.pedersen.verify(opening.commitment, opening.opening,
                                        opening.randomness):
                return False
        return True

    def verify_ranges(self, proof):
        """All scalars in range 0 to order-1"""
        return all(self.curve.is_valid_scalar(s, allow_zero=True) for s in
                   (*proof.challenges, *proof.responses,
                    *proof.polynomial_evaluations))

    def verify_decks(self):
        """Equal deck lengths and no identity points in any card"""
        if len(self.ciphers_out) != self.N:
            return False
        for card in (*self.ciphers_in, *self.ciphers_out):
            if not (self.curve.is_valid_point(card.randomness)
                    and self.curve.is_valid_point(card.ciphertext)):
                return False
        return True

    def nizk_verifier(self, proof):
        """Verification of the non-interactive shuffle argument

        Args:
            proof (ZKProofShuffle): proof

        Returns:
            bool: True if verification successful, False else
        """
        if not self.verify_decks():
            logger.debug("Shuffle rejected: malformed decks")
            return False
        if not self.verify_structure(proof):
            logger.debug("Shuffle rejected: malformed proof")
            return False
        if not self.verify_ranges(proof):
            logger.debug("Shuffle rejected: scalar out of range")
            return False
        if not self.verify_challenge(proof):
            logger.debug("Shuffle rejected: challenge mismatch")
            return False
        if not self.verify_openings(proof):
            logger.debug("Shuffle rejected: invalid commitment opening")
            return False
        return True


class Pedersen:
    """Pedersen commitment: com_ck(a_1,...,a_n;r) = g_1*a_1+...+g_n*a_n+h*r
    with randomness r. The shuffle argument uses one generator, g_1 = G.

    Attributes:
        Curve (Fastecdsa): elliptic curve
        gen_G_Curve (List[ShortPoint]): generators g_1,...g_n
        gen_H_Curve (ShortPoint): generator h
    """
    def __init__(self, gen, h, Curve):
        """
        Args:
            gen (List[ShortPoint]): value generators
            h (ShortPoint): blinding generator
            Curve (Fastecdsa): elliptic curve
        """
        self.Curve = Curve

        self.gen_G_Curve = list(gen)
        self.gen_H_Curve = h

    def commit_vector_value(self, a_v, r):
        """Commit to up to n values in a_v with randomness r

        Args:
            a_v (List[int]): elements to for commitment
            r (int): randomness

        Returns:
            ShortPoint: commitment
        """
        if len(a_v) > len(self.gen_G_Curve):
            raise InvalidParameters(
                "Cannot commit to {} values with {} generators".format(
                    len(a_v), len(self.gen_G_Curve)))

        var0 = self.Curve.multiplication(r, self.gen_H_Curve)
        for i in range(len(a_v)):
            var1 = self.Curve.multiplication(a_v[i], self.gen_G_Curve[i])
            var0 = self.Curve.addition(var0, var1)

        return var0

    def commit_values(self, values, r_v):
        """Commit to each value separately: values[i]*g_1 + r_v[i]*h

        Args:
            values (List[int]): values
            r_v (List[int]): randomness, one per value

        Returns:
            List[ShortPoint]: len(values) commitments
        """
        if len(values) != len(r_v):
            raise InvalidParameters("One randomness value per commitment")
        return [self.commit_vector_value([a], r) for a, r in zip(values, r_v)]

    def verify(self, commitment, value, r):
        """Check that (value, r) opens commitment

        Returns:
            bool
        """
        return self.commit_vector_value([value], r) == commitment


def shuffle_challenge(curve, ciphers_in, ciphers_out, c_a, c_rho):
    """x = H(C, C', c_A, c_rho) over all x and y coordinates"""
    return curve.rand_gen.get_challenge_from_hash(
        *ciphers_to_list(ciphers_in), *ciphers_to_list(ciphers_out),
        *curve_points_to_list(c_a), *curve_points_to_list(c_rho))


def ciphers_to_list(ciphers):
    """Fill list with elements from ciphers

    Args:
        ciphers (List[MaskedCard]): ciphers

    Returns:
        List[int]
    """
    var = []
    for var0 in ciphers:
        for var1 in var0:
            var.append(var1.x)
            var.append(var1.y)
    return var
