# ! /usr/bin/env python
# -*- coding: utf-8 -*-
# ===================================================================
# toolbox.py
#
# 18.10.2026
#
# @desc: Toolbox for mental poker using the elliptic curve ElGamal
#        scheme. Functions for parameter setup, key generation and key
#        ownership proofs, aggregate key computation, masking,
#        re-masking, reveal tokens, unmasking and verifiable shuffling.
#        Every function is stateless, all state is passed in and
#        returned as immutable values.
# ===================================================================
import logging

from ECCMP.bayergroth import BayGroProver, BayGroVerifier, Pedersen
from ECCMP.datatypes import (AggregatePublicKey, Card, MaskedCard,
                             Parameters, Permutation, PlayerPublicKey,
                             PlayerSecretKey, RevealToken, ShuffleStatement,
                             ShuffleWitness, ZKProofDLEQ, ZKProofKeyOwnership,
                             ZKProofShuffle, create_card_index,
                             create_permutation)
from ECCMP.eccwrapper import Fastecdsa, get_curve
from ECCMP.errors import (CryptographicError, InsufficientRevealTokens,
                          InvalidParameters, InvalidPermutation,
                          ProofVerificationFailed)
import ECCMP.proofs as proofs

logger = logging.getLogger(__name__)

TAG_GENERATOR_H = b"ECCMP.chaum-pedersen.H.v1"
TAG_COMMIT_KEY = b"ECCMP.pedersen.commit-key.v1"
TAG_COMMIT_H = b"ECCMP.pedersen.h.v1"


# setup -----------------------------------------------------------------------
def setup(m, n, curve=None):
    """Create the game parameters for a deck of m cards and n players.
    H, the commitment key and the blinding generator are derived by
    hash-to-curve, so no player knows their discrete logarithms.

    Args:
        m (int): number of cards
        n (int): number of players
        curve (Fastecdsa | str): elliptic curve or fastecdsa curve name,
            default secp256k1

    Returns:
        Parameters: game parameters
    """
    for name, value in (("deck size", m), ("player count", n)):
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise InvalidParameters("Invalid {}: {}".format(name, value))

    if curve is None or isinstance(curve, str):
        curve = get_curve() if curve is None else get_curve(curve)
    elif not isinstance(curve, Fastecdsa):
        raise InvalidParameters("Unsupported curve object: {!r}".format(curve))

    generator_h = curve.hash_to_point(TAG_GENERATOR_H)
    # commit_key is only published with the parameters, the shuffle argument
    # commits to single values with G and commit_h
    commit_key = tuple(curve.hash_to_point(TAG_COMMIT_KEY, i)
                       for i in range(m))
    commit_h = curve.hash_to_point(TAG_COMMIT_H)

    logger.info("Set up game for %d cards and %d players on %s", m, n,
                curve.name)
    return Parameters(m, n, curve, curve.generator, generator_h, commit_key,
                      commit_h)


# keygen ----------------------------------------------------------------------
def player_keygen(pp):
    """Generate secret key sk in range 1 to order-1 and public key
    pk = sk*G

    Args:
        pp (Parameters): game parameters

    Returns:
        PlayerPublicKey, PlayerSecretKey
    """
    _check_parameters(pp)
    secret_key = pp.curve.rand_gen.get_random_value()
    public_key = pp.curve.multiplication(secret_key, pp.generator_g)
    return PlayerPublicKey(public_key), PlayerSecretKey(secret_key)


def prove_key_ownership(pp, pk, sk, player_info):
    """Proof that pk = G*sk, bound to the announced player info

    Args:
        pp (Parameters): game parameters
        pk (PlayerPublicKey): public key
        sk (PlayerSecretKey): secret key
        player_info (bytes): public information about the player

    Returns:
        ZKProofKeyOwnership: proof
    """
    _check_parameters(pp)
    _check_key_pair(pp, pk, sk)
    prover = proofs.PokProver(pp.curve, pp.generator_g, pk.point, sk.scalar,
                              _player_info_point(pp, player_info))
    return prover.pok_nizk()


def verify_key_ownership(pp, pk, player_info, proof):
    """Verify a key ownership proof

    Args:
        pp (Parameters): game parameters
        pk (PlayerPublicKey): public key
        player_info (bytes): public information about the player
        proof (ZKProofKeyOwnership): proof

    Returns:
        bool: True if verification successful, False else
    """
    _check_parameters(pp)
    _check_type(pk, PlayerPublicKey, "public key")
    _check_type(proof, ZKProofKeyOwnership, "key ownership proof")
    _check_point(pp, pk.point, "public key")
    verifier = proofs.PokVerifier(pp.curve, pp.generator_g, pk.point,
                                  _player_info_point(pp, player_info))
    return verifier.pok_nizk(proof)


def compute_aggregate_key(pp, player_keys_proof_info):
    """Check proofs from all players, if all proofs are correct, combine
    all key shares to one public key pk = sum(pk_i)

    Args:
        pp (Parameters): game parameters
        player_keys_proof_info (List[Tuple[PlayerPublicKey,
            ZKProofKeyOwnership, bytes]]): keys, proofs and player infos

    Returns:
        AggregatePublicKey: shared key
    """
    _check_parameters(pp)
    entries = list(player_keys_proof_info)
    if not entries:
        raise InvalidParameters("No player keys provided")

    for i, (pk, proof, player_info) in enumerate(entries):
        if not verify_key_ownership(pp, pk, player_info, proof):
            logger.warning("Key ownership proof of player %d rejected", i)
            raise ProofVerificationFailed(
                "Invalid key ownership proof for player {}".format(i))

    var0 = pp.curve.sum_points(pk.point for pk, _, _ in entries)
    logger.debug("Aggregated %d public keys", len(entries))
    return AggregatePublicKey(var0)


# enc -------------------------------------------------------------------------
def mask(pp, shared_key, card, alpha):
    """Mask a card point: (c1, c2) = (alpha*G, card + alpha*shared_key),
    with a proof that the same alpha is used in both components

    Args:
        pp (Parameters): game parameters
        shared_key (AggregatePublicKey): aggregate public key
        card (Card): card to mask
        alpha (int): masking value in range 1 to order-1

    Returns:
        MaskedCard, ZKProofMasking
    """
    _check_parameters(pp)
    _check_type(shared_key, AggregatePublicKey, "shared key")
    _check_type(card, Card, "card")
    create_card_index(card.index)
    _check_point(pp, shared_key.point, "shared key")
    _check_point(pp, card.point, "card")
    _check_scalar(pp, alpha, "masking factor")

    curve = pp.curve
    c1 = curve.multiplication(alpha, pp.generator_g)
    c2 = curve.addition(card.point,
                        curve.multiplication(alpha, shared_key.point))

    prover = proofs.PeqProver(curve, pp.generator_g, shared_key.point, c1,
                              curve.subtraction(c2, card.point), alpha)
    return MaskedCard(c1, c2), prover.peq_nizk()


def verify_mask(pp, shared_key, card, masked_card, proof):
    """Verify a masking proof: e*G == P + c*c1 and
    e*shared_key == Q + c*(c2 - card)

    Returns:
        bool: True if verification successful, False else
    """
    _check_parameters(pp)
    _check_type(shared_key, AggregatePublicKey, "shared key")
    _check_type(card, Card, "card")
    _check_masked_card(pp, masked_card)
    _check_type(proof, ZKProofDLEQ, "masking proof")
    _check_point(pp, shared_key.point, "shared key")
    _check_point(pp, card.point, "card")

    curve = pp.curve
    verifier = proofs.PeqVerifier(
        curve, pp.generator_g, shared_key.point, masked_card.randomness,
        curve.subtraction(masked_card.ciphertext, card.point))
    return verifier.peq_nizk(proof)


def mask_deck(pp, shared_key, cards, alphas=None):
    """Mask a list of cards

    Args:
        pp (Parameters): game parameters
        shared_key (AggregatePublicKey): aggregate public key
        cards (List[Card]): cards
        alphas (List[int]): masking values, chosen randomly if None

    Returns:
        List[MaskedCard], List[ZKProofMasking]
    """
    cards = list(cards)
    if alphas is None:
        alphas = random_masking_factors(pp, len(cards))
    if len(alphas) != len(cards):
        raise InvalidParameters("One masking factor per card required")

    masked, masking_proofs = [], []
    for card, alpha in zip(cards, alphas):
        var0, var1 = mask(pp, shared_key, card, alpha)
        masked.append(var0)
        masking_proofs.append(var1)
    return masked, masking_proofs


# reenc -----------------------------------------------------------------------
def remask(pp, shared_key, masked_card, alpha):
    """Re-mask a cipher: add Enc(O; alpha) = (alpha*G, alpha*shared_key).
    The proof covers the increment, not the whole cipher.

    Args:
        pp (Parameters): game parameters
        shared_key (AggregatePublicKey): aggregate public key
        masked_card (MaskedCard): cipher
        alpha (int): masking value in range 1 to order-1

    Returns:
        MaskedCard, ZKProofRemasking
    """
    _check_parameters(pp)
    _check_type(shared_key, AggregatePublicKey, "shared key")
    _check_masked_card(pp, masked_card)
    _check_point(pp, shared_key.point, "shared key")
    _check_scalar(pp, alpha, "masking factor")

    curve = pp.curve
    diff_c1 = curve.multiplication(alpha, pp.generator_g)
    diff_c2 = curve.multiplication(alpha, shared_key.point)
    remasked = MaskedCard(curve.addition(masked_card.randomness, diff_c1),
                          curve.addition(masked_card.ciphertext, diff_c2))

    prover = proofs.PeqProver(curve, pp.generator_g, shared_key.point,
                              diff_c1, diff_c2, alpha)
    return remasked, prover.peq_nizk()


def verify_remask(pp, shared_key, original, remasked, proof):
    """Verify a re-masking proof on the difference remasked - original

    Returns:
        bool: True if verification successful, False else
    """
    _check_parameters(pp)
    _check_type(shared_key, AggregatePublicKey, "shared key")
    _check_masked_card(pp, original)
    _check_masked_card(pp, remasked)
    _check_type(proof, ZKProofDLEQ, "remasking proof")
    _check_point(pp, shared_key.point, "shared key")

    curve = pp.curve
    diff_c1 = curve.subtraction(remasked.randomness, original.randomness)
    diff_c2 = curve.subtraction(remasked.ciphertext, original.ciphertext)
    verifier = proofs.PeqVerifier(curve, pp.generator_g, shared_key.point,
                                  diff_c1, diff_c2)
    return verifier.peq_nizk(proof)


# dec -------------------------------------------------------------------------
def compute_reveal_token(pp, sk, pk, masked_card):
    """Decryption share d = sk*c1 and DLEQ(G, pk, c1, d)

    Args:
        pp (Parameters): game parameters
        sk (PlayerSecretKey): secret key
        pk (PlayerPublicKey): public key
        masked_card (MaskedCard): cipher which should be unmasked

    Returns:
        RevealToken, ZKProofReveal
    """
    _check_parameters(pp)
    _check_key_pair(pp, pk, sk)
    _check_masked_card(pp, masked_card)

    token = pp.curve.multiplication(sk.scalar, masked_card.randomness)
    prover = proofs.PeqProver(pp.curve, pp.generator_g,
                              masked_card.randomness, pk.point, token,
                              sk.scalar)
    return RevealToken(token), prover.peq_nizk()


def verify_reveal(pp, pk, reveal_token, masked_card, proof):
    """Verify e*G == P + c*pk and e*c1 == Q + c*token

    Returns:
        bool: True if verification successful, False else
    """
    _check_parameters(pp)
    _check_type(pk, PlayerPublicKey, "public key")
    _check_type(reveal_token, RevealToken, "reveal token")
    _check_masked_card(pp, masked_card)
    _check_type(proof, ZKProofDLEQ, "reveal proof")
    _check_point(pp, pk.point, "public key")

    verifier = proofs.PeqVerifier(pp.curve, pp.generator_g,
                                  masked_card.randomness, pk.point,
                                  reveal_token.token)
    return verifier.peq_nizk(proof)


def unmask(pp, decryption_key, masked_card, card_encoding=None):
    """Verify the reveal tokens of all players and combine them to unmask
    a card, Dec(c) = c2 - sum(tokens)

    Args:
        pp (Parameters): game parameters
        decryption_key (List[Tuple[RevealToken, ZKProofReveal,
            PlayerPublicKey]]): one entry per player
        masked_card (MaskedCard): cipher which should be unmasked
        card_encoding (CardEncoding): optional, to look up the card index

    Returns:
        Card: unmasked card, index 0 if it cannot be looked up
    """
    _check_parameters(pp)
    _check_masked_card(pp, masked_card)
    entries = list(decryption_key)
    if len(entries) < pp.n:
        raise InsufficientRevealTokens(
            "Insufficient reveal tokens: expected {}, got {}".format(
                pp.n, len(entries)))
    if len(entries) > pp.n:
        raise InvalidParameters(
            "Too many reveal tokens: expected {}, got {}".format(
                pp.n, len(entries)))

    for i, (token, proof, pk) in enumerate(entries):
        if not verify_reveal(pp, pk, token, masked_card, proof):
            logger.warning("Reveal token %d rejected", i)
            raise ProofVerificationFailed(
                "Invalid reveal token proof from entry {}".format(i))

    var0 = pp.curve.sum_points(token.token for token, _, _ in entries)
    point = pp.curve.subtraction(masked_card.ciphertext, var0)

    index = 0
    if card_encoding is not None:
        card = card_encoding.point_to_card(point)
        if card is not None:
            index = card.index
    return Card(point, index)


def unmask_with_secret_key(pp, sk, masked_cards):
    """Unmask ciphers with the secret key belonging to the masking key,
    Dec(c) = c2 - sk*c1. Without proofs, for a single key holder.

    Args:
        pp (Parameters): game parameters
        sk (PlayerSecretKey): secret key of the masking public key
        masked_cards (List[MaskedCard]): ciphers which should be unmasked

    Returns:
        List[ShortPoint]: unmasked card points
    """
    _check_parameters(pp)
    _check_type(sk, PlayerSecretKey, "secret key")
    _check_scalar(pp, sk.scalar, "secret key")

    dec = []
    for masked_card in masked_cards:
        _check_masked_card(pp, masked_card)
        dec_a = pp.curve.multiplication(sk.scalar, masked_card.randomness)
        dec.append(pp.curve.subtraction(masked_card.ciphertext, dec_a))
    return dec


# homomorphic -----------------------------------------------------------------
def add_masked_cards(pp, masked_a, masked_b):
    """Component-wise sum, a cipher of the sum of both plaintexts under the
    same key

    Returns:
        MaskedCard
    """
    _check_parameters(pp)
    _check_masked_card(pp, masked_a)
    _check_masked_card(pp, masked_b)
    return MaskedCard(
        pp.curve.addition(masked_a.randomness, masked_b.randomness),
        pp.curve.addition(masked_a.ciphertext, masked_b.ciphertext))


def scalar_multiply_masked_card(pp, masked_card, k):
    """(k*c1, k*c2), a cipher of k times the plaintext

    Args:
        pp (Parameters): game parameters
        masked_card (MaskedCard): cipher
        k (int): scalar in range 1 to order-1

    Returns:
        MaskedCard
    """
    _check_parameters(pp)
    _check_masked_card(pp, masked_card)
    _check_scalar(pp, k, "scalar")
    return MaskedCard(pp.curve.multiplication(k, masked_card.randomness),
                      pp.curve.multiplication(k, masked_card.ciphertext))


# shuffle ---------------------------------------------------------------------
def random_masking_factors(pp, size):
    return pp.curve.rand_gen.get_random_array(size)


def random_permutation(pp, size):
    return create_permutation(
        pp.curve.rand_gen.get_random_permutation(size), size)


def shuffle_and_remask(pp, shared_key, deck, masking_factors, permutation):
    """Permute and re-mask the deck, shuffled[i] = deck[pi[i]] +
    Enc(O; rho[i]), and create the shuffle argument

    Args:
        pp (Parameters): game parameters
        shared_key (AggregatePublicKey): aggregate public key
        deck (List[MaskedCard]): masked cards
        masking_factors (List[int]): rho, one per card
        permutation (Permutation): pi

    Returns:
        List[MaskedCard], ZKProofShuffle: shuffled deck and proof
    """
    _check_parameters(pp)
    deck = tuple(deck)
    masking_factors = tuple(masking_factors)
    if not deck:
        raise InvalidParameters("Cannot shuffle an empty deck")
    if len(masking_factors) != len(deck):
        raise InvalidParameters(
            "shuffle parameters: expected {} masking factors, got {}".format(
                len(deck), len(masking_factors)))
    _check_type(permutation, Permutation, "permutation")
    if permutation.size != len(deck):
        raise InvalidPermutation(
            "Permutation size {} does not match deck size {}".format(
                permutation.size, len(deck)))
    permutation = create_permutation(permutation.mapping, len(deck))
    for card in deck:
        _check_masked_card(pp, card)

    shuffled = []
    for i in range(len(deck)):
        var0, _ = remask(pp, shared_key, deck[permutation.mapping[i]],
                         masking_factors[i])
        shuffled.append(var0)

    prover = BayGroProver(pp.curve, _shuffle_pedersen(pp),
                          ShuffleStatement(deck, tuple(shuffled)),
                          ShuffleWitness(permutation, masking_factors))
    proof = prover.nizk_prover()
    logger.debug("Shuffled and re-masked %d cards", len(deck))
    return shuffled, proof


def verify_shuffle(pp, shared_key, original_deck, shuffled_deck, proof):
    """Verify a shuffle argument. Only the challenge, the commitment
    openings and the structure are checked, see bayergroth.py.

    Returns:
        bool: True if verification successful, False else
    """
    _check_parameters(pp)
    _check_type(shared_key, AggregatePublicKey, "shared key")
    _check_type(proof, ZKProofShuffle, "shuffle proof")
    original_deck = tuple(original_deck)
    shuffled_deck = tuple(shuffled_deck)
    for card in original_deck + shuffled_deck:
        _check_type(card, MaskedCard, "masked card")

    if len(original_deck) != len(shuffled_deck):
        return False

    verifier = BayGroVerifier(pp.curve, _shuffle_pedersen(pp),
                              ShuffleStatement(original_deck, shuffled_deck))
    return verifier.nizk_verifier(proof)


# helpers ---------------------------------------------------------------------
def _shuffle_pedersen(pp):
    # value*G + blinding*h
    return Pedersen([pp.generator_g], pp.commit_h, pp.curve)


def _player_info_point(pp, player_info):
    if not isinstance(player_info, (bytes, bytearray)):
        raise InvalidParameters("Player info must be bytes, got {}".format(
            type(player_info).__name__))
    var0 = pp.curve.rand_gen.hash_bytes_to_scalar(bytes(player_info))
    return pp.curve.multiplication(var0, pp.generator_h)


def _check_parameters(pp):
    if not isinstance(pp, Parameters):
        raise InvalidParameters("Expected Parameters, got {}".format(
            type(pp).__name__))
    if pp.m <= 0 or pp.n <= 0:
        raise InvalidParameters("Invalid parameters: m={}, n={}".format(
            pp.m, pp.n))


def _check_type(value, expected, what):
    if not isinstance(value, expected):
        raise InvalidParameters("Invalid {}: expected {}, got {}".format(
            what, expected.__name__, type(value).__name__))


def _check_point(pp, point, what):
    if not pp.curve.is_valid_point(point):
        raise CryptographicError("Invalid {}: not a point of {}".format(
            what, pp.curve.name))


def _check_scalar(pp, value, what):
    if not pp.curve.is_valid_scalar(value):
        raise CryptographicError("Invalid {}: {}".format(what, value))


def _check_key_pair(pp, pk, sk):
    _check_type(pk, PlayerPublicKey, "public key")
    _check_type(sk, PlayerSecretKey, "secret key")
    _check_scalar(pp, sk.scalar, "secret key")
    if pp.curve.multiplication(sk.scalar, pp.generator_g) != pk.point:
        raise CryptographicError("Public key does not match secret key")


def _check_masked_card(pp, masked_card):
    _check_type(masked_card, MaskedCard, "masked card")
    _check_point(pp, masked_card.randomness, "masked card randomness")
    _check_point(pp, masked_card.ciphertext, "masked card ciphertext")
