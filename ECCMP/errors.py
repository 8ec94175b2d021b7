# ! /usr/bin/env python
# -*- coding: utf-8 -*-
# ===================================================================
# errors.py
#
# 18.10.2026
#
# @desc: Exceptions raised by the mental poker toolbox.
# ===================================================================


class MentalPokerError(Exception):
    """Base class, code names the error kind."""
    code = "MENTAL_POKER_ERROR"

    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg


class InvalidParameters(MentalPokerError):
    code = "INVALID_PARAMETERS"


class InvalidCardIndex(InvalidParameters):
    code = "INVALID_CARD_INDEX"


class InvalidPermutation(InvalidParameters):
    """Duplicate or out-of-range mapping entries, or size mismatch."""
    code = "INVALID_PERMUTATION"


class CryptographicError(MentalPokerError):
    """Out-of-range scalar or a point that is not a valid group element."""
    code = "CRYPTOGRAPHIC_ERROR"


class ProofVerificationFailed(MentalPokerError):
    code = "PROOF_VERIFICATION_FAILED"


class InsufficientRevealTokens(MentalPokerError):
    code = "INSUFFICIENT_REVEAL_TOKENS"
