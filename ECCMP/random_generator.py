# ! /usr/bin/env python
# -*- coding: utf-8 -*-
# ===================================================================
# random_generator.py
#
# 18.10.2026
#
# @desc: Random numbers and permutations used for elliptic curve
#        cryptography and zero-knowledge proofs, and the Fiat-Shamir
#        hash from transcript values to challenges.
# ===================================================================
import hashlib
import secrets

FIAT_SHAMIR_TAG = b"ECCMP.fiat-shamir.v1"


class RandomGenerator:
    """Class for different random values and permutations

    Attributes:
        order (int): order of the elliptic curve subgroup
        width (int): byte length used to encode one transcript value
    """

    def __init__(self, order, width=32):
        """
        Args:
            order (int): order of the elliptic curve subgroup
            width (int): byte length used to encode one transcript value
        """
        self.order = order
        self.width = width

    def get_random_value(self):
        """Get one random value in range 1 to order- 1

        Returns:
            int: random value in range 1 to order - 1
        """
        return 1 + secrets.randbelow(self.order-1)

    @staticmethod
    def get_random_value_range(x, y):
        """Get one random value in range x to y-1

        Args:
            x (int): lower bound
            y (int): upper bound

        Returns:
            int: value from [x,y)
        """
        return x + secrets.randbelow(y-x)

    def get_random_array(self, size):
        """Get a list with size random values between 1 and order-1

        Args:
            size (int): number of random values

        Returns:
            List[int]: list with random value
        """
        return [self.get_random_value() for _ in range(size)]

    def get_random_permutation(self, size, array=None):
        """Permute an array randomly with fisher-yates algorithm,
        if no array is given as argument, array = [0,1,...,size-1]

        Args:
            size (int): number of random values
            array (List): array to be permuted, left untouched

        Returns:
            List: permuted array
        """
        if array is None:
            array = list(range(0, size))
        else:
            array = list(array)

        for i in range(size-1):
            j = self.get_random_value_range(i, size)
            array[i], array[j] = array[j], array[i]

        return array

    def get_challenge_from_hash(self, *args):
        """Fiat-Shamir challenge in range 0 to order-1 from SHA3-256 over
        the fixed-width big-endian encoding of *args.

        Args:
            *args (int): transcript values, non-negative

        Returns:
            int: challenge
        """
        var0 = hashlib.sha3_256()
        var0.update(FIAT_SHAMIR_TAG)
        var0.update(len(args).to_bytes(4, "big"))
        for arg in args:
            var1 = max(self.width, (arg.bit_length() + 7) // 8)
            var0.update(var1.to_bytes(2, "big"))
            var0.update(int.to_bytes(arg, var1, "big"))

        return int.from_bytes(var0.digest(), "big") % self.order

    def hash_bytes_to_scalar(self, data):
        """Map an opaque byte string to a scalar in range 1 to order-1

        Args:
            data (bytes): input bytes

        Returns:
            int: scalar
        """
        var0 = hashlib.sha3_256()
        var0.update(FIAT_SHAMIR_TAG + b".bytes")
        var0.update(data)
        return 1 + int.from_bytes(var0.digest(), "big") % (self.order - 1)
