# ! /usr/bin/env python
# -*- coding: utf-8 -*-
# ===================================================================
# polynomial.py
#
# 18.10.2026
#
# @desc: Polynomials over the scalar field of the curve. Coefficient
#        representation, coeffs[i] belongs to x^i. Used for the
#        permutation polynomial of the shuffle argument.
# ===================================================================
from ECCMP.errors import InvalidParameters, CryptographicError


class Polynomial:
    """Polynomial p(x) = c_0 + c_1*x + ... + c_k*x^k mod order

    Attributes:
        coeffs (List[int]): coefficients, reduced modulo order
        order (int): modulus
    """
    def __init__(self, coeffs, order):
        if len(coeffs) == 0:
            raise InvalidParameters(
                "Polynomial must have at least one coefficient")
        self.coeffs = [c % order for c in coeffs]
        self.order = order

    def __len__(self):
        return len(self.coeffs)

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.order == other.order and \
            _strip(self.coeffs) == _strip(other.coeffs)

    def __repr__(self):
        return "Polynomial({})".format(self.coeffs)

    def __add__(self, other):
        size = max(len(self.coeffs), len(other.coeffs))
        var0 = []
        for i in range(size):
            c1 = self.coeffs[i] if i < len(self.coeffs) else 0
            c2 = other.coeffs[i] if i < len(other.coeffs) else 0
            var0.append(add_mod(c1, c2, self.order))
        return Polynomial(var0, self.order)

    def __mul__(self, other):
        if isinstance(other, int):
            return Polynomial([mul_mod(other, c, self.order)
                               for c in self.coeffs], self.order)

        var0 = [0] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, c1 in enumerate(self.coeffs):
            for j, c2 in enumerate(other.coeffs):
                var0[i + j] = add_mod(var0[i + j], mul_mod(c1, c2, self.order),
                                      self.order)
        return Polynomial(var0, self.order)

    __rmul__ = __mul__

    def evaluate(self, x):
        """Evaluate with Horner's method

        Args:
            x (int): evaluation point

        Returns:
            int: p(x) mod order
        """
        result = self.coeffs[-1]
        for c in reversed(self.coeffs[:-1]):
            result = add_mod(c, mul_mod(x, result, self.order), self.order)
        return result


def permutation_polynomial(mapping, order):
    """Lagrange interpolation of p(i) = mapping[i] for i = 0,...,N-1

    Args:
        mapping (Sequence[int]): permutation
        order (int): modulus

    Returns:
        Polynomial: N coefficients, degree at most N-1
    """
    size = len(mapping)
    if size == 0:
        raise InvalidParameters("Cannot interpolate an empty permutation")

    result = Polynomial([0] * size, order)
    for i in range(size):
        # L_i(x) = prod((x - j) / (i - j)) for j != i
        basis = Polynomial([1], order)
        for j in range(size):
            if i == j:
                continue
            inv = inv_mod(sub_mod(i, j, order), order)
            basis = basis * Polynomial([neg_mod(j, order), 1], order) * inv
        result = result + basis * mapping[i]

    # keep exactly one coefficient per position
    result.coeffs = (result.coeffs + [0] * size)[:size]
    return result


def _strip(coeffs):
    var0 = list(coeffs)
    while len(var0) > 1 and var0[-1] == 0:
        var0.pop()
    return var0


def add_mod(a: int, b: int, order: int) -> int:
    return (a + b) % order


def mul_mod(a: int, b: int, order: int) -> int:
    return (a * b) % order


def sub_mod(a: int, b: int, order: int) -> int:
    return (a - b) % order


def neg_mod(a: int, order: int) -> int:
    return (-a) % order


def inv_mod(a: int, order: int) -> int:
    if a % order == 0:
        raise CryptographicError("No modular inverse exists for {}".format(a))
    return pow(a, -1, order)
