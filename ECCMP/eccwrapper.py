# ! /usr/bin/env python
# -*- coding: utf-8 -*-
# ===================================================================
# eccwrapper.py
#
# 18.10.2026
#
# @desc: Wrapper class for fastecdsa. Elliptic curve and point
#        representation and manipulation, hash-to-curve for generators
#        with unknown discrete logarithm and fixed-width point encoding.
# ===================================================================
import hashlib
import logging

import fastecdsa.curve as curvelib
from fastecdsa.point import Point as FastecdsaPoint
from fastecdsa.util import mod_sqrt

from ECCMP import random_generator
from ECCMP.errors import CryptographicError, InvalidParameters

logger = logging.getLogger(__name__)

DEFAULT_CURVE = "secp256k1"


class ShortPoint:
    """Elliptic Curve Point representation.

    The point at infinity is represented as (0, 0), which lies on none of
    the supported short Weierstrass curves (b != 0).

    Attributes:
        x (int): the x coordinate of the point
        y (int): the y coordinate of the point
    """
    __slots__ = ("x", "y")

    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y

    def __eq__(self, other):
        """Compare two elliptic curve points for equality.

        Args:
            other (ShortPoint): second elliptic curve point

        Returns:
            bool: True if points are the same, False else
        """
        if not isinstance(other, ShortPoint):
            # don't attempt to compare against unrelated types
            return NotImplemented

        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        if self.x == 0 and self.y == 0:
            return "ShortPoint(IDENTITY)"
        return "ShortPoint(x=0x{:x}, y=0x{:x})".format(self.x, self.y)


IDENTITY = ShortPoint(0, 0)


class Curve:
    name = None
    order = None
    generator = None

    def __init__(self):
        raise NotImplementedError('Abstract method __init__')


class Fastecdsa(Curve):
    """Wrapper class for fastecdsa library.

    Attributes:
        _curve: curve object from fastecdsa
        name: curve name
        generator: the base point of the curve
        order: the order of the base point of the curve
        prime: the prime of the underlying field
        width (int): byte length of one encoded coordinate or scalar
        cofactor (int): number of points divided by order, must be 1
        rand_gen: random generator object for random numbers
    """
    IDENTITY = IDENTITY

    def __init__(self, curve):
        """
        Args:
            curve: curve object from fastecdsa
        """
        self._curve = curve
        self.name = curve.name
        self.generator = ShortPoint(self._curve.gx, self._curve.gy)
        self.order = self._curve.q
        self.prime = self._curve.p
        self.width = max((self.prime.bit_length() + 7) // 8,
                         (self.order.bit_length() + 7) // 8)
        self.rand_gen = random_generator.RandomGenerator(self.order,
                                                         self.width)
        # h = round((p+1) / order), since |#E - (p+1)| <= 2*sqrt(p)
        self.cofactor = (self.prime + 1 + self.order // 2) // self.order
        if self.cofactor != 1:
            raise InvalidParameters(
                "Curve {} has cofactor {}, a prime order group is "
                "required".format(self.name, self.cofactor))

    def __repr__(self):
        return "Fastecdsa({})".format(self.name)

    @staticmethod
    def is_identity(P):
        """Check if P is the point at infinity

        Args:
            P (ShortPoint): elliptic curve point

        Returns:
            bool: True if P is the identity element
        """
        return P.x == 0 and P.y == 0

    def multiplication(self, k, P):
        """Multiply a elliptic curve point P by a integer k

        Args:
            k (int): integer, reduced modulo the order
            P (ShortPoint): elliptic curve point

        Returns:
            k*P (ShortPoint)
        """
        k = k % self.order
        if k == 0 or self.is_identity(P):
            return IDENTITY
        product = k * self.shortpoint_to_point(P)
        return self.point_to_shortpoint(product)

    def addition(self, P, Q):
        """Add two elliptic curve points P and Q

        Args:
            P (ShortPoint): elliptic curve point
            Q (ShortPoint): elliptic curve point

        Returns:
            P+Q (ShortPoint)
        """
        if self.is_identity(P):
            return Q
        if self.is_identity(Q):
            return P
        sum1 = self.shortpoint_to_point(P) + self.shortpoint_to_point(Q)
        return self.point_to_shortpoint(sum1)

    def subtraction(self, P, Q):
        """Subtract two elliptic curve points P and Q

        Args:
            P (ShortPoint): elliptic curve point
            Q (ShortPoint): elliptic curve point

        Returns:
            P-Q (ShortPoint)
        """
        return self.addition(P, self.negation(Q))

    def negation(self, P):
        """Negate elliptic curve point P

        Args:
            P (ShortPoint): elliptic curve point

        Returns:
            -P (ShortPoint)
        """
        if self.is_identity(P):
            return IDENTITY
        return ShortPoint(P.x, (-P.y) % self.prime)

    def sum_points(self, points):
        """Add up a sequence of points, the empty sum is the identity

        Args:
            points (Iterable[ShortPoint]): elliptic curve points

        Returns:
            ShortPoint: sum of all points
        """
        total = IDENTITY
        for point in points:
            total = self.addition(total, point)
        return total

    def isoncurve(self, P):
        """Check if point P is on curve _curve

        Args:
            P (ShortPoint): elliptic curve point

        Returns:
            True if point is on curve, False else
        """
        if not isinstance(P, ShortPoint) or self.is_identity(P):
            return False
        return self._curve.is_point_on_curve((P.x, P.y))

    def is_valid_point(self, P):
        """A point usable as a protocol value: on the curve, not identity"""
        return self.isoncurve(P)

    def is_valid_scalar(self, k, allow_zero=False):
        """Check that k is an int in [0, order) or [1, order)"""
        if not isinstance(k, int) or isinstance(k, bool):
            return False
        lower = 0 if allow_zero else 1
        return lower <= k < self.order

    def shortpoint_to_point(self, P):
        """Transform ShortPoint to fastecdsa point

        Args:
            P (ShortPoint): elliptic curve point, not the identity

        Returns:
            fastecdsa point
        """
        if not self.isoncurve(P):
            raise CryptographicError("Point {!r} is not on curve {}".format(
                P, self.name))
        return FastecdsaPoint(P.x, P.y, self._curve)

    def point_to_shortpoint(self, point):
        """Transform fastecdsa point to ShortPoint, mapping the fastecdsa
        identity element (created without curve) to IDENTITY

        Args:
            point: fastecdsa point

        Returns:
            ShortPoint
        """
        if point.curve is None:
            return IDENTITY
        return ShortPoint(point.x, point.y)

    # hashing -----------------------------------------------------------------
    def hash_to_point(self, tag, index=0):
        """Derive a curve point with unknown discrete logarithm from a domain
        separation tag by try-and-increment: x = SHA3(tag|index|counter).

        Args:
            tag (bytes): domain separation tag
            index (int): index of the point for this tag

        Returns:
            ShortPoint: point on the curve
        """
        counter = 0
        while True:
            digest = hashlib.sha3_256()
            digest.update(tag)
            digest.update(index.to_bytes(4, "big"))
            digest.update(counter.to_bytes(4, "big"))
            x = int.from_bytes(digest.digest(), "big") % self.prime
            rhs = (pow(x, 3, self.prime) + self._curve.a * x +
                   self._curve.b) % self.prime
            # Euler's criterion, mod_sqrt expects a quadratic residue
            if rhs == 0 or pow(rhs, (self.prime - 1) // 2, self.prime) != 1:
                counter += 1
                continue
            y = mod_sqrt(rhs, self.prime)[0]
            if (y * y) % self.prime == rhs:
                point = ShortPoint(x, y)
                if self.isoncurve(point):
                    return point
            counter += 1

    def hash_points(self, *points):
        """Fiat-Shamir challenge from the x and y coordinates of points

        Args:
            *points (ShortPoint): transcript points

        Returns:
            int: challenge in range 0 to order - 1
        """
        return self.rand_gen.get_challenge_from_hash(
            *curve_points_to_list(points))

    # encoding ----------------------------------------------------------------
    def encode_int(self, value):
        """Encode an int as fixed-width big-endian bytes"""
        if not isinstance(value, int) or value < 0 \
                or value.bit_length() > 8 * self.width:
            raise CryptographicError(
                "Value {} out of range for {}-byte encoding".format(
                    value, self.width))
        return value.to_bytes(self.width, "big")

    def encode_point(self, P):
        """Encode a point as x || y, the identity as all-zero bytes

        Args:
            P (ShortPoint): elliptic curve point

        Returns:
            bytes: 2*width bytes
        """
        return self.encode_int(P.x) + self.encode_int(P.y)

    def decode_point(self, data):
        """Decode a point from x || y, checking curve membership

        Args:
            data (bytes): 2*width bytes

        Returns:
            ShortPoint
        """
        if len(data) != 2 * self.width:
            raise InvalidParameters(
                "Invalid point encoding length: expected {}, got {}".format(
                    2 * self.width, len(data)))
        point = ShortPoint(int.from_bytes(data[:self.width], "big"),
                           int.from_bytes(data[self.width:], "big"))
        if not self.is_identity(point) and not self.isoncurve(point):
            raise CryptographicError("Decoded point is not on curve {}".format(
                self.name))
        return point


def get_curve(name=DEFAULT_CURVE):
    """Look up a fastecdsa curve by name and wrap it

    Args:
        name (str): curve name in fastecdsa.curve, e.g. "secp256k1"

    Returns:
        Fastecdsa: wrapped curve
    """
    curve = getattr(curvelib, name, None)
    if not isinstance(curve, curvelib.Curve):
        raise InvalidParameters("Unknown curve: {}".format(name))
    logger.debug("Using curve %s", name)
    return Fastecdsa(curve)


def curve_points_to_list(curve_points):
    """Fill list with elements from ShortPoints

    Args:
        curve_points ((List[ShortPoint])): point on elliptic curve

    Returns:
        List(int): list with x and y values from ShortPoint
    """
    var = []
    for var0 in curve_points:
        var.append(var0.x)
        var.append(var0.y)
    return var
