#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BLS12-381 G1 group.

The group is the prime order n subgroup of the points of the
elliptic curve y^2 = x^3 + 4 over Fp, together with the point at
infinity INF; the curve has cofactor h, i.e. #E(Fp) = h * n.

Point arithmetic is delegated to py_ecc (optimized_bls12_381),
which represents points in projective coordinates (x, y, z),
so that no modular inversion is needed until a point
has to be serialized.

The generator G is not the standard one from the BLS12-381
specification: it is its opposite, i.e. the point with the same
x-coordinate and y-coordinate p - y, as used by the ring-signature
contract whose signatures this package produces and verifies.
"""

from typing import Optional, Tuple

from py_ecc import optimized_bls12_381 as bls

from ringkyc.alias import Point
from ringkyc.exceptions import RingKYCTypeError, RingKYCValueError
from ringkyc.utils import hex_string

FQ = bls.FQ

INF: Point = bls.Z1


class Curve:
    """BLS12-381 G1 prime order group, with its scalar field Fn.

    Points are py_ecc projective tuples (FQ, FQ, FQ);
    scalars are ints in [0, n-1].
    """

    def __init__(self, x_G: int, y_G: int) -> None:

        self.p: int = bls.field_modulus
        self.n: int = bls.curve_order
        self.h: int = 0x396C8C005555E1568C00AAAB0000AAAB
        self._b = bls.b

        # field element / scalar byte sizes
        self.p_size = (self.p.bit_length() + 7) // 8
        self.n_size = (self.n.bit_length() + 7) // 8
        self.nlen = self.n.bit_length()

        G = self.point_from_aff(x_G, y_G)
        if not self.is_in_subgroup(G):
            raise RingKYCValueError("generator not in the prime order subgroup")
        self.G: Point = G

    def __str__(self) -> str:
        x_G, y_G = self.aff_from_point(self.G)
        result = "BLS12-381 G1"
        result += f"\n p   = {hex_string(self.p)}"
        result += f"\n n   = {hex_string(self.n)}"
        result += f"\n h   = {hex_string(self.h)}"
        result += f"\n x_G = {hex_string(x_G)}"
        result += f"\n y_G = {hex_string(y_G)}"
        return result

    def point_from_aff(self, x: int, y: int) -> Point:
        "Return the projective point for the given affine coordinates."

        if not 0 <= x < self.p:
            raise RingKYCValueError(f"x-coordinate not in 0..p-1: '{hex_string(x)}'")
        if not 0 <= y < self.p:
            raise RingKYCValueError(f"y-coordinate not in 0..p-1: '{hex_string(y)}'")
        Q = FQ(x), FQ(y), FQ.one()
        self.require_on_curve(Q)
        return Q

    def aff_from_point(self, Q: Point) -> Tuple[int, int]:
        "Return the affine coordinates as a tuple of ints."
        if self.is_inf(Q):
            raise RingKYCValueError("INF has no affine coordinates")
        x, y = bls.normalize(Q)
        return x.n, y.n

    @staticmethod
    def is_inf(Q: Point) -> bool:
        if len(Q) != 3:
            raise RingKYCTypeError("not a point")
        return bool(bls.is_inf(Q))

    def is_on_curve(self, Q: Point) -> bool:
        """Return True if the point is on the curve."""
        if len(Q) != 3:
            raise RingKYCTypeError("not a point")
        return bool(bls.is_on_curve(Q, self._b))

    def require_on_curve(self, Q: Point) -> None:
        """Require the input curve Point to be on the curve.

        An Error is raised if not.
        """
        if not self.is_on_curve(Q):
            raise RingKYCValueError("point not on curve")

    def is_in_subgroup(self, Q: Point) -> bool:
        "Return True if the point is on curve and has order n (or is INF)."
        if not self.is_on_curve(Q):
            return False
        return self.is_inf(bls.multiply(Q, self.n))

    def equal(self, Q1: Point, Q2: Point) -> bool:
        "Return True if the projective points are the same affine point."
        return bool(bls.eq(Q1, Q2))

    def negate(self, Q: Point) -> Point:
        return bls.neg(Q)

    def add(self, Q1: Point, Q2: Point) -> Point:
        """Return the sum of two points.

        The input points are assumed to be on the curve.
        """
        return bls.add(Q1, Q2)

    def mult(self, m: int, Q: Point) -> Point:
        """Scalar multiplication m*Q.

        The scalar is reduced modulo n, the order of the group.
        """
        return bls.multiply(Q, m % self.n)


# the 96 bytes (x ‖ y) G1_GENERATOR of the ring-signature contract
bls12_381 = Curve(
    0x17F1D3A73197D7942695638C4FA9AC0FC3688C4F9774B905A14E3A3F171BAC586C55E83FF97A1AEFFB3AF00ADB22C6BB,
    0x114D1D6855D545A8AA7D76C8CF2E21F267816AEF1DB507C96655B9D5CAAC42364E6F38BA0ECB751BAD54DCD6B939C2CA,
)


def mult(m: int, Q: Optional[Point] = None, ec: Curve = bls12_381) -> Point:
    """Elliptic curve scalar multiplication.

    If Q is not provided, the generator G is used.
    """
    Q = ec.G if Q is None else Q
    return ec.mult(m, Q)


def double_mult(u: int, H: Point, v: int, Q: Point, ec: Curve = bls12_381) -> Point:
    "Double scalar multiplication (u*H + v*Q)."
    return ec.add(ec.mult(u, H), ec.mult(v, Q))
