#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Fixed-size point and scalar representation.

A G1 point is serialized as 96 bytes: the 48 bytes big-endian
x-coordinate followed by the 48 bytes big-endian y-coordinate.
The three most significant bits of the first byte are flags:

- 0x80: compressed encoding, never set (only uncompressed is supported)
- 0x40: point at infinity, all the other bits must be zero
- 0x20: y-sign for compressed encoding, never set

A scalar is serialized as 32 bytes big-endian.
"""

from ringkyc.alias import Octets, Point, PubKey, Scalar
from ringkyc.ec.bls12_381 import INF, Curve, bls12_381
from ringkyc.exceptions import RingKYCTypeError, RingKYCValueError
from ringkyc.utils import bytes_from_octets

_COMPRESSION_FLAG = 0x80
_INFINITY_FLAG = 0x40
_SORT_FLAG = 0x20


def bytes_from_point(Q: Point, ec: Curve = bls12_381) -> bytes:
    "Return a point as 2*p_size uncompressed octet sequence."

    if ec.is_inf(Q):
        return bytes([_INFINITY_FLAG]) + b"\x00" * (2 * ec.p_size - 1)

    # check that Q is on curve
    ec.require_on_curve(Q)

    x_Q, y_Q = ec.aff_from_point(Q)
    out = x_Q.to_bytes(ec.p_size, byteorder="big", signed=False)
    out += y_Q.to_bytes(ec.p_size, byteorder="big", signed=False)
    return out


def point_from_octets(pub_key: Octets, ec: Curve = bls12_381) -> Point:
    """Return a point that belongs to the prime order group.

    Only the 2*p_size uncompressed encoding is accepted;
    field range, curve equation, and subgroup membership are checked.
    """

    pub_key = bytes_from_octets(pub_key, 2 * ec.p_size)

    flags = pub_key[0] & (_COMPRESSION_FLAG | _INFINITY_FLAG | _SORT_FLAG)
    if flags & _COMPRESSION_FLAG:
        raise RingKYCValueError("compressed point encoding not supported")
    if flags & _SORT_FLAG:
        raise RingKYCValueError("invalid sort flag for uncompressed point")
    if flags & _INFINITY_FLAG:
        if pub_key[0] != _INFINITY_FLAG or any(pub_key[1:]):
            raise RingKYCValueError("invalid infinity point encoding")
        return INF

    x_Q = int.from_bytes(pub_key[: ec.p_size], byteorder="big", signed=False)
    y_Q = int.from_bytes(pub_key[ec.p_size :], byteorder="big", signed=False)
    Q = ec.point_from_aff(x_Q, y_Q)
    if not ec.is_in_subgroup(Q):
        raise RingKYCValueError(f"point not in the prime order subgroup: {Q}")
    return Q


def point_from_pub_key(pub_key: PubKey, ec: Curve = bls12_381) -> Point:
    "Return a point from a Point tuple or its Octets serialization."

    if isinstance(pub_key, tuple):
        if not ec.is_on_curve(pub_key):
            raise RingKYCValueError("point not on curve")
        if not ec.is_in_subgroup(pub_key):
            err_msg = f"point not in the prime order subgroup: {pub_key}"
            raise RingKYCValueError(err_msg)
        return pub_key
    if isinstance(pub_key, (bytes, str)):
        return point_from_octets(pub_key, ec)
    raise RingKYCTypeError("not a public key")


def bytes_from_pub_key(pub_key: PubKey, ec: Curve = bls12_381) -> bytes:
    "Return the canonical serialization of a public key."

    # also validate the point
    return bytes_from_point(point_from_pub_key(pub_key, ec), ec)


def bytes_from_scalar(s: int, ec: Curve = bls12_381) -> bytes:
    "Return a scalar as n_size big-endian octet sequence."

    if not 0 <= s < ec.n:
        raise RingKYCValueError(f"scalar not in 0..n-1: {hex(s)}")
    return s.to_bytes(ec.n_size, byteorder="big", signed=False)


def scalar_from_octets(
    octets: Octets, ec: Curve = bls12_381, reduce: bool = False
) -> int:
    """Return a scalar from its n_size big-endian serialization.

    If reduce is True the value is reduced modulo n,
    otherwise a non canonical value (i.e. not less than n) is refused.
    """

    octets = bytes_from_octets(octets, ec.n_size)
    s = int.from_bytes(octets, byteorder="big", signed=False)
    if reduce:
        return s % ec.n
    if s >= ec.n:
        raise RingKYCValueError(f"scalar not in 0..n-1: {hex(s)}")
    return s


def int_from_scalar(s: Scalar, ec: Curve = bls12_381) -> int:
    "Return a scalar in [0, n-1] from int or Octets."

    if isinstance(s, int):
        if not 0 <= s < ec.n:
            raise RingKYCValueError(f"scalar not in 0..n-1: {hex(s)}")
        return s
    if isinstance(s, (bytes, str)):
        return scalar_from_octets(s, ec)
    raise RingKYCTypeError("not a scalar")
