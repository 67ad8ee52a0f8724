#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions.

SHA256 is the hash oracle of the ring signature scheme:
it is used both as deterministic pseudo-random generator
(key derivation and signing nonces) and as Fiat-Shamir challenge function.
"""

import hashlib

from ringkyc.alias import Octets
from ringkyc.ec import Curve, bls12_381
from ringkyc.utils import bytes_from_octets


def sha256(octets: Octets) -> bytes:
    """Return the SHA256(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    return hashlib.sha256(octets).digest()


def hash256(octets: Octets) -> bytes:
    """Return the SHA256(SHA256(*)) of the input octet sequence."""
    return sha256(sha256(octets))


def scalar_from_hash(digest: bytes, ec: Curve = bls12_381) -> int:
    """Return the digest as big-endian integer reduced modulo n.

    The whole digest is used (i.e. no leftmost-bits truncation):
    with a 256 bits digest and a 255 bits n the bias is negligible.
    """
    return int.from_bytes(digest, byteorder="big", signed=False) % ec.n


def fixed_pattern(i: int, size: int = 32) -> bytes:
    "Return size bytes all equal to the least significant byte of i."
    return bytes([i & 0xFF]) * size


def challenge_(base: bytes, x_bytes: bytes, ec: Curve = bls12_381) -> int:
    """Return the Fiat-Shamir challenge H(base ‖ x) as scalar.

    base is the concatenation of the serialized ring public keys
    followed by the message; x is the serialized commitment point.
    """
    return scalar_from_hash(sha256(base + x_bytes), ec)
