#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from io import BytesIO
from typing import Sequence, Tuple, Union

from py_ecc.optimized_bls12_381 import FQ

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "deadbeef"
# "dead beef"
# "17f1d3a7 3197d794 ... b939c2ca"
#
# use ringkyc.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for serialized G1 points (96 bytes),
# serialized scalars (32 bytes), serialized ring signatures, etc.
Octets = Union[bytes, str]

# bytes or text string (not hex-string)
#
# this is for string that can be
# converted to bytes using encode()
# e.g. a message to be signed
#    if isinstance(msg, str):
#        msg = msg.encode()
String = Union[bytes, str]

# binary data, usually to be cosumed as byte stream,
# but possibily provided as Octets too
BinaryData = Union[BytesIO, Octets]

# BLS12-381 G1 point in projective coordinates, as handled by py_ecc.
# The infinity point has z=0 and can be checked with 'Q[2] == 0'
Point = Tuple[FQ, FQ, FQ]

# a public key is either a Point or its 96 bytes serialization
PubKey = Union[Point, Octets]

# a scalar (e.g. a private key) is either an int
# or its 32 bytes big-endian serialization
Scalar = Union[int, Octets]

# ordered sequence of public keys: order matters
Ring = Sequence[PubKey]
