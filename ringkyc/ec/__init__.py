#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module ringkyc.ec."""

from ringkyc.ec.bls12_381 import INF, Curve, bls12_381, double_mult, mult
from ringkyc.ec.sec_point import (
    bytes_from_point,
    bytes_from_pub_key,
    bytes_from_scalar,
    int_from_scalar,
    point_from_octets,
    point_from_pub_key,
    scalar_from_octets,
)

__all__ = [
    "INF",
    "Curve",
    "bls12_381",
    "double_mult",
    "mult",
    "bytes_from_point",
    "bytes_from_pub_key",
    "bytes_from_scalar",
    "int_from_scalar",
    "point_from_octets",
    "point_from_pub_key",
    "scalar_from_octets",
]
