#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module ringkyc.ecc."""

from ringkyc.ecc.keys import KeyRing, derive_keys, gen_keys, pub_key_from_prv_key
from ringkyc.ecc.nonce import (
    HashPatternSource,
    ScalarSource,
    SystemRandomSource,
    derivation_source,
    signing_source,
)
from ringkyc.ecc.ring_sig import Sig, assert_as_valid, normalize_ring, sign, verify

__all__ = [
    "KeyRing",
    "derive_keys",
    "gen_keys",
    "pub_key_from_prv_key",
    "HashPatternSource",
    "ScalarSource",
    "SystemRandomSource",
    "derivation_source",
    "signing_source",
    "Sig",
    "assert_as_valid",
    "normalize_ring",
    "sign",
    "verify",
]
