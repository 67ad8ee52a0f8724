#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Scalar sources for key generation and ring signing.

A ring signature needs, for each signature generation, a fresh
random nonce and a fresh random response for each ring position
but the signer's one. For effective security, these values must be
chosen randomly and uniformly from the scalar field, using a
cryptographically secure process: SystemRandomSource does so.

HashPatternSource is instead a deterministic pseudo-generator:
the k-th scalar is the hash of a fixed all-equal byte pattern.
It reproduces the key rings and the signature scalars
of the ring-signature contract, and it is very convenient in tests,
but it is NOT secure: anybody can compute its output,
hence the nonce, hence the private key from a signature.
"""

import itertools
import secrets
from typing import Iterable, Protocol

from ringkyc.ec import Curve, bls12_381
from ringkyc.exceptions import RingKYCRuntimeError
from ringkyc.hashes import fixed_pattern, scalar_from_hash, sha256

# first byte pattern for the signing nonce
NONCE_PATTERN = 42
# first byte pattern for the signing (forged) responses
RESPONSE_PATTERN = 100


class ScalarSource(Protocol):
    "Anything able to provide scalars in the field of the group order."

    def sample_scalar(self) -> int:
        ...  # pragma: no cover


class SystemRandomSource:
    "Uniformly random scalars in [1, n-1] from the OS secure generator."

    def __init__(self, ec: Curve = bls12_381) -> None:
        self.ec = ec

    def sample_scalar(self) -> int:
        return 1 + secrets.randbelow(self.ec.n - 1)


class HashPatternSource:
    """Deterministic scalars from hashed fixed byte patterns.

    For each i in patterns, the 32 bytes pattern [i & 0xFF] * 32
    is hashed rounds times with SHA256
    and the digest is reduced modulo n.
    """

    def __init__(
        self, patterns: Iterable[int], rounds: int = 1, ec: Curve = bls12_381
    ) -> None:
        self._patterns = iter(patterns)
        self.rounds = rounds
        self.ec = ec

    def sample_scalar(self) -> int:
        try:
            i = next(self._patterns)
        except StopIteration as e:
            raise RingKYCRuntimeError("exhausted hash pattern source") from e
        digest = fixed_pattern(i)
        for _ in range(self.rounds):
            digest = sha256(digest)
        return scalar_from_hash(digest, self.ec)


def signing_source(ec: Curve = bls12_381) -> HashPatternSource:
    """Return the deterministic source used for signing.

    The first scalar (the nonce) is from the NONCE_PATTERN,
    the following ones (the responses, one per ring position)
    are from RESPONSE_PATTERN + position.
    """
    patterns = itertools.chain([NONCE_PATTERN], itertools.count(RESPONSE_PATTERN))
    return HashPatternSource(patterns, 1, ec)


def derivation_source(ec: Curve = bls12_381) -> HashPatternSource:
    "Return the deterministic double-hash source used for key derivation."
    return HashPatternSource(itertools.count(0), 2, ec)
