#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""1-out-of-n ring signature functions.

A ring signature proves knowledge of the discrete logarithm
of one of the public keys in a ring, without revealing which one.
It is the Fiat-Shamir transform of a cyclic chain of
Schnorr identification protocols, one per ring position.

Given the ring (P_0, ..., P_{n-1}), the message m,
and the private key q_s of P_s = q_s*G:

- base = P_0 ‖ ... ‖ P_{n-1} ‖ m
- nonce a, forged responses r_i for i != s
- c_{s+1} = H(base ‖ a*G)
- c_{i+1} = H(base ‖ (r_i*G + c_i*P_i)) walking forward from s+1
  (indexes modulo n) back to s
- r_s = a - c_s*q_s, so that r_s*G + c_s*P_s = a*G closes the chain

The signature is (c_0, r_0, ..., r_{n-1}): position 0 is the anchor,
whatever the signer position is.

Verification recomputes the chain starting from c_0 at position 0
and accepts if, after visiting all n positions, it lands back on c_0.
"""

from dataclasses import InitVar, dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from dataclasses_json import DataClassJsonMixin, config

from ringkyc.alias import BinaryData, Octets, Point, Ring, Scalar, String
from ringkyc.ec import (
    Curve,
    bls12_381,
    bytes_from_point,
    bytes_from_scalar,
    double_mult,
    int_from_scalar,
    mult,
    point_from_pub_key,
    scalar_from_octets,
)
from ringkyc.ecc.nonce import ScalarSource, signing_source
from ringkyc.exceptions import RingKYCRuntimeError, RingKYCValueError
from ringkyc.hashes import challenge_
from ringkyc.utils import bytes_from_octets, bytes_from_string


@dataclass(frozen=True)
class Sig(DataClassJsonMixin):
    """Ring signature.

    - challenge is the anchor (ring position 0) challenge, 0 <= c < n
    - responses are the scalars, one per ring position, 0 <= r < n

    Deserialization reduces each 32 bytes scalar modulo n,
    so that non canonical encodings are accepted;
    serialization is always canonical.
    """

    challenge: int = field(
        metadata=config(
            encoder=lambda c: bytes_from_scalar(c).hex(),
            decoder=lambda c: scalar_from_octets(c, reduce=True),
        )
    )
    responses: List[int] = field(
        metadata=config(
            encoder=lambda v: [bytes_from_scalar(r).hex() for r in v],
            decoder=lambda v: [scalar_from_octets(r, reduce=True) for r in v],
        )
    )
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self, ec: Curve = bls12_381) -> None:
        if not 0 <= self.challenge < ec.n:
            raise RingKYCValueError(f"challenge not in 0..n-1: {hex(self.challenge)}")
        for i, r in enumerate(self.responses):
            if not 0 <= r < ec.n:
                raise RingKYCValueError(f"response #{i} not in 0..n-1: {hex(r)}")

    def serialize(self, check_validity: bool = True) -> bytes:
        "Return the challenge followed by the responses, 32 bytes each."

        if check_validity:
            self.assert_valid()

        out = bytes_from_scalar(self.challenge)
        out += b"".join(bytes_from_scalar(r) for r in self.responses)
        return out

    @classmethod
    def parse(cls, data: Octets, check_validity: bool = True) -> "Sig":
        data = bytes_from_octets(data)
        n_size = bls12_381.n_size
        if len(data) < n_size or len(data) % n_size:
            err_msg = f"invalid ring signature size: {len(data)} bytes"
            raise RingKYCValueError(err_msg)
        challenge = scalar_from_octets(data[:n_size], reduce=True)
        responses = [
            scalar_from_octets(data[i : i + n_size], reduce=True)
            for i in range(n_size, len(data), n_size)
        ]
        return cls(challenge, responses, check_validity)


def _sig_from_sig_or_data(sig: Union[Sig, BinaryData]) -> Sig:
    if isinstance(sig, Sig):
        sig.assert_valid()
        return sig
    if isinstance(sig, (bytes, str)):
        return Sig.parse(sig)
    return Sig.parse(sig.read())


def _effective_ring(
    ring: Ring, secret_index: int, q: int, ec: Curve
) -> Tuple[List[Point], List[bytes]]:
    n = len(ring)
    if n == 0:
        raise RingKYCValueError("empty ring")
    # bool is an int, but not a valid index
    if isinstance(secret_index, bool) or not isinstance(secret_index, int):
        raise RingKYCValueError(f"invalid secret index: {secret_index!r}")
    if not 0 <= secret_index < n:
        raise RingKYCValueError(f"secret index not in 0..{n - 1}: {secret_index}")
    if q == 0:
        raise RingKYCValueError("private key not in 1..n-1: 0")

    pub_keys: List[Point] = []
    for i, pub_key in enumerate(ring):
        Q = mult(q, ec.G, ec) if i == secret_index else point_from_pub_key(pub_key, ec)
        pub_keys.append(Q)
    return pub_keys, [bytes_from_point(Q, ec) for Q in pub_keys]


def normalize_ring(
    ring: Ring, secret_index: int, prv_key: Scalar, ec: Curve = bls12_381
) -> List[bytes]:
    """Return the effective ring used for signing.

    It is a new list with the serialized public keys of the input ring,
    but the entry at secret_index that is replaced by prv_key*G.
    The input ring is left untouched.
    """
    q = int_from_scalar(prv_key, ec)
    return _effective_ring(ring, secret_index, q, ec)[1]


def _base(ring_bytes: Sequence[bytes], msg: bytes) -> bytes:
    # binds the signature to both the exact ring and the message
    return b"".join(ring_bytes) + msg


def sign(
    msg: String,
    ring: Ring,
    secret_index: int,
    prv_key: Scalar,
    rng: Optional[ScalarSource] = None,
    ec: Curve = bls12_381,
) -> Sig:
    """Ring signature - signing algorithm.

    inputs:

    - msg: message to be signed (bytes or text string)
    - ring: sequence of public keys
    - secret_index: the signer position in the ring
    - prv_key: the signer private key
    - rng: the source of the nonce and of the forged responses;
      if not provided, the deterministic signing_source() is used

    The ring entry at secret_index is replaced by prv_key*G,
    see normalize_ring().
    """

    msg = bytes_from_string(msg)
    q = int_from_scalar(prv_key, ec)
    pub_keys, ring_bytes = _effective_ring(ring, secret_index, q, ec)
    n = len(pub_keys)

    rng = signing_source(ec) if rng is None else rng
    a = rng.sample_scalar()
    # one response per position, the signer's one is overwritten below
    responses = [rng.sample_scalar() for _ in range(n)]

    base = _base(ring_bytes, msg)
    c = [0] * n
    idx = (secret_index + 1) % n
    K = mult(a, ec.G, ec)
    c[idx] = challenge_(base, bytes_from_point(K, ec), ec)
    while idx != secret_index:
        X = double_mult(responses[idx], ec.G, c[idx], pub_keys[idx], ec)
        idx = (idx + 1) % n
        c[idx] = challenge_(base, bytes_from_point(X, ec), ec)

    # close the ring
    responses[secret_index] = (a - c[secret_index] * q) % ec.n
    return Sig(c[0], responses)


def assert_as_valid(
    msg: String, sig: Union[Sig, BinaryData], ring: Ring, ec: Curve = bls12_381
) -> None:
    """Ring signature - verification algorithm.

    It raises an Error if the signature is not valid.
    """

    msg = bytes_from_string(msg)
    sig = _sig_from_sig_or_data(sig)

    # reject before any point arithmetic
    n = len(ring)
    if n == 0:
        raise RingKYCValueError("empty ring")
    if n != len(sig.responses):
        err_msg = f"ring size mismatch: {n} public keys, "
        err_msg += f"{len(sig.responses)} responses"
        raise RingKYCValueError(err_msg)

    pub_keys = [point_from_pub_key(pub_key, ec) for pub_key in ring]
    base = _base([bytes_from_point(Q, ec) for Q in pub_keys], msg)

    c = sig.challenge
    for r, Q in zip(sig.responses, pub_keys):
        X = double_mult(r, ec.G, c, Q, ec)
        c = challenge_(base, bytes_from_point(X, ec), ec)

    if c != sig.challenge:
        raise RingKYCRuntimeError("signature verification failed")


def verify(
    msg: String, sig: Union[Sig, BinaryData], ring: Ring, ec: Curve = bls12_381
) -> bool:
    """Ring signature - verification algorithm.

    It returns True if the signature is valid, False otherwise,
    without discriminating the failure reason.
    """

    # all kind of Exceptions are catched because
    # verify must always return a bool
    try:
        assert_as_valid(msg, sig, ring, ec)
    except Exception:  # pylint: disable=broad-except
        return False
    return True
