#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Key pairs and key rings.

The public key associated to the private key q is Q = q*G,
serialized as 96 bytes (see ringkyc.ec.sec_point).

derive_keys populates a whole ring deterministically:
the i-th private key is SHA256(SHA256([i]*32)) mod n.
Identical indexes always yield identical keys: this is fine
for fixtures and demos, it is not a secure key generation.
Use gen_keys() for that.
"""

from dataclasses import InitVar, dataclass, field
from typing import List, Optional, Tuple

from dataclasses_json import DataClassJsonMixin, config

from ringkyc.alias import Scalar
from ringkyc.ec import (
    Curve,
    bls12_381,
    bytes_from_point,
    bytes_from_scalar,
    int_from_scalar,
    mult,
    scalar_from_octets,
)
from ringkyc.ecc.nonce import SystemRandomSource, derivation_source
from ringkyc.exceptions import RingKYCValueError

# derive_keys count is a u32
MAX_RING_SIZE = 0xFFFFFFFF


@dataclass
class KeyRing(DataClassJsonMixin):
    """Private keys and the ring of the associated public keys.

    ring[i] is the 96 bytes serialization of secret_keys[i]*G.
    """

    secret_keys: List[int] = field(
        default_factory=list,
        metadata=config(
            encoder=lambda v: [bytes_from_scalar(q).hex() for q in v],
            decoder=lambda v: [scalar_from_octets(q) for q in v],
        ),
    )
    ring: List[bytes] = field(
        default_factory=list,
        metadata=config(
            encoder=lambda v: [Q.hex() for Q in v],
            decoder=lambda v: [bytes.fromhex(Q) for Q in v],
        ),
    )
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def __len__(self) -> int:
        return len(self.ring)

    def assert_valid(self) -> None:
        if len(self.secret_keys) != len(self.ring):
            err_msg = "key ring size mismatch: "
            err_msg += f"{len(self.secret_keys)} private keys, "
            err_msg += f"{len(self.ring)} public keys"
            raise RingKYCValueError(err_msg)
        for i, (q, Q) in enumerate(zip(self.secret_keys, self.ring)):
            if pub_key_from_prv_key(q) != Q:
                raise RingKYCValueError(f"mismatched key pair at position {i}")


def pub_key_from_prv_key(prv_key: Scalar, ec: Curve = bls12_381) -> bytes:
    "Return the 96 bytes public key associated to the private key."

    q = int_from_scalar(prv_key, ec)
    if q == 0:
        raise RingKYCValueError("private key not in 1..n-1: 0")
    return bytes_from_point(mult(q, ec.G, ec), ec)


def gen_keys(
    prv_key: Optional[Scalar] = None, ec: Curve = bls12_381
) -> Tuple[int, bytes]:
    """Return a private/public (int, bytes) key-pair.

    If the private key is not provided,
    a cryptographically secure random one is generated.
    """

    if prv_key is None:
        q = SystemRandomSource(ec).sample_scalar()
    else:
        q = int_from_scalar(prv_key, ec)

    return q, pub_key_from_prv_key(q, ec)


def derive_keys(count: int, ec: Curve = bls12_381) -> KeyRing:
    """Return count deterministically derived key pairs.

    The key ring is ordered as the derivation index.
    """

    if not 0 <= count <= MAX_RING_SIZE:
        raise RingKYCValueError(f"invalid key count: {count}")

    source = derivation_source(ec)
    secret_keys: List[int] = []
    ring: List[bytes] = []
    for _ in range(count):
        q = source.sample_scalar()
        secret_keys.append(q)
        ring.append(bytes_from_point(mult(q, ec.G, ec), ec))

    return KeyRing(secret_keys, ring, check_validity=False)
