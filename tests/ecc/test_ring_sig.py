#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `ringkyc.ecc.ring_sig` module."

from dataclasses import FrozenInstanceError, fields
from io import BytesIO

import pytest

from ringkyc.ec import (
    bls12_381,
    bytes_from_point,
    bytes_from_scalar,
    mult,
    point_from_octets,
)
from ringkyc.ecc import ring_sig
from ringkyc.ecc.keys import derive_keys
from ringkyc.ecc.nonce import RESPONSE_PATTERN, SystemRandomSource
from ringkyc.ecc.ring_sig import Sig, assert_as_valid, normalize_ring, sign, verify
from ringkyc.exceptions import RingKYCRuntimeError, RingKYCValueError
from ringkyc.hashes import fixed_pattern, scalar_from_hash, sha256

KEY_RING = derive_keys(5)
MSG = b"login nonce 0x2a"


def test_ring_signature() -> None:
    # every ring size, every signer position
    for n in range(1, 5):
        ring = KEY_RING.ring[:n]
        for s in range(n):
            sig = sign(MSG, ring, s, KEY_RING.secret_keys[s])
            assert len(sig.responses) == n
            assert_as_valid(MSG, sig, ring)
            assert verify(MSG, sig, ring)


def test_tampered_signature() -> None:
    ring = KEY_RING.ring[:3]
    sig = sign(MSG, ring, 1, KEY_RING.secret_keys[1])
    assert verify(MSG, sig, ring)

    # wrong message: one byte changed
    msg_fake = b"login nonce 0x2b"
    assert not verify(msg_fake, sig, ring)
    with pytest.raises(RingKYCRuntimeError, match="signature verification failed"):
        assert_as_valid(msg_fake, sig, ring)
    assert not verify(MSG + b"\x00", sig, ring)
    assert not verify(0, sig, ring)  # type: ignore[arg-type]

    # wrong ring: any single public key replaced
    for i in range(3):
        ring_fake = list(ring)
        ring_fake[i] = KEY_RING.ring[4]
        assert not verify(MSG, sig, ring_fake)

    # wrong ring: different order
    assert not verify(MSG, sig, [ring[1], ring[0], ring[2]])

    # wrong challenge or response
    assert not verify(MSG, Sig((sig.challenge + 1) % bls12_381.n, sig.responses), ring)
    for i in range(3):
        responses = list(sig.responses)
        responses[i] = (responses[i] + 1) % bls12_381.n
        assert not verify(MSG, Sig(sig.challenge, responses), ring)


def test_size_mismatch(monkeypatch) -> None:
    ring = KEY_RING.ring[:3]
    sig = sign(MSG, ring, 0, KEY_RING.secret_keys[0])

    def no_point_arithmetic(*args, **kwargs):
        raise AssertionError("no point arithmetic was expected")

    monkeypatch.setattr(ring_sig, "point_from_pub_key", no_point_arithmetic)
    monkeypatch.setattr(ring_sig, "double_mult", no_point_arithmetic)

    err_msg = "ring size mismatch: 2 public keys, 3 responses"
    with pytest.raises(RingKYCValueError, match=err_msg):
        assert_as_valid(MSG, sig, ring[:2])
    assert not verify(MSG, sig, ring[:2])

    err_msg = "ring size mismatch: 4 public keys, 3 responses"
    with pytest.raises(RingKYCValueError, match=err_msg):
        assert_as_valid(MSG, sig, KEY_RING.ring[:4])
    assert not verify(MSG, sig, KEY_RING.ring[:4])

    with pytest.raises(RingKYCValueError, match="empty ring"):
        assert_as_valid(MSG, sig, [])
    assert not verify(MSG, sig, [])
    assert not verify(MSG, Sig(0, []), [])
    assert not verify(MSG, Sig(sig.challenge, []), [])


def test_invalid_ring() -> None:
    ring = KEY_RING.ring[:3]
    sig = sign(MSG, ring, 2, KEY_RING.secret_keys[2])

    # not a valid point
    ring_fake = [ring[0], b"\x01" * 96, ring[2]]
    assert not verify(MSG, sig, ring_fake)
    # not a 96 bytes public key
    ring_fake = [ring[0], ring[1][:95], ring[2]]
    assert not verify(MSG, sig, ring_fake)
    # a point tuple not in the prime order subgroup
    ring_fake = [ring[0], bls12_381.point_from_aff(0, 2), ring[2]]
    assert not verify(MSG, sig, ring_fake)
    with pytest.raises(RingKYCValueError, match="point not in the prime order"):
        sign(MSG, ring_fake, 0, KEY_RING.secret_keys[0])


def test_position_independence() -> None:
    q = KEY_RING.secret_keys[0]
    ring_a = [KEY_RING.ring[0], KEY_RING.ring[1], KEY_RING.ring[2]]
    ring_b = [KEY_RING.ring[1], KEY_RING.ring[2], KEY_RING.ring[0]]

    sig_a = sign(MSG, ring_a, 0, q)
    sig_b = sign(MSG, ring_b, 2, q)
    assert verify(MSG, sig_a, ring_a)
    assert verify(MSG, sig_b, ring_b)
    assert not verify(MSG, sig_a, ring_b)
    assert not verify(MSG, sig_b, ring_a)

    # the signature has just the anchor challenge and the responses
    assert [f.name for f in fields(Sig)] == ["challenge", "responses"]


def test_normalize_ring() -> None:
    ring = [KEY_RING.ring[0], KEY_RING.ring[0], KEY_RING.ring[2]]
    ring_copy = list(ring)

    effective_ring = normalize_ring(ring, 1, KEY_RING.secret_keys[1])
    assert effective_ring == KEY_RING.ring[:3]
    # the input ring is untouched
    assert ring == ring_copy

    # points and hex-strings are normalized to bytes
    ring = [point_from_octets(KEY_RING.ring[0]), KEY_RING.ring[1].hex()]
    assert normalize_ring(ring, 0, KEY_RING.secret_keys[0]) == KEY_RING.ring[:2]

    # the signer entry is overwritten, whatever it was
    ring = [KEY_RING.ring[0], b"\x00" * 96, KEY_RING.ring[2]]
    effective_ring = normalize_ring(ring, 1, KEY_RING.secret_keys[1])
    assert effective_ring == KEY_RING.ring[:3]
    sig = sign(MSG, ring, 1, KEY_RING.secret_keys[1])
    assert verify(MSG, sig, effective_ring)
    assert not verify(MSG, sig, ring)


def test_invalid_sign() -> None:
    ring = KEY_RING.ring[:3]
    q = KEY_RING.secret_keys[0]

    with pytest.raises(RingKYCValueError, match="empty ring"):
        sign(MSG, [], 0, q)
    with pytest.raises(RingKYCValueError, match=r"secret index not in 0..2: 3"):
        sign(MSG, ring, 3, q)
    with pytest.raises(RingKYCValueError, match=r"secret index not in 0..2: -1"):
        sign(MSG, ring, -1, q)
    with pytest.raises(RingKYCValueError, match="invalid secret index: True"):
        sign(MSG, ring, True, q)
    with pytest.raises(RingKYCValueError, match="invalid secret index: "):
        sign(MSG, ring, 1.0, q)  # type: ignore[arg-type]
    with pytest.raises(RingKYCValueError, match="private key not in 1..n-1: 0"):
        sign(MSG, ring, 0, 0)
    with pytest.raises(RingKYCValueError, match="scalar not in 0..n-1: "):
        sign(MSG, ring, 0, bls12_381.n)
    with pytest.raises(RingKYCValueError, match="secret index not in 0..2: 3"):
        normalize_ring(ring, 3, q)


def test_deterministic_signature() -> None:
    ring = KEY_RING.ring[:3]
    q = KEY_RING.secret_keys[1]

    sig = sign(MSG, ring, 1, q)
    assert sign(MSG, ring, 1, q) == sig
    assert sign(MSG.decode(), ring, 1, q) == sig
    assert sign(MSG, [point_from_octets(Q) for Q in ring], 1, q) == sig

    # only the signer response is bound to the private key
    sig2 = sign(MSG, ring, 2, KEY_RING.secret_keys[2])
    assert sig2.responses[0] == sig.responses[0]
    assert sig2.challenge != sig.challenge


def test_random_signature() -> None:
    ring = KEY_RING.ring[:3]
    q = KEY_RING.secret_keys[1]

    sig = sign(MSG, ring, 1, q, SystemRandomSource())
    assert verify(MSG, sig, ring)
    sig2 = sign(MSG, ring, 1, q, SystemRandomSource())
    assert verify(MSG, sig2, ring)
    assert sig != sig2


def test_single_key_ring() -> None:
    q = KEY_RING.secret_keys[3]
    ring = [KEY_RING.ring[3]]
    sig = sign(MSG, ring, 0, q)
    assert verify(MSG, sig, ring)

    # it is a Schnorr signature: r*G + c*Q = a*G
    c, r = sig.challenge, sig.responses[0]
    K = bls12_381.add(mult(r), mult(c, point_from_octets(ring[0])))
    assert c == ring_sig.challenge_(ring[0] + MSG, bytes_from_point(K))


def test_sig_serialization(tmp_path) -> None:
    ring = KEY_RING.ring[:4]
    sig = sign(MSG, ring, 3, KEY_RING.secret_keys[3])

    sig_bytes = sig.serialize()
    assert len(sig_bytes) == 32 * 5
    assert sig == Sig.parse(sig_bytes)
    assert sig == Sig.parse(sig_bytes.hex())
    assert verify(MSG, sig_bytes, ring)
    assert verify(MSG, sig_bytes.hex(), ring)
    assert verify(MSG, BytesIO(sig_bytes), ring)

    sig_dict = sig.to_dict()
    assert sig_dict["challenge"] == sig_bytes[:32].hex()
    assert sig_dict["responses"][3] == sig_bytes[128:].hex()
    assert sig == Sig.from_dict(sig_dict)

    filename = tmp_path / "sig.json"
    with open(filename, "w", encoding="ascii") as file_:
        file_.write(sig.to_json())
    with open(filename, "r", encoding="ascii") as file_:
        assert sig == Sig.from_json(file_.read())


def test_invalid_sig() -> None:
    n = bls12_381.n

    with pytest.raises(RingKYCValueError, match="challenge not in 0..n-1: "):
        Sig(n, [1])
    with pytest.raises(RingKYCValueError, match="response #1 not in 0..n-1: "):
        Sig(1, [1, n])

    ring = KEY_RING.ring[:2]
    sig = sign(MSG, ring, 0, KEY_RING.secret_keys[0])
    sig_invalid = Sig(sig.challenge, [sig.responses[0], sig.responses[1] + n], False)
    assert not verify(MSG, sig_invalid, ring)
    with pytest.raises(RingKYCValueError, match="response #1 not in 0..n-1: "):
        assert_as_valid(MSG, sig_invalid, ring)
    with pytest.raises(RingKYCValueError, match="response #1 not in 0..n-1: "):
        sig_invalid.serialize()

    sig_bytes = sig.serialize()
    with pytest.raises(RingKYCValueError, match="invalid ring signature size: 95"):
        Sig.parse(sig_bytes[1:])
    with pytest.raises(RingKYCValueError, match="invalid ring signature size: 0"):
        Sig.parse(b"")
    assert not verify(MSG, sig_bytes[1:], ring)

    # non canonical scalars are reduced on decoding
    sig_bytes = n.to_bytes(32, "big") + sig_bytes[32:]
    assert Sig.parse(sig_bytes).challenge == 0
    assert not verify(MSG, sig_bytes, ring)

    with pytest.raises(FrozenInstanceError):
        sig.challenge = 0  # type: ignore[misc]


def test_non_canonical_responses() -> None:
    ring = KEY_RING.ring[:3]
    sig = sign(MSG, ring, 2, KEY_RING.secret_keys[2])

    # forged responses written as raw digests, without reduction mod n
    digests = [sha256(fixed_pattern(RESPONSE_PATTERN + i)) for i in range(2)]
    assert all(int.from_bytes(d, "big") >= bls12_381.n for d in digests)
    assert [scalar_from_hash(d) for d in digests] == sig.responses[:2]

    sig_bytes = bytes_from_scalar(sig.challenge) + b"".join(digests)
    sig_bytes += bytes_from_scalar(sig.responses[2])
    assert sig_bytes != sig.serialize()
    assert Sig.parse(sig_bytes) == sig
    assert verify(MSG, sig_bytes, ring)

    sig_dict = {
        "challenge": bytes_from_scalar(sig.challenge).hex(),
        "responses": [d.hex() for d in digests]
        + [bytes_from_scalar(sig.responses[2]).hex()],
    }
    assert Sig.from_dict(sig_dict) == sig
    assert verify(MSG, Sig.from_dict(sig_dict), ring)
    # serialization is canonical
    assert Sig.parse(sig_bytes).serialize() == sig.serialize()
