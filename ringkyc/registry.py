#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Registry of admin, issuers, rings, and login counter.

The registry is the key-value state behind the ring-signature contract:

- the admin identity, set exactly once by initialize()
- the issuers, as 96 bytes public keys (append-only, no duplicates)
- the attribute rings (e.g. "over_18"), overwritten by each new ring
- the default ring, whose (re)setting also resets the login counter
- the login counter, bumped by each successful verification

All accesses are serialized by a lock, so that the registry
can be shared by concurrent verifications.
The state can be dumped to and restored from JSON.
"""

import json
import logging
import re
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from dataclasses_json import DataClassJsonMixin, config

from ringkyc.alias import Octets, Ring
from ringkyc.config import U64_MAX
from ringkyc.ec import bls12_381, bytes_from_point
from ringkyc.exceptions import (
    RingKYCPermissionError,
    RingKYCRuntimeError,
    RingKYCTypeError,
    RingKYCValueError,
)
from ringkyc.utils import bytes_from_octets

logger = logging.getLogger(__name__)

# attribute symbols: up to 32 chars among a-z, A-Z, 0-9, and _
_SYMBOL = re.compile(r"[A-Za-z0-9_]{1,32}")

PUB_KEY_SIZE = 2 * bls12_381.p_size


def symbol_from_attribute(attribute: str) -> str:
    "Return the attribute as a valid symbol."
    if not isinstance(attribute, str):
        raise RingKYCTypeError(f"attribute is not a string: {attribute!r}")
    if not _SYMBOL.fullmatch(attribute):
        raise RingKYCValueError(f"invalid attribute symbol: {attribute!r}")
    return attribute


def bytes_from_ring_key(pub_key: Any) -> bytes:
    """Return a ring entry as 96 bytes.

    The entry is not required to be a valid point:
    invalid rings are rejected at verification time.
    """
    if isinstance(pub_key, tuple):
        return bytes_from_point(pub_key)
    return bytes_from_octets(pub_key, PUB_KEY_SIZE)


def _encode_ring(ring: Optional[List[bytes]]) -> Optional[List[str]]:
    return None if ring is None else [pub_key.hex() for pub_key in ring]


def _decode_ring(ring: Optional[List[str]]) -> Optional[List[bytes]]:
    return None if ring is None else [bytes.fromhex(pub_key) for pub_key in ring]


@dataclass
class RegistryState(DataClassJsonMixin):
    admin: Optional[str] = None
    issuers: List[bytes] = field(
        default_factory=list,
        metadata=config(encoder=_encode_ring, decoder=_decode_ring),
    )
    attribute_rings: Dict[str, List[bytes]] = field(
        default_factory=dict,
        metadata=config(
            encoder=lambda d: {k: _encode_ring(v) for k, v in d.items()},
            decoder=lambda d: {k: _decode_ring(v) for k, v in d.items()},
        ),
    )
    default_ring: Optional[List[bytes]] = field(
        default=None,
        metadata=config(encoder=_encode_ring, decoder=_decode_ring),
    )
    login_count: int = 0


class Registry:
    """Thread-safe registry state with an initialization lifecycle.

    Uninitialized until initialize(admin) is called;
    a second initialize() fails instead of replacing the admin.
    """

    def __init__(
        self, state: Optional[RegistryState] = None, login_count_max: int = U64_MAX
    ) -> None:
        self._lock = threading.RLock()
        self._state = RegistryState() if state is None else state
        self.login_count_max = login_count_max

    # admin

    @property
    def is_initialized(self) -> bool:
        with self._lock:
            return self._state.admin is not None

    @property
    def admin(self) -> Optional[str]:
        with self._lock:
            return self._state.admin

    def initialize(self, admin: str) -> None:
        if not isinstance(admin, str) or not admin:
            raise RingKYCValueError(f"invalid admin: {admin!r}")
        with self._lock:
            if self._state.admin is not None:
                raise RingKYCRuntimeError("already initialized")
            self._state.admin = admin
            self._state.issuers = []
        logger.info("registry initialized, admin %s", admin)

    def _require_admin(self, caller: str) -> None:
        if self._state.admin is None:
            raise RingKYCRuntimeError("not initialized")
        if caller != self._state.admin:
            raise RingKYCPermissionError(f"not the admin: {caller!r}")

    # issuers

    @property
    def issuers(self) -> List[bytes]:
        with self._lock:
            return list(self._state.issuers)

    def register_issuer(self, issuer_pub: Octets, caller: str) -> bool:
        """Register an issuer public key; admin only.

        Return False if the issuer was already registered.
        """
        issuer_pub = bytes_from_ring_key(issuer_pub)
        with self._lock:
            self._require_admin(caller)
            if issuer_pub in self._state.issuers:
                return False
            self._state.issuers.append(issuer_pub)
        logger.info("issuer registered: %s", issuer_pub.hex())
        return True

    def is_issuer(self, issuer_pub: Octets) -> bool:
        issuer_pub = bytes_from_ring_key(issuer_pub)
        with self._lock:
            return issuer_pub in self._state.issuers

    # rings

    def set_attribute_ring(self, attribute: str, ring: Ring) -> None:
        attribute = symbol_from_attribute(attribute)
        ring_ = [bytes_from_ring_key(pub_key) for pub_key in ring]
        with self._lock:
            self._state.attribute_rings[attribute] = ring_
        logger.info("ring for %s set: %d public keys", attribute, len(ring_))

    def get_attribute_ring(self, attribute: str) -> Optional[List[bytes]]:
        attribute = symbol_from_attribute(attribute)
        with self._lock:
            ring = self._state.attribute_rings.get(attribute)
            return None if ring is None else list(ring)

    @property
    def attributes(self) -> List[str]:
        with self._lock:
            return sorted(self._state.attribute_rings)

    def set_default_ring(self, ring: Ring) -> None:
        "Set the default ring and reset the login counter."
        ring_ = [bytes_from_ring_key(pub_key) for pub_key in ring]
        with self._lock:
            self._state.default_ring = ring_
            self._state.login_count = 0
        logger.info("default ring set: %d public keys", len(ring_))

    @property
    def default_ring(self) -> Optional[List[bytes]]:
        with self._lock:
            ring = self._state.default_ring
            return None if ring is None else list(ring)

    # login counter

    @property
    def login_count(self) -> int:
        with self._lock:
            return self._state.login_count

    def increment_login_count(self) -> int:
        "Atomically increment the login counter, saturating at its max."
        with self._lock:
            count = min(self._state.login_count + 1, self.login_count_max)
            self._state.login_count = count
        logger.debug("login count: %d", count)
        return count

    # persistence

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return self._state.to_dict()

    @classmethod
    def from_dict(
        cls, dict_: Mapping[str, Any], login_count_max: int = U64_MAX
    ) -> "Registry":
        return cls(RegistryState.from_dict(dict_), login_count_max)

    def save(self, filename: str) -> None:
        with open(filename, "w", encoding="ascii") as file_:
            json.dump(self.to_dict(), file_, indent=4)

    @classmethod
    def load(cls, filename: str, login_count_max: int = U64_MAX) -> "Registry":
        with open(filename, "r", encoding="ascii") as file_:
            return cls.from_dict(json.load(file_), login_count_max)
