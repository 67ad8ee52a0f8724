#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Ring-signature KYC contract entry points.

An admin registers issuers; an issuer publishes, for an attribute
(e.g. "over_18"), the ring of the public keys of the users holding it;
any holder of one of those private keys can then log in anonymously
by signing a message with a ring signature verifying against that ring.

Each successful verification bumps the registry login counter.
A missing ring is just a failed verification: whether a ring
exists for an attribute is not disclosed by verify_attribute.
"""

import logging
from typing import List, Optional, Union

from ringkyc.alias import BinaryData, Octets, Ring, Scalar, String
from ringkyc.config import DEFAULT_CONFIG, Config
from ringkyc.ecc import keys, ring_sig
from ringkyc.ecc.keys import KeyRing
from ringkyc.ecc.ring_sig import Sig
from ringkyc.exceptions import RingKYCPermissionError, RingKYCValueError
from ringkyc.registry import Registry

logger = logging.getLogger(__name__)


class RingSigContract:
    "Contract state (the registry) and its entry points."

    def __init__(
        self, registry: Optional[Registry] = None, config: Config = DEFAULT_CONFIG
    ) -> None:
        self.config = config
        if registry is None:
            registry = Registry(login_count_max=config.login_count_max)
        elif registry.login_count_max != config.login_count_max:
            err_msg = "login count max mismatch: "
            err_msg += f"{registry.login_count_max} in registry, "
            err_msg += f"{config.login_count_max} in config"
            raise RingKYCValueError(err_msg)
        self.registry = registry

    # admin and issuers

    def initialize(self, admin: str) -> None:
        "Initialize the contract with an admin address."
        self.registry.initialize(admin)

    def get_admin(self) -> Optional[str]:
        return self.registry.admin

    def register_issuer(self, issuer_pub: Octets, caller: str) -> None:
        "Register a new issuer (admin only)."
        self.registry.register_issuer(issuer_pub, caller)

    def get_issuers(self) -> List[bytes]:
        return self.registry.issuers

    # rings

    def create_ring_for_attribute(
        self, issuer: Octets, attribute: str, users: Ring
    ) -> None:
        """Create or replace the ring for an attribute.

        The issuer must be a registered one
        only if the configuration requires it.
        """
        if self.config.require_registered_issuer:
            if not self.registry.is_issuer(issuer):
                raise RingKYCPermissionError("not a registered issuer")
        self.registry.set_attribute_ring(attribute, users)

    def get_ring_for_attribute(self, attribute: str) -> Optional[List[bytes]]:
        return self.registry.get_attribute_ring(attribute)

    def init(self, ring: Ring) -> None:
        "Set the default ring, resetting the login counter."
        self.registry.set_default_ring(ring)

    def get_ring(self) -> Optional[List[bytes]]:
        return self.registry.default_ring

    def get_login_count(self) -> int:
        return self.registry.login_count

    # keys and signatures

    @staticmethod
    def create_keys(ring_size: int) -> KeyRing:
        "Create a set of (deterministic) key pairs for a ring."
        return keys.derive_keys(ring_size)

    def sign(self, msg: String, ring: Ring, secret_idx: int, prv_key: Scalar) -> Sig:
        "Sign a message with a ring signature."
        rng = self.config.scalar_source()
        return ring_sig.sign(msg, ring, secret_idx, prv_key, rng)

    def verify_attribute(
        self, msg: String, sig: Union[Sig, BinaryData], attribute: str
    ) -> bool:
        "Verify a ring signature against the ring of an attribute."
        ring = self.registry.get_attribute_ring(attribute)
        if ring is None:
            logger.debug("no ring for attribute %s", attribute)
            return False
        return self.verify_ring(msg, sig, ring)

    def verify(self, msg: String, sig: Union[Sig, BinaryData]) -> bool:
        "Verify a ring signature against the default ring."
        ring = self.registry.default_ring
        if ring is None:
            logger.debug("no default ring")
            return False
        return self.verify_ring(msg, sig, ring)

    def verify_ring(self, msg: String, sig: Union[Sig, BinaryData], ring: Ring) -> bool:
        "Verify a ring signature, bumping the login counter if valid."
        if not ring_sig.verify(msg, sig, ring):
            logger.debug("ring signature rejected")
            return False
        self.registry.increment_login_count()
        logger.debug("ring signature accepted")
        return True
