#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Configuration of the ring-signature contract and registry."""

import json
from dataclasses import InitVar, dataclass
from os import path

from dataclasses_json import DataClassJsonMixin

from ringkyc.ec import Curve, bls12_381
from ringkyc.ecc.nonce import ScalarSource, SystemRandomSource, signing_source
from ringkyc.exceptions import RingKYCValueError

RANDOMNESS = ("deterministic", "system")

# the login counter is a u64
U64_MAX = 0xFFFFFFFFFFFFFFFF


@dataclass(frozen=True)
class Config(DataClassJsonMixin):
    # "deterministic" reproduces the contract signatures, "system" is secure
    randomness: str = "deterministic"
    # if True only registered issuers can create attribute rings
    require_registered_issuer: bool = False
    # the login counter saturates at this value
    login_count_max: int = U64_MAX
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        if self.randomness not in RANDOMNESS:
            err_msg = f"invalid randomness: {self.randomness!r}"
            err_msg += f" instead of one of {RANDOMNESS}"
            raise RingKYCValueError(err_msg)
        if not isinstance(self.require_registered_issuer, bool):
            err_msg = "invalid require_registered_issuer: "
            err_msg += f"{self.require_registered_issuer!r}"
            raise RingKYCValueError(err_msg)
        if isinstance(self.login_count_max, bool) or not isinstance(
            self.login_count_max, int
        ):
            err_msg = f"invalid login_count_max: {self.login_count_max!r}"
            raise RingKYCValueError(err_msg)
        if not 0 < self.login_count_max <= U64_MAX:
            raise RingKYCValueError(f"invalid login_count_max: {self.login_count_max}")

    def scalar_source(self, ec: Curve = bls12_381) -> ScalarSource:
        "Return a new source of signing nonces and responses."
        if self.randomness == "system":
            return SystemRandomSource(ec)
        return signing_source(ec)


def config_from_file(filename: str) -> Config:
    "Return the Config stored in a JSON file."
    with open(filename, "r", encoding="ascii") as file_:
        return Config.from_dict(json.load(file_))


datadir = path.join(path.dirname(__file__), "_data")
DEFAULT_CONFIG = config_from_file(path.join(datadir, "default.json"))
