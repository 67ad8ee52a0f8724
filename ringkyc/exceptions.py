#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

These are only meant to discriminate between Exceptions being raised
by ringkyc from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError, TypeError, RuntimeError, and PermissionError
from which the ringkyc versions are derived.
"""


class RingKYCValueError(ValueError):
    pass


class RingKYCTypeError(TypeError):
    pass


class RingKYCRuntimeError(RuntimeError):
    pass


class RingKYCPermissionError(PermissionError):
    pass
