#!/usr/bin/env python3

# Copyright (C) The ringkyc developers
#
# This file is part of ringkyc. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ringkyc including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the ringkyc package."

name = "ringkyc"
__version__ = "2026.10.0"
__author__ = "The ringkyc developers"
__author_email__ = "devs@ringkyc.org"
__copyright__ = "Copyright (C) 2025-2026 The ringkyc developers"
__license__ = "MIT License"
