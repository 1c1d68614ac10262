# __init__.py -- The tests for gitindex
# Copyright (C) 2026 The gitindex developers
#
# SPDX-License-Identifier: Apache-2.0 OR GPL-2.0-or-later
# gitindex is dual-licensed under the Apache License, Version 2.0 and the GNU
# General Public License as published by the Free Software Foundation; version 2.0
# or (at your option) any later version. You can redistribute it and/or
# modify it under the terms of either of these two licenses.
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# You should have received a copy of the licenses; if not, see
# <http://www.gnu.org/licenses/> for a copy of the GNU General Public License
# and <http://www.apache.org/licenses/LICENSE-2.0> for a copy of the Apache
# License, Version 2.0.
#

"""Tests for gitindex."""

import os
import struct
from typing import Optional
from unittest import (  # noqa: F401
    SkipTest,
    TestCase as _TestCase,
    skipIf,
)

ZERO_SHA = b"\x00" * 20
EMPTY_BLOB_SHA = bytes.fromhex("e69de29bb2d1d6434b8b29ae775ad8c2e48c5391")


class TestCase(_TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.overrideEnv("HOME", "/nonexistent")
        self.overrideEnv("GIT_TRACE", None)

    def overrideEnv(self, name: str, value: Optional[str]) -> None:
        def restore() -> None:
            if oldval is not None:
                os.environ[name] = oldval
            else:
                os.environ.pop(name, None)

        oldval = os.environ.get(name)
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)
        self.addCleanup(restore)


def make_header(version: int, num_entries: int, signature: bytes = b"DIRC") -> bytes:
    return signature + struct.pack(">LL", version, num_entries)


def make_status(
    ctime=(1230680220, 0),
    mtime=(1230680220, 0),
    dev=2050,
    ino=3761020,
    mode=0o100644,
    uid=1000,
    gid=1000,
    size=0,
) -> bytes:
    return struct.pack(">10L", *ctime, *mtime, dev, ino, mode, uid, gid, size)


def make_entry(
    path: bytes,
    version: int = 2,
    sha: bytes = EMPTY_BLOB_SHA,
    flags: int = 0,
    extended_flags: Optional[int] = None,
    status: Optional[bytes] = None,
    previous_path: bytes = b"",
    name_length: Optional[int] = None,
) -> bytes:
    """Build the on-disk bytes of a single entry by hand."""
    if status is None:
        status = make_status()
    if name_length is None:
        name_length = min(len(path), 0xFFF)
    data = status + sha + struct.pack(">H", flags | name_length)
    if extended_flags is not None:
        data += struct.pack(">H", extended_flags)
    if version >= 4:
        common = 0
        for a, b in zip(path, previous_path):
            if a != b:
                break
            common += 1
        drop = len(previous_path) - common
        assert drop < 0x80, "test helper only handles single byte drop counts"
        data += bytes([drop]) + path[common:] + b"\x00"
    else:
        data += path
        data += b"\x00" * (8 - len(data) % 8)
    return data
