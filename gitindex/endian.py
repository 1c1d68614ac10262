# endian.py -- Big-endian reading and writing of fixed-width integers
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

"""Big-endian integer codec.

All integers in the index file are stored in network byte order. Readers and
writers share a single table of struct formats so both directions follow the
same byte-order rule.
"""

import struct
from typing import BinaryIO, Optional

from .errors import TruncatedIndexStream

BYTE_ORDER = ">"

_STRUCTS = {
    (16, False): struct.Struct(BYTE_ORDER + "H"),
    (32, False): struct.Struct(BYTE_ORDER + "L"),
    (64, False): struct.Struct(BYTE_ORDER + "Q"),
    (16, True): struct.Struct(BYTE_ORDER + "h"),
    (32, True): struct.Struct(BYTE_ORDER + "l"),
    (64, True): struct.Struct(BYTE_ORDER + "q"),
}


class BigEndianReader:
    """Read big-endian integers and raw bytes from a binary stream."""

    def __init__(self, f: BinaryIO) -> None:
        self._f = f
        self.offset = 0

    def read(self, n: int = -1) -> bytes:
        """Read up to n bytes, like a file object would."""
        data = self._f.read(n)
        self.offset += len(data)
        return data

    def read_bytes(self, n: int, what: Optional[str] = None) -> bytes:
        """Read exactly n bytes.

        Raises:
          TruncatedIndexStream: if the stream holds fewer than n bytes
        """
        data = self._f.read(n)
        if len(data) != n:
            raise TruncatedIndexStream(n, len(data), what)
        self.offset += n
        return data

    def _read(self, bits: int, signed: bool) -> int:
        s = _STRUCTS[bits, signed]
        (value,) = s.unpack(self.read_bytes(s.size))
        return value

    def read_uint16(self) -> int:
        return self._read(16, False)

    def read_uint32(self) -> int:
        return self._read(32, False)

    def read_uint64(self) -> int:
        return self._read(64, False)

    def read_int16(self) -> int:
        return self._read(16, True)

    def read_int32(self) -> int:
        return self._read(32, True)

    def read_int64(self) -> int:
        return self._read(64, True)


class BigEndianWriter:
    """Write big-endian integers and raw bytes to a binary stream."""

    def __init__(self, f: BinaryIO) -> None:
        self._f = f
        self.offset = 0

    def write_bytes(self, data: bytes) -> None:
        self._f.write(data)
        self.offset += len(data)

    def _write(self, bits: int, signed: bool, value: int) -> None:
        self.write_bytes(_STRUCTS[bits, signed].pack(value))

    def write_uint16(self, value: int) -> None:
        self._write(16, False, value)

    def write_uint32(self, value: int) -> None:
        self._write(32, False, value)

    def write_uint64(self, value: int) -> None:
        self._write(64, False, value)

    def write_int16(self, value: int) -> None:
        self._write(16, True, value)

    def write_int32(self, value: int) -> None:
        self._write(32, True, value)

    def write_int64(self, value: int) -> None:
        self._write(64, True, value)
