# test_endian.py -- Tests for endian.py
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

"""Tests for gitindex.endian."""

from io import BytesIO

from gitindex.endian import BigEndianReader, BigEndianWriter
from gitindex.errors import TruncatedIndexStream

from . import TestCase


class BigEndianReaderTests(TestCase):
    def test_unsigned(self) -> None:
        reader = BigEndianReader(
            BytesIO(b"\x01\x02" b"\x01\x02\x03\x04" b"\x00\x00\x00\x01\x00\x00\x00\x02")
        )
        self.assertEqual(0x0102, reader.read_uint16())
        self.assertEqual(0x01020304, reader.read_uint32())
        self.assertEqual(0x0000000100000002, reader.read_uint64())
        self.assertEqual(14, reader.offset)

    def test_signed(self) -> None:
        reader = BigEndianReader(BytesIO(b"\xff\xfe" b"\xff\xff\xff\xff" + b"\x80" + b"\x00" * 7))
        self.assertEqual(-2, reader.read_int16())
        self.assertEqual(-1, reader.read_int32())
        self.assertEqual(-(1 << 63), reader.read_int64())

    def test_read_bytes_unchanged(self) -> None:
        reader = BigEndianReader(BytesIO(b"DIRC\x00"))
        self.assertEqual(b"DIRC", reader.read_bytes(4))
        self.assertEqual(b"\x00", reader.read_bytes(1))

    def test_truncated(self) -> None:
        reader = BigEndianReader(BytesIO(b"\x00\x01"))
        with self.assertRaises(TruncatedIndexStream) as cm:
            reader.read_uint32()
        self.assertEqual(4, cm.exception.expected)
        self.assertEqual(2, cm.exception.got)


class BigEndianWriterTests(TestCase):
    def test_write(self) -> None:
        f = BytesIO()
        writer = BigEndianWriter(f)
        writer.write_uint16(0x0102)
        writer.write_uint32(0x01020304)
        writer.write_uint64(1)
        writer.write_int16(-2)
        writer.write_int32(-1)
        writer.write_int64(-1)
        writer.write_bytes(b"raw")
        self.assertEqual(
            b"\x01\x02\x01\x02\x03\x04"
            + b"\x00" * 7 + b"\x01"
            + b"\xff\xfe"
            + b"\xff" * 4
            + b"\xff" * 8
            + b"raw",
            f.getvalue(),
        )
        self.assertEqual(len(f.getvalue()), writer.offset)

    def test_same_byte_order_both_ways(self) -> None:
        f = BytesIO()
        writer = BigEndianWriter(f)
        writer.write_uint32(0xDEADBEEF)
        writer.write_int64(-12345)
        reader = BigEndianReader(BytesIO(f.getvalue()))
        self.assertEqual(0xDEADBEEF, reader.read_uint32())
        self.assertEqual(-12345, reader.read_int64())
