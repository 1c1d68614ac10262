# varint.py -- Offset-encoded variable-width integers
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

"""Variable-width integer encoding/decoding.

This is the encoding used by index format version 4 for the number of bytes
to drop from the previous path. Each byte carries 7 bits of payload, most
significant group first, and the high bit marks that another byte follows.
Unlike plain base-128 encoding, one is added to the accumulated value before
every shift, so every value has exactly one encoding:

    0x00        -> 0
    0x7f        -> 127
    0x80 0x00   -> 128
    0xff 0x7f   -> 16511
    0x80 0x80 0x00 -> 16512
"""

from typing import BinaryIO, Optional


def encode_varint(value: int) -> bytes:
    """Encode a non-negative integer.

    Args:
      value: Integer to encode
    Returns:
      Encoded bytes
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative value {value}")
    result = [value & 0x7F]
    value >>= 7
    while value:
        value -= 1
        result.append(0x80 | (value & 0x7F))
        value >>= 7
    return bytes(reversed(result))


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode a variable-width encoded integer from bytes.

    Args:
      data: Bytes to decode from
      offset: Starting offset in data
    Returns:
      tuple of (decoded_value, new_offset)
    Raises:
      ValueError: if data ends in the middle of the integer
    """
    pos = offset
    if pos >= len(data):
        raise ValueError("Unexpected end of data while reading varint")
    byte = data[pos]
    pos += 1
    value = byte & 0x7F
    while byte & 0x80:
        if pos >= len(data):
            raise ValueError("Unexpected end of data while reading varint")
        byte = data[pos]
        pos += 1
        value = ((value + 1) << 7) | (byte & 0x7F)
    return value, pos


def decode_varint_from_stream(stream: BinaryIO) -> Optional[int]:
    """Decode a variable-width encoded integer from a stream.

    Args:
      stream: Stream to read from
    Returns:
      Decoded integer, or None if the stream is at its end
    Raises:
      ValueError: if the stream ends in the middle of the integer
    """
    byte_data = stream.read(1)
    if not byte_data:
        return None
    byte = byte_data[0]
    value = byte & 0x7F
    while byte & 0x80:
        byte_data = stream.read(1)
        if not byte_data:
            raise ValueError("Unexpected end of file while reading varint")
        byte = byte_data[0]
        value = ((value + 1) << 7) | (byte & 0x7F)
    return value
