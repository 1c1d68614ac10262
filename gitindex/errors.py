# errors.py -- errors for gitindex
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

"""Exception classes raised while reading or writing index files.

Every error aborts the whole read or write: a single bad entry desynchronizes
all prefix-compressed paths that follow it, so nothing partial is returned.
"""

from typing import Optional


class FileFormatException(Exception):
    """Base class for exceptions relating to reading git file formats."""


class IndexFormatError(FileFormatException):
    """An index file could not be read or written."""


class MalformedIndexHeader(IndexFormatError):
    """The index header is not valid."""

    def __init__(self, signature: bytes, message: Optional[str] = None) -> None:
        """Initialize a MalformedIndexHeader.

        Args:
            signature: The signature found at the start of the file.
            message: Optional message overriding the default one.
        """
        self.signature = signature
        if message is None:
            message = f"Invalid index file header: {signature!r}"
        super().__init__(message)


class UnsupportedIndexFormat(MalformedIndexHeader):
    """An unsupported index format version was encountered."""

    def __init__(self, version: int) -> None:
        self.index_format_version = version
        super().__init__(b"DIRC", f"Unsupported index format version: {version}")


class TruncatedIndexStream(IndexFormatError):
    """The stream ended before all promised bytes were available."""

    def __init__(self, expected: int, got: int, what: Optional[str] = None) -> None:
        """Initialize a TruncatedIndexStream.

        Args:
            expected: Number of bytes that were requested.
            got: Number of bytes that were actually available.
            what: Optional description of the field being read.
        """
        self.expected = expected
        self.got = got
        self.what = what
        message = f"Unexpected end of index: expected {expected} bytes, got {got}"
        if what is not None:
            message += f" while reading {what}"
        super().__init__(message)


class UnsupportedObjectIdWidth(IndexFormatError):
    """An object id of an unsupported width was encountered."""

    def __init__(self, length: int, message: Optional[str] = None) -> None:
        self.length = length
        if message is None:
            message = f"Unsupported object id width: {length} bytes"
        super().__init__(message)


class UnsupportedEncodeWidth(UnsupportedObjectIdWidth):
    """Only 20-byte (SHA-1) object ids can be written."""

    def __init__(self, length: int) -> None:
        super().__init__(
            length, f"Unable to write {length}-byte object id; only SHA-1 is supported"
        )


class UnsupportedPathLengthEscape(IndexFormatError):
    """The 12-bit path length field holds the reserved 0xFFF value."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(
            f"Path length {length} requires the 0xFFF length escape, "
            "which is not supported"
        )


class InvalidPathCompression(IndexFormatError):
    """A compressed path drops more bytes than the previous path holds."""

    def __init__(self, drop_count: int, previous_length: int) -> None:
        self.drop_count = drop_count
        self.previous_length = previous_length
        super().__init__(
            f"Invalid path compression: trying to remove {drop_count} bytes "
            f"from {previous_length}-byte path"
        )


class UnsupportedExtendedFlags(IndexFormatError):
    """Extended flags were set on an entry that cannot carry them."""
