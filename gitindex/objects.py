# objects.py -- Object identifiers stored in the index
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

"""Object identifiers (content hashes) as found in index entries.

Git repositories use either SHA-1 (20 byte) or SHA-256 (32 byte) object ids.
The width of an :class:`ObjectId` determines its kind; ids of any other width
can still be carried around, but not interpreted.
"""

import binascii
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import UnsupportedObjectIdWidth


class ObjectFormat:
    """Object format (hash algorithm) used in Git."""

    def __init__(self, name: str, oid_length: int, hex_length: int) -> None:
        """Initialize an object format.

        Args:
            name: Name of the format (e.g., "sha1", "sha256")
            oid_length: Length of the binary object ID in bytes
            hex_length: Length of the hexadecimal object ID in characters
        """
        self.name = name
        self.oid_length = oid_length
        self.hex_length = hex_length

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ObjectFormat({self.name!r})"


SHA1 = ObjectFormat("sha1", oid_length=20, hex_length=40)
SHA256 = ObjectFormat("sha256", oid_length=32, hex_length=64)

SHA1_LENGTH = SHA1.oid_length
SHA256_LENGTH = SHA256.oid_length


class ObjectIdKind(Enum):
    UNKNOWN = None
    SHA1 = SHA1_LENGTH
    SHA256 = SHA256_LENGTH


_FORMATS_BY_KIND = {
    ObjectIdKind.SHA1: SHA1,
    ObjectIdKind.SHA256: SHA256,
}


@dataclass(frozen=True)
class ObjectId:
    """A binary object id.

    Equality and hashing are byte-wise.
    """

    raw: bytes

    @classmethod
    def from_hex(cls, hexsha: Union[str, bytes]) -> "ObjectId":
        """Create an object id from its hexadecimal representation."""
        return cls(binascii.unhexlify(hexsha))

    @classmethod
    def zero(cls, length: int = SHA1_LENGTH) -> "ObjectId":
        return cls(b"\x00" * length)

    @property
    def kind(self) -> ObjectIdKind:
        if len(self.raw) == SHA1_LENGTH:
            return ObjectIdKind.SHA1
        if len(self.raw) == SHA256_LENGTH:
            return ObjectIdKind.SHA256
        return ObjectIdKind.UNKNOWN

    @property
    def object_format(self) -> ObjectFormat:
        """Return the object format matching the width of this id.

        Raises:
          UnsupportedObjectIdWidth: if the width is neither 20 nor 32 bytes
        """
        try:
            return _FORMATS_BY_KIND[self.kind]
        except KeyError:
            raise UnsupportedObjectIdWidth(len(self.raw))

    def require_kind(self, kind: ObjectIdKind) -> None:
        """Check that this id is of the given kind.

        Raises:
          UnsupportedObjectIdWidth: if it is not
        """
        if self.kind is not kind:
            raise UnsupportedObjectIdWidth(len(self.raw))

    def hex(self) -> str:
        """Return the lowercase hexadecimal representation."""
        return binascii.hexlify(self.raw).decode("ascii")

    def render_hex(self, max_chars: int) -> str:
        """Return the hexadecimal representation shortened to max_chars.

        The limit counts hex characters, so max_chars=8 covers the first
        four bytes of the id.
        """
        return self.hex()[:max_chars]

    def __len__(self) -> int:
        return len(self.raw)

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.hex()!r})"
