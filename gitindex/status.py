# status.py -- The per-entry file status record
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

"""Cached stat(2) data stored with every index entry.

The record is 40 bytes: ten big-endian 32-bit fields (ctime seconds, ctime
nanoseconds, mtime seconds, mtime nanoseconds, dev, ino, mode, uid, gid and
size). The size field is the lower 32 bits of the real file size.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum, IntFlag
from typing import Optional

from .endian import BigEndianReader, BigEndianWriter

STATUS_RECORD_SIZE = 40

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

FILE_TYPE_SHIFT = 12
FILE_TYPE_MASK = 0xF
PERMISSIONS_MASK = 0o777


class FileType(Enum):
    REGULAR_FILE = 0b1000
    SYMBOLIC_LINK = 0b1010
    GITLINK = 0b1110


_TYPE_CHARS = {
    FileType.REGULAR_FILE: "-",
    FileType.SYMBOLIC_LINK: "l",
    FileType.GITLINK: "g",
}


class FilePermissions(IntFlag):
    USER_READ = 0o400
    USER_WRITE = 0o200
    USER_EXECUTE = 0o100
    GROUP_READ = 0o040
    GROUP_WRITE = 0o020
    GROUP_EXECUTE = 0o010
    OTHERS_READ = 0o004
    OTHERS_WRITE = 0o002
    OTHERS_EXECUTE = 0o001


_PERMISSION_CHARS = [
    (FilePermissions.USER_READ, "r"),
    (FilePermissions.USER_WRITE, "w"),
    (FilePermissions.USER_EXECUTE, "x"),
    (FilePermissions.GROUP_READ, "r"),
    (FilePermissions.GROUP_WRITE, "w"),
    (FilePermissions.GROUP_EXECUTE, "x"),
    (FilePermissions.OTHERS_READ, "r"),
    (FilePermissions.OTHERS_WRITE, "w"),
    (FilePermissions.OTHERS_EXECUTE, "x"),
]


@dataclass(frozen=True)
class FileTime:
    """A timestamp as seconds and nanoseconds since the epoch."""

    seconds: int
    nanoseconds: int = 0

    def to_datetime(self) -> datetime:
        """Convert to an aware UTC datetime.

        The nanoseconds are added as fractional milliseconds, so anything
        below microsecond resolution is lost.
        """
        return EPOCH + timedelta(
            seconds=self.seconds, milliseconds=self.nanoseconds / 1e6
        )

    @classmethod
    def from_datetime(cls, dt: datetime) -> "FileTime":
        """Create a FileTime from a datetime.

        Only millisecond precision is kept, so
        ``FileTime.from_datetime(t.to_datetime())`` does not in general give
        back ``t``. Naive datetimes are taken to be UTC.
        """
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        span = dt - EPOCH
        seconds = span.days * 86400 + span.seconds
        milliseconds = span.microseconds // 1000
        return cls(seconds, milliseconds * 1000000)

    def __str__(self) -> str:
        return self.to_datetime().isoformat()


class FileMode:
    """A 32-bit mode word: 4-bit object type and 9 permission bits."""

    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        self.value = value

    @property
    def type_bits(self) -> int:
        return (self.value >> FILE_TYPE_SHIFT) & FILE_TYPE_MASK

    @property
    def file_type(self) -> Optional[FileType]:
        """Return the file type, or None if the type bits are not recognized."""
        try:
            return FileType(self.type_bits)
        except ValueError:
            return None

    @property
    def permissions(self) -> FilePermissions:
        return FilePermissions(self.value & PERMISSIONS_MASK)

    def permissions_string(self) -> str:
        """Render the permission bits as nine rwx characters."""
        perms = self.permissions
        return "".join(c if perms & flag else "-" for flag, c in _PERMISSION_CHARS)

    def __str__(self) -> str:
        return _TYPE_CHARS.get(self.file_type, "?") + self.permissions_string()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value:#o})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileMode):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)


@dataclass(frozen=True)
class FileStatus:
    ctime: FileTime
    mtime: FileTime
    dev: int
    ino: int
    mode: FileMode
    uid: int
    gid: int
    size: int


def read_file_time(reader: BigEndianReader) -> FileTime:
    """Read a cache time.

    Args:
      reader: Reader to read from
    Returns:
      FileTime with seconds and nanoseconds
    """
    seconds = reader.read_uint32()
    nanoseconds = reader.read_uint32()
    return FileTime(seconds, nanoseconds)


def write_file_time(writer: BigEndianWriter, t: FileTime) -> None:
    writer.write_uint32(t.seconds)
    writer.write_uint32(t.nanoseconds)


def read_file_status(reader: BigEndianReader) -> FileStatus:
    """Read the 40-byte status record of an index entry."""
    ctime = read_file_time(reader)
    mtime = read_file_time(reader)
    dev = reader.read_uint32()
    ino = reader.read_uint32()
    mode = reader.read_uint32()
    uid = reader.read_uint32()
    gid = reader.read_uint32()
    size = reader.read_uint32()
    return FileStatus(ctime, mtime, dev, ino, FileMode(mode), uid, gid, size)


def write_file_status(writer: BigEndianWriter, status: FileStatus) -> None:
    """Write the 40-byte status record of an index entry.

    dev, ino and size are truncated to their lower 32 bits, as git does.
    """
    write_file_time(writer, status.ctime)
    write_file_time(writer, status.mtime)
    writer.write_uint32(status.dev & 0xFFFFFFFF)
    writer.write_uint32(status.ino & 0xFFFFFFFF)
    writer.write_uint32(status.mode.value)
    writer.write_uint32(status.uid)
    writer.write_uint32(status.gid)
    writer.write_uint32(status.size & 0xFFFFFFFF)
