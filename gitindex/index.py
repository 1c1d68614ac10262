# index.py -- File parser/writer for the git index file
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

"""Parser and writer for the git index file format.

An index file consists of a 12 byte header, the entries, an extension region
and a trailing checksum. Entries are kept in the order they appear on disk
and the extension region is carried through as opaque bytes. The checksum is
neither verified on read nor recomputed on write: callers that change entries
are responsible for producing a matching checksum themselves.
"""

import io
import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from enum import Enum
from typing import BinaryIO, Optional, Union, cast

from .endian import BigEndianReader, BigEndianWriter
from .errors import (
    InvalidPathCompression,
    MalformedIndexHeader,
    TruncatedIndexStream,
    UnsupportedEncodeWidth,
    UnsupportedExtendedFlags,
    UnsupportedIndexFormat,
    UnsupportedObjectIdWidth,
    UnsupportedPathLengthEscape,
)
from .file import GitFile
from .objects import SHA1_LENGTH, ObjectId, ObjectIdKind
from .status import (
    STATUS_RECORD_SIZE,
    FileStatus,
    read_file_status,
    write_file_status,
)
from .varint import decode_varint_from_stream, encode_varint

logger = logging.getLogger(__name__)

INDEX_SIGNATURE = b"DIRC"
SUPPORTED_VERSIONS = (2, 3, 4)

# 2-bit stage (during merge)
FLAG_STAGEMASK = 0x3000
FLAG_STAGESHIFT = 12
FLAG_NAMEMASK = 0x0FFF

# assume-valid
FLAG_VALID = 0x8000

# extended flag (must be zero in version 2)
FLAG_EXTENDED = 0x4000

# used by sparse checkout
EXTENDED_FLAG_SKIP_WORKTREE = 0x4000

# used by "git add -N"
EXTENDED_FLAG_INTEND_TO_ADD = 0x2000

# name lengths of 0xFFF or more are stored as 0xFFF
PATH_LENGTH_ESCAPE = FLAG_NAMEMASK

PATH_ENCODING = "utf-8"


class Stage(Enum):
    NORMAL = 0
    MERGE_CONFLICT_ANCESTOR = 1
    MERGE_CONFLICT_THIS = 2
    MERGE_CONFLICT_OTHER = 3


@dataclass(frozen=True)
class IndexHeader:
    signature: bytes
    version: int
    num_entries: int

    def __str__(self) -> str:
        signature = self.signature.decode("ascii", "replace")
        return f"'{signature}' [Version: {self.version}, Entries: {self.num_entries}]"


@dataclass(frozen=True)
class IndexEntry:
    status: FileStatus
    sha: ObjectId
    path: str
    assume_valid: bool = False
    extended: bool = False
    skip_worktree: bool = False
    intent_to_add: bool = False
    stage: Stage = Stage.NORMAL
    # The name length field as read from disk; not used when writing.
    path_length: Optional[int] = None

    def encoded_path(self) -> bytes:
        return self.path.encode(PATH_ENCODING, "surrogateescape")

    def with_extended_flags(
        self,
        skip_worktree: Optional[bool] = None,
        intent_to_add: Optional[bool] = None,
    ) -> "IndexEntry":
        """Return a copy with the given extended flags set or cleared.

        The extended bit is kept in sync: it is set while any extended flag
        is set, and cleared once none remain.
        """
        if skip_worktree is None:
            skip_worktree = self.skip_worktree
        if intent_to_add is None:
            intent_to_add = self.intent_to_add
        return replace(
            self,
            skip_worktree=skip_worktree,
            intent_to_add=intent_to_add,
            extended=skip_worktree or intent_to_add,
        )


@dataclass(frozen=True)
class Index:
    """A decoded git index file."""

    header: IndexHeader
    entries: tuple[IndexEntry, ...]
    extensions: bytes
    checksum: ObjectId

    @property
    def version(self) -> int:
        return self.header.version

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self.entries)

    def with_entries(self, entries: Iterable[IndexEntry]) -> "Index":
        """Return a copy holding entries, with the header count updated.

        The checksum is carried over unchanged.
        """
        entries = tuple(entries)
        header = replace(self.header, num_entries=len(entries))
        return replace(self, header=header, entries=entries)


def _compress_path(path: bytes, previous_path: bytes) -> bytes:
    """Compress a path relative to the previous path for index version 4.

    Args:
      path: Path to compress
      previous_path: Previous path for comparison
    Returns:
      Compressed path data (varint drop count + suffix + NUL)
    """
    common_len = 0
    for a, b in zip(path, previous_path):
        if a != b:
            break
        common_len += 1

    # The number of bytes to remove from the end of previous_path
    # to get the common prefix
    drop_count = len(previous_path) - common_len
    return encode_varint(drop_count) + path[common_len:] + b"\x00"


def _apply_drop_count(previous_path: bytes, drop_count: int, suffix: bytes) -> bytes:
    if drop_count > len(previous_path):
        raise InvalidPathCompression(drop_count, len(previous_path))
    return previous_path[: len(previous_path) - drop_count] + suffix


def _read_drop_count(reader: BigEndianReader) -> int:
    try:
        drop_count = decode_varint_from_stream(cast(BinaryIO, reader))
    except ValueError:
        drop_count = None
    if drop_count is None:
        raise TruncatedIndexStream(1, 0, "path drop count")
    return drop_count


def _read_nul_terminated(reader: BigEndianReader) -> bytes:
    ret = bytearray()
    while True:
        c = reader.read_bytes(1, "path suffix")
        if c == b"\x00":
            return bytes(ret)
        ret += c


def read_path(
    reader: BigEndianReader, version: int, path_length: int, previous_path: bytes
) -> bytes:
    """Read the path of an index entry.

    Versions 2 and 3 store path_length literal bytes. Version 4 stores the
    number of bytes to drop from the end of previous_path, followed by a NUL
    terminated suffix to append to what is left.

    Returns:
      the path as raw bytes, which is also the previous path for the next
      entry
    """
    if version >= 4:
        drop_count = _read_drop_count(reader)
        suffix = _read_nul_terminated(reader)
        return _apply_drop_count(previous_path, drop_count, suffix)
    if path_length == PATH_LENGTH_ESCAPE:
        raise UnsupportedPathLengthEscape(path_length)
    return reader.read_bytes(path_length, "path")


def write_path(
    writer: BigEndianWriter, version: int, path: bytes, previous_path: bytes
) -> None:
    """Write the path of an index entry; the mirror of read_path."""
    if version >= 4:
        writer.write_bytes(_compress_path(path, previous_path))
    else:
        writer.write_bytes(path)


def _padding_length(entry_length: int) -> int:
    # Always between 1 and 8 bytes: an entry whose length is already a
    # multiple of 8 still gets 8 NUL bytes.
    return 8 - (entry_length % 8)


def read_cache_entry(
    reader: BigEndianReader, version: int, previous_path: bytes = b""
) -> tuple[IndexEntry, bytes]:
    """Read an entry from a cache file.

    Args:
      reader: Reader positioned at the start of the entry
      version: Index version
      previous_path: Previous entry's path (for version 4 compression)
    Returns:
      tuple of (entry, path), where path is the raw path to pass as
      previous_path when reading the next entry
    """
    status = read_file_status(reader)
    sha = ObjectId(reader.read_bytes(SHA1_LENGTH, "object id"))
    flags = reader.read_uint16()
    entry_length = STATUS_RECORD_SIZE + SHA1_LENGTH + 2

    extended = bool(flags & FLAG_EXTENDED)
    extended_flags = 0
    if version > 2 and extended:
        extended_flags = reader.read_uint16()
        entry_length += 2

    path_length = flags & FLAG_NAMEMASK
    path = read_path(reader, version, path_length, previous_path)

    if version < 4:
        entry_length += len(path)
        reader.read_bytes(_padding_length(entry_length), "entry padding")

    entry = IndexEntry(
        status=status,
        sha=sha,
        path=path.decode(PATH_ENCODING, "surrogateescape"),
        assume_valid=bool(flags & FLAG_VALID),
        extended=extended,
        skip_worktree=bool(extended_flags & EXTENDED_FLAG_SKIP_WORKTREE),
        intent_to_add=bool(extended_flags & EXTENDED_FLAG_INTEND_TO_ADD),
        stage=Stage((flags & FLAG_STAGEMASK) >> FLAG_STAGESHIFT),
        path_length=path_length,
    )
    return entry, path


def write_cache_entry(
    writer: BigEndianWriter,
    entry: IndexEntry,
    version: int,
    previous_path: bytes = b"",
) -> bytes:
    """Write an index entry.

    Args:
      writer: Writer to write to
      entry: IndexEntry to write
      version: Index format version
      previous_path: Previous entry's path (for version 4 compression)
    Returns:
      the raw path written, to pass as previous_path for the next entry
    """
    if entry.sha.kind is not ObjectIdKind.SHA1:
        raise UnsupportedEncodeWidth(len(entry.sha))
    path = entry.encoded_path()
    if version >= 4:
        # Matches C git, which caps the name length of compressed entries
        name_length = min(len(path), PATH_LENGTH_ESCAPE)
    elif len(path) >= PATH_LENGTH_ESCAPE:
        raise UnsupportedPathLengthEscape(len(path))
    else:
        name_length = len(path)

    write_extended = entry.extended and version > 2
    if (entry.skip_worktree or entry.intent_to_add) and not write_extended:
        raise UnsupportedExtendedFlags(
            f"Unable to store extended flags for {entry.path!r} "
            f"in index version {version}"
        )

    flags = name_length | (entry.stage.value << FLAG_STAGESHIFT)
    if entry.assume_valid:
        flags |= FLAG_VALID
    if entry.extended:
        flags |= FLAG_EXTENDED

    write_file_status(writer, entry.status)
    writer.write_bytes(entry.sha.raw)
    writer.write_uint16(flags)
    entry_length = STATUS_RECORD_SIZE + SHA1_LENGTH + 2

    if write_extended:
        extended_flags = 0
        if entry.skip_worktree:
            extended_flags |= EXTENDED_FLAG_SKIP_WORKTREE
        if entry.intent_to_add:
            extended_flags |= EXTENDED_FLAG_INTEND_TO_ADD
        writer.write_uint16(extended_flags)
        entry_length += 2

    write_path(writer, version, path, previous_path)

    if version < 4:
        entry_length += len(path)
        writer.write_bytes(b"\x00" * _padding_length(entry_length))
    return path


def _check_header(signature: bytes, version: int) -> None:
    if signature != INDEX_SIGNATURE:
        raise MalformedIndexHeader(signature)
    if version not in SUPPORTED_VERSIONS:
        raise UnsupportedIndexFormat(version)


def read_index_header(reader: BigEndianReader) -> IndexHeader:
    """Read an index header.

    Raises:
      MalformedIndexHeader: if the signature is not DIRC
      UnsupportedIndexFormat: if the version is not 2, 3 or 4
    """
    signature = reader.read_bytes(4, "index header")
    version = reader.read_uint32()
    num_entries = reader.read_uint32()
    _check_header(signature, version)
    return IndexHeader(signature, version, num_entries)


def write_index_header(
    writer: BigEndianWriter, header: IndexHeader, num_entries: int
) -> None:
    """Write an index header with num_entries as the entry count."""
    _check_header(header.signature, header.version)
    writer.write_bytes(header.signature)
    writer.write_uint32(header.version)
    writer.write_uint32(num_entries)


def _seekable(f: BinaryIO) -> BinaryIO:
    seekable = getattr(f, "seekable", None)
    if seekable is not None and seekable():
        return f
    return io.BytesIO(f.read())


def _remaining(f: BinaryIO) -> int:
    current = f.tell()
    end = f.seek(0, os.SEEK_END)
    f.seek(current)
    return end - current


def read_index(f: BinaryIO, hash_length: int = SHA1_LENGTH) -> Index:
    """Read an index file.

    Non-seekable streams are read into memory first, since the size of the
    extension region is only known from the total length of the file.

    Args:
      f: File-like object to read from
      hash_length: Width of the object ids in the file
    Returns:
      the decoded Index
    """
    if hash_length != SHA1_LENGTH:
        raise UnsupportedObjectIdWidth(hash_length)
    f = _seekable(f)
    reader = BigEndianReader(f)
    header = read_index_header(reader)
    logger.debug("Reading index: %s", header)

    entries = []
    previous_path = b""
    for _ in range(header.num_entries):
        entry, previous_path = read_cache_entry(reader, header.version, previous_path)
        entries.append(entry)

    extensions_length = _remaining(f) - hash_length
    if extensions_length < 0:
        raise TruncatedIndexStream(
            hash_length, extensions_length + hash_length, "checksum"
        )
    extensions = reader.read_bytes(extensions_length, "extensions")
    checksum = ObjectId(reader.read_bytes(hash_length, "checksum"))
    logger.debug(
        "Read %d index entries, %d bytes of extensions", len(entries), len(extensions)
    )
    return Index(header, tuple(entries), extensions, checksum)


def write_index(f: BinaryIO, index: Index) -> None:
    """Write an index file.

    The entry count in the header is taken from index.entries, the entries
    are written in the order given, and the extensions and checksum are
    written exactly as stored.

    Args:
      f: File-like object to write to
      index: Index to write
    """
    if index.checksum.kind is not ObjectIdKind.SHA1:
        raise UnsupportedEncodeWidth(len(index.checksum))
    writer = BigEndianWriter(f)
    version = index.header.version
    write_index_header(writer, index.header, len(index.entries))
    previous_path = b""
    for entry in index.entries:
        previous_path = write_cache_entry(writer, entry, version, previous_path)
    writer.write_bytes(index.extensions)
    writer.write_bytes(index.checksum.raw)


def read_index_file(
    filename: Union[str, bytes, "os.PathLike[str]"],
    hash_length: int = SHA1_LENGTH,
) -> Index:
    """Read the index file at filename."""
    with open(filename, "rb") as f:
        return read_index(f, hash_length=hash_length)


def write_index_file(
    filename: Union[str, bytes, "os.PathLike[str]"],
    index: Index,
    overwrite: bool = False,
) -> None:
    """Write index to filename using the git lock file protocol.

    Raises:
      FileExistsError: if filename exists and overwrite is False
      FileLocked: if another writer holds the lock on filename
    """
    if not overwrite and os.path.exists(filename):
        raise FileExistsError(filename)
    with GitFile(filename, "wb") as f:
        write_index(cast(BinaryIO, f), index)
    logger.debug("Wrote %d index entries to %r", len(index.entries), filename)
