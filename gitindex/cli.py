#
# gitindex - Command-line interface for inspecting git index files
# Copyright (C) 2026 The gitindex developers
# vim: expandtab
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

"""Command-line interface for inspecting git index files.

    gitindex [-i PATH] info
    gitindex [-i PATH] list [PREFIX] [--ignore-case] [--no-table] [--long]
    gitindex [-i PATH] rewrite OUTPUT [--force]

PATH may be a working tree, a .git directory or an index file; it defaults
to the current directory.
"""

import argparse
import logging
import os
import signal
import sys
import types
from collections.abc import Sequence
from typing import ClassVar, Optional

from .errors import IndexFormatError
from .file import FileLocked
from .identity import IdentityResolver, get_identity_resolver
from .index import Index, IndexEntry, Stage, read_index_file, write_index_file
from .log_utils import _configure_logging_from_trace

logger = logging.getLogger(__name__)

MIN_TABLE_WIDTH = 120
OID_DISPLAY_LENGTH = 12

STAGE_NAMES = {
    Stage.NORMAL: "none",
    Stage.MERGE_CONFLICT_ANCESTOR: "ancestor",
    Stage.MERGE_CONFLICT_THIS: "ours",
    Stage.MERGE_CONFLICT_OTHER: "theirs",
}


class IndexNotFound(Exception):
    """No index file could be found at the given location."""


def signal_int(signal: int, frame: Optional[types.FrameType]) -> None:
    sys.exit(1)


def detect_terminal_width() -> int:
    """Detect the width of the terminal.

    Returns:
        Width of the terminal in characters, or 80 if it cannot be determined
    """
    try:
        return os.get_terminal_size().columns
    except OSError:
        return 80


def find_index_file(location: Optional[str] = None) -> str:
    """Locate the index file for a location given on the command line.

    Args:
      location: An index file, or a directory containing "index" or
        ".git/index". Defaults to the current directory.
    Returns:
      Absolute path of the index file
    Raises:
      IndexNotFound: if no index file exists there
    """
    path = os.path.abspath(location) if location else os.getcwd()
    if os.path.basename(path) == "index":
        if os.path.isfile(path):
            return path
        raise IndexNotFound(path)
    for candidate in (
        os.path.join(path, "index"),
        os.path.join(path, ".git", "index"),
    ):
        if os.path.isfile(candidate):
            return candidate
    raise IndexNotFound(path)


def truncate_path(path: str, width: int) -> str:
    """Shorten path to width characters, keeping its end."""
    if len(path) <= width:
        return path
    return "..." + path[len(path) - width + 3 :]


def filter_entries(
    entries: Sequence[IndexEntry], prefix: Optional[str], ignore_case: bool = False
) -> list[IndexEntry]:
    if not prefix:
        return list(entries)
    if ignore_case:
        prefix = prefix.casefold()
        return [e for e in entries if e.path.casefold().startswith(prefix)]
    return [e for e in entries if e.path.startswith(prefix)]


def format_entries(
    entries: Sequence[IndexEntry],
    width: int,
    table: bool = True,
    identities: Optional[IdentityResolver] = None,
) -> list[str]:
    """Lay out index entries as rows of aligned columns.

    Args:
      entries: Entries to show
      width: Total width of a row
      table: Whether to include headings and column separators
      identities: Resolver for the owner columns; omitted if None
    Returns:
      list of lines, without line endings
    """
    columns = [("Mode", 10)]
    if identities is not None:
        columns.extend([("User", 10), ("Group", 10)])
    columns.extend(
        [("OID", OID_DISPLAY_LENGTH), ("SkipWT", 6), ("Add", 5), ("Stage", 8)]
    )
    sep = " | " if table else "   "
    path_width = max(width - sum(len(sep) + w for (name, w) in columns), 10)

    def row(path: str, values: list[str]) -> str:
        line = path.ljust(path_width)
        for (name, w), value in zip(columns, values):
            line += f"{sep}{value:<{w}}"
        return line.rstrip()

    lines = []
    if table:
        lines.append(row("Path", [name for (name, w) in columns]))
        lines.append("-" * width)
    for entry in entries:
        values = [str(entry.status.mode)]
        if identities is not None:
            values.append(identities.user_name(entry.status.uid))
            values.append(identities.group_name(entry.status.gid))
        values.extend(
            [
                entry.sha.render_hex(OID_DISPLAY_LENGTH),
                str(entry.skip_worktree),
                str(entry.intent_to_add),
                STAGE_NAMES[entry.stage],
            ]
        )
        lines.append(row(truncate_path(entry.path, path_width), values))
    return lines


class Command:
    """A gitindex subcommand."""

    def __init__(self, location: Optional[str] = None) -> None:
        self.location = location

    def open_index(self) -> tuple[str, Index]:
        filename = find_index_file(self.location)
        return filename, read_index_file(filename)

    def run(self, args: Sequence[str]) -> Optional[int]:
        """Run the command."""
        raise NotImplementedError(self.run)


class cmd_info(Command):
    """Show summary information about the index."""

    def run(self, args: Sequence[str]) -> None:
        parser = argparse.ArgumentParser(prog="gitindex info")
        parser.parse_args(args)
        filename, index = self.open_index()
        sys.stdout.write(f"File       : {filename}\n")
        sys.stdout.write(f"Size       : {os.path.getsize(filename)} bytes\n")
        sys.stdout.write(f"Version    : {index.version}\n")
        sys.stdout.write(f"Entries    : {index.header.num_entries}\n")
        sys.stdout.write(f"Checksum   : {index.checksum}\n")
        sys.stdout.write(f"Extensions : {len(index.extensions)} bytes\n")


class cmd_list(Command):
    """List and filter index entries."""

    def run(self, args: Sequence[str]) -> None:
        parser = argparse.ArgumentParser(prog="gitindex list")
        parser.add_argument(
            "prefix", nargs="?", help="Filter based on path prefix"
        )
        parser.add_argument(
            "--ignore-case",
            action="store_true",
            help="Perform case-insensitive filtering on paths",
        )
        parser.add_argument(
            "--no-table",
            action="store_true",
            help="Do not show table headings or columns",
        )
        parser.add_argument(
            "--long", action="store_true", help="Show owning user and group"
        )
        parser.add_argument(
            "--numeric-ids",
            action="store_true",
            help="Show numeric user and group ids with --long",
        )
        parsed = parser.parse_args(args)
        filename, index = self.open_index()
        entries = filter_entries(index.entries, parsed.prefix, parsed.ignore_case)
        identities = None
        if parsed.long:
            identities = get_identity_resolver(numeric=parsed.numeric_ids)
        width = max(detect_terminal_width(), MIN_TABLE_WIDTH)
        for line in format_entries(
            entries, width, table=not parsed.no_table, identities=identities
        ):
            sys.stdout.write(line + "\n")


class cmd_rewrite(Command):
    """Read the index and write it back out to another file."""

    def run(self, args: Sequence[str]) -> Optional[int]:
        parser = argparse.ArgumentParser(prog="gitindex rewrite")
        parser.add_argument("output", help="File to write the index to")
        parser.add_argument(
            "--force", action="store_true", help="Overwrite output if it exists"
        )
        parsed = parser.parse_args(args)
        filename, index = self.open_index()
        try:
            write_index_file(parsed.output, index, overwrite=parsed.force)
        except FileExistsError:
            logger.error("%s already exists; use --force to overwrite", parsed.output)
            return 1
        except FileLocked as e:
            logger.error("Unable to lock %s: %s exists", parsed.output, e.lockfilename)
            return 1
        logger.info("Wrote %d entries to %s", len(index.entries), parsed.output)
        return None


commands: dict[str, type[Command]] = {
    "info": cmd_info,
    "list": cmd_list,
    "rewrite": cmd_rewrite,
}


def main(argv: Optional[Sequence[str]] = None) -> Optional[int]:
    """Main entry point for the gitindex CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code or None
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog="gitindex",
        description="Utility for inspecting the Git index file.",
        add_help=False,
    )
    parser.add_argument(
        "-i", "--index", help="Path to a Git repository or .git/index file"
    )
    parser.add_argument("--help", "-h", action="store_true", help="Show help")

    global_args, remaining = parser.parse_known_args(argv)

    if global_args.help or not remaining:
        parser = argparse.ArgumentParser(
            prog="gitindex", description="Utility for inspecting the Git index file."
        )
        parser.add_argument(
            "-i", "--index", help="Path to a Git repository or .git/index file"
        )
        parser.add_argument(
            "command",
            nargs="?",
            help=f"Command to run. Available: {', '.join(sorted(commands))}",
        )
        parser.print_help()
        return 1

    if not _configure_logging_from_trace():
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    cmd = remaining[0]
    try:
        cmd_kls = commands[cmd]
    except KeyError:
        logger.error("No such subcommand: %s", cmd)
        return 1

    try:
        return cmd_kls(global_args.index).run(remaining[1:])
    except IndexNotFound:
        logger.error("Unable to locate index file.")
        return 1
    except IndexFormatError as e:
        logger.error("Unable to read index: %s", e)
        return 1


def _main() -> None:
    signal.signal(signal.SIGINT, signal_int)
    sys.exit(main())


if __name__ == "__main__":
    _main()
