# identity.py -- Resolution of numeric user and group ids to names
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

"""Resolve the uid and gid of index entries to display names.

The index codec never looks up identities itself; callers that want names
pass one of these resolvers to whatever does the displaying.
"""

import sys
from typing import Protocol


class IdentityResolver(Protocol):
    def user_name(self, uid: int) -> str: ...

    def group_name(self, gid: int) -> str: ...


class NumericIdentityResolver:
    """Render ids as plain numbers."""

    def user_name(self, uid: int) -> str:
        return str(uid)

    def group_name(self, gid: int) -> str:
        return str(gid)


class NativeIdentityResolver:
    """Look ids up in the passwd and group databases.

    Ids without a database entry are rendered as numbers.
    """

    def user_name(self, uid: int) -> str:
        import pwd

        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            return str(uid)

    def group_name(self, gid: int) -> str:
        import grp

        try:
            return grp.getgrgid(gid).gr_name
        except KeyError:
            return str(gid)


def get_identity_resolver(numeric: bool = False) -> IdentityResolver:
    """Return the resolver to use on this platform.

    Args:
      numeric: Always render ids as numbers
    """
    if numeric or sys.platform == "win32":
        return NumericIdentityResolver()
    return NativeIdentityResolver()
