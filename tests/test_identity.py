# test_identity.py -- Tests for identity.py
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

"""Tests for gitindex.identity."""

import sys
from unittest import mock

from gitindex.identity import (
    NativeIdentityResolver,
    NumericIdentityResolver,
    get_identity_resolver,
)

from . import TestCase, skipIf


class NumericIdentityResolverTests(TestCase):
    def test_names(self) -> None:
        resolver = NumericIdentityResolver()
        self.assertEqual("1000", resolver.user_name(1000))
        self.assertEqual("0", resolver.group_name(0))


@skipIf(sys.platform == "win32", "no passwd database on Windows")
class NativeIdentityResolverTests(TestCase):
    def test_known_ids(self) -> None:
        resolver = NativeIdentityResolver()
        with mock.patch("pwd.getpwuid") as getpwuid:
            getpwuid.return_value.pw_name = "alice"
            self.assertEqual("alice", resolver.user_name(1000))
            getpwuid.assert_called_once_with(1000)
        with mock.patch("grp.getgrgid") as getgrgid:
            getgrgid.return_value.gr_name = "staff"
            self.assertEqual("staff", resolver.group_name(50))
            getgrgid.assert_called_once_with(50)

    def test_unknown_ids(self) -> None:
        resolver = NativeIdentityResolver()
        with mock.patch("pwd.getpwuid", side_effect=KeyError(4242)):
            self.assertEqual("4242", resolver.user_name(4242))
        with mock.patch("grp.getgrgid", side_effect=KeyError(4343)):
            self.assertEqual("4343", resolver.group_name(4343))


class GetIdentityResolverTests(TestCase):
    def test_numeric(self) -> None:
        self.assertIsInstance(
            get_identity_resolver(numeric=True), NumericIdentityResolver
        )

    def test_windows(self) -> None:
        with mock.patch.object(sys, "platform", "win32"):
            self.assertIsInstance(get_identity_resolver(), NumericIdentityResolver)

    def test_native(self) -> None:
        with mock.patch.object(sys, "platform", "linux"):
            self.assertIsInstance(get_identity_resolver(), NativeIdentityResolver)
