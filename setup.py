#!/usr/bin/python3
# Setup file for gitindex
# Copyright (C) 2026 The gitindex developers
# SPDX-License-Identifier: Apache-2.0 OR GPL-2.0-or-later

from setuptools import setup

setup(
    name="gitindex",
    version="0.1.0",
    description="Reader and writer for the git index file format",
    license="Apache-2.0 OR GPL-2.0-or-later",
    python_requires=">=3.9",
    packages=["gitindex"],
    package_data={"": ["py.typed"]},
    entry_points={"console_scripts": ["gitindex = gitindex.cli:_main"]},
)
