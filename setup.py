#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from glob import glob
from os.path import basename
from os.path import splitext

from setuptools import find_packages
from setuptools import setup


setup(
    name="keylayer",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="Hot-reloadable layout overrides and caps-aware key labels for software keyboards",
    long_description="TODO",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    url="https://github.com/inklesspen/keylayer",
    packages=find_packages("src"),
    package_dir={"": "src"},
    py_modules=[splitext(basename(path))[0] for path in glob("src/*.py")],
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Text Processing",
    ],
    project_urls={
        "Issue Tracker": "https://github.com/inklesspen/keylayer/issues",
    },
    keywords=["keyboard", "layout", "input method"],
    python_requires=">=3.11",
    install_requires=[
        "attrs",
        "cattrs>=22.2.0",
        "msgspec",
        "trio>=0.22.0",
    ],
    tests_require=["pytest>=6.2.4"],
    extras_require={
        "test": ["pytest>=6.2.4"],
    },
    entry_points={
        "console_scripts": [
            "keylayer-check = keylayer.scripts:check_layout_cli",
            "keylayer-render = keylayer.scripts:render_cli",
        ],
    },
)
