# -*- coding: utf-8 -*-
# s3lite, SigV4 client library for Amazon S3 Compatible Cloud Storage,
# (C) 2025 s3lite authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Hidden and system file exclusion for object listings."""

from __future__ import annotations

from typing import Iterable, Optional

HIDDEN_FILES = frozenset([
    ".DS_Store",
    "Thumbs.db",
    ".htaccess",
    ".git",
    ".svn",
    ".tmp",
    ".gitignore",
    ".gitkeep",
    "desktop.ini",
    "Icon\r",
    ".localized",
    "__MACOSX",
    ".fseventsd",
    ".Spotlight-V100",
    ".Trashes",
    "._.DS_Store",
    "$RECYCLE.BIN",
])


def basename(key: str) -> str:
    """Get last path component of object key."""
    return key.rstrip("/").rsplit("/", 1)[-1]


class HiddenFileFilter:
    """
    Predicate telling whether an object key names a hidden or system file.

    Args:
        hidden_files (Optional[Iterable[str]], default=None):
            File names to hide; defaults to HIDDEN_FILES.

        extra_files (Optional[Iterable[str]], default=None):
            File names to hide in addition to hidden_files.

        hide_dotfiles (bool, default=True):
            Flag to hide any file name starting with '.'.

    Example:
        >>> hidden = HiddenFileFilter(extra_files=["README.txt"])
        >>> hidden("docs/README.txt")
        True
    """

    def __init__(
            self,
            hidden_files: Optional[Iterable[str]] = None,
            extra_files: Optional[Iterable[str]] = None,
            hide_dotfiles: bool = True,
    ):
        self._hidden_files = frozenset(
            HIDDEN_FILES if hidden_files is None else hidden_files,
        ) | frozenset(extra_files or [])
        self._hide_dotfiles = hide_dotfiles

    @property
    def hidden_files(self) -> frozenset[str]:
        """Get hidden file names."""
        return self._hidden_files

    def __call__(self, key: str, current_prefix: str = "") -> bool:
        if current_prefix and key == current_prefix:
            return False
        filename = basename(key)
        if filename in self._hidden_files:
            return True
        return self._hide_dotfiles and len(filename) > 1 and (
            filename.startswith(".")
        )
