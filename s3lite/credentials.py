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

"""Credential definitions to access S3 service."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """
    Represents credentials access key and secret key. Neither value is
    shown in repr() so credentials never end up in logs.
    """

    access_key: str = field(repr=False)
    secret_key: str = field(repr=False)

    def __post_init__(self):
        object.__setattr__(self, "access_key", (self.access_key or "").strip())
        object.__setattr__(self, "secret_key", (self.secret_key or "").strip())

        if not self.access_key:
            raise ValueError("Access key must not be empty")

        if not self.secret_key:
            raise ValueError("Secret key must not be empty")
