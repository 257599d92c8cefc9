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

"""
s3lite.error
~~~~~~~~~~~~

This module provides custom exception classes used inside s3lite. Public
client operations never raise them; they are converted to ErrorResponse.

"""

from __future__ import absolute_import, annotations

from typing import Optional


class S3LiteException(Exception):
    """Base s3lite exception."""


class XmlParseError(S3LiteException):
    """Raised to indicate that response body is not well-formed XML."""

    def __init__(self, message: str, body: Optional[str | bytes]):
        self._message = message
        self._body = body
        super().__init__(f"XML parse error: {message}")

    def __reduce__(self):
        return type(self), (self._message, self._body)

    @property
    def message(self) -> str:
        """Get parser error message."""
        return self._message

    @property
    def body(self) -> Optional[str | bytes]:
        """Get unparseable body."""
        return self._body

    @property
    def fragment(self) -> str:
        """Get first 200 characters of body."""
        body = self._body or ""
        if isinstance(body, bytes):
            body = body.decode(errors="replace")
        return body[:200] + ("..." if len(body) > 200 else "")


class TransportError(S3LiteException):
    """
    Raised by HTTP transport to indicate network, DNS or TLS failure
    i.e. no HTTP response is received.
    """
