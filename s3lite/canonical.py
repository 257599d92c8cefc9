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
s3lite.canonical
~~~~~~~~~~~~~~~~

This module builds the AWS Signature version '4' canonical request.

"""

from __future__ import absolute_import, annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional, Union

from . import time
from .helpers import queryencode, sha256_hash

QueryType = Mapping[str, Union[str, int]]

EMPTY_SHA256 = (
    "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
)
UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"
SIGNED_HEADERS = "host;x-amz-content-sha256;x-amz-date"
PRESIGN_SIGNED_HEADERS = "host"


@dataclass(frozen=True)
class CanonicalRequest:
    """SignatureV4 canonical request."""
    method: str
    canonical_uri: str
    canonical_query: str
    canonical_headers: str
    signed_headers: str
    payload_hash: str

    def __str__(self) -> str:
        # CanonicalRequest =
        #   HTTPRequestMethod + '\n' +
        #   CanonicalURI + '\n' +
        #   CanonicalQueryString + '\n' +
        #   CanonicalHeaders + '\n' +
        #   SignedHeaders + '\n' +
        #   HexEncode(Hash(RequestPayload))
        # where CanonicalHeaders ends with '\n' already.
        return (
            f"{self.method}\n"
            f"{self.canonical_uri}\n"
            f"{self.canonical_query}\n"
            f"{self.canonical_headers}\n"
            f"{self.signed_headers}\n"
            f"{self.payload_hash}"
        )

    def hash(self) -> str:
        """Get hex encoded SHA-256 of this canonical request."""
        return sha256_hash(str(self))


def get_canonical_query_string(query: Optional[QueryType]) -> str:
    """
    Get canonical query string. Keys and values are percent-encoded
    independently and pairs are sorted by encoded key.
    """
    if not query:
        return ""
    pairs = sorted(
        (queryencode(str(key)), queryencode(str(value)))
        for key, value in query.items()
    )
    return "&".join(f"{key}={value}" for key, value in pairs)


def get_canonical_headers(
        host: str,
        content_sha256: str,
        date: datetime,
        amz_headers: Optional[Mapping[str, str]] = None,
) -> tuple[str, str]:
    """
    Get canonical headers and signed headers. Host, x-amz-content-sha256
    and x-amz-date are always signed; amz_headers adds x-amz-* headers
    like x-amz-copy-source.
    """
    headers = {
        "host": host,
        "x-amz-content-sha256": content_sha256,
        "x-amz-date": time.to_amz_date(date),
    }
    for key, value in (amz_headers or {}).items():
        key = key.lower()
        if not key.startswith("x-amz-"):
            raise ValueError(f"only x-amz-* headers can be signed; got {key}")
        headers[key] = value.strip()
    if not amz_headers:
        return "".join(
            f"{key}:{value}\n" for key, value in headers.items()
        ), SIGNED_HEADERS
    ordered = sorted(headers.items())
    return (
        "".join(f"{key}:{value}\n" for key, value in ordered),
        ";".join(key for key, _ in ordered),
    )


def build_canonical_request(  # pylint: disable=too-many-positional-arguments
        method: str,
        canonical_uri: str,
        query: Optional[QueryType],
        host: str,
        date: datetime,
        payload: bytes | str | None = None,
        amz_headers: Optional[Mapping[str, str]] = None,
) -> CanonicalRequest:
    """Build canonical request for header based authentication."""
    payload_hash = sha256_hash(payload) if payload else EMPTY_SHA256
    canonical_headers, signed_headers = get_canonical_headers(
        host, payload_hash, date, amz_headers,
    )
    return CanonicalRequest(
        method,
        canonical_uri or "/",
        get_canonical_query_string(query),
        canonical_headers,
        signed_headers,
        payload_hash,
    )


def build_presign_canonical_request(
        method: str,
        canonical_uri: str,
        query: QueryType,
        host: str,
) -> CanonicalRequest:
    """
    Build canonical request for query string authentication. Query must
    already contain X-Amz-* parameters except X-Amz-Signature.
    """
    return CanonicalRequest(
        method,
        canonical_uri or "/",
        get_canonical_query_string(query),
        f"host:{host}\n",
        PRESIGN_SIGNED_HEADERS,
        UNSIGNED_PAYLOAD,
    )
