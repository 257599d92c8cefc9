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

"""Helper functions."""

from __future__ import absolute_import, annotations

import base64
import hashlib
import re
import urllib.parse
from typing import Mapping

_SENSITIVE_QUERY_REGEX = re.compile(
    r"(X-Amz-(?:Signature|Credential)=)([^&]*)", re.IGNORECASE,
)
_SENSITIVE_HEADERS = ("x-amz-signature", "x-amz-credential")
_BUCKET_NAME_REGEX = re.compile(
    r"^[a-z0-9][a-z0-9_\.\-\:]{1,61}[a-z0-9]$", re.IGNORECASE,
)
_IPV4_REGEX = re.compile(
    r"^((25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9][0-9]|[0-9])\.){3}"
    r"(25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9][0-9]|[0-9])$"
)


def quote(
        resource: str,
        safe: str = "/",
        encoding: str | None = None,
        errors: str | None = None,
) -> str:
    """Wrapper to urllib.parse.quote() for RFC 3986 raw encoding."""
    return urllib.parse.quote(
        resource,
        safe=safe,
        encoding=encoding,
        errors=errors,
    )


def queryencode(
        query: str,
        safe: str = "",
        encoding: str | None = None,
        errors: str | None = None,
) -> str:
    """Encode query parameter value."""
    return quote(query, safe, encoding, errors)


def decode_object_key(key: str) -> str:
    """Decode percent-encoded object key."""
    return urllib.parse.unquote(key)


def encode_object_key(key: str) -> str:
    """
    Encode object key for use in a request path. Leading '/' is stripped
    and already percent-encoded sequences are decoded first so that
    encoding an encoded key does not double-encode it.
    """
    return quote(decode_object_key(key.lstrip("/")))


def headers_to_strings(
        headers: Mapping[str, str | list[str] | tuple[str]],
        titled_key: bool = False,
) -> str:
    """Convert HTTP headers to multi-line string with credentials redacted."""
    values = []
    for key, value in headers.items():
        redacted = key.lower() in _SENSITIVE_HEADERS
        key = key.title() if titled_key else key
        for item in value if isinstance(value, (list, tuple)) else [value]:
            item = "*REDACTED*" if redacted else re.sub(
                r"Credential=([^/]+)",
                "Credential=*REDACTED*",
                re.sub(r"Signature=([0-9a-f]+)", "Signature=*REDACTED*", item),
            )
            values.append(f"{key}: {item}")
    return "\n".join(values)


def redact_url(url: str) -> str:
    """Redact X-Amz-Signature and X-Amz-Credential values in URL."""
    return _SENSITIVE_QUERY_REGEX.sub(r"\1*REDACTED*", url)


def sha256_hash(data: str | bytes | None) -> str:
    """Compute SHA-256 of data and return hash as hex encoded value."""
    data = data or b""
    hasher = hashlib.sha256()
    hasher.update(data.encode() if isinstance(data, str) else data)
    return hasher.hexdigest()


def sha1_hash(data: str | bytes | None) -> str:
    """Compute SHA-1 of data and return hash as hex encoded value."""
    data = data or b""
    hasher = hashlib.new(  # type: ignore[call-arg]
        "sha1",
        usedforsecurity=False,
    )
    hasher.update(data.encode() if isinstance(data, str) else data)
    return hasher.hexdigest()


def md5_hash(data: str | bytes | None) -> str:
    """Compute MD5 of data and return hash as hex encoded value."""
    data = data or b""
    # indicate md5 hashing algorithm is not used in a security context.
    # Refer https://bugs.python.org/issue9216 for more information.
    hasher = hashlib.new(  # type: ignore[call-arg]
        "md5",
        usedforsecurity=False,
    )
    hasher.update(data.encode() if isinstance(data, str) else data)
    return hasher.hexdigest()


def md5sum_hash(data: str | bytes | None) -> str | None:
    """Compute MD5 of data and return hash as Base64 encoded value."""
    if data is None:
        return None

    hasher = hashlib.new(  # type: ignore[call-arg]
        "md5",
        usedforsecurity=False,
    )
    hasher.update(data.encode() if isinstance(data, str) else data)
    return base64.b64encode(hasher.digest()).decode()


def check_bucket_name(bucket_name: str):
    """
    Check whether bucket name is valid. Names of older buckets with upper
    case letters, '_' or ':' are accepted; IP addresses and successive
    '..', '.-' or '-.' are not.
    """
    if not _BUCKET_NAME_REGEX.match(bucket_name):
        raise ValueError(f"invalid bucket name {bucket_name}")

    if _IPV4_REGEX.match(bucket_name):
        raise ValueError(f"bucket name {bucket_name} must not be formatted "
                         "as an IP address")

    unallowed_successive_chars = ["..", ".-", "-."]
    if any(x in bucket_name for x in unallowed_successive_chars):
        raise ValueError(f"bucket name {bucket_name} contains invalid "
                         "successive characters")
