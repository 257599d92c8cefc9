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
s3lite.signer
~~~~~~~~~~~~~

This module implements all helpers for AWS Signature version '4' support.

"""

from __future__ import absolute_import, annotations

import hashlib
import hmac
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional, cast

from . import time
from .canonical import (CanonicalRequest, QueryType, build_canonical_request,
                        build_presign_canonical_request)
from .credentials import Credentials
from .helpers import redact_url

SIGN_V4_ALGORITHM = "AWS4-HMAC-SHA256"
SERVICE_NAME = "s3"

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignatureContext:
    """Values computed while signing one request."""
    amz_date: str
    datestamp: str
    credential_scope: str
    string_to_sign: str
    signature: str = field(repr=False)


def _hmac_hash(
        key: bytes,
        data: bytes,
        hexdigest: bool = False,
) -> bytes | str:
    """Return HMacSHA256 digest of given key and data."""

    hasher = hmac.new(key, data, hashlib.sha256)
    return hasher.hexdigest() if hexdigest else hasher.digest()


def _get_scope(date: datetime, region: str) -> str:
    """Get scope string."""
    return f"{time.to_signer_date(date)}/{region}/{SERVICE_NAME}/aws4_request"


def _get_string_to_sign(
        date: datetime,
        scope: str,
        canonical_request_hash: str,
) -> str:
    """Get string-to-sign."""
    return (
        f"{SIGN_V4_ALGORITHM}\n{time.to_amz_date(date)}\n{scope}\n"
        f"{canonical_request_hash}"
    )


def _get_signing_key(
        secret_key: str,
        date: datetime,
        region: str,
) -> bytes:
    """Get signing key."""

    date_key = cast(
        bytes,
        _hmac_hash(
            ("AWS4" + secret_key).encode(),
            time.to_signer_date(date).encode(),
        ),
    )
    date_region_key = cast(bytes, _hmac_hash(date_key, region.encode()))
    date_region_service_key = cast(
        bytes,
        _hmac_hash(date_region_key, SERVICE_NAME.encode()),
    )
    return cast(
        bytes,
        _hmac_hash(date_region_service_key, b"aws4_request"),
    )


def _get_signature(signing_key: bytes, string_to_sign: str) -> str:
    """Get signature."""

    return cast(
        str,
        _hmac_hash(signing_key, string_to_sign.encode(), hexdigest=True),
    )


def _get_authorization(
        access_key: str,
        scope: str,
        signed_headers: str,
        signature: str,
) -> str:
    """Get authorization."""
    return (
        f"{SIGN_V4_ALGORITHM} Credential={access_key}/{scope}, "
        f"SignedHeaders={signed_headers}, Signature={signature}"
    )


def get_credential_string(access_key: str, date: datetime, region: str) -> str:
    """Get credential string of given access key, date and region."""
    return f"{access_key}/{_get_scope(date, region)}"


def get_signature_context(
        canonical_request: CanonicalRequest,
        credentials: Credentials,
        region: str,
        date: datetime,
) -> SignatureContext:
    """Compute string-to-sign and signature of given canonical request."""
    scope = _get_scope(date, region)
    string_to_sign = _get_string_to_sign(
        date, scope, canonical_request.hash(),
    )
    LOGGER.debug(
        "canonical request:\n%s", redact_url(str(canonical_request)),
    )
    LOGGER.debug("string to sign:\n%s", string_to_sign)
    signing_key = _get_signing_key(credentials.secret_key, date, region)
    return SignatureContext(
        time.to_amz_date(date),
        time.to_signer_date(date),
        scope,
        string_to_sign,
        _get_signature(signing_key, string_to_sign),
    )


def sign_headers(  # pylint: disable=too-many-positional-arguments
        method: str,
        host: str,
        canonical_uri: str,
        query: Optional[QueryType],
        credentials: Credentials,
        region: str,
        date: datetime,
        payload: bytes | str | None = None,
        amz_headers: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """
    Do signature V4 of given request and return headers to send with it;
    Host, X-Amz-Date, X-Amz-Content-SHA256, Authorization and Accept plus
    given amz_headers.
    """
    canonical_request = build_canonical_request(
        method, canonical_uri, query, host, date, payload, amz_headers,
    )
    context = get_signature_context(
        canonical_request, credentials, region, date,
    )
    headers = {
        "Host": host,
        "X-Amz-Date": context.amz_date,
        "X-Amz-Content-SHA256": canonical_request.payload_hash,
        "Authorization": _get_authorization(
            credentials.access_key,
            context.credential_scope,
            canonical_request.signed_headers,
            context.signature,
        ),
        "Accept": "application/xml",
    }
    headers.update(amz_headers or {})
    return headers


def presign_url(  # pylint: disable=too-many-positional-arguments
        method: str,
        scheme: str,
        host: str,
        canonical_uri: str,
        credentials: Credentials,
        region: str,
        date: datetime,
        expires: int,
        query: Optional[QueryType] = None,
) -> str:
    """Do signature V4 of given presign request and return the URL."""
    query = dict(query or {})
    query.update({
        "X-Amz-Algorithm": SIGN_V4_ALGORITHM,
        "X-Amz-Credential": get_credential_string(
            credentials.access_key, date, region,
        ),
        "X-Amz-Date": time.to_amz_date(date),
        "X-Amz-Expires": expires,
        "X-Amz-SignedHeaders": "host",
    })
    canonical_request = build_presign_canonical_request(
        method, canonical_uri, query, host,
    )
    context = get_signature_context(
        canonical_request, credentials, region, date,
    )
    return (
        f"{scheme}://{host}{canonical_request.canonical_uri}?"
        f"{canonical_request.canonical_query}"
        f"&X-Amz-Signature={context.signature}"
    )
