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

"""HTTP transport to send signed requests to S3 services."""

from __future__ import absolute_import, annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

import certifi
import urllib3
from typing_extensions import Protocol
from urllib3._collections import HTTPHeaderDict
from urllib3.util import Timeout

from .error import TransportError

DEFAULT_TIMEOUT = 300


@dataclass(frozen=True)
class HttpResponse:
    """HTTP response of a transport."""
    status: int
    headers: HTTPHeaderDict = field(default_factory=HTTPHeaderDict)
    data: bytes = b""


class HttpTransport(Protocol):
    """Transport interface."""

    def request(
            self,
            method: str,
            url: str,
            headers: Mapping[str, str],
            body: Optional[bytes] = None,
    ) -> HttpResponse:
        """
        Send request and return response; raise TransportError if no
        response is received. S3Client also treats OSError raised here,
        like ConnectionError or TimeoutError, as a transport failure;
        any other exception propagates.
        """


class Urllib3Transport:
    """
    Transport using urllib3.PoolManager. Retries and redirects are not
    followed; a response is returned as received.

    Args:
        http_client (Optional[urllib3.PoolManager], default=None):
            Customized HTTP client.

        timeout (int, default=300):
            Connect and read timeout in seconds.

        cert_check (bool, default=True):
            Flag to enable/disable server certificate validation
            for HTTPS connections.
    """

    def __init__(
            self,
            http_client: Optional[urllib3.PoolManager] = None,
            timeout: int = DEFAULT_TIMEOUT,
            cert_check: bool = True,
    ):
        # Validate http client has correct base class.
        if http_client and not isinstance(http_client, urllib3.PoolManager):
            raise TypeError(
                "HTTP client should be urllib3.PoolManager like object, "
                f"got {type(http_client).__name__}",
            )

        # Load CA certificates from SSL_CERT_FILE file if set
        self._http = http_client or urllib3.PoolManager(
            timeout=Timeout(connect=timeout, read=timeout),
            maxsize=10,
            cert_reqs='CERT_REQUIRED' if cert_check else 'CERT_NONE',
            ca_certs=os.environ.get('SSL_CERT_FILE') or certifi.where(),
            retries=False,
        )

    def __del__(self):
        if hasattr(self, "_http"):  # Only required for unit test run
            self._http.clear()

    def request(
            self,
            method: str,
            url: str,
            headers: Mapping[str, str],
            body: Optional[bytes] = None,
    ) -> HttpResponse:
        """Send request and return response."""
        try:
            response = self._http.urlopen(
                method,
                url,
                body=body,
                headers=HTTPHeaderDict(headers),
                preload_content=True,
                redirect=False,
            )
        except urllib3.exceptions.HTTPError as exc:
            raise TransportError(
                f"{type(exc).__name__}: {exc}",
            ) from exc
        return HttpResponse(
            response.status,
            HTTPHeaderDict(response.headers or {}),
            response.data or b"",
        )
