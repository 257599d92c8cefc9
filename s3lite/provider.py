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
Providers of S3 compatible services. A provider knows the region to sign
with, the endpoint host and whether buckets are addressed by path
(https://host/bucket/key) or by virtual host (https://bucket.host/key).
"""

from __future__ import absolute_import, annotations

import re
from typing import Optional
from urllib.parse import urlsplit

from typing_extensions import Protocol

from .canonical import QueryType, get_canonical_query_string
from .helpers import encode_object_key

_REGION_REGEX = re.compile(r'^((?!_)(?!-)[a-z_\d-]{1,63}(?<!-)(?<!_))$',
                           re.IGNORECASE)
_HOSTNAME_REGEX = re.compile(
    r'^((?!-)(?!_)[a-z_\d-]{1,63}(?<!-)(?<!_)\.)*'
    r'((?!_)(?!-)[a-z_\d-]{1,63}(?<!-)(?<!_))$',
    re.IGNORECASE)


class Provider(Protocol):
    """Provider interface."""

    @property
    def region(self) -> str:
        """Get region used in signing."""

    @property
    def endpoint_host(self) -> str:
        """Get endpoint host without bucket."""

    @property
    def scheme(self) -> str:
        """Get URL scheme."""

    def host(self, bucket_name: str = "") -> str:
        """Get Host header value of request to given bucket."""

    def canonical_uri(self, bucket_name: str = "", object_key: str = "") -> str:
        """Get encoded request path of given bucket and object key."""

    def request_url(
            self,
            bucket_name: str = "",
            object_key: str = "",
            query: Optional[QueryType] = None,
    ) -> str:
        """Get request URL of given bucket, object key and query."""


class GenericProvider:
    """
    Provider of any S3 compatible service.

    Args:
        endpoint (str):
            Host, host:port or URL like 'http://localhost:9000' of the
            service; 'https' is used when no scheme is given.

        region (str, default="us-east-1"):
            Region used in signing.

        path_style (bool, default=True):
            Flag to use path style addressing; virtual host style is used
            otherwise.

    Example:
        >>> provider = GenericProvider("play.min.io:9000")
        >>> provider.request_url("my-bucket", "my object.txt")
        'https://play.min.io:9000/my-bucket/my%20object.txt'
    """

    def __init__(
            self,
            endpoint: str,
            region: str = "us-east-1",
            path_style: bool = True,
    ):
        if not endpoint:
            raise ValueError("endpoint must not be empty")
        url = urlsplit(endpoint if "://" in endpoint else "https://" + endpoint)
        if url.scheme not in ("http", "https"):
            raise ValueError(f"unsupported scheme {url.scheme} in endpoint")
        if url.path not in ("", "/") or url.query or url.fragment:
            raise ValueError(
                f"endpoint {endpoint} must not contain path, query or fragment",
            )
        if not url.hostname or not _HOSTNAME_REGEX.match(url.hostname):
            raise ValueError(f"invalid hostname in endpoint {endpoint}")
        if not region or not _REGION_REGEX.match(region):
            raise ValueError(f"invalid region {region}")

        self._scheme = url.scheme
        self._endpoint_host = url.netloc.lower()
        self._region = region
        self._path_style = path_style

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(endpoint_host={self._endpoint_host!r}, "
            f"region={self._region!r}, path_style={self._path_style})"
        )

    @property
    def region(self) -> str:
        """Get region used in signing."""
        return self._region

    @property
    def endpoint_host(self) -> str:
        """Get endpoint host without bucket."""
        return self._endpoint_host

    @property
    def scheme(self) -> str:
        """Get URL scheme."""
        return self._scheme

    @property
    def path_style(self) -> bool:
        """Check whether path style addressing is used."""
        return self._path_style

    def host(self, bucket_name: str = "") -> str:
        """Get Host header value of request to given bucket."""
        if bucket_name and not self._path_style:
            return f"{bucket_name}.{self._endpoint_host}"
        return self._endpoint_host

    def canonical_uri(self, bucket_name: str = "", object_key: str = "") -> str:
        """Get encoded request path of given bucket and object key."""
        path = "/"
        if bucket_name and self._path_style:
            path += bucket_name
            if object_key:
                path += "/"
        if object_key:
            path += encode_object_key(object_key)
        return path

    def request_url(
            self,
            bucket_name: str = "",
            object_key: str = "",
            query: Optional[QueryType] = None,
    ) -> str:
        """Get request URL of given bucket, object key and query."""
        url = (
            f"{self._scheme}://{self.host(bucket_name)}"
            f"{self.canonical_uri(bucket_name, object_key)}"
        )
        query_string = get_canonical_query_string(query)
        return url + ("?" + query_string if query_string else "")


class AwsS3Provider(GenericProvider):
    """Amazon S3."""

    def __init__(self, region: str = "us-east-1", path_style: bool = True):
        super().__init__(f"s3.{region}.amazonaws.com", region, path_style)


class BackblazeB2Provider(GenericProvider):
    """Backblaze B2."""

    def __init__(self, region: str = "us-west-004", path_style: bool = False):
        super().__init__(f"s3.{region}.backblazeb2.com", region, path_style)


class CloudflareR2Provider(GenericProvider):
    """
    Cloudflare R2. Jurisdiction like 'eu' or 'fedramp' selects the
    jurisdiction specific endpoint; region is always 'auto'.
    """

    def __init__(
            self,
            account_id: str,
            jurisdiction: str = "",
            path_style: bool = True,
    ):
        if not account_id:
            raise ValueError("account ID is required for Cloudflare R2")
        prefix = f"{jurisdiction}." if jurisdiction else ""
        super().__init__(
            f"{account_id}.{prefix}r2.cloudflarestorage.com",
            "auto",
            path_style,
        )


class DigitalOceanSpacesProvider(GenericProvider):
    """DigitalOcean Spaces."""

    def __init__(self, region: str = "sfo3", path_style: bool = False):
        super().__init__(f"{region}.digitaloceanspaces.com", region, path_style)


class WasabiProvider(GenericProvider):
    """Wasabi."""

    def __init__(self, region: str = "us-east-1", path_style: bool = False):
        super().__init__(f"s3.{region}.wasabisys.com", region, path_style)


class LinodeProvider(GenericProvider):
    """Linode (Akamai) Object Storage."""

    def __init__(self, region: str = "us-east-1", path_style: bool = True):
        super().__init__(f"{region}.linodeobjects.com", region, path_style)


class VultrProvider(GenericProvider):
    """Vultr Object Storage."""

    def __init__(self, region: str = "ewr1", path_style: bool = True):
        super().__init__(f"{region}.vultrobjects.com", region, path_style)


class MegaS4Provider(GenericProvider):
    """MEGA S4."""

    def __init__(self, region: str = "eu-central-1", path_style: bool = True):
        super().__init__(f"s3.{region}.s4.mega.io", region, path_style)
