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
Response of list_buckets, list_objects and head_object APIs as domain
models.
"""

from __future__ import absolute_import, annotations

import base64
import binascii
import re
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import (TYPE_CHECKING, Any, Callable, Mapping, Optional, Type,
                    TypeVar)

from .filters import HiddenFileFilter, basename
from .helpers import md5_hash, sha1_hash, sha256_hash
from .time import parse_time, to_iso8601utc
from .xml import findtext

if TYPE_CHECKING:
    from .api import S3Client
    from .responses import ErrorResponse

_MD5_REGEX = re.compile(r"^[a-f0-9]{32}$", re.IGNORECASE)
_HEX_REGEX = re.compile(r"^[a-f0-9]+$", re.IGNORECASE)
_DIGEST_SIZES = {"sha256": 32, "sha1": 20}
_CHECKSUM_KEYS = {
    "sha256": ("sha256", "checksum-sha256", "x-amz-checksum-sha256",
               "content-sha256"),
    "sha1": ("sha1", "checksum-sha1", "x-amz-checksum-sha1"),
}
_HASHERS: dict[str, Callable[[bytes | str], str]] = {
    "sha256": sha256_hash,
    "sha1": sha1_hash,
    "md5": md5_hash,
}

_DEFAULT_HIDDEN_FILE_FILTER = HiddenFileFilter()
_PRESIGNED_ATTR = "_presigned"
_PRESIGNED_LOCK = threading.Lock()


def _normalize_digest(value: str, algorithm: str) -> Optional[str]:
    """Convert hex or base64 encoded digest to lower case hex."""
    value = value.strip().strip('"')
    size = _DIGEST_SIZES[algorithm]
    if len(value) == size * 2 and _HEX_REGEX.match(value):
        return value.lower()
    try:
        digest = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return None
    return digest.hex() if len(digest) == size else None


A = TypeVar("A", bound="S3Bucket")


@dataclass(frozen=True)
class S3Bucket:
    """Bucket information."""
    name: str
    creation_date: Optional[datetime] = None
    region: Optional[str] = None

    @classmethod
    def fromdict(cls: Type[A], data: Mapping[str, Any]) -> A:
        """Create new object with values from converted XML element."""
        return cls(
            findtext(data, "Name", ""),
            parse_time(findtext(data, "CreationDate")),
            findtext(data, "BucketRegion") or findtext(data, "Region") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict."""
        return {
            "name": self.name,
            "creation_date": to_iso8601utc(self.creation_date),
            "region": self.region,
        }


@dataclass(frozen=True)
class Checksum:
    """Checksum of an object with its algorithm."""
    method: str
    value: str


@dataclass(frozen=True)
class IntegrityResult:
    """
    Result of verifying content against object checksum; verified is None
    when no checksum is available.
    """
    verified: Optional[bool]
    method: Optional[str] = None
    expected: Optional[str] = None
    calculated: Optional[str] = None


B = TypeVar("B", bound="S3Object")


@dataclass(frozen=True)
class S3Object:
    """Object information."""
    key: str
    size: int = 0
    last_modified: Optional[datetime] = None
    etag: str = ""
    storage_class: str = "STANDARD"
    metadata: dict[str, str] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "etag", (self.etag or "").strip('"'))

    def __getstate__(self) -> dict[str, Any]:
        # Presigned URL memo is not part of the object state.
        state = dict(self.__dict__)
        state.pop(_PRESIGNED_ATTR, None)
        return state

    @classmethod
    def fromdict(cls: Type[B], data: Mapping[str, Any]) -> B:
        """Create new object with values from converted XML element."""
        size = findtext(data, "Size", "0") or "0"
        metadata = {}
        algorithm = findtext(data, "ChecksumAlgorithm")
        if algorithm:
            metadata["checksum-algorithm"] = algorithm
        return cls(
            findtext(data, "Key", "") or "",
            int(size) if size.isdigit() else 0,
            parse_time(findtext(data, "LastModified")),
            findtext(data, "ETag", "") or "",
            findtext(data, "StorageClass") or "STANDARD",
            metadata,
        )

    @classmethod
    def fromheaders(cls: Type[B], key: str, headers: Mapping[str, str]) -> B:
        """Create new object with values from HEAD/GET response headers."""
        headers = {name.lower(): value for name, value in headers.items()}
        metadata = {}
        for name, value in headers.items():
            if name.startswith("x-amz-meta-"):
                metadata[name[len("x-amz-meta-"):]] = value
            elif name.startswith("x-amz-checksum-"):
                metadata[name] = value
        size = headers.get("content-length", "0")
        return cls(
            key,
            int(size) if size.isdigit() else 0,
            parse_time(headers.get("last-modified")),
            headers.get("etag", ""),
            headers.get("x-amz-storage-class") or "STANDARD",
            metadata,
        )

    @property
    def filename(self) -> str:
        """Get last path component of key."""
        return basename(self.key)

    @property
    def is_multipart(self) -> bool:
        """Check whether object was uploaded using multipart upload."""
        return "-" in self.etag

    @property
    def multipart_info(self) -> Optional[dict[str, Any]]:
        """Get composite hash and part count of multipart ETag."""
        if not self.is_multipart:
            return None
        parts = self.etag.split("-")
        if len(parts) != 2 or not parts[1].isdigit():
            return None
        return {
            "composite_hash": parts[0],
            "part_count": int(parts[1]),
            "full_etag": self.etag,
        }

    @property
    def md5_checksum(self) -> Optional[str]:
        """
        Get MD5 of content from ETag. Multipart ETags are not MD5 of the
        content, so None is returned for them; see multipart_info.
        """
        if not self.etag or self.is_multipart:
            return None
        return self.etag

    @property
    def has_reliable_md5(self) -> bool:
        """Check whether md5_checksum is a valid MD5 hex digest."""
        md5 = self.md5_checksum
        return bool(md5 and _MD5_REGEX.match(md5))

    def _metadata_digest(self, algorithm: str) -> Optional[str]:
        """Get stored digest of given algorithm from metadata."""
        metadata = {}
        for key, value in self.metadata.items():
            key = key.lower()
            if key.startswith("x-amz-meta-"):
                key = key[len("x-amz-meta-"):]
            metadata[key] = value
        for key in _CHECKSUM_KEYS[algorithm]:
            value = metadata.get(key)
            digest = _normalize_digest(value, algorithm) if value else None
            if digest:
                return digest
        return None

    @property
    def best_checksum(self) -> Optional[Checksum]:
        """
        Get strongest available checksum; stored SHA-256, then stored SHA-1,
        then MD5 from single part ETag.
        """
        for algorithm in ("sha256", "sha1"):
            digest = self._metadata_digest(algorithm)
            if digest:
                return Checksum(algorithm, digest)
        if self.has_reliable_md5:
            return Checksum("md5", str(self.md5_checksum).lower())
        return None

    def verify_integrity(self, content: bytes | str) -> IntegrityResult:
        """Verify content against best available checksum."""
        checksum = self.best_checksum
        if not checksum:
            return IntegrityResult(None)
        calculated = _HASHERS[checksum.method](content)
        return IntegrityResult(
            calculated == checksum.value,
            checksum.method,
            checksum.value,
            calculated,
        )

    def should_be_excluded(
            self,
            current_prefix: str = "",
            hidden_file_filter: Optional[
                Callable[[str, str], bool]
            ] = None,
    ) -> bool:
        """
        Check whether this object should be hidden from a listing of
        current prefix; empty keys, folder markers, empty files and hidden
        files are excluded.
        """
        if not self.key or self.key.endswith("/"):
            return True
        if self.key == current_prefix:
            return False
        if self.size == 0:
            return True
        hidden = hidden_file_filter or _DEFAULT_HIDDEN_FILE_FILTER
        return hidden(self.key, current_prefix)

    def get_presigned_url(
            self,
            client: S3Client,
            bucket_name: str,
            expires: int = 60,
    ) -> str | ErrorResponse:
        """
        Get presigned download URL of this object. The URL is reused until
        it expires.
        """
        with _PRESIGNED_LOCK:
            memo = self.__dict__.get(_PRESIGNED_ATTR)
        if (
                memo is not None and
                memo[0] == (bucket_name, expires) and
                not memo[1].has_expired()
        ):
            return memo[1].url

        response = client.get_presigned_url(bucket_name, self.key, expires)
        if response.is_error():
            return response
        with _PRESIGNED_LOCK:
            object.__setattr__(
                self, _PRESIGNED_ATTR, ((bucket_name, expires), response),
            )
        return response.url

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict."""
        return {
            "key": self.key,
            "filename": self.filename,
            "size": self.size,
            "last_modified": to_iso8601utc(self.last_modified),
            "etag": self.etag,
            "storage_class": self.storage_class,
            "is_multipart": self.is_multipart,
            "md5_checksum": self.md5_checksum,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class S3Prefix:
    """Common prefix i.e. folder of a delimited listing."""
    prefix: str

    def __post_init__(self):
        object.__setattr__(self, "prefix", self.prefix.rstrip("/") + "/")

    @property
    def folder_name(self) -> str:
        """Get last path component of prefix."""
        return basename(self.prefix)

    @property
    def parent_prefix(self) -> str:
        """Get prefix of parent folder; empty at root level."""
        path = self.prefix.rstrip("/")
        index = path.rfind("/")
        return path[:index+1] if index >= 0 else ""

    @property
    def is_root_level(self) -> bool:
        """Check whether prefix is a top level folder."""
        return self.prefix.count("/") <= 1

    @property
    def path_parts(self) -> list[dict[str, str]]:
        """Get folder names with their full prefixes, for breadcrumbs."""
        parts = []
        path = ""
        for name in self.prefix.split("/"):
            if name:
                path += name + "/"
                parts.append({"name": name, "path": path})
        return parts

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict."""
        return {
            "prefix": self.prefix,
            "folder_name": self.folder_name,
            "parent_prefix": self.parent_prefix,
            "is_root_level": self.is_root_level,
            "path_parts": self.path_parts,
        }
