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
Operation results. Every public S3Client operation returns one of these
response classes instead of raising; check is_error() before use.
"""

from __future__ import absolute_import, annotations

from datetime import datetime
from typing import Any, Callable, Optional

from .datatypes import S3Bucket, S3Object, S3Prefix
from .time import to_iso8601utc, utcnow

INVALID_PARAMETERS = "invalid_parameters"
TRANSPORT_ERROR = "transport_error"
REQUEST_FAILED = "request_failed"
S3_ERROR = "s3_error"
XML_PARSE_ERROR = "xml_parse_error"


class Response:
    """Base class of operation results."""

    def __init__(self, status_code: int = 200, raw_data: Any = None):
        self._status_code = status_code
        self._raw_data = raw_data

    @property
    def status_code(self) -> int:
        """Get HTTP status code; 0 if no HTTP response was received."""
        return self._status_code

    @property
    def raw_data(self) -> Any:
        """Get converted XML or other raw data of the response."""
        return self._raw_data

    def is_success(self) -> bool:
        """Check whether operation succeeded."""
        return True

    def is_error(self) -> bool:
        """Check whether operation failed."""
        return not self.is_success()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict."""
        return {"status_code": self._status_code, "success": self.is_success()}


class SuccessResponse(Response):
    """Result of an operation having nothing but status to report."""

    def __init__(
            self,
            message: str = "",
            status_code: int = 200,
            data: Optional[dict[str, Any]] = None,
    ):
        super().__init__(status_code, data)
        self._message = message
        self._data = data or {}

    @property
    def message(self) -> str:
        """Get message."""
        return self._message

    @property
    def data(self) -> dict[str, Any]:
        """Get additional result values."""
        return self._data

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update(message=self._message, data=dict(self._data))
        return result


class ErrorResponse(Response):
    """Result of a failed operation."""

    def __init__(
            self,
            message: str,
            code: str,
            status_code: int = 400,
            category: Optional[str] = None,
            data: Optional[dict[str, Any]] = None,
    ):
        super().__init__(status_code, data)
        self._message = message
        self._code = code
        self._category = category or code
        self._data = data or {}

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self._code!r}, "
            f"message={self._message!r}, status_code={self._status_code})"
        )

    @property
    def message(self) -> str:
        """Get error message."""
        return self._message

    @property
    def code(self) -> str:
        """
        Get error code; S3 error code like 'NoSuchBucket' for S3 errors,
        else one of invalid_parameters, transport_error, request_failed or
        xml_parse_error.
        """
        return self._code

    @property
    def http_status(self) -> int:
        """Get HTTP status code."""
        return self._status_code

    @property
    def category(self) -> str:
        """Get error category; s3_error for errors reported by S3 service."""
        return self._category

    @property
    def data(self) -> dict[str, Any]:
        """Get additional error details."""
        return self._data

    def is_success(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update(
            message=self._message,
            code=self._code,
            category=self._category,
            data=dict(self._data),
        )
        return result


class BucketsResponse(Response):
    """Result of list_buckets()."""

    def __init__(  # pylint: disable=too-many-positional-arguments
            self,
            buckets: list[S3Bucket],
            status_code: int = 200,
            owner: Optional[dict[str, str]] = None,
            truncated: bool = False,
            next_marker: str = "",
            raw_data: Any = None,
    ):
        super().__init__(status_code, raw_data)
        self._buckets = buckets
        self._owner = owner
        self._truncated = truncated
        self._next_marker = next_marker if truncated else ""

    @property
    def buckets(self) -> list[S3Bucket]:
        """Get buckets."""
        return self._buckets

    @property
    def owner(self) -> Optional[dict[str, str]]:
        """Get owner having 'id' and 'display_name'."""
        return self._owner

    @property
    def truncated(self) -> bool:
        """Check whether more buckets are available."""
        return self._truncated

    @property
    def next_marker(self) -> str:
        """Get marker of next page; empty if not truncated."""
        return self._next_marker

    @property
    def count(self) -> int:
        """Get number of buckets."""
        return len(self._buckets)

    def to_bucket_models(self) -> list[S3Bucket]:
        """Get buckets as models."""
        return list(self._buckets)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update(
            buckets=[bucket.to_dict() for bucket in self._buckets],
            owner=self._owner,
            count=self.count,
            truncated=self._truncated,
            next_marker=self._next_marker,
        )
        return result


class ObjectsResponse(Response):
    """Result of list_objects()."""

    def __init__(  # pylint: disable=too-many-positional-arguments
            self,
            objects: list[S3Object],
            prefixes: list[str],
            status_code: int = 200,
            truncated: bool = False,
            continuation_token: str = "",
            current_prefix: str = "",
            raw_data: Any = None,
            hidden_file_filter: Optional[Callable[[str, str], bool]] = None,
    ):
        super().__init__(status_code, raw_data)
        self._objects = objects
        self._prefixes = prefixes
        self._truncated = truncated
        self._continuation_token = continuation_token if truncated else ""
        self._current_prefix = current_prefix
        self._hidden_file_filter = hidden_file_filter

    @property
    def objects(self) -> list[S3Object]:
        """Get all listed objects, including hidden ones."""
        return self._objects

    @property
    def prefixes(self) -> list[str]:
        """Get common prefixes."""
        return self._prefixes

    @property
    def truncated(self) -> bool:
        """Check whether more objects are available."""
        return self._truncated

    @property
    def continuation_token(self) -> str:
        """Get continuation token of next page; empty if not truncated."""
        return self._continuation_token

    @property
    def current_prefix(self) -> str:
        """Get prefix listed."""
        return self._current_prefix

    @property
    def count(self) -> int:
        """Get number of objects and prefixes."""
        return len(self._objects) + len(self._prefixes)

    def to_object_models(self) -> list[S3Object]:
        """Get objects, leaving out folder markers and hidden files."""
        return [
            obj for obj in self._objects
            if not obj.should_be_excluded(
                self._current_prefix, self._hidden_file_filter,
            )
        ]

    def to_prefix_models(self) -> list[S3Prefix]:
        """Get common prefixes as models."""
        return [S3Prefix(prefix) for prefix in self._prefixes]

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update(
            objects=[obj.to_dict() for obj in self._objects],
            prefixes=list(self._prefixes),
            count=self.count,
            truncated=self._truncated,
            continuation_token=self._continuation_token,
            current_prefix=self._current_prefix,
        )
        return result


class ObjectResponse(Response):
    """Result of get_object() and head_object()."""

    def __init__(
            self,
            body: bytes,
            metadata: dict[str, Any],
            status_code: int = 200,
            raw_headers: Optional[dict[str, str]] = None,
    ):
        super().__init__(status_code, raw_headers)
        self._body = body
        self._metadata = metadata
        self._raw_headers = raw_headers or {}

    @property
    def body(self) -> bytes:
        """Get object content; empty for head_object()."""
        return self._body

    @property
    def metadata(self) -> dict[str, Any]:
        """
        Get metadata having content_type, content_length, etag,
        last_modified and user_metadata.
        """
        return self._metadata

    @property
    def raw_headers(self) -> dict[str, str]:
        """Get response headers."""
        return self._raw_headers

    @property
    def content_type(self) -> str:
        """Get content type."""
        return self._metadata.get("content_type", "")

    @property
    def content_length(self) -> int:
        """Get content length."""
        return self._metadata.get("content_length", 0)

    @property
    def etag(self) -> str:
        """Get ETag without quotes."""
        return self._metadata.get("etag", "")

    @property
    def last_modified(self) -> Optional[datetime]:
        """Get last modified time."""
        return self._metadata.get("last_modified")

    @property
    def user_metadata(self) -> dict[str, str]:
        """Get user metadata i.e. x-amz-meta-* headers without prefix."""
        return self._metadata.get("user_metadata", {})

    def to_object_model(self, key: str) -> S3Object:
        """Get object model of given key from response headers."""
        return S3Object.fromheaders(key, self._raw_headers)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        metadata = dict(self._metadata)
        metadata["last_modified"] = to_iso8601utc(self.last_modified)
        result.update(metadata=metadata, size=len(self._body))
        return result


class PresignedUrlResponse(Response):
    """Result of get_presigned_url() and get_presigned_upload_url()."""

    def __init__(self, url: str, expires_at: datetime):
        super().__init__(200)
        self._url = url
        self._expires_at = expires_at

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(expires_at={self._expires_at!r})"
        )

    @property
    def url(self) -> str:
        """Get presigned URL."""
        return self._url

    @property
    def expires_at(self) -> datetime:
        """Get expiry time of URL."""
        return self._expires_at

    def has_expired(self, now: Optional[datetime] = None) -> bool:
        """Check whether URL is expired."""
        return (now or utcnow()) >= self._expires_at

    def seconds_until_expiration(self, now: Optional[datetime] = None) -> int:
        """Get seconds left until URL expires; 0 if already expired."""
        return max(
            0, int((self._expires_at - (now or utcnow())).total_seconds()),
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update(
            url=self._url,
            expires_at=to_iso8601utc(self._expires_at),
        )
        return result
