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

# pylint: disable=too-many-public-methods

"""
Simple Storage Service (aka S3) client to list buckets and objects, read,
copy, rename and delete objects and to issue presigned URLs on S3
compatible services.
"""

from __future__ import absolute_import, annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterator, Optional, TextIO

from . import time, xml
from .cache import PresignedUrlCache
from .credentials import Credentials
from .datatypes import S3Object, S3Prefix
from .error import TransportError, XmlParseError
from .filters import HiddenFileFilter, basename
from .helpers import (check_bucket_name, decode_object_key,
                      encode_object_key, headers_to_strings, md5sum_hash,
                      redact_url)
from .http import HttpResponse, HttpTransport, Urllib3Transport
from .parsers import (error_from_response, parse_buckets,
                      parse_buckets_truncation, parse_common_prefixes,
                      parse_copy_object_result, parse_delete_result,
                      parse_error, parse_location, parse_objects,
                      parse_objects_truncation, parse_owner)
from .provider import Provider
from .responses import (INVALID_PARAMETERS, REQUEST_FAILED, S3_ERROR,
                        TRANSPORT_ERROR, XML_PARSE_ERROR, BucketsResponse,
                        ErrorResponse, ObjectResponse, ObjectsResponse,
                        PresignedUrlResponse, SuccessResponse)
from .signer import presign_url, sign_headers

DEFAULT_MAX_KEYS = 1000
DEFAULT_DOWNLOAD_EXPIRY = 60
DEFAULT_UPLOAD_EXPIRY = 15
MAX_EXPIRY = 7 * 24 * 60  # 7 days in minutes
MAX_BATCH_DELETE = 100

LOGGER = logging.getLogger(__name__)


def _invalid(message: str) -> ErrorResponse:
    return ErrorResponse(message, INVALID_PARAMETERS, 400)


def _check_bucket_names(*bucket_names: str) -> Optional[ErrorResponse]:
    """Get invalid_parameters error of first invalid bucket name, if any."""
    for bucket_name in bucket_names:
        try:
            check_bucket_name(bucket_name)
        except ValueError as exc:
            return _invalid(str(exc))
    return None


class S3Client:
    """
    Simple Storage Service (aka S3) client.

    Args:
        provider (Provider):
            Provider of the S3 compatible service.

        access_key (str):
            Access key (aka user ID) of your account in the S3 service.

        secret_key (str):
            Secret key (aka password) of your account in the S3 service.

        transport (Optional[HttpTransport], default=None):
            HTTP transport; Urllib3Transport is used if not given.

        hidden_file_filter (Optional[Callable[[str, str], bool]],
            default=None):
            Predicate of object key and current prefix telling whether
            the object is a hidden or system file.

        url_cache (Optional[PresignedUrlCache], default=None):
            Cache of presigned URLs.

    Notes:
        Operations never raise; they return ErrorResponse on failure.
        Blank access or secret key raises ValueError at construction.

    Example:
        >>> from s3lite import S3Client
        >>> from s3lite.provider import CloudflareR2Provider
        >>>
        >>> client = S3Client(
        ...     CloudflareR2Provider("ACCOUNT-ID"),
        ...     access_key="ACCESS-KEY",
        ...     secret_key="SECRET-KEY",
        ... )
        >>> response = client.list_objects("my-bucket", prefix="photos/")
        >>> if response.is_error():
        ...     print(response.code, response.message)
    """
    _trace_stream: Optional[TextIO]

    def __init__(  # pylint: disable=too-many-positional-arguments
            self,
            provider: Provider,
            access_key: str,
            secret_key: str,
            transport: Optional[HttpTransport] = None,
            hidden_file_filter: Optional[Callable[[str, str], bool]] = None,
            url_cache: Optional[PresignedUrlCache] = None,
    ):
        self._credentials = Credentials(access_key, secret_key)
        self._provider = provider
        self._transport = transport or Urllib3Transport()
        self._hidden_file_filter = hidden_file_filter or HiddenFileFilter()
        self._url_cache = url_cache
        self._trace_stream = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self._provider!r})"

    @property
    def provider(self) -> Provider:
        """Get provider."""
        return self._provider

    @property
    def hidden_file_filter(self) -> Callable[[str, str], bool]:
        """Get hidden file filter."""
        return self._hidden_file_filter

    def trace_on(self, stream: TextIO):
        """
        Enable http trace.

        Args:
            stream (TextIO):
                Stream for writing HTTP call tracing.

        Example:
            >>> client.trace_on(sys.stdout)
        """
        if not stream:
            raise ValueError('Input stream for trace output is invalid.')
        # Save new output stream.
        self._trace_stream = stream

    def trace_off(self):
        """Disable HTTP trace."""
        self._trace_stream = None

    def _trace_request(
            self,
            method: str,
            url: str,
            headers: dict[str, str],
    ):
        """Write request to trace stream."""
        if not self._trace_stream:
            return
        self._trace_stream.write("---------START-HTTP---------\n")
        self._trace_stream.write(f"{method} {redact_url(url)} HTTP/1.1\n")
        self._trace_stream.write(headers_to_strings(headers, titled_key=True))
        self._trace_stream.write("\n\n")

    def _trace_response(self, response: HttpResponse):
        """Write response to trace stream."""
        if not self._trace_stream:
            return
        self._trace_stream.write(f"HTTP/1.1 {response.status}\n")
        self._trace_stream.write(headers_to_strings(response.headers))
        self._trace_stream.write("\n")
        if "xml" in response.headers.get("content-type", "") and response.data:
            self._trace_stream.write("\n")
            self._trace_stream.write(
                response.data.decode(errors="replace"),
            )
            self._trace_stream.write("\n")
        self._trace_stream.write("----------END-HTTP----------\n")

    def _url_open(  # pylint: disable=too-many-positional-arguments
            self,
            method: str,
            bucket_name: str = "",
            object_key: str = "",
            query: Optional[dict[str, Any]] = None,
            body: Optional[bytes] = None,
            amz_headers: Optional[dict[str, str]] = None,
            headers: Optional[dict[str, str]] = None,
    ) -> HttpResponse:
        """
        Sign and send request; raise TransportError if it fails. Given
        headers are sent unsigned along with the signed ones.
        """
        date = time.utcnow().replace(microsecond=0)
        signed_headers = sign_headers(
            method,
            self._provider.host(bucket_name),
            self._provider.canonical_uri(bucket_name, object_key),
            query,
            self._credentials,
            self._provider.region,
            date,
            body,
            amz_headers,
        )
        headers = {**(headers or {}), **signed_headers}
        url = self._provider.request_url(bucket_name, object_key, query)
        self._trace_request(method, url, headers)
        try:
            response = self._transport.request(method, url, headers, body)
        except (TransportError, OSError) as exc:
            if self._trace_stream:
                self._trace_stream.write(f"{exc}\n")
                self._trace_stream.write("----------END-HTTP----------\n")
            if isinstance(exc, TransportError):
                raise
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc
        self._trace_response(response)
        return response

    def _execute(  # pylint: disable=too-many-positional-arguments
            self,
            method: str,
            default_message: str,
            bucket_name: str = "",
            object_key: str = "",
            query: Optional[dict[str, Any]] = None,
            amz_headers: Optional[dict[str, str]] = None,
            body: Optional[bytes] = None,
            headers: Optional[dict[str, str]] = None,
    ) -> HttpResponse | ErrorResponse:
        """
        Execute request and return successful response, or ErrorResponse
        of transport failure or non-2xx status.
        """
        try:
            response = self._url_open(
                method,
                bucket_name,
                object_key,
                query,
                body,
                amz_headers,
                headers,
            )
        except TransportError as exc:
            LOGGER.debug("%s %s failed; %s", method, bucket_name, exc)
            return ErrorResponse(str(exc), TRANSPORT_ERROR, 0)
        if 200 <= response.status < 300:
            return response
        if method == "HEAD":
            return ErrorResponse(
                default_message, REQUEST_FAILED, response.status,
            )
        return error_from_response(
            response.status, response.data, default_message,
        )

    @staticmethod
    def _parse(response: HttpResponse) -> dict | ErrorResponse:
        """Parse XML body of successful response."""
        try:
            return xml.fromstring(response.data)
        except XmlParseError as exc:
            return ErrorResponse(
                exc.message,
                XML_PARSE_ERROR,
                response.status,
                data={"xml_fragment": exc.fragment},
            )

    def list_buckets(
            self,
            max_keys: int = DEFAULT_MAX_KEYS,
            prefix: str = "",
            marker: str = "",
    ) -> BucketsResponse | ErrorResponse:
        """
        List information of all accessible buckets.

        Args:
            max_keys (int, default=1000):
                Maximum number of buckets to return.

            prefix (str, default=""):
                List buckets starting with this prefix.

            marker (str, default=""):
                Next marker of previous truncated listing.

        Returns:
            BucketsResponse | ErrorResponse:
                Buckets with owner and pagination marker.

        Example:
            >>> response = client.list_buckets()
            >>> for bucket in response.buckets:
            ...     print(bucket.name, bucket.creation_date)
        """
        query: dict[str, Any] = {}
        if max_keys != DEFAULT_MAX_KEYS:
            query["max-keys"] = max_keys
        if prefix:
            query["prefix"] = prefix
        if marker:
            query["marker"] = marker

        response = self._execute("GET", "Failed to list buckets", query=query)
        if isinstance(response, ErrorResponse):
            return response
        data = self._parse(response)
        if isinstance(data, ErrorResponse):
            return data

        truncated, next_marker = parse_buckets_truncation(data)
        return BucketsResponse(
            parse_buckets(data),
            response.status,
            parse_owner(data),
            truncated,
            next_marker,
            data,
        )

    def list_objects(  # pylint: disable=too-many-positional-arguments
            self,
            bucket_name: str,
            max_keys: int = DEFAULT_MAX_KEYS,
            prefix: str = "",
            delimiter: str = "/",
            continuation_token: str = "",
    ) -> ObjectsResponse | ErrorResponse:
        """
        List objects and common prefixes of a bucket using ListObjectsV2.

        Args:
            bucket_name (str):
                Name of the bucket.

            max_keys (int, default=1000):
                Maximum number of keys to return.

            prefix (str, default=""):
                List objects starting with this prefix.

            delimiter (str, default="/"):
                Delimiter grouping keys into common prefixes.

            continuation_token (str, default=""):
                Continuation token of previous truncated listing.

        Returns:
            ObjectsResponse | ErrorResponse:
                Objects, common prefixes and continuation token.

        Example:
            >>> response = client.list_objects("my-bucket", prefix="a/")
            >>> for obj in response.to_object_models():
            ...     print(obj.key, obj.size)
        """
        if not bucket_name:
            return _invalid("Bucket name is required")
        invalid = _check_bucket_names(bucket_name)
        if invalid:
            return invalid

        query: dict[str, Any] = {"list-type": "2"}
        if max_keys != DEFAULT_MAX_KEYS:
            query["max-keys"] = max_keys
        if prefix:
            query["prefix"] = prefix
        if delimiter:
            query["delimiter"] = delimiter
        if continuation_token:
            query["continuation-token"] = continuation_token

        response = self._execute(
            "GET", "Failed to list objects", bucket_name, query=query,
        )
        if isinstance(response, ErrorResponse):
            return response
        data = self._parse(response)
        if isinstance(data, ErrorResponse):
            return data

        truncated, next_token = parse_objects_truncation(data)
        return ObjectsResponse(
            parse_objects(data),
            parse_common_prefixes(data),
            response.status,
            truncated,
            next_token,
            prefix,
            data,
            self._hidden_file_filter,
        )

    @staticmethod
    def _object_metadata(response: HttpResponse) -> dict[str, Any]:
        """Get metadata of object from response headers."""
        headers = response.headers
        length = headers.get("content-length", "")
        return {
            "content_type": headers.get("content-type", ""),
            "content_length": int(length) if length.isdigit() else 0,
            "etag": headers.get("etag", "").strip('"'),
            "last_modified": time.parse_time(headers.get("last-modified")),
            "user_metadata": {
                key.lower()[len("x-amz-meta-"):]: value
                for key, value in headers.items()
                if key.lower().startswith("x-amz-meta-")
            },
        }

    def get_object(
            self,
            bucket_name: str,
            object_key: str,
    ) -> ObjectResponse | ErrorResponse:
        """
        Get data of an object.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_key (str):
                Object key in the bucket.

        Returns:
            ObjectResponse | ErrorResponse:
                Object content and metadata.

        Example:
            >>> response = client.get_object("my-bucket", "my-object")
            >>> if not response.is_error():
            ...     data = response.body
        """
        if not bucket_name or not object_key:
            return _invalid("Bucket and object key are required")
        invalid = _check_bucket_names(bucket_name)
        if invalid:
            return invalid

        response = self._execute(
            "GET", "Failed to retrieve object", bucket_name, object_key,
        )
        if isinstance(response, ErrorResponse):
            return response
        return ObjectResponse(
            response.data,
            self._object_metadata(response),
            response.status,
            dict(response.headers),
        )

    def head_object(
            self,
            bucket_name: str,
            object_key: str,
    ) -> ObjectResponse | ErrorResponse:
        """
        Get metadata of an object without its content.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_key (str):
                Object key in the bucket.

        Returns:
            ObjectResponse | ErrorResponse:
                Object metadata with empty body.

        Example:
            >>> response = client.head_object("my-bucket", "my-object")
            >>> obj = response.to_object_model("my-object")
        """
        if not bucket_name or not object_key:
            return _invalid("Bucket and object key are required")
        invalid = _check_bucket_names(bucket_name)
        if invalid:
            return invalid

        response = self._execute(
            "HEAD",
            "Failed to retrieve object metadata",
            bucket_name,
            object_key,
        )
        if isinstance(response, ErrorResponse):
            return response
        return ObjectResponse(
            b"",
            self._object_metadata(response),
            response.status,
            dict(response.headers),
        )

    def delete_object(
            self,
            bucket_name: str,
            object_key: str,
    ) -> SuccessResponse | ErrorResponse:
        """
        Remove an object.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_key (str):
                Object key in the bucket.

        Returns:
            SuccessResponse | ErrorResponse

        Example:
            >>> client.delete_object("my-bucket", "my-object")
        """
        if not bucket_name or not object_key:
            return _invalid("Bucket and object key are required")
        invalid = _check_bucket_names(bucket_name)
        if invalid:
            return invalid

        response = self._execute(
            "DELETE", "Failed to delete object", bucket_name, object_key,
        )
        if isinstance(response, ErrorResponse):
            return response
        filename = basename(object_key)
        return SuccessResponse(
            f'File "{filename}" deleted successfully',
            response.status,
            {"bucket": bucket_name, "key": object_key, "filename": filename},
        )

    def copy_object(
            self,
            source_bucket: str,
            source_key: str,
            target_bucket: str,
            target_key: str,
    ) -> SuccessResponse | ErrorResponse:
        """
        Create an object by server-side copying data from another object.

        Args:
            source_bucket (str):
                Name of the source bucket.

            source_key (str):
                Source object key.

            target_bucket (str):
                Name of the target bucket.

            target_key (str):
                Target object key.

        Returns:
            SuccessResponse | ErrorResponse:
                Data has ETag and last modified time of the copy when the
                service reports them.

        Example:
            >>> client.copy_object("src-bucket", "a.txt", "dst-bucket", "b.txt")
        """
        if not (source_bucket and source_key and target_bucket and target_key):
            return _invalid(
                "Source bucket, source key, target bucket, and target key "
                "are required",
            )
        invalid = _check_bucket_names(source_bucket, target_bucket)
        if invalid:
            return invalid

        source = f"{source_bucket}/{source_key}"
        target = f"{target_bucket}/{target_key}"
        response = self._execute(
            "PUT",
            f"Failed to copy object from {source} to {target}",
            target_bucket,
            target_key,
            amz_headers={
                "x-amz-copy-source": (
                    f"{source_bucket}/{encode_object_key(source_key)}"
                ),
            },
        )
        if isinstance(response, ErrorResponse):
            return response

        result: dict[str, Any] = {
            "source_bucket": source_bucket,
            "source_key": source_key,
            "target_bucket": target_bucket,
            "target_key": target_key,
        }
        message = f"Object copied from {source} to {target}"
        data = self._parse(response)
        if isinstance(data, ErrorResponse):
            # Copy is done even if the result document is unreadable.
            return SuccessResponse(message, response.status, result)

        # Copy may fail after 200 OK is sent; error is in the body then.
        error = parse_error(data)
        if error and "CopyObjectResult" not in data and "ETag" not in data:
            return ErrorResponse(
                error["message"] or f"Failed to copy object from {source}",
                error["code"],
                response.status,
                S3_ERROR,
                {"resource": error["resource"],
                 "request_id": error["request_id"]},
            )
        result.update(parse_copy_object_result(data))
        return SuccessResponse(message, response.status, result)

    def _presign(  # pylint: disable=too-many-positional-arguments
            self,
            method: str,
            bucket_name: str,
            object_key: str,
            expires: int,
            request_date: Optional[datetime] = None,
    ) -> PresignedUrlResponse | ErrorResponse:
        """Get presigned URL of given method expiring in minutes."""
        if not bucket_name or not object_key:
            return _invalid("Bucket and object key are required")
        invalid = _check_bucket_names(bucket_name)
        if invalid:
            return invalid
        if (
                isinstance(expires, bool) or not isinstance(expires, int) or
                not 1 <= expires <= MAX_EXPIRY
        ):
            return _invalid(
                f"Expiry must be between 1 and {MAX_EXPIRY} minutes",
            )

        use_cache = self._url_cache is not None and request_date is None
        if use_cache:
            cached = self._url_cache.get(  # type: ignore[union-attr]
                method, bucket_name, object_key, expires,
            )
            if cached:
                return cached

        date = (request_date or time.utcnow()).replace(microsecond=0)
        if not date.tzinfo:
            date = date.replace(tzinfo=timezone.utc)
        seconds = expires * 60
        url = presign_url(
            method,
            self._provider.scheme,
            self._provider.host(bucket_name),
            self._provider.canonical_uri(bucket_name, object_key),
            self._credentials,
            self._provider.region,
            date,
            seconds,
        )
        response = PresignedUrlResponse(url, date + timedelta(seconds=seconds))
        if use_cache:
            self._url_cache.put(  # type: ignore[union-attr]
                method, bucket_name, object_key, expires, response,
            )
        return response

    def get_presigned_url(
            self,
            bucket_name: str,
            object_key: str,
            expires: int = DEFAULT_DOWNLOAD_EXPIRY,
            request_date: Optional[datetime] = None,
    ) -> PresignedUrlResponse | ErrorResponse:
        """
        Get presigned URL of an object to download its data with expiry time.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_key (str):
                Object key in the bucket.

            expires (int, default=60):
                Expiry in minutes; 1 to 10080 (7 days).

            request_date (Optional[datetime], default=None):
                Request time instead of current time.

        Returns:
            PresignedUrlResponse | ErrorResponse

        Example:
            >>> response = client.get_presigned_url("my-bucket", "my-object")
            >>> print(response.url, response.expires_at)
        """
        return self._presign(
            "GET", bucket_name, object_key, expires, request_date,
        )

    def get_presigned_upload_url(
            self,
            bucket_name: str,
            object_key: str,
            expires: int = DEFAULT_UPLOAD_EXPIRY,
            request_date: Optional[datetime] = None,
    ) -> PresignedUrlResponse | ErrorResponse:
        """
        Get presigned URL of an object to upload data with expiry time.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_key (str):
                Object key in the bucket.

            expires (int, default=15):
                Expiry in minutes; 1 to 10080 (7 days).

            request_date (Optional[datetime], default=None):
                Request time instead of current time.

        Returns:
            PresignedUrlResponse | ErrorResponse

        Example:
            >>> response = client.get_presigned_upload_url(
            ...     "my-bucket", "my-object",
            ... )
            >>> urllib3.request("PUT", response.url, body=data)
        """
        return self._presign(
            "PUT", bucket_name, object_key, expires, request_date,
        )

    def get_object_model(
            self,
            bucket_name: str,
            object_key: str,
    ) -> S3Object | ErrorResponse:
        """Get object model of an object from its metadata."""
        response = self.head_object(bucket_name, object_key)
        if isinstance(response, ErrorResponse):
            return response
        return response.to_object_model(object_key)

    def object_exists(
            self,
            bucket_name: str,
            object_key: str,
    ) -> SuccessResponse | ErrorResponse:
        """
        Check whether an object exists.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_key (str):
                Object key in the bucket.

        Returns:
            SuccessResponse | ErrorResponse:
                Data has "exists" flag; status is 404 when the object does
                not exist. ErrorResponse is returned when existence cannot
                be determined.

        Example:
            >>> response = client.object_exists("my-bucket", "my-object")
            >>> if response.data.get("exists"):
            ...     print("found")
        """
        response = self.head_object(bucket_name, object_key)
        result: dict[str, Any] = {
            "bucket": bucket_name,
            "object_key": object_key,
            "method": "head_object",
        }
        if isinstance(response, ErrorResponse):
            if response.http_status != 404:
                return response
            result.update(exists=False, error_code=response.code)
            return SuccessResponse(
                f'Object "{object_key}" does not exist in bucket '
                f'"{bucket_name}"',
                404,
                result,
            )
        result.update(exists=True, metadata=response.metadata)
        return SuccessResponse(
            f'Object "{object_key}" exists in bucket "{bucket_name}"',
            response.status_code,
            result,
        )

    def bucket_exists(
            self,
            bucket_name: str,
    ) -> SuccessResponse | ErrorResponse:
        """
        Check whether a bucket exists.

        Args:
            bucket_name (str):
                Name of the bucket.

        Returns:
            SuccessResponse | ErrorResponse:
                Data has "exists" flag; status is 404 when the bucket does
                not exist.

        Example:
            >>> if client.bucket_exists("my-bucket").data.get("exists"):
            ...     print("my-bucket exists")
        """
        if not bucket_name:
            return _invalid("Bucket name is required")
        invalid = _check_bucket_names(bucket_name)
        if invalid:
            return invalid

        response = self._execute(
            "HEAD", "Failed to check bucket", bucket_name,
        )
        result: dict[str, Any] = {
            "bucket": bucket_name,
            "method": "head_bucket",
        }
        if isinstance(response, ErrorResponse):
            if response.http_status != 404:
                return response
            result.update(exists=False, error_code=response.code)
            return SuccessResponse(
                f'Bucket "{bucket_name}" does not exist', 404, result,
            )
        result.update(exists=True)
        return SuccessResponse(
            f'Bucket "{bucket_name}" exists', response.status, result,
        )

    def get_bucket_location(
            self,
            bucket_name: str,
    ) -> SuccessResponse | ErrorResponse:
        """
        Get region of a bucket.

        Args:
            bucket_name (str):
                Name of the bucket.

        Returns:
            SuccessResponse | ErrorResponse:
                Data has "bucket" and "location". Empty location constraint
                is reported as us-east-1.

        Example:
            >>> response = client.get_bucket_location("my-bucket")
            >>> print(response.data["location"])
        """
        if not bucket_name:
            return _invalid("Bucket name is required")
        invalid = _check_bucket_names(bucket_name)
        if invalid:
            return invalid

        response = self._execute(
            "GET",
            "Failed to get bucket location",
            bucket_name,
            query={"location": ""},
        )
        if isinstance(response, ErrorResponse):
            return response
        data = self._parse(response)
        if isinstance(data, ErrorResponse):
            return data

        return SuccessResponse(
            f'Bucket location retrieved for "{bucket_name}"',
            response.status,
            {
                "bucket": bucket_name,
                "location": parse_location(data) or self._provider.region,
            },
        )

    def get_objects_iterator(
            self,
            bucket_name: str,
            prefix: str = "",
            delimiter: str = "/",
            max_keys: int = DEFAULT_MAX_KEYS,
    ) -> Iterator[S3Object | S3Prefix]:
        """
        Iterate objects and common prefixes of a bucket, following
        continuation tokens until the listing is complete. Hidden files
        and folder markers are left out. Iteration stops at the first
        failed page.

        Args:
            bucket_name (str):
                Name of the bucket.

            prefix (str, default=""):
                List objects starting with this prefix.

            delimiter (str, default="/"):
                Delimiter grouping keys into common prefixes.

            max_keys (int, default=1000):
                Maximum number of keys to return per request.

        Returns:
            Iterator[S3Object | S3Prefix]

        Example:
            >>> for item in client.get_objects_iterator("my-bucket"):
            ...     print(item)
        """
        continuation_token = ""
        while True:
            response = self.list_objects(
                bucket_name, max_keys, prefix, delimiter, continuation_token,
            )
            if isinstance(response, ErrorResponse):
                LOGGER.warning(
                    "listing of bucket %s stopped; %s",
                    bucket_name, response.message,
                )
                return
            yield from response.to_object_models()
            yield from response.to_prefix_models()
            continuation_token = response.continuation_token
            if not response.truncated or not continuation_token:
                return

    def batch_delete_objects(
            self,
            bucket_name: str,
            object_keys: list[str],
    ) -> SuccessResponse | ErrorResponse:
        """
        Remove multiple objects in one request.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_keys (list[str]):
                Object keys to remove; at most 100.

        Returns:
            SuccessResponse | ErrorResponse:
                Data has total_requested, success_count, error_count,
                deleted_objects and failed_objects.

        Example:
            >>> response = client.batch_delete_objects(
            ...     "my-bucket", ["a.txt", "b.txt"],
            ... )
            >>> for error in response.data["failed_objects"]:
            ...     print(error["key"], error["code"])
        """
        if not bucket_name:
            return _invalid("Bucket name is required")
        if not object_keys:
            return _invalid("At least one object key is required")
        if len(object_keys) > MAX_BATCH_DELETE:
            return ErrorResponse(
                f"Maximum {MAX_BATCH_DELETE} objects can be deleted per "
                "batch request",
                "too_many_objects",
                400,
                INVALID_PARAMETERS,
            )
        invalid = _check_bucket_names(bucket_name)
        if invalid:
            return invalid

        element = xml.Element("Delete", "")
        xml.SubElement(element, "Quiet", "false")
        for object_key in object_keys:
            xml.SubElement(
                xml.SubElement(element, "Object"),
                "Key",
                decode_object_key(object_key),
            )
        body = xml.getbytes(element)
        response = self._execute(
            "POST",
            "Failed to batch delete objects",
            bucket_name,
            query={"delete": ""},
            body=body,
            headers={
                "Content-Type": "application/xml",
                "Content-MD5": str(md5sum_hash(body)),
            },
        )
        if isinstance(response, ErrorResponse):
            if response.http_status == 400 and response.code == "MalformedXML":
                return ErrorResponse(
                    "Batch delete XML format not supported by provider",
                    "batch_delete_not_supported",
                    400,
                    S3_ERROR,
                )
            return response
        data = self._parse(response)
        if isinstance(data, ErrorResponse):
            return data

        deleted, errors = parse_delete_result(data)
        return SuccessResponse(
            f"Batch delete completed: {len(deleted)} succeeded, "
            f"{len(errors)} failed",
            response.status,
            {
                "total_requested": len(object_keys),
                "success_count": len(deleted),
                "error_count": len(errors),
                "deleted_objects": deleted,
                "failed_objects": errors,
            },
        )

    def rename_object(
            self,
            bucket_name: str,
            source_key: str,
            target_key: str,
    ) -> SuccessResponse | ErrorResponse:
        """
        Rename an object by copying it to the target key and removing the
        source. A 207 response tells the copy is done but the source could
        not be removed.

        Args:
            bucket_name (str):
                Name of the bucket.

            source_key (str):
                Current object key.

            target_key (str):
                New object key.

        Returns:
            SuccessResponse | ErrorResponse

        Example:
            >>> client.rename_object("my-bucket", "old.txt", "new.txt")
        """
        copied = self.copy_object(
            bucket_name, source_key, bucket_name, target_key,
        )
        if isinstance(copied, ErrorResponse):
            return ErrorResponse(
                "Failed to copy object during rename operation",
                "rename_error",
                400,
                copied.category,
                {"copy_error": copied.to_dict()},
            )

        keys = {"source_key": source_key, "target_key": target_key}
        deleted = self.delete_object(bucket_name, source_key)
        if isinstance(deleted, ErrorResponse):
            LOGGER.debug(
                "source %s of rename is not deleted; %s",
                source_key, deleted.message,
            )
            return SuccessResponse(
                "Object renamed, but failed to delete the original",
                207,
                dict(
                    keys,
                    warning=(
                        "The object was copied but the original could not "
                        "be deleted"
                    ),
                ),
            )
        return SuccessResponse("Object renamed successfully", 200, keys)
