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
Extraction of buckets, objects, pagination and errors from converted XML
responses. Providers differ in wrapping and namespaces, so well known
paths are tried first and a structural search is the fallback.
"""

from __future__ import absolute_import, annotations

from typing import Any, Optional, Sequence

from . import xml
from .datatypes import S3Bucket, S3Object
from .error import XmlParseError
from .responses import REQUEST_FAILED, S3_ERROR, ErrorResponse
from .time import parse_time

_BUCKET_PATHS = ("Buckets.Bucket", "ListAllMyBucketsResult.Buckets.Bucket")
_OWNER_PATHS = ("Owner", "ListAllMyBucketsResult.Owner")
_BUCKETS_TRUNCATED_PATHS = ("IsTruncated", "ListAllMyBucketsResult.IsTruncated")
_NEXT_MARKER_PATHS = (
    "NextMarker",
    "ListAllMyBucketsResult.NextMarker",
    "ContinuationToken",
    "ListAllMyBucketsResult.ContinuationToken",
)
_OBJECTS_ROOTS = ("ListObjectsV2Result", "ListBucketResult")


def _first(data: Any, paths: Sequence[str]) -> Any:
    """Get first non-empty value of given paths."""
    for path in paths:
        value = xml.getpath(data, path)
        if value:
            return value
    return None


def _is_true(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("true", "1")


def parse_owner(data: dict) -> Optional[dict[str, str]]:
    """Get owner of bucket listing."""
    owner = _first(data, _OWNER_PATHS)
    if not owner:
        return None
    return {
        "id": xml.findtext(owner, "ID", "") or "",
        "display_name": xml.findtext(owner, "DisplayName", "") or "",
    }


def parse_buckets(data: dict) -> list[S3Bucket]:
    """Get buckets of bucket listing."""
    entries = _first(data, _BUCKET_PATHS) or xml.find_value(data, "Bucket")
    if entries:
        return [
            S3Bucket.fromdict(entry) for entry in xml.aslist(entries)
            if "Name" in entry
        ]
    return [
        S3Bucket.fromdict(entry)
        for entry in xml.search(data, ("Name", "CreationDate"))
    ]


def parse_buckets_truncation(data: dict) -> tuple[bool, str]:
    """Get truncated flag and next marker of bucket listing."""
    truncated = _first(data, _BUCKETS_TRUNCATED_PATHS)
    if truncated is None:
        truncated = xml.find_value(data, "IsTruncated")
    if not _is_true(xml.text(truncated)):
        return False, ""
    marker = _first(data, _NEXT_MARKER_PATHS)
    if marker is None:
        marker = (
            xml.find_value(data, "NextMarker") or
            xml.find_value(data, "ContinuationToken")
        )
    return True, xml.text(marker, "") or ""


def _objects_root(data: dict) -> dict:
    """Get ListObjectsV2Result element whether wrapped or not."""
    for name in _OBJECTS_ROOTS:
        value = data.get(name)
        if isinstance(value, dict):
            return value
    return data


def parse_objects(data: dict) -> list[S3Object]:
    """Get objects of object listing."""
    root = _objects_root(data)
    if "Contents" in root:
        entries = xml.aslist(root["Contents"])
    else:
        entries = [
            entry for entry in xml.search(root, ("Key", "Size"))
            if "Prefix" not in entry
        ]
    return [S3Object.fromdict(entry) for entry in entries if "Key" in entry]


def parse_common_prefixes(data: dict) -> list[str]:
    """Get common prefixes of object listing."""
    root = _objects_root(data)
    entries = root.get("CommonPrefixes")
    if entries is None:
        entries = xml.find_value(root, "CommonPrefixes")
    prefixes = []
    for entry in xml.aslist(entries):
        prefix = xml.findtext(entry, "Prefix")
        if prefix:
            prefixes.append(prefix)
    return prefixes


def parse_objects_truncation(data: dict) -> tuple[bool, str]:
    """Get truncated flag and next continuation token of object listing."""
    root = _objects_root(data)
    truncated = root.get("IsTruncated")
    if truncated is None:
        truncated = xml.find_value(root, "IsTruncated")
    if not _is_true(xml.text(truncated)):
        return False, ""
    token = root.get("NextContinuationToken")
    if token is None:
        token = xml.find_value(root, "NextContinuationToken")
    return True, xml.text(token, "") or ""


def parse_error(data: dict) -> Optional[dict[str, str]]:
    """
    Get Code, Message, Resource and RequestId of error document; root
    level <Error> and <Error> wrapped in another element are accepted.
    """
    error = xml.getpath(data, "Error")
    if not isinstance(error, dict):
        error = data if ("Code" in data or "Message" in data) else None
    if error is None:
        return None
    return {
        "code": xml.findtext(error, "Code") or "unknown_error",
        "message": xml.findtext(error, "Message") or "",
        "resource": xml.findtext(error, "Resource") or "",
        "request_id": xml.findtext(error, "RequestId") or "",
    }


def parse_copy_object_result(data: dict) -> dict[str, Any]:
    """Get ETag and LastModified of CopyObjectResult."""
    root = data.get("CopyObjectResult")
    root = root if isinstance(root, dict) else data
    return {
        "etag": (xml.findtext(root, "ETag", "") or "").strip('"'),
        "last_modified": parse_time(xml.findtext(root, "LastModified")),
    }


def parse_delete_result(data: dict) -> tuple[list[dict], list[dict]]:
    """Get deleted objects and per-object errors of DeleteResult."""
    root = data.get("DeleteResult")
    root = root if isinstance(root, dict) else data
    deleted = [
        {
            "key": xml.findtext(entry, "Key", "") or "",
            "version_id": xml.findtext(entry, "VersionId"),
        }
        for entry in xml.aslist(xml.find_value(root, "Deleted"))
        if "Key" in entry
    ]
    errors = [
        {
            "key": xml.findtext(entry, "Key", "") or "",
            "code": xml.findtext(entry, "Code") or "Unknown",
            "message": xml.findtext(entry, "Message") or "Unknown error",
        }
        for entry in xml.aslist(xml.find_value(root, "Error"))
        if "Key" in entry
    ]
    return deleted, errors


def parse_location(data: dict) -> Optional[str]:
    """
    Get region of LocationConstraint; empty constraint means us-east-1.
    The constraint is usually the root element itself. None is returned
    if the document has no LocationConstraint.
    """
    location = data.get("LocationConstraint")
    if location is None:
        location = xml.find_value(data, "LocationConstraint")
    value = xml.text(data if location is None else location)
    if value is None:
        return None
    return value or "us-east-1"


def error_from_response(
        status: int,
        body: Optional[bytes | str],
        default_message: str,
) -> ErrorResponse:
    """
    Build ErrorResponse of non-2xx response; S3 error document in body
    gives code and message, otherwise it is reported as request_failed.
    """
    error = None
    if body:
        try:
            error = parse_error(xml.fromstring(body))
        except XmlParseError:
            error = None
    if not error:
        return ErrorResponse(default_message, REQUEST_FAILED, status)
    return ErrorResponse(
        error["message"] or default_message,
        error["code"],
        status,
        S3_ERROR,
        {"resource": error["resource"], "request_id": error["request_id"]},
    )
