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
Tolerant XML decoding. S3 compatible services differ in namespaces and
wrapping of their responses, so XML is converted into nested dicts that
can be searched by dotted path or by structure.

A converted element is a dict where
  * child tags, with namespace removed, are keys; repeated tags become a
    list of dicts,
  * leaf text is held under "value",
  * attributes are held under "@attributes", and leaf text alongside
    attributes under "@text",
  * an empty leaf is an empty dict.

Request documents such as <Delete> are built with Element and SubElement
and serialized by getbytes.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Iterable, Optional
from xml.etree import ElementTree as ET

from .error import XmlParseError

MAX_DEPTH = 100
_S3_NAMESPACE = "http://s3.amazonaws.com/doc/2006-03-01/"

LOGGER = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    """Tag or attribute name without namespace."""
    end = tag.find("}")
    return tag[end+1:] if tag.startswith("{") and end > 0 else tag


def todict(element: ET.Element, depth: int = 0) -> dict:
    """Convert ElementTree.Element to dict."""
    if depth >= MAX_DEPTH:
        LOGGER.debug(
            "maximum XML depth %d reached at <%s>",
            MAX_DEPTH, _local_name(element.tag),
        )
        return {"value": "ERROR: Maximum recursion depth reached"}

    result: dict[str, Any] = {}
    if element.attrib:
        result["@attributes"] = {
            _local_name(key): value for key, value in element.attrib.items()
        }

    children = list(element)
    if not children:
        text = element.text or ""
        if text:
            result["@text" if result else "value"] = text
        return result

    for child in children:
        key = _local_name(child.tag)
        value = todict(child, depth + 1)
        if key not in result:
            result[key] = value
        elif isinstance(result[key], list):
            result[key].append(value)
        else:
            result[key] = [result[key], value]
    return result


def fromstring(xmlstring: str | bytes) -> dict:
    """
    Parse XML string into dict keyed by children of root element. Raises
    XmlParseError on empty or malformed data.
    """
    if not xmlstring or not xmlstring.strip():
        raise XmlParseError("Empty response received", xmlstring)
    try:
        root = ET.fromstring(xmlstring)
    except ET.ParseError as exc:
        raise XmlParseError(str(exc), xmlstring) from exc
    return todict(root)


def Element(  # pylint: disable=invalid-name
        tag: str,
        namespace: str = _S3_NAMESPACE,
) -> ET.Element:
    """Create ElementTree.Element with tag and namespace."""
    return ET.Element(tag, {"xmlns": namespace} if namespace else {})


def SubElement(  # pylint: disable=invalid-name
        parent: ET.Element,
        tag: str,
        value: Optional[str] = None,
) -> ET.Element:
    """Create ElementTree.SubElement on parent with tag and text."""
    element = ET.SubElement(parent, tag)
    if value is not None:
        element.text = value
    return element


def getbytes(element: ET.Element) -> bytes:
    """Convert ElementTree.Element to bytes."""
    with io.BytesIO() as data:
        ET.ElementTree(element).write(
            data,
            encoding=None,
            xml_declaration=False,
        )
        return data.getvalue()


def getpath(data: Any, path: str) -> Any:
    """
    Get value at dotted path. When a list is found on the way, its first
    entry is followed. Returns None if path does not exist.
    """
    node = data
    for token in path.split("."):
        if isinstance(node, list):
            node = node[0] if node else None
        if not isinstance(node, dict) or token not in node:
            return None
        node = node[token]
    return node


def text(node: Any, default: Optional[str] = None) -> Optional[str]:
    """Get text of converted leaf element."""
    if isinstance(node, list):
        node = node[0] if node else None
    if node is None:
        return default
    if isinstance(node, str):
        return node
    if isinstance(node, dict):
        if "value" in node:
            return node["value"]
        if "@text" in node:
            return node["@text"]
        if not any(not key.startswith("@") for key in node):
            return ""
    return default


def findtext(
        data: Any,
        path: str,
        default: Optional[str] = None,
) -> Optional[str]:
    """Get text at dotted path."""
    return text(getpath(data, path), default)


def aslist(node: Any) -> list:
    """Normalize single and repeated elements into a list of dicts."""
    if node is None:
        return []
    if isinstance(node, list):
        return [item for item in node if isinstance(item, dict)]
    return [node] if isinstance(node, dict) else []


def search(
        data: Any,
        fields: Iterable[str],
        depth: int = 0,
) -> list[dict]:
    """
    Search recursively for every dict having all given fields. Matched
    dicts are not searched further.
    """
    fields = tuple(fields)
    if depth >= MAX_DEPTH:
        return []
    if isinstance(data, list):
        result = []
        for item in data:
            result.extend(search(item, fields, depth + 1))
        return result
    if not isinstance(data, dict):
        return []
    if all(field in data for field in fields):
        return [data]
    result = []
    for key, value in data.items():
        if not key.startswith("@"):
            result.extend(search(value, fields, depth + 1))
    return result


def find_value(data: Any, key: str, depth: int = 0) -> Any:
    """
    Find value of given key anywhere in converted XML, depth first. First
    match is returned, or None if key is not found.
    """
    if depth >= MAX_DEPTH:
        return None
    if isinstance(data, list):
        for item in data:
            value = find_value(item, key, depth + 1)
            if value is not None:
                return value
        return None
    if not isinstance(data, dict):
        return None
    if key in data:
        return data[key]
    for name, value in data.items():
        if not name.startswith("@"):
            value = find_value(value, key, depth + 1)
            if value is not None:
                return value
    return None
