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

"""Thread-safe cache of presigned URLs."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional

from .responses import PresignedUrlResponse
from .time import utcnow

CacheKey = tuple[str, str, str, int]


class PresignedUrlCache:
    """
    Cache of presigned URLs keyed by method, bucket, object key and expiry
    minutes. A cached URL is handed out while more than min_remaining
    seconds of its lifetime are left.

    Args:
        min_remaining (int, default=30):
            Seconds of lifetime a cached URL must have left to be reused.

        max_entries (int, default=1000):
            Entries kept; expired entries are evicted first, then the
            oldest.
    """

    def __init__(self, min_remaining: int = 30, max_entries: int = 1000):
        if min_remaining < 0:
            raise ValueError("min_remaining must not be negative")
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._min_remaining = min_remaining
        self._max_entries = max_entries
        self._lock = threading.Lock()
        self._entries: dict[CacheKey, PresignedUrlResponse] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(
            self,
            method: str,
            bucket_name: str,
            object_key: str,
            expires: int,
            now: Optional[datetime] = None,
    ) -> Optional[PresignedUrlResponse]:
        """Get cached URL if it is not about to expire."""
        key = (method, bucket_name, object_key, expires)
        now = now or utcnow()
        with self._lock:
            response = self._entries.get(key)
            if response is None:
                return None
            if response.seconds_until_expiration(now) <= self._min_remaining:
                del self._entries[key]
                return None
            return response

    def put(
            self,
            method: str,
            bucket_name: str,
            object_key: str,
            expires: int,
            response: PresignedUrlResponse,
    ):
        """Cache given URL."""
        key = (method, bucket_name, object_key, expires)
        with self._lock:
            self._entries.pop(key, None)
            if len(self._entries) >= self._max_entries:
                self._evict()
            self._entries[key] = response

    def _evict(self):
        """Remove expired entries, or the oldest one if none expired."""
        now = utcnow()
        expired = [
            key for key, response in self._entries.items()
            if response.has_expired(now)
        ]
        for key in expired:
            del self._entries[key]
        if not expired:
            del self._entries[next(iter(self._entries))]

    def clear(self):
        """Remove all entries."""
        with self._lock:
            self._entries.clear()
