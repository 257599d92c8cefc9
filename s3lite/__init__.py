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
s3lite - SigV4 client library for Amazon S3 Compatible Cloud Storage

    >>> from s3lite import S3Client
    >>> from s3lite.provider import GenericProvider
    >>> client = S3Client(
    ...     GenericProvider("play.min.io"),
    ...     access_key="Q3AM3UQ867SPQQA43P2F",
    ...     secret_key="zuf+tfteSlswRu7BJ86wekitnifILbZam1KYY3TG",
    ... )
    >>> response = client.list_buckets()
    >>> for bucket in response.buckets:
    ...     print(bucket.name, bucket.creation_date)

:license: Apache 2.0, see LICENSE for more details.
"""

__title__ = "s3lite"
__author__ = "s3lite authors"
__version__ = "1.0.0"
__license__ = "Apache 2.0"

# pylint: disable=unused-import,useless-import-alias
from .api import S3Client as S3Client
from .cache import PresignedUrlCache as PresignedUrlCache
from .datatypes import S3Bucket as S3Bucket
from .datatypes import S3Object as S3Object
from .datatypes import S3Prefix as S3Prefix
from .filters import HiddenFileFilter as HiddenFileFilter
from .responses import BucketsResponse as BucketsResponse
from .responses import ErrorResponse as ErrorResponse
from .responses import ObjectResponse as ObjectResponse
from .responses import ObjectsResponse as ObjectsResponse
from .responses import PresignedUrlResponse as PresignedUrlResponse
from .responses import SuccessResponse as SuccessResponse
