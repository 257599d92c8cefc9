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

from datetime import datetime, timezone
from unittest import TestCase, mock

from s3lite import S3Client
from s3lite.provider import GenericProvider

from .s3lite_mocks import MockResponse, MockTransport

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _client(transport, region='us-east-1'):
    return S3Client(
        GenericProvider('localhost:9000', region),
        access_key='my-access-key',
        secret_key='my-secret-key',
        transport=transport,
    )


@mock.patch('s3lite.time.utcnow', mock.Mock(return_value=NOW))
class BucketExistsTest(TestCase):
    def test_bucket_exists(self):
        transport = MockTransport()
        transport.mock_add_request(
            MockResponse('HEAD', 'https://localhost:9000/bucket', {}, 200),
        )
        response = _client(transport).bucket_exists('bucket')
        self.assertTrue(response.is_success())
        self.assertEqual('Bucket "bucket" exists', response.message)
        self.assertTrue(response.data['exists'])

    def test_bucket_does_not_exist(self):
        transport = MockTransport()
        transport.mock_add_request(
            MockResponse('HEAD', 'https://localhost:9000/missing', {}, 404),
        )
        response = _client(transport).bucket_exists('missing')
        self.assertTrue(response.is_success())
        self.assertEqual(404, response.status_code)
        self.assertEqual('Bucket "missing" does not exist', response.message)
        self.assertFalse(response.data['exists'])

    def test_access_denied(self):
        transport = MockTransport()
        transport.mock_add_request(
            MockResponse('HEAD', 'https://localhost:9000/bucket', {}, 403),
        )
        response = _client(transport).bucket_exists('bucket')
        self.assertTrue(response.is_error())
        self.assertEqual('request_failed', response.code)

    def test_invalid_bucket_name(self):
        transport = MockTransport()
        for bucket_name in ['', 'bad bucket']:
            with self.subTest(bucket_name=bucket_name):
                response = _client(transport).bucket_exists(bucket_name)
                self.assertEqual('invalid_parameters', response.code)
        self.assertEqual([], transport.calls)


@mock.patch('s3lite.time.utcnow', mock.Mock(return_value=NOW))
class GetBucketLocationTest(TestCase):
    def _location(self, content, region='us-east-1'):
        transport = MockTransport()
        transport.mock_add_request(
            MockResponse(
                'GET', 'https://localhost:9000/bucket?location=', {}, 200,
                content=content,
            ),
        )
        return _client(transport, region).get_bucket_location('bucket')

    def test_location(self):
        response = self._location(
            b'<LocationConstraint '
            b'xmlns="http://s3.amazonaws.com/doc/2006-03-01/">'
            b'eu-west-1</LocationConstraint>',
        )
        self.assertTrue(response.is_success())
        self.assertEqual(
            'Bucket location retrieved for "bucket"', response.message,
        )
        self.assertEqual(
            {'bucket': 'bucket', 'location': 'eu-west-1'}, response.data,
        )

    def test_empty_location_is_us_east_1(self):
        response = self._location(
            b'<LocationConstraint '
            b'xmlns="http://s3.amazonaws.com/doc/2006-03-01/"/>',
            region='auto',
        )
        self.assertEqual('us-east-1', response.data['location'])

    def test_wrapped_location(self):
        response = self._location(
            b'<Response><LocationConstraint>ap-south-1</LocationConstraint>'
            b'</Response>',
        )
        self.assertEqual('ap-south-1', response.data['location'])

    def test_missing_location_is_provider_region(self):
        response = self._location(
            b'<Response><Other>x</Other></Response>', region='eu-central-1',
        )
        self.assertEqual('eu-central-1', response.data['location'])

    def test_no_such_bucket(self):
        transport = MockTransport()
        transport.mock_add_request(
            MockResponse(
                'GET', 'https://localhost:9000/bucket?location=', {}, 404,
                content=b'<Error><Code>NoSuchBucket</Code></Error>',
            ),
        )
        response = _client(transport).get_bucket_location('bucket')
        self.assertEqual('NoSuchBucket', response.code)
        self.assertEqual(
            'Failed to get bucket location', response.message,
        )
