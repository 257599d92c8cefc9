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

import base64
import hashlib
from datetime import datetime, timezone
from unittest import TestCase, mock

from s3lite import S3Client
from s3lite.provider import GenericProvider

from .s3lite_mocks import MockResponse, MockTransport

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
DELETE_BODY = (
    b'<Delete><Quiet>false</Quiet>'
    b'<Object><Key>a.txt</Key></Object>'
    b'<Object><Key>dir/b c.txt</Key></Object>'
    b'<Object><Key>locked.txt</Key></Object>'
    b'</Delete>'
)


def _client(transport):
    return S3Client(
        GenericProvider('localhost:9000'),
        access_key='my-access-key',
        secret_key='my-secret-key',
        transport=transport,
    )


@mock.patch('s3lite.time.utcnow', mock.Mock(return_value=NOW))
class BatchDeleteObjectsTest(TestCase):
    def test_batch_delete_works(self):
        transport = MockTransport()
        transport.mock_add_request(
            MockResponse(
                'POST',
                'https://localhost:9000/bucket?delete=',
                {
                    'Content-Type': 'application/xml',
                    'Content-MD5': base64.b64encode(
                        hashlib.md5(DELETE_BODY).digest(),
                    ).decode(),
                    'X-Amz-Content-SHA256': hashlib.sha256(
                        DELETE_BODY,
                    ).hexdigest(),
                },
                200,
                content=(
                    b'<DeleteResult '
                    b'xmlns="http://s3.amazonaws.com/doc/2006-03-01/">'
                    b'<Deleted><Key>a.txt</Key></Deleted>'
                    b'<Deleted><Key>dir/b c.txt</Key>'
                    b'<VersionId>v2</VersionId></Deleted>'
                    b'<Error><Key>locked.txt</Key><Code>AccessDenied</Code>'
                    b'<Message>Access Denied</Message></Error>'
                    b'</DeleteResult>'
                ),
            ),
        )
        response = _client(transport).batch_delete_objects(
            'bucket', ['a.txt', 'dir/b%20c.txt', 'locked.txt'],
        )
        self.assertTrue(response.is_success())
        self.assertEqual(
            'Batch delete completed: 2 succeeded, 1 failed', response.message,
        )
        self.assertEqual(3, response.data['total_requested'])
        self.assertEqual(2, response.data['success_count'])
        self.assertEqual(1, response.data['error_count'])
        self.assertEqual(
            [
                {'key': 'a.txt', 'version_id': None},
                {'key': 'dir/b c.txt', 'version_id': 'v2'},
            ],
            response.data['deleted_objects'],
        )
        self.assertEqual(
            [{'key': 'locked.txt', 'code': 'AccessDenied',
              'message': 'Access Denied'}],
            response.data['failed_objects'],
        )
        _, _, headers, body = transport.calls[0]
        self.assertEqual(DELETE_BODY, body)
        self.assertNotIn('content-md5', headers['Authorization'])

    def test_error_without_code(self):
        transport = MockTransport()
        transport.mock_add_request(
            MockResponse(
                'POST', 'https://localhost:9000/bucket?delete=', {}, 200,
                content=(
                    b'<DeleteResult><Error><Key>a.txt</Key></Error>'
                    b'</DeleteResult>'
                ),
            ),
        )
        response = _client(transport).batch_delete_objects(
            'bucket', ['a.txt'],
        )
        self.assertEqual(
            [{'key': 'a.txt', 'code': 'Unknown', 'message': 'Unknown error'}],
            response.data['failed_objects'],
        )
        self.assertEqual(0, response.data['success_count'])

    def test_arguments_are_required(self):
        transport = MockTransport()
        client = _client(transport)
        for bucket_name, object_keys in [('', ['a']), ('bucket', [])]:
            with self.subTest(bucket_name=bucket_name):
                response = client.batch_delete_objects(
                    bucket_name, object_keys,
                )
                self.assertEqual('invalid_parameters', response.code)
        self.assertEqual([], transport.calls)

    def test_too_many_objects(self):
        transport = MockTransport()
        response = _client(transport).batch_delete_objects(
            'bucket', [f'{index}.txt' for index in range(101)],
        )
        self.assertEqual('too_many_objects', response.code)
        self.assertEqual(400, response.http_status)
        self.assertEqual([], transport.calls)

    def test_malformed_xml_is_not_supported(self):
        transport = MockTransport()
        transport.mock_add_request(
            MockResponse(
                'POST', 'https://localhost:9000/bucket?delete=', {}, 400,
                content=(
                    b'<Error><Code>MalformedXML</Code>'
                    b'<Message>The XML you provided was not well-formed'
                    b'</Message></Error>'
                ),
            ),
        )
        response = _client(transport).batch_delete_objects(
            'bucket', ['a.txt'],
        )
        self.assertEqual('batch_delete_not_supported', response.code)
        self.assertEqual(400, response.http_status)

    def test_access_denied(self):
        transport = MockTransport()
        transport.mock_add_request(
            MockResponse(
                'POST', 'https://localhost:9000/bucket?delete=', {}, 403,
                content=(
                    b'<Error><Code>AccessDenied</Code>'
                    b'<Message>Access Denied</Message></Error>'
                ),
            ),
        )
        response = _client(transport).batch_delete_objects(
            'bucket', ['a.txt'],
        )
        self.assertEqual('AccessDenied', response.code)
        self.assertEqual(403, response.http_status)
