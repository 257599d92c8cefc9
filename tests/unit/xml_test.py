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

from unittest import TestCase

from s3lite import xml
from s3lite.error import XmlParseError


class FromStringTest(TestCase):
    def test_namespace_is_stripped(self):
        data = xml.fromstring(
            '<ListAllMyBucketsResult '
            'xmlns="http://s3.amazonaws.com/doc/2006-03-01/">'
            '<Owner><ID>id</ID></Owner>'
            '</ListAllMyBucketsResult>'
        )
        self.assertEqual(data, {'Owner': {'ID': {'value': 'id'}}})

    def test_repeated_tags_become_list(self):
        data = xml.fromstring(
            '<R><Item><N>a</N></Item><Item><N>b</N></Item>'
            '<Item><N>c</N></Item></R>'
        )
        self.assertEqual(
            data['Item'],
            [{'N': {'value': 'a'}}, {'N': {'value': 'b'}},
             {'N': {'value': 'c'}}],
        )

    def test_empty_leaf(self):
        self.assertEqual(xml.fromstring('<R><Empty/></R>'), {'Empty': {}})

    def test_attributes(self):
        data = xml.fromstring(
            '<R xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">'
            '<Grantee xsi:type="CanonicalUser">id</Grantee>'
            '<Flag enabled="true"/></R>'
        )
        self.assertEqual(
            data['Grantee'],
            {'@attributes': {'type': 'CanonicalUser'}, '@text': 'id'},
        )
        self.assertEqual(data['Flag'], {'@attributes': {'enabled': 'true'}})

    def test_malformed(self):
        for body in ['', '   ', 'not xml', '<R><Open></R>', b'\x00\x01']:
            with self.subTest(body=body):
                with self.assertRaises(XmlParseError):
                    xml.fromstring(body)

    def test_parse_error_keeps_fragment(self):
        body = '<html>' + 'x' * 300
        with self.assertRaises(XmlParseError) as context:
            xml.fromstring(body)
        self.assertEqual(context.exception.fragment, body[:200] + '...')

    def test_depth_is_bounded(self):
        depth = xml.MAX_DEPTH + 10
        body = '<a>' * depth + 'deep' + '</a>' * depth
        data = xml.fromstring(body)
        node = data
        for _ in range(xml.MAX_DEPTH):
            node = node['a']
        self.assertEqual(
            node, {'value': 'ERROR: Maximum recursion depth reached'},
        )


class PathTest(TestCase):
    data = xml.fromstring(
        '<R><A><B><C>c1</C></B><B><C>c2</C></B></A>'
        '<D>d</D><E/></R>'
    )

    def test_getpath(self):
        self.assertEqual(xml.getpath(self.data, 'D'), {'value': 'd'})
        self.assertEqual(xml.findtext(self.data, 'A.B.C'), 'c1')
        self.assertIsNone(xml.getpath(self.data, 'A.X'))
        self.assertIsNone(xml.getpath(self.data, 'D.value.x'))

    def test_findtext(self):
        self.assertEqual(xml.findtext(self.data, 'D'), 'd')
        self.assertEqual(xml.findtext(self.data, 'E'), '')
        self.assertEqual(xml.findtext(self.data, 'Z', 'default'), 'default')

    def test_aslist(self):
        self.assertEqual(len(xml.aslist(xml.getpath(self.data, 'A.B'))), 2)
        self.assertEqual(xml.aslist(xml.getpath(self.data, 'D')),
                         [{'value': 'd'}])
        self.assertEqual(xml.aslist(None), [])

    def test_search(self):
        found = xml.search(self.data, ['C'])
        self.assertEqual(
            [xml.findtext(item, 'C') for item in found], ['c1', 'c2'],
        )
        self.assertEqual(xml.search(self.data, ['Missing']), [])

    def test_find_value(self):
        self.assertEqual(xml.find_value(self.data, 'C'), {'value': 'c1'})
        self.assertEqual(xml.find_value(self.data, 'D'), {'value': 'd'})
        self.assertEqual(xml.find_value(self.data, 'E'), {})
        self.assertIsNone(xml.find_value(self.data, 'Missing'))
        self.assertIsNone(xml.find_value('text', 'C'))


class BuildTest(TestCase):
    def test_getbytes(self):
        element = xml.Element('Delete')
        xml.SubElement(element, 'Quiet', 'true')
        xml.SubElement(xml.SubElement(element, 'Object'), 'Key', 'a&b.txt')
        self.assertEqual(
            xml.getbytes(element),
            b'<Delete xmlns="http://s3.amazonaws.com/doc/2006-03-01/">'
            b'<Quiet>true</Quiet><Object><Key>a&amp;b.txt</Key></Object>'
            b'</Delete>',
        )

    def test_without_namespace(self):
        self.assertEqual(xml.getbytes(xml.Element('A', '')), b'<A />')
