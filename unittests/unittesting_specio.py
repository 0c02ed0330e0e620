import unittest

from libpy4.py4Data import RawField
from libpy4.py4SpecIO import (
    parse_spec_string,
    parse_spec_output,
    find_field_value,
    change_status_to_pending,
    fields_to_spec_text,
    fields_to_record,
    convert_indexed_fields_to_spec_format,
    change_indexed_fields
)

'''  [$File: //dev/p4dispatch/unittests/unittesting_specio.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

change_record = {
    'Change': 'new',
    'Client': 'bob_ws',
    'User': 'bob',
    'Status': 'new',
    'Description': '<enter description here>\n',
    'Files1': '//depot/main/b.c\t# add',
    'Files0': '//depot/main/a.c\t# edit',
    'Files10': '//depot/main/k.c\t# edit',
    'Jobs0': 'job000123'
}

class TestSpecIO(unittest.TestCase):
    def testParseSpecString(self):
        fields = parse_spec_string(change_record, change_indexed_fields)
        ''' indexed values are gathered in numeric order
        '''
        self.assertEqual(
            find_field_value(fields, 'Files'),
            [
                '//depot/main/a.c\t# edit',
                '//depot/main/b.c\t# add',
                '//depot/main/k.c\t# edit'
            ]
        )
        self.assertEqual(find_field_value(fields, 'Jobs'), ['job000123'])
        self.assertEqual(find_field_value(fields, 'Description'), ['<enter description here>'])
        self.assertEqual(find_field_value(fields, 'Client'), ['bob_ws'])
        self.assertIsNone(find_field_value(fields, 'Date'))

    def testEscapedDescription(self):
        fields = parse_spec_string({'Description': 'line one\\n\\nline two\\n'})
        self.assertEqual(find_field_value(fields, 'Description'), ['line one', 'line two'])

    def testMalformedInput(self):
        self.assertEqual(parse_spec_string(None), [])
        self.assertEqual(parse_spec_string('Change: new'), [])
        self.assertEqual(parse_spec_string([]), [])

    def testStatusNewBecomesPending(self):
        fields = change_status_to_pending(parse_spec_string(change_record, change_indexed_fields))
        self.assertEqual(find_field_value(fields, 'Status'), ['pending'])
        ''' anything else is left alone
        '''
        fields = change_status_to_pending([RawField('Status', ['submitted'])])
        self.assertEqual(find_field_value(fields, 'Status'), ['submitted'])

    def testParseSpecOutput(self):
        text = (
            '# A Perforce Job Specification.\n'
            '#\n'
            '\n'
            'Job:\tjob000123\n'
            '\n'
            'Status:\topen\n'
            '\n'
            'Description:\n'
            '\tline one\n'
            '\tline two\n'
        )
        fields = parse_spec_output(text)
        self.assertEqual(find_field_value(fields, 'Job'), ['job000123'])
        self.assertEqual(find_field_value(fields, 'Status'), ['open'])
        self.assertEqual(find_field_value(fields, 'Description'), ['line one', 'line two'])
        self.assertEqual(parse_spec_output(None), [])

    def testFieldsToSpecText(self):
        fields = [
            RawField('Change', ['new']),
            RawField('Files', ['//depot/a.c\t# edit', '//depot/b.c\t# add'])
        ]
        self.assertEqual(
            fields_to_spec_text(fields),
            'Change:\n\tnew\n\nFiles:\n\t//depot/a.c\t# edit\n\t//depot/b.c\t# add'
        )

    def testRoundTrip(self):
        ''' fields -> flattened record -> fields
        '''
        fields = [
            RawField('Change', ['new']),
            RawField('Description', ['line one', 'line two']),
            RawField('Files', ['//depot/a.c', '//depot/b.c'])
        ]
        record = fields_to_record(fields, change_indexed_fields)
        self.assertEqual(record.Files0, '//depot/a.c')
        self.assertEqual(record.Files1, '//depot/b.c')
        decoded = parse_spec_string(record, change_indexed_fields)
        for field in fields:
            self.assertEqual(find_field_value(decoded, field.name), field.value)

    def testConvertIndexedFields(self):
        converted = convert_indexed_fields_to_spec_format(
            'Change:\tnew\n\nFiles0:\t//depot/a.c\n\nFiles1:\t//depot/b.c'
        )
        self.assertEqual(converted, 'Change:\tnew\n\nFiles:\n\t//depot/a.c\n\t//depot/b.c\n')

    def testConvertDropsInvalidFields(self):
        text = (
            'Change:\tnew\n'
            '\n'
            'extraTag0:\tsomething\n'
            '\tcontinued\n'
            '\n'
            'Description:\n'
            '\tFix bug\n'
        )
        converted = convert_indexed_fields_to_spec_format(text)
        self.assertNotIn('extraTag0', converted)
        self.assertNotIn('continued', converted)
        self.assertIn('Description:\n\tFix bug', converted)
        self.assertNotIn('\n\n\n', converted)

    def testConvertIsIdempotent(self):
        text = (
            'Change:\tnew\n'
            '\n'
            'Description:\n'
            '\tFix bug\n'
            '\n'
            'Jobs0:\tjob000123\n'
            '\n'
            'Files0:\t//depot/a.c\t# edit\n'
            '\n'
            'Files1:\t//depot/b.c\t# add\n'
        )
        once = convert_indexed_fields_to_spec_format(text)
        twice = convert_indexed_fields_to_spec_format(once)
        self.assertEqual(once, twice)
        self.assertIn('Files:\n\t//depot/a.c\t# edit\n\t//depot/b.c\t# add', once)
        self.assertIn('Jobs:\n\tjob000123', once)

    def testConvertedTextParsesBackExactly(self):
        converted = convert_indexed_fields_to_spec_format(
            'Change:\tnew\n\nDescription:\n\tFix bug\n\nJobs0:\tj1\n\nJobs1:\tj2\n'
        )
        fields = parse_spec_output(converted)
        self.assertEqual(find_field_value(fields, 'Change'), ['new'])
        self.assertEqual(find_field_value(fields, 'Description'), ['Fix bug'])
        self.assertEqual(find_field_value(fields, 'Jobs'), ['j1', 'j2'])

if (__name__ == '__main__'):
    (
        loader,
        suite
    ) = \
        (
            unittest.TestLoader(),
            unittest.TestSuite()
        )
    for item in (
            loader.loadTestsFromTestCase(TestSpecIO),
    ):
        suite.addTests(item)
    unittest.TextTestRunner(verbosity=2).run(suite)
