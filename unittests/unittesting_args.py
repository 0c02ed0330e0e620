import os
import unittest

from libpy4.py4Args import (
    P4File,
    flag_mapper,
    make_flag,
    expanse_path,
    rev_or_label_as_suffix,
    split_into_chunks
)
from libcmd.cmdTypes import ChangelistStatus

'''  [$File: //dev/p4dispatch/unittests/unittesting_args.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

submit_args = flag_mapper(
    [
        ('c', 'chnum'),
        ('d', 'description')
    ],
    lastarg='file'
)

class TestArgs(unittest.TestCase):
    def testSubmitScenario(self):
        args = submit_args({'chnum': '12', 'description': 'Fix bug'})
        self.assertEqual(args, ['-c', '12', '-d', 'Fix bug'])

    def testOmittedFlags(self):
        ''' None, False & '' never make it to the argument vector
        '''
        mapper = flag_mapper(
            [
                ('a', 'unchanged'),
                ('c', 'chnum'),
                ('d', 'description')
            ],
            lastarg='paths'
        )
        self.assertEqual(mapper({'unchanged': False, 'chnum': None, 'description': ''}), [])
        self.assertEqual(mapper({'unchanged': True}), ['-a'])
        self.assertEqual(mapper({}), [])

    def testMakeFlag(self):
        self.assertEqual(make_flag('m', 10), ['-m', '10'])
        self.assertEqual(make_flag('s', ChangelistStatus.PENDING), ['-s', 'pending'])
        self.assertEqual(make_flag('f', True), ['-f'])
        self.assertEqual(make_flag('f', False), [])

    def testFixedPrefix(self):
        mapper = flag_mapper([('m', 'max_changelists')], lastarg='files', fixedprefix=['-l'])
        self.assertEqual(mapper({'max_changelists': 3}), ['-l', '-m', '3'])

    def testDepotFiles(self):
        mapper = flag_mapper([], lastarg='files')
        args = mapper(
            {
                'files': [
                    P4File('//depot/main/a.c', 3),
                    P4File('//depot/main/b.c', 'have'),
                    P4File('//depot/main/c.c', 'rel_1.0'),
                    P4File('//depot/main/d.c', '@=12'),
                    '//depot/main/e.c',
                    None
                ]
            }
        )
        self.assertEqual(
            args,
            [
                '//depot/main/a.c#3',
                '//depot/main/b.c#have',
                '//depot/main/c.c@rel_1.0',
                '//depot/main/d.c@=12',
                '//depot/main/e.c'
            ]
        )

    def testLocalFileIsEscaped(self):
        local = P4File('/tmp/work/a@b#c%d*.c', 4)
        self.assertFalse(local.is_depot())
        self.assertEqual(
            local.to_arg(),
            f"{os.path.abspath('/tmp/work')}/a%40b%23c%25d%2A.c#4"
        )
        self.assertEqual(expanse_path('100%'), '100%25')

    def testIgnoreRevisionFragments(self):
        mapper = flag_mapper([('c', 'chnum')], lastarg='files', ignore_revision_fragments=True)
        args = mapper({'chnum': '7', 'files': [P4File('//depot/main/a.c', 3)]})
        self.assertEqual(args, ['-c', '7', '//depot/main/a.c'])

    def testFormattedLastarg(self):
        mapper = flag_mapper([], lastarg='chnums', fixedprefix=['-s'], lastarg_is_formatted=True)
        self.assertEqual(mapper({'chnums': ['12', '', '13']}), ['-s', '12', '13'])
        self.assertEqual(mapper({'chnums': 14}), ['-s', '14'])

    def testRevisionSuffix(self):
        self.assertEqual(rev_or_label_as_suffix(None), '')
        self.assertEqual(rev_or_label_as_suffix('none'), '#none')
        self.assertEqual(rev_or_label_as_suffix('#head'), '#head')
        self.assertEqual(rev_or_label_as_suffix('my_label'), '@my_label')

    def testSplitIntoChunks(self):
        paths = [f'//depot/{idx}.c' for idx in range(70)]
        chunks = split_into_chunks(paths)
        self.assertEqual([len(chunk) for chunk in chunks], [32, 32, 6])
        self.assertEqual(chunks(2)(-1), '//depot/69.c')
        self.assertEqual(split_into_chunks([]), [])

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
            loader.loadTestsFromTestCase(TestArgs),
    ):
        suite.addTests(item)
    unittest.TextTestRunner(verbosity=2).run(suite)
