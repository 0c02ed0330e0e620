import copy
import unittest
from datetime import datetime

from libdlg import (
    DLGDateTime,
    Storage,
    Lst,
    Flatten,
    walk_indexed,
    itemgrouper,
    decode_bytes,
    DLGControl
)
from libpy4.py4Data import P4Data, P4Error, Raw
from libconnect.conResource import P4Resource

'''  [$File: //dev/p4dispatch/unittests/unittesting_dlglibs.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

class TestDLG(unittest.TestCase):
    def testDateTime(self):
        ''' /libdlg/dlgDateTime/DLGDateTime
        '''
        oDateTime = DLGDateTime()                                                   # DLGDateTime instance

        ''' to_datetime from ...
        '''
        self.assertEqual(oDateTime.to_datetime(2019, 8, 19), datetime(2019, 8, 19))
        self.assertEqual(oDateTime.to_datetime(*[2019, 6, 9]), datetime(2019, 6, 9))
        self.assertEqual(oDateTime.to_datetime('2019/8/19'), datetime(2019, 8, 19))
        self.assertEqual(oDateTime.to_datetime('2019-8-19'), datetime(2019, 8, 19))
        self.assertEqual(
            oDateTime.to_datetime('1547856000'),
            datetime.fromtimestamp(1547856000)
        )
        self.assertEqual(
            oDateTime.to_datetime(1547856000.0),
            datetime.fromtimestamp(1547856000)
        )
        self.assertIsNone(oDateTime.to_datetime('not a date'))

        ''' to_p4date
        '''
        self.assertEqual(oDateTime.to_p4date(2019, 8, 19), '2019/08/19 00:00:00')
        self.assertEqual(oDateTime.to_p4date('2019-8-19', datetype='date'), '2019/08/19')

        ''' utc
        '''
        oUTC = DLGDateTime(utc=True)
        self.assertEqual(oUTC.to_p4date('0'), '1970/01/01 00:00:00')

    def testEpoch(self):
        oDateTime = DLGDateTime()
        self.assertTrue(oDateTime.is_epoch('1547856000'))
        self.assertTrue(oDateTime.is_epoch(1547856000))
        self.assertFalse(oDateTime.is_epoch(True))
        self.assertFalse(oDateTime.is_epoch('2019/08/19'))
        self.assertEqual(oDateTime.to_epoch('1547856000'), 1547856000)

    def testCopyKeepsSubclassFields(self):
        ''' subclasses with their own __init__ copy field for field
        '''
        envelope = P4Data(records=[Raw('Change 421 created.')], error=P4Error('a warning', severity=2))
        clone = copy.copy(envelope)
        self.assertIsInstance(clone, P4Data)
        self.assertEqual(clone.records, ['Change 421 created.'])
        self.assertEqual(clone.error.message, 'a warning')
        self.assertIsNot(clone, envelope)
        oResource = P4Resource(path='/tmp', user='bob', port='anastasia.local:1777')
        oClone = copy.copy(oResource)
        self.assertIsInstance(oClone, P4Resource)
        self.assertEqual((oClone.path, oClone.user), ('/tmp', 'bob'))
        self.assertEqual(oClone.global_args(), oResource.global_args())
        record = Storage({'change': '421'})
        self.assertEqual(copy.copy(record), record)

    def testStorage(self):
        record = Storage({'change': '421', 'User': 'bob'})
        ''' attributes, case insensitive, None when missing
        '''
        self.assertEqual(record.change, '421')
        self.assertEqual(record.user, 'bob')
        self.assertIsNone(record.client)
        self.assertIsNone(record['client'])
        ''' merge never lets None overwrite a value
        '''
        record.merge({'change': None, 'client': 'bob_ws'})
        self.assertEqual(record.change, '421')
        self.assertEqual(record.client, 'bob_ws')
        record.delete('client')
        self.assertNotIn('client', record)

    def testLst(self):
        args = Lst(['-c', '12', '', None])
        self.assertEqual(args(1), '12')
        self.assertIsNone(args(10))
        self.assertEqual(args(10, 'default'), 'default')
        self.assertEqual(args.clean(), ['-c', '12'])
        ''' clean works on a copy
        '''
        self.assertEqual(len(args), 4)
        merged = Lst(['a']).merge(['b', 'c'], 'd')
        self.assertEqual(merged, ['a', 'b', 'c', 'd'])
        self.assertEqual(Lst(['a', 'b', 'c']).diff(['b']), ['a', 'c'])

    def testFlatten(self):
        output = {
            'Jobs1': 'job000456',
            'Jobs0': 'job000123',
            'Change': '421',
            'Files10': '//depot/k.c',
            'Files2': '//depot/c.c'
        }
        oFlat = Flatten(output).reduce()
        ''' numeric order, not lexicographic
        '''
        self.assertEqual(oFlat.Jobs, ['job000123', 'job000456'])
        self.assertEqual(oFlat.Files, ['//depot/c.c', '//depot/k.c'])
        self.assertEqual(oFlat.Change, '421')

        expanded = Flatten({'file': [['a', 'b']], 'how': ['copy into']}).expand()
        self.assertEqual(expanded['file0,0'], 'a')
        self.assertEqual(expanded['file0,1'], 'b')
        self.assertEqual(expanded['how0'], 'copy into')

    def testWalkIndexed(self):
        ''' the walk stops at the first gap
        '''
        record = {'depotFile0': 'a', 'depotFile1': 'b', 'depotFile3': 'd'}
        self.assertEqual(list(walk_indexed(record, 'depotFile')), [0, 1])
        nested = {'file0,0': 'a', 'file0,1': 'b', 'file1,0': 'c'}
        self.assertEqual(list(walk_indexed(nested, 'file', prefix='0,')), [0, 1])
        self.assertEqual(list(walk_indexed({}, 'rev')), [])

    def testItemGrouper(self):
        groups = list(itemgrouper(2, ['a', 'b', 'c']))
        self.assertEqual(groups, [['a', 'b'], ['c']])

    def testDecodeBytes(self):
        decoded = decode_bytes({b'code': b'stat', b'depotFile': b'//depot/a.c'})
        self.assertEqual(decoded.depotFile, '//depot/a.c')
        self.assertEqual(decoded.code, 'stat')
        ''' values are text, even when they contain NUL bytes
        '''
        self.assertEqual(decode_bytes({b'data': b'N\x00ot marshal'}).data, 'N\x00ot marshal')

    def testControl(self):
        ''' levels below the threshold go nowhere
        '''
        oControl = DLGControl(loggername='p4dispatch.unittests.control', loglevel='ERROR')
        self.assertEqual(oControl.loginfo, oControl.logcollector)
        self.assertNotEqual(oControl.logerror, oControl.logcollector)

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
            loader.loadTestsFromTestCase(TestDLG),
    ):
        suite.addTests(item)
    unittest.TextTestRunner(verbosity=2).run(suite)
