import os
import sys
import stat
import shutil
import marshal
import tempfile
import threading
import unittest
from types import ModuleType
from unittest import mock

from libdlg.dlgStore import Lst
from libdlg.dlgControl import DLGControl
from libpy4.py4Data import P4Error, Py4Request, is_structured, is_raw
from libpy4.py4Service import P4Service
from libconnect.conResource import P4Resource
from libconnect.conStrategy import (
    normalize_record,
    merge_errors,
    E_WARN,
    E_FAILED
)
from libconnect.conCLI import CommandLineStrategy
from libconnect.conP4Python import P4PythonStrategy

'''  [$File: //dev/p4dispatch/unittests/unittesting_strategies.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' a stand-in `p4` executable: it answers `<command>.out` on stdout,
    `<command>.err` on stderr & exits with `<command>.exit` (0 if absent),
    all read from its own directory. It writes its argv & whatever it
    got on stdin next to itself.
'''
fake_p4_source = '''\
import os
import sys

here = os.path.dirname(os.path.abspath(__file__))
args = sys.argv[1:]
command = args[1] if (args[0] == '-G') else args[0]
with open(os.path.join(here, 'argv.txt'), 'w') as oFile:
    oFile.write('\\n'.join(args))
with open(os.path.join(here, 'stdin.txt'), 'wb') as oFile:
    oFile.write(sys.stdin.buffer.read())

def emit(extension, stream):
    path = os.path.join(here, command + extension)
    if (os.path.exists(path)):
        with open(path, 'rb') as oFile:
            stream.write(oFile.read())
        stream.flush()

emit('.out', sys.stdout.buffer)
emit('.err', sys.stderr.buffer)
exitpath = os.path.join(here, command + '.exit')
if (os.path.exists(exitpath)):
    with open(exitpath) as oFile:
        sys.exit(int(oFile.read()))
'''

def marshalled(*records):
    ''' records as `p4 -G` writes them (marshal version 0, bytes keys & values)
    '''
    return b''.join(
        marshal.dumps(
            {
                key.encode('utf8'): value.encode('utf8') if (isinstance(value, str)) else value
                for (key, value) in record.items()
            },
            0
        ) for record in records
    )

def quiet_logger():
    return DLGControl(loggername='p4dispatch.unittests.strategies', loglevel='CRITICAL')

class FakeP4Executable(object):
    def __init__(self):
        self.tmpdir = tempfile.mkdtemp(prefix='p4dispatch_')
        self.path = os.path.join(self.tmpdir, 'p4')
        with open(self.path, 'w') as oFile:
            oFile.write(f'#!{sys.executable}\n' + fake_p4_source)
        os.chmod(self.path, os.stat(self.path).st_mode | stat.S_IEXEC)

    def answer(self, command, out=None, err=None, exitcode=None):
        for (extension, content) in (
                ('.out', out),
                ('.err', err)
        ):
            if (content is not None):
                with open(os.path.join(self.tmpdir, command + extension), 'wb') as oFile:
                    oFile.write(content)
        if (exitcode is not None):
            with open(os.path.join(self.tmpdir, command + '.exit'), 'w') as oFile:
                oFile.write(str(exitcode))

    def argv(self):
        with open(os.path.join(self.tmpdir, 'argv.txt')) as oFile:
            return oFile.read().split('\n')

    def stdin(self):
        with open(os.path.join(self.tmpdir, 'stdin.txt'), 'rb') as oFile:
            return oFile.read()

    def resource(self):
        return P4Resource(path=self.tmpdir, command=self.path)

    def cleanup(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

@unittest.skipIf(os.name == 'nt', 'the stand-in p4 relies on a #! line')
class TestCommandLineStrategy(unittest.TestCase):
    def setUp(self):
        self.oP4 = FakeP4Executable()
        self.oStrategy = CommandLineStrategy(logger=quiet_logger())

    def tearDown(self):
        self.oP4.cleanup()

    def testTaggedRecords(self):
        self.oP4.answer(
            'fstat',
            out=marshalled(
                {'code': 'stat', 'depotFile': '//depot/a.c', 'headRev': '3'},
                {'code': 'info', 'data': 'one file\n', 'level': 0},
                {'code': 'error', 'data': '//depot/b.c - no such file(s).\n', 'severity': 2, 'generic': 17}
            )
        )
        data = self.oStrategy.run(
            self.oP4.resource(),
            Py4Request(command='fstat', args=('//depot/a.c', '//depot/b.c'))
        )
        self.assertEqual(self.oP4.argv(), ['-G', 'fstat', '//depot/a.c', '//depot/b.c'])
        (stat_record, info_record) = data.records
        self.assertTrue(is_structured(stat_record))
        self.assertEqual(stat_record.depotFile, '//depot/a.c')
        self.assertNotIn('code', stat_record)
        self.assertTrue(is_raw(info_record))
        self.assertEqual(info_record, 'one file')
        self.assertEqual(data.error.message, '//depot/b.c - no such file(s).')
        self.assertEqual((data.error.severity, data.error.code), (2, 17))

    def testTextPayloadKeepsNulBytes(self):
        ''' `data` values are text, never unmarshalled a second time
        '''
        self.oP4.answer(
            'print',
            out=marshalled(
                {'code': 'stat', 'depotFile': '//depot/a.txt', 'rev': '1'},
                {'code': 'text', 'data': 'Nothing to see\x00here\n'},
                {'code': 'text', 'data': 'T\x00F\x00i\n'}
            )
        )
        data = self.oStrategy.run(self.oP4.resource(), Py4Request(command='print', args=('//depot/a.txt',)))
        self.assertEqual(data.text, 'Nothing to see\x00here\nT\x00F\x00i\n')
        self.assertIsNone(data.binary)
        self.assertEqual(len(data.records), 1)

    def testBinaryPayload(self):
        self.oP4.answer(
            'print',
            out=marshalled(
                {'code': 'stat', 'depotFile': '//depot/logo.png'},
                {'code': 'binary', 'data': b'\x89PNG\x00\x01'},
                {'code': 'binary', 'data': b'\x02'}
            )
        )
        data = self.oStrategy.run(self.oP4.resource(), Py4Request(command='print', args=('//depot/logo.png',)))
        self.assertEqual(data.binary, b'\x89PNG\x00\x01\x02')
        self.assertIsNone(data.text)

    def testInputRunsUntagged(self):
        self.oP4.answer('change', out=b'Change 377 created.\n')
        data = self.oStrategy.run(
            self.oP4.resource(),
            Py4Request(command='change', args=('-i',), input='Change:\tnew\n')
        )
        self.assertEqual(self.oP4.argv(), ['change', '-i'])
        self.assertEqual(self.oP4.stdin(), b'Change:\tnew\n')
        self.assertEqual(data.records, ['Change 377 created.'])
        self.assertTrue(is_raw(data.records(0)))
        self.assertIsNone(data.error)

    def testUntaggedCommand(self):
        self.oP4.answer('set', out=b'P4CONFIG=.p4config (set)\n')
        data = self.oStrategy.run(self.oP4.resource(), Py4Request(command='set', args=('-q', 'P4CONFIG')))
        self.assertEqual(self.oP4.argv(), ['set', '-q', 'P4CONFIG'])
        self.assertEqual(data.rawtext(), 'P4CONFIG=.p4config (set)')

    def testStderrBecomesError(self):
        self.oP4.answer(
            'info',
            err=b'Perforce client error:\n\tConnect to server failed; check $P4PORT.\n',
            exitcode=1
        )
        data = self.oStrategy.run(self.oP4.resource(), Py4Request(command='info'))
        self.assertIn('Connect to server failed', data.error.message)
        self.assertEqual(data.error.severity, E_FAILED)

    def testExitStatusWithoutStderr(self):
        self.oP4.answer('login', exitcode=1)
        data = self.oStrategy.run(self.oP4.resource(), Py4Request(command='login', args=('-s',)))
        self.assertEqual(data.error.message, 'login exited with status 1')
        self.assertEqual(data.records, [])

    def testMissingExecutableRaises(self):
        ''' a strategy failure, not an error envelope
        '''
        oResource = P4Resource(path=self.oP4.tmpdir, command=os.path.join(self.oP4.tmpdir, 'nope'))
        with self.assertRaises(OSError):
            self.oStrategy.run(oResource, Py4Request(command='info'))

class TestRecordDecoding(unittest.TestCase):
    def testLoadRecords(self):
        oStrategy = CommandLineStrategy()
        data = oStrategy.load_records(
            marshalled(
                {'code': 'stat', 'change': '421', 'desc': 'Fix bug\n'},
                {'code': 'error', 'data': 'first warning\n', 'severity': 2, 'generic': 17},
                {'code': 'error', 'data': 'then a failure\n', 'severity': 3, 'generic': 22}
            )
        )
        self.assertEqual(data.records(0).change, '421')
        self.assertEqual(data.error.message, 'first warning\nthen a failure')
        self.assertEqual((data.error.severity, data.error.code), (3, 22))
        self.assertEqual(oStrategy.load_records(b'').records, [])

    def testNormalizeFlattensLists(self):
        record = normalize_record(
            {
                b'depotFile': [b'//depot/a.c', b'//depot/b.c'],
                b'change': b'12'
            }
        )
        self.assertEqual(record.change, '12')
        self.assertEqual((record.depotFile0, record.depotFile1), ('//depot/a.c', '//depot/b.c'))
        self.assertNotIn('depotFile', record)

    def testNormalizeFlattensNestedLists(self):
        ''' as P4Python returns `filelog` integrations
        '''
        record = normalize_record(
            {
                'depotFile': '//depot/a.c',
                'rev': ['2', '1'],
                'file': [['//depot/b.c', '//depot/c.c']],
                'how': [['copy into', 'edit from']]
            }
        )
        self.assertEqual(record['file0,0'], '//depot/b.c')
        self.assertEqual(record['file0,1'], '//depot/c.c')
        self.assertEqual(record['how0,1'], 'edit from')
        self.assertEqual((record.rev0, record.rev1), ('2', '1'))
        self.assertEqual(record.depotFile, '//depot/a.c')

    def testMergeErrors(self):
        merged = merge_errors(
            [
                None,
                P4Error('a warning', severity=E_WARN, code=17),
                P4Error('a failure\n', severity=E_FAILED, code=22),
                P4Error('no severity')
            ]
        )
        self.assertEqual(merged.message, 'a warning\na failure\nno severity')
        self.assertEqual((merged.severity, merged.code), (E_FAILED, 22))
        self.assertIsNone(merge_errors([]))
        self.assertIsNone(merge_errors([None]))
        self.assertIsNone(merge_errors([P4Error('unknown')]).severity)

class StubMessage(object):
    def __init__(self, text, severity, generic):
        (
            self.text,
            self.severity,
            self.generic
        ) = \
            (
                text,
                severity,
                generic
            )

    def __str__(self):
        return self.text

def stub_p4_module(
        results=None,
        messages=None,
        errors=None,
        warnings=None,
        connect_error=None,
        run_error=None
):
    ''' a `P4` module whose P4 class answers with canned results

        * every P4 instance created is kept in the returned list
    '''
    instances = Lst()

    class P4(object):
        def __init__(self):
            (
                self.input,
                self.is_connected,
                self.disconnected,
                self.ran
            ) = \
                (
                    None,
                    False,
                    False,
                    None
                )
            (
                self.messages,
                self.errors,
                self.warnings
            ) = \
                (
                    Lst(messages or []),
                    Lst(errors or []),
                    Lst(warnings or [])
                )
            instances.append(self)

        def connect(self):
            if (connect_error is not None):
                raise connect_error
            self.is_connected = True

        def connected(self):
            return self.is_connected

        def disconnect(self):
            self.is_connected = False
            self.disconnected = True

        def run(self, command, *args):
            self.ran = Lst([command] + list(args))
            if (run_error is not None):
                raise run_error
            return list(results or [])

    module = ModuleType('P4')
    module.P4 = P4
    return (module, instances)

class TestP4PythonStrategy(unittest.TestCase):
    def run_with(self, request, resource=None, **stub):
        (module, instances) = stub_p4_module(**stub)
        oResource = resource or P4Resource(
            path=os.getcwd(),
            user='bob',
            client='bob_ws',
            port='anastasia.local:1777'
        )
        with mock.patch.dict(sys.modules, {'P4': module}):
            data = P4PythonStrategy(logger=quiet_logger()).run(oResource, request)
        return (data, instances(0))

    def testEnvelope(self):
        (data, p4) = self.run_with(
            Py4Request(command='changes', args=('-m', '1')),
            results=[
                {'change': '12', 'depotFile': ['//depot/a.c', '//depot/b.c']},
                'Change 12 created.\nsecond line\n'
            ]
        )
        self.assertEqual(p4.ran, ['changes', '-m', '1'])
        self.assertEqual((p4.user, p4.client, p4.port), ('bob', 'bob_ws', 'anastasia.local:1777'))
        self.assertEqual(p4.cwd, os.getcwd())
        self.assertEqual(p4.exception_level, 0)
        self.assertTrue(p4.disconnected)
        self.assertFalse(p4.connected())
        (record, first, second) = data.records
        self.assertTrue(is_structured(record))
        self.assertEqual((record.depotFile0, record.depotFile1), ('//depot/a.c', '//depot/b.c'))
        self.assertEqual((first, second), ('Change 12 created.', 'second line'))
        self.assertIsNone(data.error)

    def testInputIsFed(self):
        (data, p4) = self.run_with(
            Py4Request(command='change', args=('-i',), input='Change:\tnew\n'),
            results=['Change 377 created.']
        )
        self.assertEqual(p4.input, 'Change:\tnew\n')
        self.assertEqual(data.rawtext(), 'Change 377 created.')

    def testPrintPayloads(self):
        (data, p4) = self.run_with(
            Py4Request(command='print', args=('//depot/a.txt',)),
            results=[{'depotFile': '//depot/a.txt'}, 'line one\n', 'line two\n']
        )
        self.assertEqual(data.text, 'line one\nline two\n')
        (data, p4) = self.run_with(
            Py4Request(command='print', args=('//depot/logo.png',)),
            results=[{'depotFile': '//depot/logo.png'}, b'\x89PNG', bytearray(b'\x00')]
        )
        self.assertEqual(data.binary, b'\x89PNG\x00')
        self.assertIsNone(data.text)

    def testMessages(self):
        ''' info messages are not errors, the worst severity wins
        '''
        (data, p4) = self.run_with(
            Py4Request(command='sync'),
            messages=[
                StubMessage('//depot/a.c - updating /ws/a.c', 1, 0),
                StubMessage('//depot/b.c - file(s) up-to-date.', 2, 17),
                StubMessage('//depot/c.c - no permission.', 3, 22)
            ]
        )
        self.assertEqual(
            data.error.message,
            '//depot/b.c - file(s) up-to-date.\n//depot/c.c - no permission.'
        )
        self.assertEqual((data.error.severity, data.error.code), (3, 22))

    def testPlainErrorsAndWarnings(self):
        (data, p4) = self.run_with(
            Py4Request(command='edit', args=('//depot/a.c',)),
            errors=['//depot/a.c - file(s) not on client.'],
            warnings=['//depot/b.c - also opened by alice']
        )
        self.assertIn('not on client', data.error.message)
        self.assertIn('also opened by alice', data.error.message)
        self.assertEqual(data.error.severity, E_FAILED)

    def testRunFailureStillDisconnects(self):
        (module, instances) = stub_p4_module(run_error=RuntimeError('connection dropped'))
        with mock.patch.dict(sys.modules, {'P4': module}):
            with self.assertRaises(RuntimeError):
                P4PythonStrategy().run(P4Resource(), Py4Request(command='info'))
        self.assertTrue(instances(0).disconnected)

    def testMissingModuleRaisesImportError(self):
        with mock.patch.dict(sys.modules, {'P4': None}):
            with self.assertRaises(ImportError):
                P4PythonStrategy().run(P4Resource(), Py4Request(command='info'))

@unittest.skipIf(os.name == 'nt', 'the stand-in p4 relies on a #! line')
class TestDefaultStrategyChain(unittest.TestCase):
    ''' P4Python first, the p4 executable next
    '''
    def setUp(self):
        self.oP4 = FakeP4Executable()
        self.oP4.answer(
            'info',
            out=marshalled({'code': 'info', 'data': 'User name: bob\n', 'level': 0})
        )

    def tearDown(self):
        self.oP4.cleanup()

    def execute(self):
        oService = P4Service(max_concurrent=2, logger=quiet_logger())
        self.assertEqual(
            [strategy.name for strategy in oService.strategies],
            ['p4python', 'p4cli']
        )
        envelopes = Lst()
        delivered = threading.Event()

        def callback(envelope):
            envelopes.append(envelope)
            delivered.set()

        oService.execute(self.oP4.resource(), 'info', callback).result(timeout=10)
        delivered.wait(timeout=10)
        return envelopes

    def testFallsBackWhenP4PythonIsMissing(self):
        with mock.patch.dict(sys.modules, {'P4': None}):
            envelopes = self.execute()
        self.assertEqual(len(envelopes), 1)
        self.assertIsNone(envelopes(0).error)
        self.assertEqual(envelopes(0).rawtext(), 'User name: bob')
        self.assertEqual(self.oP4.argv(), ['-G', 'info'])

    def testFallsBackWhenConnectFails(self):
        (module, instances) = stub_p4_module(connect_error=ConnectionError('Connect to server failed'))
        with mock.patch.dict(sys.modules, {'P4': module}):
            envelopes = self.execute()
        self.assertEqual(len(instances), 1)
        self.assertIsNone(envelopes(0).error)
        self.assertEqual(envelopes(0).rawtext(), 'User name: bob')

    def testP4PythonAnswersFirst(self):
        (module, instances) = stub_p4_module(results=['User name: api'])
        with mock.patch.dict(sys.modules, {'P4': module}):
            envelopes = self.execute()
        self.assertEqual(envelopes(0).rawtext(), 'User name: api')
        self.assertFalse(os.path.exists(os.path.join(self.oP4.tmpdir, 'argv.txt')))

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
            loader.loadTestsFromTestCase(TestCommandLineStrategy),
            loader.loadTestsFromTestCase(TestRecordDecoding),
            loader.loadTestsFromTestCase(TestP4PythonStrategy),
            loader.loadTestsFromTestCase(TestDefaultStrategyChain),
    ):
        suite.addTests(item)
    unittest.TextTestRunner(verbosity=2).run(suite)
