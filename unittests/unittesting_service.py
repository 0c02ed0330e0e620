import threading
import unittest

from libdlg.dlgStore import Lst
from libdlg.dlgError import P4CommandError, P4DispatchError
from libpy4.py4Data import P4Data, Py4Request
from libpy4.py4Service import P4Service, display_cmdline
from libconnect.conResource import P4Resource

from fakeP4 import (
    FakeStrategy,
    fake_service,
    fake_resource,
    structured,
    raw,
    error
)

'''  [$File: //dev/p4dispatch/unittests/unittesting_service.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

class Collector(object):
    ''' a callback that remembers every envelope it is handed
    '''
    def __init__(self):
        self.envelopes = Lst()
        self.event = threading.Event()

    def __call__(self, envelope):
        self.envelopes.append(envelope)
        self.event.set()

    def wait(self):
        self.event.wait(timeout=10)
        return self.envelopes(0)

class TestService(unittest.TestCase):
    def testExecuteDeliversEnvelope(self):
        oFake = FakeStrategy({'changes': P4Data(records=[structured(change='421')])})
        oService = fake_service(oFake)
        oCollector = Collector()
        future = oService.execute(fake_resource(), 'changes', oCollector, args=['-m', 1])
        future.result(timeout=10)
        envelope = oCollector.wait()
        self.assertEqual(envelope.records(0).change, '421')
        self.assertIsNone(envelope.error)
        ''' args are passed on as strings
        '''
        self.assertEqual(oFake.lastargs(), ['-m', '1'])
        self.assertEqual(len(oCollector.envelopes), 1)

    def testFallbackToNextStrategy(self):
        ''' the first strategy that doesn't raise wins
        '''
        oBroken = FakeStrategy(raises=ImportError('No module named P4'), name='broken')
        oWorking = FakeStrategy({'info': P4Data(records=[raw('User name: bob')])}, name='working')
        oService = fake_service(oBroken, oWorking)
        text = oService.execute_as_future(fake_resource(), 'info').result(timeout=10)
        self.assertEqual(text, 'User name: bob')
        self.assertEqual(len(oBroken.requests), 1)
        self.assertEqual(len(oWorking.requests), 1)

    def testAllStrategiesFail(self):
        ''' a dispatch failure is an error envelope, never an exception from execute
        '''
        oService = fake_service(
            FakeStrategy(raises=OSError('p4: not found'), name='first'),
            FakeStrategy(raises=ImportError('P4'), name='second')
        )
        oCollector = Collector()
        oService.execute(fake_resource(), 'info', oCollector)
        envelope = oCollector.wait()
        self.assertTrue(envelope.is_error())
        self.assertIn('p4: not found', envelope.error.message)
        self.assertIn('P4', envelope.error.message)
        self.assertEqual(len(oCollector.envelopes), 1)

    def testAlternateSkipsNonProcessStrategies(self):
        oAPI = FakeStrategy({'resolve': P4Data(records=[raw('api')])}, name='api')
        oCLI = FakeStrategy({'resolve': P4Data(records=[raw('cli')])}, name='cli', is_process=True)
        oService = fake_service(oAPI, oCLI)
        text = oService.execute_as_future(fake_resource(), 'resolve', alternate=True).result(timeout=10)
        self.assertEqual(text, 'cli')
        self.assertEqual(len(oAPI.requests), 0)

    def testAlternateWithoutProcessStrategy(self):
        oService = fake_service(FakeStrategy(name='api'))
        with self.assertRaises(P4CommandError):
            oService.execute_as_future(fake_resource(), 'resolve', alternate=True).result(timeout=10)

    def testExecuteAsFutureFailsOnError(self):
        oFake = FakeStrategy({'have': P4Data(error=error('//depot/nope.c - no such file(s).'))})
        oService = fake_service(oFake)
        with self.assertRaises(P4CommandError) as ctx:
            oService.execute_as_future(fake_resource(), 'have').result(timeout=10)
        self.assertIn('no such file(s)', str(ctx.exception))

    def testCallbackCalledOnceWhenItRaises(self):
        oService = fake_service(FakeStrategy({'info': P4Data(records=[raw('ok')])}))
        calls = Lst()
        lock = threading.Lock()

        def callback(envelope):
            with lock:
                calls.append(envelope)
            raise ValueError('callback blew up')

        future = oService.execute(fake_resource(), 'info', callback)
        future.result(timeout=10)
        self.assertEqual(len(calls), 1)
        self.assertFalse(calls(0).is_error())

    def testLimiterFailureBecomesErrorEnvelope(self):
        oService = fake_service(FakeStrategy())

        def broken(task, label=''):
            raise RuntimeError("can't start new thread")

        oService.limiter.submit = broken
        oCollector = Collector()
        self.assertIsNone(oService.execute(fake_resource(), 'info', oCollector))
        envelope = oCollector.wait()
        self.assertIn("can't start new thread", envelope.error.message)

    def testConcurrencyBound(self):
        oFake = FakeStrategy({'fstat': P4Data()}, delay=0.02)
        oService = fake_service(oFake, max_concurrent=2)
        futures = [
            oService.execute_as_future(fake_resource(), 'fstat', args=[f'//depot/{idx}.c'])
            for idx in range(10)
        ]
        [future.result(timeout=10) for future in futures]
        self.assertEqual(len(oFake.requests), 10)
        self.assertLessEqual(oFake.peak, 2)

    def testEmptyStrategies(self):
        with self.assertRaises(P4DispatchError):
            P4Service(strategies=[])

    def testLoginInputIsRedacted(self):
        oService = fake_service(FakeStrategy())
        messages = Lst()
        oService.loginfo = lambda msg, *args, **kwargs: messages.append(msg)
        request = Py4Request(command='login', args=(), input='s3cr3t')
        oService.log_request(fake_resource(), request)
        self.assertIn('<input>: ***', messages)
        self.assertFalse(any('s3cr3t' in message for message in messages))

    def testPasswordMaskedOnCmdline(self):
        oResource = fake_resource().replace(password='s3cr3t')
        cmdline = display_cmdline(oResource, Py4Request(command='changes', args=('-m', '1')))
        self.assertNotIn('s3cr3t', cmdline)
        self.assertIn('-u bob', cmdline)
        self.assertTrue(cmdline.endswith('changes -m 1'))

class TestResource(unittest.TestCase):
    def testGlobalArgs(self):
        oResource = P4Resource(
            user='bob',
            client='none',
            port='anastasia.local:1777',
            password=''
        )
        ''' unset values are never passed on
        '''
        self.assertEqual(oResource.global_args(), ['-u', 'bob', '-p', 'anastasia.local:1777'])

    def testWorkingDir(self):
        oResource = P4Resource(path=__file__)
        self.assertEqual(oResource.working_dir(), P4Resource(path=oResource.working_dir()).working_dir())
        self.assertFalse(oResource.working_dir().endswith('.py'))

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
            loader.loadTestsFromTestCase(TestService),
            loader.loadTestsFromTestCase(TestResource),
    ):
        suite.addTests(item)
    unittest.TextTestRunner(verbosity=2).run(suite)
