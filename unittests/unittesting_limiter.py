import re
import time
import threading
import unittest

from libdlg.dlgError import LimiterError
from libpy4.py4Limiter import CommandLimiter

'''  [$File: //dev/p4dispatch/unittests/unittesting_limiter.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

class Recorder(object):
    ''' tracks how many tasks run at once & in which order they started
    '''
    def __init__(self):
        self.lock = threading.Lock()
        (
            self.running,
            self.peak,
            self.started
        ) = \
            (
                0,
                0,
                []
            )

    def task(self, name, delay=0.02, result=None):
        def run(done):
            with self.lock:
                self.running += 1
                self.peak = max(self.peak, self.running)
                self.started.append(name)
            time.sleep(delay)
            with self.lock:
                self.running -= 1
            done()
            return result if (result is not None) else name
        return run

class MessageLog(object):
    ''' just enough of DLGControl to collect what the limiter logs
    '''
    def __init__(self):
        self.lock = threading.Lock()
        self.messages = []

    def loginfo(self, msg, *args, **kwargs):
        with self.lock:
            self.messages.append(msg)

reg_jobid = re.compile(r'^<JOB_ID:(\d+):(\w+)> (submitted|started|completed)$')

class TestLimiter(unittest.TestCase):
    def testBoundIsNeverExceeded(self):
        oLimiter = CommandLimiter(max_concurrent=3)
        oRecorder = Recorder()
        futures = [oLimiter.submit(oRecorder.task(idx), f'job{idx}') for idx in range(12)]
        results = [future.result(timeout=10) for future in futures]
        self.assertEqual(results, list(range(12)))
        self.assertLessEqual(oRecorder.peak, 3)
        self.assertEqual(oLimiter.running, 0)
        self.assertEqual(oLimiter.queued, 0)

    def testFifoAdmission(self):
        ''' with a single slot, tasks start in submission order
        '''
        oLimiter = CommandLimiter(max_concurrent=1)
        oRecorder = Recorder()
        futures = [oLimiter.submit(oRecorder.task(name, delay=0.01), name) for name in 'abcde']
        [future.result(timeout=10) for future in futures]
        self.assertEqual(oRecorder.started, list('abcde'))

    def testDoneIsIdempotent(self):
        oLimiter = CommandLimiter(max_concurrent=1)

        def task(done):
            done()
            done()
            done()
            return 'ok'

        futures = [oLimiter.submit(task, 'twice') for idx in range(3)]
        self.assertEqual([future.result(timeout=10) for future in futures], ['ok', 'ok', 'ok'])
        self.assertEqual(oLimiter.running, 0)

    def testFailingTaskReleasesItsSlot(self):
        ''' a task that raises without calling done still frees its slot
        '''
        oLimiter = CommandLimiter(max_concurrent=1)

        def failing(done):
            raise RuntimeError('p4 went away')

        failed = oLimiter.submit(failing, 'failing')
        after = oLimiter.submit(lambda done: 'after', 'after')
        with self.assertRaises(RuntimeError):
            failed.result(timeout=10)
        self.assertEqual(after.result(timeout=10), 'after')
        self.assertEqual(oLimiter.running, 0)

    def testSlotFreedBeforeResult(self):
        ''' `done` lets the next job in while the current one is still post-processing
        '''
        oLimiter = CommandLimiter(max_concurrent=1)
        (
            released,
            proceed
        ) = \
            (
                threading.Event(),
                threading.Event()
            )

        def first(done):
            done()
            released.set()
            proceed.wait(timeout=10)
            return 'first'

        future1 = oLimiter.submit(first, 'first')
        released.wait(timeout=10)
        future2 = oLimiter.submit(lambda done: 'second', 'second')
        self.assertEqual(future2.result(timeout=10), 'second')
        proceed.set()
        self.assertEqual(future1.result(timeout=10), 'first')

    def testDebugModeLogsJobIds(self):
        oLog = MessageLog()
        oLimiter = CommandLimiter(max_concurrent=1, debug_mode=True, logger=oLog)
        oRecorder = Recorder()
        labels = ['changes', 'fstat', 'describe']
        futures = [oLimiter.submit(oRecorder.task(label, delay=0.01), label) for label in labels]
        [future.result(timeout=10) for future in futures]
        events = [reg_jobid.match(msg).groups() for msg in oLog.messages]
        submitted = [(int(jobid), label) for (jobid, label, event) in events if (event == 'submitted')]
        self.assertEqual(submitted, [(1, 'changes'), (2, 'fstat'), (3, 'describe')])
        for (jobid, label) in submitted:
            for event in ('started', 'completed'):
                self.assertIn((str(jobid), label, event), events)
        ''' one slot: a job starts only once the previous one completed
        '''
        started = [int(jobid) for (jobid, label, event) in events if (event == 'started')]
        self.assertEqual(started, [1, 2, 3])

    def testNoDebugNoJobIds(self):
        oLog = MessageLog()
        oLimiter = CommandLimiter(max_concurrent=2, logger=oLog)
        oLimiter.submit(lambda done: 'quiet', 'info').result(timeout=10)
        self.assertEqual(oLog.messages, [])

    def testInvalidBound(self):
        for value in (0, -1, 'ten', True, 2.5):
            with self.assertRaises(LimiterError):
                CommandLimiter(max_concurrent=value)

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
            loader.loadTestsFromTestCase(TestLimiter),
    ):
        suite.addTests(item)
    unittest.TextTestRunner(verbosity=2).run(suite)
