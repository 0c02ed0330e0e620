import threading
import itertools
from collections import deque
from concurrent.futures import Future

from libdlg.dlgStore import Storage
from libdlg.dlgError import LimiterError

'''  [$File: //dev/p4dispatch/libpy4/py4Limiter.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' USAGE:

    >>> oLimiter = CommandLimiter(max_concurrent=4)
    >>> def task(done):
    ...     try:
    ...         return run_p4_somehow()
    ...     finally:
    ...         done()
    >>> future = oLimiter.submit(task, 'p4 changes')
    >>> future.result()

    tasks are admitted in submission order, at most `max_concurrent` at a
    time, each on its own worker thread. `done` frees the slot & may be
    called any number of times. A task that raises or returns without
    calling `done` has its slot freed anyway.
'''

__all__ = ['CommandLimiter']

class CommandLimiter(object):
    def __init__(
            self,
            max_concurrent=10,
            debug_mode=False,
            logger=None
    ):
        if (
                (isinstance(max_concurrent, bool)) |
                (not isinstance(max_concurrent, int))
        ):
            raise LimiterError(f'max_concurrent must be an int, got {max_concurrent!r}')
        if (max_concurrent < 1):
            raise LimiterError(f'max_concurrent must be >= 1, got {max_concurrent}')
        (
            self.max_concurrent,
            self.debug_mode,
            self.logger
        ) = \
            (
                max_concurrent,
                debug_mode,
                logger
            )
        self.lock = threading.Lock()
        self.queue = deque()
        self.active = 0
        self.jobids = itertools.count(1)

    def __repr__(self):
        return f'<CommandLimiter {self.active}/{self.max_concurrent} running, {len(self.queue)} queued>'

    @property
    def running(self):
        with self.lock:
            return self.active

    @property
    def queued(self):
        with self.lock:
            return len(self.queue)

    def debug(self, msg):
        if (
                (self.debug_mode is True) &
                (self.logger is not None)
        ):
            self.logger.loginfo(msg)

    def submit(self, task, label=''):
        future = Future()
        job = Storage(
            {
                'jobid': next(self.jobids),
                'label': label,
                'task': task,
                'future': future
            }
        )
        self.debug(f'<JOB_ID:{job.jobid}:{label}> submitted')
        with self.lock:
            self.queue.append(job)
            ready = self.admit()
        self.start(ready)
        return future

    def admit(self):
        ''' pop as many queued jobs as there are free slots (FIFO)

            * caller holds the lock
        '''
        ready = []
        while (
                (self.active < self.max_concurrent) &
                (len(self.queue) > 0)
        ):
            self.active += 1
            ready.append(self.queue.popleft())
        return ready

    def start(self, jobs):
        for job in jobs:
            worker = threading.Thread(
                target=self.runjob,
                args=(job,),
                name=f'p4job-{job.jobid}',
                daemon=True
            )
            try:
                worker.start()
            except RuntimeError as err:
                ''' couldn't even get a thread - fail the job, give back its slot
                '''
                job.future.set_exception(LimiterError(str(err)))
                self.release(job)

    def release(self, job):
        with self.lock:
            if (job.released is True):
                return
            job.released = True
            self.active -= 1
            ready = self.admit()
        self.debug(f'<JOB_ID:{job.jobid}:{job.label}> completed')
        self.start(ready)

    def runjob(self, job):
        if (job.future.set_running_or_notify_cancel() is False):
            self.release(job)
            return
        self.debug(f'<JOB_ID:{job.jobid}:{job.label}> started')
        done = lambda: self.release(job)
        try:
            result = job.task(done)
        except BaseException as err:
            done()
            job.future.set_exception(err)
        else:
            done()
            job.future.set_result(result)
