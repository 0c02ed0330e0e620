import time
import threading

from libdlg.dlgStore import Storage, Lst
from libdlg.dlgControl import DLGControl
from libpy4.py4Data import P4Data, P4Error, Structured, Raw
from libpy4.py4Service import P4Service
from libconnect.conStrategy import P4Strategy
from libconnect.conResource import P4Resource

'''  [$File: //dev/p4dispatch/unittests/fakeP4.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' a p4 that isn't - canned envelopes per command, every request recorded

        >>> oFake = FakeStrategy({'changes': P4Data(records=[Structured({'change': '421'})])})
        >>> oService = fake_service(oFake)
'''

__all__ = [
    'FakeStrategy',
    'fake_service',
    'fake_resource',
    'structured',
    'raw',
    'error'
]

structured = lambda **record: Structured(record)
raw = lambda line: Raw(line)
error = lambda message, severity=3: P4Error(message, severity=severity)

def fake_resource(path=None):
    return P4Resource(
        path=path,
        user='bob',
        client='bob_ws',
        port='anastasia.local:1777'
    )

def fake_service(*strategies, **kwargs):
    return P4Service(
        strategies=Lst(strategies),
        logger=DLGControl(loggername='p4dispatch.unittests', loglevel='CRITICAL'),
        **kwargs
    )

class FakeStrategy(P4Strategy):
    ''' responses   - {command: P4Data | fn(request) -> P4Data}
        raises      - an exception to raise instead of answering
        delay       - seconds to sit on each request
    '''
    name = 'fake'

    def __init__(
            self,
            responses=None,
            raises=None,
            delay=0,
            is_process=False,
            name=None,
            logger=None
    ):
        super(FakeStrategy, self).__init__(logger=logger)
        (
            self.responses,
            self.raises,
            self.delay,
            self.is_process
        ) = \
            (
                Storage(responses or {}),
                raises,
                delay,
                is_process
            )
        if (name is not None):
            self.name = name
        self.requests = Lst()
        self.lock = threading.Lock()
        (
            self.running,
            self.peak
        ) = \
            (
                0,
                0
            )

    def run(self, resource, request):
        with self.lock:
            self.requests.append(Storage(resource=resource, request=request))
            self.running += 1
            self.peak = max(self.peak, self.running)
        try:
            if (self.delay > 0):
                time.sleep(self.delay)
            if (self.raises is not None):
                raise self.raises
            response = self.responses[request.command]
            if (response is None):
                return P4Data()
            if (isinstance(response, P4Data)):
                return response
            return response(request)
        finally:
            with self.lock:
                self.running -= 1

    def commands(self):
        return Lst(item.request.command for item in self.requests)

    def lastargs(self):
        return Lst(self.requests(-1).request.args)
