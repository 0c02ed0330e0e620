from libdlg.dlgStore import Storage, Lst
from libdlg.dlgUtilities import decode_bytes, Flatten
from libpy4.py4Data import P4Error

'''  [$File: //dev/p4dispatch/libconnect/conStrategy.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' An execution strategy runs exactly one p4 invocation & hands back a P4Data.

    A strategy raises when it can't run the command at all (its library is
    missing, it can't connect, the executable can't be launched...). p4
    reporting an error is NOT a strategy failure: that goes in the envelope.
'''

__all__ = [
    'P4Strategy',
    'normalize_record',
    'merge_errors',
    'E_EMPTY',
    'E_INFO',
    'E_WARN',
    'E_FAILED',
    'E_FATAL'
]

''' p4 message severities
'''
(
    E_EMPTY,
    E_INFO,
    E_WARN,
    E_FAILED,
    E_FATAL
) = range(5)

def normalize_record(record):
    ''' decode a record to str keys/values & flatten any list values
        back to numbered keys, so that all strategies produce the same
        shape that `p4 -G` does.

            >>> normalize_record({b'depotFile': [b'//depot/a.c', b'//depot/b.c'], b'change': b'12'})
            <Storage {'change': '12', 'depotFile0': '//depot/a.c', 'depotFile1': '//depot/b.c'}>
    '''
    record = decode_bytes(record)
    if (
            (isinstance(record, dict)) &
            (any(isinstance(value, (list, tuple)) for value in record.values()))
    ):
        record = Flatten(record).expand()
    return Storage(record)

def merge_errors(errors):
    ''' several p4 error/warning messages -> a single P4Error

        * severity is the highest one reported, code is that message's generic code
    '''
    errors = Lst(error for error in errors if (error is not None))
    if (len(errors) == 0):
        return
    message = '\n'.join(
        str(error.message).rstrip('\n') for error in errors if (error.message)
    )
    worst = None
    for error in errors:
        if (error.severity is not None):
            if (
                    (worst is None) or
                    (int(error.severity) > int(worst.severity))
            ):
                worst = error
    return P4Error(
        message=message,
        severity=int(worst.severity) if (worst is not None) else None,
        code=worst.code if (worst is not None) else None
    )

class P4Strategy(object):
    name = 'strategy'
    is_process = False

    def __init__(self, logger=None):
        self.logger = logger

    def __repr__(self):
        return f'<{type(self).__name__} {self.name}>'

    def log(self, level, msg):
        if (self.logger is not None):
            getattr(self.logger, f'log{level}')(msg)

    def run(self, resource, request):
        raise NotImplementedError
