from libdlg.dlgStore import Lst
from libdlg.dlgUtilities import to_native
from libconnect.conStrategy import (
    P4Strategy,
    normalize_record,
    merge_errors,
    E_WARN,
    E_FAILED
)
from libpy4.py4Data import (
    P4Data,
    P4Error,
    Structured,
    Raw
)

'''  [$File: //dev/p4dispatch/libconnect/conP4Python.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' The structured adapter: runs commands through P4Python (pip install p4python).

    A P4 object is built, connected & disconnected for every invocation, from
    the resource context (cwd, user, client, port, password, charset).
    P4Python is imported lazily: when it isn't installed, `run` raises
    ImportError & the service falls back to the next strategy.

    P4Python hands back list values where `p4 -G` hands back numbered
    keys (depotFile0, depotFile1, ...), records are flattened back so
    parsers only ever deal with one shape.
'''

__all__ = ['P4PythonStrategy']

class P4PythonStrategy(P4Strategy):
    name = 'p4python'
    is_process = False

    def __init__(self, logger=None, prog='p4dispatch'):
        super(P4PythonStrategy, self).__init__(logger=logger)
        self.prog = prog

    def connect(self, resource):
        from P4 import P4
        p4 = P4()
        p4.exception_level = 0
        p4.prog = self.prog
        p4.cwd = resource.working_dir()
        settings = resource.settings()
        for name in ('port', 'user', 'client', 'password', 'charset'):
            if (settings[name] is not None):
                setattr(p4, name, settings[name])
        p4.connect()
        return p4

    def run(self, resource, request):
        p4 = self.connect(resource)
        try:
            if (request.input is not None):
                p4.input = request.input
            results = p4.run(request.command, *request.args)
            return self.envelope(p4, request, results)
        finally:
            if (p4.connected()):
                p4.disconnect()

    def messages(self, p4):
        ''' P4.Message objects -> P4Error, errors first then warnings
        '''
        errors = Lst()
        for message in (p4.messages or []):
            severity = getattr(message, 'severity', None)
            if (
                    (severity is not None) and
                    (severity < E_WARN)
            ):
                continue
            errors.append(
                P4Error(
                    message=str(message),
                    severity=severity,
                    code=getattr(message, 'generic', None)
                )
            )
        if (len(errors) == 0):
            ''' no Message objects, fall back to plain strings
            '''
            errors = Lst(
                [P4Error(str(err), severity=E_FAILED) for err in (p4.errors or [])] +
                [P4Error(str(warning), severity=E_WARN) for warning in (p4.warnings or [])]
            )
        return merge_errors(errors)

    def envelope(self, p4, request, results):
        (
            records,
            text,
            binary
        ) = \
            (
                Lst(),
                None,
                None
            )
        for result in (results or []):
            if (isinstance(result, dict)):
                records.append(Structured(normalize_record(result)))
            elif (isinstance(result, (bytes, bytearray))):
                binary = (binary or b'') + bytes(result)
            elif (request.command == 'print'):
                text = (text or '') + to_native(result)
            else:
                records.merge(
                    [Raw(line) for line in str(result).rstrip('\n').split('\n')]
                )
        return P4Data(
            records=records,
            error=self.messages(p4),
            text=text,
            binary=binary if (text is None) else None
        )
