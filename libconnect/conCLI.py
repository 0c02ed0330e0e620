from io import BytesIO
from marshal import load as mload
from subprocess import Popen, PIPE, DEVNULL

from libdlg.dlgStore import Lst
from libdlg.dlgUtilities import to_native
from libconnect.conStrategy import (
    P4Strategy,
    normalize_record,
    merge_errors,
    E_FAILED
)
from libpy4.py4Data import (
    P4Data,
    P4Error,
    Structured,
    Raw
)

'''  [$File: //dev/p4dispatch/libconnect/conCLI.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' The raw process strategy: spawns the p4 executable.

    %> p4 <globals> -G <command> <args>

    Without input, `-G` is set & the marshalled records are decoded from
    stdout, one at a time, until EOF:

        code=stat           -> Structured(record)
        code=info           -> Raw(data)
        code=error          -> P4Error(data, severity, generic)
        code=text/binary    -> the envelope's text/binary payload

    With input (I.e. `change -i`), `-G` would also marshal stdin, so the
    command is run plain: input is fed to stdin, stdout lines become Raw
    records & stderr becomes the error.
'''

__all__ = ['CommandLineStrategy']

class CommandLineStrategy(P4Strategy):
    name = 'p4cli'
    is_process = True
    ''' client side commands that know nothing about -G
    '''
    untagged_commands = ('set',)

    def __init__(self, logger=None, charset='utf8'):
        super(CommandLineStrategy, self).__init__(logger=logger)
        self.charset = charset

    def is_tagged(self, request):
        return (
                (request.input is None) &
                (request.command not in self.untagged_commands)
        )

    def cmdline(self, resource, request):
        cmdargs = Lst([resource.command_path()])
        cmdargs.merge(resource.global_args())
        if (self.is_tagged(request) is True):
            cmdargs.append('-G')
        cmdargs.append(request.command)
        cmdargs.merge([str(arg) for arg in request.args])
        return cmdargs

    def run(self, resource, request):
        tagged = self.is_tagged(request)
        p4input = request.input.encode(self.charset) \
            if (request.input is not None) \
            else None
        oProcess = Popen(
            self.cmdline(resource, request),
            stdin=PIPE if (p4input is not None) else DEVNULL,
            stdout=PIPE,
            stderr=PIPE,
            cwd=resource.working_dir()
        )
        (out, err) = oProcess.communicate(input=p4input)
        data = self.load_records(out) \
            if (tagged is True) \
            else self.load_lines(out)
        stderr = to_native(err, self.charset).strip()
        if (len(stderr) > 0):
            data.error = merge_errors([data.error, P4Error(stderr, severity=E_FAILED)])
        if (
                (oProcess.returncode != 0) &
                (data.error is None)
        ):
            data.error = P4Error(
                f'{request.command} exited with status {oProcess.returncode}',
                severity=E_FAILED
            )
        return data

    def load_lines(self, out):
        text = to_native(out, self.charset).rstrip('\n')
        records = Lst(Raw(line.rstrip('\r')) for line in text.split('\n')) \
            if (len(text) > 0) \
            else Lst()
        return P4Data(records=records)

    def load_records(self, out):
        (
            records,
            errors,
            text,
            binary
        ) = \
            (
                Lst(),
                Lst(),
                None,
                None
            )
        oFile = BytesIO(out)
        while True:
            try:
                record = mload(oFile)
            except EOFError:
                break
            except (ValueError, TypeError):
                ''' not marshal (anymore) - keep whatever is left as text
                '''
                leftover = to_native(oFile.read(), self.charset).strip()
                if (len(leftover) > 0):
                    records.merge([Raw(line) for line in leftover.splitlines()])
                break
            if (not isinstance(record, dict)):
                records.append(Raw(to_native(record, self.charset)))
                continue
            code = to_native(record.get(b'code', record.get('code')), self.charset)
            payload = record.get(b'data', record.get('data'))
            if (code == 'binary'):
                binary = (binary or b'') + (payload or b'')
                continue
            record = normalize_record(record)
            record.delete('code')
            if (code == 'stat'):
                records.append(Structured(record))
            elif (code == 'info'):
                records.append(Raw((record.data or '').rstrip('\n')))
            elif (code == 'error'):
                errors.append(
                    P4Error(
                        message=(record.data or '').rstrip('\n'),
                        severity=int(record.severity) if (record.severity is not None) else None,
                        code=int(record.generic) if (record.generic is not None) else None
                    )
                )
            elif (code == 'text'):
                text = (text or '') + (record.data or '')
            else:
                records.append(Structured(record))
        return P4Data(
            records=records,
            error=merge_errors(errors),
            text=text,
            binary=binary if (text is None) else None
        )
