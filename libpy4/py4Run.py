from pprint import pformat
from concurrent.futures import Future

from libdlg.dlgStore import Storage, Lst
from libdlg.dlgError import P4CommandError
from libconnect.conStrategy import E_FAILED

'''  [$File: //dev/p4dispatch/libpy4/py4Run.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' Usage example:

    the simple command (options -> args -> P4Data):

        >>> changes = Py4Command('changes', flag_mapper([('s', 'status'), ('m', 'max')], lastarg='files'))
        >>> envelope = changes(oService, oResource, status='pending', max=10)

    & the typed command, mapping the envelope to domain objects:

        >>> get_changelists = output_handler(changes, parse_changelists)
        >>> get_changelists(oService, oResource, status='pending')
        [<ChangeInfo ...>, ...]

    cmdparams (not command line options!) decide how stderr is dealt with:

        stderr_is_ok    - p4 errors/warnings are logged, not raised
        hide_stderr     - ... & logged at info level rather than as errors
        log_stdout      - log the records
        input           - fed to the command's stdin
        alternate       - spawn the p4 executable, skip P4Python
'''

__all__ = [
    'Py4Command',
    'Py4Handler',
    'output_handler',
    'run_command_raw',
    'run_command',
    'check_output',
    'chain_future',
    'merge_all',
    'merge_without_overriding',
    'concat_if_output_is_defined'
]

def merge_all(*dicts):
    ''' right hand values have precedence
    '''
    merged = Storage()
    for anydict in dicts:
        merged.update(anydict or {})
    return merged

def merge_without_overriding(*dicts):
    ''' left hand values have precedence
    '''
    return merge_all(*reversed(dicts))

def concat_if_output_is_defined(*fns):
    ''' call each fn with the same arg, keep what isn't None
    '''
    def concat(arg):
        return Lst(value for value in (fn(arg) for fn in fns) if (value is not None))
    return concat

def chain_future(future, fn):
    ''' a Future resolved with fn(future.result()), or failed with whatever failed first
    '''
    chained = Future()

    def resolve(done):
        try:
            chained.set_result(fn(done.result()))
        except BaseException as err:
            chained.set_exception(err)

    future.add_done_callback(resolve)
    return chained

def run_command_raw(
        service,
        resource,
        command,
        args=None,
        input=None,
        alternate=False
):
    ''' a Future resolved with the P4Data envelope, untouched
    '''
    future = Future()
    service.execute(
        resource,
        command,
        future.set_result,
        args=args,
        input=input,
        alternate=alternate
    )
    return future

def check_output(envelope, cmdparams=None, logger=None):
    ''' apply a command's stderr policy to its envelope
    '''
    cmdparams = Storage(cmdparams or {})
    if (envelope.error is not None):
        message = envelope.error.message
        if (logger is not None):
            if (cmdparams.hide_stderr is True):
                logger.loginfo(message)
            elif (
                    (envelope.error.severity is None) or
                    (envelope.error.severity >= E_FAILED)
            ):
                logger.logerror(message)
            else:
                logger.logwarning(message)
        if (cmdparams.stderr_is_ok is not True):
            raise P4CommandError(
                message,
                severity=envelope.error.severity,
                code=envelope.error.code
            )
    if (
            (cmdparams.log_stdout is True) &
            (logger is not None) &
            (len(envelope.records) > 0)
    ):
        logger.loginfo(f'< {pformat(list(envelope.records))}')
    return envelope

def run_command(
        service,
        resource,
        command,
        args=None,
        cmdparams=None
):
    ''' a Future resolved with the envelope, once its stderr policy is applied
    '''
    cmdparams = Storage(cmdparams or {})
    return chain_future(
        run_command_raw(
            service,
            resource,
            command,
            args=args,
            input=cmdparams.input,
            alternate=(cmdparams.alternate is True)
        ),
        lambda envelope: check_output(envelope, cmdparams, service.logger)
    )

class Py4Command(object):
    ''' one p4 command: options -> argument vector -> checked envelope

        command     - the p4 command (I.e. 'changes')
        argmapper   - options -> argument vector (I.e. a flag_mapper)
        cmdparams   - options -> cmdparams (or a dict of cmdparams)
    '''
    def __init__(
            self,
            command,
            argmapper=None,
            cmdparams=None,
            name=None
    ):
        (
            self.command,
            self.argmapper,
            self.cmdparams,
            self.__name__
        ) = \
            (
                command,
                argmapper or (lambda options: Lst()),
                cmdparams,
                name or command
            )

    def __repr__(self):
        return f'<Py4Command {self.__name__} (p4 {self.command})>'

    def args(self, options):
        return Lst(self.argmapper(Storage(options))).clean()

    def params(self, options, override=None):
        params = self.cmdparams(Storage(options)) \
            if (callable(self.cmdparams)) \
            else self.cmdparams
        return merge_without_overriding(override, params)

    def submit(self, service, resource, override=None, **options):
        return run_command(
            service,
            resource,
            self.command,
            args=self.args(options),
            cmdparams=self.params(options, override)
        )

    def __call__(self, service, resource, override=None, **options):
        return self.submit(service, resource, override=override, **options).result()

    def raw(self, service, resource, **options):
        ''' the envelope as it came back, stderr & all
        '''
        params = self.params(options)
        return run_command_raw(
            service,
            resource,
            self.command,
            args=self.args(options),
            input=params.input,
            alternate=(params.alternate is True)
        ).result()

    def ignoring_stderr(self, service, resource, **options):
        return self(service, resource, override={'stderr_is_ok': True}, **options)

    def ignoring_and_hiding_stderr(self, service, resource, **options):
        return self(
            service,
            resource,
            override={
                'stderr_is_ok': True,
                'hide_stderr': True
            },
            **options
        )

class Py4Handler(object):
    ''' a command whose envelope is mapped to domain objects

        * a mapper that blows up on unexpected output is logged & the
          result is `empty()` (None unless told otherwise)
    '''
    def __init__(self, fn, mapper, empty=None, name=None):
        (
            self.fn,
            self.mapper,
            self.empty,
            self.__name__
        ) = \
            (
                fn,
                mapper,
                empty or (lambda: None),
                name or getattr(mapper, '__name__', 'handler')
            )

    def __repr__(self):
        return f'<Py4Handler {self.__name__}>'

    def map(self, service, output):
        try:
            return self.mapper(output)
        except (
                KeyError,
                IndexError,
                TypeError,
                ValueError,
                AttributeError
        ) as err:
            service.logger.logerror(
                f'unable to parse output of `{self.fn.__name__}`: {type(err).__name__}: {err}'
            )
            return self.empty()

    def submit(self, service, resource, override=None, **options):
        return chain_future(
            self.fn.submit(service, resource, override=override, **options),
            lambda output: self.map(service, output)
        )

    def __call__(self, service, resource, override=None, **options):
        return self.submit(service, resource, override=override, **options).result()

def output_handler(fn, mapper, empty=None, name=None):
    return Py4Handler(fn, mapper, empty=empty, name=name)
