import shlex
import threading
from concurrent.futures import Future

from libdlg.dlgStore import Lst
from libdlg.dlgControl import DLGControl
from libdlg.dlgError import P4CommandError, P4DispatchError
from libpy4.py4Data import P4Data, P4Error, Py4Request
from libpy4.py4Limiter import CommandLimiter
from libconnect.conP4Python import P4PythonStrategy
from libconnect.conCLI import CommandLineStrategy

'''  [$File: //dev/p4dispatch/libpy4/py4Service.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

'''     the command dispatcher.

        BASIC USAGE:

            >>> oService = P4Service(max_concurrent=4)
            >>> oResource = P4Resource('/home/gc/projects/p4dispatch', user='zerdlg')

        callback form (the primitive), the callback is called exactly once:

            >>> oService.execute(oResource, 'changes', print, args=['-m', '5'])

        future form:

            >>> oService.execute_as_future(oResource, 'info').result()
            'User name: zerdlg\\n...'

        every command goes through the limiter, then through the strategies
        in order (P4Python first, the p4 executable next) until one of them
        doesn't raise.
'''

__all__ = ['P4Service', 'display_cmdline']

''' commands whose input must never make it to a log
'''
secret_input_commands = ('login', 'passwd')

def display_cmdline(resource, request):
    ''' the command line, quoted for display only, password masked
    '''
    cmdargs = Lst([resource.command_path()])
    cmdargs.merge(resource.display_args())
    cmdargs.append(request.command)
    cmdargs.merge([str(arg) for arg in request.args])
    return ' '.join(shlex.quote(arg) for arg in cmdargs)

class P4Service(object):
    def __init__(
            self,
            strategies=None,
            max_concurrent=10,
            debug_mode=False,
            loglevel='INFO',
            logfile=None,
            logger=None
    ):
        self.logger = logger or DLGControl(
            loggername='p4dispatch',
            loglevel=loglevel,
            logfile=logfile
        )
        [
            setattr(
                self,
                f'log{logitem}',
                getattr(self.logger, f'log{logitem}')
            ) for logitem in (
            'info',
            'warning',
            'error',
            'critical'
            )
        ]
        self.strategies = Lst(strategies) \
            if (strategies is not None) \
            else Lst(
                [
                    P4PythonStrategy(logger=self.logger),
                    CommandLineStrategy(logger=self.logger)
                ]
            )
        if (len(self.strategies) == 0):
            raise P4DispatchError('*', 'at least one execution strategy is required')
        self.debug_mode = debug_mode
        self.limiter = CommandLimiter(
            max_concurrent=max_concurrent,
            debug_mode=debug_mode,
            logger=self.logger
        )

    def __repr__(self):
        strategies = ', '.join(strategy.name for strategy in self.strategies)
        return f'<P4Service [{strategies}] {self.limiter}>'

    def log_request(self, resource, request):
        cmdline = display_cmdline(resource, request)
        self.loginfo(f'{resource.working_dir()} %> {cmdline}')
        if (request.input is not None):
            p4input = '***' \
                if (request.command in secret_input_commands) \
                else request.input
            self.loginfo(f'<input>: {p4input}')

    def strategies_for(self, request):
        ''' alternate mode skips anything that isn't a process strategy
        '''
        if (request.alternate is True):
            return Lst(strategy for strategy in self.strategies if (strategy.is_process is True))
        return self.strategies

    def run_strategies(self, resource, request):
        failures = Lst()
        strategies = self.strategies_for(request)
        if (len(strategies) == 0):
            raise P4DispatchError(request.command, 'no strategy available for this request')
        for strategy in strategies:
            try:
                return strategy.run(resource, request)
            except Exception as err:
                reason = f'{strategy.name}: {type(err).__name__}: {err}'
                failures.append(reason)
                self.logwarning(f'`{request.command}` could not run with {reason}')
        raise P4DispatchError(request.command, ' | '.join(failures))

    def execute(
            self,
            resource,
            command,
            callback,
            args=None,
            input=None,
            alternate=False
    ):
        ''' run `command` & call `callback(P4Data)` exactly once

            * never raises - anything going wrong before p4 could answer
              ends up as an error envelope
            * returns the limiter's future (for those who want to wait on it)
        '''
        request = Py4Request(
            command=command,
            args=tuple(str(arg) for arg in (args or ())),
            input=input,
            alternate=alternate
        )
        (
            lock,
            delivered
        ) = \
            (
                threading.Lock(),
                Lst()
            )

        def deliver(envelope):
            with lock:
                if (len(delivered) > 0):
                    return
                delivered.append(True)
            try:
                callback(envelope)
            except Exception as err:
                self.logerror(f'callback for `{command}` raised {type(err).__name__}: {err}')

        def task(done):
            try:
                self.log_request(resource, request)
                envelope = self.run_strategies(resource, request)
            finally:
                ''' the slot is freed as soon as p4 is done, before the callback
                '''
                done()
            deliver(envelope)
            return envelope

        def on_done(future):
            err = future.exception()
            if (err is not None):
                deliver(P4Data(error=P4Error(str(err))))

        try:
            future = self.limiter.submit(task, command)
        except Exception as err:
            deliver(P4Data(error=P4Error(str(err))))
            return
        future.add_done_callback(on_done)
        return future

    def execute_as_future(
            self,
            resource,
            command,
            args=None,
            input=None,
            alternate=False
    ):
        ''' a Future that resolves with the textual records joined by
            newlines, or fails with P4CommandError
        '''
        future = Future()

        def callback(envelope):
            if (envelope.error is not None):
                future.set_exception(
                    P4CommandError(
                        envelope.error.message,
                        severity=envelope.error.severity,
                        code=envelope.error.code
                    )
                )
            else:
                future.set_result(envelope.rawtext())

        self.execute(
            resource,
            command,
            callback,
            args=args,
            input=input,
            alternate=alternate
        )
        return future
