import threading
from concurrent.futures import Future

from libdlg.dlgStore import Storage, Lst
from libdlg.dlgUtilities import bail
from libdlg.dlgControl import DLGControl
from libdlg.dlgError import NoSuchCommandError
from libpy4.py4Service import P4Service
from libpy4.py4Run import run_command_raw
from libconnect.conResource import P4Resource, p4globals
from libconnect.conCLI import CommandLineStrategy

'''  [$File: //dev/p4dispatch/libpy4/py4IO.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

'''     a perforce client program.

        BASIC USAGE:

        The class reference (the connector) and the usual p4 settings
            >>>  oP4 = Py4(**{'user': 'zerdlg',
                              'port':  'anastasia:1777',
                              'client': 'gc.depot',
                              'password':'Unset'}) --> value can be a password, a p4ticket,
                                                       '[Uu]nset' or omit completely (in
                                                       which case the environment is checked,
                                                       I.e. P4USER, etc.)

        Every command is an attribute of the connector, bound to its service & to
        its default resource (another resource can be passed with `resource=`)

            >>> oP4.get_changelists(status='pending', max_changelists=10)
            [<ChangeInfo {'chnum': '421', ...}>, ...]

            >>> oP4.have_file(file=P4File('//depot/main/a.c'))
            True

            >>> future = oP4.submit('get_fstat_info', depot_paths=paths)
            >>> future.result()

        Anything else p4 knows about can still be run, the envelope comes back as is

            >>> oP4.run('counters')
            <P4Data {'records': [...], 'error': None, ...}>

        The class reference is callable, any p4 setting can be changed on the fly:

            >>> oP4(client='other.client').get_info()
'''

__all__ = ['Py4', 'Py4Bound', 'p4connector']

class Py4Bound(object):
    ''' a command bound to a service & a default resource
    '''
    def __init__(self, objp4, name, fn):
        (
            self.objp4,
            self.__name__,
            self.fn
        ) = \
            (
                objp4,
                name,
                fn
            )

    def __repr__(self):
        return f'<Py4Bound {self.__name__}>'

    def resolve(self, resource):
        return resource or self.objp4.resource

    def __call__(self, resource=None, **options):
        return self.fn(self.objp4.service, self.resolve(resource), **options)

    def variant(self, name):
        if (not hasattr(self.fn, name)):
            raise AttributeError(f'`{self.__name__}` has no `{name}` variant')
        return getattr(self.fn, name)

    def submit(self, resource=None, **options):
        return self.variant('submit')(self.objp4.service, self.resolve(resource), **options)

    def raw(self, resource=None, **options):
        return self.variant('raw')(self.objp4.service, self.resolve(resource), **options)

    def ignoring_stderr(self, resource=None, **options):
        return self.variant('ignoring_stderr')(self.objp4.service, self.resolve(resource), **options)

    def ignoring_and_hiding_stderr(self, resource=None, **options):
        return self.variant('ignoring_and_hiding_stderr')(
            self.objp4.service,
            self.resolve(resource),
            **options
        )

class Py4(object):
    __str__ = __repr__ = lambda self: f'<Py4 {self.resource}>'

    def __init__(self, *args, **kwargs):
        (args, kwargs) = (Lst(args), Storage(kwargs))
        settings = Storage(
            {
                name: kwargs.pop(name) for (name, flag) in p4globals if (name in kwargs)
            }
        )
        path = kwargs.pop('path') \
            if ('path' in kwargs) \
            else args(0)
        command = kwargs.pop('p4') \
            if ('p4' in kwargs) \
            else None
        self.resource = kwargs.pop('resource') \
            if (kwargs.resource is not None) \
            else P4Resource.from_environment(path, command=command, **settings)
        if (kwargs.service is not None):
            self.service = kwargs.pop('service')
        else:
            logger = DLGControl(
                loggername='p4dispatch',
                loglevel=kwargs.loglevel or 'INFO',
                logfile=kwargs.logfile
            )
            strategies = Lst([CommandLineStrategy(logger=logger)]) \
                if (kwargs.cli_only is True) \
                else None
            self.service = P4Service(
                strategies=strategies,
                max_concurrent=kwargs.max_concurrent or 10,
                debug_mode=(kwargs.debug is True),
                logger=logger
            )
        self.logger = self.service.logger
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

    def __call__(self, **kwargs):
        ''' a connector sharing this one's service, with some settings replaced
        '''
        return Py4(resource=self.resource.replace(**kwargs), service=self.service)

    def __getitem__(self, key):
        return self.__getattr__(str(key))

    def __getattr__(self, cmdname):
        if (cmdname.startswith('__')):
            raise AttributeError(cmdname)
        from libcmd import commands
        fn = commands[cmdname]
        if (fn is None):
            raise NoSuchCommandError(cmdname)
        return Py4Bound(self, cmdname, fn)

    def commandslist(self):
        from libcmd import commands
        return Lst(sorted(commands.keys()))

    def submit(self, cmdname, resource=None, **options):
        ''' any command, as a Future

            * composite operations (no `submit` variant) run on their own
              thread, their p4 invocations still go through the limiter
        '''
        bound = self[cmdname]
        if (hasattr(bound.fn, 'submit')):
            return bound.submit(resource, **options)
        future = Future()

        def runop():
            try:
                future.set_result(bound(resource, **options))
            except BaseException as err:
                future.set_exception(err)

        threading.Thread(target=runop, name=f'p4op-{cmdname}', daemon=True).start()
        return future

    def run(self, command, *args, **kwargs):
        ''' p4 <command> <args>, the P4Data envelope as it came back
        '''
        kwargs = Storage(kwargs)
        return run_command_raw(
            self.service,
            kwargs.resource or self.resource,
            command,
            args=Lst(str(arg) for arg in args),
            input=kwargs.input,
            alternate=(kwargs.alternate is True)
        ).result()

def p4connector(*args, **kwargs):
    try:
        return Py4(*args, **kwargs)
    except Exception as err:
        bail(f'Unable to create a connector: {err}', exit=False)
