import os, sys
import logging

from libdlg.dlgStore import Storage
from libdlg.dlgError import DLGError

'''  [$File: //dev/p4dispatch/libdlg/dlgLogger.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

__all__ = ['LogHandler', 'loglevels']

loglevels = Storage(
    {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
)

def make_logdir(logfile):
    logdir = os.path.dirname(logfile)
    if (not os.path.isdir(logdir)):
        os.makedirs(logdir, exist_ok=True)

class LogHandler(object):
    '''
    %(asctime)s
    %(name)s
    %(levelname)
    %(message)s
    %(module)s
    %(funcName)s
    %(lineno)d
    '''
    def __init__(
            self,
            loggername,
            loglevel=None,
            logfile=None,
            logger=None
    ):
        self.loglevel = (loglevel or 'INFO').upper()
        if (self.loglevel not in loglevels):
            raise DLGError(f'Invalid loglevel `{loglevel}`')
        self.logger = logger or logging.getLogger(loggername)
        self.logger.setLevel(loglevels[self.loglevel])
        self.formatter = logging.Formatter(
            fmt='\
%(asctime)s - \
%(name)s - \
%(levelname)s - \
%(module)s - \
%(funcName)s\t- \
%(lineno)d - \
%(message)s',
            datefmt='%m-%d %H:%M:%S'
        )
        self.handlers = []

        if (logfile is not None):
            logfile = os.path.abspath(logfile)
            make_logdir(logfile)
        self.logfile = logfile

    def get_filehandler(
            self,
            loglevel=logging.DEBUG,
            logfile=None,
            formatter=None
    ):
        logfile = logfile or self.logfile
        if (logfile is None):
            raise DLGError('A FileHandler requires a path to a logfile')
        filehandler = logging.FileHandler(logfile)
        filehandler.setLevel(loglevel)
        filehandler.setFormatter(formatter or self.formatter)
        return filehandler

    def get_streamhandler(
            self,
            loglevel=logging.DEBUG,
            formatter=None
    ):
        streamhandler = logging.StreamHandler(stream=sys.stderr)
        streamhandler.setLevel(loglevel)
        streamhandler.setFormatter(formatter or self.formatter)
        return streamhandler

    def get_nullhandler(
            self,
            loglevel=logging.DEBUG,
            formatter=None
    ):
        nullhandler = logging.NullHandler()
        nullhandler.setLevel(loglevel)
        nullhandler.setFormatter(formatter or self.formatter)
        return nullhandler

    def add_handlers(self, *handlers):
        ''' handlers are only ever added once per named logger
        '''
        if (len(self.logger.handlers) == 0):
            if (len(handlers) == 0):
                handlers = ['streamhandler'] \
                    if (self.logfile is None) \
                    else ['filehandler', 'streamhandler']
            ''' map handler name to logging handler
            '''
            kwhandler = Storage({'filehandler': self.get_filehandler,
                                 'streamhandler': self.get_streamhandler,
                                 'nullhandler': self.get_nullhandler})
            for handler in handlers:
                self.logger.addHandler(kwhandler[handler]())
                self.handlers.append(handler)
        return self

    def __call__(self, *args, **kwargs):
        return self
