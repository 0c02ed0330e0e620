from libdlg.dlgLogger import LogHandler, loglevels

'''  [$File: //dev/p4dispatch/libdlg/dlgControl.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

__all__ = ['DLGControl']

class DLGControl(object):
    ''' logging entry point shared by the service, the limiter & the strategies

            >>> logger = DLGControl('p4dispatch', loglevel='DEBUG')
            >>> logger.loginfo('p4 -G info')

        levels below `loglevel` are routed to a no-op collector.
    '''
    def __init__(
            self,
            loggername='P4DISPATCH',
            loglevel='INFO',
            logfile=None,
            handlers=None
    ):
        self.oLogger = LogHandler(
            loggername,
            loglevel=loglevel,
            logfile=logfile
        )
        self.loglevel = self.oLogger.loglevel
        self.logfile = self.oLogger.logfile
        self.oLogger.add_handlers(*(handlers or []))
        self.logger = self.oLogger.logger
        ''' log levels
        '''
        threshold = loglevels[self.loglevel]
        (
            self.logdebug,
            self.loginfo,
            self.logwarning,
            self.logerror,
            self.logcritical
        ) = \
            (
                getattr(self.logger, levelname.lower()) \
                    if (loglevels[levelname] >= threshold) \
                    else self.logcollector
                for levelname in (
                    'DEBUG',
                    'INFO',
                    'WARNING',
                    'ERROR',
                    'CRITICAL'
                )
            )

    def logcollector(self, msg, *args, **kwargs):
        pass

    def __call__(self, *args, **kwargs):
        return self
