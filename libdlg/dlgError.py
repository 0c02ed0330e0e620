'''  [$File: //dev/p4dispatch/libdlg/dlgError.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

__all__ = [
    'DLGError',
    'P4CommandError',
    'P4DispatchError',
    'LimiterError',
    'NoSuchCommandError'
]

class DLGError(Exception):
    def __init__(self, msg=None):
        self.message = msg
        super(DLGError, self).__init__(msg)

    def __str__(self):
        return str(self.message)

class P4CommandError(DLGError):
    ''' the p4 tool itself reported an error (or stderr output
        that the command's policy does not tolerate)
    '''
    def __init__(self, msg, severity=None, code=None):
        DLGError.__init__(self, msg)
        (
            self.severity,
            self.code
        ) = \
            (
                severity,
                code
            )

    def __str__(self):
        return f'{self.message}'.rstrip()

class P4DispatchError(DLGError):
    def __init__(self, command, reason):
        DLGError.__init__(self, reason)
        self.command = command

    def __str__(self):
        return f'Unable to dispatch `{self.command}`: {self.message}'

class LimiterError(DLGError):
    def __str__(self):
        return f'Command limiter error: {self.message}'

class NoSuchCommandError(DLGError):
    def __init__(self, cmdname):
        DLGError.__init__(self, cmdname)
        self.cmdname = cmdname

    def __str__(self):
        return f'No such command `{self.cmdname}`'
