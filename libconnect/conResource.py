import os

from libdlg.dlgStore import Storage, Lst

'''  [$File: //dev/p4dispatch/libconnect/conResource.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' A resource context: which file or folder a command is about & the p4
    settings that apply to it.

        >>> oResource = P4Resource('/home/gc/projects/p4dispatch/dlg.py',
                                   user='zerdlg',
                                   port='anastasia.local:1777',
                                   client='computer_p4dispatch')
        >>> oResource.working_dir()
        '/home/gc/projects/p4dispatch'
        >>> oResource.global_args()
        ['-u', 'zerdlg', '-c', 'computer_p4dispatch', '-p', 'anastasia.local:1777']

    'none' (any case) or '' mean unset, unset values are never passed to p4.
'''

__all__ = ['P4Resource', 'p4globals', 'is_unset']

''' setting name -> p4 global flag, in the order they are passed
'''
p4globals = (
    ('user', '-u'),
    ('client', '-c'),
    ('port', '-p'),
    ('password', '-P'),
    ('dir', '-d'),
    ('charset', '-C')
)

p4environ = Storage(
    {
        'user': 'P4USER',
        'client': 'P4CLIENT',
        'port': 'P4PORT',
        'password': 'P4PASSWD',
        'charset': 'P4CHARSET'
    }
)

def is_unset(value):
    return (
            (value is None) or
            (str(value).strip() == '') or
            (str(value).strip().lower() == 'none')
    )

class P4Resource(Storage):
    def __init__(
            self,
            path=None,
            user=None,
            client=None,
            port=None,
            password=None,
            dir=None,
            charset=None,
            command=None
    ):
        super(P4Resource, self).__init__()
        self.update(
            path=path,
            user=user,
            client=client,
            port=port,
            password=password,
            dir=dir,
            charset=charset,
            command=command
        )

    def __repr__(self):
        return f'<P4Resource {self.path or os.getcwd()} ({" ".join(self.display_args())})>'

    __str__ = __repr__

    @classmethod
    def from_environment(cls, path=None, **overrides):
        ''' P4USER, P4CLIENT, P4PORT, P4PASSWD & P4CHARSET, unless overridden
        '''
        settings = Storage(
            {
                name: os.environ.get(envname) for (name, envname) in p4environ.items()
            }
        )
        settings.merge(overrides)
        return cls(path=path, **settings)

    def replace(self, **kwargs):
        settings = Storage(self)
        settings.update(**kwargs)
        return type(self)(**settings)

    def working_dir(self):
        ''' the path itself if it is a directory, its parent otherwise
        '''
        if (is_unset(self.path) is True):
            return os.getcwd()
        path = os.path.abspath(os.path.expanduser(self.path))
        return path \
            if (os.path.isdir(path) is True) \
            else os.path.dirname(path)

    def command_path(self):
        if (is_unset(self.command) is False):
            return self.command
        return 'p4.exe' \
            if (os.name == 'nt') \
            else 'p4'

    def settings(self):
        ''' the p4 settings that are actually set
        '''
        return Storage(
            {
                name: self[name] for (name, flag) in p4globals \
                    if (is_unset(self[name]) is False)
            }
        )

    def global_args(self):
        args = Lst()
        for (name, flag) in p4globals:
            value = self[name]
            if (is_unset(value) is False):
                args.merge([flag, str(value)])
        return args

    def display_args(self):
        ''' global_args, safe for a log line
        '''
        args = self.global_args()
        if ('-P' in args):
            args[args.index('-P') + 1] = '***'
        return args
