from pprint import pformat

'''  [$File: //dev/p4dispatch/libdlg/dlgStore.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

__all__ = [
    'Lst',
    'Storage',
    'objectify'
]

class Lst(list):
    ''' a list that won't raise on a bad index when called

            >>> args = Lst('-c', '12')
            >>> args(1)
            '12'
            >>> args(5) is None
            True
    '''
    __hash__ = lambda self: hash(frozenset(self))

    def __init__(self, *args):
        if (len(args) == 0):
            args = list()
        elif (len(args) == 1):
            args = args[0] \
                if (isinstance(args[0], list)) \
                else list(args[0])
        else:
            args = list(args)
        super(Lst, self).__init__(args)

    def __call__(self, idx, default=None):
        ''' Don't raise an exception on IndexError, return default
        '''
        return self[idx] \
            if (self.idx_is_valid(idx, len(self)) is True) \
            else default

    def copy(self):
        return Lst(self[:])

    def idx_is_valid(self, idx, length):
        try:
            return (
                    (
                            (0 <= idx < length)
                    ) |
                    (
                            (-length <= idx < 0)
                    )
            )
        except TypeError:
            return False

    def clean(self, *args):
        ''' remove items from a copy without affecting the original

                * by default, remove '', None, [], {} & ()
        '''
        if (len(args) == 0):
            args = (
                '',
                None,
                [],
                {},
                ()
            )
        return Lst(item for item in self if (item not in args))

    def appendleft(self, value):
        self.insert(0, value)

    def diff(self, *args):
        other = set(args[0]) \
            if (len(args) == 1) \
            else set(args)
        return Lst(item for item in self if (item not in other))

    def merge(self, *arglists):
        ''' merge Lst, [], () or *items into self (in place)
        '''
        for arg in arglists:
            if (isinstance(arg, (list, tuple)) is False):
                arg = [arg]
            self += arg
        return self

class Storage(dict):
    ''' a dict with object-like attributes (and a few convenient methods)

            >>> record = Storage({'change': '421', 'user': 'bob'})
            >>> record.change
            '421'
            >>> record.client is None
            True
    '''
    __slots__ = ()
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__
    __getitem__ = dict.get
    __call__ = __getitem__
    __getstate__ = lambda self: None
    __str__ = __repr__ = lambda self: f'<{type(self).__name__} {pformat(dict(self))}>'

    def __getattr__(self, key):
        if (key.startswith('__')):
            raise AttributeError(key)
        if (key in self):
            return self[key]
        keysmap = self.keysmap()
        if (key.lower() in keysmap):
            return self[keysmap[key.lower()]]

    def __setstate__(self, state):
        pass

    def __copy__(self):
        ''' subclasses (P4Data, P4Resource...) have their own __init__ signatures,
            the copy is made without calling it
        '''
        clone = type(self).__new__(type(self))
        dict.update(clone, self)
        return clone

    def keysmap(self):
        return {
            str(key).lower(): key for key in self.keys()
        }

    def get(self, key, default=None):
        value = dict.get(self, key)
        if (value is None):
            realkey = self.keysmap().get(str(key).lower())
            if (realkey is not None):
                value = dict.get(self, realkey)
        return default \
            if (value is None) \
            else value

    @staticmethod
    def objectify(any):
        return Storage(
            {
                key: Storage.objectify(value) for (key, value) in any.items()
            }
        ) \
            if (type(any) in (dict, Storage)) \
            else Lst(Storage.objectify(value) for value in any) \
            if (
                type(any) in (
                    list,
                    tuple,
                    Lst
                )
            ) \
            else any

    def delete(self, *keys):
        for key in keys:
            if (key in self):
                self.__delitem__(key)
        return self

    def getkeys(self):
        return Lst(self.keys())

    def merge(self, *args, **kwargs):
        ''' a non-destructive update: None values never overwrite
        '''
        for anydict in args + (kwargs,):
            for (key, value) in anydict.items():
                if (value is not None):
                    self[key] = value
        return self

    def exclude(self, *args):
        ''' exclude keys but don't modify original
        '''
        return type(self)(
            {
                key: value for (key, value) in self.items() if (key not in args)
            }
        )

objectify = Storage.objectify
