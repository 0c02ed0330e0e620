import re
import sys
import itertools
from pprint import pformat

from libdlg.dlgStore import Storage, Lst

'''  [$File: //dev/p4dispatch/libdlg/dlgUtilities.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

__all__ = [
    'to_native',
    'decode_bytes',
    'bail',
    'itemgrouper',
    'walk_indexed',
    'Flatten'
]

def to_native(obj, charset='utf8', errors='replace'):
    return obj.decode(charset, errors) \
        if (isinstance(obj, (bytes, bytearray))) \
        else obj

def decode_bytes(out, charset='utf8'):
    ''' normalize an unmarshalled p4 record to str keys/values

        * values are only ever decoded as text, never unmarshalled again
        * lists (P4Python returns lists for numbered fields) are decoded item by item
    '''
    if (isinstance(out, (bytes, bytearray))):
        return to_native(out, charset)
    if (isinstance(out, dict)):
        return Storage(
            {
                to_native(key, charset): decode_bytes(value, charset) for (key, value) in out.items()
            }
        )
    if (isinstance(out, (list, tuple))):
        return Lst(decode_bytes(item, charset) for item in out)
    return out

def bail(err, exit=True, exception=None, logger=None):
    ''' things gone wrong - log it, then exit or raise
    '''
    msg = err.message \
        if (hasattr(err, 'message')) \
        else pformat(err) \
        if (isinstance(err, dict) is True) \
        else err.args[0] \
        if (isinstance(err, Exception) and (len(err.args) > 0)) \
        else str(err)
    msg = f'Bailing...{msg}'

    if (logger is not None):
        logger(msg)

    if (exception is not None):
        raise exception(msg)
    elif (exit is True):
        sys.exit(msg)
    print(msg)

def itemgrouper(n, sequence):
    ''' chunk a sequence in groups of n (the last group may be shorter)

            >>> list(itemgrouper(2, ['a', 'b', 'c']))
            [['a', 'b'], ['c']]
    '''
    sentinel = object()
    args = ([iter(sequence)] * n)
    return (
        [item for item in izl if item is not sentinel] for izl in \
            itertools.zip_longest(*args, fillvalue=sentinel)
    )

def walk_indexed(record, key, prefix=''):
    ''' yield 0, 1, 2... for as long as `{key}{prefix}{idx}` exists in record

            >>> record = {'depotFile0': 'a', 'depotFile1': 'b', 'depotFile3': 'd'}
            >>> list(walk_indexed(record, 'depotFile'))
            [0, 1]

        the walk stops at the first missing index (no gap tolerance).
    '''
    idx = 0
    while (f'{key}{prefix}{idx}' in record):
        yield idx
        idx += 1

class Flatten(Storage):
    ''' Inherits Storage but used to reduce/expand numbered keys, as returned
        in marshalled output when setting the '-G' global option on p4 cmd lines

        I.e.:

           >>> output = {'Jobs0': 'job000123',
                         'Jobs1': 'job000456',
                         'Change': '421',
                         'Files0': '//depot/a.c\t# edit',
                         'Files1': '//depot/b.c\t# add'}

           >>> oFlat = Flatten(output)

        reduce (combine value of numbered keys in one list, in numeric order):

            >>> oFlat.reduce()
            <Flatten {'Change': '421',
                      'Files': ['//depot/a.c\t# edit', '//depot/b.c\t# add'],
                      'Jobs': ['job000123', 'job000456']}>

        expand (return to numbered keys):

            >>> oFlat.expand()
            <Flatten {'Change': '421',
                      'Files0': '//depot/a.c\t# edit',
                      'Files1': '//depot/b.c\t# add',
                      'Jobs0': 'job000123',
                      'Jobs1': 'job000456'}>

        nested lists (as P4Python returns them for `filelog`) expand
        to comma separated indices: {'file': [['a', 'b']]} -> {'file0,0': 'a', 'file0,1': 'b'}
    '''
    numex = re.compile(r'^(?P<name>.*?[^\d,])(?P<idx>\d+)$')

    def __init__(self, *args, **kwargs):
        super(Flatten, self).__init__()
        for arg in args:
            if (isinstance(arg, dict)):
                self.update(arg)
        self.update(kwargs)

    def __call__(self, *args, **kwargs):
        return self

    def get_numbered_keys(self, *fieldnames):
        ''' map each numbered field's base name to its (idx, key) pairs

            * if fieldnames are given, only those base names are considered
        '''
        numbered = Storage()
        for key in self.getkeys():
            if (not isinstance(key, str)):
                continue
            match = self.numex.match(key)
            if (match is None):
                continue
            name = match.group('name')
            if (
                    (len(fieldnames) > 0) &
                    (name not in fieldnames)
            ):
                continue
            if (numbered[name] is None):
                numbered[name] = Lst()
            numbered[name].append((int(match.group('idx')), key))
        return numbered

    def reduce(self, *fieldnames):
        for (name, numbered) in self.get_numbered_keys(*fieldnames).items():
            values = Lst(self.pop(key) for (idx, key) in sorted(numbered))
            if (name in self):
                values.appendleft(self.pop(name))
            self[name] = values
        return self

    def expand(self, addnewlines=False):
        fvalue = '{}\n' if (addnewlines is True) else '{}'
        for (key, value) in list(self.items()):
            if (isinstance(value, (list, tuple))):
                self.pop(key)
                for (idx, item) in enumerate(value):
                    if (isinstance(item, (list, tuple))):
                        for (subidx, subitem) in enumerate(item):
                            self[f'{key}{idx},{subidx}'] = fvalue.format(subitem)
                    else:
                        self[f'{key}{idx}'] = fvalue.format(item)
        return self
