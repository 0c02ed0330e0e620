import os
import re
from enum import Enum

from libdlg.dlgStore import Storage, Lst
from libdlg.dlgUtilities import itemgrouper

'''  [$File: //dev/p4dispatch/libpy4/py4Args.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' options -> p4 argument vector

    Every command declares (flag, fieldname) pairs, an optional trailing
    field (the positional args, typically files) & an optional fixed prefix:

        >>> submit_args = flag_mapper([('c', 'chnum'), ('d', 'description')], lastarg='file')
        >>> submit_args({'chnum': '12', 'description': 'Fix bug'})
        ['-c', '12', '-d', 'Fix bug']

        True            -> ['-f']
        False/None/''   -> nothing
        str/number      -> ['-f', 'value']
'''

__all__ = [
    'P4File',
    'flag_mapper',
    'make_flag',
    'expanse_path',
    'rev_or_label_as_suffix',
    'file_spec_to_arg',
    'paths_to_args',
    'split_into_chunks',
    'chunksize'
]

chunksize = 32
reg_revision = re.compile(r'^\d+$')
special_revisions = ('have', 'head', 'none')

def expanse_path(path):
    ''' escape the characters p4 reserves for revisions & wildcards in a local path
    '''
    return path.replace('%', '%25') \
               .replace('@', '%40') \
               .replace('#', '%23') \
               .replace('*', '%2A')

def rev_or_label_as_suffix(rev_or_label):
    ''' 3           -> '#3'
        'have'      -> '#have'
        '@=12'/#4   -> unchanged
        'my_label'  -> '@my_label'
    '''
    if (rev_or_label in (None, '')):
        return ''
    rev_or_label = str(rev_or_label)
    if (rev_or_label[0] in ('#', '@')):
        return rev_or_label
    if (
            (reg_revision.match(rev_or_label) is not None) |
            (rev_or_label in special_revisions)
    ):
        return f'#{rev_or_label}'
    return f'@{rev_or_label}'

class P4File(Storage):
    ''' a file as a command argument - a depot path or a local path, with
        an optional revision or label

            >>> P4File('//depot/main/a.c', 3)
            <P4File //depot/main/a.c#3>
            >>> P4File('/home/gc/work/a@b.c', 'rel_1.0')
            <P4File /home/gc/work/a%40b.c@rel_1.0>
    '''
    def __init__(self, path, rev_or_label=None, depot=None):
        super(P4File, self).__init__()
        path = str(path)
        if (depot is None):
            depot = path.startswith('//')
        self.update(
            path=path,
            rev_or_label=rev_or_label,
            depot=depot
        )

    def __repr__(self):
        return f'<P4File {self.to_arg()}>'

    __str__ = __repr__

    def is_depot(self):
        return (self.depot is True)

    def to_arg(self, ignore_revision_fragments=False):
        path = self.path \
            if (self.is_depot() is True) \
            else expanse_path(os.path.abspath(self.path))
        if (ignore_revision_fragments is True):
            return path
        return f'{path}{rev_or_label_as_suffix(self.rev_or_label)}'

def file_spec_to_arg(filespec, ignore_revision_fragments=False):
    return filespec.to_arg(ignore_revision_fragments=ignore_revision_fragments)

def paths_to_args(paths, ignore_revision_fragments=False):
    args = Lst()
    for path in (paths or []):
        if (isinstance(path, P4File)):
            args.append(file_spec_to_arg(path, ignore_revision_fragments))
        elif (path not in (None, '')):
            args.append(str(path))
    return args

def make_flag(flag, value):
    flagname = f'-{flag}'
    if (
            (value is None) |
            (value is False) |
            (value == '')
    ):
        return []
    if (value is True):
        return [flagname]
    if (isinstance(value, Enum)):
        value = value.value
    return [flagname, str(value)]

def lastarg_as_strings(lastarg, lastarg_is_formatted=False, ignore_revision_fragments=False):
    if (
            (lastarg is None) |
            (isinstance(lastarg, bool))
    ):
        return []
    if (isinstance(lastarg, (str, int, float))):
        return [str(lastarg)] \
            if (str(lastarg) != '') \
            else []
    if (isinstance(lastarg, P4File)):
        return [file_spec_to_arg(lastarg, ignore_revision_fragments)]
    if (lastarg_is_formatted is True):
        return [str(arg) for arg in lastarg if (arg not in (None, ''))]
    return paths_to_args(lastarg, ignore_revision_fragments)

def flag_mapper(
        flagnames,
        lastarg=None,
        fixedprefix=None,
        lastarg_is_formatted=False,
        ignore_revision_fragments=False
):
    ''' build the function that maps an options dict to an argument vector

        flagnames   - [(flag, fieldname), ...] I.e. [('c', 'chnum'), ('d', 'delete')]
        lastarg     - the field holding trailing args (I.e. files)
        fixedprefix - args that always come first (I.e. ['-l'])
    '''
    flagnames = Lst(flagnames)
    fixedprefix = Lst(fixedprefix or [])

    def mapper(options=None):
        options = Storage(options or {})
        args = fixedprefix.copy()
        for (flag, fieldname) in flagnames:
            args.merge(make_flag(flag, options[fieldname]))
        if (lastarg is not None):
            args.merge(
                lastarg_as_strings(
                    options[lastarg],
                    lastarg_is_formatted=lastarg_is_formatted,
                    ignore_revision_fragments=ignore_revision_fragments
                )
            )
        return args.clean()

    mapper.flagnames = flagnames
    mapper.lastarg = lastarg
    return mapper

def split_into_chunks(items, size=chunksize):
    return Lst(Lst(chunk) for chunk in itemgrouper(size, items))
