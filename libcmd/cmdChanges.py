from libdlg.dlgStore import Lst
from libpy4.py4Args import flag_mapper
from libpy4.py4Run import Py4Command, output_handler
from libcmd.cmdTypes import (
    ChangeInfo,
    ChangelistStatus,
    structured_records,
    to_datetime
)

'''  [$File: //dev/p4dispatch/libcmd/cmdChanges.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' p4 changes -l

    options: client, status (pending|shelved|submitted), user, max_changelists, files

        >>> get_changelists(oService, oResource, status='pending', user='bob')
        [<ChangeInfo {'chnum': '421', 'user': 'bob', ...}>]
'''

__all__ = ['changes', 'get_changelists', 'parse_changelist', 'split_description']

changes = Py4Command(
    'changes',
    flag_mapper(
        [
            ('c', 'client'),
            ('s', 'status'),
            ('u', 'user'),
            ('m', 'max_changelists')
        ],
        lastarg='files',
        fixedprefix=['-l']
    )
)

def split_description(desc, dropblanks=True):
    ''' `desc` may carry real or escaped (\\n) line breaks
    '''
    if (desc in (None, '')):
        return Lst()
    lines = Lst(str(desc).replace('\\n', '\n').split('\n'))
    if (dropblanks is True):
        return Lst(line for line in lines if (line.strip() != ''))
    return lines

def parse_changelist(record):
    if (not isinstance(record, dict)):
        return
    chnum = record.get('change')
    if (chnum in (None, '')):
        return
    status = record.get('status')
    return ChangeInfo(
        chnum=chnum,
        user=record.get('user'),
        client=record.get('client'),
        description=split_description(record.get('desc')),
        is_pending=(status == ChangelistStatus.PENDING.value),
        status=status,
        date=to_datetime(record.get('time'))
    )

def parse_changes_output(output):
    return Lst(
        change for change in (
            parse_changelist(record) for record in structured_records(output)
        ) if (change is not None)
    )

get_changelists = output_handler(changes, parse_changes_output, empty=Lst, name='get_changelists')
