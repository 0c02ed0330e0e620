from enum import Enum

from libdlg.dlgStore import Storage, Lst
from libdlg.dlgDateTime import DLGDateTime
from libpy4.py4Data import is_structured, is_raw

'''  [$File: //dev/p4dispatch/libcmd/cmdTypes.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' the typed records the parsers hand back

    each is a Storage - a flat bag of (optional) fields, built from one
    normalized p4 record, never cached, never owned by another record.

        >>> change = ChangeInfo(chnum='421', user='bob', description=['line one'], is_pending=True)
        >>> change.chnum
        '421'
        >>> change.client is None
        True
'''

__all__ = [
    'ChangelistStatus',
    'Direction',
    'ChangeInfo',
    'DepotFileOperation',
    'FixedJob',
    'DescribedChangelist',
    'ShelvedChangeInfo',
    'ChangeSpec',
    'CreatedChangelist',
    'Job',
    'JobFix',
    'CreatedJob',
    'FstatInfo',
    'Annotation',
    'FileLogItem',
    'FileLogIntegration',
    'BranchInfo',
    'ClientInfo',
    'HaveFile',
    'SubmittedChangelist',
    'UnshelvedFile',
    'UnshelvedFiles',
    'structured_records',
    'raw_lines',
    'first_structured',
    'to_datetime',
    'to_p4date',
    'as_list'
]

class ChangelistStatus(str, Enum):
    PENDING = 'pending'
    SHELVED = 'shelved'
    SUBMITTED = 'submitted'

class Direction(str, Enum):
    TO = 'to'
    FROM = 'from'

class P4Record(Storage):
    __str__ = __repr__ = lambda self: f'<{type(self).__name__} {dict(self)}>'

class ChangeInfo(P4Record): pass
class DepotFileOperation(P4Record): pass
class FixedJob(P4Record): pass
class DescribedChangelist(ChangeInfo): pass
class ShelvedChangeInfo(P4Record): pass
class ChangeSpec(P4Record): pass
class CreatedChangelist(P4Record): pass
class Job(P4Record): pass
class JobFix(P4Record): pass
class CreatedJob(P4Record): pass
class FstatInfo(P4Record): pass
class Annotation(P4Record): pass
class FileLogItem(P4Record): pass
class FileLogIntegration(P4Record): pass
class BranchInfo(P4Record): pass
class ClientInfo(P4Record): pass
class HaveFile(P4Record): pass
class SubmittedChangelist(P4Record): pass
class UnshelvedFile(P4Record): pass
class UnshelvedFiles(P4Record): pass

''' envelope helpers shared by the parsers
'''
def structured_records(output):
    return Lst(record for record in output.records if is_structured(record))

def raw_lines(output):
    return Lst(record for record in output.records if is_raw(record))

def first_structured(output):
    return structured_records(output)(0)

oDateTime = DLGDateTime()

def to_datetime(epoch):
    ''' p4's epoch seconds (a str) -> datetime, None if there's nothing to convert
    '''
    if (epoch in (None, '')):
        return
    return oDateTime.to_datetime(epoch)

def to_p4date(epoch, datetype='datetime'):
    if (epoch in (None, '')):
        return
    return oDateTime.to_p4date(epoch, datetype=datetype)

def as_list(value):
    ''' a single path/chnum or a sequence of them -> Lst
    '''
    if (value is None):
        return Lst()
    if (isinstance(value, (str, int, dict))):
        return Lst([value])
    return Lst(value)
