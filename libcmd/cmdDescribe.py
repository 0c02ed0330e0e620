from libdlg.dlgStore import Lst
from libdlg.dlgUtilities import walk_indexed
from libpy4.py4Args import flag_mapper
from libpy4.py4Run import Py4Command, output_handler
from libcmd.cmdChanges import split_description
from libcmd.cmdTypes import (
    DescribedChangelist,
    DepotFileOperation,
    FixedJob,
    ShelvedChangeInfo,
    ChangelistStatus,
    structured_records,
    to_datetime,
    as_list
)

'''  [$File: //dev/p4dispatch/libcmd/cmdDescribe.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' p4 describe [-S] [-s] chnum...

        >>> describe(oService, oResource, chnums=['421'], omit_diffs=True)
        [<DescribedChangelist {'chnum': '421', 'affected_files': [...], 'fixed_jobs': [...]}>]

    numbered fields (depotFile0, rev0, action0... job0, jobstat0...) are
    walked from 0 up to the first missing index.
'''

__all__ = [
    'describe_command',
    'describe',
    'get_shelved_files',
    'get_fixed_jobs',
    'parse_describe_changelist'
]

describe_command = Py4Command(
    'describe',
    flag_mapper(
        [
            ('S', 'shelved'),
            ('s', 'omit_diffs')
        ],
        lastarg='chnums',
        lastarg_is_formatted=True
    )
)

def depot_files(record):
    return Lst(
        DepotFileOperation(
            depot_path=record[f'depotFile{idx}'],
            revision=record[f'rev{idx}'] or '',
            operation=record[f'action{idx}'] or ''
        ) for idx in walk_indexed(record, 'depotFile')
    )

def fixed_jobs(record):
    return Lst(
        FixedJob(
            id=record[f'job{idx}'],
            description=split_description(record[f'jobstat{idx}'] or '', dropblanks=False)
        ) for idx in walk_indexed(record, 'job')
    )

def parse_describe_changelist(record, shelved=False):
    if (not isinstance(record, dict)):
        return
    chnum = record.get('change')
    if (chnum in (None, '')):
        return
    files = depot_files(record)
    return DescribedChangelist(
        chnum=chnum,
        user=record.get('user'),
        client=record.get('client'),
        description=split_description(record.get('desc'), dropblanks=False),
        is_pending=(record.get('status') == ChangelistStatus.PENDING.value),
        status=record.get('status'),
        date=to_datetime(record.get('time')),
        affected_files=Lst() if (shelved is True) else files,
        shelved_files=files if (shelved is True) else Lst(),
        fixed_jobs=fixed_jobs(record)
    )

def parse_describe_output(output, shelved=False):
    return Lst(
        described for described in (
            parse_describe_changelist(record, shelved=shelved) for record in structured_records(output)
        ) if (described is not None)
    )

def describe(service, resource, chnums=None, omit_diffs=False, shelved=False):
    handler = output_handler(
        describe_command,
        lambda output: parse_describe_output(output, shelved=(shelved is True)),
        empty=Lst,
        name='describe'
    )
    return handler(
        service,
        resource,
        chnums=as_list(chnums),
        omit_diffs=omit_diffs,
        shelved=shelved
    )

def parse_shelved_describe_output(output):
    shelved = Lst()
    for record in structured_records(output):
        paths = Lst(record[f'depotFile{idx}'] for idx in walk_indexed(record, 'depotFile'))
        if (
                (len(paths) > 0) and
                (record.get('change') is not None)
        ):
            shelved.append(ShelvedChangeInfo(chnum=int(record.get('change')), paths=paths))
    return shelved

get_shelved_describe = output_handler(
    describe_command,
    parse_shelved_describe_output,
    empty=Lst,
    name='get_shelved_files'
)

def get_shelved_files(service, resource, chnums=None):
    ''' the shelved depot paths of each changelist (those with none are left out)
    '''
    chnums = as_list(chnums)
    if (len(chnums) == 0):
        return Lst()
    return get_shelved_describe(
        service,
        resource,
        chnums=chnums,
        omit_diffs=True,
        shelved=True
    )

def get_fixed_jobs(service, resource, chnum=None):
    described = describe(service, resource, chnums=[chnum], omit_diffs=True)
    if (len(described or []) == 0):
        return Lst()
    return Lst(
        FixedJob(
            id=job.id,
            description=job.description \
                if (isinstance(job.description, list)) \
                else Lst([job.description])
        ) for job in described[0].fixed_jobs
    )
