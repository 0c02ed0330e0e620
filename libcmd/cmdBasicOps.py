import re

from libdlg.dlgStore import Storage, Lst
from libdlg.dlgError import P4CommandError
from libpy4.py4Args import flag_mapper
from libpy4.py4Run import Py4Command, output_handler
from libcmd.cmdTypes import (
    HaveFile,
    SubmittedChangelist,
    UnshelvedFile,
    UnshelvedFiles,
    structured_records,
    first_structured
)

'''  [$File: //dev/p4dispatch/libcmd/cmdBasicOps.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' the everyday commands: open/revert/submit/shelve files, sync, login, info...

        >>> add(oService, oResource, chnum='12', files=[P4File('/home/bob/work/a.c')])
        >>> submit_changelist(oService, oResource, chnum='12', description='Fix bug')
        <SubmittedChangelist {'raw_output': 'Change 12 submitted.', 'chnum': '12'}>
        >>> have_file(oService, oResource, file=P4File('//depot/nope.c'))
        False
'''

__all__ = [
    'delete_changelist',
    'submit_changelist',
    'revert',
    'delete',
    'shelve',
    'unshelve',
    'fix_job',
    'reopen_files',
    'sync',
    'info',
    'get_info',
    'get_client_root',
    'get_config_filename',
    'have',
    'have_file',
    'login',
    'is_logged_in',
    'logout',
    'resolve',
    'add',
    'edit',
    'move',
    'not_logged_in_message'
]

not_logged_in_message = 'Perforce password (P4PASSWD) invalid or unset'

reg_submitted = re.compile(r'Change (\d+) submitted')
reg_must_resolve = re.compile(r'(.*?) - must resolve (.*?) before submitting')
reg_info_line = re.compile(r'([^:]+): (.+)')
reg_set_line = re.compile(r'^(?P<name>\w+)=(?P<value>.*?)(\s+\(.*\))?$')

log_stdout = lambda options: {'log_stdout': True}

delete_changelist = Py4Command(
    'change',
    flag_mapper([('d', 'chnum')]),
    log_stdout,
    name='delete_changelist'
)

submit_command = Py4Command(
    'submit',
    flag_mapper(
        [
            ('c', 'chnum'),
            ('d', 'description')
        ],
        lastarg='file'
    ),
    log_stdout,
    name='submit'
)

def parse_submit_output(output):
    ''' 'Change 12 submitted.' (text) or {'submittedChange': '12'} (P4Python)
    '''
    rawoutput = output.rawtext()
    match = reg_submitted.search(rawoutput)
    chnum = match.group(1) \
        if (match is not None) \
        else None
    for record in structured_records(output):
        if (record.submittedChange is not None):
            chnum = record.submittedChange
    return SubmittedChangelist(raw_output=rawoutput, chnum=chnum)

submit_changelist = output_handler(submit_command, parse_submit_output, name='submit_changelist')

revert = Py4Command(
    'revert',
    flag_mapper(
        [
            ('a', 'unchanged'),
            ('c', 'chnum')
        ],
        lastarg='paths',
        ignore_revision_fragments=True
    ),
    log_stdout
)

delete = Py4Command(
    'delete',
    flag_mapper([('c', 'chnum')], lastarg='paths'),
    log_stdout
)

shelve = Py4Command(
    'shelve',
    flag_mapper(
        [
            ('f', 'force'),
            ('d', 'delete'),
            ('c', 'chnum')
        ],
        lastarg='paths'
    ),
    log_stdout
)

unshelve_command = Py4Command(
    'unshelve',
    flag_mapper(
        [
            ('f', 'force'),
            ('s', 'shelved_chnum'),
            ('c', 'to_chnum'),
            ('b', 'branch_mapping')
        ],
        lastarg='paths'
    ),
    log_stdout,
    name='unshelve'
)

def parse_unshelve_output(output):
    ''' opened files are records, "must resolve" notices come back as text
    '''
    (
        files,
        warnings
    ) = \
        (
            Lst(),
            Lst()
        )
    for record in output.records:
        if (isinstance(record, dict)):
            if (
                    (record.depotFile not in (None, '')) &
                    (record.action not in (None, ''))
            ):
                files.append(UnshelvedFile(depot_path=record.depotFile, operation=record.action))
            continue
        match = reg_must_resolve.search(record)
        if (match is not None):
            warnings.append(
                Storage(
                    depot_path=match.group(1),
                    resolve_path=match.group(2)
                )
            )
    return UnshelvedFiles(files=files, warnings=warnings)

unshelve = output_handler(unshelve_command, parse_unshelve_output, name='unshelve')

fix_job = Py4Command(
    'fix',
    flag_mapper(
        [
            ('c', 'chnum'),
            ('d', 'remove_fix')
        ],
        lastarg='job_id'
    ),
    name='fix_job'
)

reopen_files = Py4Command(
    'reopen',
    flag_mapper([('c', 'chnum')], lastarg='files'),
    name='reopen_files'
)

sync = Py4Command(
    'sync',
    flag_mapper([], lastarg='files'),
    lambda options: {'log_stdout': True} \
        if (options.files is not None) \
        else {}
)

info = Py4Command('info')

def parse_info(output):
    ''' `Key: Value` lines (text) and/or the keys of a tagged record
    '''
    infos = Storage()
    for record in output.records:
        if (isinstance(record, dict)):
            for (key, value) in record.items():
                if (value not in (None, '')):
                    infos[key] = str(value)
            continue
        for line in re.split(r'\r?\n', record.strip()):
            match = reg_info_line.match(line)
            if (match is not None):
                infos[match.group(1)] = match.group(2)
    return infos

get_info = output_handler(info, parse_info, empty=Storage, name='get_info')

def get_client_root(service, resource):
    infos = get_info(service, resource)
    root = infos.get('Client root') or infos.get('clientRoot')
    if (root not in (None, '*unknown*')):
        return root

''' `p4 set` reads the client side registry/environment, there's no server round trip
'''
set_command = Py4Command(
    'set',
    lambda options: Lst(['-q', options.name]).clean(),
    lambda options: {'alternate': True},
    name='set'
)

def parse_config_filename(output):
    ''' `p4 set -q P4CONFIG` -> 'P4CONFIG=.p4config'
    '''
    for line in output.raw():
        match = reg_set_line.match(line.strip())
        if (
                (match is not None) and
                (match.group('name') == 'P4CONFIG')
        ):
            return match.group('value')

get_set_value = output_handler(set_command, parse_config_filename, name='get_config_filename')

def get_config_filename(service, resource):
    return get_set_value(service, resource, override={'stderr_is_ok': True}, name='P4CONFIG')

have_command = Py4Command(
    'have',
    flag_mapper([], lastarg='file', ignore_revision_fragments=True),
    name='have'
)

def parse_have_output(output):
    record = first_structured(output)
    if (record is not None):
        return HaveFile(
            depot_path=record.depotFile,
            revision=record.haveRev,
            local_path=record.path
        )

def have(service, resource, **options):
    ''' the HaveFile record, None where we don't have the file
    '''
    output = have_command.ignoring_stderr(service, resource, **options)
    return parse_have_output(output)

def have_file(service, resource, **options):
    ''' anything on stdout means we have it, stderr means we don't
    '''
    output = have_command.ignoring_and_hiding_stderr(service, resource, **options)
    return (len(output.records) > 0)

login = Py4Command(
    'login',
    lambda options: [],
    lambda options: {'input': options.password}
)

login_status = Py4Command(
    'login',
    lambda options: ['-s'],
    name='login_status'
)

def is_logged_in(service, resource):
    try:
        output = login_status(service, resource)
    except P4CommandError:
        return False
    return (not_logged_in_message not in output.rawtext())

logout = Py4Command('logout')

''' resolve needs the p4 executable (it may prompt), P4Python is skipped
'''
resolve = Py4Command(
    'resolve',
    flag_mapper(
        [
            ('c', 'chnum'),
            ('f', 'reresolve')
        ],
        lastarg='files',
        ignore_revision_fragments=True
    ),
    lambda options: {'alternate': True}
)

add = Py4Command(
    'add',
    flag_mapper([('c', 'chnum')], lastarg='files', ignore_revision_fragments=True),
    log_stdout
)

edit = Py4Command(
    'edit',
    flag_mapper([('c', 'chnum')], lastarg='files', ignore_revision_fragments=True),
    log_stdout
)

move = Py4Command(
    'move',
    flag_mapper([('c', 'chnum')], lastarg='from_to_file'),
    log_stdout
)
