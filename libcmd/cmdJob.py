import re

from libdlg.dlgStore import Lst
from libpy4.py4Args import flag_mapper
from libpy4.py4Run import Py4Command, output_handler
from libpy4.py4SpecIO import (
    parse_spec_string,
    parse_spec_output,
    find_field_value
)
from libcmd.cmdTypes import (
    Job,
    JobFix,
    CreatedJob,
    structured_records,
    first_structured,
    raw_lines,
    to_datetime
)

'''  [$File: //dev/p4dispatch/libcmd/cmdJob.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

__all__ = [
    'output_job',
    'get_job',
    'fixes',
    'input_raw_job_spec',
    'parse_created_job'
]

reg_created = re.compile(r'Job (\S*) (saved|not changed)')

output_job = Py4Command(
    'job',
    flag_mapper(
        [],
        lastarg='existing_job',
        fixedprefix=['-o'],
        lastarg_is_formatted=True
    ),
    name='output_job'
)

def first_line(fields, name):
    value = find_field_value(fields, name)
    if (value is not None):
        return value[0].strip()

def parse_job_spec(output):
    ''' `p4 job -o` comes back as a single record (-G) or as spec text
    '''
    record = first_structured(output)
    fields = parse_spec_string(record) \
        if (record is not None) \
        else parse_spec_output(output.rawtext())
    description = find_field_value(fields, 'Description')
    return Job(
        job=first_line(fields, 'Job'),
        status=first_line(fields, 'Status'),
        user=first_line(fields, 'User'),
        description='\n'.join(description) \
            if (description is not None) \
            else None,
        raw_fields=fields
    )

get_job = output_handler(output_job, parse_job_spec, name='get_job')

fixes_command = Py4Command(
    'fixes',
    flag_mapper([('j', 'job')]),
    name='fixes'
)

def parse_job_fix(record):
    if (
            (record.Job in (None, '')) |
            (record.Change in (None, ''))
    ):
        return
    return JobFix(
        job=record.Job,
        chnum=record.Change,
        date=to_datetime(record.Date),
        user=record.User or '',
        client=record.Client or '',
        status=record.Status or ''
    )

def parse_job_fixes(output):
    return Lst(
        fix for fix in (
            parse_job_fix(record) for record in structured_records(output)
        ) if (fix is not None)
    )

fixes = output_handler(fixes_command, parse_job_fixes, empty=Lst, name='fixes')

def parse_created_job(output):
    ''' 'Job job000008 saved.'

        * a server side trigger may fail after the job was saved, the
          job is still reported when its line made it to stdout
    '''
    rawoutput = output.rawtext()
    match = reg_created.search(rawoutput)
    return CreatedJob(
        raw_output=rawoutput,
        job=match.group(1) if (match is not None) else None
    )

input_raw_job = Py4Command(
    'job',
    lambda options: ['-i'],
    lambda options: {'input': options.input},
    name='input_raw_job'
)

input_raw_job_spec = output_handler(input_raw_job, parse_created_job, name='input_raw_job_spec')
