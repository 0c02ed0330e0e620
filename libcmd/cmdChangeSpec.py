import re

from libdlg.dlgStore import Lst
from libpy4.py4Data import RawField
from libpy4.py4Args import flag_mapper
from libpy4.py4Run import (
    Py4Command,
    output_handler,
    concat_if_output_is_defined
)
from libpy4.py4SpecIO import (
    parse_spec_string,
    change_status_to_pending,
    find_field_value,
    fields_to_spec_text,
    convert_indexed_fields_to_spec_format,
    change_indexed_fields
)
from libcmd.cmdTypes import (
    ChangeSpec,
    CreatedChangelist,
    DepotFileOperation,
    raw_lines,
    first_structured
)

'''  [$File: //dev/p4dispatch/libcmd/cmdChangeSpec.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' p4 change -o [chnum]  /  p4 change -i

        >>> spec = get_change_spec(oService, oResource)
        >>> spec.description = 'Fix bug'
        >>> input_change_spec(oService, oResource, spec=spec)
        <CreatedChangelist {'raw_output': 'Change 377 created.', 'chnum': '377'}>
'''

__all__ = [
    'output_change',
    'get_change_spec',
    'input_change_spec',
    'input_raw_change_spec',
    'parse_created_changelist',
    'change_spec_fields'
]

reg_created = re.compile(r'Change\s(\d+)\s')

output_change = Py4Command(
    'change',
    flag_mapper(
        [],
        lastarg='existing_changelist',
        fixedprefix=['-o'],
        lastarg_is_formatted=True
    ),
    name='output_change'
)

def parse_output_change_spec(output):
    fields = change_status_to_pending(
        parse_spec_string(first_structured(output), change_indexed_fields)
    )
    change = find_field_value(fields, 'Change')
    description = find_field_value(fields, 'Description')
    files = find_field_value(fields, 'Files')
    return ChangeSpec(
        change=change[0].strip() \
            if (change is not None) \
            else None,
        description='\n'.join(description) \
            if (description is not None) \
            else None,
        files=Lst(
            DepotFileOperation(depot_path=depot_path.strip(), action='') \
                for depot_path in files if (depot_path.strip() != '')
        ) if (files is not None) \
            else None,
        raw_fields=fields
    )

get_change_spec = output_handler(
    output_change,
    parse_output_change_spec,
    name='get_change_spec'
)

''' the fields a ChangeSpec overrides
'''
change_as_field = lambda spec: RawField('Change', [spec.change]) \
    if (spec.change not in (None, '')) \
    else None

description_as_field = lambda spec: RawField('Description', re.split(r'\r?\n', spec.description)) \
    if (spec.description not in (None, '')) \
    else None

files_as_field = lambda spec: RawField(
    'Files',
    [f'{file.depot_path}\t# {file.action or ""}' for file in spec.files]
) if (spec.files is not None) \
    else None

def change_spec_fields(spec):
    ''' the raw fields, minus those the spec overrides, followed by
        the overriding fields (Change, Description, Files)
    '''
    overridden = Lst(
        name for (name, fieldname) in (
            ('Change', 'change'),
            ('Description', 'description'),
            ('Files', 'files')
        ) if (spec[fieldname] not in (None, ''))
    )
    fields = Lst(field for field in (spec.raw_fields or []) if (field.name not in overridden))
    fields.merge(
        concat_if_output_is_defined(
            change_as_field,
            description_as_field,
            files_as_field
        )(spec)
    )
    return fields

def parse_created_changelist(output):
    ''' 'Change 377 created.' / 'Change 377 updated.'
    '''
    rawoutput = raw_lines(output)(0)
    if (rawoutput is None):
        record = first_structured(output)
        rawoutput = record.data if (record is not None) else None
    match = reg_created.search(rawoutput or '')
    return CreatedChangelist(
        raw_output=rawoutput,
        chnum=match.group(1) if (match is not None) else None
    )

input_change = Py4Command(
    'change',
    lambda options: ['-i'],
    lambda options: {'input': fields_to_spec_text(change_spec_fields(options.spec))},
    name='input_change'
)

input_raw_change = Py4Command(
    'change',
    lambda options: ['-i'],
    lambda options: {'input': convert_indexed_fields_to_spec_format(options.input)},
    name='input_raw_change'
)

input_change_spec = output_handler(
    input_change,
    parse_created_changelist,
    name='input_change_spec'
)

input_raw_change_spec = output_handler(
    input_raw_change,
    parse_created_changelist,
    name='input_raw_change_spec'
)
