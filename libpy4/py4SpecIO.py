import re

from libdlg.dlgStore import Storage, Lst
from libdlg.dlgUtilities import Flatten
from libpy4.py4Data import RawField

'''  [$File: //dev/p4dispatch/libpy4/py4SpecIO.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' Specs (change, job, client...) as lists of RawField, to & from the 2
    wire formats p4 speaks:

    the legacy text format (`p4 change -o` without -G):

        Change:	new

        Description:
        	line one
        	line two

        Files:
        	//depot/a.c	# edit

    the flattened record (`p4 -G change -o` or P4Python):

        {'Change': 'new',
         'Description': 'line one\\nline two\\n',
         'Files0': '//depot/a.c\\t# edit'}

        >>> fields = parse_spec_string(record)
        >>> [(field.name, field.value) for field in fields]
        [('Change', ['new']), ('Description', ['line one', 'line two']), ('Files', ['//depot/a.c\\t# edit'])]
'''

__all__ = [
    'change_fields',
    'change_indexed_fields',
    'spec_indexed_fields',
    'parse_spec_output',
    'parse_spec_string',
    'find_field_value',
    'change_status_to_pending',
    'fields_to_spec_text',
    'fields_to_record',
    'convert_indexed_fields_to_spec_format'
]

''' the fields p4 accepts in a change spec. Jobs & Files are indexed
    (Jobs0, Jobs1... Files0, Files1...)
'''
change_fields = (
    'Change',
    'Date',
    'Client',
    'User',
    'Status',
    'Type',
    'ImportedBy',
    'Identity',
    'Description',
    'JobStatus',
    'Jobs',
    'Stream',
    'Files'
)
change_indexed_fields = (
    'Jobs',
    'Files'
)

''' multi-value fields across spec types
'''
spec_indexed_fields = change_indexed_fields + (
    'View',
    'ChangeView',
    'Paths',
    'Remapped',
    'Ignored',
    'Users',
    'Owners',
    'Subgroups',
    'Protections',
    'TypeMap',
    'Triggers',
    'Fields',
    'Values',
    'Presets',
    'Openable',
    'Readonly'
)

''' fields whose single value may span several lines
'''
multiline_fields = ('Description',)

reg_sections = re.compile(r'\r*?\n\r*?\n')
reg_lines = re.compile(r'\r*?\n')
reg_indexed_key = re.compile(r'^(?P<name>[A-Za-z]+)(?P<idx>\d+)$')
reg_indexed_line = re.compile(r'^(?P<name>[A-Za-z]+)(?P<idx>\d+):\s*(?P<value>.*)$')
reg_field_line = re.compile(r'^(?P<name>[A-Za-z]+\d*):(?P<value>.*)$')
reg_blanklines = re.compile(r'(\r?\n){3,}')

def parse_raw_field(value):
    ''' tab-indented continuation lines -> values, trailing blank lines dropped
    '''
    value = re.sub(r'^\r*?\n', '', value)
    lines = Lst(re.sub(r'^\t', '', line) for line in reg_lines.split(value))
    while (
            (len(lines) > 1) &
            (lines(-1) == '')
    ):
        lines.pop()
    return lines

def parse_spec_output(text):
    ''' the legacy text format -> [RawField, ...]

        * sections are separated by a blank line
        * `#` comment sections are skipped
    '''
    fields = Lst()
    if (not isinstance(text, str)):
        return fields
    for section in reg_sections.split(text):
        if (
                (section == '') |
                (section.startswith('#'))
        ):
            continue
        colpos = section.find(':')
        if (colpos < 1):
            continue
        name = section[:colpos]
        fields.append(RawField(name, parse_raw_field(section[(colpos + 2):])))
    return fields

def split_value(name, value):
    value = str(value)
    if (name in multiline_fields):
        return Lst(
            line for line in value.replace('\\n', '\n').split('\n') if (len(line) > 0)
        )
    return Lst([re.sub(r'(\\n|\r?\n)+$', '', value)])

def parse_spec_string(record, indexedfields=spec_indexed_fields):
    ''' a flattened spec record -> [RawField, ...]

        * `<Name><digits>` keys of a known indexed field are collected, in
          numeric order, into a single field (where the first one was seen)
        * anything that isn't a dict yields []
    '''
    if (isinstance(record, (list, tuple))):
        record = Lst(record)(0)
    if (not isinstance(record, dict)):
        return Lst()
    (
        fields,
        byname,
        indices
    ) = \
        (
            Lst(),
            Storage(),
            Storage()
        )
    for (key, value) in record.items():
        if (value is None):
            continue
        key = str(key)
        match = reg_indexed_key.match(key)
        if (
                (match is not None) and
                (match.group('name') in indexedfields)
        ):
            name = match.group('name')
            if (byname[name] is None):
                byname[name] = RawField(name, [])
                byname[name].value = Lst()
                indices[name] = Lst()
                fields.append(byname[name])
            indices[name].append((int(match.group('idx')), split_value(name, value)))
        else:
            if (isinstance(value, (list, tuple))):
                ''' not flattened yet (I.e. straight from P4Python)
                '''
                values = Lst()
                for item in value:
                    values.merge(split_value(key, item))
                field = RawField(key, values)
            else:
                field = RawField(key, split_value(key, value))
            fields.append(field)
    for (name, numbered) in indices.items():
        values = Lst()
        for (idx, lines) in sorted(numbered, key=lambda item: item[0]):
            values.merge(lines)
        byname[name].value = values or Lst([''])
    return fields

def find_field_value(fields, name):
    for field in fields:
        if (field.name == name):
            return field.value

def change_status_to_pending(fields):
    ''' `p4 change -o` says `new` where callers mean `pending`
    '''
    return Lst(
        RawField('Status', ['pending']) \
            if (
                (field.name == 'Status') and
                (Lst(field.value)(0) == 'new')
            ) \
            else field for field in fields
    )

def fields_to_spec_text(fields):
    ''' [RawField, ...] -> the legacy text format
    '''
    return '\n\n'.join(
        f'{field.name}:\n\t' + '\n\t'.join(field.value) for field in fields
    )

def fields_to_record(fields, indexedfields=spec_indexed_fields):
    ''' [RawField, ...] -> a flattened spec record (Files0, Files1...)
    '''
    record = Flatten()
    for field in fields:
        if (field.name in indexedfields):
            record[field.name] = Lst(field.value)
        else:
            record[field.name] = '\n'.join(field.value)
    return Storage(record.expand())

def convert_indexed_fields_to_spec_format(
        text,
        validfields=change_fields,
        indexedfields=change_indexed_fields
):
    ''' free form spec text -> spec text p4 will accept as input

        * fields that aren't in `validfields` are dropped (their continuation lines too)
        * `Files0: ...`, `Files1: ...` and `Files:` blocks are collected by name &
          re-emitted once, as a `Files:` block, after everything else
        * runs of 3+ line breaks are collapsed to one blank line

        >>> convert_indexed_fields_to_spec_format('Change:\\tnew\\n\\nFiles0:\\t//depot/a.c\\n\\nFiles1:\\t//depot/b.c')
        'Change:\\tnew\\n\\nFiles:\\n\\t//depot/a.c\\n\\t//depot/b.c\\n'
    '''
    eol = '\r\n' \
        if ('\r\n' in text) \
        else '\n'
    (
        result,
        indexed,
        state
    ) = \
        (
            Lst(),
            Storage(),
            'keep'
        )
    for line in re.split(r'\r?\n', text):
        match = reg_indexed_line.match(line)
        if (
                (match is not None) and
                (match.group('name') in indexedfields)
        ):
            state = match.group('name')
            if (indexed[state] is None):
                indexed[state] = Lst()
            indexed[state].append(match.group('value').strip())
            continue
        match = reg_field_line.match(line)
        if (match is not None):
            name = match.group('name')
            if (name in indexedfields):
                state = name
                if (indexed[state] is None):
                    indexed[state] = Lst()
                if (match.group('value').strip() != ''):
                    indexed[state].append(match.group('value').strip())
            elif (name in validfields):
                state = 'keep'
                result.append(line)
            else:
                state = 'drop'
            continue
        if (line.startswith('\t')):
            if (state == 'keep'):
                result.append(line)
            elif (
                    (state != 'drop') and
                    (line.strip() != '')
            ):
                indexed[state].append(line.strip())
            continue
        if (line.strip() == ''):
            result.append(line)
        ''' anything else (comments, tagged output noise...) is skipped
        '''
    if (len(indexed) > 0):
        if (
                (len(result) > 0) and
                (result(-1).strip() != '')
        ):
            result.append('')
        for (name, values) in indexed.items():
            result.append(f'{name}:')
            result.merge([f'\t{value}' for value in values])
            result.append('')
    return reg_blanklines.sub(eol + eol, eol.join(result))
