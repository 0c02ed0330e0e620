from libdlg.dlgStore import Lst
from libpy4.py4Args import flag_mapper
from libpy4.py4Run import Py4Command, output_handler
from libcmd.cmdTypes import Annotation, structured_records

'''  [$File: //dev/p4dispatch/libcmd/cmdAnnotate.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' p4 annotate -q [-c] [-u] [-i] file

        >>> annotate(oService, oResource, file=P4File('//depot/a.c'), output_user=True)
        [<Annotation {'line': 'int main()', 'revision_or_chnum': '1', 'user': 'bob', 'date': '2024/01/02'}>, ...]

    the leading record describes the file itself (depotFile, rev...), it
    has no `data` & is not an annotation.
'''

__all__ = ['annotate_command', 'annotate', 'parse_annotate_output']

annotate_command = Py4Command(
    'annotate',
    flag_mapper(
        [
            ('c', 'output_changelist'),
            ('u', 'output_user'),
            ('i', 'follow_branches')
        ],
        lastarg='file',
        fixedprefix=['-q']
    )
)

def parse_annotate_output(output, with_user=False):
    return Lst(
        Annotation(
            line=record.data,
            revision_or_chnum=record.lower or record.revision or record.change or '',
            user=record.user if (with_user is True) else None,
            date=record.date if (with_user is True) else None
        ) for record in structured_records(output) if (record.data is not None)
    )

def annotate(service, resource, **options):
    with_user = (options.get('output_user') is True)
    handler = output_handler(
        annotate_command,
        lambda output: parse_annotate_output(output, with_user=with_user),
        empty=Lst,
        name='annotate'
    )
    return handler(service, resource, **options)
