import re

from libdlg.dlgStore import Lst
from libpy4.py4Args import flag_mapper
from libpy4.py4Run import Py4Command, output_handler
from libcmd.cmdTypes import BranchInfo, structured_records, to_p4date

'''  [$File: //dev/p4dispatch/libcmd/cmdBranch.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

__all__ = ['branches_command', 'branches']

branches_command = Py4Command(
    'branches',
    flag_mapper(
        [
            ('E', 'name_filter'),
            ('m', 'max')
        ]
    )
)

def parse_branch(record):
    ''' {'branch': 'rel1', 'Update': '1772100662', 'Description': 'Created by bob.\\n'}

        * a record missing any of those is skipped
    '''
    if (
            (record.branch in (None, '')) |
            (record.Update in (None, '')) |
            (record.Description in (None, ''))
    ):
        return
    return BranchInfo(
        branch=record.branch,
        date=to_p4date(record.Update, datetype='date'),
        description=re.sub(r'\n$', '', record.Description)
    )

def parse_branches_output(output):
    return Lst(
        branch for branch in (
            parse_branch(record) for record in structured_records(output)
        ) if (branch is not None)
    )

branches = output_handler(branches_command, parse_branches_output, empty=Lst, name='branches')
