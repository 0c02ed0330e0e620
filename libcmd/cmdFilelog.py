from libdlg.dlgStore import Lst
from libdlg.dlgUtilities import walk_indexed
from libpy4.py4Args import flag_mapper
from libpy4.py4Run import Py4Command, output_handler
from libcmd.cmdTypes import (
    FileLogItem,
    FileLogIntegration,
    Direction,
    structured_records,
    to_datetime
)

'''  [$File: //dev/p4dispatch/libcmd/cmdFilelog.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' p4 filelog -l -t [-i] [-s] file

    one record per file, revisions numbered from 0 (rev0, change0, action0...)
    & integrations numbered per revision (file0,0  how0,0  srev0,0  erev0,0...)

        ... #9 change 43 integrate on 2020/03/29 18:48:43 by zogge@default (text)
        ... ... copy into //depot/TestArea/newFile.txt#5
        ... ... edit from //depot/TestArea/newFile.txt#3,#4
'''

__all__ = ['filelog', 'get_file_history', 'parse_rev']

filelog = Py4Command(
    'filelog',
    flag_mapper(
        [
            ('i', 'follow_branches'),
            ('s', 'omit_non_contributory_integrations')
        ],
        lastarg='file',
        fixedprefix=['-l', '-t']
    )
)

def parse_rev(rev):
    ''' '#none' / '' / None -> 'none', '#3' -> '3'
    '''
    if (rev in (None, '', '#none')):
        return 'none'
    rev = str(rev)
    return rev[1:] \
        if (rev.startswith('#')) \
        else rev

def file_log_integrations(record, revno):
    integrations = Lst()
    for idx in walk_indexed(record, 'file', prefix=f'{revno},'):
        key = f'{revno},{idx}'
        how = record[f'how{key}'] or ''
        erev = record[f'erev{key}']
        start_rev = parse_rev(record[f'srev{key}'])
        integrations.append(
            FileLogIntegration(
                file=record[f'file{key}'],
                operation=how.split(' ')[0],
                direction=Direction.TO \
                    if ('into' in how) \
                    else Direction.FROM,
                start_rev=start_rev \
                    if (erev is not None) \
                    else None,
                end_rev=parse_rev(erev) \
                    if (erev is not None) \
                    else start_rev
            )
        )
    return integrations

def parse_filelog_output(output):
    items = Lst()
    for record in structured_records(output):
        for revno in walk_indexed(record, 'rev'):
            items.append(
                FileLogItem(
                    file=record.depotFile,
                    description=record[f'desc{revno}'],
                    revision=record[f'rev{revno}'],
                    chnum=record[f'change{revno}'],
                    operation=record[f'action{revno}'],
                    date=to_datetime(record[f'time{revno}']),
                    user=record[f'user{revno}'],
                    client=record[f'client{revno}'],
                    integrations=file_log_integrations(record, revno)
                )
            )
    return items

get_file_history = output_handler(filelog, parse_filelog_output, empty=Lst, name='get_file_history')
