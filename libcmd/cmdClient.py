from libdlg.dlgStore import Lst
from libpy4.py4Args import flag_mapper
from libpy4.py4Run import Py4Command, output_handler
from libcmd.cmdTypes import ClientInfo, structured_records, to_p4date

'''  [$File: //dev/p4dispatch/libcmd/cmdClient.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

__all__ = ['clients_command', 'clients']

clients_command = Py4Command(
    'clients',
    flag_mapper(
        [
            ('E', 'name_filter'),
            ('m', 'max')
        ]
    )
)

def parse_client(record):
    ''' a record without a client name is skipped
    '''
    if (record.client in (None, '')):
        return
    return ClientInfo(
        client=record.client,
        date=to_p4date(record.Update) or '',
        root=record.Root,
        description=record.Description
    )

def parse_clients_output(output):
    return Lst(
        client for client in (
            parse_client(record) for record in structured_records(output)
        ) if (client is not None)
    )

clients = output_handler(clients_command, parse_clients_output, empty=Lst, name='clients')
