import re

from libdlg.dlgStore import Storage, Lst
from libpy4.py4Args import flag_mapper, split_into_chunks
from libpy4.py4Run import Py4Command, output_handler, merge_all
from libcmd.cmdTypes import FstatInfo, structured_records, as_list

'''  [$File: //dev/p4dispatch/libcmd/cmdFstat.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' p4 fstat, chunked

    large path lists are split in chunks of 32 paths, each chunk is its own
    p4 invocation (all submitted at once, the limiter decides how many run).
    Results come back in the order of the chunks.

        >>> get_fstat_info(oService, oResource, depot_paths=['//depot/a.c', '//depot/b.c'])
        [<FstatInfo {'depotFile': '//depot/a.c', 'headRev': '3', ...}>, ...]
'''

__all__ = [
    'fstat',
    'fstat_info',
    'get_fstat_info',
    'get_fstat_info_mapped',
    'parse_fstat_output',
    'parse_ztag_output'
]

reg_ztag_field = re.compile(r'[.]{3} (\w+)[ ]*(.+)?')
reg_sections = re.compile(r'\r?\n\r?\n')

fstat = Py4Command(
    'fstat',
    flag_mapper(
        [
            ('e', 'chnum'),
            ('Or', 'output_pending_record'),
            ('Rs', 'limit_to_shelved'),
            ('Ro', 'limit_to_opened'),
            ('Rc', 'limit_to_client')
        ],
        lastarg='depot_paths'
    )
)

def parse_ztag_field(line):
    ''' '... depotFile //depot/a.c'   -> {'depotFile': '//depot/a.c'}
        '... mapped'                  -> {'mapped': 'true'}
    '''
    match = reg_ztag_field.match(line)
    if (match is not None):
        return {match.group(1): match.group(2) or 'true'}

def parse_ztag_output(text):
    ''' `p4 -ztag fstat` text, one blank line separated section per file
    '''
    infos = Lst()
    for section in reg_sections.split(text.strip()):
        if (section.strip() == ''):
            continue
        fields = [parse_ztag_field(line) for line in re.split(r'\r?\n', section)]
        infos.append(FstatInfo(merge_all({'depotFile': ''}, *[field for field in fields if field])))
    return infos

def parse_fstat_output(output):
    records = structured_records(output)
    if (
            (len(records) == 0) &
            (len(output.raw()) > 0)
    ):
        return parse_ztag_output(output.rawtext())
    return Lst(FstatInfo(merge_all({'depotFile': ''}, record)) for record in records)

fstat_info = output_handler(fstat, parse_fstat_output, empty=Lst, name='fstat_info')

def get_fstat_info(service, resource, depot_paths=None, **options):
    ''' fstat each chunk of paths, p4 errors (I.e. "no such file(s)") are logged, not raised

        * a chunk whose output can't be parsed is logged & contributes nothing
    '''
    futures = Lst(
        fstat_info.submit(
            service,
            resource,
            override={'stderr_is_ok': True},
            **merge_all(options, {'depot_paths': paths})
        ) for paths in split_into_chunks(as_list(depot_paths))
    )
    infos = Lst()
    for future in futures:
        infos.merge(future.result())
    return infos

def get_fstat_info_mapped(service, resource, depot_paths=None, **options):
    ''' one FstatInfo (or None) per requested path, in the order requested

        * only reliable for plain depot paths (no revision specifiers)
    '''
    depot_paths = as_list(depot_paths)
    bypath = Storage()
    for info in get_fstat_info(service, resource, depot_paths=depot_paths, **options):
        if (bypath[info.depotFile] is None):
            bypath[info.depotFile] = info
    return Lst(bypath[str(path)] for path in depot_paths)
