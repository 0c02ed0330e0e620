'''  [$File: //dev/p4dispatch/libcmd/__init__.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' libcmd - the p4 commands & their parsers, for quick access
'''
from libdlg.dlgStore import Storage
from libcmd.cmdTypes import *
from libcmd.cmdChanges import *
from libcmd.cmdDescribe import *
from libcmd.cmdChangeSpec import *
from libcmd.cmdJob import *
from libcmd.cmdFstat import *
from libcmd.cmdFilelog import *
from libcmd.cmdAnnotate import *
from libcmd.cmdBranch import *
from libcmd.cmdClient import *
from libcmd.cmdBasicOps import *

''' every operation Py4 exposes, by name

    each takes (service, resource, **options)
'''
commands = Storage(
    {
        'get_changelists': get_changelists,
        'describe': describe,
        'get_shelved_files': get_shelved_files,
        'get_fixed_jobs': get_fixed_jobs,
        'output_change': output_change,
        'get_change_spec': get_change_spec,
        'input_change_spec': input_change_spec,
        'input_raw_change_spec': input_raw_change_spec,
        'output_job': output_job,
        'get_job': get_job,
        'fixes': fixes,
        'input_raw_job_spec': input_raw_job_spec,
        'get_fstat_info': get_fstat_info,
        'get_fstat_info_mapped': get_fstat_info_mapped,
        'annotate': annotate,
        'get_file_history': get_file_history,
        'branches': branches,
        'clients': clients,
        'delete_changelist': delete_changelist,
        'submit_changelist': submit_changelist,
        'revert': revert,
        'delete': delete,
        'shelve': shelve,
        'unshelve': unshelve,
        'fix_job': fix_job,
        'reopen_files': reopen_files,
        'sync': sync,
        'info': info,
        'get_info': get_info,
        'get_client_root': get_client_root,
        'get_config_filename': get_config_filename,
        'have': have,
        'have_file': have_file,
        'login': login,
        'is_logged_in': is_logged_in,
        'logout': logout,
        'resolve': resolve,
        'add': add,
        'edit': edit,
        'move': move
    }
)
