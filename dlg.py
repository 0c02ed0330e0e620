import sys
from pprint import pformat
from libdlg.dlgStore import Storage, Lst
from libdlg.dlgOptions import ArgsParser
from libdlg.dlgError import DLGError
from libdlg.dlgUtilities import bail
from libpy4.py4IO import Py4

'''  [$File: //dev/p4dispatch/dlg.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' USAGE & REQUIREMENTS

    Requirements: a p4 executable on the PATH and/or P4Python (pip install p4python)

    %> python dlg.py run -p anastasia:1777 -u zerdlg changes -m 3
    %> python dlg.py run -i "$(cat change.txt)" change -i
    %> python dlg.py call get_changelists status=pending max_changelists=10
    %> python dlg.py call have_file file=//depot/main/a.c --cli_only
'''

def parse_options(options):
    ''' ['status=pending', 'max_changelists=10'] -> {'status': 'pending', 'max_changelists': '10'}

        bare words become True (I.e. `omit_diffs`), comma separated
        values become lists (I.e. `depot_paths=//depot/a.c,//depot/b.c`)
    '''
    kwoptions = Storage()
    for option in (options or []):
        if ('=' not in option):
            kwoptions[option] = True
            continue
        (key, value) = option.split('=', 1)
        kwoptions[key] = Lst(value.split(',')) \
            if (',' in value) \
            else value
    return kwoptions

def connector(opts):
    return Py4(
        **{
            name: opts[name] for name in (
                'user',
                'client',
                'port',
                'password',
                'charset',
                'path',
                'p4',
                'max_concurrent',
                'debug',
                'loglevel',
                'logfile',
                'cli_only'
            ) if (opts[name] is not None)
        }
    )

def initprog(**opts):
    opts = Storage(opts)
    if (len(opts) > 0):
        subparser = opts.pop('which')
        oP4 = connector(opts)
        if (subparser == 'run'):
            envelope = oP4.run(opts.command, *(opts.cmdargs or []), input=opts.input)
            print(pformat(envelope))
            return 1 if (envelope.is_error() is True) else 0
        elif (subparser == 'call'):
            result = oP4[opts.command](**parse_options(opts.options))
            print(pformat(result))
            return 0

def main(args=None):
    '''  cmd line options
    '''
    opts = Storage()
    oParser = ArgsParser()
    domainargs = oParser().parse_args(args)
    opts.update(**{k: v for (k, v) in dict(vars(domainargs)).items()})
    if (opts.which is None):
        oParser.aParser.print_help()
        return 2
    try:
        return initprog(**opts)
    except DLGError as err:
        bail(err)

if (__name__ == '__main__'):
    sys.exit(main())
