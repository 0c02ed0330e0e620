import sys
import argparse
from libdlg.dlgStore import Storage, objectify, Lst

''' a parser to handle cmd line options

        referenced options are shared between subparsers, private options
        belong to a single subparser. Positional arguments are declared with
        'positional': True (no `--` prefix is added & `short` is ignored).

                'p4globals': {'user': {'short': 'u',
                                       'required': False,
                                       'default': None,
                                       'help': "A Perforce user"},
                              ...}
'''

'''  [$File: //dev/p4dispatch/libdlg/dlgOptions.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

__all__ = ['ArgsParser', ]

class ArgsParser(object):
    def __init__(self, *args, **kwargs):
        '''  referenced & inheritable options and subparsers definitions:

    USAGE:

    option references:

    referenceOption: {REFERENCE_NAME : {OPTION_LONG: {'short':OPTION_SHORT,
                                                      'required':False,
                                                      'default':None,
                                                      'help':"..."}},},

    subparsers:

    'subparser':{SUBPARSER_NAME: {'reference':[NAME,],
                                  'help': 'help info for the subparser.',
                                  'private': {OPTION_LONG: {...}}
                                  }
                },
        '''
        self.optionData = objectify(
            {
                'referenceOption': {
                    # ---- P4GLOBALS OPTIONS GROUP, inherited by any subparsers that target p4 operations
                    'p4globals': {
                        'user': {'short': 'u',
                                 'required': False,
                                 'default': None,
                                 'help': "A Perforce user (P4USER)"},
                        'client': {'short': 'c',
                                   'required': False,
                                   'default': None,
                                   'help': "A Perforce client (P4CLIENT)"},
                        'port': {'short': 'p',
                                 'required': False,
                                 'default': None,
                                 'help': "A Perforce server:port (P4PORT)"},
                        'password': {'short': 'P',
                                     'required': False,
                                     'default': None,
                                     'help': "A Perforce password or ticket (P4PASSWD)"},
                        'charset': {'short': 'C',
                                    'required': False,
                                    'default': None,
                                    'help': "A Perforce charset (P4CHARSET)"},
                        'path': {'short': 'd',
                                 'required': False,
                                 'default': '.',
                                 'help': "The file or directory that resolves the resource context"},
                        'p4': {'required': False,
                               'default': None,
                               'help': "Path to the p4 executable"},
                    },
                    # ---- SERVICE OPTIONS GROUP - how commands are dispatched
                    'service': {
                        'max_concurrent': {'short': 'j',
                                           'required': False,
                                           'default': 10,
                                           'type': int,
                                           'help': "Max number of concurrent p4 invocations"},
                        'debug': {'short': 'dbg',
                                  'action': 'store_true',
                                  'required': False,
                                  'default': False,
                                  'help': "Log every submission/completion with a job id"},
                        'loglevel': {'short': 'l',
                                     'required': False,
                                     'default': 'INFO',
                                     'choices': ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                                     'help': "log level"},
                        'logfile': {'required': False,
                                    'default': None,
                                    'help': "Also log to this file"},
                        'cli_only': {'action': 'store_true',
                                     'required': False,
                                     'default': False,
                                     'help': "Skip P4Python, only spawn the p4 executable"},
                    },
                },
                # ----              SUBPARSERS
                'subparser': {
                    'run': {
                        'reference': ['p4globals', 'service'],
                        'help': '- run a raw p4 command & print its envelope -',
                        'private': {
                            'input': {'short': 'i',
                                      'required': False,
                                      'default': None,
                                      'help': "Text to feed to the command's stdin"},
                            'command': {'positional': True,
                                        'help': "The p4 command (I.e. `changes`)"},
                            'cmdargs': {'positional': True,
                                        'nargs': argparse.REMAINDER,
                                        'help': "Arguments to the p4 command"},
                        }
                    },
                    'call': {
                        'reference': ['p4globals', 'service'],
                        'help': '- call a typed command (I.e. `get_changelists status=pending`) -',
                        'private': {
                            'command': {'positional': True,
                                        'help': "A command name as exposed by Py4"},
                            'options': {'positional': True,
                                        'nargs': '*',
                                        'help': "key=value options for the command"},
                        }
                    },
                }
            }
        )

        self.aParser = argparse.ArgumentParser(
            **{
                'prog': 'p4dispatch',
                'description': "Dispatch p4 commands & normalize their output.",
                'add_help': True
            }
        )

        self.subParsers = self.aParser.add_subparsers(help='command help')
        self.bParser = argparse.ArgumentParser(add_help=False)

    def __call__(self, *args, **kwargs):
        ''' time for subparsers - set them up!
        '''
        for subparser_name in self.optionData.subparser.keys():
            whichname = subparser_name.lower()
            optparser = Storage(self.optionData.subparser[subparser_name])
            ''' options: referenced first (all shared), private last
            '''
            options = Storage()
            refoptions = optparser.reference or []
            if (isinstance(refoptions, list) is False):
                refoptions = Lst([refoptions])
            for opt in refoptions:
                if (self.optionData.referenceOption[opt] is not None):
                    options.update(**self.optionData.referenceOption[opt])
            options.update(**(optparser.private or {}))
            ''' add subparser
            '''
            sparser = self.subParsers.add_parser(
                whichname,
                help=optparser.help,
                parents=[self.bParser])
            for (optname, optvalue) in options.items():
                kwoptions = Storage(optvalue.copy())
                if (kwoptions.pop('positional', False) is True):
                    flags = Lst([optname])
                    kwoptions.delete('short', 'required', 'default')
                else:
                    flags = Lst([f'--{optname}'])
                    if (kwoptions.short is not None):
                        flags.insert(0, f'-{kwoptions.pop("short")}')
                try:
                    sparser.add_argument(*flags, **kwoptions)
                except (argparse.ArgumentError, TypeError) as err:
                    sys.exit(f'\n{err}')
            sparser.set_defaults(which=whichname)
        return self.aParser
