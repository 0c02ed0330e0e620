from collections import namedtuple

from libdlg.dlgStore import Storage, Lst

'''  [$File: //dev/p4dispatch/libpy4/py4Data.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' The response envelope & the records it carries.

    p4 hands back either dicts (-G / P4Python) or plain text lines
    depending on the command & on how it was invoked. Both shapes are
    tagged once, here, so parsers never have to guess:

        >>> data = P4Data(records=[Structured({'change': '421'}), Raw('Change 421 created.')])
        >>> data.structured()
        [<Structured {'change': '421'}>]
        >>> data.raw()
        ['Change 421 created.']
'''

__all__ = [
    'Py4Request',
    'P4Error',
    'P4Data',
    'Structured',
    'Raw',
    'RawField',
    'is_structured',
    'is_raw'
]

Py4Request = namedtuple(
    'Py4Request',
    [
        'command',
        'args',
        'input',
        'alternate'
    ]
)
Py4Request.__new__.__defaults__ = ((), None, False)

class Structured(Storage):
    ''' one dict-shaped record (I.e. a `-G` marshalled record)
    '''

class Raw(str):
    ''' one line of unstructured text output
    '''
    __repr__ = lambda self: f'<Raw {str.__repr__(self)}>'

is_structured = lambda record: isinstance(record, Structured)
is_raw = lambda record: isinstance(record, Raw)

class P4Error(Storage):
    ''' {message, severity?, code?}
    '''
    def __init__(self, message='', severity=None, code=None):
        super(P4Error, self).__init__(
            message=message,
            severity=severity,
            code=code
        )

    def __str__(self):
        return self.message

class P4Data(Storage):
    ''' the normalized result of one p4 invocation

        records   - ordered Lst of Structured | Raw
        error     - P4Error (the primary channel when set)
        text      - text payload (I.e. `p4 print` of a text file)
        binary    - binary payload (I.e. `p4 print` of a binary file)
    '''
    def __init__(
            self,
            records=None,
            error=None,
            text=None,
            binary=None
    ):
        super(P4Data, self).__init__()
        self.records = Lst(records or [])
        if (isinstance(error, str)):
            error = P4Error(error)
        self.error = error
        if (
                (text is not None) &
                (binary is not None)
        ):
            raise ValueError('text & binary payloads are mutually exclusive')
        self.text = text
        self.binary = binary

    def __bool__(self):
        return True

    def is_error(self):
        return (self.error is not None)

    def structured(self):
        return Lst(record for record in self.records if is_structured(record))

    def raw(self):
        return Lst(record for record in self.records if is_raw(record))

    def rawtext(self):
        ''' the textual records, joined as they would have been printed
        '''
        return '\n'.join(self.raw())

class RawField(Storage):
    ''' one field of a spec document: a name & a non-empty, ordered list of lines

            >>> field = RawField('Description', ['line one', 'line two'])
            >>> field.text()
            'line one\\nline two'
    '''
    def __init__(self, name, value=None):
        super(RawField, self).__init__()
        if (isinstance(value, str)):
            value = [value]
        value = Lst(value or [])
        if (len(value) == 0):
            value = Lst([''])
        self.name = name
        self.value = value

    def text(self):
        return '\n'.join(self.value)
