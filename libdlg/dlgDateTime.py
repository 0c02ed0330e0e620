import re
from datetime import datetime, date, time, timezone

from libdlg.dlgStore import Lst

'''  [$File: //dev/p4dispatch/libdlg/dlgDateTime.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' USAGE:

    >>> oDateTime = DLGDateTime()

    Epoch (p4 hands back unix time as strings)
    >>> oDateTime.to_datetime('1567468800')
    datetime.datetime(2019, 9, 3, 0, 0)

    p4date
    >>> oDateTime.to_p4date('1567468800')
    '2019/09/03 00:00:00'
    >>> oDateTime.to_p4date('1567468800', datetype='date')
    '2019/09/03'
'''

__all__ = ['DLGDateTime']

reg_epochtime = re.compile(r'^\d+(\.\d+)?$')
reg_split_datetime = re.compile(r'[/-]|:|\\|\s|,')

class DLGDateTime(object):
    def __init__(
             self,
             sep='/',
             utc=False
    ):
        (self.sep, self.utc) = (sep, utc)
        ''' date/time formats
        '''
        (
            self.datetimeFormat,
            self.dateFormat
        ) = \
                (
                    f'%Y{sep}%m{sep}%d %H:%M:%S',
                    f'%Y{sep}%m{sep}%d'
                )
        self.timeFormat = '%H:%M:%S'
        self.typeformat_mappings = {
                            datetime: self.datetimeFormat,
                            date: self.dateFormat,
                            time: self.timeFormat}

    def __call__(self, *args, **kwargs):
        return self

    def is_epoch(self, value):
        if (isinstance(value, bool)):
            return False
        elif (isinstance(value, (int, float))):
            return True
        elif (isinstance(value, str) is True):
            return (reg_epochtime.match(value.strip()) is not None)
        return False

    def from_epoch(self, value):
        return datetime.fromtimestamp(float(value), tz=timezone.utc).replace(tzinfo=None) \
            if (self.utc is True) \
            else datetime.fromtimestamp(float(value))

    def to_datetime(self, *args):
        ''' >>> oDT = DLGDateTime()
            >>> oDT.to_datetime(2019, 8, 19)
            datetime.datetime(2019, 8, 19, 0, 0)
            >>> oDT.to_datetime('2019/8/19')
            datetime.datetime(2019, 8, 19, 0, 0)
            >>> oDT.to_datetime('1566187200')
            datetime.datetime(2019, 8, 19, 0, 0)

            returns None for anything it can't make sense of
        '''
        args = Lst(args).clean()
        if (len(args) == 1):
            dt = args(0)
            if (self.is_epoch(dt) is True):
                return self.from_epoch(dt)
            elif (isinstance(dt, datetime)):
                return dt
            elif (isinstance(dt, date)):
                return datetime.combine(dt, time(0))
            elif (isinstance(dt, (tuple, list))):
                return self.to_datetime(*dt)
            elif (isinstance(dt, str)):
                try:
                    dateitems = [int(item) for item in reg_split_datetime.split(dt.strip()) if item]
                except ValueError:
                    return
                return self.to_datetime(*dateitems)
        elif (len(args) >= 3):
            try:
                return datetime(*[int(arg) for arg in args])
            except (TypeError, ValueError):
                return

    def to_p4date(self, *args, datetype='datetime'):
        '''  The method's singular purpose is input of datetime
             data then output a p4 formatted date/time stamp (str)

             USAGE:

                 >>> oDT = DLGDateTime()
                 >>> oDT.to_p4date(2019, 8, 19)
                 '2019/08/19 00:00:00'
                 >>> oDT.to_p4date('2019-8-19', datetype='date')
                 '2019/08/19'
        '''
        dt = self.to_datetime(*args)
        if (dt is not None):
            fmt = {
                'date': self.dateFormat,
                'datetime': self.datetimeFormat,
                'time': self.timeFormat
            }[datetype]
            return dt.strftime(fmt)

    def to_epoch(self, *args):
        dt = self.to_datetime(*args)
        if (dt is not None):
            return int(dt.timestamp())
