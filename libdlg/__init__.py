'''  [$File: //dev/p4dispatch/libdlg/__init__.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' libdlg for quick access
'''
from libdlg.dlgStore import *
from libdlg.dlgError import *
from libdlg.dlgUtilities import *
from libdlg.dlgDateTime import *
from libdlg.dlgLogger import *
from libdlg.dlgControl import *
from libdlg.dlgOptions import *
