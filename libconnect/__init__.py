'''  [$File: //dev/p4dispatch/libconnect/__init__.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' libconnect - resource contexts & the strategies that actually reach p4
'''
