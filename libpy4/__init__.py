'''  [$File: //dev/p4dispatch/libpy4/__init__.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

''' libpy4 - the envelope, the limiter, the service & the command plumbing
'''
