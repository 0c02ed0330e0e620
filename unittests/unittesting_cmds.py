import unittest
from unittest import mock
from datetime import datetime

from libdlg.dlgStore import Lst
from libdlg.dlgError import P4CommandError, NoSuchCommandError
from libpy4.py4Data import P4Data
from libpy4.py4Args import P4File
from libpy4.py4Run import Py4Command, output_handler
from libpy4.py4IO import Py4
from libcmd.cmdFstat import fstat_info
from libcmd import (
    commands,
    ChangelistStatus,
    Direction,
    DepotFileOperation,
    get_changelists,
    describe,
    get_shelved_files,
    get_fixed_jobs,
    get_change_spec,
    input_change_spec,
    input_raw_change_spec,
    get_job,
    fixes,
    input_raw_job_spec,
    get_fstat_info,
    get_fstat_info_mapped,
    annotate,
    get_file_history,
    branches,
    clients,
    submit_changelist,
    unshelve,
    sync,
    get_info,
    get_client_root,
    have,
    have_file,
    login,
    is_logged_in,
    resolve,
    add
)

from fakeP4 import (
    FakeStrategy,
    fake_service,
    fake_resource,
    structured,
    raw,
    error
)

'''  [$File: //dev/p4dispatch/unittests/unittesting_cmds.py $] [$Change$] [$Revision$]
     [$DateTime$]
     [$Author$]
'''

epoch = '1547856000'

def serve(**responses):
    ''' a service backed by a single fake strategy, & that strategy
    '''
    oFake = FakeStrategy(responses)
    return (fake_service(oFake), oFake)

def by_flag(**responses):
    ''' pick a response by the request's first argument (I.e. `-o` vs `-i`)
    '''
    def respond(request):
        return responses[Lst(request.args)(0, '').lstrip('-')]
    return respond

class TestChanges(unittest.TestCase):
    def testChangelistScenario(self):
        (oService, oFake) = serve(
            changes=P4Data(
                records=[
                    structured(
                        change='421',
                        user='bob',
                        client='bob_ws',
                        desc='Fix bug\n\nin the parser\n',
                        status='pending',
                        time=epoch
                    )
                ]
            )
        )
        changes = get_changelists(
            oService,
            fake_resource(),
            status=ChangelistStatus.PENDING,
            user='bob'
        )
        self.assertEqual(oFake.lastargs(), ['-l', '-s', 'pending', '-u', 'bob'])
        self.assertEqual(len(changes), 1)
        change = changes(0)
        self.assertEqual(change.chnum, '421')
        self.assertEqual(change.user, 'bob')
        self.assertTrue(change.is_pending)
        self.assertEqual(change.description, ['Fix bug', 'in the parser'])
        self.assertEqual(change.date, datetime.fromtimestamp(int(epoch)))

    def testRecordWithoutChnumIsDropped(self):
        (oService, oFake) = serve(
            changes=P4Data(
                records=[
                    structured(user='bob', status='pending'),
                    structured(change='422', user='bob', status='submitted')
                ]
            )
        )
        changes = get_changelists(oService, fake_resource())
        self.assertEqual([change.chnum for change in changes], ['422'])
        self.assertFalse(changes(0).is_pending)

    def testErrorOnlyEnvelopeRaises(self):
        ''' an error never turns into a domain object
        '''
        (oService, oFake) = serve(
            changes=P4Data(error=error("Perforce client error: Connect to server failed", 4))
        )
        with self.assertRaises(P4CommandError) as ctx:
            get_changelists(oService, fake_resource())
        self.assertEqual(ctx.exception.severity, 4)

    def testWarningToleratedWithStderrIsOk(self):
        (oService, oFake) = serve(
            sync=P4Data(
                records=[structured(depotFile='//depot/a.c', action='updated')],
                error=error('//depot/b.c - file(s) up-to-date.', 2)
            )
        )
        envelope = sync.ignoring_stderr(oService, fake_resource(), files=['//depot/...'])
        self.assertEqual(envelope.records(0).depotFile, '//depot/a.c')
        with self.assertRaises(P4CommandError):
            sync(oService, fake_resource(), files=['//depot/...'])

    def testParseFailureYieldsEmpty(self):
        (oService, oFake) = serve(changes=P4Data(records=[structured(change='1')]))

        def broken(output):
            return output.records(0)['missing']['deeper']

        handler = output_handler(Py4Command('changes'), broken, empty=Lst, name='broken')
        self.assertEqual(handler(oService, fake_resource()), [])

class TestDescribe(unittest.TestCase):
    def testStopsAtFirstGap(self):
        (oService, oFake) = serve(
            describe=P4Data(
                records=[
                    structured(
                        change='421',
                        user='bob',
                        client='bob_ws',
                        desc='Fix bug',
                        status='submitted',
                        time=epoch,
                        depotFile0='//depot/a.c', rev0='3', action0='edit',
                        depotFile1='//depot/b.c', rev1='1', action1='add',
                        depotFile3='//depot/d.c', rev3='2', action3='delete',
                        job0='job000123', jobstat0='closed'
                    )
                ]
            )
        )
        described = describe(oService, fake_resource(), chnums='421', omit_diffs=True)
        self.assertEqual(oFake.lastargs(), ['-s', '421'])
        change = described(0)
        self.assertEqual(
            [file.depot_path for file in change.affected_files],
            ['//depot/a.c', '//depot/b.c']
        )
        self.assertEqual(change.affected_files(0).operation, 'edit')
        self.assertEqual(change.shelved_files, [])
        self.assertEqual(change.fixed_jobs(0).id, 'job000123')

    def testShelvedFiles(self):
        (oService, oFake) = serve(
            describe=P4Data(
                records=[
                    structured(change='12', depotFile0='//depot/a.c', depotFile1='//depot/b.c'),
                    structured(change='13')
                ]
            )
        )
        shelved = get_shelved_files(oService, fake_resource(), chnums=['12', '13'])
        self.assertEqual(oFake.lastargs(), ['-S', '-s', '12', '13'])
        self.assertEqual(len(shelved), 1)
        self.assertEqual(shelved(0).chnum, 12)
        self.assertEqual(shelved(0).paths, ['//depot/a.c', '//depot/b.c'])

    def testNoChnumsNoCommand(self):
        (oService, oFake) = serve()
        self.assertEqual(get_shelved_files(oService, fake_resource(), chnums=[]), [])
        self.assertEqual(len(oFake.requests), 0)

    def testFixedJobs(self):
        (oService, oFake) = serve(
            describe=P4Data(
                records=[structured(change='421', job0='job000123', jobstat0='open', job1='job000124')]
            )
        )
        jobs = get_fixed_jobs(oService, fake_resource(), chnum='421')
        self.assertEqual([job.id for job in jobs], ['job000123', 'job000124'])
        self.assertEqual(jobs(0).description, ['open'])

class TestChangeSpec(unittest.TestCase):
    change_o = P4Data(
        records=[
            structured(
                Change='new',
                Client='bob_ws',
                User='bob',
                Status='new',
                Description='<enter description here>\n',
                Files0='//depot/main/a.c\t# edit',
                Jobs0='job000123'
            )
        ]
    )

    def testGetChangeSpec(self):
        (oService, oFake) = serve(change=self.change_o)
        spec = get_change_spec(oService, fake_resource())
        self.assertEqual(oFake.lastargs(), ['-o'])
        self.assertEqual(spec.change, 'new')
        self.assertEqual(spec.description, '<enter description here>')
        self.assertEqual(spec.files(0).depot_path, '//depot/main/a.c\t# edit')
        status = [field for field in spec.raw_fields if (field.name == 'Status')]
        self.assertEqual(status[0].value, ['pending'])

    def testInputChangeSpec(self):
        (oService, oFake) = serve(
            change=by_flag(
                o=self.change_o,
                i=P4Data(records=[raw('Change 377 created.')])
            )
        )
        spec = get_change_spec(oService, fake_resource())
        spec.description = 'Fix bug\nin the parser'
        spec.files = [DepotFileOperation(depot_path='//depot/main/b.c', action='edit')]
        created = input_change_spec(oService, fake_resource(), spec=spec)
        self.assertEqual(created.chnum, '377')
        self.assertEqual(created.raw_output, 'Change 377 created.')
        p4input = oFake.requests(-1).request.input
        self.assertEqual(oFake.lastargs(), ['-i'])
        self.assertIn('Client:\n\tbob_ws', p4input)
        self.assertIn('Status:\n\tpending', p4input)
        self.assertIn('Description:\n\tFix bug\n\tin the parser', p4input)
        self.assertIn('Files:\n\t//depot/main/b.c\t# edit', p4input)
        self.assertNotIn('<enter description here>', p4input)
        self.assertTrue(p4input.startswith('Client:'))

    def testInputRawChangeSpec(self):
        (oService, oFake) = serve(change=P4Data(records=[raw('Change 12 updated.')]))
        created = input_raw_change_spec(
            oService,
            fake_resource(),
            input='Change:\t12\n\nFiles0:\t//depot/a.c\n\nFiles1:\t//depot/b.c'
        )
        self.assertEqual(created.chnum, '12')
        self.assertEqual(
            oFake.requests(-1).request.input,
            'Change:\t12\n\nFiles:\n\t//depot/a.c\n\t//depot/b.c\n'
        )

class TestJob(unittest.TestCase):
    def testGetJob(self):
        (oService, oFake) = serve(
            job=P4Data(
                records=[
                    structured(
                        Job='job000123',
                        Status='open',
                        User='bob',
                        Description='line one\nline two\n'
                    )
                ]
            )
        )
        job = get_job(oService, fake_resource(), existing_job='job000123')
        self.assertEqual(oFake.lastargs(), ['-o', 'job000123'])
        self.assertEqual(job.job, 'job000123')
        self.assertEqual(job.status, 'open')
        self.assertEqual(job.description, 'line one\nline two')

    def testGetJobFromSpecText(self):
        (oService, oFake) = serve(
            job=P4Data(
                records=[
                    raw('Job:\tjob000123'),
                    raw(''),
                    raw('Status:\topen'),
                    raw(''),
                    raw('Description:'),
                    raw('\tline one')
                ]
            )
        )
        job = get_job(oService, fake_resource(), existing_job='job000123')
        self.assertEqual(job.job, 'job000123')
        self.assertEqual(job.description, 'line one')

    def testFixes(self):
        (oService, oFake) = serve(
            fixes=P4Data(
                records=[
                    structured(
                        Job='job000123',
                        Change='421',
                        Date=epoch,
                        User='bob',
                        Client='bob_ws',
                        Status='closed'
                    )
                ]
            )
        )
        jobfixes = fixes(oService, fake_resource(), job='job000123')
        self.assertEqual(oFake.lastargs(), ['-j', 'job000123'])
        self.assertEqual(jobfixes(0).chnum, '421')
        self.assertEqual(jobfixes(0).date, datetime.fromtimestamp(int(epoch)))

    def testFixWithoutJobIsDropped(self):
        (oService, oFake) = serve(
            fixes=P4Data(
                records=[
                    structured(Change='421', Date=epoch, User='bob'),
                    structured(Job='job000124', Change='422', Date=epoch)
                ]
            )
        )
        jobfixes = fixes(oService, fake_resource())
        self.assertEqual([fix.job for fix in jobfixes], ['job000124'])

    def testInputRawJobSpec(self):
        (oService, oFake) = serve(job=P4Data(records=[raw('Job job000124 saved.')]))
        created = input_raw_job_spec(oService, fake_resource(), input='Job:\tnew\n')
        self.assertEqual(created.job, 'job000124')
        self.assertEqual(oFake.requests(-1).request.input, 'Job:\tnew\n')

class TestFstat(unittest.TestCase):
    def fstat_response(self, request):
        return P4Data(
            records=[
                structured(depotFile=arg, headRev='1') for arg in request.args if arg.startswith('//')
            ]
        )

    def testChunkedAndOrdered(self):
        ''' 40 paths -> 2 invocations (32 + 8), results in request order
        '''
        (oService, oFake) = serve(fstat=self.fstat_response)
        paths = [f'//depot/{idx}.c' for idx in range(40)]
        infos = get_fstat_info(oService, fake_resource(), depot_paths=paths)
        self.assertEqual(len(oFake.requests), 2)
        self.assertEqual(
            sorted(len(item.request.args) for item in oFake.requests),
            [8, 32]
        )
        self.assertEqual([info.depotFile for info in infos], paths)

    def testMapped(self):
        (oService, oFake) = serve(
            fstat=P4Data(
                records=[structured(depotFile='//depot/b.c', headRev='4')],
                error=error('//depot/nope.c - no such file(s).', 2)
            )
        )
        mapped = get_fstat_info_mapped(
            oService,
            fake_resource(),
            depot_paths=['//depot/nope.c', '//depot/b.c']
        )
        self.assertIsNone(mapped(0))
        self.assertEqual(mapped(1).headRev, '4')

    def testOptions(self):
        (oService, oFake) = serve(fstat=P4Data())
        get_fstat_info(
            oService,
            fake_resource(),
            depot_paths=['//depot/a.c'],
            chnum='12',
            limit_to_shelved=True
        )
        self.assertEqual(oFake.lastargs(), ['-e', '12', '-Rs', '//depot/a.c'])

    def testUnparsableChunkYieldsNothing(self):
        (oService, oFake) = serve(fstat=self.fstat_response)
        with mock.patch.object(fstat_info, 'mapper', side_effect=KeyError('depotFile')):
            infos = get_fstat_info(oService, fake_resource(), depot_paths=['//depot/a.c', '//depot/b.c'])
        self.assertEqual(infos, [])
        self.assertEqual(len(oFake.requests), 1)

    def testZtagText(self):
        (oService, oFake) = serve(
            fstat=P4Data(
                records=[
                    raw('... depotFile //depot/a.c'),
                    raw('... headRev 3'),
                    raw('... mapped'),
                    raw(''),
                    raw('... depotFile //depot/b.c')
                ]
            )
        )
        infos = get_fstat_info(oService, fake_resource(), depot_paths=['//depot/a.c', '//depot/b.c'])
        self.assertEqual([info.depotFile for info in infos], ['//depot/a.c', '//depot/b.c'])
        self.assertEqual(infos(0).headRev, '3')
        self.assertEqual(infos(0).mapped, 'true')

class TestFilelog(unittest.TestCase):
    def testHistory(self):
        (oService, oFake) = serve(
            filelog=P4Data(
                records=[
                    structured(
                        **{
                            'depotFile': '//depot/a.c',
                            'rev0': '2',
                            'change0': '43',
                            'action0': 'integrate',
                            'time0': epoch,
                            'user0': 'zogge',
                            'client0': 'default',
                            'desc0': 'integrate from main',
                            'file0,0': '//depot/b.c',
                            'how0,0': 'copy into',
                            'srev0,0': '#none',
                            'erev0,0': '#5',
                            'file0,1': '//depot/c.c',
                            'how0,1': 'edit from',
                            'srev0,1': '#3',
                            'erev0,1': '#4',
                            'rev1': '1',
                            'change1': '40',
                            'action1': 'add'
                        }
                    )
                ]
            )
        )
        history = get_file_history(
            oService,
            fake_resource(),
            file=P4File('//depot/a.c'),
            follow_branches=True
        )
        self.assertEqual(oFake.lastargs(), ['-l', '-t', '-i', '//depot/a.c'])
        self.assertEqual([item.revision for item in history], ['2', '1'])
        first = history(0)
        self.assertEqual(first.chnum, '43')
        self.assertEqual(first.date, datetime.fromtimestamp(int(epoch)))
        (copied, edited) = first.integrations
        self.assertEqual(copied.direction, Direction.TO)
        self.assertEqual(copied.operation, 'copy')
        self.assertEqual((copied.start_rev, copied.end_rev), ('none', '5'))
        self.assertEqual(edited.direction, Direction.FROM)
        self.assertEqual((edited.start_rev, edited.end_rev), ('3', '4'))
        self.assertEqual(history(1).integrations, [])
        self.assertIsNone(history(1).date)

class TestAnnotateBranchClient(unittest.TestCase):
    def testAnnotate(self):
        (oService, oFake) = serve(
            annotate=P4Data(
                records=[
                    structured(depotFile='//depot/a.c', rev='3'),
                    structured(data='int main()\n', lower='1', upper='3', user='bob', date='2019/01/19'),
                    structured(data='{\n', change='44')
                ]
            )
        )
        annotations = annotate(
            oService,
            fake_resource(),
            file=P4File('//depot/a.c', 3),
            output_user=True
        )
        self.assertEqual(oFake.lastargs(), ['-q', '-u', '//depot/a.c#3'])
        self.assertEqual(len(annotations), 2)
        self.assertEqual(annotations(0).revision_or_chnum, '1')
        self.assertEqual(annotations(0).user, 'bob')
        self.assertEqual(annotations(1).revision_or_chnum, '44')

    def testAnnotateParseFailureYieldsEmpty(self):
        (oService, oFake) = serve(annotate=P4Data(records=[structured(data='int main()\n', lower='1')]))
        with mock.patch(
                'libcmd.cmdAnnotate.parse_annotate_output',
                side_effect=ValueError('unexpected annotate output')
        ):
            annotations = annotate(oService, fake_resource(), file=P4File('//depot/a.c'))
        self.assertEqual(annotations, [])

    def testBranches(self):
        (oService, oFake) = serve(
            branches=P4Data(
                records=[
                    structured(branch='rel1', Update=epoch, Description='Created by bob.\n'),
                    structured(branch='rel2', Description='no update')
                ]
            )
        )
        found = branches(oService, fake_resource(), name_filter='rel*', max=5)
        self.assertEqual(oFake.lastargs(), ['-E', 'rel*', '-m', '5'])
        self.assertEqual(len(found), 1)
        self.assertEqual(found(0).description, 'Created by bob.')
        self.assertEqual(
            found(0).date,
            datetime.fromtimestamp(int(epoch)).strftime('%Y/%m/%d')
        )

    def testClients(self):
        (oService, oFake) = serve(
            clients=P4Data(
                records=[structured(client='bob_ws', Update=epoch, Root='/home/bob/ws', Description='ws\n')]
            )
        )
        found = clients(oService, fake_resource())
        self.assertEqual(found(0).root, '/home/bob/ws')
        self.assertEqual(
            found(0).date,
            datetime.fromtimestamp(int(epoch)).strftime('%Y/%m/%d %H:%M:%S')
        )

    def testClientWithoutNameIsDropped(self):
        (oService, oFake) = serve(
            clients=P4Data(
                records=[
                    structured(Update=epoch, Root='/x', Description='d'),
                    structured(client='bob_ws', Update=epoch, Root='/home/bob/ws')
                ]
            )
        )
        found = clients(oService, fake_resource())
        self.assertEqual([client.client for client in found], ['bob_ws'])

class TestBasicOps(unittest.TestCase):
    def testHaveFileNoSuchFile(self):
        (oService, oFake) = serve(have=P4Data(error=error('//depot/nope.c - no such file(s).', 2)))
        self.assertFalse(have_file(oService, fake_resource(), file=P4File('//depot/nope.c')))
        self.assertIsNone(have(oService, fake_resource(), file=P4File('//depot/nope.c')))

    def testHave(self):
        (oService, oFake) = serve(
            have=P4Data(
                records=[structured(depotFile='//depot/a.c', haveRev='3', path='/home/bob/ws/a.c')]
            )
        )
        self.assertTrue(have_file(oService, fake_resource(), file=P4File('//depot/a.c', 'head')))
        ''' revisions are dropped
        '''
        self.assertEqual(oFake.lastargs(), ['//depot/a.c'])
        havefile = have(oService, fake_resource(), file=P4File('//depot/a.c'))
        self.assertEqual(havefile.revision, '3')
        self.assertEqual(havefile.local_path, '/home/bob/ws/a.c')

    def testSubmitChangelist(self):
        (oService, oFake) = serve(
            submit=P4Data(records=[raw('Submitting change 12.'), raw('Change 12 submitted.')])
        )
        submitted = submit_changelist(oService, fake_resource(), chnum='12', description='Fix bug')
        self.assertEqual(oFake.lastargs(), ['-c', '12', '-d', 'Fix bug'])
        self.assertEqual(submitted.chnum, '12')

    def testUnshelve(self):
        (oService, oFake) = serve(
            unshelve=P4Data(
                records=[
                    structured(depotFile='//depot/a.c', action='edit'),
                    raw('//depot/b.c - must resolve //depot/b.c@=12 before submitting')
                ]
            )
        )
        unshelved = unshelve(oService, fake_resource(), shelved_chnum='12', to_chnum='13', force=True)
        self.assertEqual(oFake.lastargs(), ['-f', '-s', '12', '-c', '13'])
        self.assertEqual(unshelved.files(0).depot_path, '//depot/a.c')
        self.assertEqual(unshelved.warnings(0).resolve_path, '//depot/b.c@=12')

    def testInfo(self):
        (oService, oFake) = serve(
            info=P4Data(records=[raw('User name: bob'), raw('Client root: /home/bob/ws')])
        )
        infos = get_info(oService, fake_resource())
        self.assertEqual(infos['User name'], 'bob')
        self.assertEqual(get_client_root(oService, fake_resource()), '/home/bob/ws')

    def testLoginInput(self):
        (oService, oFake) = serve(login=P4Data(records=[raw('User bob logged in.')]))
        login(oService, fake_resource(), password='s3cr3t')
        self.assertEqual(oFake.requests(-1).request.input, 's3cr3t')
        self.assertEqual(oFake.lastargs(), [])

    def testIsLoggedIn(self):
        (oService, oFake) = serve(login=P4Data(records=[raw('User bob ticket expires in 11 hours.')]))
        self.assertTrue(is_logged_in(oService, fake_resource()))
        self.assertEqual(oFake.lastargs(), ['-s'])
        (oService, oFake) = serve(
            login=P4Data(error=error('Perforce password (P4PASSWD) invalid or unset.'))
        )
        self.assertFalse(is_logged_in(oService, fake_resource()))

    def testResolveSpawnsTheExecutable(self):
        oAPI = FakeStrategy({'resolve': P4Data(records=[raw('api')])}, name='api')
        oCLI = FakeStrategy({'resolve': P4Data(records=[raw('cli')])}, name='cli', is_process=True)
        oService = fake_service(oAPI, oCLI)
        envelope = resolve(oService, fake_resource(), chnum='12')
        self.assertEqual(envelope.rawtext(), 'cli')
        self.assertEqual(len(oAPI.requests), 0)

    def testAddDropsRevisions(self):
        (oService, oFake) = serve(add=P4Data())
        add(oService, fake_resource(), chnum='12', files=[P4File('//depot/new.c', 1)])
        self.assertEqual(oFake.lastargs(), ['-c', '12', '//depot/new.c'])

class TestPy4(unittest.TestCase):
    def testBoundCommands(self):
        (oService, oFake) = serve(changes=P4Data(records=[structured(change='421', status='pending')]))
        oP4 = Py4(resource=fake_resource(), service=oService)
        changes = oP4.get_changelists(max_changelists=1)
        self.assertEqual(changes(0).chnum, '421')
        self.assertEqual(oFake.lastargs(), ['-l', '-m', '1'])
        self.assertEqual(oP4.submit('get_changelists').result(timeout=10)(0).chnum, '421')

    def testNoSuchCommand(self):
        oP4 = Py4(resource=fake_resource(), service=fake_service(FakeStrategy()))
        with self.assertRaises(NoSuchCommandError):
            oP4.not_a_command
        self.assertIn('get_changelists', oP4.commandslist())

    def testRun(self):
        (oService, oFake) = serve(counters=P4Data(records=[structured(counter='change', value='421')]))
        oP4 = Py4(resource=fake_resource(), service=oService)
        envelope = oP4.run('counters', '-m', 1)
        self.assertEqual(envelope.records(0).value, '421')
        self.assertEqual(oFake.lastargs(), ['-m', '1'])

    def testReplaceSettings(self):
        (oService, oFake) = serve(info=P4Data(records=[raw('Client name: other_ws')]))
        oP4 = Py4(resource=fake_resource(), service=oService)
        oP4(client='other_ws').get_info()
        self.assertEqual(oFake.requests(-1).resource.client, 'other_ws')
        self.assertEqual(oP4.resource.client, 'bob_ws')

    def testRegistry(self):
        for name in (
                'get_changelists',
                'describe',
                'get_fstat_info',
                'have_file',
                'is_logged_in',
                'move'
        ):
            self.assertIsNotNone(commands[name])

if (__name__ == '__main__'):
    (
        loader,
        suite
    ) = \
        (
            unittest.TestLoader(),
            unittest.TestSuite()
        )
    for item in (
            loader.loadTestsFromTestCase(TestChanges),
            loader.loadTestsFromTestCase(TestDescribe),
            loader.loadTestsFromTestCase(TestChangeSpec),
            loader.loadTestsFromTestCase(TestJob),
            loader.loadTestsFromTestCase(TestFstat),
            loader.loadTestsFromTestCase(TestFilelog),
            loader.loadTestsFromTestCase(TestAnnotateBranchClient),
            loader.loadTestsFromTestCase(TestBasicOps),
            loader.loadTestsFromTestCase(TestPy4),
    ):
        suite.addTests(item)
    unittest.TextTestRunner(verbosity=2).run(suite)
