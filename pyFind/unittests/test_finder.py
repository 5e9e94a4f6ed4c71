#!/usr/bin/env python

"""
Finder tests against an in-memory inventory

   /A                        datacenter
     vm/web, vm/db, vm/a%2fb
     host/c1                 cluster with hosts h1, h2 and pool Resources
     host/esx3               standalone host esx3 and pool Resources
     datastore/ds1
     network/VM Network, network/pg1, network/dvs1, network/sub
   /B                        datacenter
     vm/web
   /emea/C                   datacenter inside a folder
     vm/app
"""

import unittest
from unittest import mock

from pyVmomi import vim, vmodl

from pyFind import objects
from pyFind.config import FinderConfig
from pyFind.errors import (DefaultMultipleFoundError, DefaultNotFoundError,
                           MultipleFoundError, NoDatacenterError,
                           NotFoundError, PatternError,
                           UnsupportedOperationError)
from pyFind.finder import Finder
from pyFind.unittests.fakes import FakeClient, FakeInventory


class FinderTestCase(unittest.TestCase):
    ## Setup
    #
    def setUp(self):
        inv = self.inventory = FakeInventory()

        self.dcA = inv.Datacenter('A')
        folders = inv.folders[self.dcA]
        self.webA = inv.Vm('web', folders.VmFolder)
        self.dbA = inv.Vm('db', folders.VmFolder)
        self.slashA = inv.Vm('a/b', folders.VmFolder)
        self.c1 = inv.Cluster(self.dcA, 'c1', ['h1', 'h2'])
        self.esx3 = inv.Cluster(self.dcA, 'esx3', ['esx3'],
                                moType=vim.ComputeResource)
        self.ds1 = inv.Datastore(self.dcA, 'ds1')
        self.vmNetwork = inv.Network(self.dcA, 'VM Network')
        self.pg1 = inv.Network(self.dcA, 'pg1',
                               moType=vim.dvs.DistributedVirtualPortgroup)
        inv.Network(self.dcA, 'dvs1', moType=vim.DistributedVirtualSwitch)
        inv.Network(self.dcA, 'sub', moType=vim.Folder)

        self.dcB = inv.Datacenter('B')
        self.webB = inv.Vm('web', inv.folders[self.dcB].VmFolder)

        self.emea = inv.Folder('emea')
        self.dcC = inv.Datacenter('C', parent=self.emea)
        self.appC = inv.Vm('app', inv.folders[self.dcC].VmFolder)

        self.client = FakeClient(inv)
        self.finder = Finder(self.client)

    ## tearDown
    #
    def tearDown(self):
        pass

    def Paths(self, found):
        return [obj.InventoryPath for obj in found]

    ## '..' is rejected, whatever follows it
    #
    def test_ParentTraversalUnsupported(self):
        self.assertRaises(UnsupportedOperationError,
                          self.finder.ManagedObjectList, '..')
        self.assertRaises(UnsupportedOperationError,
                          self.finder.VirtualMachineList, '../vm/web')
        self.assertRaises(UnsupportedOperationError,
                          self.finder.Datacenter, '/..')

    ## Typed folders need a datacenter
    #
    def test_NoDatacenter(self):
        for lookup in (self.finder.VirtualMachineList,
                       self.finder.DatastoreList,
                       self.finder.HostSystemList,
                       self.finder.NetworkList,
                       self.finder.ResourcePoolList):
            self.assertRaises(NoDatacenterError, lookup, './*')
        self.assertRaises(NoDatacenterError, self.finder.DefaultVirtualMachine)

    ## Same name in two datacenters
    #
    def test_AmbiguousAcrossDatacenters(self):
        self.assertRaises(MultipleFoundError, self.finder.VirtualMachine,
                          '*/web')
        try:
            self.finder.VirtualMachine('*/web')
        except MultipleFoundError as err:
            self.assertNotIsInstance(err, DefaultMultipleFoundError)
            self.assertEqual(err.kind, 'vm')
            self.assertEqual(err.path, '*/web')

        vm = self.finder.VirtualMachine('A/web')
        self.assertIsInstance(vm, objects.VirtualMachine)
        self.assertEqual(vm.Reference(), self.webA)
        self.assertEqual(vm.InventoryPath, '/A/vm/web')
        self.assertEqual(vm.Name(), 'web')

    ## The datacenter folder may be spelled out
    #
    def test_AbsolutePath(self):
        vm = self.finder.VirtualMachine('/A/vm/web')
        self.assertEqual(vm.Reference(), self.webA)
        self.assertEqual(vm.InventoryPath, '/A/vm/web')
        self.assertEqual(self.finder.VirtualMachine('/B/web').Reference(),
                         self.webB)

    ## Single lookup agrees with the list lookup
    #
    def test_SingleMatchesList(self):
        for arg in ('A/web', 'B/*', '/A/vm/db'):
            found = self.finder.VirtualMachineList(arg)
            self.assertEqual(len(found), 1)
            vm = self.finder.VirtualMachine(arg)
            self.assertEqual(vm, found[0])
            self.assertEqual(vm.InventoryPath, found[0].InventoryPath)

    def test_NotFound(self):
        self.assertEqual(self.finder.VirtualMachineList('A/nope'), [])
        with self.assertRaises(NotFoundError) as ctx:
            self.finder.VirtualMachine('A/nope')
        self.assertNotIsInstance(ctx.exception, DefaultNotFoundError)
        self.assertEqual(ctx.exception.kind, 'vm')
        self.assertEqual(ctx.exception.path, 'A/nope')
        self.assertEqual(str(ctx.exception), "vm 'A/nope' not found")

    ## '.' resolves against the selected datacenter's folder
    #
    def test_RelativePath(self):
        self.finder.SetDatacenter(self.finder.Datacenter('A'))
        self.assertEqual(self.Paths(self.finder.VirtualMachineList('./*')),
                         ['/A/vm/web', '/A/vm/db', '/A/vm/a%2fb'])
        vm = self.finder.VirtualMachine('./web')
        self.assertEqual(vm.Reference(), self.webA)
        self.assertEqual(vm.InventoryPath, '/A/vm/web')

    ## The pivot path is built root to leaf through nested folders
    #
    def test_RelativePathNestedDatacenter(self):
        self.finder.SetDatacenter(self.dcC)
        vm = self.finder.VirtualMachine('./app')
        self.assertEqual(vm.Reference(), self.appC)
        self.assertEqual(vm.InventoryPath, '/emea/C/vm/app')

    def test_EscapedName(self):
        vm = self.finder.VirtualMachine('A/a%2fb')
        self.assertEqual(vm.Reference(), self.slashA)
        self.assertEqual(vm.InventoryPath, '/A/vm/a%2fb')

    ## Results follow argument order and are not deduplicated
    #
    def test_FindOrder(self):
        found = self.finder.VirtualMachineList('B/web', 'A/web', 'A/web')
        self.assertEqual(self.Paths(found),
                         ['/B/vm/web', '/A/vm/web', '/A/vm/web'])
        self.assertEqual(self.finder.VirtualMachineList(), [])

    def test_FindAbortsOnFailure(self):
        self.assertRaises(UnsupportedOperationError,
                          self.finder.VirtualMachineList, 'A/web', '..')

    def test_BadPattern(self):
        self.assertRaises(PatternError, self.finder.VirtualMachineList,
                          'A/[web')

    ## Remote faults come through unwrapped
    #
    def test_TransportFaultPropagates(self):
        fault = vmodl.fault.ManagedObjectNotFound()
        with mock.patch.object(self.client, 'Children', side_effect=fault):
            with self.assertRaises(vmodl.fault.ManagedObjectNotFound) as ctx:
                self.finder.VirtualMachineList('A/web')
        self.assertIs(ctx.exception, fault)

    def test_Datacenters(self):
        found = self.finder.DatacenterList('*')
        self.assertEqual(self.Paths(found), ['/A', '/B'])
        self.assertTrue(all(isinstance(dc, objects.Datacenter)
                            for dc in found))
        self.assertEqual(self.finder.Datacenter('emea/*').InventoryPath,
                         '/emea/C')
        self.assertRaises(DefaultMultipleFoundError,
                          self.finder.DefaultDatacenter)

    def test_DefaultDatacenter(self):
        inv = FakeInventory()
        dc = inv.Datacenter('only')
        finder = Finder(FakeClient(inv))
        self.assertEqual(finder.DefaultDatacenter().Reference(), dc)

        with self.assertRaises(DefaultNotFoundError) as ctx:
            Finder(FakeClient(FakeInventory())).DefaultDatacenter()
        self.assertEqual(ctx.exception.kind, 'datacenter')
        self.assertEqual(ctx.exception.path, '*')
        self.assertEqual(str(ctx.exception), 'no default datacenter found')

    ## Default lookups only raise the Default variants
    #
    def test_DefaultVirtualMachine(self):
        self.finder.SetDatacenter(self.dcB)
        self.assertEqual(self.finder.DefaultVirtualMachine().Reference(),
                         self.webB)

        self.finder.SetDatacenter(self.dcA)
        with self.assertRaises(MultipleFoundError) as ctx:
            self.finder.DefaultVirtualMachine()
        self.assertIsInstance(ctx.exception, DefaultMultipleFoundError)

        self.finder.SetDatacenter(self.dcB)
        with self.assertRaises(NotFoundError) as ctx:
            self.finder.DefaultDatastore()
        self.assertIsInstance(ctx.exception, DefaultNotFoundError)

    def test_DefaultGlobOverride(self):
        cfg = FinderConfig(defaultGlobs={'vm': './d*'})
        finder = Finder(self.client, cfg).SetDatacenter(self.dcA)
        self.assertEqual(finder.DefaultVirtualMachine().Reference(),
                         self.dbA)

    ## A new datacenter drops the cached folders
    #
    def test_SetDatacenterResetsFolders(self):
        self.finder.SetDatacenter(self.dcA)
        self.assertEqual(len(self.finder.VirtualMachineList('./*')), 3)
        self.finder.VirtualMachineList('./web')
        self.assertEqual(self.client.calls['DatacenterFolders'], 1)

        self.finder.SetDatacenter(self.dcB)
        found = self.finder.VirtualMachineList('./*')
        self.assertEqual(self.client.calls['DatacenterFolders'], 2)
        self.assertEqual([vm.Reference() for vm in found], [self.webB])
        self.assertEqual(self.Paths(found), ['/B/vm/web'])

    def test_SetDatacenterAcceptsManagedObject(self):
        finder = self.finder.SetDatacenter(self.dcB)
        self.assertIs(finder, self.finder)
        self.assertIsInstance(finder.GetDatacenter(), objects.Datacenter)
        self.assertEqual(finder.GetDatacenter().Reference(), self.dcB)
        finder.SetDatacenter(None)
        self.assertIsNone(finder.GetDatacenter())

    ## Clusters and standalone compute resources stand for their first host
    #
    def test_HostFromCluster(self):
        self.finder.SetDatacenter(self.dcA)
        found = self.finder.HostSystemList('./c1')
        self.assertEqual(len(found), 1)
        host = found[0]
        self.assertIsInstance(host, objects.HostSystem)
        self.assertEqual(host.Reference(), self.inventory.hosts[self.c1][0])
        self.assertEqual(host.InventoryPath, '/A/host/c1')

        hosts = self.finder.HostSystemList('./c1/*')
        self.assertEqual(self.Paths(hosts), ['/A/host/c1/h1', '/A/host/c1/h2'])

        esx3 = self.finder.HostSystem('A/esx3')
        self.assertEqual(esx3.Reference(), self.inventory.hosts[self.esx3][0])
        self.assertEqual(esx3.InventoryPath, '/A/host/esx3')

        self.assertRaises(DefaultMultipleFoundError,
                          self.finder.DefaultHostSystem)

    def test_ClusterWithoutHosts(self):
        self.inventory.Cluster(self.dcA, 'empty', [])
        self.finder.SetDatacenter(self.dcA)
        self.assertEqual(self.finder.HostSystemList('./empty'), [])

    ## Only networks and portgroups; anything else is dropped silently
    #
    def test_NetworkKinds(self):
        self.finder.SetDatacenter(self.dcA)
        found = self.finder.NetworkList('./*')
        self.assertEqual(self.Paths(found),
                         ['/A/network/VM Network', '/A/network/pg1'])
        self.assertIsInstance(found[0], objects.Network)
        self.assertIsInstance(found[1], objects.DistributedVirtualPortgroup)
        self.assertIsInstance(found[1], objects.NetworkReference)
        self.assertEqual(self.finder.NetworkList('./sub', './dvs1'), [])
        self.assertEqual(self.finder.Network('./pg1').Reference(), self.pg1)

    def test_ResourcePools(self):
        self.finder.SetDatacenter(self.dcA)
        found = self.finder.ResourcePoolList('./*')
        self.assertEqual(self.Paths(found),
                         ['/A/host/c1/Resources', '/A/host/esx3/Resources'])
        self.assertTrue(all(isinstance(rp, objects.ResourcePool)
                            for rp in found))

        pool = self.finder.ResourcePool('./c1/Resources')
        self.assertEqual(pool.Reference(), self.inventory.Pool(self.c1))
        self.assertEqual(pool.InventoryPath, '/A/host/c1/Resources')

        self.assertRaises(DefaultMultipleFoundError,
                          self.finder.DefaultResourcePool)

    def test_DefaultResourcePool(self):
        inv = FakeInventory()
        dc = inv.Datacenter('dc')
        cluster = inv.Cluster(dc, 'cluster', ['h1'])
        finder = Finder(FakeClient(inv)).SetDatacenter(dc)
        pool = finder.DefaultResourcePool()
        self.assertEqual(pool.Reference(), inv.Pool(cluster))
        self.assertEqual(pool.InventoryPath, '/dc/host/cluster/Resources')

    def test_Datastores(self):
        self.finder.SetDatacenter(self.dcA)
        ds = self.finder.DefaultDatastore()
        self.assertIsInstance(ds, objects.Datastore)
        self.assertEqual(ds.Reference(), self.ds1)
        self.assertEqual(ds.InventoryPath, '/A/datastore/ds1')
        self.assertEqual(self.finder.Datastore('/A/datastore/ds1'), ds)

    ## Listing without paths lists the children of the anchor
    #
    def test_ManagedObjectList(self):
        found = self.finder.ManagedObjectList()
        self.assertEqual([e.Path for e in found], ['/A', '/B', '/emea'])

        self.finder.SetDatacenter(self.dcA)
        found = self.finder.ManagedObjectList()
        self.assertEqual([e.Path for e in found],
                         ['/A/vm', '/A/host', '/A/datastore', '/A/network'])
        self.assertEqual(found, self.finder.ManagedObjectList('.'))

        found = self.finder.ManagedObjectList('./vm/web')
        self.assertEqual([(e.Path, e.Object) for e in found],
                         [('/A/vm/web', self.webA)])

    def test_ManagedObjectListTraversesLeafs(self):
        found = self.finder.ManagedObjectList('/A/host/c1')
        self.assertEqual([e.Path for e in found],
                         ['/A/host/c1/h1', '/A/host/c1/h2',
                          '/A/host/c1/Resources'])


if __name__ == '__main__':
    unittest.main()
