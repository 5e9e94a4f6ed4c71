"""
In-memory inventory for exercising the finder without a server

Managed objects are real pyVmomi objects created without a stub, so type
classification works as it does against a live inventory. Properties are
never read from them; the fake client answers from its own tables.
"""

import itertools

from pyVmomi import vim

from pyFind.client import Ancestor, DatacenterFolders


class FakeInventory:
    def __init__(self):
        self._ids = itertools.count(1)
        self.names = {}
        self.parents = {}
        self.children = {}
        self.hosts = {}
        self.folders = {}
        self.root = self.New(vim.Folder, 'Datacenters', None)

    def New(self, moType, name, parent):
        obj = moType('%s-%d' % (moType._wsdlName.lower(), next(self._ids)))
        self.names[obj] = name
        self.parents[obj] = parent
        self.children[obj] = []
        if parent is not None:
            self.children[parent].append(obj)
        return obj

    def Folder(self, name, parent=None):
        return self.New(vim.Folder, name, parent or self.root)

    def Datacenter(self, name, parent=None):
        dc = self.New(vim.Datacenter, name, parent or self.root)
        self.folders[dc] = DatacenterFolders(
            self.New(vim.Folder, 'vm', dc),
            self.New(vim.Folder, 'host', dc),
            self.New(vim.Folder, 'datastore', dc),
            self.New(vim.Folder, 'network', dc))
        return dc

    def Cluster(self, dc, name, hostNames, moType=vim.ClusterComputeResource):
        cluster = self.New(moType, name, self.folders[dc].HostFolder)
        self.hosts[cluster] = [self.New(vim.HostSystem, hostName, cluster)
                               for hostName in hostNames]
        self.New(vim.ResourcePool, 'Resources', cluster)
        return cluster

    def Pool(self, cluster):
        for child in self.children[cluster]:
            if isinstance(child, vim.ResourcePool):
                return child
        return None

    def Vm(self, name, parent):
        return self.New(vim.VirtualMachine, name, parent)

    def Datastore(self, dc, name):
        return self.New(vim.Datastore, name, self.folders[dc].DatastoreFolder)

    def Network(self, dc, name, moType=vim.Network):
        return self.New(moType, name, self.folders[dc].NetworkFolder)


class FakeClient:
    """ Answers Client queries from a FakeInventory, counting calls. """

    def __init__(self, inventory):
        self.inventory = inventory
        self.calls = {}

    def _Count(self, name):
        self.calls[name] = self.calls.get(name, 0) + 1

    def RootFolder(self):
        return self.inventory.root

    def Ancestors(self, entity):
        self._Count('Ancestors')
        chain = []
        current = entity
        while current is not None:
            parent = self.inventory.parents[current]
            chain.insert(0, Ancestor(self.inventory.names[current], current,
                                     parent))
            current = parent
        return chain

    def DatacenterFolders(self, datacenter):
        self._Count('DatacenterFolders')
        return self.inventory.folders[datacenter]

    def Children(self, container):
        self._Count('Children')
        return [(self.inventory.names[child], child)
                for child in self.inventory.children[container]]

    def Hosts(self, computeResource):
        self._Count('Hosts')
        return list(self.inventory.hosts.get(computeResource, []))
