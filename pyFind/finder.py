## @file finder.py
## @brief Resolve inventory paths to managed objects
##
## Detailed description (for Doxygen goes here)
"""
Resolve inventory paths to managed objects

A Finder turns shell like paths into inventory objects:

    finder = Finder(Client(si))
    finder.SetDatacenter(finder.Datacenter('dc1'))
    vms = finder.VirtualMachineList('./web-*', '/dc1/vm/db/*')

Paths starting with '/' (or with a plain name) are resolved from the root
folder. Paths starting with '.' are resolved relative to the object a
lookup is anchored to: the selected datacenter for ManagedObjectList, the
root folder for datacenters, and one of the selected datacenter's typed
folders for everything else. Going up with '..' is not supported.

A Finder keeps the selected datacenter and its folders between calls and
must not be shared between threads without locking.
"""

import collections
import logging

from . import config
from . import objects
from . import path
from .config import FinderConfig
from .errors import (MultipleFoundError, NoDatacenterError, NotFoundError,
                     ToDefaultError, UnsupportedOperationError)
from .kinds import COMPUTE_RESOURCES, KindOf, ObjectKind, RESOURCE_POOLS
from .recurse import Element, Recurser

logger = logging.getLogger('pyFind.finder')

## How to resolve and filter one kind of object
#
# Kind          : lookup kind, see config; also the label used in errors
# Anchor        : name of the Finder method returning the object '.' means
# TraverseLeafs : whether containers matched by the last segment are expanded
# Convert       : function (client, element) returning a handle or None
Lookup = collections.namedtuple('Lookup',
                                ['Kind', 'Anchor', 'TraverseLeafs', 'Convert'])


def _Converter(handles):
    """ Build a converter from an ObjectKind -> handle class map. """

    def Convert(client, element):
        handle = handles.get(KindOf(element.Object))
        if handle is None:
            return None
        return handle(client, element.Object)

    return Convert


def _ToHostSystem(client, element):
    kind = KindOf(element.Object)
    if kind == ObjectKind.HostSystem:
        return objects.HostSystem(client, element.Object)
    if kind in COMPUTE_RESOURCES:
        # Standalone hosts live inside a compute resource; for clusters the
        # first host stands in for the whole cluster.
        hosts = objects.ComputeResource(client, element.Object).Hosts()
        if not hosts:
            logger.debug('%s has no hosts', element.Path)
            return None
        return objects.HostSystem(client, hosts[0])
    return None


DATACENTER_LOOKUP = Lookup(
    config.DATACENTER, '_RootFolder', False,
    _Converter({ObjectKind.Datacenter: objects.Datacenter}))

DATASTORE_LOOKUP = Lookup(
    config.DATASTORE, '_DatastoreFolder', False,
    _Converter({ObjectKind.Datastore: objects.Datastore}))

HOST_LOOKUP = Lookup(config.HOST, '_HostFolder', False, _ToHostSystem)

NETWORK_LOOKUP = Lookup(
    config.NETWORK, '_NetworkFolder', False,
    _Converter({
        ObjectKind.Network: objects.Network,
        ObjectKind.DistributedVirtualPortgroup:
            objects.DistributedVirtualPortgroup,
    }))

RESOURCE_POOL_LOOKUP = Lookup(
    config.RESOURCE_POOL, '_HostFolder', True,
    _Converter(dict((kind, objects.ResourcePool) for kind in RESOURCE_POOLS)))

VM_LOOKUP = Lookup(
    config.VM, '_VmFolder', False,
    _Converter({ObjectKind.VirtualMachine: objects.VirtualMachine}))


class Finder(object):
    def __init__(self, client, cfg=None, recurser=None):
        self.client = client
        self.config = cfg or FinderConfig()
        self.recurser = recurser or Recurser(client)
        self._dc = None
        self._folders = None

    def SetDatacenter(self, dc):
        """
        Select the datacenter relative lookups are anchored to. Accepts a
        Datacenter handle, a vim.Datacenter or None to clear the selection.
        The cached datacenter folders are dropped along with the old
        datacenter.
        """
        if dc is not None and not isinstance(dc, objects.Datacenter):
            dc = objects.Datacenter(self.client, dc)
        self._dc, self._folders = dc, None
        logger.info('Datacenter set to %s', dc)
        return self

    def GetDatacenter(self):
        return self._dc

    ## Path resolution

    def _List(self, anchor, traverseLeafs, datacenterFolder, arg):
        root = Element(path.SEPARATOR, self.client.RootFolder())
        parts = path.ToParts(arg)

        if parts:
            if parts[0] == path.PARENT:
                # Not supported; many edge cases, little value
                raise UnsupportedOperationError(arg)
            if parts[0] == path.CURRENT:
                pivot = getattr(self, anchor)()
                root = Element(self._InventoryPath(pivot), pivot)
                parts = parts[1:]

        logger.debug('Resolving %r from %s with %s', arg, root.Path, parts)
        elements = self.recurser.Recurse(root, parts, traverseLeafs,
                                         datacenterFolder)
        logger.debug('%r matched %d object(s)', arg, len(elements))
        return elements

    def _Find(self, anchor, traverseLeafs, datacenterFolder, paths):
        out = []
        for arg in paths:
            out.extend(self._List(anchor, traverseLeafs, datacenterFolder,
                                  arg))
        return out

    def _InventoryPath(self, entity):
        """ Absolute inventory path of an entity, e.g. '/dc1/vm'. """
        names = [path.EscapeName(ancestor.Name)
                 for ancestor in self.client.Ancestors(entity)
                 # Skip the root folder in building the inventory path.
                 if ancestor.Parent is not None]
        return path.Join(path.SEPARATOR, *names)

    ## Anchors

    def _Datacenter(self):
        if self._dc is None:
            raise NoDatacenterError()
        return self._dc

    def _DatacenterFolders(self):
        if self._folders is None:
            self._folders = self._Datacenter().Folders()
        return self._folders

    def _DatacenterReference(self):
        return self._Datacenter().Reference()

    def _RootFolder(self):
        return self.client.RootFolder()

    def _VmFolder(self):
        return self._DatacenterFolders().VmFolder

    def _HostFolder(self):
        return self._DatacenterFolders().HostFolder

    def _DatastoreFolder(self):
        return self._DatacenterFolders().DatastoreFolder

    def _NetworkFolder(self):
        return self._DatacenterFolders().NetworkFolder

    ## Typed lookups

    def _ListOf(self, lookup, paths):
        datacenterFolder = self.config.DatacenterFolder(lookup.Kind)
        elements = self._Find(lookup.Anchor, lookup.TraverseLeafs,
                              datacenterFolder, paths)
        result = []
        for element in elements:
            obj = lookup.Convert(self.client, element)
            if obj is None:
                continue
            obj.InventoryPath = element.Path
            result.append(obj)
        return result

    def _One(self, lookup, arg):
        found = self._ListOf(lookup, [arg])
        if not found:
            raise NotFoundError(lookup.Kind, arg)
        if len(found) > 1:
            raise MultipleFoundError(lookup.Kind, arg)
        return found[0]

    def _Default(self, lookup):
        try:
            return self._One(lookup, self.config.DefaultGlob(lookup.Kind))
        except (NotFoundError, MultipleFoundError) as err:
            raise ToDefaultError(err)

    def ManagedObjectList(self, *paths):
        """
        All elements matching the paths, whatever their type. Relative
        paths start at the selected datacenter, or at the root folder when
        there is none; without paths the children of that start are listed.
        """
        anchor = '_RootFolder'
        if self._dc is not None:
            anchor = '_DatacenterReference'

        if not paths:
            paths = (path.CURRENT,)

        return self._Find(anchor, True, None, paths)

    def DatacenterList(self, *paths):
        return self._ListOf(DATACENTER_LOOKUP, paths)

    def Datacenter(self, path):
        return self._One(DATACENTER_LOOKUP, path)

    def DefaultDatacenter(self):
        return self._Default(DATACENTER_LOOKUP)

    def DatastoreList(self, *paths):
        return self._ListOf(DATASTORE_LOOKUP, paths)

    def Datastore(self, path):
        return self._One(DATASTORE_LOOKUP, path)

    def DefaultDatastore(self):
        return self._Default(DATASTORE_LOOKUP)

    def HostSystemList(self, *paths):
        """
        Hosts matching the paths. A path matching a compute resource or a
        cluster yields its first host, with the compute resource's path as
        inventory path.
        """
        return self._ListOf(HOST_LOOKUP, paths)

    def HostSystem(self, path):
        return self._One(HOST_LOOKUP, path)

    def DefaultHostSystem(self):
        return self._Default(HOST_LOOKUP)

    def NetworkList(self, *paths):
        """ Standard networks and distributed portgroups matching the paths. """
        return self._ListOf(NETWORK_LOOKUP, paths)

    def Network(self, path):
        return self._One(NETWORK_LOOKUP, path)

    def DefaultNetwork(self):
        return self._Default(NETWORK_LOOKUP)

    def ResourcePoolList(self, *paths):
        return self._ListOf(RESOURCE_POOL_LOOKUP, paths)

    def ResourcePool(self, path):
        return self._One(RESOURCE_POOL_LOOKUP, path)

    def DefaultResourcePool(self):
        return self._Default(RESOURCE_POOL_LOOKUP)

    def VirtualMachineList(self, *paths):
        return self._ListOf(VM_LOOKUP, paths)

    def VirtualMachine(self, path):
        return self._One(VM_LOOKUP, path)

    def DefaultVirtualMachine(self):
        return self._Default(VM_LOOKUP)
