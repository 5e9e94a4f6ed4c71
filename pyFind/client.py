## @file client.py
## @brief Property collector backed access to the inventory tree
"""
Property collector backed access to the inventory tree

The finder only needs a handful of questions answered by the server: the
root folder, the ancestors of an entity, the typed folders of a datacenter
and the named children of a container. Client answers them against a
connected pyVmomi ServiceInstance with as few round trips as possible.

Faults raised by pyVmomi are passed through untouched.
"""

import collections
import logging

from pyVmomi import vim, vmodl

logger = logging.getLogger('pyFind.client')

PC = vmodl.query.PropertyCollector

Ancestor = collections.namedtuple('Ancestor', ['Name', 'Obj', 'Parent'])

DatacenterFolders = collections.namedtuple(
    'DatacenterFolders',
    ['VmFolder', 'HostFolder', 'DatastoreFolder', 'NetworkFolder'])

# Container properties holding inventory children, per container type.
# Subtypes (ClusterComputeResource, VirtualApp, StoragePod) are covered by
# the property collector through their base type.
CHILD_PROPERTIES = [
    (vim.Folder, 'childEntity'),
    (vim.Datacenter, 'vmFolder'),
    (vim.Datacenter, 'hostFolder'),
    (vim.Datacenter, 'datastoreFolder'),
    (vim.Datacenter, 'networkFolder'),
    (vim.ComputeResource, 'host'),
    (vim.ComputeResource, 'resourcePool'),
    (vim.ResourcePool, 'resourcePool'),
    (vim.ResourcePool, 'vm'),
]


def _RaiseMissing(objectContent):
    """ Surface the fault behind a missing property, if any. """
    for missing in objectContent.missingSet or []:
        if isinstance(missing.fault, Exception):
            raise missing.fault
        raise RuntimeError('Missing property %s on %s' %
                           (missing.path, objectContent.obj))


def _Props(objectContent):
    return dict((p.name, p.val) for p in objectContent.propSet)


class Client:
    """ Inventory queries against a connected ServiceInstance. """

    def __init__(self, si):
        self._si = si

    @property
    def content(self):
        return self._si.RetrieveContent()

    def _Retrieve(self, filterSpecs):
        pc = self.content.propertyCollector
        return pc.RetrieveContents(filterSpecs)

    def RootFolder(self):
        """ Gets the root folder of the inventory """
        return self.content.rootFolder

    def Ancestors(self, entity):
        """
        Returns the chain of managed entities from the root folder down to
        and including entity, each with its name and parent.
        """
        # Retrieve the "name" and "parent" properties for all the managed
        # entities reachable by following "parent" properties.
        objectSet = self._Retrieve([
            PC.FilterSpec(
                propSet=[
                    PC.PropertySpec(type=vim.ManagedEntity,
                                    pathSet=['name', 'parent'])
                ],
                objectSet=[
                    PC.ObjectSpec(
                        obj=entity,
                        selectSet=[
                            PC.TraversalSpec(
                                name='ParentTraversalSpec',
                                type=vim.ManagedEntity,
                                path='parent',
                                selectSet=[
                                    PC.SelectionSpec(
                                        name='ParentTraversalSpec')
                                ])
                        ])
                ])
        ])

        entityMap = {}
        for oc in objectSet:
            _RaiseMissing(oc)
            props = _Props(oc)
            entityMap[oc.obj._moId] = Ancestor(props.get('name'), oc.obj,
                                               props.get('parent'))

        # Walk back up from entity and reverse, root first.
        result = []
        current = entityMap.get(entity._moId)
        while current is not None:
            result.insert(0, current)
            if current.Parent is None:
                break
            current = entityMap.get(current.Parent._moId)
        return result

    def DatacenterFolders(self, datacenter):
        """ Fetch the vm, host, datastore and network folder of a datacenter. """
        objectSet = self._Retrieve([
            PC.FilterSpec(
                propSet=[
                    PC.PropertySpec(type=vim.Datacenter,
                                    pathSet=['vmFolder', 'hostFolder',
                                             'datastoreFolder',
                                             'networkFolder'])
                ],
                objectSet=[PC.ObjectSpec(obj=datacenter)])
        ])
        if not objectSet:
            raise vmodl.fault.ManagedObjectNotFound(obj=datacenter)

        oc = objectSet[0]
        _RaiseMissing(oc)
        props = _Props(oc)
        return DatacenterFolders(props['vmFolder'], props['hostFolder'],
                                 props['datastoreFolder'],
                                 props['networkFolder'])

    def Children(self, container):
        """
        Returns the (name, object) pairs of the direct inventory children
        of a container: folders, datacenters, compute resources and
        resource pools.
        """
        selectSet = [PC.TraversalSpec(type=containerType, path=prop)
                     for containerType, prop in CHILD_PROPERTIES]
        objectSet = self._Retrieve([
            PC.FilterSpec(
                propSet=[
                    PC.PropertySpec(type=vim.ManagedEntity, pathSet=['name'])
                ],
                objectSet=[
                    PC.ObjectSpec(obj=container, skip=True,
                                  selectSet=selectSet)
                ])
        ])

        children = []
        for oc in objectSet:
            _RaiseMissing(oc)
            children.append((_Props(oc).get('name'), oc.obj))
        logger.debug('%s has %d children', container, len(children))
        return children

    def Hosts(self, computeResource):
        """ The hosts of a standalone compute resource or cluster. """
        return list(computeResource.host)
