## @file kinds.py
## @brief Remote object kind tags
"""
Remote object kind tags

Every managed object found in the inventory is classified into one of a
closed set of kinds, keyed by the wsdl type name the server reports for
it. Anything the finder does not know about becomes ObjectKind.Other.
"""

import enum


class ObjectKind(enum.Enum):
    Folder = "Folder"
    StoragePod = "StoragePod"
    Datacenter = "Datacenter"
    ComputeResource = "ComputeResource"
    ClusterComputeResource = "ClusterComputeResource"
    HostSystem = "HostSystem"
    ResourcePool = "ResourcePool"
    VirtualApp = "VirtualApp"
    VirtualMachine = "VirtualMachine"
    Datastore = "Datastore"
    Network = "Network"
    OpaqueNetwork = "OpaqueNetwork"
    DistributedVirtualPortgroup = "DistributedVirtualPortgroup"
    DistributedVirtualSwitch = "DistributedVirtualSwitch"
    VmwareDistributedVirtualSwitch = "VmwareDistributedVirtualSwitch"
    Other = None


_TRAVERSABLE = frozenset([
    ObjectKind.Folder,
    ObjectKind.StoragePod,
    ObjectKind.Datacenter,
    ObjectKind.ComputeResource,
    ObjectKind.ClusterComputeResource,
    ObjectKind.ResourcePool,
    ObjectKind.VirtualApp,
])

COMPUTE_RESOURCES = frozenset([
    ObjectKind.ComputeResource,
    ObjectKind.ClusterComputeResource,
])

RESOURCE_POOLS = frozenset([
    ObjectKind.ResourcePool,
    ObjectKind.VirtualApp,
])


def TypeName(obj):
    """ The wsdl type name of a managed object, e.g. 'VirtualMachine'. """
    return type(obj)._wsdlName


def KindOf(obj):
    """ Classify a pyVmomi managed object. """
    try:
        return ObjectKind(TypeName(obj))
    except ValueError:
        return ObjectKind.Other


def IsTraversable(kind):
    """ Whether objects of this kind have inventory children. """
    return kind in _TRAVERSABLE


def IsExpandedAsLeaf(kind):
    """
    Whether a container matched by the last path segment is replaced by
    its children when leaves are traversed. Resource pools are kept as they
    are, so that 'cluster/Resources' names the pool and not its contents.
    """
    return kind in _TRAVERSABLE and kind not in RESOURCE_POOLS
