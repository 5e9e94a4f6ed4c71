## @file objects.py
## @brief Typed handles for resolved inventory objects
"""
Typed handles for resolved inventory objects

A handle pairs a managed object reference with the inventory path it was
found at. Handles compare equal when they refer to the same managed
object, whatever path led to them.
"""

from . import path


class Common(object):
    def __init__(self, client, ref):
        self._client = client
        self._ref = ref
        self.InventoryPath = None

    def Reference(self):
        return self._ref

    def Client(self):
        return self._client

    def Name(self):
        """
        The entity name, taken from the inventory path when there is one so
        no round trip is needed.
        """
        if self.InventoryPath:
            return path.Base(self.InventoryPath)
        return self._ref.name

    def __eq__(self, other):
        if not isinstance(other, Common):
            return NotImplemented
        return self._ref == other._ref

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._ref)

    def __repr__(self):
        return '%s(%r, %r)' % (type(self).__name__, self._ref,
                               self.InventoryPath)


class Folder(Common):
    pass


class Datacenter(Common):
    def Folders(self):
        """ The vm, host, datastore and network folders of this datacenter. """
        return self._client.DatacenterFolders(self._ref)


class Datastore(Common):
    pass


class HostSystem(Common):
    pass


class ComputeResource(Common):
    def Hosts(self):
        return self._client.Hosts(self._ref)


class NetworkReference(Common):
    """ Something a virtual nic can be backed by. """


class Network(NetworkReference):
    pass


class DistributedVirtualPortgroup(NetworkReference):
    pass


class ResourcePool(Common):
    pass


class VirtualMachine(Common):
    pass
