## @file recurse.py
## @brief Glob driven walk of the inventory tree
"""
Glob driven walk of the inventory tree

Recurser expands a root element plus the remaining path segments into the
list of matching elements. Each segment is a shell style glob ('*', '?',
'[...]') matched against the name of one level of the tree.
"""

import collections
import fnmatch
import logging

from . import path
from .errors import PatternError
from .kinds import IsExpandedAsLeaf, IsTraversable, KindOf, ObjectKind

logger = logging.getLogger('pyFind.recurse')

## An absolute inventory path and the managed object found there
Element = collections.namedtuple('Element', ['Path', 'Object'])


def CheckPattern(pattern):
    """ Reject a segment with an unterminated character class. """
    i = 0
    while i < len(pattern):
        if pattern[i] == '[':
            # A ']' directly after '[' or '[!' is part of the class.
            j = i + 1
            if j < len(pattern) and pattern[j] == '!':
                j += 1
            if j < len(pattern) and pattern[j] == ']':
                j += 1
            j = pattern.find(']', j)
            if j < 0:
                raise PatternError(pattern)
            i = j
        i += 1


class Recurser:
    """
    Walks the inventory through a Client.

    Containers (folders, datacenters, compute resources and resource pools)
    are expanded on demand, one property collector call per container.
    """

    def __init__(self, client):
        self.client = client

    def List(self, element):
        """ Children of a container element, as elements. """
        return [Element(path.Join(element.Path, path.EscapeName(name)), obj)
                for name, obj in self.client.Children(element.Object)]

    def Recurse(self, root, parts, traverseLeafs=False,
                datacenterFolder=None):
        """
        Expand root and the remaining path segments into matching elements.

        @param root             : Element to start from
        @param parts            : remaining path segments, may be empty
        @param traverseLeafs    : when the segments run out on a container,
                                  return its children instead of itself
        @param datacenterFolder : name of the datacenter folder ('vm',
                                  'host', 'datastore' or 'network') to enter
                                  whenever the walk crosses a datacenter
        """
        kind = KindOf(root.Object)

        if kind == ObjectKind.Datacenter and datacenterFolder:
            return self._EnterDatacenter(root, parts, traverseLeafs,
                                         datacenterFolder)

        if not parts:
            # Patterns like 'vm/web-*' should match the vms and not try to
            # traverse them; folders only get expanded for leaf traversal.
            if not IsExpandedAsLeaf(kind) or not traverseLeafs:
                return [root]
            return self.List(root)

        if not IsTraversable(kind):
            return []

        pattern, rest = parts[0], parts[1:]
        CheckPattern(pattern)

        out = []
        for element in self.List(root):
            if not fnmatch.fnmatchcase(path.Base(element.Path), pattern):
                continue
            out.extend(self.Recurse(element, rest, traverseLeafs,
                                    datacenterFolder))
        return out

    def _EnterDatacenter(self, root, parts, traverseLeafs, datacenterFolder):
        """
        A datacenter is crossed through one of its typed folders. The
        folder segment may be spelled out ('A/vm/web') or left out ('A/web').
        """
        folders = [element for element in self.List(root)
                   if path.Base(element.Path) == datacenterFolder]
        if not folders:
            logger.debug('%s has no %s folder', root.Path, datacenterFolder)
            return []

        if parts and parts[0] == datacenterFolder:
            parts = parts[1:]

        out = []
        for folder in folders:
            out.extend(self.Recurse(folder, parts, traverseLeafs,
                                    datacenterFolder))
        return out
