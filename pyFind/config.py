## @file config.py
## @brief Finder settings
"""
Finder settings

The defaults reproduce the usual vSphere layout: a datacenter holds the
folders 'vm', 'host', 'datastore' and 'network', and the default lookups
pick the single object of their kind in the selected datacenter.
"""

import copy

# Lookup kinds, also used as the labels in not found / ambiguous errors.
DATACENTER = 'datacenter'
DATASTORE = 'datastore'
HOST = 'host'
NETWORK = 'network'
RESOURCE_POOL = 'resource pool'
VM = 'vm'


class FinderConfig(object):
    # Globs used by the Default* lookups, relative to the lookup's anchor.
    defaultGlobs = {
        DATACENTER: '*',
        DATASTORE: './*',
        HOST: './*/*',
        NETWORK: './*',
        RESOURCE_POOL: './*/Resources',
        VM: './*',
    }

    # Datacenter folder a typed lookup walks through when it crosses a
    # datacenter.
    datacenterFolders = {
        DATACENTER: None,
        DATASTORE: 'datastore',
        HOST: 'host',
        NETWORK: 'network',
        RESOURCE_POOL: 'host',
        VM: 'vm',
    }

    def __init__(self, defaultGlobs=None, datacenterFolders=None):
        self.defaultGlobs = copy.copy(FinderConfig.defaultGlobs)
        self.datacenterFolders = copy.copy(FinderConfig.datacenterFolders)
        for name, overrides in (('defaultGlobs', defaultGlobs),
                                ('datacenterFolders', datacenterFolders)):
            if not overrides:
                continue
            current = getattr(self, name)
            unknown = set(overrides) - set(current)
            if unknown:
                raise ValueError('Unknown lookup kind(s) in %s: %s' %
                                 (name, ', '.join(sorted(unknown))))
            current.update(overrides)

    def DefaultGlob(self, kind):
        return self.defaultGlobs[kind]

    def DatacenterFolder(self, kind):
        return self.datacenterFolders[kind]
