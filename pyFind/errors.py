## @file errors.py
## @brief Exceptions raised while resolving inventory paths
"""
Exceptions raised while resolving inventory paths

Faults coming from the server (pyVmomi vmodl.MethodFault and friends) are
never wrapped in these; they reach the caller as raised.
"""


class FinderError(Exception):
    pass


class UnsupportedOperationError(FinderError):
    def __init__(self, path):
        self.path = path
        FinderError.__init__(self, 'cannot traverse up a tree: %s' % path)


class NoDatacenterError(FinderError):
    def __init__(self):
        FinderError.__init__(self, 'please specify a datacenter')


class PatternError(FinderError):
    def __init__(self, pattern):
        self.pattern = pattern
        FinderError.__init__(self, 'syntax error in pattern: %s' % pattern)


class NotFoundError(FinderError):
    def __init__(self, kind, path):
        self.kind = kind
        self.path = path
        FinderError.__init__(self, self.Message())

    def Message(self):
        return "%s '%s' not found" % (self.kind, self.path)


class MultipleFoundError(FinderError):
    def __init__(self, kind, path):
        self.kind = kind
        self.path = path
        FinderError.__init__(self, self.Message())

    def Message(self):
        return "path '%s' resolves to multiple %ss" % (self.path, self.kind)


class DefaultNotFoundError(NotFoundError):
    """ No explicit selection was made and there is nothing to fall back on. """

    def Message(self):
        return 'no default %s found' % self.kind


class DefaultMultipleFoundError(MultipleFoundError):
    """ No explicit selection was made and the fallback is not unique. """

    def Message(self):
        return ('default %s resolves to multiple instances, please specify' %
                self.kind)


def ToDefaultError(err):
    """
    Map a NotFoundError or MultipleFoundError raised by a default lookup to
    its Default variant. Anything else is returned unchanged.
    """
    if isinstance(err, (DefaultNotFoundError, DefaultMultipleFoundError)):
        return err
    if isinstance(err, NotFoundError):
        return DefaultNotFoundError(err.kind, err.path)
    if isinstance(err, MultipleFoundError):
        return DefaultMultipleFoundError(err.kind, err.path)
    return err
