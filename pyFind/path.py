## @file path.py
## @brief Inventory path helpers
##
## Splitting of user supplied paths into segments and building of
## absolute inventory paths.
"""
Inventory path helpers

Inventory paths are slash separated, rooted at '/', e.g. '/dc1/vm/web01'.
Entity names that contain a '/' show up escaped as '%2f', the same way
the inventory service reports them.
"""

SEPARATOR = "/"
ESCAPED_SEPARATOR = "%2f"

CURRENT = "."
PARENT = ".."


def ToParts(path):
    """
    Split a path into its ordered, non-empty segments.

    e.g. '/dc1/vm/*' -> ['dc1', 'vm', '*']
    e.g. './web//db/' -> ['.', 'web', 'db']
    e.g. '/' -> []

    The special segments '.' and '..' are kept as-is, they are only
    meaningful as the first segment and the finder decides what to do
    with them.
    """
    return [part for part in path.split(SEPARATOR) if part]


def Join(*parts):
    """
    Join path pieces into an absolute inventory path.

    e.g. Join('/', 'dc1', 'vm') -> '/dc1/vm'
    e.g. Join('/dc1', 'host/cluster') -> '/dc1/host/cluster'
    """
    segments = []
    for part in parts:
        segments.extend(ToParts(part))
    return SEPARATOR + SEPARATOR.join(segments)


def Base(path):
    """ Last segment of an inventory path, '/' for the root itself. """
    parts = ToParts(path)
    if not parts:
        return SEPARATOR
    return parts[-1]


def EscapeName(name):
    """ Turn an entity name into a single path segment. """
    return name.replace(SEPARATOR, ESCAPED_SEPARATOR)
