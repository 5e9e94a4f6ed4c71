"""
Path based lookup of vSphere inventory objects.
"""

import logging

from .client import Client
from .config import FinderConfig
from .errors import (DefaultMultipleFoundError, DefaultNotFoundError,
                     FinderError, MultipleFoundError, NoDatacenterError,
                     NotFoundError, PatternError, UnsupportedOperationError)
from .finder import Finder
from .recurse import Element, Recurser

logging.getLogger('pyFind').addHandler(logging.NullHandler())
