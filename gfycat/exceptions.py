"""
Errors raised during the retrieval of word lists and the generation of names.

Each error also derives from the closest builtin exception such that callers unaware of :mod:`gfycat` specific
errors can still intercept them with the usual ``IOError``, ``OSError`` or ``ValueError`` handlers.
"""
import logging
from typing import TYPE_CHECKING

LOGGER = logging.getLogger(__name__)
if TYPE_CHECKING:
    from typing import Optional


class GfycatException(Exception):
    """
    Base class of exceptions defined by :mod:`gfycat` package.
    """


class NetworkFetchError(GfycatException, IOError):
    """
    Error related to the retrieval of a word list from the remote assets host.

    Raised for invalid request construction, transport failure or timeout.
    The original :mod:`requests` error is chained as the cause.
    """

    def __init__(self, message, url=None):
        # type: (str, Optional[str]) -> None
        super(NetworkFetchError, self).__init__(message)
        self.url = url


class FilesystemError(GfycatException, OSError):
    """
    Base exception related to the local word list cache files.
    """

    def __init__(self, message, path=None):
        # type: (str, Optional[str]) -> None
        super(FilesystemError, self).__init__(message)
        self.path = path


class CacheWriteError(FilesystemError):
    """
    Error indicating that the cache directory or a cached word list file could not be created.
    """


class CacheReadError(FilesystemError):
    """
    Error indicating that a cached word list file could not be opened or read.
    """


class EmptyWordListError(GfycatException, ValueError):
    """
    Error indicating that a word list contains no entry from which a random word could be drawn.
    """


class ConfigurationError(GfycatException, ValueError):
    """
    Error related to an invalid setting value or an unreadable configuration file.
    """
