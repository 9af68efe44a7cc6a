"""
Local disk cache of the word lists retrieved from the assets host.

Cached files are written once and then read forever: there is neither invalidation nor refresh of their contents.
"""
import logging
import os
import threading
import uuid
from typing import TYPE_CHECKING

from gfycat.config import get_cache_dir, get_encoding
from gfycat.exceptions import CacheReadError, CacheWriteError
from gfycat.fetch import get_fetcher
from gfycat.utils import make_dirs

if TYPE_CHECKING:
    from typing import Dict, List, Optional

    from gfycat.fetch import AssetFetcher
    from gfycat.typedefs import AnySettingsContainer, WordList

LOGGER = logging.getLogger(__name__)


class LocalCache(object):
    """
    Provides the lines of word list files, fetching and persisting them locally on first use.

    Loads of a same file within the process are serialized, such that a missing file is fetched only once
    even when requested concurrently by multiple threads. Across processes, the atomic replacement of the
    written file guarantees that readers never obtain partial contents.
    """
    _locks = {}                     # type: Dict[str, threading.Lock]
    _locks_guard = threading.Lock()

    def __init__(self, cache_dir=None, fetcher=None, encoding=None, settings=None):
        # type: (Optional[str], Optional[AssetFetcher], Optional[str], Optional[AnySettingsContainer]) -> None
        self.cache_dir = cache_dir or get_cache_dir(settings)
        self.encoding = encoding or get_encoding(settings)
        self._fetcher = fetcher
        self._settings = settings

    def __repr__(self):
        # type: () -> str
        return f"{type(self).__name__}(cache_dir={self.cache_dir!r})"

    @property
    def fetcher(self):
        # type: () -> AssetFetcher
        if self._fetcher is None:
            self._fetcher = get_fetcher(self._settings)
        return self._fetcher

    def get_cache_path(self, file_name):
        # type: (str) -> str
        return os.path.join(self.cache_dir, file_name)

    def exists(self, file_name):
        # type: (str) -> bool
        return os.path.exists(self.get_cache_path(file_name))

    @classmethod
    def _get_lock(cls, path):
        # type: (str) -> threading.Lock
        with cls._locks_guard:
            return cls._locks.setdefault(os.path.abspath(path), threading.Lock())

    def store(self, file_name, data):
        # type: (str, bytes) -> str
        """
        Writes the word list contents under the cache directory, creating it if missing.

        Contents are first written to a temporary file in the same directory and then renamed over the final path.
        The file is created with permissive permissions restricted only by the current process umask.
        The temporary file never remains after a failure, whichever error interrupted the write.

        :returns: path of the cached file.
        :raises CacheWriteError: if the contents are not binary, or if the directory or the file could not be written.
        """
        path = self.get_cache_path(file_name)
        if not isinstance(data, (bytes, bytearray)):
            raise CacheWriteError(
                f"Cannot write cached word list [{path}] from non-binary contents of type [{type(data).__name__}].",
                path,
            )
        try:
            make_dirs(self.cache_dir, exist_ok=True)
        except OSError as exc:
            LOGGER.debug("Cache directory error: %s", exc, exc_info=exc)
            msg = f"Cannot create cache directory [{self.cache_dir}]: {exc!s}"
            raise CacheWriteError(msg, self.cache_dir) from exc
        tmp_path = os.path.join(self.cache_dir, f".{file_name}.{uuid.uuid4().hex}.tmp")
        try:
            tmp_fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o777)
            with os.fdopen(tmp_fd, mode="wb") as tmp_file:
                tmp_file.write(data)
            os.replace(tmp_path, path)
        except OSError as exc:
            LOGGER.debug("Cache write error: %s", exc, exc_info=exc)
            raise CacheWriteError(f"Cannot write cached word list [{path}]: {exc!s}", path) from exc
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        LOGGER.debug("Stored word list [%s] in cache [%s]", file_name, path)
        return path

    def read_lines(self, file_name):
        # type: (str) -> WordList
        """
        Reads every line of a cached word list, preserving order, blank and duplicate lines.

        Lines are split on ``\\n`` only, any single ``\\r`` preceding it is dropped, and the final line
        terminator does not produce an additional empty entry.

        :raises CacheReadError: if the file could not be opened or decoded.
        """
        path = self.get_cache_path(file_name)
        lines = []  # type: List[str]
        try:
            with open(path, mode="r", encoding=self.encoding, newline="\n") as file:
                for line in file:
                    if line.endswith("\n"):
                        line = line[:-1]
                    if line.endswith("\r"):
                        line = line[:-1]
                    lines.append(line)
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.debug("Cache read error: %s", exc, exc_info=exc)
            raise CacheReadError(f"Cannot read cached word list [{path}]: {exc!s}", path) from exc
        return lines

    def load_words(self, file_name):
        # type: (str) -> WordList
        """
        Obtains the words of the requested list, retrieving it with the fetcher only if it is not already cached.

        :raises NetworkFetchError: if the missing word list could not be retrieved.
        :raises CacheWriteError: if the retrieved word list could not be persisted.
        :raises CacheReadError: if the cached word list could not be read.
        """
        path = self.get_cache_path(file_name)
        if not os.path.exists(path):
            with self._get_lock(path):
                if not os.path.exists(path):
                    LOGGER.debug("Cache miss for word list [%s] at [%s]", file_name, path)
                    data = self.fetcher.fetch(file_name)
                    self.store(file_name, data)
        else:
            LOGGER.debug("Cache hit for word list [%s] at [%s]", file_name, path)
        words = self.read_lines(file_name)
        LOGGER.debug("Loaded [%s] words from [%s]", len(words), path)
        return words

