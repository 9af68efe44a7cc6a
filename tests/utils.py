"""
Utility methods for various test setup operations.
"""
import os
from typing import TYPE_CHECKING

import mock

from gfycat.exceptions import NetworkFetchError
from gfycat.fetch import AssetFetcher
from gfycat.utils import make_dirs

if TYPE_CHECKING:
    from typing import ContextManager, Dict, Iterable, List, Optional, Union

MOCK_ADJECTIVES = ["quick", "lazy", "happy", "blue"]
MOCK_ANIMALS = ["fox", "otter", "wolf"]


class MockAssetFetcher(AssetFetcher):
    """
    Fetcher returning canned contents per file name, or raising the error registered for it.

    Every requested file name is recorded in :attr:`calls` to validate which resources would have been fetched.
    """

    def __init__(self, contents=None, errors=None, settings=None):
        # type: (Optional[Dict[str, bytes]], Optional[Dict[str, Exception]], Optional[Dict[str, str]]) -> None
        self.contents = contents or {}
        self.errors = errors or {}
        self.settings = settings
        self.calls = []  # type: List[str]

    def fetch(self, file_name):
        # type: (str) -> bytes
        self.calls.append(file_name)
        if file_name in self.errors:
            raise self.errors[file_name]
        if file_name not in self.contents:
            raise NetworkFetchError(f"Mock word list [{file_name}] not found.")
        return self.contents[file_name]


class SequenceRandomSource(object):
    """
    Random source returning predefined indices to force the drawn words.
    """

    def __init__(self, indices):
        # type: (Iterable[int]) -> None
        self.indices = list(indices)
        self.bounds = []  # type: List[int]

    def randbelow(self, n):
        # type: (int) -> int
        self.bounds.append(n)
        return self.indices.pop(0)


def make_word_list(words):
    # type: (Iterable[str]) -> bytes
    return "\n".join(words).encode()


def mocked_word_lists(adjectives=None, animals=None):
    # type: (Optional[List[str]], Optional[List[str]]) -> Dict[str, bytes]
    return {
        "adjectives.txt": make_word_list(adjectives or MOCK_ADJECTIVES),
        "animals.txt": make_word_list(animals or MOCK_ANIMALS),
    }


def setup_cached_word_list(cache_dir, file_name, contents):
    # type: (str, str, Union[str, bytes]) -> str
    """
    Writes a word list file directly in the cache directory as if it had previously been fetched.
    """
    make_dirs(cache_dir, exist_ok=True)
    path = os.path.join(cache_dir, file_name)
    if isinstance(contents, str):
        contents = contents.encode()
    with open(path, mode="wb") as file:
        file.write(contents)
    return path


def mocked_gfycat_environ(**env_vars):
    # type: (**str) -> ContextManager[Dict[str, str]]
    """
    Mocks the environment variables such that only the specified ``GFYCAT_<KEY>`` variables are defined.
    """
    environ = {key: value for key, value in os.environ.items() if not key.startswith("GFYCAT_")}
    environ.update(env_vars)
    return mock.patch.dict(os.environ, environ, clear=True)
