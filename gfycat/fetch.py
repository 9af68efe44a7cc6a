"""
Retrieval of word list resources from the remote assets host.
"""
import abc
import logging
import os
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import requests
from requests_file import FileAdapter

from gfycat.config import GFYCAT_DEFAULT_ASSETS_URL, GfycatSetting, get_assets_url, get_request_timeout, get_settings
from gfycat.exceptions import ConfigurationError, NetworkFetchError
from gfycat.utils import fully_qualified_name, import_target

if TYPE_CHECKING:
    from typing import Optional

    from gfycat.typedefs import AnySettingsContainer, Number

LOGGER = logging.getLogger(__name__)


def get_resource_name(file_name):
    # type: (str) -> str
    """
    Obtains the remote resource name of a word list file by removing everything after the first dot.

    >>> get_resource_name("adjectives.txt")
    'adjectives'
    """
    return file_name.split(".", 1)[0]


def get_asset_url(file_name, assets_url=GFYCAT_DEFAULT_ASSETS_URL):
    # type: (str, str) -> str
    """
    Generates the URL of the remote resource corresponding to a word list file.
    """
    if not assets_url.endswith("/"):
        assets_url += "/"
    return assets_url + get_resource_name(file_name)


class AssetFetcher(abc.ABC):
    """
    Capability to retrieve the raw contents of a named word list resource.

    Implementations must return the complete contents as bytes, or raise :class:`NetworkFetchError`.
    """

    @abc.abstractmethod
    def fetch(self, file_name):
        # type: (str) -> bytes
        raise NotImplementedError


class RemoteAssetFetcher(AssetFetcher):
    """
    Retrieves word lists with a single ``GET`` request against the assets host.

    No retry is attempted and the response status is not enforced: whichever body is returned is considered
    the contents of the word list. Locations using the ``file://`` scheme (or a local path) are read with
    :class:`requests_file.FileAdapter` to allow the use of a local mirror of the assets host. A mirror file that
    cannot be read is reported as an error rather than caching the error text as a word list.
    """

    def __init__(self, assets_url=None, timeout=None, settings=None):
        # type: (Optional[str], Optional[Number], Optional[AnySettingsContainer]) -> None
        if assets_url is None:
            assets_url = get_assets_url(settings)
        if timeout is None:
            timeout = get_request_timeout(settings)
        self.assets_url = assets_url
        self.timeout = timeout

    def __repr__(self):
        # type: () -> str
        return f"{type(self).__name__}(assets_url={self.assets_url!r}, timeout={self.timeout!r})"

    def get_url(self, file_name):
        # type: (str) -> str
        url = get_asset_url(file_name, self.assets_url)
        if urlparse(url).scheme in ["", "file"] and not url.startswith("file://"):
            url = f"file://{os.path.abspath(url)}"
        return url

    def fetch(self, file_name):
        # type: (str) -> bytes
        url = self.get_url(file_name)
        LOGGER.info("Fetching word list [%s] from [%s]", file_name, url)
        try:
            with requests.Session() as session:
                if url.startswith("file://"):
                    session.mount("file://", FileAdapter())
                resp = session.get(url, timeout=self.timeout)
                content = resp.content
        except requests.RequestException as exc:
            LOGGER.debug("Request error: %s", exc, exc_info=exc)
            raise NetworkFetchError(f"Failed retrieving word list [{file_name}] from [{url}]: {exc!s}", url) from exc
        if resp.status_code >= 400:
            if url.startswith("file://"):
                raise NetworkFetchError(
                    f"Failed retrieving word list [{file_name}] from [{url}]: local mirror file could not be read "
                    f"(status {resp.status_code}).", url
                )
            LOGGER.warning("Word list [%s] responded with status [%s] from [%s], contents used as is.",
                           file_name, resp.status_code, url)
        LOGGER.debug("Retrieved [%s] bytes for word list [%s]", len(content), file_name)
        return content


def get_fetcher(settings=None):
    # type: (Optional[AnySettingsContainer]) -> AssetFetcher
    """
    Obtains the fetcher to employ according to settings.

    When ``gfycat.fetcher`` references a custom :class:`AssetFetcher` class (see :func:`gfycat.utils.import_target`
    for supported formats), it is instantiated with the settings as keyword argument.
    Otherwise, :class:`RemoteAssetFetcher` is returned.

    :raises ConfigurationError: if the custom fetcher reference cannot be resolved to an :class:`AssetFetcher`.
    """
    if settings is None:
        settings = get_settings()
    fetcher_ref = settings.get(GfycatSetting.FETCHER)
    if not fetcher_ref:
        return RemoteAssetFetcher(settings=settings)
    fetcher_cls = import_target(fetcher_ref) if isinstance(fetcher_ref, str) else fetcher_ref
    if not isinstance(fetcher_cls, type) or not issubclass(fetcher_cls, AssetFetcher):
        raise ConfigurationError(
            f"Invalid setting '{GfycatSetting.FETCHER}' reference [{fetcher_ref!s}] "
            f"does not resolve to a subclass of [{fully_qualified_name(AssetFetcher)}]."
        )
    LOGGER.debug("Using custom word list fetcher [%s]", fully_qualified_name(fetcher_cls))
    return fetcher_cls(settings=settings)
