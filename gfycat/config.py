import codecs
import logging
import os
from typing import TYPE_CHECKING

import yaml
from yaml.error import YAMLError

from gfycat.base import Constants
from gfycat.exceptions import ConfigurationError

if TYPE_CHECKING:
    from typing import Optional

    from gfycat.typedefs import AnySettingsContainer, SettingsType

LOGGER = logging.getLogger(__name__)


class GfycatSetting(Constants):
    """
    Known setting keys of the :mod:`gfycat` configuration.
    """
    ASSETS_URL = "gfycat.assets_url"
    CACHE_DIR = "gfycat.cache_dir"
    REQUEST_TIMEOUT = "gfycat.request_timeout"
    ENCODING = "gfycat.encoding"
    SEED = "gfycat.seed"
    FETCHER = "gfycat.fetcher"
    LOG_LEVEL = "gfycat.log_level"


GFYCAT_SETTING_PREFIX = "gfycat."
GFYCAT_ENV_PREFIX = "GFYCAT_"
GFYCAT_CONFIG_ENV = "GFYCAT_CONFIG"
GFYCAT_CACHE_DIR_NAME = ".gfycat"
GFYCAT_DEFAULT_ASSETS_URL = "https://assets.gfycat.com/"
GFYCAT_DEFAULT_REQUEST_TIMEOUT = 30
GFYCAT_DEFAULT_SETTINGS = {
    GfycatSetting.ASSETS_URL: GFYCAT_DEFAULT_ASSETS_URL,
    GfycatSetting.CACHE_DIR: None,
    GfycatSetting.REQUEST_TIMEOUT: GFYCAT_DEFAULT_REQUEST_TIMEOUT,
    GfycatSetting.ENCODING: None,
    GfycatSetting.SEED: None,
    GfycatSetting.FETCHER: None,
    GfycatSetting.LOG_LEVEL: None,
}  # type: SettingsType


class GfycatSettings(dict):
    """
    Settings already merged from every supported location by :func:`get_settings`.

    Passing them back to :func:`get_settings` returns them as is, without resolving the configuration file again.
    """


def _setting_key(name):
    # type: (str) -> str
    name = str(name).strip()
    if not name.startswith(GFYCAT_SETTING_PREFIX):
        name = GFYCAT_SETTING_PREFIX + name
    return name


def get_config_file(config_file=None):
    # type: (Optional[str]) -> Optional[str]
    """
    Resolves the location of the YAML configuration file to load, if any.

    The explicit :paramref:`config_file` takes precedence over the ``GFYCAT_CONFIG`` environment variable.
    When neither is defined, no configuration file is employed.

    :raises ConfigurationError: if a configuration file is specified but cannot be found.
    """
    config_file = config_file or os.getenv(GFYCAT_CONFIG_ENV)
    if not config_file:
        return None
    config_path = os.path.abspath(os.path.expanduser(config_file))
    if not os.path.isfile(config_path):
        raise ConfigurationError(f"Cannot find configuration file: [{config_path}]")
    LOGGER.debug("Resolved specified configuration file: [%s]", config_path)
    return config_path


def load_config_file(config_file):
    # type: (str) -> SettingsType
    """
    Loads the settings defined in a YAML configuration file.

    Keys can be provided with or without the ``gfycat.`` prefix.

    .. code-block:: yaml

        cache_dir: /tmp/gfycat
        gfycat.request_timeout: 10

    :raises ConfigurationError: if the file cannot be read or does not define a mapping of settings.
    """
    try:
        with open(config_file, mode="r", encoding="utf-8") as file:
            config = yaml.safe_load(file)
    except (OSError, YAMLError) as exc:
        LOGGER.debug("Loading error: %s", exc, exc_info=exc)
        raise ConfigurationError(f"Failed loading configuration file: [{config_file}]") from exc
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Invalid configuration file [{config_file}] does not define a mapping of settings.")
    return {_setting_key(key): value for key, value in config.items()}


def get_env_settings():
    # type: () -> SettingsType
    """
    Retrieves the settings defined by ``GFYCAT_<KEY>`` environment variables for every known setting key.
    """
    settings = {}
    for key in GfycatSetting.values():
        env_name = GFYCAT_ENV_PREFIX + key[len(GFYCAT_SETTING_PREFIX):].upper()
        env_value = os.getenv(env_name)
        if env_value is not None:
            settings[key] = env_value
    return settings


def get_settings(container=None, config_file=None):
    # type: (Optional[AnySettingsContainer], Optional[str]) -> SettingsType
    """
    Retrieves the application ``settings`` merged from every supported location.

    Priority of definitions, from lowest to highest:

    1. defaults from :data:`GFYCAT_DEFAULT_SETTINGS`
    2. YAML configuration file (see :func:`get_config_file`)
    3. environment variables ``GFYCAT_<KEY>``
    4. explicit :paramref:`container` values

    Settings previously returned by this function are returned unmodified unless a configuration file is
    explicitly requested.

    :raises TypeError: if the container is not a settings mapping.
    :raises ConfigurationError: if the configuration file cannot be resolved or loaded.
    """
    if container is not None and not isinstance(container, dict):
        raise TypeError(f"Could not retrieve settings from container object of type [{type(container).__name__}]")
    if isinstance(container, GfycatSettings) and not config_file:
        return container
    settings = GfycatSettings(GFYCAT_DEFAULT_SETTINGS)
    config_path = get_config_file(config_file)
    if config_path:
        settings.update(load_config_file(config_path))
    settings.update(get_env_settings())
    settings.update({_setting_key(key): value for key, value in (container or {}).items()})
    return settings


def get_assets_url(container=None):
    # type: (Optional[AnySettingsContainer]) -> str
    """
    Obtains the base URL of the assets host where word lists are retrieved from.
    """
    settings = container if container is not None else get_settings()
    assets_url = str(settings.get(GfycatSetting.ASSETS_URL, GFYCAT_DEFAULT_ASSETS_URL) or "").strip()
    if not assets_url:
        raise ConfigurationError(f"Setting '{GfycatSetting.ASSETS_URL}' cannot be empty.")
    if not assets_url.endswith("/"):
        assets_url += "/"
    return assets_url


def get_cache_dir(container=None):
    # type: (Optional[AnySettingsContainer]) -> str
    """
    Obtains the local directory where fetched word lists are persisted.

    Defaults to ``.gfycat`` under the home directory of the calling user.
    """
    settings = container if container is not None else get_settings()
    cache_dir = settings.get(GfycatSetting.CACHE_DIR)
    if not cache_dir:
        return os.path.join(os.path.expanduser("~"), GFYCAT_CACHE_DIR_NAME)
    return os.path.abspath(os.path.expanduser(str(cache_dir)))


def get_request_timeout(container=None):
    # type: (Optional[AnySettingsContainer]) -> float
    """
    Obtains the client timeout in seconds applied to word list requests.
    """
    settings = container if container is not None else get_settings()
    timeout = settings.get(GfycatSetting.REQUEST_TIMEOUT, GFYCAT_DEFAULT_REQUEST_TIMEOUT)
    if timeout in [None, ""]:
        return float(GFYCAT_DEFAULT_REQUEST_TIMEOUT)
    try:
        timeout = float(timeout)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid setting '{GfycatSetting.REQUEST_TIMEOUT}' value: [{timeout!s}]") from exc
    if timeout <= 0:
        raise ConfigurationError(f"Setting '{GfycatSetting.REQUEST_TIMEOUT}' must be positive, got [{timeout!s}]")
    return timeout


def get_seed(container=None):
    # type: (Optional[AnySettingsContainer]) -> Optional[int]
    """
    Obtains the explicit seed of the random source, or ``None`` to seed from the current time.
    """
    settings = container if container is not None else get_settings()
    seed = settings.get(GfycatSetting.SEED)
    if seed in [None, ""]:
        return None
    if isinstance(seed, bool):
        raise ConfigurationError(f"Invalid setting '{GfycatSetting.SEED}' value: [{seed!s}]")
    try:
        return int(seed)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid setting '{GfycatSetting.SEED}' value: [{seed!s}]") from exc


def get_encoding(container=None):
    # type: (Optional[AnySettingsContainer]) -> Optional[str]
    """
    Obtains the text encoding of cached word lists, or ``None`` for the platform default encoding.
    """
    settings = container if container is not None else get_settings()
    encoding = settings.get(GfycatSetting.ENCODING)
    if not encoding:
        return None
    try:
        return codecs.lookup(str(encoding)).name
    except LookupError as exc:
        raise ConfigurationError(f"Unknown setting '{GfycatSetting.ENCODING}' value: [{encoding!s}]") from exc
