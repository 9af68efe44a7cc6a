import logging
import os
import tempfile

import mock
import pytest
import requests
import responses

from gfycat.cache import LocalCache
from gfycat.exceptions import ConfigurationError, NetworkFetchError
from gfycat.fetch import AssetFetcher, RemoteAssetFetcher, get_asset_url, get_fetcher, get_resource_name
from tests.utils import MockAssetFetcher, mocked_gfycat_environ


@pytest.mark.parametrize("file_name,expect", [
    ("adjectives.txt", "adjectives"),
    ("animals.txt", "animals"),
    ("archive.tar.gz", "archive"),
    ("no-extension", "no-extension"),
])
def test_get_resource_name(file_name, expect):
    assert get_resource_name(file_name) == expect


def test_get_asset_url():
    assert get_asset_url("adjectives.txt") == "https://assets.gfycat.com/adjectives"
    assert get_asset_url("animals.txt", "https://mirror.mock/words") == "https://mirror.mock/words/animals"
    assert get_asset_url("animals.txt", "https://mirror.mock/words/") == "https://mirror.mock/words/animals"


def test_asset_fetcher_abstract():
    with pytest.raises(TypeError):
        AssetFetcher()  # noqa  # pylint: disable=E0110


def test_remote_fetcher_defaults():
    fetcher = RemoteAssetFetcher(settings={})
    assert fetcher.assets_url == "https://assets.gfycat.com/"
    assert fetcher.timeout == 30


def test_remote_fetcher_from_settings():
    settings = {"gfycat.assets_url": "https://mirror.mock/words", "gfycat.request_timeout": "5"}
    fetcher = RemoteAssetFetcher(settings=settings)
    assert fetcher.assets_url == "https://mirror.mock/words/"
    assert fetcher.timeout == 5.0
    assert fetcher.get_url("adjectives.txt") == "https://mirror.mock/words/adjectives"


def test_remote_fetcher_explicit_over_settings():
    settings = {"gfycat.assets_url": "https://mirror.mock/words", "gfycat.request_timeout": "5"}
    fetcher = RemoteAssetFetcher(assets_url="https://other.mock/", timeout=1, settings=settings)
    assert fetcher.assets_url == "https://other.mock/"
    assert fetcher.timeout == 1


@responses.activate
def test_remote_fetcher_fetch():
    responses.add(responses.GET, "https://assets.gfycat.com/adjectives", body=b"quick\nlazy\n")
    data = RemoteAssetFetcher(settings={}).fetch("adjectives.txt")
    assert data == b"quick\nlazy\n"
    assert len(responses.calls) == 1
    assert responses.calls[0].request.method == "GET"
    assert responses.calls[0].request.url == "https://assets.gfycat.com/adjectives"


def test_remote_fetcher_request_timeout():
    mocked_resp = requests.Response()
    mocked_resp.status_code = 200
    mocked_resp._content = b"fox"  # noqa: W0212
    with mock.patch("requests.Session.get", return_value=mocked_resp) as mocked_get:
        data = RemoteAssetFetcher(settings={}).fetch("animals.txt")
    assert data == b"fox"
    mocked_get.assert_called_once_with("https://assets.gfycat.com/animals", timeout=30)


@responses.activate
def test_remote_fetcher_error_status_returns_body(caplog):
    """
    Response status is not enforced, the body of an error response is returned as the word list contents.
    """
    responses.add(responses.GET, "https://assets.gfycat.com/animals", body=b"Not Found", status=404)
    with caplog.at_level(logging.WARNING, logger="gfycat.fetch"):
        data = RemoteAssetFetcher(settings={}).fetch("animals.txt")
    assert data == b"Not Found"
    assert any("404" in record.getMessage() for record in caplog.records)


@pytest.mark.parametrize("error", [
    requests.ConnectionError("connection refused"),
    requests.Timeout("timed out"),
])
@responses.activate
def test_remote_fetcher_network_error(error):
    responses.add(responses.GET, "https://assets.gfycat.com/adjectives", body=error)
    with pytest.raises(NetworkFetchError) as exc_info:
        RemoteAssetFetcher(settings={}).fetch("adjectives.txt")
    assert exc_info.value.__cause__ is error
    assert exc_info.value.url == "https://assets.gfycat.com/adjectives"
    assert isinstance(exc_info.value, IOError)


def test_remote_fetcher_invalid_url():
    fetcher = RemoteAssetFetcher(assets_url="unknown://assets.mock/", timeout=1)
    with pytest.raises(NetworkFetchError) as exc_info:
        fetcher.fetch("adjectives.txt")
    assert isinstance(exc_info.value.__cause__, requests.RequestException)


def test_remote_fetcher_local_mirror():
    with tempfile.TemporaryDirectory() as tmp_dir:
        with open(os.path.join(tmp_dir, "animals"), mode="wb") as file:
            file.write(b"fox\nwolf\nbear")
        fetcher = RemoteAssetFetcher(assets_url=tmp_dir, timeout=1)
        assert fetcher.get_url("animals.txt") == f"file://{tmp_dir}/animals"
        assert fetcher.fetch("animals.txt") == b"fox\nwolf\nbear"

        fetcher = RemoteAssetFetcher(assets_url=f"file://{tmp_dir}", timeout=1)
        assert fetcher.fetch("animals.txt") == b"fox\nwolf\nbear"


def test_remote_fetcher_local_mirror_missing_file():
    with tempfile.TemporaryDirectory() as tmp_dir:
        cache_dir = os.path.join(tmp_dir, "cache")
        fetcher = RemoteAssetFetcher(assets_url=tmp_dir, timeout=1)
        with pytest.raises(NetworkFetchError) as exc_info:
            fetcher.fetch("animals.txt")
        assert exc_info.value.url == f"file://{tmp_dir}/animals"

        cache = LocalCache(cache_dir=cache_dir, fetcher=fetcher)
        with pytest.raises(NetworkFetchError):
            cache.load_words("animals.txt")
        assert not os.path.exists(os.path.join(cache_dir, "animals.txt")), "error text must not be cached"


def test_get_fetcher_default():
    with mocked_gfycat_environ(GFYCAT_ASSETS_URL="https://env.mock/"):
        fetcher = get_fetcher()
    assert isinstance(fetcher, RemoteAssetFetcher)
    assert fetcher.assets_url == "https://env.mock/"


def test_get_fetcher_custom_class():
    settings = {"gfycat.fetcher": MockAssetFetcher}
    fetcher = get_fetcher(settings)
    assert isinstance(fetcher, MockAssetFetcher)
    assert fetcher.settings is settings


def test_get_fetcher_custom_reference():
    settings = {"gfycat.fetcher": "tests.utils.MockAssetFetcher"}
    fetcher = get_fetcher(settings)
    # reference is imported as a distinct module, compare by name
    assert type(fetcher).__name__ == "MockAssetFetcher"
    assert isinstance(fetcher, AssetFetcher)


@pytest.mark.parametrize("reference", [
    "tests.utils.make_word_list",
    "tests.utils.UnknownFetcher",
    "unknown_module.Fetcher",
    "NotAModulePath",
    dict,
])
def test_get_fetcher_invalid_reference(reference):
    with pytest.raises(ConfigurationError):
        get_fetcher({"gfycat.fetcher": reference})
