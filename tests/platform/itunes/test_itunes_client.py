"""Summary: iTunes artwork search and download adapter.
Why: Remote artwork failures must surface as exceptions the cover stage can absorb.
"""

from __future__ import annotations

import pytest
import requests
from pytest_mock import MockerFixture

from cmym.platform.itunes import ITunesArtworkClient, upgrade_artwork_url


def _client(mocker: MockerFixture, response: object) -> tuple[ITunesArtworkClient, object]:
    session = mocker.Mock(spec=requests.Session)
    session.get.return_value = response
    return ITunesArtworkClient(search_url="https://search.test", timeout=2.0, session=session), session


def test_upgrade_artwork_url() -> None:
    assert upgrade_artwork_url("https://a/img/100x100bb.jpg") == "https://a/img/600x600bb.jpg"


def test_search_returns_unique_full_size_urls(mocker: MockerFixture) -> None:
    response = mocker.Mock()
    response.json.return_value = {
        "resultCount": 3,
        "results": [
            {"artworkUrl100": "https://a/1/100x100bb.jpg"},
            {"artworkUrl100": "https://a/1/100x100bb.jpg"},
            {"collectionName": "no artwork"},
            "junk",
        ],
    }
    client, session = _client(mocker, response)

    urls = client.search_artwork("Pink Floyd Animals")

    assert urls == ["https://a/1/600x600bb.jpg"]
    session.get.assert_called_once_with(  # pyright: ignore[reportAttributeAccessIssue]
        "https://search.test",
        params={"term": "Pink Floyd Animals", "entity": "album", "media": "music", "limit": 10},
        timeout=2.0,
    )


def test_search_propagates_http_errors(mocker: MockerFixture) -> None:
    response = mocker.Mock()
    response.raise_for_status.side_effect = requests.HTTPError("503")
    client, _ = _client(mocker, response)

    with pytest.raises(requests.HTTPError):
        _ = client.search_artwork("anything")


def test_search_rejects_unexpected_payload(mocker: MockerFixture) -> None:
    response = mocker.Mock()
    response.json.return_value = ["not", "a", "dict"]
    client, _ = _client(mocker, response)

    with pytest.raises(ValueError, match="Unexpected"):
        _ = client.search_artwork("anything")


def test_fetch_image_requires_image_content(mocker: MockerFixture) -> None:
    response = mocker.Mock()
    response.headers = {"Content-Type": "text/html"}
    response.content = b"<html>"
    client, _ = _client(mocker, response)

    with pytest.raises(ValueError, match="Not an image"):
        _ = client.fetch_image("https://a/cover.jpg")

    response.headers = {"Content-Type": "image/jpeg"}
    response.content = b"\xff\xd8\xff"
    assert client.fetch_image("https://a/cover.jpg") == b"\xff\xd8\xff"
