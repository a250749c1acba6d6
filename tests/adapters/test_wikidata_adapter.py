from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

import httpx
import pytest

from softcat.adapters.wikidata import WikidataFetcher
from softcat.adapters.wikidata.client import WikidataClient
from softcat.adapters.wikidata.translator import parse_wikidata_time
from softcat.config.wikidata import WIKIDATA_SOURCE_URL, WikidataConfig
from softcat.domain.errors import ConfigurationMismatchError, ProviderFetchError
from softcat.domain.model import Identifier, SourceKind
from tests.helpers.catalog import make_source
from tests.helpers.http import make_client_factory, offline_resilience

WIKIDATA = make_source("wikidata", priority=1)


def _item(prop: str, entity_id: str, rank: str = "normal") -> dict[str, Any]:
    return {
        "mainsnak": {
            "snaktype": "value",
            "property": prop,
            "datavalue": {
                "value": {"entity-type": "item", "id": entity_id},
                "type": "wikibase-entityid",
            },
        },
        "rank": rank,
    }


def _string(prop: str, value: str, rank: str = "normal") -> dict[str, Any]:
    return {
        "mainsnak": {
            "snaktype": "value",
            "property": prop,
            "datavalue": {"value": value, "type": "string"},
        },
        "rank": rank,
    }


def _time(prop: str, value: str) -> dict[str, Any]:
    return {
        "mainsnak": {
            "snaktype": "value",
            "property": prop,
            "datavalue": {
                "value": {"time": value, "precision": 11, "calendarmodel": "Q1985727"},
                "type": "time",
            },
        },
        "rank": "normal",
    }


ENTITY = {
    "id": "Q28145497",
    "labels": {
        "en": {"language": "en", "value": "Create React App"},
        "de": {"language": "de", "value": "Create React App (de)"},
    },
    "descriptions": {"fr": {"language": "fr", "value": "outil de démarrage React"}},
    "claims": {
        "P31": [_item("P31", "Q341")],
        "P178": [_item("P178", "Q380")],
        "P275": [_item("P275", "Q334661")],
        "P277": [_item("P277", "Q2005")],
        "P306": [_item("P306", "Q388"), _item("P306", "Q1406")],
        "P348": [_string("P348", "5.0.0"), _string("P348", "5.0.1", rank="preferred")],
        "P577": [_time("P577", "+2016-07-22T00:00:00Z"), _time("P577", "+2022-04-12T00:00:00Z")],
        "P856": [_string("P856", "https://create-react-app.dev")],
        "P1324": [
            _string("P1324", "https://github.com/facebook/create-react-app"),
            _string("P1324", "https://github.com/facebookincubator/create-react-app"),
        ],
        "P154": [_string("P154", "Create React App logo.svg")],
        "P2078": [_string("P2078", "https://create-react-app.dev/docs/getting-started")],
    },
}

LABELS = {
    "entities": {
        "Q380": {"id": "Q380", "labels": {"en": {"language": "en", "value": "Meta Platforms"}}},
        "Q334661": {"id": "Q334661", "labels": {"fr": {"language": "fr", "value": "licence MIT"}}},
        "Q2005": {"id": "Q2005", "labels": {"en": {"language": "en", "value": "JavaScript"}}},
        "Q388": {"id": "Q388", "labels": {"en": {"language": "en", "value": "Linux"}}},
        "Q1406": {
            "id": "Q1406",
            "labels": {"en": {"language": "en", "value": "Microsoft Windows"}},
        },
    }
}


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/wiki/Special:EntityData/Q28145497.json":
        return httpx.Response(200, json={"entities": {"Q28145497": ENTITY}})
    if request.url.path == "/w/api.php":
        return httpx.Response(200, json=LABELS)
    return httpx.Response(404, text="Not Found")


def _fetcher(requests: list[httpx.Request] | None = None) -> WikidataFetcher:
    config = WikidataConfig(resilience=offline_resilience("wikidata", WIKIDATA_SOURCE_URL))
    client = WikidataClient(
        config=config, client_factory=make_client_factory(_handler, requests=requests)
    )
    return WikidataFetcher(config=config, client=client)


def test_fetch_translates_entity() -> None:
    requests: list[httpx.Request] = []

    data = asyncio.run(_fetcher(requests)("Q28145497", WIKIDATA))

    assert data is not None
    assert data.label == "Create React App"
    assert data.description == "outil de démarrage React"
    assert data.is_libre_software is True
    assert [developer.name for developer in data.developers] == ["Meta Platforms"]
    assert data.license == "licence MIT"
    assert data.programming_languages == ("JavaScript",)
    assert data.application_categories == ("Linux", "Microsoft Windows")
    assert data.software_version == "5.0.1"
    assert data.publication_time == datetime(2022, 4, 12, tzinfo=UTC)
    assert data.website_url == "https://create-react-app.dev"
    assert data.source_url == "https://github.com/facebook/create-react-app"
    assert data.documentation_url == "https://create-react-app.dev/docs/getting-started"
    assert data.logo_url == (
        "https://commons.wikimedia.org/wiki/Special:FilePath/Create_React_App_logo.svg"
    )
    assert [identifier.value for identifier in data.identifiers] == [
        "Q28145497",
        "facebook/create-react-app",
    ]
    assert data.identifiers[1].subject_url == "https://github.com/"
    labels_request = requests[1]
    assert labels_request.url.params["action"] == "wbgetentities"
    assert set(labels_request.url.params["ids"].split("|")) == {
        "Q380",
        "Q334661",
        "Q2005",
        "Q388",
        "Q1406",
    }


def test_one_identifier_per_provider_url() -> None:
    data = asyncio.run(_fetcher()("Q28145497", WIKIDATA))

    assert data is not None
    subject_urls = [identifier.subject_url for identifier in data.identifiers]
    assert len(subject_urls) == len(set(subject_urls))
    assert data.identifiers[0] == Identifier(
        value="Q28145497",
        subject_url=WIKIDATA_SOURCE_URL,
        name="Wikidata item Q28145497",
        url="https://www.wikidata.org/wiki/Q28145497",
    )


def test_fetch_missing_entity_returns_none() -> None:
    assert asyncio.run(_fetcher()("Q1", WIKIDATA)) is None


@pytest.mark.parametrize("external_id", ["P31", "Q0", "react", ""])
def test_fetch_rejects_non_item_ids_without_request(external_id: str) -> None:
    requests: list[httpx.Request] = []

    assert asyncio.run(_fetcher(requests)(external_id, WIKIDATA)) is None
    assert requests == []


def test_empty_entity_document_becomes_provider_fetch_error() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"entities": {}})

    config = WikidataConfig(resilience=offline_resilience("wikidata", WIKIDATA_SOURCE_URL))
    fetcher = WikidataFetcher(
        config=config,
        client=WikidataClient(config=config, client_factory=make_client_factory(handler)),
    )

    with pytest.raises(ProviderFetchError):
        asyncio.run(fetcher("Q28145497", WIKIDATA))


def test_fetch_rejects_other_source_kinds() -> None:
    github = make_source("github", kind=SourceKind.GITHUB, url="https://github.com/")

    with pytest.raises(ConfigurationMismatchError):
        asyncio.run(_fetcher()("Q28145497", github))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ({"time": "+2016-07-22T00:00:00Z"}, datetime(2016, 7, 22, tzinfo=UTC)),
        ({"time": "+2016-00-00T00:00:00Z"}, datetime(2016, 1, 1, tzinfo=UTC)),
        ({"time": "-0500-01-01T00:00:00Z"}, None),
        ({"time": "+2016-13-01T00:00:00Z"}, None),
        ("2016", None),
    ],
)
def test_parse_wikidata_time(value: object, expected: datetime | None) -> None:
    assert parse_wikidata_time(value) == expected
