# tests/conftest.py
import asyncio
from typing import Dict, List
from unittest.mock import MagicMock

import httpx
import pytest

from paige_api.config import Settings
from paige_api.models.vendors import VENDOR_CATEGORIES

TODO_URL = "http://todo.test/generate-todos"
GENERATION_URL = "http://generation.test/webhook/onboarding-rag"
PLACES_URL = "http://places.test/maps/api/place"


def make_settings(**overrides) -> Settings:
    values = dict(
        TODO_SERVICE_URL=TODO_URL,
        GENERATION_WEBHOOK_URL=GENERATION_URL,
        PLACES_BASE_URL=PLACES_URL,
        GOOGLE_PLACES_API_KEY="test-key",
        GENERATION_TIMEOUT_SECONDS=2,
        TODO_TIMEOUT_SECONDS=2,
        PLACES_TIMEOUT_SECONDS=2,
    )
    values.update(overrides)
    return Settings(**values)


def make_place(place_id: str, name: str, **fields) -> dict:
    place = {
        "place_id": place_id,
        "name": name,
        "rating": 4.567,
        "price_level": 2,
        "vicinity": "1200 K St NW, Washington",
        "types": ["point_of_interest", "establishment"],
        "photos": [{"photo_reference": f"search-photo-{place_id}"}],
    }
    place.update(fields)
    return place


def make_details(place_id: str, name: str) -> dict:
    return {
        "name": name,
        "website": f"https://{place_id}.example.com",
        "formatted_phone_number": "(202) 555-0100",
        "international_phone_number": "+1 202-555-0100",
        "formatted_address": "1200 K St NW, Washington, DC 20005, USA",
        "url": f"https://maps.google.com/?cid={place_id}",
        "opening_hours": {"open_now": True},
        "geometry": {"location": {"lat": 38.9023, "lng": -77.0282}},
        "reviews": [
            {"text": f"Review {n} for {name}", "author_name": f"Guest {n}", "rating": 5, "time": 1700000000 + n}
            for n in range(4)
        ],
        "user_ratings_total": 128,
        "photos": [{"photo_reference": f"detail-photo-{place_id}-{n}"} for n in range(2)],
        "editorial_summary": {"overview": f"{name} hosts weddings of every size."},
    }


def todo_service_body(count: int = 3) -> dict:
    return {
        "success": True,
        "todos": {
            "listName": "Full Wedding Checklist",
            "todos": [
                {"id": f"remote-{n}", "name": f"Remote task {n}", "note": "", "category": "", "priority": "Medium", "isCompleted": False}
                for n in range(count)
            ],
        },
        "templateUsed": "full-wedding-planning",
        "hasWeddingDate": True,
    }


def generation_body() -> dict:
    return {
        "data": {
            "todos": [{"title": "Book venue"}],
            "budget": {
                "total": 40000,
                "categories": [
                    {"name": "Venue", "amount": 16000, "percentage": 40, "description": None},
                    {"name": "Catering", "amount": "12,000"},
                    {"amount": 500},
                ],
            },
            "vendors": {"venues": ["Hook Hall", "The LINE DC"], "florists": ["Petals DC"]},
        }
    }


class FakeUpstreams:
    """
    One MockTransport handler standing in for the todo service, the generation
    webhook and the places directory. Tests tweak the attributes to inject failures.
    """

    def __init__(self):
        self.todo_response = lambda request: httpx.Response(200, json=todo_service_body())
        self.generation_response = lambda request: httpx.Response(200, json=generation_body())
        self.search_results: Dict[str, List[dict]] = {
            category.key: [make_place(f"{category.key}-{n}", f"{category.label} {n}") for n in range(6)]
            for category in VENDOR_CATEGORIES
        }
        self.search_status: Dict[str, str] = {}
        self.failing_details: set = set()
        self.requests: List[httpx.Request] = []

    def _category_for_query(self, query: str) -> str:
        # longest search term first so "wedding venue" never shadows a longer term
        for category in sorted(VENDOR_CATEGORIES, key=lambda c: len(c.search_term), reverse=True):
            if query.startswith(category.search_term):
                return category.key
        raise AssertionError(f"unexpected search query: {query}")

    def handler(self, request: httpx.Request):
        self.requests.append(request)
        if request.url.host == "todo.test":
            return self.todo_response(request)
        if request.url.host == "generation.test":
            return self.generation_response(request)

        if request.url.path.endswith("/textsearch/json"):
            key = self._category_for_query(request.url.params["query"])
            results = self.search_results.get(key, [])
            status = self.search_status.get(key, "OK" if results else "ZERO_RESULTS")
            return httpx.Response(200, json={"status": status, "results": results})

        if request.url.path.endswith("/details/json"):
            place_id = request.url.params["place_id"]
            if place_id in self.failing_details:
                return httpx.Response(500, json={"status": "UNKNOWN_ERROR"})
            key = place_id.rsplit("-", 1)[0]
            name = next(p["name"] for p in self.search_results[key] if p["place_id"] == place_id)
            return httpx.Response(200, json={"status": "OK", "result": make_details(place_id, name)})

        return httpx.Response(404)

    def paths(self, fragment: str) -> List[httpx.Request]:
        return [r for r in self.requests if fragment in str(r.url)]


class FakeDatabase:
    """Dict of MagicMock collections, indexed like a pymongo Database."""

    def __init__(self):
        self.collections: Dict[str, MagicMock] = {}

    def __getitem__(self, name: str) -> MagicMock:
        if name not in self.collections:
            self.collections[name] = MagicMock(name=f"collection:{name}")
        return self.collections[name]


async def slow_response(request: httpx.Request) -> httpx.Response:
    await asyncio.sleep(1)
    return httpx.Response(200, json=generation_body())


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def upstreams() -> FakeUpstreams:
    return FakeUpstreams()


@pytest.fixture
def http_client(upstreams):
    return httpx.AsyncClient(transport=httpx.MockTransport(upstreams.handler))


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()
