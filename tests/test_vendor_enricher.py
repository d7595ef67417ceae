import asyncio
import random
from unittest.mock import patch

import httpx
import pytest

from paige_api.models.vendors import VENDOR_CATEGORY_KEYS
from paige_api.services.places_client import PlacesClient
from paige_api.services.vendor_enricher import VendorEnricher

from conftest import make_place, make_settings


def make_enricher(http_client, settings) -> VendorEnricher:
    return VendorEnricher(PlacesClient(http_client, settings), settings, rng=random.Random(7))


def test_plain_name_lists_become_minimal_records(settings, http_client):
    seeds = make_enricher(http_client, settings).normalize_seed_vendors(
        {"venues": ["Hook Hall", "The LINE DC"], "music": ["DJ Nova"], "balloons": ["Pop Co"]}
    )

    assert set(seeds) == {"venues", "music"}
    first = seeds["venues"][0]
    assert first.id == "wedding_venue-0"
    assert seeds["venues"][1].id == "wedding_venue-1"
    assert first.category == "Venue"
    assert first.price == "Contact for pricing"
    assert first.vicinity == "Local area"
    assert first.address == "Local area"
    assert first.description == "Venue services"
    assert 4.0 <= first.rating <= 5.0
    assert round(first.rating, 2) == first.rating
    assert seeds["music"][0].id == "dj-0"
    assert seeds["music"][0].category == "DJ"


def test_object_seeds_are_validated_and_invalid_ones_dropped(settings, http_client):
    seeds = make_enricher(http_client, settings).normalize_seed_vendors(
        {"florists": [{"name": "Petals DC", "rating": 4.82}, {"rating": 3}, 17]}
    )

    assert len(seeds["florists"]) == 1
    assert seeds["florists"][0].name == "Petals DC"
    assert seeds["florists"][0].id == "florist-0"
    assert seeds["florists"][0].category == "Florist"


@pytest.mark.asyncio
async def test_enrich_builds_detailed_records_for_every_category(settings, upstreams, http_client):
    vendors = await make_enricher(http_client, settings).enrich("Washington DC", {})

    assert list(vendors) == VENDOR_CATEGORY_KEYS
    for key in VENDOR_CATEGORY_KEYS:
        assert len(vendors[key]) == settings.PLACES_MAX_RESULTS

    venue = vendors["venues"][0]
    assert venue.id == "venues-0"
    assert venue.category == "Venue"
    assert venue.rating == 4.57
    assert venue.price == "$$"
    assert venue.website == "https://venues-0.example.com"
    assert venue.total_reviews == 128
    assert venue.coordinates.lat == 38.9023
    assert len(venue.reviews) == 3
    assert venue.description == "Venue 0 hosts weddings of every size."
    assert len(venue.images) == 2
    assert venue.image == venue.images[0]
    assert "maxwidth=800" in venue.image

    searches = upstreams.paths("textsearch")
    assert len(searches) == 5
    queries = {r.url.params["query"]: r.url.params["type"] for r in searches}
    assert queries["wedding venue near Washington DC"] == "wedding_venue"
    assert queries["wedding music dj band near Washington DC"] == "establishment"


@pytest.mark.asyncio
async def test_zero_results_give_empty_category(settings, upstreams, http_client):
    upstreams.search_results["florists"] = []

    vendors = await make_enricher(http_client, settings).enrich("Washington DC", {"florists": ["Petals DC"]})

    assert vendors["florists"] == []
    non_empty = [key for key in VENDOR_CATEGORY_KEYS if vendors[key]]
    assert non_empty == ["venues", "photographers", "caterers", "music"]


@pytest.mark.asyncio
async def test_failed_detail_fetch_keeps_search_fields_only(settings, upstreams, http_client):
    upstreams.failing_details = {"venues-2"}

    vendors = await make_enricher(http_client, settings).enrich("Washington DC", {})

    venues = {vendor.id: vendor for vendor in vendors["venues"]}
    basic = venues["venues-2"]
    assert basic.name == "Venue 2"
    assert basic.rating == 4.57
    assert basic.vicinity == "1200 K St NW, Washington"
    assert basic.description == "Venue services"
    assert basic.website is None
    assert basic.reviews is None
    assert basic.images is None
    assert "maxwidth=400" in basic.image
    assert "search-photo-venues-2" in basic.image

    detailed = [vendor for vendor_id, vendor in venues.items() if vendor_id != "venues-2"]
    assert len(detailed) == 4
    assert all(vendor.website and vendor.phone for vendor in detailed)


@pytest.mark.asyncio
async def test_category_failure_keeps_seeded_vendors(settings, upstreams, http_client):
    upstreams.search_status["venues"] = "REQUEST_DENIED"
    upstreams.search_status["caterers"] = "OVER_QUERY_LIMIT"

    vendors = await make_enricher(http_client, settings).enrich("Washington DC", {"venues": ["Hook Hall"]})

    assert [vendor.name for vendor in vendors["venues"]] == ["Hook Hall"]
    assert vendors["caterers"] == []
    assert len(vendors["photographers"]) == 5


@pytest.mark.asyncio
async def test_search_network_error_is_isolated(settings, upstreams, http_client):
    original = upstreams.handler

    def flaky(request):
        if "wedding photographer" in request.url.params.get("query", ""):
            raise httpx.ConnectError("connection reset", request=request)
        return original(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(flaky))
    vendors = await make_enricher(client, settings).enrich("Washington DC", {})

    assert vendors["photographers"] == []
    assert len(vendors["venues"]) == 5


@pytest.mark.asyncio
async def test_no_api_key_returns_seeds_without_calls(upstreams, http_client):
    settings = make_settings(GOOGLE_PLACES_API_KEY="")

    vendors = await make_enricher(http_client, settings).enrich("Washington DC", {"venues": ["Hook Hall"]})

    assert list(vendors) == VENDOR_CATEGORY_KEYS
    assert [vendor.name for vendor in vendors["venues"]] == ["Hook Hall"]
    assert all(vendors[key] == [] for key in VENDOR_CATEGORY_KEYS if key != "venues")
    assert upstreams.requests == []


@pytest.mark.asyncio
async def test_missing_location_uses_default(settings, upstreams, http_client):
    await make_enricher(http_client, settings).enrich(None, None)

    queries = [r.url.params["query"] for r in upstreams.paths("textsearch")]
    assert all(query.endswith("near Washington DC") for query in queries)


@pytest.mark.asyncio
async def test_search_only_description_falls_back_to_place_type(settings, upstreams, http_client):
    upstreams.search_results["caterers"] = [
        make_place("caterers-0", "Chef Co", types=["restaurant", "food"], rating=None, price_level=None),
    ]
    upstreams.failing_details = {"caterers-0"}

    vendors = await make_enricher(http_client, settings).enrich("Washington DC", {})

    caterer = vendors["caterers"][0]
    assert caterer.description == "restaurant"
    assert caterer.rating == 4.0
    assert caterer.price == "Contact for pricing"


def test_review_excerpt_is_truncated(settings, http_client):
    from paige_api.models.places import PlaceDetails, PlaceSearchResult
    from paige_api.models.vendors import VENDOR_CATEGORIES

    enricher = make_enricher(http_client, settings)
    place = PlaceSearchResult.model_validate(make_place("venues-9", "Long Review Hall"))
    details = PlaceDetails.model_validate({"reviews": [{"text": "x" * 500}]})

    record = enricher.detailed_record(place, details, VENDOR_CATEGORIES[0])

    assert record.description == "x" * 200 + "..."


def test_detailed_description_uses_review_when_no_summary(settings, http_client):
    from paige_api.models.places import PlaceDetails, PlaceSearchResult
    from paige_api.models.vendors import VENDOR_CATEGORIES

    enricher = make_enricher(http_client, settings)
    place = PlaceSearchResult.model_validate(make_place("florists-9", "Petals DC"))
    details = PlaceDetails.model_validate({"reviews": [{"text": "Gorgeous peonies"}]})

    record = enricher.detailed_record(place, details, VENDOR_CATEGORIES[2])

    assert record.description == "Gorgeous peonies..."


@pytest.mark.asyncio
async def test_detail_timeout_keeps_search_fields_only(upstreams):
    settings = make_settings(PLACES_TIMEOUT_SECONDS=0.05)

    async def slow_details(request):
        if request.url.path.endswith("/details/json") and request.url.params["place_id"] == "venues-1":
            await asyncio.sleep(1)
        return upstreams.handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(slow_details))
    vendors = await make_enricher(client, settings).enrich("Washington DC", {})

    venues = {vendor.id: vendor for vendor in vendors["venues"]}
    assert venues["venues-1"].website is None
    assert "maxwidth=400" in venues["venues-1"].image
    assert all(vendor.website for vendor_id, vendor in venues.items() if vendor_id != "venues-1")


@pytest.mark.asyncio
async def test_unexpected_category_error_keeps_seeds(settings, upstreams, http_client):
    enricher = make_enricher(http_client, settings)
    original = enricher._enrich_category

    async def broken_florists(category, *args):
        if category.key == "florists":
            raise RuntimeError("record assembly blew up")
        return await original(category, *args)

    with patch.object(enricher, "_enrich_category", side_effect=broken_florists):
        vendors = await enricher.enrich("Washington DC", {"florists": ["Petals DC"]})

    assert list(vendors) == VENDOR_CATEGORY_KEYS
    assert [vendor.name for vendor in vendors["florists"]] == ["Petals DC"]
    assert len(vendors["venues"]) == 5


def test_seed_objects_with_null_fields_keep_defaults(settings, http_client):
    seeds = make_enricher(http_client, settings).normalize_seed_vendors(
        {"caterers": [{"id": None, "name": "Chef Co", "price": None, "category": None}]}
    )

    caterer = seeds["caterers"][0]
    assert caterer.id == "caterer-0"
    assert caterer.price == "Contact for pricing"
    assert caterer.category == "Caterer"
