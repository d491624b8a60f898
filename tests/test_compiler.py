"""Tests del compilador de predicados."""

from vitrina.models import FilterState
from vitrina.search import clause_names, compile_filters


def _ids(listings, state):
    predicate = compile_filters(state)
    return [listing.id for listing in listings if predicate(listing)]


def test_default_state_accepts_everything(catalog):
    assert _ids(catalog, FilterState()) == ["1", "2", "3"]
    assert clause_names(FilterState()) == []


class TestSearchQuery:
    def test_matches_address_case_insensitive(self, catalog, listing_factory):
        upper = listing_factory("4", address="9 LAKE Street")
        other = listing_factory("5", title="Ranch", address="1 Hill Rd", description="Dry land")

        predicate = compile_filters(FilterState(search_query="lake"))

        assert predicate(catalog[0])
        assert predicate(upper)
        assert not predicate(other)

    def test_matches_title_or_description(self, catalog):
        assert _ids(catalog, FilterState(search_query="condo")) == ["2"]
        assert _ids(catalog, FilterState(search_query="CUL-DE-SAC")) == ["3"]
        # "lake" en la dirección de 1 y en la descripción de 2
        assert _ids(catalog, FilterState(search_query="lake")) == ["1", "2"]

    def test_whitespace_query_is_unconstrained(self, catalog):
        assert _ids(catalog, FilterState(search_query="   ")) == ["1", "2", "3"]


class TestPrice:
    def test_max_only(self, catalog):
        assert _ids(catalog, FilterState(price_max=500_000)) == ["1", "3"]

    def test_bounds_are_inclusive(self, catalog):
        state = FilterState(price_min=300_000, price_max=500_000)
        assert _ids(catalog, state) == ["1", "3"]

    def test_min_only(self, catalog):
        assert _ids(catalog, FilterState(price_min=500_001)) == ["2"]

    def test_zero_min_is_a_real_bound(self, catalog):
        assert clause_names(FilterState(price_min=0)) == ["price"]
        assert _ids(catalog, FilterState(price_min=0)) == ["1", "2", "3"]


class TestPropertyTypes:
    def test_membership(self, catalog):
        state = FilterState(property_types=["House", "Condo"])
        assert _ids(catalog, state) == ["1", "2"]

    def test_no_match_is_empty(self, catalog):
        assert _ids(catalog, FilterState(property_types=["Land"])) == []


def test_bedrooms_and_bathrooms_minimum(catalog):
    assert _ids(catalog, FilterState(bedrooms_min=3)) == ["2", "3"]
    assert _ids(catalog, FilterState(bathrooms_min=2)) == ["2", "3"]
    assert _ids(catalog, FilterState(bedrooms_min=3, bathrooms_min=3)) == ["2"]


def test_square_feet_range(catalog):
    assert _ids(catalog, FilterState(square_feet_min=1500, square_feet_max=1900)) == ["1", "3"]
    assert _ids(catalog, FilterState(square_feet_max=1499)) == []


def test_location_only_checks_address(catalog):
    assert _ids(catalog, FilterState(location="round rock")) == ["3"]
    # "Condo" aparece en el título de 2 pero no en su dirección
    assert _ids(catalog, FilterState(location="condo")) == []


class TestAmenities:
    def test_requires_every_amenity(self, listing_factory):
        pool_only = listing_factory("9", features=["Pool"])

        assert not compile_filters(FilterState(amenities=["Pool", "Gym"]))(pool_only)
        assert compile_filters(FilterState(amenities=["Pool"]))(pool_only)

    def test_against_catalog(self, catalog):
        assert _ids(catalog, FilterState(amenities=["Pool", "Gym"])) == ["2"]
        assert _ids(catalog, FilterState(amenities=["Garage"])) == ["1", "3"]


def test_clauses_are_combined_with_and(catalog):
    state = FilterState(
        search_query="austin",
        price_max=1_000_000,
        property_types=["Condo", "House"],
        amenities=["Pool"],
        bedrooms_min=3,
    )
    assert _ids(catalog, state) == ["2"]


def test_clause_order():
    state = FilterState(
        amenities=["Pool"],
        location="Austin",
        square_feet_min=1,
        bathrooms_min=1,
        bedrooms_min=1,
        property_types=["House"],
        price_max=1,
        search_query="x",
    )
    assert clause_names(state) == [
        "search_query",
        "price",
        "property_types",
        "bedrooms_min",
        "bathrooms_min",
        "square_feet",
        "location",
        "amenities",
    ]
