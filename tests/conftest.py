"""Fixtures compartidas: catálogo de ejemplo y stores en memoria."""

from datetime import datetime, timezone

import pytest

from vitrina.database import (
    InMemoryFilterPresetStore,
    InMemoryListingStore,
    InMemorySavedRelationStore,
    Stores,
)
from vitrina.models import Listing


def make_listing(listing_id: str, **overrides) -> Listing:
    data = {
        "id": listing_id,
        "title": f"Listing {listing_id}",
        "description": "",
        "address": "1 Main Street, Springfield",
        "price": 400_000,
        "property_type": "House",
        "bedrooms": 3,
        "bathrooms": 2,
        "square_feet": 1800,
        "year_built": 1995,
        "listed_date": datetime(2024, 1, 15, tzinfo=timezone.utc),
        "features": [],
    }
    data.update(overrides)
    return Listing.model_validate(data)


@pytest.fixture
def catalog() -> list[Listing]:
    return [
        make_listing(
            "1",
            title="Modern Family Home",
            address="123 Lake Street, Austin, TX",
            description="Bright home near the park",
            price=300_000,
            property_type="House",
            bedrooms=2,
            bathrooms=1.5,
            square_feet=1500,
            features=["Pool", "Garage"],
        ),
        make_listing(
            "2",
            title="Downtown Condo",
            address="900 Congress Ave, Austin, TX",
            description="Walk to everything, rooftop with lake views",
            price=900_000,
            property_type="Condo",
            bedrooms=4,
            bathrooms=3,
            square_feet=2400,
            features=["Gym", "Pool", "Doorman"],
        ),
        make_listing(
            "3",
            title="Cozy Townhouse",
            address="55 Elm Road, Round Rock, TX",
            description="Quiet cul-de-sac",
            price=500_000,
            property_type="Townhouse",
            bedrooms=3,
            bathrooms=2,
            square_feet=1900,
            features=["Garage"],
        ),
    ]


@pytest.fixture
def stores(catalog) -> Stores:
    return Stores(
        listings=InMemoryListingStore(catalog),
        saved=InMemorySavedRelationStore(),
        presets=InMemoryFilterPresetStore(),
    )


@pytest.fixture
def listing_factory():
    return make_listing
