"""Tests del script de búsqueda por terminal."""

import json

import pytest

from vitrina.models import FilterState
from vitrina.scripts import run_search
from vitrina.scripts.run_search import build_parser, build_state, main, run


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "properties.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "1",
                    "title": "Lake House",
                    "address": "123 Lake Street",
                    "price": 300000,
                    "propertyType": "House",
                    "bedrooms": 2,
                },
                {
                    "id": "2",
                    "title": "City Condo",
                    "address": "9 Main St",
                    "price": 900000,
                    "propertyType": "Condo",
                    "bedrooms": 4,
                },
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_build_state_from_flags():
    args = build_parser().parse_args(
        [
            "--query", "lake",
            "--price-max", "500000",
            "--type", "House",
            "--type", "Condo",
            "--amenity", "Pool",
            "--sqft-min", "1000",
        ]
    )

    state = build_state(args)

    assert state == FilterState(
        search_query="lake",
        price_max=500_000,
        property_types=["House", "Condo"],
        amenities=["Pool"],
        square_feet_min=1000,
    )


def test_build_state_without_flags_is_unconstrained():
    assert build_state(build_parser().parse_args([])) == FilterState()


def test_build_state_overrides_base():
    args = build_parser().parse_args(["--bedrooms-min", "3"])
    state = build_state(args, FilterState(price_min=100))

    assert (state.price_min, state.bedrooms_min) == (100, 3)


def test_run_search_against_seed_file(seed_file):
    args = build_parser().parse_args(["--data", str(seed_file), "--query", "LAKE"])
    assert run(args) == 0


def test_run_toggle_and_list_saved(seed_file):
    args = build_parser().parse_args(
        ["--data", str(seed_file), "--toggle-saved", "2", "--saved"]
    )
    assert run(args) == 0


@pytest.fixture
def cli(monkeypatch):
    monkeypatch.setattr(run_search, "configure_logging", lambda level: None)

    def invoke(*argv):
        monkeypatch.setattr("sys.argv", ["vitrina-search", *argv])
        with pytest.raises(SystemExit) as exc_info:
            main()
        return exc_info.value.code

    return invoke


def test_main_exits_zero_on_success(cli, seed_file):
    assert cli("--data", str(seed_file)) == 0


def test_main_missing_data_file_exits_one(cli, tmp_path):
    assert cli("--data", str(tmp_path / "missing.json")) == 1


def test_main_malformed_json_exits_one(cli, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    assert cli("--data", str(path)) == 1


def test_main_unknown_listing_exits_one(cli, seed_file):
    assert cli("--data", str(seed_file), "--toggle-saved", "404") == 1
