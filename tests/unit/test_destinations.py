"""Unit tests for the compiled-in destination list."""

import dataclasses

import pytest

from iqmap.geo.destinations import DESTINATIONS, GeoPoint, major_destinations
from iqmap.geo.projection import in_region


def test_destination_count():
    assert len(DESTINATIONS) == 47


def test_major_hubs_first_and_in_order():
    majors = major_destinations()
    assert [p.name for p in majors] == ["Αθήνα", "Θεσσαλονίκη", "Ηράκλειο", "Πάτρα", "Ρόδος"]
    assert list(DESTINATIONS[:5]) == majors


def test_names_unique():
    names = [p.name for p in DESTINATIONS]
    assert len(names) == len(set(names))


def test_all_inside_mapped_region():
    for p in DESTINATIONS:
        assert in_region(p.latitude, p.longitude), p.name


def test_major_hubs_are_larger():
    smallest_major = min(p.display_size for p in DESTINATIONS if p.is_major)
    largest_minor = max(p.display_size for p in DESTINATIONS if not p.is_major)
    assert smallest_major > largest_minor


def test_geopoint_is_immutable():
    p = GeoPoint("Test", 38.0, 23.0, 0.1)
    assert p.is_major is False
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.latitude = 39.0
