"""
IQ Travel destinations.

Cities, ports and islands served, as (name, lat, lon, size, major) records.
Five major hubs are spread across the country; the rest are chosen so that
no two markers overlap at the default projection scale.

Functions
---------
major_destinations()
    Returns only the major hubs, in list order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class GeoPoint:
    """One named location on the map."""

    name: str
    latitude: float
    longitude: float
    display_size: float          # core dot radius in scene units
    is_major: bool = False


_DESTINATIONS_RAW: List[Tuple[str, float, float, float, bool]] = [
    # Major hubs
    ("Αθήνα",           37.98, 23.73, 0.17, True),
    ("Θεσσαλονίκη",     40.58, 22.97, 0.15, True),
    ("Ηράκλειο",        35.34, 25.14, 0.14, True),
    ("Πάτρα",           38.25, 21.73, 0.13, True),
    ("Ρόδος",           36.43, 28.22, 0.12, True),

    # Mainland
    ("Ιωάννινα",        39.66, 20.85, 0.09, False),
    ("Κοζάνη",          40.30, 21.79, 0.09, False),
    ("Λάρισα",          39.64, 22.42, 0.10, False),
    ("Βόλος",           39.37, 22.95, 0.09, False),
    ("Καβάλα",          40.94, 24.40, 0.09, False),
    ("Αλεξανδρούπολη",  40.85, 25.87, 0.08, False),
    ("Λαμία",           38.90, 22.43, 0.08, False),
    ("Άγρινιο",         38.62, 21.41, 0.08, False),
    ("Τρίπολη",         37.51, 22.38, 0.08, False),
    ("Καλαμάτα",        37.04, 22.11, 0.08, False),

    # Ionian
    ("Κέρκυρα",         39.62, 19.92, 0.10, False),
    ("Λευκάδα",         38.83, 20.71, 0.08, False),
    ("Κεφαλονιά",       38.18, 20.45, 0.09, False),
    ("Ζάκυνθος",        37.65, 20.90, 0.09, False),

    # Cyclades
    ("Άνδρος",          37.83, 24.90, 0.08, False),
    ("Σύρος",           37.45, 24.94, 0.08, False),
    ("Μύκονος",         37.45, 25.33, 0.10, False),
    ("Νάξος",           37.05, 25.38, 0.09, False),
    ("Πάρος",           37.09, 25.12, 0.08, False),
    ("Μήλος",           36.72, 24.42, 0.08, False),
    ("Σαντορίνη",       36.39, 25.46, 0.10, False),
    ("Αμοργός",         36.83, 25.90, 0.08, False),
    ("Κέα",             37.64, 24.20, 0.07, False),
    ("Σίφνος",          36.97, 24.73, 0.07, False),

    # North-east Aegean
    ("Θάσος",           40.69, 24.70, 0.08, False),
    ("Λήμνος",          39.91, 25.35, 0.08, False),
    ("Λέσβος",          39.10, 26.30, 0.10, False),
    ("Χίος",            38.37, 26.07, 0.09, False),
    ("Ικαρία",          37.60, 26.17, 0.07, False),
    ("Σάμος",           37.75, 26.85, 0.09, False),

    # Sporades
    ("Σκιάθος",         39.16, 23.49, 0.08, False),
    ("Σκόπελος",        39.08, 23.78, 0.07, False),

    # Dodecanese
    ("Πάτμος",          37.32, 26.55, 0.08, False),
    ("Κως",             36.89, 27.10, 0.09, False),
    ("Νίσυρος",         36.59, 27.17, 0.07, False),

    # Saronic
    ("Αίγινα",          37.75, 23.43, 0.08, False),
    ("Ύδρα",            37.35, 23.46, 0.07, False),
    ("Σπέτσες",         37.26, 23.10, 0.07, False),

    # Crete
    ("Χανιά",           35.51, 24.02, 0.10, False),
    ("Ρέθυμνο",         35.37, 24.47, 0.08, False),
    ("Άγιος Νικόλαος",  35.19, 25.72, 0.08, False),
    ("Σητεία",          35.21, 26.10, 0.07, False),
]

DESTINATIONS: Tuple[GeoPoint, ...] = tuple(
    GeoPoint(name, lat, lon, size, major)
    for name, lat, lon, size, major in _DESTINATIONS_RAW
)


def major_destinations() -> List[GeoPoint]:
    return [p for p in DESTINATIONS if p.is_major]
