"""
Solar System Catalog
====================

Orbital and physical data for the Sun, planets, major moons, dwarf
planets and Halley's Comet, plus fixed markers for deep-space probes.

Semi-major axes are in millions of kilometres, periods in Earth days,
angles in degrees, radii in kilometres and masses in kilograms.
Negative periods mark retrograde moons; the solver treats them as
degenerate and keeps them at their parent's origin.
"""

import numpy as np
from typing import Dict, Iterable, List

from ..core.bodies import CelestialBody, OrbitalElements
from ..core.config import AU_IN_KM, KM_TO_WORLD_UNITS, SUN_SIZE_MULTIPLIER


SOLAR_SYSTEM: List[Dict] = [
    {'name': 'Sun', 'radius': 696340, 'mass': 1.989e30, 'size_multiplier': SUN_SIZE_MULTIPLIER, 'kind': 'star'},

    {'name': 'Mercury', 'radius': 2440, 'mass': 3.3011e23, 'a': 57.9, 'e': 0.205, 'period': 88,
     'inclination': 7.0, 'node': 48.3, 'arg_peri': 29.1, 'm0': 174.7, 'kind': 'planet'},
    {'name': 'Venus', 'radius': 6052, 'mass': 4.8675e24, 'a': 108.2, 'e': 0.007, 'period': 224.7,
     'inclination': 3.4, 'node': 76.7, 'arg_peri': 54.9, 'm0': 50.1, 'kind': 'planet'},
    {'name': 'Earth', 'radius': 6371, 'mass': 5.97237e24, 'a': 149.6, 'e': 0.017, 'period': 365.2,
     'inclination': 0.0, 'node': -11.2, 'arg_peri': 114.2, 'm0': 358.6, 'kind': 'planet'},
    {'name': 'Moon', 'parent': 'Earth', 'radius': 1737, 'mass': 7.342e22, 'a': 0.384, 'e': 0.055,
     'period': 27.3, 'inclination': 5.1, 'node': 125.08, 'arg_peri': 318.15, 'm0': 115.36, 'kind': 'moon'},

    {'name': 'Mars', 'radius': 3390, 'mass': 6.4171e23, 'a': 227.9, 'e': 0.094, 'period': 687,
     'inclination': 1.8, 'node': 49.6, 'arg_peri': 286.5, 'm0': 19.4, 'kind': 'planet'},
    {'name': 'Phobos', 'parent': 'Mars', 'radius': 11.2, 'mass': 1.0659e16, 'a': 0.00937, 'e': 0.015,
     'period': 0.3, 'inclination': 1.1, 'kind': 'moon'},
    {'name': 'Deimos', 'parent': 'Mars', 'radius': 6.2, 'mass': 1.4762e15, 'a': 0.0234, 'e': 0.0002,
     'period': 1.26, 'inclination': 0.9, 'kind': 'moon'},

    {'name': 'Jupiter', 'radius': 69911, 'mass': 1.89813e27, 'a': 778.6, 'e': 0.049, 'period': 4331,
     'inclination': 1.3, 'node': 100.5, 'arg_peri': 273.8, 'm0': 20.0, 'kind': 'planet'},
    {'name': 'Io', 'parent': 'Jupiter', 'radius': 1821, 'mass': 8.9319e22, 'a': 0.421, 'e': 0.004,
     'period': 1.77, 'inclination': 0.05, 'kind': 'moon'},
    {'name': 'Europa', 'parent': 'Jupiter', 'radius': 1560, 'mass': 4.7998e22, 'a': 0.671, 'e': 0.009,
     'period': 3.55, 'inclination': 0.47, 'kind': 'moon'},
    {'name': 'Ganymede', 'parent': 'Jupiter', 'radius': 2634, 'mass': 1.4819e23, 'a': 1.070, 'e': 0.001,
     'period': 7.15, 'inclination': 0.20, 'kind': 'moon'},
    {'name': 'Callisto', 'parent': 'Jupiter', 'radius': 2410, 'mass': 1.0759e23, 'a': 1.882, 'e': 0.007,
     'period': 16.69, 'inclination': 0.20, 'kind': 'moon'},
    {'name': 'Himalia', 'parent': 'Jupiter', 'radius': 85, 'mass': 4.2e18, 'a': 11.46, 'e': 0.16,
     'period': 250.6, 'inclination': 27.5, 'kind': 'moon'},

    {'name': 'Saturn', 'radius': 58232, 'mass': 5.6834e26, 'a': 1433.5, 'e': 0.057, 'period': 10747,
     'inclination': 2.5, 'node': 113.7, 'arg_peri': 339.3, 'm0': 317.0, 'kind': 'planet'},
    {'name': 'Mimas', 'parent': 'Saturn', 'radius': 198, 'mass': 3.7493e19, 'a': 0.185, 'e': 0.02,
     'period': 0.9, 'inclination': 1.5, 'kind': 'moon'},
    {'name': 'Enceladus', 'parent': 'Saturn', 'radius': 252, 'mass': 1.08022e20, 'a': 0.238, 'e': 0.005,
     'period': 1.4, 'inclination': 0.02, 'kind': 'moon'},
    {'name': 'Tethys', 'parent': 'Saturn', 'radius': 533, 'mass': 6.1745e20, 'a': 0.294, 'e': 0.0,
     'period': 1.9, 'inclination': 1.1, 'kind': 'moon'},
    {'name': 'Dione', 'parent': 'Saturn', 'radius': 561, 'mass': 1.095452e21, 'a': 0.377, 'e': 0.002,
     'period': 2.7, 'inclination': 0.02, 'kind': 'moon'},
    {'name': 'Rhea', 'parent': 'Saturn', 'radius': 764, 'mass': 2.306518e21, 'a': 0.527, 'e': 0.001,
     'period': 4.5, 'inclination': 0.3, 'kind': 'moon'},
    {'name': 'Titan', 'parent': 'Saturn', 'radius': 2575, 'mass': 1.3452e23, 'a': 1.221, 'e': 0.029,
     'period': 15.9, 'inclination': 0.33, 'kind': 'moon'},
    {'name': 'Hyperion', 'parent': 'Saturn', 'radius': 135, 'mass': 5.585e18, 'a': 1.481, 'e': 0.1,
     'period': 21.3, 'inclination': 0.43, 'kind': 'moon'},
    {'name': 'Iapetus', 'parent': 'Saturn', 'radius': 735, 'mass': 1.805635e21, 'a': 3.560, 'e': 0.028,
     'period': 79.3, 'inclination': 15.4, 'kind': 'moon'},
    {'name': 'Phoebe', 'parent': 'Saturn', 'radius': 106.5, 'mass': 8.292e18, 'a': 12.952, 'e': 0.159,
     'period': -550, 'inclination': 175.3, 'kind': 'moon'},

    {'name': 'Uranus', 'radius': 25362, 'mass': 8.681e25, 'a': 2872.5, 'e': 0.046, 'period': 30589,
     'inclination': 0.8, 'node': 74.0, 'arg_peri': 98.9, 'm0': 142.2, 'kind': 'planet'},
    {'name': 'Puck', 'parent': 'Uranus', 'radius': 81, 'mass': 2.9e18, 'a': 0.086, 'e': 0.0001,
     'period': 0.76, 'inclination': 0.32, 'kind': 'moon'},
    {'name': 'Miranda', 'parent': 'Uranus', 'radius': 236, 'mass': 6.59e19, 'a': 0.129, 'e': 0.001,
     'period': 1.4, 'inclination': 4.2, 'kind': 'moon'},
    {'name': 'Ariel', 'parent': 'Uranus', 'radius': 579, 'mass': 1.353e21, 'a': 0.191, 'e': 0.001,
     'period': 2.5, 'inclination': 0.3, 'kind': 'moon'},
    {'name': 'Umbriel', 'parent': 'Uranus', 'radius': 585, 'mass': 1.172e21, 'a': 0.266, 'e': 0.004,
     'period': 4.1, 'inclination': 0.3, 'kind': 'moon'},
    {'name': 'Titania', 'parent': 'Uranus', 'radius': 788, 'mass': 3.527e21, 'a': 0.436, 'e': 0.002,
     'period': 8.7, 'inclination': 0.1, 'kind': 'moon'},
    {'name': 'Oberon', 'parent': 'Uranus', 'radius': 761, 'mass': 3.014e21, 'a': 0.583, 'e': 0.001,
     'period': 13.5, 'inclination': 0.1, 'kind': 'moon'},

    {'name': 'Neptune', 'radius': 24622, 'mass': 1.02413e26, 'a': 4495.1, 'e': 0.011, 'period': 59800,
     'inclination': 1.8, 'node': 131.8, 'arg_peri': 276.3, 'm0': 256.2, 'kind': 'planet'},
    {'name': 'Proteus', 'parent': 'Neptune', 'radius': 210, 'mass': 5.0e19, 'a': 0.117, 'e': 0.0005,
     'period': 1.1, 'inclination': 0.026, 'kind': 'moon'},
    {'name': 'Triton', 'parent': 'Neptune', 'radius': 1353, 'mass': 2.14e22, 'a': 0.354, 'e': 0.0,
     'period': -5.9, 'inclination': 157, 'kind': 'moon'},
    {'name': 'Nereid', 'parent': 'Neptune', 'radius': 170, 'mass': 3.1e19, 'a': 5.513, 'e': 0.75,
     'period': 360, 'inclination': 7.2, 'kind': 'moon'},

    {'name': 'Ceres', 'radius': 476, 'mass': 9.39e20, 'a': 413.7, 'e': 0.076, 'period': 1682,
     'inclination': 10.6, 'node': 80.3, 'arg_peri': 73.6, 'm0': 149.3, 'kind': 'dwarf planet'},
    {'name': 'Pluto', 'radius': 1188, 'mass': 1.303e22, 'a': 5906.4, 'e': 0.249, 'period': 90560,
     'inclination': 17.2, 'node': 110.3, 'arg_peri': 113.8, 'm0': 14.5, 'kind': 'dwarf planet'},
    {'name': 'Charon', 'parent': 'Pluto', 'radius': 606, 'mass': 1.586e21, 'a': 0.0195, 'e': 0.0,
     'period': 6.4, 'inclination': 0.00, 'kind': 'moon'},
    {'name': 'Nix', 'parent': 'Pluto', 'radius': 22, 'mass': 4.5e16, 'a': 0.048, 'e': 0.002,
     'period': 24.8, 'inclination': 0.13, 'kind': 'moon'},
    {'name': 'Hydra', 'parent': 'Pluto', 'radius': 26, 'mass': 4.8e16, 'a': 0.064, 'e': 0.005,
     'period': 38.2, 'inclination': 0.24, 'kind': 'moon'},
    {'name': 'Haumea', 'radius': 620, 'mass': 4.006e21, 'a': 6452, 'e': 0.195, 'period': 103363,
     'inclination': 28.2, 'node': 122.1, 'arg_peri': 240.2, 'm0': 201.7, 'kind': 'dwarf planet'},
    {'name': 'Makemake', 'radius': 715, 'mass': 3.1e21, 'a': 6847, 'e': 0.156, 'period': 112897,
     'inclination': 29.0, 'node': 79.4, 'arg_peri': 295.2, 'm0': 359.8, 'kind': 'dwarf planet'},
    {'name': 'Eris', 'radius': 1163, 'mass': 1.66e22, 'a': 10123, 'e': 0.436, 'period': 203830,
     'inclination': 44.0, 'node': 35.9, 'arg_peri': 151.9, 'm0': 205.9, 'kind': 'dwarf planet'},

    {'name': "Halley's Comet", 'radius': 5.5, 'mass': 2.2e14, 'a': 2667, 'e': 0.967, 'period': 27740,
     'inclination': 162.2, 'node': 58.4, 'arg_peri': 111.3, 'm0': 351.4, 'kind': 'comet'},
]


DEEP_SPACE_PROBES: List[Dict] = [
    {'name': 'Voyager 1', 'dist_au': 167.3, 'declination': 12.1, 'right_ascension': 267.0},
    {'name': 'Voyager 2', 'dist_au': 139.3, 'declination': -55.5, 'right_ascension': 299.1},
    {'name': 'Pioneer 10', 'dist_au': 139.0, 'declination': 25.6, 'right_ascension': 75.8},
    {'name': 'New Horizons', 'dist_au': 60.5, 'declination': -21.4, 'right_ascension': 290.0},
]


def _elements_from_record(record: Dict) -> OrbitalElements:
    a = record.get('a')
    return OrbitalElements(
        semi_major_axis_km=None if a is None else a * 1e6,
        eccentricity=record.get('e'),
        period_days=record.get('period'),
        inclination_deg=record.get('inclination'),
        lon_ascending_node_deg=record.get('node'),
        arg_periapsis_deg=record.get('arg_peri'),
        mean_anomaly_epoch_deg=record.get('m0'),
    )


def build_bodies(records: Iterable[Dict] = None) -> List[CelestialBody]:
    """
    Convert catalog records into bodies.

    Planets and other records without a parent orbit the first
    parentless record (the Sun).

    Args:
        records: Catalog rows, defaults to SOLAR_SYSTEM

    Returns:
        List of CelestialBody in catalog order
    """
    records = list(SOLAR_SYSTEM if records is None else records)
    if not records:
        return []

    root_name = next((r['name'] for r in records if 'a' not in r and 'parent' not in r),
                     records[0]['name'])

    bodies = []
    for record in records:
        name = record['name']
        parent = record.get('parent')
        if parent is None and name != root_name:
            parent = root_name

        bodies.append(CelestialBody(
            name=name,
            parent=parent,
            elements=_elements_from_record(record),
            mass_kg=record.get('mass'),
            radius_km=float(record.get('radius', 0.0)),
            size_multiplier=record.get('size_multiplier'),
            kind=record.get('kind', 'body'),
        ))
    return bodies


def marker_position(dist_au: float, declination_deg: float, right_ascension_deg: float) -> np.ndarray:
    """
    Fixed position of a deep-space marker.

    Args:
        dist_au: Distance from the Sun [AU]
        declination_deg: Declination [deg]
        right_ascension_deg: Right ascension [deg]

    Returns:
        Position [world units]
    """
    r = dist_au * AU_IN_KM * KM_TO_WORLD_UNITS
    dec = np.radians(declination_deg)
    ra = np.radians(right_ascension_deg)
    return r * np.array([
        np.cos(dec) * np.cos(ra),
        np.cos(dec) * np.sin(ra),
        np.sin(dec),
    ])


def deep_space_markers() -> Dict[str, np.ndarray]:
    """Positions of the deep-space probe markers by name."""
    return {
        p['name']: marker_position(p['dist_au'], p['declination'], p['right_ascension'])
        for p in DEEP_SPACE_PROBES
    }
