"""Static bright-star catalog and constellation figures (in-memory data)."""

from astralink.models import CatalogStar, ConstellationEdge

# (name, RA hours, Dec degrees, magnitude, color, figure)
_STARS: tuple[tuple[str, float, float, float, str, str], ...] = (
    ("Sirius", 6.7525, -16.7161, -1.46, "#9db4ff", ""),
    ("Canopus", 6.3992, -52.6956, -0.72, "#f8f7ff", ""),
    ("Arcturus", 14.2610, 19.1825, -0.04, "#ffb347", ""),
    ("Vega", 18.6156, 38.7836, 0.03, "#9db4ff", "Lyra"),
    ("Capella", 5.2781, 45.9980, 0.08, "#fff4e8", ""),
    ("Rigel", 5.2423, -8.2017, 0.13, "#9db4ff", "Orion"),
    ("Procyon", 7.6550, 5.2250, 0.38, "#fff4e8", ""),
    ("Betelgeuse", 5.9195, 7.4070, 0.50, "#ff6347", "Orion"),
    ("Altair", 19.8464, 8.8683, 0.77, "#f0f8ff", ""),
    ("Aldebaran", 4.5989, 16.5092, 0.85, "#ff8c00", ""),
    ("Acrux", 12.4394, -63.0990, 0.77, "#9db4ff", ""),
    ("Pollux", 7.7553, 28.0262, 0.87, "#fff4e8", ""),
    ("Hadar", 14.6634, -60.3736, 0.61, "#9db4ff", ""),
    ("Deneb", 20.6906, 45.2804, 1.25, "#f0f8ff", "Cygnus"),
    ("Dubhe", 12.2648, 57.0326, 1.76, "#fff4e8", "BigDipper"),
    ("Bellatrix", 5.5367, 7.4072, 2.23, "#ffffff", "Orion"),
    ("Alnilam", 5.5333, -0.2992, 1.64, "#ffffff", "Orion"),
    ("Alnitak", 5.6794, -1.9425, 1.69, "#ffffff", "Orion"),
    ("Alioth", 11.0621, 61.7508, 1.79, "#ffffff", "BigDipper"),
    ("Mizar", 13.7919, 49.3133, 2.37, "#ffffff", "BigDipper"),
    ("Megrez", 11.8973, 53.6948, 1.86, "#ffffff", "BigDipper"),
    ("Phecda", 12.9003, 55.9597, 2.44, "#ffffff", "BigDipper"),
    ("Merak", 11.0310, 56.3825, 2.34, "#ffffff", "BigDipper"),
    ("Alkaid", 13.3986, 54.9253, 1.85, "#ffffff", "BigDipper"),
    ("Caph", 0.1397, 59.1497, 2.24, "#ffffff", "Cassiopeia"),
    ("Schedar", 0.6750, 60.7167, 2.68, "#ffffff", "Cassiopeia"),
    ("Gamma Cas", 0.9453, 60.2356, 2.47, "#ffffff", "Cassiopeia"),
    ("Ruchbah", 1.4303, 60.2356, 3.44, "#ffffff", "Cassiopeia"),
    ("Segin", 1.9086, 63.6700, 3.35, "#ffffff", "Cassiopeia"),
    ("Regulus", 10.1394, 11.9672, 1.35, "#ffffff", ""),
    ("Antares", 16.4902, -26.4319, 1.06, "#ff6347", ""),
    ("Castor", 7.5767, 31.8883, 1.93, "#ffffff", ""),
    ("Polaris", 2.5303, 89.2641, 1.98, "#fff4e8", ""),
)

_FIGURES: dict[str, tuple[tuple[str, str], ...]] = {
    "Orion": (
        ("Betelgeuse", "Bellatrix"),
        ("Bellatrix", "Alnitak"),
        ("Alnitak", "Alnilam"),
        ("Alnilam", "Rigel"),
        ("Betelgeuse", "Rigel"),
    ),
    "BigDipper": (
        ("Dubhe", "Merak"),
        ("Merak", "Phecda"),
        ("Phecda", "Megrez"),
        ("Megrez", "Alioth"),
        ("Alioth", "Mizar"),
        ("Mizar", "Alkaid"),
    ),
    "Cassiopeia": (
        ("Caph", "Schedar"),
        ("Schedar", "Gamma Cas"),
        ("Gamma Cas", "Ruchbah"),
        ("Ruchbah", "Segin"),
    ),
}

STAR_CATALOG: tuple[CatalogStar, ...] = tuple(
    CatalogStar(
        name=name,
        ra_hours=ra,
        dec_deg=dec,
        magnitude=mag,
        color=color,
        constellation=figure,
    )
    for name, ra, dec, mag, color, figure in _STARS
)

CONSTELLATION_EDGES: tuple[ConstellationEdge, ...] = tuple(
    ConstellationEdge(star_from=a, star_to=b, constellation=figure)
    for figure, pairs in _FIGURES.items()
    for a, b in pairs
)


def load_star_catalog() -> tuple[CatalogStar, ...]:
    """Return the built-in star catalog."""
    return STAR_CATALOG


def load_constellation_edges() -> tuple[ConstellationEdge, ...]:
    """Return the built-in constellation edge table, grouped by figure."""
    return CONSTELLATION_EDGES

