"""
Static registry of upstream TLE feeds, keyed by satellite category.
"""
from enum import Enum
from typing import Dict, List
from urllib.parse import urlencode, quote

from services.exceptions import InvalidCategoryError


class SatelliteCategory(str, Enum):
    """Satellite categories with an upstream feed"""
    STARLINK = 'starlink'
    STATIONS = 'stations'
    GPS = 'gps'
    GEO = 'geo'
    DEBRIS = 'debris'


# CelesTrak GP query parameters per category
CELESTRAK_QUERIES = {
    SatelliteCategory.STARLINK: {'GROUP': 'STARLINK'},
    SatelliteCategory.STATIONS: {'GROUP': 'STATIONS'},
    SatelliteCategory.GPS: {'GROUP': 'GPS-OPS'},
    SatelliteCategory.GEO: {'GROUP': 'GEO'},
    SatelliteCategory.DEBRIS: {'NAME': 'COSMOS 2251 DEB'},
}

DEFAULT_CELESTRAK_URL = 'https://celestrak.org/NORAD/elements/gp.php'


class SourceRegistry:
    """
    Read-only mapping from category to upstream URL.
    Built once at startup; safe to share across threads.
    """

    def __init__(self, base_url: str = DEFAULT_CELESTRAK_URL):
        self.base_url = base_url
        self._sources: Dict[str, str] = {
            category.value: self._build_url(query)
            for category, query in CELESTRAK_QUERIES.items()
        }

    def _build_url(self, query: Dict[str, str]) -> str:
        params = dict(query, FORMAT='TLE')
        return f"{self.base_url}?{urlencode(params, quote_via=quote)}"

    def categories(self) -> List[str]:
        return list(self._sources)

    def is_valid(self, category) -> bool:
        return isinstance(category, str) and category in self._sources

    def url_for(self, category: str) -> str:
        if not self.is_valid(category):
            raise InvalidCategoryError(category, self.categories())
        return self._sources[category]

    def items(self):
        return list(self._sources.items())
