# REST Countries integration: metadata directory and border resolvers

from .client import RestCountriesClient
from .directory import Country, CountryDirectory
from .resolvers import LiveBordersResolver, PrefetchedBordersResolver

__all__ = [
    "Country",
    "CountryDirectory",
    "LiveBordersResolver",
    "PrefetchedBordersResolver",
    "RestCountriesClient",
]
