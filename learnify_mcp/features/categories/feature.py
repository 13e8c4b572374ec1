"""Category feature registration."""

import requests

from ...config.settings import ApiSettings
from .services import CategoryApiService


def add_category_feature(services):
    """Register category-related services; their tools are discovered from the markers."""
    services.add_transient(
        CategoryApiService,
        lambda p: CategoryApiService(p.resolve(requests.Session), p.resolve(ApiSettings)),
    )
    return services
