"""Plumbing shared by all Learnify API features."""

from .api_service import ApiRequestError, BaseApiService
from .models import ApiResponse, CamelModel

__all__ = [
    'ApiRequestError',
    'BaseApiService',
    'ApiResponse',
    'CamelModel',
]
