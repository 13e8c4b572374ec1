"""Course feature registration."""

import requests

from ...config.settings import ApiSettings
from .services import CourseApiService


def add_course_feature(services):
    """Register course-related services; their tools are discovered from the markers."""
    services.add_transient(
        CourseApiService,
        lambda p: CourseApiService(p.resolve(requests.Session), p.resolve(ApiSettings)),
    )
    return services
