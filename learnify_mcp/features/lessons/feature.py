"""Lesson feature registration."""

import requests

from ...config.settings import ApiSettings
from .services import LessonApiService


def add_lesson_feature(services):
    """Register lesson-related services; their tools are discovered from the markers."""
    services.add_transient(
        LessonApiService,
        lambda p: LessonApiService(p.resolve(requests.Session), p.resolve(ApiSettings)),
    )
    return services
