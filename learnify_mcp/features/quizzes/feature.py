"""Quiz feature registration."""

import requests

from ...config.settings import ApiSettings
from .services import QuizApiService


def add_quiz_feature(services):
    """Register quiz-related services; their tools are discovered from the markers."""
    services.add_transient(
        QuizApiService,
        lambda p: QuizApiService(p.resolve(requests.Session), p.resolve(ApiSettings)),
    )
    return services
