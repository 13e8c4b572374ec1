"""Answer feature registration."""

import requests

from ...config.settings import ApiSettings
from .services import AnswerApiService


def add_answer_feature(services):
    """Register answer-related services; their tools are discovered from the markers."""
    services.add_transient(
        AnswerApiService,
        lambda p: AnswerApiService(p.resolve(requests.Session), p.resolve(ApiSettings)),
    )
    return services
