"""Shared fixtures for the feature tool tests."""

from unittest.mock import MagicMock

import pytest
import requests

from learnify_mcp.config.settings import ApiSettings

BASE_URL = "http://learnify.test"


@pytest.fixture
def settings():
    return ApiSettings(base_url=BASE_URL, timeout=3.0)


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def respond(session):
    """Queue fake Learnify API responses on the session, in call order."""

    def _respond(*responses):
        fakes = []
        for status_code, data in responses:
            response = MagicMock()
            response.status_code = status_code
            response.url = BASE_URL
            response.json.return_value = {"success": status_code < 400, "message": "", "data": data}
            if status_code >= 400:
                response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
            fakes.append(response)
        session.request.side_effect = fakes

    return _respond


@pytest.fixture
def sent(session):
    """Return (method, url, params, body) of a recorded request."""

    def _sent(index=-1):
        call = session.request.call_args_list[index]
        method, url = call.args
        return method, url, call.kwargs["params"], call.kwargs["json"]

    return _sent
