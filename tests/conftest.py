"""
Pytest configuration and fixtures for the Sberbank ID client tests.

This module provides:
- A valid client configuration and factory
- A fake transport (MagicMock with AsyncMock verbs) that records call order
- Helpers to build provider responses
"""

import json
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from sberbank_id.core.http_request import HTTPClient, ResponseWrapper
from sberbank_id.utils.sberbank_auth import SberbankIDFactory, configure


def make_response(status: int, body: Any = None, raw: Optional[bytes] = None) -> ResponseWrapper:
    """Build a fully-read response like the one HTTPClient returns."""
    if raw is None:
        raw = json.dumps(body).encode("utf-8") if body is not None else b""
    return ResponseWrapper(status, {}, raw)


class FakeTransport:
    """
    Stand-in for HTTPClient.

    ``post`` and ``get`` are AsyncMocks; every call is appended to ``calls``
    so tests can assert on ordering.
    """

    def __init__(self, post_response: Any = None, get_response: Any = None):
        self.calls: List[str] = []
        self.mock = MagicMock(spec=HTTPClient)
        self.mock.post = AsyncMock(side_effect=self._recorder("POST", post_response))
        self.mock.get = AsyncMock(side_effect=self._recorder("GET", get_response))

    def _recorder(self, method: str, outcome: Any):
        async def _call(*args, **kwargs):
            self.calls.append(method)
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        return _call


@pytest.fixture
def client_config_data() -> Dict[str, Any]:
    return {
        "client_id": "test-client-id",
        "client_secret": "test-client-secret",
        "redirect_url": "https://partner.example.com/callback",
    }


@pytest.fixture
def factory(client_config_data) -> SberbankIDFactory:
    return configure(client_config_data)


@pytest.fixture
def token_response() -> ResponseWrapper:
    return make_response(200, {"access_token": "T", "token_type": "Bearer", "expires_in": 60})


@pytest.fixture
def user_info() -> Dict[str, Any]:
    return {
        "sub": "c3b1d9e0f1a2",
        "family_name": "Иванов",
        "given_name": "Иван",
        "aud": "test-client-id",
    }
