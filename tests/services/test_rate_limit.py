"""Rate Limiting — the default per-IP limit and its 429 envelope.

Invariants:
    - Requests beyond the default limit get 429 with the error envelope
    - Health checks are exempt
"""

import pytest

from einfo.api.rate_limit import limiter
from einfo.config import get_settings


@pytest.fixture
def rate_limited(monkeypatch):
    limiter.reset()
    monkeypatch.setattr(limiter, "enabled", True)
    yield int(get_settings().rate_limit_default.split("/")[0])
    limiter.reset()


async def test_limit_exceeded_envelope(client, rate_limited):
    url = "/api/auth/check-username/janedoe"
    for _ in range(rate_limited):
        res = await client.get(url)
        assert res.status_code == 200

    res = await client.get(url)
    assert res.status_code == 429
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Too many requests from this IP, please try again later."

    res = await client.get("/health")
    assert res.status_code == 200
