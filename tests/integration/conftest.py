from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from litestar.testing import AsyncTestClient

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from litestar import Litestar

    from sakai.services.genai import GenAIService


@pytest.fixture
async def client(app: Litestar) -> AsyncGenerator[AsyncTestClient, None]:
    """Create test client."""
    async with AsyncTestClient(app=app) as c:
        yield c


@pytest.fixture
def app(monkeypatch: pytest.MonkeyPatch, genai_service: GenAIService) -> Litestar:
    """Create test app instance wired to the fake GenAI client."""
    from sakai.server.asgi import create_app

    monkeypatch.setattr("sakai.server.deps.get_genai_service", lambda: genai_service)
    monkeypatch.setattr("sakai.services.genai.get_genai_service", lambda: genai_service)
    return create_app()
