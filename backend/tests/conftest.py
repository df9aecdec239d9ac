from __future__ import annotations

import pytest
from fakes import BASE_URL, FakeCompletionEndpoint

from notetagger.core.models.tagger_settings import TaggerSettings


@pytest.fixture
def endpoint() -> FakeCompletionEndpoint:
    return FakeCompletionEndpoint()


@pytest.fixture
def tagger_settings() -> TaggerSettings:
    return TaggerSettings(
        api_key="sk-test",
        model_name="test-model",
        base_url=BASE_URL,
        custom_prompt="Suggest tags.",
        max_results=4,
    )
