"""Unit tests for the TopicValidationService (fail-open advisory classification)."""

import logging

import pytest

from content_generator.application.interfaces import ChatProvider
from content_generator.application.services.topic_validation_service import (
    FAIL_OPEN_VERDICT,
    MEANINGLESS_MESSAGE,
    TOO_SHORT_MESSAGE,
    TopicValidationService,
)
from content_generator.config import Settings
from content_generator.domain.entities import ChatCompletionResult, ChatMessage, TopicValidation
from content_generator.domain.exceptions import EmptyContentError, TransportError


class FakeChatProvider(ChatProvider):
    """Returns a fixed answer or raises a fixed error; counts calls."""

    def __init__(self, *, answer: str = "valid", error: Exception | None = None):
        self._answer = answer
        self._error = error
        self.calls: list[dict] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def complete(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> ChatCompletionResult:
        self.calls.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self._error:
            raise self._error
        return ChatCompletionResult(model=model, content=self._answer, finish_reason="stop")


def _service(provider: FakeChatProvider) -> TopicValidationService:
    return TopicValidationService(provider, Settings(openrouter_api_key="test-key", _env_file=None))


# ── Pre-checks ──


@pytest.mark.asyncio
async def test_too_short_topic_is_rejected_without_network_call():
    provider = FakeChatProvider()
    result = await _service(provider).validate("a")

    assert result == TopicValidation(is_valid=False, message=TOO_SHORT_MESSAGE)
    assert provider.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("topic", ["12345", "!!??", "42 - 17"])
async def test_topic_without_letters_is_meaningless(topic: str):
    provider = FakeChatProvider()
    result = await _service(provider).validate(topic)

    assert result.is_valid is False
    assert result.message == MEANINGLESS_MESSAGE
    assert provider.calls == []


def test_precheck_passes_topic_with_letters():
    assert TopicValidationService.precheck("xyz123") is None


# ── Advisory classification ──


@pytest.mark.asyncio
async def test_valid_answer_accepts_topic():
    provider = FakeChatProvider(answer="Valid")
    result = await _service(provider).validate("Climate Change")

    assert result == TopicValidation(is_valid=True)
    assert provider.calls[0]["model"] == "google/gemini-2.0-flash-exp:free"
    assert provider.calls[0]["max_tokens"] == 10
    assert provider.calls[0]["temperature"] == 0.1


@pytest.mark.asyncio
async def test_invalid_answer_rejects_topic():
    provider = FakeChatProvider(answer="INVALID.")
    result = await _service(provider).validate("asdf qwer")

    assert result == TopicValidation(is_valid=False, message=MEANINGLESS_MESSAGE)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        TransportError(provider="fake", status_code=503, message="Could not reach fake"),
        TransportError(provider="fake", status_code=500, message="Upstream error"),
        EmptyContentError("No content received from API"),
        RuntimeError("unexpected"),
    ],
)
async def test_classifier_failure_fails_open(error: Exception):
    provider = FakeChatProvider(error=error)
    result = await _service(provider).validate("Space Exploration")

    assert result == TopicValidation(is_valid=True)
    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_fail_open_logs_a_single_warning(caplog: pytest.LogCaptureFixture):
    provider = FakeChatProvider(
        error=TransportError(provider="fake", status_code=503, message="Could not reach fake")
    )

    with caplog.at_level(logging.INFO):
        await _service(provider).validate("Space Exploration")

    assert [r for r in caplog.records if r.levelno >= logging.ERROR] == []
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "accepting" in warnings[0].getMessage()


@pytest.mark.asyncio
async def test_empty_answer_fails_open():
    service = _service(FakeChatProvider(answer="   "))
    assert await service._advise("Space Exploration") == FAIL_OPEN_VERDICT
