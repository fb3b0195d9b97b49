"""Topic validation — cheap local checks plus an advisory LLM opinion.

The LLM call is advisory: it may reject a topic, but it can never block
generation because of its own failure. Every error raised while consulting
it is logged and turned into an "assume valid" verdict (fail-open).
"""

import logging
import re
from dataclasses import dataclass

from content_generator.application.interfaces import ChatProvider
from content_generator.config import Settings
from content_generator.domain.entities import ChatMessage, TopicValidation
from content_generator.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("TopicValidationService")

MIN_TOPIC_LENGTH = 2
TOO_SHORT_MESSAGE = f"Topic must be at least {MIN_TOPIC_LENGTH} characters long"
MEANINGLESS_MESSAGE = "Please enter a meaningful topic"

_NO_LETTERS = re.compile(r"^[^a-zA-Z]+$")

_VALIDATOR_SYSTEM_PROMPT = (
    "You are a topic validator. Simply respond with 'valid' if the input is a topic, "
    "or 'invalid' if it's not."
)


@dataclass(frozen=True)
class AdvisoryVerdict:
    """Outcome of the advisory classification.

    ``degraded`` is set when the classifier could not be consulted and the
    verdict is the fail-open default.
    """

    is_valid: bool
    degraded: bool = False
    answer: str = ""


FAIL_OPEN_VERDICT = AdvisoryVerdict(is_valid=True, degraded=True)


class TopicValidationService:
    """Validates user topics before they are sent to the generation pipeline."""

    def __init__(self, provider: ChatProvider, settings: Settings):
        self._provider = provider
        self._settings = settings

    @staticmethod
    def precheck(topic: str) -> TopicValidation | None:
        """Deterministic checks; returns a rejection or None when they pass."""
        if len(topic) < MIN_TOPIC_LENGTH:
            return TopicValidation(is_valid=False, message=TOO_SHORT_MESSAGE)
        if _NO_LETTERS.match(topic):
            return TopicValidation(is_valid=False, message=MEANINGLESS_MESSAGE)
        return None

    async def validate(self, topic: str) -> TopicValidation:
        rejection = self.precheck(topic)
        if rejection is not None:
            logger.info("Topic %r rejected by pre-check: %s", topic, rejection.message)
            return rejection

        verdict = await self._advise(topic)
        if verdict.is_valid:
            return TopicValidation(is_valid=True)
        return TopicValidation(is_valid=False, message=MEANINGLESS_MESSAGE)

    async def _advise(self, topic: str) -> AdvisoryVerdict:
        """Consult the classifier, converting any failure into FAIL_OPEN_VERDICT."""
        plog.step_start(PipelineStage.VALIDATION, "Classifying topic", topic=topic)
        try:
            verdict = await self._classify(topic)
        except Exception as e:
            logger.warning("Topic classification unavailable, accepting %r: %s", topic, e)
            return FAIL_OPEN_VERDICT
        plog.step_complete(PipelineStage.VALIDATION, f"Topic classified as {verdict.answer!r}")
        return verdict

    async def _classify(self, topic: str) -> AdvisoryVerdict:
        settings = self._settings
        result = await self._provider.complete(
            messages=[
                ChatMessage(role="system", content=_VALIDATOR_SYSTEM_PROMPT),
                ChatMessage(role="user", content=f'Is "{topic}" a valid topic?'),
            ],
            model=settings.validation_model,
            temperature=settings.validation_temperature,
            max_tokens=settings.validation_max_tokens,
        )
        answer = result.content.strip().lower()
        if not answer:
            raise ValueError("Empty classification answer")
        # "valid" is a substring of "invalid", so only the negative is matched
        return AdvisoryVerdict(is_valid="invalid" not in answer, answer=answer)
