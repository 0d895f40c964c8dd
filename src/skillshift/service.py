"""SkillShift service: the boundary between callers and the generation core.

This module provides SkillShiftService, which validates caller input, drives
the clarification turns, and runs generation in blocking or streaming mode.
It is the only layer that turns unexpected exceptions into failure responses;
the core below it reports invalid skills as data and raises only on transport
failures.
"""

import uuid
from typing import AsyncIterator, Literal, Optional, Union

from pydantic import BaseModel, Field

from skillshift.core.protocols import TextCompletion
from skillshift.errors import InvalidIntentError
from skillshift.generation.config import GenerationConfig
from skillshift.generation.models import (
    ChunkEvent,
    ClarifierQuestion,
    CompleteEvent,
    GenerationResult,
    QAPair,
)
from skillshift.generation.orchestrator import SkillGenerationOrchestrator
from skillshift.llm.client import LLMCompletionClient
from skillshift.observability.logging import bound_correlation_id, get_logger

logger = get_logger(__name__)

GENERATION_FAILED_MESSAGE = "Failed to generate skill"


class SessionState(BaseModel):
    """Clarification state handed back to the caller after each turn.

    The service keeps no session storage; callers pass intent, answers and
    turn back in on the next call.

    Attributes:
        session_id: Temporary identifier for the clarification session
        status: Clarifier verdict for this turn
        questions: Questions to ask the user (empty unless need_more_info)
        reasoning: Clarifier's explanation
        turn: 1-based turn the verdict was produced for
        qa: Every answered question so far, oldest first
    """

    session_id: str
    status: Literal["need_more_info", "ready", "max_turns_reached"]
    questions: list[ClarifierQuestion] = Field(default_factory=list)
    reasoning: str = ""
    turn: int = Field(..., ge=1)
    qa: list[QAPair] = Field(default_factory=list)


class GenerationResponse(BaseModel):
    """Blocking generation response.

    Attributes:
        success: False when the run failed validation or raised
        result: Aggregated result, None when the run raised
        error: Generic failure message when the run raised
    """

    success: bool
    result: Optional[GenerationResult] = None
    error: Optional[str] = None


class ErrorEvent(BaseModel):
    """Terminal streaming event emitted when the run raised."""

    type: Literal["error"] = "error"
    error: str = GENERATION_FAILED_MESSAGE


StreamEvent = Union[ChunkEvent, CompleteEvent, ErrorEvent]


def _new_session_id() -> str:
    return f"temp-{uuid.uuid4().hex[:12]}"


class SkillShiftService:
    """Entry point for clarification and skill generation.

    Example:
        >>> service = SkillShiftService()
        >>> state = await service.start_session("Help me review pull requests")
        >>> response = await service.generate("Help me review pull requests", state.qa)
    """

    def __init__(
        self,
        completion: Optional[TextCompletion] = None,
        config: Optional[GenerationConfig] = None,
    ) -> None:
        """Initialize the service.

        Args:
            completion: Text completion capability (defaults to LLMCompletionClient
                configured from the environment)
            config: Generation configuration (defaults to GenerationConfig())
        """
        self.config = config or GenerationConfig()
        self.orchestrator = SkillGenerationOrchestrator(
            completion or LLMCompletionClient(), self.config
        )

    def validate_intent(self, intent: str) -> str:
        """Return the trimmed intent or raise if it is unusable.

        Raises:
            InvalidIntentError: If the trimmed intent is shorter than the minimum
        """
        trimmed = intent.strip() if intent else ""
        if len(trimmed) < self.config.min_intent_length:
            raise InvalidIntentError(
                f"Intent must be at least {self.config.min_intent_length} characters"
            )
        return trimmed

    async def start_session(self, intent: str) -> SessionState:
        """Validate the intent and run the first clarification turn.

        Args:
            intent: The user's intent

        Returns:
            SessionState for turn 1

        Raises:
            InvalidIntentError: If the intent is too short
            CompletionError: If the clarifier call fails
        """
        trimmed = self.validate_intent(intent)
        session_id = _new_session_id()
        with bound_correlation_id():
            result = await self.orchestrator.clarify(trimmed, [], 1)
            logger.info("clarification_turn", session_id=session_id, turn=1, status=result.status)
            return SessionState(
                session_id=session_id,
                status=result.status,
                questions=result.questions,
                reasoning=result.reasoning,
                turn=1,
            )

    async def answer(
        self,
        intent: str,
        qa: list[QAPair],
        current_turn: int,
        new_answers: list[QAPair],
        session_id: Optional[str] = None,
    ) -> SessionState:
        """Record answers and run the next clarification turn.

        Answers are appended; earlier answers are never rewritten.

        Args:
            intent: The user's intent
            qa: Answers recorded so far
            current_turn: Turn the answers respond to
            new_answers: Answers to the latest questions
            session_id: Session identifier from start_session, if any

        Returns:
            SessionState for the next turn

        Raises:
            InvalidIntentError: If the intent is too short
            CompletionError: If the clarifier call fails
        """
        trimmed = self.validate_intent(intent)
        all_answers = [*qa, *new_answers]
        turn = current_turn + 1
        session_id = session_id or _new_session_id()
        with bound_correlation_id():
            result = await self.orchestrator.clarify(trimmed, all_answers, turn)
            logger.info(
                "clarification_turn",
                session_id=session_id,
                turn=turn,
                answers=len(all_answers),
                status=result.status,
            )
            return SessionState(
                session_id=session_id,
                status=result.status,
                questions=result.questions,
                reasoning=result.reasoning,
                turn=turn,
                qa=all_answers,
            )

    async def generate(self, intent: str, qa: list[QAPair]) -> GenerationResponse:
        """Run blocking generation.

        Invalid skills come back as a normal response with success False. Any
        exception from the core becomes a generic failure response.

        Args:
            intent: The user's intent
            qa: Answered clarification questions

        Returns:
            GenerationResponse for the run

        Raises:
            InvalidIntentError: If the intent is too short
        """
        trimmed = self.validate_intent(intent)
        with bound_correlation_id() as run_id:
            logger.info("generation_started", run_id=run_id, qa_count=len(qa), mode="blocking")
            try:
                result = await self.orchestrator.run_generation(trimmed, qa)
            except Exception as e:
                logger.error("generation_failed", run_id=run_id, error=str(e), exc_info=True)
                return GenerationResponse(success=False, error=GENERATION_FAILED_MESSAGE)
            logger.info(
                "generation_finished",
                run_id=run_id,
                status=result.validation_status.value,
                skills=len(result.skills),
                repair_attempts=result.repair_attempts,
            )
            return GenerationResponse(success=result.success, result=result)

    async def stream(self, intent: str, qa: list[QAPair]) -> AsyncIterator[StreamEvent]:
        """Run streaming generation.

        Yields chunk events while the generator streams, then exactly one
        terminal event: complete on a finished run, error if the core raised.
        The run's correlation id is bound only while the pipeline advances,
        never across a yield, so it does not leak into the consumer.

        Args:
            intent: The user's intent
            qa: Answered clarification questions

        Yields:
            ChunkEvent, then CompleteEvent or ErrorEvent

        Raises:
            InvalidIntentError: If the intent is too short
        """
        trimmed = self.validate_intent(intent)
        events = self.orchestrator.stream_generation(trimmed, qa)
        with bound_correlation_id() as run_id:
            logger.info("generation_started", run_id=run_id, qa_count=len(qa), mode="stream")

        try:
            while True:
                with bound_correlation_id(run_id):
                    try:
                        event = await anext(events)
                    except StopAsyncIteration:
                        break
                    if isinstance(event, CompleteEvent):
                        logger.info(
                            "generation_finished",
                            run_id=run_id,
                            status=event.result.validation_status.value,
                            skills=len(event.result.skills),
                            repair_attempts=event.result.repair_attempts,
                        )
                yield event
        except Exception as e:
            with bound_correlation_id(run_id):
                logger.error("generation_failed", run_id=run_id, error=str(e), exc_info=True)
            yield ErrorEvent()
