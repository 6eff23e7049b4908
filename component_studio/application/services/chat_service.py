"""
Chat service for conversational component generation.

Runs one turn: prompt assembly, generation, artifact extraction,
persistence, cache sync. Turns are strictly sequential within a request;
a failure before persistence leaves the stored session untouched.

Dependencies: component_studio.application.services.session_service,
    component_studio.boundary.llm, component_studio.core.codegen
System role: Chat turn orchestration
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from component_studio.application.services.session_service import SessionService
from component_studio.core.codegen.extractor import ArtifactExtractor
from component_studio.core.codegen.prompt_builder import (
    PromptBuilder,
    build_override_request,
    is_duplicate_request,
)
from component_studio.core.exceptions import GenerationError, InvalidRequestError, StoreError
from component_studio.models.session import ChatMessage, Session
from component_studio.observability.log_utils import log_with_context

if TYPE_CHECKING:
    from component_studio.boundary.llm.gemini_client import GeminiGenerationClient

logger = logging.getLogger(__name__)


class TurnState(str, Enum):
    """Stages of a chat turn."""

    IDLE = "idle"
    PROMPT_BUILDING = "prompt_building"
    GENERATING = "generating"
    EXTRACTING = "extracting"
    PERSISTING = "persisting"
    CACHE_SYNCING = "cache_syncing"
    DONE = "done"
    ERRORED = "errored"


class ChatService:
    """
    Chat service for component generation turns.

    Coordinates session loading, prompt building, the generation call,
    extraction and persistence for multi-turn conversations.
    """

    def __init__(
        self,
        session_service: SessionService,
        generation_client: "GeminiGenerationClient",
        prompt_builder: PromptBuilder,
        extractor: ArtifactExtractor,
    ) -> None:
        """
        Initialize chat service.

        Args:
            session_service: Request-scoped session service (store + cache)
            generation_client: Text generation boundary
            prompt_builder: Prompt assembler
            extractor: Generated text to artifact transform
        """
        self.session_service = session_service
        self.generation_client = generation_client
        self.prompt_builder = prompt_builder
        self.extractor = extractor

    async def process_turn(
        self,
        owner_id: str,
        session_id: UUID,
        prompt: str,
        timeout: float | None = None,
    ) -> Session:
        """
        Process one chat turn through the full pipeline.

        Flow:
        1. Load session from the store
        2. Append the user message in memory (skipped on a resend) and build the prompt
        3. Call the generation service
        4. Append the reply and extract the artifact
        5. Persist transcript and artifact
        6. Update the entity cache and invalidate the list cache

        Args:
            owner_id: Owning user ID
            session_id: Session UUID
            prompt: New user request
            timeout: Upper bound in seconds for the generation call

        Returns:
            Session: Session after the turn

        Raises:
            InvalidRequestError: If the prompt is blank
            SessionNotFoundError: If missing or owned by someone else
            GenerationError: If generation fails or times out (nothing persisted)
            StoreError: If the store read or write fails (nothing persisted)
        """
        if not prompt.strip():
            raise InvalidRequestError("Prompt must not be empty", field="prompt")

        state = TurnState.IDLE
        session = await self.session_service.get_session(owner_id, session_id, use_cache=False)

        state = self._advance(session_id, state, TurnState.PROMPT_BUILDING)
        transcript = list(session.transcript)
        if is_duplicate_request(transcript, prompt):
            logger.info(f"{__name__}:process_turn - Resent prompt, not appending duplicate")
            history = transcript[:-1]
        else:
            history = list(transcript)
            transcript.append(ChatMessage(role="user", content=prompt))
        full_prompt = self.prompt_builder.build(history, session.artifact, prompt)
        log_with_context(
            logger,
            logging.DEBUG,
            "Prompt assembled",
            session_id=session_id,
            history=history[-self.prompt_builder.context_window:],
            prompt=full_prompt,
        )

        state = self._advance(session_id, state, TurnState.GENERATING)
        try:
            generated = await self.generation_client.generate(full_prompt, timeout=timeout)
        except GenerationError as e:
            self._advance(session_id, state, TurnState.ERRORED)
            logger.error(f"{__name__}:process_turn - Generation failed ({e.reason}): {e.message}")
            raise

        state = self._advance(session_id, state, TurnState.EXTRACTING)
        transcript.append(ChatMessage(role="assistant", content=generated))
        artifact = self.extractor.extract(generated, session.artifact)

        state = self._advance(session_id, state, TurnState.PERSISTING)
        try:
            updated = await self.session_service.persist_turn(
                owner_id, session_id, transcript, artifact
            )
        except StoreError:
            self._advance(session_id, state, TurnState.ERRORED)
            raise

        state = self._advance(session_id, state, TurnState.CACHE_SYNCING)
        await self.session_service.sync_cache(updated)

        self._advance(session_id, state, TurnState.DONE)
        log_with_context(
            logger,
            logging.INFO,
            "Chat turn completed",
            session=updated,
            artifact=artifact,
        )
        return updated

    async def process_override(
        self,
        owner_id: str,
        session_id: UUID,
        element_id: str,
        instruction: str,
        timeout: float | None = None,
    ) -> Session:
        """
        Run a turn that modifies a single element of the current component.

        Args:
            owner_id: Owning user ID
            session_id: Session UUID
            element_id: id attribute of the target element
            instruction: Requested change
            timeout: Upper bound in seconds for the generation call

        Returns:
            Session: Session after the turn
        """
        prompt = build_override_request(element_id, instruction)
        return await self.process_turn(owner_id, session_id, prompt, timeout=timeout)

    @staticmethod
    def _advance(session_id: UUID, current: TurnState, target: TurnState) -> TurnState:
        logger.debug(f"{__name__}:turn {session_id} - {current.value} -> {target.value}")
        return target
