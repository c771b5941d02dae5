"""Workflow Engine - Role workflow regeneration and stage drill-down."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import BackendError, BackendResponseError, InvalidInputError
from ..extraction.extractor import extract_payload, stage_detail_shape, workflow_shape
from ..models.enums import RequestOutcomeStatus
from ..models.schemas import StageDetail, WorkflowPayload, WorkflowStage
from ..models.state import WorkflowState
from ..prompts.templates import (
    WORKFLOW_EMPTY,
    WORKFLOW_PAYLOAD_UNUSABLE,
    WORKFLOW_REGENERATION_FAILED,
    stage_detail_unavailable,
)
from .lifecycle import RequestLifecycleController

if TYPE_CHECKING:
    from ..llm.client import BackendClient

logger = logging.getLogger(__name__)


class WorkflowEngine:
    """Owns a workflow view: its stages, role label and stage detail.

    Two independent request sessions are driven through the lifecycle
    controller: ``workflow`` for regeneration and ``stage-detail`` for the
    drill-down. A regeneration either replaces the stage list as a whole or
    leaves it untouched; it is never patched.

    Example:
        >>> engine = WorkflowEngine(client, role="Backend Engineer", stages=stages)
        >>> await engine.regenerate("Go, Postgres, Kafka")
        True
        >>> detail = await engine.fetch_stage_detail("Design")
    """

    WORKFLOW_SESSION = "workflow"
    DETAIL_SESSION = "stage-detail"

    def __init__(
        self,
        client: BackendClient,
        role: str = "",
        stages: list[WorkflowStage] | None = None,
        lifecycle: RequestLifecycleController | None = None,
        state: WorkflowState | None = None,
    ):
        """Initialize the engine.

        Args:
            client: Backend client used for GenerateWorkflow and GetStageDetail
            role: Initial role label (ignored when ``state`` is given)
            stages: Initial stages (ignored when ``state`` is given)
            lifecycle: Shared controller (a private one is created otherwise)
            state: Pre-built view state
        """
        self.client = client
        self.lifecycle = lifecycle or RequestLifecycleController()
        self.state = state or WorkflowState(
            stages=list(stages or []), display_role_label=role
        )
        self.lifecycle.bind(self.WORKFLOW_SESSION, self.state.workflow_request)
        self.lifecycle.bind(self.DETAIL_SESSION, self.state.detail_request)

    def find_stage(self, name: str) -> WorkflowStage | None:
        for stage in self.state.stages:
            if stage.stage == name:
                return stage
        return None

    # =========================================================================
    # REGENERATION
    # =========================================================================

    async def regenerate(self, custom_tools_text: str) -> bool:
        """Regenerate the workflow around the user's tool list.

        Args:
            custom_tools_text: Free text listing the tools the user works with

        Returns:
            True if a new stage list was applied. False for blank input (no
            request is made), a failed request, or a superseded one.
        """
        tools_text = (custom_tools_text or "").strip()
        if not tools_text:
            logger.debug("[Workflow] Blank tool list, nothing to regenerate")
            return False

        role = self.state.display_role_label

        async def fetch_workflow() -> WorkflowPayload:
            try:
                body = await self.client.generate_workflow(role, tools_text)
            except BackendError as e:
                raise BackendError(
                    message=WORKFLOW_REGENERATION_FAILED, details=e.details
                ) from e

            payload = extract_payload(body, None, workflow_shape)
            if payload is None:
                raise BackendResponseError(message=WORKFLOW_PAYLOAD_UNUSABLE)
            if not payload.workflow:
                raise BackendResponseError(message=WORKFLOW_EMPTY)
            return payload

        logger.info(f"[Workflow] Regenerating for '{role}' with tools: {tools_text}")
        outcome = await self.lifecycle.issue(
            self.WORKFLOW_SESSION, fetch_workflow, on_success=self._apply_workflow
        )

        if outcome.status == RequestOutcomeStatus.FAILED:
            self.state.last_error = outcome.error
            logger.warning(f"[Workflow] Keeping current stages: {outcome.error}")
        return outcome.applied

    def _apply_workflow(self, payload: WorkflowPayload) -> None:
        self.state.replace_stages(payload.workflow, payload.role)
        logger.info(f"[Workflow] Applied {len(payload.workflow)} stages")

    # =========================================================================
    # STAGE DETAIL
    # =========================================================================

    async def fetch_stage_detail(self, stage: str | WorkflowStage) -> StageDetail | None:
        """Select a stage and load its detail.

        Selecting another stage while a detail is loading supersedes it; only
        the detail of the latest selection is ever shown.

        Args:
            stage: Stage name, or the stage itself

        Returns:
            The detail shown for this selection (an ``available=False``
            detail when none could be produced), or None if superseded

        Raises:
            InvalidInputError: If the stage name is blank
        """
        if isinstance(stage, WorkflowStage):
            name, tools = stage.stage, stage.tools_used
        else:
            name = (stage or "").strip()
            known = self.find_stage(name)
            tools = known.tools_used if known else []
        if not name:
            raise InvalidInputError(message="Stage name is required")

        self.state.active_stage = name
        self.state.active_stage_detail = None
        role = self.state.display_role_label

        async def fetch_detail() -> StageDetail:
            body = await self.client.get_stage_detail(role, name, tools)
            return extract_payload(body, stage_detail_unavailable(), stage_detail_shape)

        outcome = await self.lifecycle.issue(
            self.DETAIL_SESSION, fetch_detail, on_success=self._apply_detail
        )

        if outcome.status == RequestOutcomeStatus.FAILED:
            self._apply_detail(stage_detail_unavailable())
        elif not outcome.applied:
            return None
        return self.state.active_stage_detail

    def _apply_detail(self, detail: StageDetail) -> None:
        self.state.active_stage_detail = detail
        if not detail.available:
            logger.info(f"[Workflow] No detail available for '{self.state.active_stage}'")

    def clear_stage_detail(self) -> None:
        """Deselect the stage and drop any detail still loading."""
        self.lifecycle.cancel(self.DETAIL_SESSION)
        self.state.clear_detail()

    def close(self) -> None:
        """Tear down the view: cancel both sessions and clear the selection."""
        self.lifecycle.cancel(self.WORKFLOW_SESSION)
        self.clear_stage_detail()
