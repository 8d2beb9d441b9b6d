"""
Summary: Stateful restoration façade consumed by the UI.
Why: Expose phase and progress for one pass and hand unresolved files to a human.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace
from logging import Logger, getLogger
from pathlib import Path

from ..domain.errors import RestorationInProgressError
from ..domain.models import MediaStatus, RestoreOptions, SavedMediaReference
from ..domain.references import from_saved, mark_checked
from ..domain.state import (
    MissingFileDecision,
    ResolutionAction,
    ResolutionOutcome,
    RestorationOutcome,
    RestorationPhase,
    RestorationState,
)
from .orchestrator import RestorationOrchestrator

StateListener = Callable[[RestorationState], None]

SCANNING_PROGRESS = 10
RESTORING_PROGRESS = 80
USER_INPUT_PROGRESS = 90
COMPLETE_PROGRESS = 100

_ACTIVE_PHASES = frozenset({RestorationPhase.SCANNING, RestorationPhase.RESTORING})


class RestorationController:
    """Own the restoration state for one open project.

    The controller runs one pass at a time; overlapping calls raise
    :class:`RestorationInProgressError`.
    """

    _orchestrator: RestorationOrchestrator
    _state: RestorationState
    _listeners: list[StateListener]
    _logger: Logger

    def __init__(
        self,
        orchestrator: RestorationOrchestrator,
        *,
        logger: Logger | None = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._state = RestorationState()
        self._listeners = []
        self._logger = logger or getLogger(__name__)

    @property
    def state(self) -> RestorationState:
        """Snapshot of the current state."""

        return replace(self._state, pending_missing=list(self._state.pending_missing))

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every state change."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def restore_project_media(
        self,
        media_refs: Sequence[SavedMediaReference],
        music_refs: Sequence[SavedMediaReference],
        project_file_path: Path | str,
        options: RestoreOptions | None = None,
    ) -> RestorationOutcome:
        """Run a pass and report whether a human must resolve missing files."""

        if self._state.phase in _ACTIVE_PHASES:
            raise RestorationInProgressError("A restoration pass is already running")

        opts = options or RestoreOptions()
        self._set_state(RestorationState(phase=RestorationPhase.SCANNING, progress=SCANNING_PROGRESS))

        try:
            result = await self._orchestrator.restore(
                media_refs, music_refs, project_file_path, opts
            )
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            self._logger.error(
                "Restoration failed for %s: %s",
                project_file_path,
                message,
                extra={
                    "restoration_event": "restoration.pass.error",
                    "error_message": message,
                },
            )
            self._set_state(
                RestorationState(
                    phase=RestorationPhase.ERROR,
                    progress=self._state.progress,
                    error=message,
                )
            )
            raise

        self._set_state(
            RestorationState(
                phase=RestorationPhase.RESTORING,
                progress=RESTORING_PROGRESS,
                result=result,
            )
        )

        if result.missing_files and opts.show_dialog:
            self._set_state(
                RestorationState(
                    phase=RestorationPhase.USER_INPUT,
                    progress=USER_INPUT_PROGRESS,
                    result=result,
                    pending_missing=list(result.missing_files),
                )
            )
            return RestorationOutcome(result=result, needs_user_input=True)

        self._complete()
        return RestorationOutcome(result=result, needs_user_input=False)

    def handle_missing_files_resolution(
        self, decisions: Sequence[MissingFileDecision]
    ) -> ResolutionOutcome:
        """Apply the user's decisions and finish the pass.

        Raises:
            ValueError: When a ``found`` decision has no ``new_path``.
        """

        for decision in decisions:
            if decision.action is ResolutionAction.FOUND and decision.new_path is None:
                raise ValueError(f"No new path given for found file {decision.reference.name}")

        outcome = ResolutionOutcome()
        for decision in decisions:
            if decision.action is ResolutionAction.FOUND:
                assert decision.new_path is not None
                checked = mark_checked(decision.reference, MediaStatus.RELOCATED)
                outcome.found_files.append(from_saved(checked, decision.new_path))
                self._logger.info(
                    "User located %s at %s", decision.reference.name, decision.new_path
                )
            else:
                outcome.removed_files.append(decision.reference)
                self._logger.info("User removed %s from the project", decision.reference.name)

        self._complete()
        return outcome

    def cancel_missing_files_dialog(self) -> None:
        """Defer resolution; missing files stay missing."""

        if self._state.phase is not RestorationPhase.USER_INPUT:
            self._logger.debug("No resolution pending; phase is %s", self._state.phase.value)
            return
        self._logger.info(
            "Resolution deferred for %d missing file(s)", len(self._state.pending_missing)
        )
        self._complete()

    def reset_restoration(self) -> None:
        """Return to idle with no result, from any phase."""

        self._set_state(RestorationState())

    def _complete(self) -> None:
        self._set_state(
            RestorationState(
                phase=RestorationPhase.COMPLETED,
                progress=COMPLETE_PROGRESS,
                result=self._state.result,
            )
        )

    def _set_state(self, state: RestorationState) -> None:
        self._state = state
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                # A broken observer must not leave the pass in an active phase.
                self._logger.exception(
                    "State listener %r failed on phase %s", listener, state.phase.value
                )


__all__ = ["RestorationController", "StateListener"]
