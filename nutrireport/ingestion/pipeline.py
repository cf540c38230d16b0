from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from nutrireport.database.models import UserProfile
from nutrireport.ingestion.exceptions import IngestionError, InvalidTransitionError
from nutrireport.ingestion.models import ExtractionResult, StoredArtifact, UploadCandidate


class Stage(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    UPLOADING = "uploading"
    RESOLVING_USER = "resolving_user"
    MERGING_NOTES = "merging_notes"
    FETCHING_ARTIFACT = "fetching_artifact"
    EXTRACTING = "extracting"
    PERSISTING = "persisting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


STAGE_ORDER: tuple[Stage, ...] = (
    Stage.IDLE,
    Stage.VALIDATING,
    Stage.UPLOADING,
    Stage.RESOLVING_USER,
    Stage.MERGING_NOTES,
    Stage.FETCHING_ARTIFACT,
    Stage.EXTRACTING,
    Stage.PERSISTING,
    Stage.SUCCEEDED,
)

UPLOADING_STATUS = "Uploading..."
EXTRACTING_STATUS = "Extracting text from image..."

PROGRESS_STATUS: dict[Stage, str] = {
    Stage.VALIDATING: UPLOADING_STATUS,
    Stage.UPLOADING: UPLOADING_STATUS,
    Stage.RESOLVING_USER: UPLOADING_STATUS,
    Stage.MERGING_NOTES: UPLOADING_STATUS,
    Stage.FETCHING_ARTIFACT: EXTRACTING_STATUS,
    Stage.EXTRACTING: EXTRACTING_STATUS,
    Stage.PERSISTING: EXTRACTING_STATUS,
}

SUCCESS_MESSAGE = "File uploaded & text extracted successfully!"
EMPTY_EXTRACTION_MESSAGE = "No readable text found in the image."


@dataclass(frozen=True)
class StageFailure:
    stage: Stage
    error: IngestionError


@dataclass(slots=True)
class PipelineRun:
    """State of one upload invocation, from Idle to a terminal stage.

    Stages only move forward, one at a time, in STAGE_ORDER. FAILED can be
    entered from any non-terminal stage. A terminal run never changes again.
    """

    candidate: UploadCandidate
    notes_input: str
    user_id: str = ""
    stage: Stage = Stage.IDLE
    artifact: StoredArtifact | None = None
    profile: UserProfile | None = None
    merged_notes: list[str] = field(default_factory=list)
    fetched_bytes: bytes = b""
    extraction: ExtractionResult | None = None
    report_id: int | None = None
    failure: StageFailure | None = None
    empty_extraction: bool = False
    message: str = ""
    _listeners: list[Callable[["PipelineRun"], None]] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.stage in (Stage.SUCCEEDED, Stage.FAILED)

    @property
    def succeeded(self) -> bool:
        return self.stage is Stage.SUCCEEDED

    def subscribe(self, listener: Callable[["PipelineRun"], None]) -> None:
        """Register a callback invoked after every stage transition."""
        self._listeners.append(listener)

    def advance(self, stage: Stage) -> None:
        """Enter the next non-terminal stage."""
        if stage not in PROGRESS_STATUS:
            raise InvalidTransitionError(f"{stage.value} is not a working stage")
        self._move(stage)
        self.message = PROGRESS_STATUS[stage]
        self._notify()

    def fail(self, error: IngestionError) -> None:
        if self.is_terminal:
            raise InvalidTransitionError(f"Run already finished as {self.stage.value}")
        self.failure = StageFailure(stage=self.stage, error=error)
        self.stage = Stage.FAILED
        self.message = str(error)
        self._notify()

    def succeed(self) -> None:
        self._move(Stage.SUCCEEDED)
        self.empty_extraction = self.extraction is not None and self.extraction.is_empty
        self.message = EMPTY_EXTRACTION_MESSAGE if self.empty_extraction else SUCCESS_MESSAGE
        self._notify()

    def _move(self, stage: Stage) -> None:
        if self.is_terminal:
            raise InvalidTransitionError(f"Run already finished as {self.stage.value}")
        expected = STAGE_ORDER[STAGE_ORDER.index(self.stage) + 1]
        if stage is not expected:
            raise InvalidTransitionError(
                f"Cannot move from {self.stage.value} to {stage.value}; "
                f"next stage is {expected.value}"
            )
        self.stage = stage

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self)


class PipelineStep(ABC):
    stage: ClassVar[Stage]

    @abstractmethod
    def run(self, context: PipelineRun) -> PipelineRun:
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held by the step's collaborator, if any."""
