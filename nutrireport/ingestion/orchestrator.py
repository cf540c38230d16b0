from collections.abc import Callable, Sequence
from pathlib import Path

from nutrireport.auth.base import BaseAuthProvider
from nutrireport.config.settings import Settings
from nutrireport.database.repositories.profile_repository import ProfileRepository
from nutrireport.database.repositories.report_repository import ReportRepository
from nutrireport.ingestion.exceptions import IngestionError
from nutrireport.ingestion.fetcher import ArtifactFetcher
from nutrireport.ingestion.models import UploadCandidate
from nutrireport.ingestion.pipeline import PipelineRun, PipelineStep
from nutrireport.ingestion.steps import (
    ExtractTextStep,
    FetchArtifactStep,
    MergeNotesStep,
    PersistReportStep,
    ResolveUserStep,
    UploadStep,
    ValidateStep,
)
from nutrireport.ingestion.validator import FileValidator
from nutrireport.logging.logger import Log
from nutrireport.ocr.factory import TextExtractorFactory
from nutrireport.storage.factory import BlobStoreFactory

Listener = Callable[[PipelineRun], None]


class IngestionPipeline:
    """Runs one report upload through its fixed sequence of stages.

    Pipeline: validate -> upload -> resolve user -> merge notes -> fetch back
    -> extract text -> persist report. The first failing stage ends the run;
    side effects of earlier stages stay in place.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def submit(
        self,
        candidate: UploadCandidate,
        notes_input: str,
        auth: BaseAuthProvider,
        listeners: Sequence[Listener] = (),
    ) -> PipelineRun:
        """Process one upload and return the finished run."""
        run = PipelineRun(candidate=candidate, notes_input=notes_input)
        for listener in listeners:
            run.subscribe(listener)

        try:
            run.user_id = auth.get_current_user().id
        except IngestionError as exc:
            Log.error(f"Upload of {candidate.filename} rejected: {exc}")
            run.fail(exc)
            return run

        Log.info(f"Processing upload {candidate.filename}", user_id=run.user_id)
        for step in self._steps:
            run.advance(step.stage)
            try:
                step.run(run)
            except IngestionError as exc:
                Log.error(f"Stage {step.stage.value} failed: {exc}", user_id=run.user_id)
                run.fail(exc)
                return run

        run.succeed()
        if run.empty_extraction:
            Log.warning(f"No text recognized in {candidate.filename}", user_id=run.user_id)
        else:
            Log.info(f"Upload {candidate.filename} completed", user_id=run.user_id)
        return run

    def close(self) -> None:
        for step in self._steps:
            step.close()


def build_pipeline(
    settings: Settings,
    files_root: Path | None = None,
) -> IngestionPipeline:
    """Build an IngestionPipeline with all configured adapters."""
    if files_root is not None:
        settings = settings.model_copy(update={"files_root": str(files_root)})
    profile_repo = ProfileRepository()
    steps: list[PipelineStep] = [
        ValidateStep(FileValidator(max_bytes=settings.max_upload_bytes)),
        UploadStep(BlobStoreFactory.create(settings)),
        ResolveUserStep(profile_repo),
        MergeNotesStep(profile_repo),
        FetchArtifactStep(ArtifactFetcher(timeout_seconds=settings.fetch_timeout_seconds)),
        ExtractTextStep(TextExtractorFactory.create(settings)),
        PersistReportStep(ReportRepository()),
    ]
    return IngestionPipeline(steps)
