from collections.abc import Callable

from nutrireport.database.repositories.profile_repository import ProfileRepository
from nutrireport.database.repositories.report_repository import ReportRepository
from nutrireport.ingestion.exceptions import ValidationError
from nutrireport.ingestion.fetcher import ArtifactFetcher
from nutrireport.ingestion.models import ExtractionResult, StoredArtifact
from nutrireport.ingestion.notes import merge_notes
from nutrireport.ingestion.paths import build_storage_path, epoch_millis
from nutrireport.ingestion.pipeline import PipelineRun, PipelineStep, Stage
from nutrireport.ingestion.validator import FileValidator, Rejected
from nutrireport.logging.logger import Log
from nutrireport.ocr.base import BaseTextExtractor
from nutrireport.storage.base import BaseBlobStore


class ValidateStep(PipelineStep):
    stage = Stage.VALIDATING

    def __init__(self, validator: FileValidator) -> None:
        self._validator = validator

    def run(self, context: PipelineRun) -> PipelineRun:
        outcome = self._validator.validate(context.candidate)
        if isinstance(outcome, Rejected):
            raise ValidationError(outcome.reason, outcome.message)
        Log.info(
            f"Accepted {context.candidate.filename} "
            f"({context.candidate.size_bytes} bytes, {context.candidate.mime_type})"
        )
        return context


class UploadStep(PipelineStep):
    stage = Stage.UPLOADING

    def __init__(
        self,
        blob_store: BaseBlobStore,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        self._blob_store = blob_store
        self._clock = clock

    def run(self, context: PipelineRun) -> PipelineRun:
        candidate = context.candidate
        path = build_storage_path(
            context.user_id, self._clock(), candidate.filename, candidate.mime_type
        )
        self._blob_store.put(path, candidate.data, candidate.mime_type)
        context.artifact = StoredArtifact(path=path, public_url=self._blob_store.public_url(path))
        Log.info(f"Stored artifact {path}", user_id=context.user_id)
        return context


class ResolveUserStep(PipelineStep):
    stage = Stage.RESOLVING_USER

    def __init__(self, profile_repo: ProfileRepository) -> None:
        self._profile_repo = profile_repo

    def run(self, context: PipelineRun) -> PipelineRun:
        context.profile = self._profile_repo.find_by_user(context.user_id)
        Log.info(
            f"Loaded profile with {len(context.profile.notes)} notes",
            user_id=context.user_id,
        )
        return context


class MergeNotesStep(PipelineStep):
    stage = Stage.MERGING_NOTES

    def __init__(self, profile_repo: ProfileRepository) -> None:
        self._profile_repo = profile_repo

    def run(self, context: PipelineRun) -> PipelineRun:
        if context.profile is None:
            raise ValueError("PipelineRun.profile must be set before merging notes")
        merged = merge_notes(context.profile.notes, context.notes_input)
        self._profile_repo.update_notes(context.user_id, merged)
        context.merged_notes = merged
        Log.info(
            f"Merged notes: {len(merged) - len(context.profile.notes)} added, {len(merged)} total",
            user_id=context.user_id,
        )
        return context


class FetchArtifactStep(PipelineStep):
    stage = Stage.FETCHING_ARTIFACT

    def __init__(self, fetcher: ArtifactFetcher) -> None:
        self._fetcher = fetcher

    def run(self, context: PipelineRun) -> PipelineRun:
        if context.artifact is None:
            raise ValueError("PipelineRun.artifact must be set before fetching it back")
        context.fetched_bytes = self._fetcher.fetch(context.artifact.public_url)
        Log.info(f"Fetched {len(context.fetched_bytes)} bytes from {context.artifact.public_url}")
        return context

    def close(self) -> None:
        self._fetcher.close()


class ExtractTextStep(PipelineStep):
    stage = Stage.EXTRACTING

    def __init__(self, extractor: BaseTextExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineRun) -> PipelineRun:
        if context.artifact is None:
            raise ValueError("PipelineRun.artifact must be set before extraction")
        text = self._extractor.extract(context.fetched_bytes)
        context.extraction = ExtractionResult(
            user_id=context.user_id,
            artifact=context.artifact,
            text=text,
        )
        Log.info(f"Extracted {len(text)} chars from {context.artifact.path}")
        return context


class PersistReportStep(PipelineStep):
    stage = Stage.PERSISTING

    def __init__(self, report_repo: ReportRepository) -> None:
        self._report_repo = report_repo

    def run(self, context: PipelineRun) -> PipelineRun:
        if context.extraction is None:
            raise ValueError("PipelineRun.extraction must be set before persist")
        context.report_id = self._report_repo.insert(context.extraction)
        Log.info(f"Inserted report {context.report_id}", user_id=context.user_id)
        return context
