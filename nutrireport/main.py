"""
Submit a photographed nutrition report from the command line.

Usage:
    python -m nutrireport.main report.jpg --notes "peanuts, shellfish" --user-id <uid>
    python -m nutrireport.main report.png --access-token <supabase-jwt> --preview preview.png
"""

import argparse
from collections.abc import Sequence
from pathlib import Path

from supabase import create_client

from nutrireport.auth.base import BaseAuthProvider
from nutrireport.auth.providers import StaticAuthProvider, SupabaseAuthProvider
from nutrireport.config.settings import Settings
from nutrireport.database.connection import close_pool, init_pool
from nutrireport.ingestion.models import UploadCandidate
from nutrireport.ingestion.orchestrator import build_pipeline
from nutrireport.ingestion.pipeline import PipelineRun
from nutrireport.ingestion.preview import build_preview
from nutrireport.logging.logger import Log


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nutrireport",
        description="Upload a nutrition report image, merge notes and extract its text.",
    )
    parser.add_argument("image", type=Path, help="PNG or JPEG report image")
    parser.add_argument("--notes", default="", help="Comma-separated notes, e.g. allergies")
    identity = parser.add_mutually_exclusive_group(required=True)
    identity.add_argument("--user-id", help="Submit on behalf of this user id")
    identity.add_argument("--access-token", help="Supabase session access token")
    parser.add_argument("--content-type", help="Override the declared MIME type")
    parser.add_argument("--preview", type=Path, help="Write a PNG preview of the image here")
    return parser


def build_auth_provider(args: argparse.Namespace, settings: Settings) -> BaseAuthProvider:
    if args.access_token:
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError("supabase_url and supabase_key are required for --access-token")
        client = create_client(settings.supabase_url, settings.supabase_key)
        return SupabaseAuthProvider(client, args.access_token)
    return StaticAuthProvider(args.user_id)


class StatusPrinter:
    """Prints progress text whenever it changes during a run."""

    def __init__(self) -> None:
        self._last = ""

    def __call__(self, run: PipelineRun) -> None:
        if run.is_terminal or run.message == self._last:
            return
        self._last = run.message
        print(run.message)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse args -> initialize pool -> run one upload."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    if not args.image.is_file():
        print(f"Error: file not found: {args.image}")
        return 1
    candidate = UploadCandidate.from_path(args.image, mime_type=args.content_type)

    if args.preview:
        try:
            args.preview.write_bytes(build_preview(candidate))
        except ValueError as exc:
            Log.warning(f"Preview skipped: {exc}")

    try:
        auth = build_auth_provider(args, settings)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1

    init_pool(settings)
    try:
        pipeline = build_pipeline(settings)
        try:
            run = pipeline.submit(candidate, args.notes, auth, listeners=[StatusPrinter()])
        finally:
            pipeline.close()
    finally:
        close_pool()

    print(run.message)
    return 0 if run.succeeded else 1


if __name__ == "__main__":
    raise SystemExit(main())
