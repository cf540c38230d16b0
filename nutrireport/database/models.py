from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class UserProfile:
    """Represents a row from the user_profiles table."""

    user_id: str
    notes: list[str] = field(default_factory=list)


@dataclass
class ReportRecord:
    """Represents a row from the reports table."""

    id: int
    user_id: str
    extracted_text: str
    artifact_path: str | None = None
    created_at: datetime | None = None
