"""DTOs for universities (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UniversityResult:
    """University read-model."""

    id: str
    name: str
    location: str | None
    contact_email: str | None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
