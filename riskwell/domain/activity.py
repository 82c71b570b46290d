"""
Activity event model for Riskwell.

Operations on profiles, policies and claims can be recorded as
`ActivityEvent`s for the caller's audit log.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from riskwell.domain.enums import ActivityKind


class ActivityEvent(BaseModel):
    """One auditable event."""

    kind: ActivityKind
    actor: str
    entity_id: str
    entity_number: Optional[str] = None
    occurred_at: datetime
    details: dict[str, Any] = Field(default_factory=dict)
