"""
Shared model base and enumerations
"""
from datetime import datetime, timezone
from typing import Literal
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


Gender = Literal["male", "female", "other"]
Category = Literal["general", "obc", "sc", "st"]
ApprovalLevel = Literal["facility", "hospital", "district", "state"]
UserRole = Literal["facility", "hospital", "district", "state", "super"]
ApprovalStatus = Literal["pending", "approved", "rejected"]

APPROVAL_LEVELS = ("facility", "hospital", "district", "state")


def get_current_utc_time():
    """Get current UTC time for default values"""
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire and in storage"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_document(self) -> dict:
        """Serialize for persistence"""
        return self.model_dump(mode="json", by_alias=True)
