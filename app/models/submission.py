from sqlalchemy import Text
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone
from enum import Enum
import uuid

class SubmissionStatus(str, Enum):
    PENDING = "pending"

# Unbounded free text from the intake form
class SubmissionBase(SQLModel):
    email: Optional[str] = Field(default=None, sa_type=Text)
    order_number: Optional[str] = Field(default=None, sa_type=Text)
    full_name: Optional[str] = Field(default=None, sa_type=Text)
    vin: Optional[str] = Field(default=None, sa_type=Text)
    make: Optional[str] = Field(default=None, sa_type=Text)
    model: Optional[str] = Field(default=None, sa_type=Text)
    year: Optional[str] = Field(default=None, sa_type=Text)
    color: Optional[str] = Field(default=None, sa_type=Text)

class Submission(SubmissionBase, table=True):
    __tablename__ = "submissions"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True, max_length=36)
    created_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat(), max_length=40)
    status: SubmissionStatus = Field(default=SubmissionStatus.PENDING)
