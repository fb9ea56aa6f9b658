from sqlalchemy import Text
from sqlmodel import SQLModel, Field
from typing import Optional
from enum import Enum

class FileType(str, Enum):
    PHOTO = "photo"
    DOCUMENT = "document"

class UploadedFileBase(SQLModel):
    submission_id: str = Field(foreign_key="submissions.id", index=True, max_length=36)
    file_path: str = Field(sa_type=Text)
    file_type: FileType
    original_name: Optional[str] = Field(default=None, sa_type=Text)
    file_size: Optional[int] = None

class UploadedFile(UploadedFileBase, table=True):
    __tablename__ = "uploaded_files"

    file_id: Optional[int] = Field(default=None, primary_key=True)
