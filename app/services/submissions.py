import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from ..errors import FileMetadataWriteError, FileTransferError, MetadataWriteError
from ..models.submission import Submission, SubmissionStatus
from ..models.uploaded_file import FileType, UploadedFile
from .intake import FieldValue
from .s3 import StorageService

logger = logging.getLogger(__name__)

# Form field name -> submissions column
FORM_FIELD_COLUMNS = {
    "email": "email",
    "orderNumber": "order_number",
    "fullName": "full_name",
    "vin": "vin",
    "make": "make",
    "model": "model",
    "year": "year",
    "color": "color",
}


@dataclass
class TransferOutcome:
    """Result of storing one file part: a row to insert, or the reason it failed."""

    field_name: str
    index: int
    record: Optional[UploadedFile] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def first_value(value: Optional[FieldValue]) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def build_submission(fields: Mapping[str, FieldValue]) -> Submission:
    """Normalize parsed form fields into a new pending submission. Nothing is validated."""
    values = {column: first_value(fields.get(name)) for name, column in FORM_FIELD_COLUMNS.items()}
    return Submission(
        id=str(uuid.uuid4()),
        created_at=datetime.now(timezone.utc).isoformat(),
        status=SubmissionStatus.PENDING,
        **values
    )


def _db_reason(e: SQLAlchemyError) -> str:
    return str(getattr(e, "orig", None) or e)


def save_submission(session: Session, submission: Submission) -> Submission:
    try:
        session.add(submission)
        session.commit()
        session.refresh(submission)
    except SQLAlchemyError as e:
        session.rollback()
        raise MetadataWriteError(_db_reason(e)) from e
    return submission


def file_extension(filename: Optional[str]) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1]


def build_storage_key(submission_id: str, field_name: str, index: int, filename: Optional[str]) -> str:
    key = f"{submission_id}/{field_name}_{index}"
    extension = file_extension(filename)
    return f"{key}.{extension}" if extension else key


def classify_file(field_name: str) -> FileType:
    return FileType.PHOTO if "photo" in field_name else FileType.DOCUMENT


def is_empty_part(upload: Optional[UploadFile]) -> bool:
    # Browsers send an unnamed, empty part for a file input left blank
    return upload is None or (not upload.filename and not upload.size)


async def transfer_file(
    storage: StorageService,
    submission_id: str,
    field_name: str,
    index: int,
    upload: UploadFile
) -> UploadedFile:
    key = build_storage_key(submission_id, field_name, index, upload.filename)
    try:
        await upload.seek(0)
        stored_key = await run_in_threadpool(storage.upload_file, upload.file, key, upload.content_type)
    except Exception as e:
        raise FileTransferError(field_name, index, str(e)) from e

    return UploadedFile(
        submission_id=submission_id,
        file_path=stored_key,
        file_type=classify_file(field_name),
        original_name=upload.filename,
        file_size=upload.size
    )


async def transfer_files(
    storage: StorageService,
    submission_id: str,
    files: Dict[str, List[UploadFile]]
) -> List[TransferOutcome]:
    """Store every file part in turn. A failed file is logged and skipped."""
    outcomes = []
    for field_name, uploads in files.items():
        for index, upload in enumerate(uploads, start=1):
            if is_empty_part(upload):
                continue
            try:
                record = await transfer_file(storage, submission_id, field_name, index, upload)
            except FileTransferError as e:
                logger.error("Upload error for submission %s: %s", submission_id, e.message)
                outcomes.append(TransferOutcome(field_name, index, error=e.reason))
                continue
            outcomes.append(TransferOutcome(field_name, index, record=record))
    return outcomes


def save_file_records(session: Session, records: List[UploadedFile]) -> None:
    if not records:
        return
    try:
        session.add_all(records)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise FileMetadataWriteError(f"Files table error: {_db_reason(e)}") from e
