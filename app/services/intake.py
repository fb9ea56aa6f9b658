from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, List, Union

from fastapi import Request
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from ..config import MAX_FILES, MAX_FILE_SIZE
from ..errors import IntakeError

# A text field arrives once (str) or repeated (list of str)
FieldValue = Union[str, List[str]]


@dataclass
class ParsedUpload:
    fields: Dict[str, FieldValue] = field(default_factory=dict)
    files: Dict[str, List[UploadFile]] = field(default_factory=dict)


def _file_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    upload.file.seek(0, 2)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


def split_form(form: FormData, max_file_size: int = MAX_FILE_SIZE) -> ParsedUpload:
    """Separate text fields from file parts, enforcing the per-file size limit."""
    parsed = ParsedUpload()
    for name, value in form.multi_items():
        if isinstance(value, UploadFile):
            size = _file_size(value)
            if size > max_file_size:
                raise IntakeError(
                    f"File {value.filename or name} exceeds the maximum size of {max_file_size} bytes"
                )
            parsed.files.setdefault(name, []).append(value)
        elif name not in parsed.fields:
            parsed.fields[name] = value
        else:
            existing = parsed.fields[name]
            if isinstance(existing, list):
                existing.append(value)
            else:
                parsed.fields[name] = [existing, value]
    return parsed


@asynccontextmanager
async def read_upload_form(request: Request, max_files: int = MAX_FILES) -> AsyncIterator[ParsedUpload]:
    """Parse the multipart body and release the parser's temp files on exit."""
    try:
        form = await request.form(max_files=max_files)
    except HTTPException as e:
        # Starlette reports multipart errors as a 400 inside an app
        raise IntakeError(str(e.detail)) from e
    except MultiPartException as e:
        raise IntakeError(e.message) from e

    try:
        yield split_form(form)
    finally:
        await form.close()
