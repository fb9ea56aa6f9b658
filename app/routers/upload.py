import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlmodel import Session

from ..database import get_session
from ..errors import FileMetadataWriteError, MethodNotAllowed, UploadError
from ..services.intake import read_upload_form
from ..services.s3 import StorageService, get_storage
from ..services.submissions import build_submission, save_file_records, save_submission, transfer_files

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Upload"]
)

SUCCESS_MESSAGE = "Upload successful! You will receive an email confirmation shortly."
FALLBACK_ERROR_MESSAGE = "Upload failed. Please try again."


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={**extra, "message": message})


NOT_ALLOWED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]


@router.api_route("/upload", methods=NOT_ALLOWED_METHODS, include_in_schema=False)
async def upload_method_not_allowed():
    error = MethodNotAllowed()
    return error_response(error.status_code, error.message)


@router.post("/upload")
async def upload_submission(
    request: Request,
    session: Session = Depends(get_session),
    storage: StorageService = Depends(get_storage)
):
    try:
        async with read_upload_form(request) as upload:
            submission = save_submission(session, build_submission(upload.fields))
            submission_id = submission.id

            outcomes = await transfer_files(storage, submission_id, upload.files)
            records = [outcome.record for outcome in outcomes if outcome.ok]

            try:
                save_file_records(session, records)
            except FileMetadataWriteError as e:
                logger.error("Submission %s: %s", submission_id, e.message)

        failed = len(outcomes) - len(records)
        logger.info(
            "Submission %s stored with %d file(s), %d failed",
            submission_id, len(records), failed
        )
        return {
            "success": True,
            "submissionId": submission_id,
            "message": SUCCESS_MESSAGE
        }

    except UploadError as e:
        logger.exception("Upload error: %s", e.message)
        return error_response(e.status_code, e.message, success=False)
    except Exception as e:
        logger.exception("Unexpected upload error")
        return error_response(500, str(e) or FALLBACK_ERROR_MESSAGE, success=False)
