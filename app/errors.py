class UploadError(Exception):
    """Base class for failures raised while handling an intake upload."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MethodNotAllowed(UploadError):
    status_code = 405

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message)


class IntakeError(UploadError):
    """The multipart body could not be parsed or broke an upload limit."""


class MetadataWriteError(UploadError):
    def __init__(self, reason: str):
        super().__init__(f"Database error: {reason}")


class FileTransferError(UploadError):
    """One file could not be stored. Recovered by skipping the file."""

    def __init__(self, field_name: str, index: int, reason: str):
        super().__init__(f"Failed to upload {field_name}_{index}: {reason}")
        self.field_name = field_name
        self.index = index
        self.reason = reason


class FileMetadataWriteError(UploadError):
    """The file rows could not be inserted. Logged only."""
