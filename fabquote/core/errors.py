class PipelineError(Exception):
    """Base error for the upload pipeline; carries its HTTP mapping."""

    status_code: int = 500
    error: str = "Internal server error"
    public_message: str | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def client_message(self) -> str:
        return self.public_message or self.message


class UploadRejected(PipelineError):
    """Malformed batch or policy violation; deterministic, never retried."""

    status_code = 400
    error = "Bad request"


class StorageConfigurationError(PipelineError):
    """Storage backend is not configured (e.g. no bucket)."""

    public_message = "Upload storage is not configured"


class CredentialIssueError(PipelineError):
    """The signer failed to produce an upload URL."""

    public_message = "Failed to generate upload URL"


class UploadFailedError(Exception):
    """A file transfer exhausted its retries; the whole batch is abandoned."""

    def __init__(self, file_name: str, retries: int, last_error: Exception):
        super().__init__(f"Failed to upload {file_name} after {retries} retries: {last_error}")
        self.file_name = file_name
        self.retries = retries
        self.last_error = last_error


class UploadRequestError(Exception):
    """The upload request service was unreachable or answered with a non-success response."""

    def __init__(self, status_code: int | None, message: str):
        if status_code is None:
            super().__init__(f"Upload request failed: {message}")
        else:
            super().__init__(f"Upload request failed with status {status_code}: {message}")
        self.status_code = status_code
        self.message = message
