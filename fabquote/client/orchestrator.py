"""Direct-to-storage transfer of a quote's files using presigned credentials.

Files go one at a time, in order. Each transfer is retried with exponential
backoff; a file that exhausts its retries aborts the batch and later files are
never attempted. Objects already written before the failure are left in place.
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence

import httpx
import structlog

from fabquote.client.files import LocalFile
from fabquote.core.config import get_settings
from fabquote.core.errors import UploadFailedError
from fabquote.models.upload import UploadCredential

logger = structlog.get_logger()

ProgressCallback = Callable[[int, int], None]
Sleep = Callable[[float], Awaitable[None]]

DEFAULT_MAX_RETRIES = 3
BASE_RETRY_DELAY_SECONDS = 1.0
MAX_RETRY_DELAY_SECONDS = 5.0
PROGRESS_CHUNK_SIZE = 64 * 1024


def backoff_delay(retry: int) -> float:
    """Seconds to wait before the given retry (1-based)."""
    return min(BASE_RETRY_DELAY_SECONDS * 2 ** (retry - 1), MAX_RETRY_DELAY_SECONDS)


class TransferError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UploadOrchestrator:
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        sleep: Sleep = asyncio.sleep,
        chunk_size: int = PROGRESS_CHUNK_SIZE,
        timeout: float | None = None,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self._client = client
        self.max_retries = max_retries
        self._sleep = sleep
        self.chunk_size = chunk_size
        self.timeout = timeout if timeout is not None else get_settings().upload_http_timeout_seconds

    async def upload_files(
        self,
        files: Sequence[LocalFile],
        credentials: Sequence[UploadCredential],
        on_progress: ProgressCallback | None = None,
    ) -> list[str]:
        if len(files) != len(credentials):
            raise ValueError(f"Got {len(files)} files but {len(credentials)} credentials")
        if self._client is not None:
            return await self._upload_all(self._client, files, credentials, on_progress)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._upload_all(client, files, credentials, on_progress)

    async def _upload_all(
        self,
        client: httpx.AsyncClient,
        files: Sequence[LocalFile],
        credentials: Sequence[UploadCredential],
        on_progress: ProgressCallback | None,
    ) -> list[str]:
        keys: list[str] = []
        for index, (file, credential) in enumerate(zip(files, credentials)):
            await self.upload_with_retry(client, index, file, credential, on_progress)
            keys.append(credential.storage_key)
        logger.info("upload_batch_completed", files=len(keys))
        return keys

    async def upload_with_retry(
        self,
        client: httpx.AsyncClient,
        index: int,
        file: LocalFile,
        credential: UploadCredential,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        last_error: TransferError | None = None
        for attempt in range(self.max_retries + 1):
            if attempt:
                delay = backoff_delay(attempt)
                logger.warning(
                    "upload_retry",
                    file_name=file.name,
                    retry=attempt,
                    delay_seconds=delay,
                    error=str(last_error),
                )
                await self._sleep(delay)
            try:
                await self.transfer(client, index, file, credential, on_progress)
                return
            except TransferError as exc:
                last_error = exc

        logger.error("upload_failed", file_name=file.name, retries=self.max_retries, error=str(last_error))
        raise UploadFailedError(file.name, self.max_retries, last_error)

    async def transfer(
        self,
        client: httpx.AsyncClient,
        index: int,
        file: LocalFile,
        credential: UploadCredential,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        """Single PUT attempt; raises TransferError on network failure or non-2xx."""
        last_reported = -1

        def report(percent: int) -> None:
            nonlocal last_reported
            if on_progress and percent != last_reported:
                last_reported = percent
                on_progress(index, percent)

        headers = dict(credential.headers)
        headers["Content-Type"] = credential.content_type or file.content_type
        headers["Content-Length"] = str(file.size)
        try:
            response = await client.put(
                credential.upload_url,
                content=self._stream(file.data, report),
                headers=headers,
            )
        except httpx.TransportError as exc:
            raise TransferError(f"Network error during upload: {exc}") from exc

        if not response.is_success:
            raise TransferError(f"Upload failed with status {response.status_code}", response.status_code)
        report(100)

    async def _stream(self, data: bytes, report: Callable[[int], None]) -> AsyncIterator[bytes]:
        total = len(data)
        sent = 0
        for start in range(0, total, self.chunk_size):
            chunk = data[start : start + self.chunk_size]
            yield chunk
            sent += len(chunk)
            report(round(sent * 100 / total))
