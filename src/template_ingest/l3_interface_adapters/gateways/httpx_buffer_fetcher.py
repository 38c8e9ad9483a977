"""Gateway: httpx-based buffer fetcher — implements BufferFetcher port."""

from __future__ import annotations

import base64
import binascii
import logging
from urllib.parse import unquote_to_bytes

import httpx

from template_ingest.l1_entities.config import MB
from template_ingest.l1_entities.errors import FetchError
from template_ingest.l1_entities.progress import FETCH_SHARE, ProgressCallback, ProgressStage, emit, fetch_progress

log = logging.getLogger('tingest.fetch')

DEFAULT_CHUNK_SIZE = 64 * 1024


def is_data_uri(reference: str) -> bool:
    return reference.startswith('data:')


def decode_data_uri(reference: str) -> bytes:
    """Decode a ``data:`` URI synchronously. Raises FetchError when malformed."""
    header, sep, payload = reference.partition(',')
    if not sep:
        raise FetchError('Malformed data URI: missing payload separator', cause='invalid data uri')
    try:
        if header.endswith(';base64'):
            return base64.b64decode(payload, validate=True)
        return unquote_to_bytes(payload)
    except (binascii.Error, ValueError) as e:
        raise FetchError(f'Malformed data URI: {e}', cause='invalid data uri') from e


class HttpxBufferFetcher:
    """Streams template bytes over HTTP, reporting progress on the fetch half of the range."""

    def __init__(
        self,
        base_url: str = '',
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._chunk_size = chunk_size
        self._timeout = timeout
        self._transport = transport

    async def fetch(self, reference: str, on_progress: ProgressCallback | None = None) -> bytes:
        if is_data_uri(reference):
            data = decode_data_uri(reference)
            log.debug('Data URI buffer size: %d bytes', len(data))
            return data

        log.info('Fetching %s', reference)
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            try:
                async with client.stream('GET', reference) as response:
                    return await self._read(response, on_progress)
            except FetchError:
                raise
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                log.error('Request for %s failed: %s', reference, e)
                raise FetchError(f'Failed to fetch file: {e}', cause=type(e).__name__) from e

    async def _read(self, response: httpx.Response, on_progress: ProgressCallback | None) -> bytes:
        log.debug('Response status: %d %s', response.status_code, response.reason_phrase)
        if not response.is_success:
            raise FetchError(
                f'Failed to fetch file: {response.status_code} {response.reason_phrase}',
                status=response.status_code,
                status_text=response.reason_phrase,
            )

        total = _content_length(response)
        if total is None:
            log.debug('No content-length header, reading whole body')
            data = await response.aread()
            emit(on_progress, ProgressStage.FETCHING, f'Downloaded {len(data) / MB:.1f}MB', FETCH_SHARE)
            return data

        chunks: list[bytes] = []
        loaded = 0
        try:
            async for chunk in response.aiter_bytes(self._chunk_size):
                chunks.append(chunk)
                loaded += len(chunk)
                emit(
                    on_progress,
                    ProgressStage.FETCHING,
                    f'Downloading... {loaded / MB:.1f}MB / {total / MB:.1f}MB',
                    fetch_progress(loaded, total),
                )
        except (httpx.HTTPError, httpx.StreamError) as e:
            log.error('Stream interrupted after %d bytes: %s', loaded, e)
            raise FetchError('Failed to download file: stream interrupted', cause='stream interrupted') from e

        data = b''.join(chunks)
        log.debug('Combined %d chunk(s) into %d bytes', len(chunks), len(data))
        return data


def _content_length(response: httpx.Response) -> int | None:
    raw = response.headers.get('content-length')
    if not raw:
        return None
    try:
        total = int(raw)
    except ValueError:
        return None
    return total if total > 0 else None
