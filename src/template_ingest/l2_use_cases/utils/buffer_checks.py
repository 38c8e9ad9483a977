"""Pure helpers for buffer validation and user-facing error wording."""

from __future__ import annotations

import logging

from template_ingest.l1_entities.config import MB
from template_ingest.l1_entities.errors import CorruptBufferError

log = logging.getLogger('tingest.parse')

FRIENDLY_MESSAGES = (
    ('memory', 'File too large. Please try a smaller file.'),
    ('timeout', 'Loading timeout. The file may be too complex.'),
)


def size_mb(data: bytes) -> float:
    return len(data) / MB


def read_signature(data: bytes) -> str:
    return data[:4].decode('latin-1')


def validate_buffer(data: bytes, min_bytes: int, signature: str) -> None:
    """Reject buffers below *min_bytes*. A signature mismatch is only logged.

    Raises CorruptBufferError.
    """
    if len(data) < min_bytes:
        raise CorruptBufferError(f'File appears to be corrupted or too small: {len(data)} bytes')
    found = read_signature(data)
    if found != signature:
        log.warning(
            'Unexpected file signature %r (hex: %s), expected %r; attempting import anyway',
            found,
            data[:4].hex(' '),
            signature,
        )


def friendly_error(message: str) -> str:
    """Rewrite known failure causes into plain language; pass others through."""
    lowered = message.lower()
    for needle, friendly in FRIENDLY_MESSAGES:
        if needle in lowered:
            return friendly
    return message
