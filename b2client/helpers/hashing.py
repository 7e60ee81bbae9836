"""
SHA1 helpers for upload payloads.

B2 requires the hex SHA1 of the body in ``X-Bz-Content-Sha1`` before the body
is sent, so streams are hashed up front and rewound for every attempt.
"""

import hashlib
import io
from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

HASH_BUFFER_SIZE = 64 * 1024

PayloadSource = Union[bytes, bytearray, memoryview, BinaryIO]


@dataclass(frozen=True)
class PreparedPayload:
    """A payload whose length and SHA1 are known and which can be sent more than once."""

    sha1: str
    length: int
    data: Optional[bytes] = None
    stream: Optional[BinaryIO] = None
    offset: int = 0

    def body(self) -> Union[bytes, BinaryIO]:
        """Return a body positioned at the start of the payload."""
        if self.stream is None:
            return self.data
        self.stream.seek(self.offset)
        return self.stream


def sha1_hex(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def _is_seekable(stream) -> bool:
    try:
        return stream.seekable()
    except (AttributeError, ValueError, io.UnsupportedOperation):
        return False


def prepare_payload(source: PayloadSource) -> PreparedPayload:
    """
    Compute the SHA1 and length of an upload payload.

    Args:
        source: Bytes-like data or a binary file object

    Returns:
        PreparedPayload ready to be sent

    Raises:
        TypeError: If source is neither bytes-like nor readable
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        return PreparedPayload(sha1=sha1_hex(data), length=len(data), data=data)

    if not hasattr(source, "read"):
        raise TypeError(f"Upload data must be bytes or a binary file object, not {type(source).__name__}")

    if not _is_seekable(source):
        data = source.read()
        return PreparedPayload(sha1=sha1_hex(data), length=len(data), data=data)

    offset = source.tell()
    digest = hashlib.sha1()
    length = 0
    while True:
        chunk = source.read(HASH_BUFFER_SIZE)
        if not chunk:
            break
        digest.update(chunk)
        length += len(chunk)
    source.seek(offset)
    return PreparedPayload(sha1=digest.hexdigest(), length=length, stream=source, offset=offset)
