"""
Task Message Codec - JSON <-> TaskMessage.

Pure transform, no I/O. The dispatcher decides what a ParseError means
(text fallback); the codec only reports it.

Decode outcomes:
    TaskMessage  - payload is a JSON object with a non-empty TaskId
    None         - payload is the JSON literal null (nothing to do)
    ParseError   - anything else: not UTF-8, not JSON, not an object,
                   missing TaskId, wrongly typed fields

Exports:
    TaskMessageCodec: encode/decode entry points
"""

import json
from typing import Optional, Union

from pydantic import ValidationError

from .queue import TaskMessage
from exceptions import ContractViolationError, ParseError

Payload = Union[bytes, bytearray, memoryview, str]

_PREVIEW_CHARS = 200


class TaskMessageCodec:
    """JSON codec for TaskMessage using the PascalCase wire keys."""

    ENCODING = "utf-8"
    # Decoding also drops a leading byte order mark
    DECODE_ENCODING = "utf-8-sig"

    @classmethod
    def encode(cls, message: TaskMessage) -> bytes:
        """Serialize to UTF-8 JSON bytes with wire key names."""
        if not isinstance(message, TaskMessage):
            raise ContractViolationError(
                f"encode() expects TaskMessage, got {type(message).__name__}"
            )
        return message.model_dump_json(by_alias=True).encode(cls.ENCODING)

    @classmethod
    def decode(cls, payload: Payload) -> Optional[TaskMessage]:
        """
        Parse a queue payload into a TaskMessage.

        Args:
            payload: Raw message body (bytes or already-decoded text)

        Returns:
            TaskMessage, or None for a JSON null payload

        Raises:
            ParseError: Payload is not a structurally valid task descriptor
            ContractViolationError: Payload is not bytes/str at all
        """
        text = cls.to_text(payload)

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Payload is not valid JSON: {e.msg}", text[:_PREVIEW_CHARS]) from e

        if data is None:
            return None

        if not isinstance(data, dict):
            raise ParseError(
                f"Payload is JSON {type(data).__name__}, expected an object",
                text[:_PREVIEW_CHARS]
            )

        try:
            return TaskMessage.model_validate(data)
        except ValidationError as e:
            fields = sorted({str(err['loc'][0]) for err in e.errors() if err.get('loc')})
            raise ParseError(
                f"Payload is not a task descriptor (invalid fields: {', '.join(fields) or 'unknown'})",
                text[:_PREVIEW_CHARS]
            ) from e

    @classmethod
    def to_text(cls, payload: Payload) -> str:
        """Strict UTF-8 view of the payload (BOM removed). Raises ParseError on bad bytes."""
        if isinstance(payload, str):
            return payload.removeprefix("\ufeff")
        if isinstance(payload, (bytes, bytearray, memoryview)):
            try:
                return bytes(payload).decode(cls.DECODE_ENCODING)
            except UnicodeDecodeError as e:
                raise ParseError(f"Payload is not valid {cls.ENCODING}: {e.reason}") from e
        raise ContractViolationError(
            f"Payload must be bytes or str, got {type(payload).__name__}"
        )

    @classmethod
    def to_lenient_text(cls, payload: Payload) -> str:
        """Best-effort text for the fallback path (never raises on bad bytes)."""
        if isinstance(payload, str):
            return payload
        return bytes(payload).decode(cls.DECODE_ENCODING, errors="replace")
