"""
Envelope codec for the pRuntime HTTP interface.

Every request is posted as ``{"input": <payload>, "nonce": {"id": <int>}}`` and
every response comes back as ``{"status": "ok" | <other>, "payload": <str>}``.
Contract payloads travel one level deeper, tagged as ``{"Plain": <json str>}``
so an ``Encrypted`` variant can replace them without changing the call shape.
"""
import json
import logging
import random
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .exceptions import EnvelopeError
from .models import (
    NONCE_LIMIT,
    EncryptedPayload,
    Nonce,
    PlainPayload,
    RequestEnvelope,
    ResponseEnvelope,
)

logger = logging.getLogger(__name__)


def dumps(value: Any) -> str:
    """Serialize to JSON the way the enclave expects it (no whitespace)."""
    return json.dumps(value, separators=(",", ":"))


def generate_nonce() -> int:
    """
    Draw a request nonce uniformly from [0, 65536).

    Nonces only correlate requests in logs; duplicates are acceptable.
    """
    return random.randrange(NONCE_LIMIT)


def encode_envelope(payload: Any, nonce: Optional[int] = None) -> Dict[str, Any]:
    """
    Wrap a JSON-serializable payload into a request envelope.

    Args:
        payload: Contract or method specific input
        nonce: Explicit nonce id, a fresh one is drawn when omitted

    Returns:
        Dictionary ready to be posted as JSON
    """
    if nonce is None:
        nonce = generate_nonce()
    envelope = RequestEnvelope(input=payload, nonce=Nonce(id=nonce))
    return envelope.model_dump()


def decode_envelope(body: Any) -> Any:
    """
    Unwrap a response envelope.

    Args:
        body: Parsed JSON response body

    Returns:
        The JSON-decoded ``payload`` of an ok response

    Raises:
        EnvelopeError: If the status is not ok or the payload is not valid JSON
    """
    if not isinstance(body, dict):
        raise EnvelopeError(f"Got malformed response: {body!r}", response=body)

    try:
        response = ResponseEnvelope.model_validate(body)
    except ValidationError as e:
        raise EnvelopeError(f"Got malformed response: {body!r}", response=body) from e

    if not response.is_ok:
        raise EnvelopeError(f"Got error response: {body!r}", response=body)

    if not isinstance(response.payload, (str, bytes, bytearray)):
        raise EnvelopeError(f"Response payload is not a JSON string: {body!r}", response=body)
    try:
        return json.loads(response.payload)
    except ValueError as e:
        raise EnvelopeError(f"Response payload is not valid JSON: {e}", response=body) from e


def wrap_plain(value: Any) -> str:
    """Encode a value as the JSON text of a ``Plain`` payload."""
    wrapped = PlainPayload(plain=dumps(value))
    return dumps(wrapped.model_dump(by_alias=True))


def unwrap_payload(wrapped: Any) -> Any:
    """
    Decode a tagged payload back into the value it carries.

    Args:
        wrapped: Tagged payload as a dictionary or as its JSON text

    Returns:
        The decoded content of a ``Plain`` payload

    Raises:
        EnvelopeError: For encrypted, unknown or undecodable payloads
    """
    if isinstance(wrapped, str):
        try:
            wrapped = json.loads(wrapped)
        except ValueError as e:
            raise EnvelopeError(f"Payload is not valid JSON: {e}", response=wrapped) from e

    if not isinstance(wrapped, dict):
        raise EnvelopeError(f"Unexpected payload shape: {wrapped!r}", response=wrapped)

    if "Encrypted" in wrapped:
        try:
            EncryptedPayload.model_validate(wrapped)
        except ValidationError as e:
            raise EnvelopeError("Malformed encrypted payload", response=wrapped) from e
        raise EnvelopeError("Encrypted payloads are not supported", response=wrapped)

    try:
        plain = PlainPayload.model_validate(wrapped)
    except ValidationError as e:
        raise EnvelopeError(f"Unexpected payload shape: {wrapped!r}", response=wrapped) from e

    try:
        return json.loads(plain.plain)
    except ValueError as e:
        raise EnvelopeError(f"Plain payload is not valid JSON: {e}", response=wrapped) from e
