"""
Payload encoders for confidential contract arguments.

All helpers here fail with FormatError before any network call is made.
"""
import json
import logging
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN
from typing import Any, Optional, Union

from .exceptions import FormatError

logger = logging.getLogger(__name__)

XUS_SCALE = 1_000_000
_XUS_PATTERN = re.compile(r"(\d+(?:\.\d*)?) XUS")


def parse_xus_amount(text: str) -> int:
    """
    Parse an amount like ``"123.45 XUS"`` into integer minor units.

    Fractional minor units are truncated, never rounded up.

    Args:
        text: Amount followed by the XUS symbol

    Returns:
        Amount in minor units (1 XUS = 1,000,000)

    Raises:
        FormatError: If the text is not a valid XUS amount
    """
    match = _XUS_PATTERN.fullmatch(text.strip()) if isinstance(text, str) else None
    if not match:
        raise FormatError(f"Couldn't parse asset {text!r}")
    minor = Decimal(match.group(1)) * XUS_SCALE
    return int(minor.to_integral_value(rounding=ROUND_DOWN))


def normalize_hex(text: str) -> str:
    """Prefix a hex string with ``0x`` unless it already has it."""
    return text if text.startswith("0x") else "0x" + text


def parse_worker_key(text: str) -> str:
    """
    Validate a worker public key given in hex, with or without ``0x``.

    Returns:
        The key with a ``0x`` prefix

    Raises:
        FormatError: If the key is empty or not hex
    """
    key = normalize_hex(text.strip())
    try:
        raw = bytes.fromhex(key[2:])
    except ValueError as e:
        raise FormatError(f"Worker key is not hex: {text!r}") from e
    if not raw:
        raise FormatError("Worker key must not be empty")
    return key


def parse_address(text: str, keyring: Any) -> str:
    """Check that the input decodes as an address before it is sent to the chain."""
    text = text.strip()
    try:
        keyring.decode_address(text)
    except Exception as e:
        raise FormatError(f"Invalid address: {text!r}") from e
    return text


@dataclass(frozen=True)
class VerifyResult:
    """Outcome of verify_address_or_key"""
    ok: bool
    address: Optional[str] = None


def verify_address_or_key(text: str, keyring: Any) -> VerifyResult:
    """
    Check whether the input is an address or a key derivation URI.

    The input is first decoded as an address and re-encoded in the keyring's
    network format. If that fails it is treated as a SURI and the derived
    address is returned.

    Args:
        text: Raw user input
        keyring: Keyring collaborator (see pruntime_sdk.keyring.Keyring)

    Returns:
        VerifyResult with the normalized address, or ok=False
    """
    text = text.strip()
    try:
        return VerifyResult(ok=True, address=keyring.encode_address(keyring.decode_address(text)))
    except Exception as e:
        logger.debug(f"Input is not an address: {e}")
    try:
        return VerifyResult(ok=True, address=keyring.address_of(keyring.pair_from_uri(text)))
    except Exception as e:
        logger.debug(f"Input is not a key URI: {e}")
    return VerifyResult(ok=False)


def parse_contract_id(value: Union[int, str]) -> int:
    """Validate a confidential contract id (positive integer)."""
    if isinstance(value, bool):
        raise FormatError(f"Invalid contract id: {value!r}")
    try:
        contract_id = int(value)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Invalid contract id: {value!r}") from e
    if contract_id <= 0:
        raise FormatError(f"Contract id must be positive, got {contract_id}")
    return contract_id


def parse_seq_number(value: Union[int, str]) -> int:
    """Validate a VASP account sequence number (non-negative integer)."""
    try:
        seq = int(value)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Invalid sequence number: {value!r}") from e
    if seq < 0:
        raise FormatError(f"Sequence number must not be negative, got {seq}")
    return seq


def parse_json_argument(text: str) -> Any:
    """Parse a command line argument holding a JSON value."""
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Argument is not valid JSON: {text!r}") from e


def check_diem_destination(dest: str) -> str:
    """Validate a Diem withdrawal destination (bare hex, no ``0x``)."""
    dest = dest.strip()
    if not dest:
        raise FormatError("<dest> must not be empty")
    if dest.lower().startswith("0x"):
        raise FormatError('<dest> must not start with "0x"')
    return dest
