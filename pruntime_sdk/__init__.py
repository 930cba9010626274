"""
pRuntime SDK - client-side protocol for confidential contracts.
"""
from .chain import SubstrateChain
from .client import PRuntimeClient
from .commands import CommandState, CommandSubmission, CommandSubmitter
from .config import EndpointConfig
from .dispatch import EXIT_FAILURE, EXIT_OK, Outcome, dispatch
from .encoding import normalize_hex, parse_address, parse_worker_key, parse_xus_amount, verify_address_or_key
from .envelope import decode_envelope, encode_envelope, generate_nonce, unwrap_payload, wrap_plain
from .exceptions import EnvelopeError, FormatError, PRuntimeError, SubmitError, TransportError
from .keyring import SubstrateKeyring
from .models import TxReceipt
from .operations import ConsoleOperations
from .pdiem import CONTRACT_PDIEM, PDiemContract
from .version import __version__

__all__ = [
    "PRuntimeClient",
    "SubstrateChain",
    "SubstrateKeyring",
    "CommandState",
    "CommandSubmission",
    "CommandSubmitter",
    "EndpointConfig",
    "EXIT_FAILURE",
    "EXIT_OK",
    "Outcome",
    "dispatch",
    "normalize_hex",
    "parse_address",
    "parse_worker_key",
    "parse_xus_amount",
    "verify_address_or_key",
    "decode_envelope",
    "encode_envelope",
    "generate_nonce",
    "unwrap_payload",
    "wrap_plain",
    "EnvelopeError",
    "FormatError",
    "PRuntimeError",
    "SubmitError",
    "TransportError",
    "TxReceipt",
    "ConsoleOperations",
    "CONTRACT_PDIEM",
    "PDiemContract",
    "__version__",
]
