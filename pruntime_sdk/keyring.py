"""
Key management for signing confidential contract commands.
"""
from typing import Any, Protocol, Union

from scalecodec.utils.ss58 import ss58_decode, ss58_encode
from substrateinterface import Keypair, KeypairType

from .config import DEFAULT_SS58_FORMAT


class Keyring(Protocol):
    """Protocol for key-management collaborators"""

    def pair_from_uri(self, suri: str) -> Any:
        """Derive a signing key pair from a SURI or raw seed"""
        ...

    def decode_address(self, text: str) -> bytes:
        """Decode an address into its public key bytes"""
        ...

    def encode_address(self, public_key: Union[bytes, str]) -> str:
        """Encode a public key as an address of this network"""
        ...

    def address_of(self, pair: Any) -> str:
        """Return the address of a derived key pair"""
        ...


class SubstrateKeyring:
    """sr25519 keyring backed by substrate-interface"""

    def __init__(self, ss58_format: int = DEFAULT_SS58_FORMAT):
        self.ss58_format = ss58_format
        self.crypto_type = KeypairType.SR25519

    def pair_from_uri(self, suri: str) -> Keypair:
        return Keypair.create_from_uri(suri, ss58_format=self.ss58_format, crypto_type=self.crypto_type)

    def decode_address(self, text: str) -> bytes:
        if text.startswith("0x"):
            return bytes.fromhex(text[2:])
        return bytes.fromhex(ss58_decode(text))

    def encode_address(self, public_key: Union[bytes, str]) -> str:
        return ss58_encode(public_key, ss58_format=self.ss58_format)

    def address_of(self, pair: Keypair) -> str:
        return pair.ss58_address
