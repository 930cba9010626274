"""
Data models for the pRuntime SDK.
"""
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

NONCE_LIMIT = 65536


class Nonce(BaseModel):
    """Client-side request identifier, never validated by the enclave"""
    id: int = Field(..., ge=0, lt=NONCE_LIMIT)


class RequestEnvelope(BaseModel):
    """Body posted to every pRuntime endpoint"""
    input: Any
    nonce: Nonce


class ResponseEnvelope(BaseModel):
    """Body returned by every pRuntime endpoint"""
    model_config = ConfigDict(extra="allow")

    status: str
    payload: Any = None

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"


class PlainPayload(BaseModel):
    """Unencrypted payload variant, the inner value is a JSON string"""
    model_config = ConfigDict(populate_by_name=True)

    plain: str = Field(..., alias="Plain")


class AeadCipher(BaseModel):
    """Hex-encoded AEAD cipher record of an encrypted payload"""
    iv: str
    cipher: str
    pubkey: str


class EncryptedPayload(BaseModel):
    """Encrypted payload variant, accepted on the wire but not produced here"""
    model_config = ConfigDict(populate_by_name=True)

    encrypted: AeadCipher = Field(..., alias="Encrypted")


WrappedPayload = Union[PlainPayload, EncryptedPayload]


class QueryBody(BaseModel):
    """Contract query carried inside a Plain payload"""
    contract_id: int = Field(..., gt=0)
    nonce: int = Field(..., ge=0, lt=NONCE_LIMIT)
    request: Any


class TxReceipt(BaseModel):
    """Receipt of a command accepted by the submission endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    extrinsic_hash: str = Field(..., alias="extrinsicHash")
    block_hash: Optional[str] = Field(None, alias="blockHash")
    contract_id: Optional[int] = Field(None, alias="contractId")
    accepted: bool = True

    def to_human(self) -> Dict[str, Any]:
        """Return the receipt as a JSON-friendly dictionary"""
        return self.model_dump(by_alias=True, exclude_none=True)
