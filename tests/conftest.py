"""
Pytest fixtures for the pRuntime SDK tests.
"""
from unittest.mock import MagicMock

import pytest

from pruntime_sdk.models import TxReceipt
from tests.test_helpers import ALICE_ADDRESS, ALICE_PUBLIC_KEY, create_test_client

TEST_EXTRINSIC_HASH = "0x" + "ab" * 32


@pytest.fixture
def pruntime_client():
    return create_test_client()


@pytest.fixture
def mock_keyring():
    """
    Keyring collaborator knowing a single account.

    ``//Alice`` derives a key pair and ALICE_ADDRESS decodes to Alice's
    public key; every other input raises like the real keyring does.
    """
    keyring = MagicMock()
    alice_pair = MagicMock(name="alice_pair")
    alice_pair.ss58_address = ALICE_ADDRESS

    def _pair_from_uri(suri):
        if suri == "//Alice":
            return alice_pair
        raise ValueError("Invalid SURI")

    def _decode_address(text):
        if text == ALICE_ADDRESS:
            return bytes.fromhex(ALICE_PUBLIC_KEY)
        raise ValueError("Invalid checksum")

    def _encode_address(public_key):
        if public_key == bytes.fromhex(ALICE_PUBLIC_KEY):
            return ALICE_ADDRESS
        raise ValueError("Invalid length for address")

    keyring.pair_from_uri.side_effect = _pair_from_uri
    keyring.decode_address.side_effect = _decode_address
    keyring.encode_address.side_effect = _encode_address
    keyring.address_of.side_effect = lambda pair: pair.ss58_address
    keyring.alice_pair = alice_pair
    return keyring


@pytest.fixture
def mock_chain():
    """Chain collaborator that accepts every extrinsic"""
    chain = MagicMock()
    chain.create_push_command.return_value = MagicMock(name="signed_extrinsic")
    chain.submit_extrinsic.return_value = TxReceipt(extrinsic_hash=TEST_EXTRINSIC_HASH)
    return chain
