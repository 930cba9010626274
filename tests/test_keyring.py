"""
Tests for the sr25519 keyring adapter.
"""
import pytest
from scalecodec.utils.ss58 import ss58_decode, ss58_encode

from pruntime_sdk.encoding import verify_address_or_key
from pruntime_sdk.keyring import SubstrateKeyring
from tests.test_helpers import ALICE_PUBLIC_KEY

# Alice in the generic substrate format (42)
ALICE_GENERIC_ADDRESS = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"


@pytest.fixture
def keyring():
    return SubstrateKeyring()


def test_pair_from_uri(keyring):
    pair = keyring.pair_from_uri("//Alice")
    assert pair.public_key.hex() == ALICE_PUBLIC_KEY
    assert keyring.address_of(pair) == ss58_encode(ALICE_PUBLIC_KEY, ss58_format=30)


def test_pair_from_uri_invalid(keyring):
    with pytest.raises(Exception):
        keyring.pair_from_uri("not-a-key-or-address")


def test_reencodes_other_network_address(keyring):
    public_key = keyring.decode_address(ALICE_GENERIC_ADDRESS)
    assert public_key.hex() == ALICE_PUBLIC_KEY

    address = keyring.encode_address(public_key)
    assert ss58_decode(address, valid_ss58_format=30) == ALICE_PUBLIC_KEY


def test_decode_hex_public_key(keyring):
    assert keyring.decode_address("0x" + ALICE_PUBLIC_KEY) == bytes.fromhex(ALICE_PUBLIC_KEY)


def test_verify_with_real_keyring(keyring):
    expected = ss58_encode(ALICE_PUBLIC_KEY, ss58_format=30)
    assert verify_address_or_key("//Alice", keyring).address == expected
    assert verify_address_or_key(ALICE_GENERIC_ADDRESS, keyring).address == expected
    assert verify_address_or_key("not-a-key-or-address", keyring).ok is False


def test_verify_hex_public_key_with_real_keyring(keyring):
    expected = ss58_encode(ALICE_PUBLIC_KEY, ss58_format=30)
    assert verify_address_or_key("0x" + ALICE_PUBLIC_KEY, keyring).address == expected
