from .client_creator import (
    ALICE_ADDRESS,
    ALICE_PUBLIC_KEY,
    TEST_CHAIN_URL,
    TEST_PRUNTIME_URL,
    create_test_client,
    create_test_operations,
    error_envelope,
    ok_envelope,
    plain_envelope,
)

__all__ = [
    "ALICE_ADDRESS",
    "ALICE_PUBLIC_KEY",
    "TEST_CHAIN_URL",
    "TEST_PRUNTIME_URL",
    "create_test_client",
    "create_test_operations",
    "error_envelope",
    "ok_envelope",
    "plain_envelope",
]
