"""
Tests for the CommandSubmitter class.
"""
import json

import pytest

from pruntime_sdk.commands import CommandState, CommandSubmission, CommandSubmitter
from pruntime_sdk.exceptions import FormatError, SubmitError, TransportError
from tests.conftest import TEST_EXTRINSIC_HASH


def test_submit_command_success(mock_chain, mock_keyring):
    """Test the command is Plain-wrapped, signed and submitted"""
    submitter = CommandSubmitter(mock_chain, mock_keyring)
    receipt = submitter.submit_command(5, {"NewAccount": {"seq_number": 3}}, "//Alice")

    assert receipt.extrinsic_hash == TEST_EXTRINSIC_HASH
    assert receipt.contract_id == 5
    assert receipt.accepted is True

    contract_id, payload, keypair = mock_chain.create_push_command.call_args.args
    assert contract_id == 5
    assert json.loads(json.loads(payload)["Plain"]) == {"NewAccount": {"seq_number": 3}}
    assert keypair is mock_keyring.alice_pair
    mock_chain.submit_extrinsic.assert_called_once_with(mock_chain.create_push_command.return_value)


def test_state_history_on_success(mock_chain, mock_keyring):
    submitter = CommandSubmitter(mock_chain, mock_keyring)
    submitter.submit_command(5, "Ping", "//Alice")

    submission = submitter.last_submission
    assert submission.state == CommandState.ACCEPTED
    assert submission.history == [
        CommandState.BUILT,
        CommandState.SIGNED,
        CommandState.SUBMITTED,
        CommandState.ACCEPTED,
    ]
    assert submission.receipt.contract_id == 5


def test_invalid_suri_fails_before_submission(mock_chain, mock_keyring):
    """An unparsable signing key never reaches the chain"""
    submitter = CommandSubmitter(mock_chain, mock_keyring)

    with pytest.raises(SubmitError, match="Failed to parse signing key") as exc_info:
        submitter.submit_command(5, "Ping", "not a valid suri")

    assert exc_info.value.state == "BUILT"
    assert "not a valid suri" not in str(exc_info.value)
    mock_chain.create_push_command.assert_not_called()
    mock_chain.submit_extrinsic.assert_not_called()


def test_signing_failure(mock_chain, mock_keyring):
    mock_chain.create_push_command.side_effect = RuntimeError("metadata mismatch")
    submitter = CommandSubmitter(mock_chain, mock_keyring)

    with pytest.raises(SubmitError, match="Failed to sign command"):
        submitter.submit_command(5, "Ping", "//Alice")
    mock_chain.submit_extrinsic.assert_not_called()
    assert submitter.last_submission.state == CommandState.BUILT


def test_connection_failure_stays_transport_error(mock_chain, mock_keyring):
    mock_chain.create_push_command.side_effect = TransportError("Failed to connect")
    submitter = CommandSubmitter(mock_chain, mock_keyring)

    with pytest.raises(TransportError):
        submitter.submit_command(5, "Ping", "//Alice")


def test_rejection_not_retried(mock_chain, mock_keyring):
    """A rejected extrinsic is reported with the chain's detail, once"""
    detail = {"code": 1010, "message": "Invalid Transaction", "data": "Inability to pay some fees"}
    mock_chain.submit_extrinsic.side_effect = Exception(detail)
    submitter = CommandSubmitter(mock_chain, mock_keyring)

    with pytest.raises(SubmitError, match="Command rejected") as exc_info:
        submitter.submit_command(5, "Ping", "//Alice")

    assert exc_info.value.detail == detail
    assert exc_info.value.state == "REJECTED"
    assert mock_chain.submit_extrinsic.call_count == 1
    assert submitter.last_submission.history[-2:] == [CommandState.SUBMITTED, CommandState.REJECTED]


def test_invalid_contract_id(mock_chain, mock_keyring):
    submitter = CommandSubmitter(mock_chain, mock_keyring)
    with pytest.raises(FormatError):
        submitter.submit_command(0, "Ping", "//Alice")
    mock_keyring.pair_from_uri.assert_not_called()


def test_build_only(mock_chain, mock_keyring):
    submitter = CommandSubmitter(mock_chain, mock_keyring)
    submission = submitter.build("5", {"A": 1})
    assert submission.contract_id == 5
    assert submission.payload == '{"Plain":"{\\"A\\":1}"}'
    assert submission.state == CommandState.BUILT


class TestCommandSubmission:
    """Test the command state machine."""

    def test_skipping_a_state_is_rejected(self):
        submission = CommandSubmission(contract_id=5, payload="{}")
        with pytest.raises(SubmitError, match="BUILT -> SUBMITTED"):
            submission.advance(CommandState.SUBMITTED)

    def test_terminal_states(self):
        submission = CommandSubmission(contract_id=5, payload="{}")
        for state in (CommandState.SIGNED, CommandState.SUBMITTED, CommandState.REJECTED):
            submission.advance(state)
        with pytest.raises(SubmitError):
            submission.advance(CommandState.ACCEPTED)
