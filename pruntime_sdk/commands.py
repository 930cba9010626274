"""
CommandSubmitter - pushes mutating commands to confidential contracts.

Commands are wrapped as Plain payloads, signed by the operator's key and
submitted on-chain as a single ``push_command`` extrinsic.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from .encoding import parse_contract_id
from .envelope import wrap_plain
from .exceptions import SubmitError, TransportError
from .models import TxReceipt


class CommandState(str, Enum):
    BUILT = "BUILT"
    SIGNED = "SIGNED"
    SUBMITTED = "SUBMITTED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


_TRANSITIONS = {
    CommandState.BUILT: {CommandState.SIGNED},
    CommandState.SIGNED: {CommandState.SUBMITTED},
    CommandState.SUBMITTED: {CommandState.ACCEPTED, CommandState.REJECTED},
    CommandState.ACCEPTED: set(),
    CommandState.REJECTED: set(),
}


@dataclass
class CommandSubmission:
    """Tracks one command through build, sign and submit"""
    contract_id: int
    payload: str
    state: CommandState = CommandState.BUILT
    history: List[CommandState] = field(default_factory=lambda: [CommandState.BUILT])
    receipt: Optional[TxReceipt] = None

    def advance(self, new_state: CommandState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise SubmitError(
                f"Invalid command transition {self.state.value} -> {new_state.value}",
                state=self.state.value
            )
        self.state = new_state
        self.history.append(new_state)


class CommandSubmitter:
    """
    Submit signed commands to confidential contracts.

    Failures are never retried here: a rejected command is reported to the
    caller together with the chain's error detail.
    """

    def __init__(self, chain: Any, keyring: Any, logger: Optional[logging.Logger] = None):
        """
        Initialize the CommandSubmitter

        Args:
            chain: Chain collaborator (see pruntime_sdk.chain.ChainClient)
            keyring: Keyring collaborator (see pruntime_sdk.keyring.Keyring)
            logger: Optional logger instance
        """
        self.chain = chain
        self.keyring = keyring
        self.logger = logger or logging.getLogger(__name__)
        self.last_submission: Optional[CommandSubmission] = None

    def build(self, contract_id: int, command: Any) -> CommandSubmission:
        """
        Wrap a command for on-chain submission

        Raises:
            FormatError: If contract_id is not a positive integer
        """
        contract_id = parse_contract_id(contract_id)
        submission = CommandSubmission(contract_id=contract_id, payload=wrap_plain(command))
        self.logger.debug(f"Built command for contract {contract_id}: {submission.payload}")
        return submission

    def submit_command(self, contract_id: int, command: Any, suri: str) -> TxReceipt:
        """
        Build, sign and submit a command

        Args:
            contract_id: Confidential contract id
            command: Contract instruction, any JSON value
            suri: Key derivation URI or raw seed of the sender

        Returns:
            Receipt of the accepted extrinsic

        Raises:
            FormatError: If contract_id is invalid
            SubmitError: If the key cannot be derived, signing fails or the
                chain rejects the extrinsic
        """
        submission = self.build(contract_id, command)
        self.last_submission = submission

        try:
            keypair = self.keyring.pair_from_uri(suri)
        except Exception as e:
            # Never echo the SURI, it is the signing secret
            self.logger.error(f"Failed to parse signing key: {type(e).__name__}")
            raise SubmitError(f"Failed to parse signing key ({type(e).__name__})", state=submission.state.value) from e

        try:
            extrinsic = self.chain.create_push_command(submission.contract_id, submission.payload, keypair)
        except TransportError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to sign command: {e}")
            raise SubmitError(f"Failed to sign command: {e}", state=submission.state.value) from e
        submission.advance(CommandState.SIGNED)

        submission.advance(CommandState.SUBMITTED)
        try:
            receipt = self.chain.submit_extrinsic(extrinsic)
        except Exception as e:
            submission.advance(CommandState.REJECTED)
            self.logger.error(f"Command rejected: {e}")
            detail = e.args[0] if e.args else str(e)
            raise SubmitError(f"Command rejected: {e}", state=submission.state.value, detail=detail) from e

        submission.advance(CommandState.ACCEPTED)
        submission.receipt = receipt.model_copy(update={"contract_id": submission.contract_id})
        self.logger.info(f"Command accepted for contract {submission.contract_id}: {receipt.extrinsic_hash}")
        return submission.receipt
