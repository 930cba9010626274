"""
Helpers for the pDiem asset-settlement confidential contract.
"""
import logging
from typing import Any

from .encoding import check_diem_destination, parse_seq_number, parse_xus_amount
from .models import TxReceipt

CONTRACT_PDIEM = 5

logger = logging.getLogger(__name__)


class PDiemContract:
    """Queries and commands of the pDiem contract"""

    def __init__(self, pruntime: Any = None, submitter: Any = None, contract_id: int = CONTRACT_PDIEM):
        self.pruntime = pruntime
        self.submitter = submitter
        self.contract_id = contract_id

    def balances(self) -> Any:
        """List the account info and balances"""
        return self.pruntime.query(self.contract_id, "AccountData")

    def verified_transactions(self) -> Any:
        return self.pruntime.query(self.contract_id, "VerifiedTransactions")

    def new_account(self, seq: Any, suri: str) -> TxReceipt:
        """Create a new Diem sub-account for deposit"""
        seq_number = parse_seq_number(seq)
        command = {"NewAccount": {"seq_number": seq_number}}
        return self.submitter.submit_command(self.contract_id, command, suri)

    def withdraw(self, dest: str, amount: str, suri: str) -> TxReceipt:
        """
        Withdraw XUS to a Diem account

        Args:
            dest: Destination Diem account in hex, without ``0x``
            amount: Amount like ``"1.5 XUS"``
            suri: Key derivation URI of the sender

        Raises:
            FormatError: If dest or amount are malformed (before any network call)
            SubmitError: If the command cannot be submitted
        """
        dest = check_diem_destination(dest)
        xus_amount = parse_xus_amount(amount)
        logger.debug(f"Withdrawing {xus_amount} minor units to {dest}")
        command = {"TransferXUS": {"to": dest, "amount": xus_amount}}
        return self.submitter.submit_command(self.contract_id, command, suri)
