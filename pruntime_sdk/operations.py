"""
Console operations, one per command line subcommand.
"""
import time
from typing import Any, Callable, Dict, Optional

from .chain import SubstrateChain
from .client import PRuntimeClient
from .commands import CommandSubmitter
from .config import EndpointConfig
from .dispatch import Outcome
from .encoding import (
    parse_address,
    parse_contract_id,
    parse_json_argument,
    parse_worker_key,
    verify_address_or_key,
)
from .keyring import SubstrateKeyring
from .pdiem import PDiemContract

# On-chain timestamp may lag the wall clock by this much and still count as in sync
SYNC_THRESHOLD_MS = 50 * 60 * 1000


class ConsoleOperations:
    """
    Operations of the pRuntime console.

    Collaborators are created lazily from the endpoint configuration, so
    malformed arguments are reported before any connection is opened.
    """

    def __init__(
        self,
        config: EndpointConfig,
        pruntime: Optional[PRuntimeClient] = None,
        chain: Optional[Any] = None,
        keyring: Optional[Any] = None,
        clock: Callable[[], float] = time.time
    ):
        self.config = config
        self._pruntime = pruntime
        self._chain = chain
        self._keyring = keyring
        self._submitter: Optional[CommandSubmitter] = None
        self._pdiem: Optional[PDiemContract] = None
        self.clock = clock

    @property
    def pruntime(self) -> PRuntimeClient:
        if self._pruntime is None:
            self._pruntime = PRuntimeClient(self.config.pruntime_endpoint)
        return self._pruntime

    @property
    def chain(self) -> Any:
        if self._chain is None:
            self._chain = SubstrateChain(
                url=self.config.substrate_ws_endpoint,
                ss58_format=self.config.ss58_format
            )
        return self._chain

    @property
    def keyring(self) -> Any:
        if self._keyring is None:
            self._keyring = SubstrateKeyring(ss58_format=self.config.ss58_format)
        return self._keyring

    @property
    def submitter(self) -> CommandSubmitter:
        if self._submitter is None:
            self._submitter = CommandSubmitter(self.chain, self.keyring)
        return self._submitter

    @property
    def pdiem(self) -> PDiemContract:
        if self._pdiem is None:
            self._pdiem = PDiemContract(pruntime=self.pruntime, submitter=self.submitter)
        return self._pdiem

    # Blockchain operations

    def push_command(self, contract_id: str, plain_command: str, suri: str) -> Dict[str, Any]:
        cid = parse_contract_id(contract_id)
        command = parse_json_argument(plain_command)
        return self.submitter.submit_command(cid, command, suri).to_human()

    def chain_sync_state(self) -> Outcome:
        """Report the chain head; exit 0 only if the head timestamp is recent"""
        state = self.chain.sync_state()
        now_ms = int(self.clock() * 1000)
        timestamp_delta = now_ms - state["blockTs"]
        report = {
            "hash": state["hash"],
            "blockTs": state["blockTs"],
            "timestampDelta": timestamp_delta,
            "syncState": state["syncState"],
            "header": state["header"],
        }
        if timestamp_delta <= SYNC_THRESHOLD_MS:
            return Outcome.success(report)
        return Outcome.failure(f"Chain is out of sync by {timestamp_delta} ms", value=report)

    def free_balance(self, account: str) -> str:
        account = parse_address(account, self.keyring)
        return str(self.chain.free_balance(account))

    def inspect_worker(self, worker_key: str) -> Dict[str, Any]:
        worker_key = parse_worker_key(worker_key)
        return self.chain.inspect_worker(worker_key)

    # pRuntime operations

    def get_info(self) -> Any:
        return self.pruntime.get_info()

    def query(self, contract_id: str, plain_query: str) -> Any:
        cid = parse_contract_id(contract_id)
        request = parse_json_argument(plain_query)
        return self.pruntime.query(cid, request)

    # pDiem

    def pdiem_balances(self) -> Any:
        return self.pdiem.balances()

    def pdiem_tx(self) -> Any:
        return self.pdiem.verified_transactions()

    def pdiem_new_account(self, seq: str, suri: str) -> Dict[str, Any]:
        return self.pdiem.new_account(seq, suri).to_human()

    def pdiem_withdraw(self, dest: str, amount: str, suri: str) -> Dict[str, Any]:
        return self.pdiem.withdraw(dest, amount, suri).to_human()

    # Utilities

    def verify(self, text: str) -> Outcome:
        """Exit 0 with the address if the input is an address or a SURI"""
        result = verify_address_or_key(text, self.keyring)
        if result.ok:
            return Outcome.success(result.address)
        return Outcome.failure("Cannot decode the input")
