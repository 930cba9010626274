"""
Blockchain collaborator for submitting commands and reading chain state.
"""
import logging
from typing import Any, Dict, List, Optional, Protocol

from substrateinterface import SubstrateInterface
from substrateinterface.exceptions import SubstrateRequestException
from websocket import WebSocketException

from .config import DEFAULT_SS58_FORMAT, DEFAULT_SUBSTRATE_WS_ENDPOINT
from .encoding import parse_worker_key
from .exceptions import TransportError
from .models import TxReceipt


class ChainClient(Protocol):
    """Protocol for blockchain collaborators"""

    def create_push_command(self, contract_id: int, payload: str, keypair: Any) -> Any:
        """Build and sign a ``push_command`` extrinsic"""
        ...

    def submit_extrinsic(self, extrinsic: Any) -> TxReceipt:
        """Submit a signed extrinsic and return once it is accepted"""
        ...

    def free_balance(self, account: str) -> int:
        ...

    def sync_state(self) -> Dict[str, Any]:
        ...

    def inspect_worker(self, worker_key: str) -> Dict[str, Any]:
        ...


def unwrap_or(value: Any, default: Any = None) -> Any:
    """
    Decode an optional storage item.

    Absent storage items come back as ``None`` or as a SCALE object whose
    ``value`` is ``None``; both decode to ``default``.
    """
    if value is None:
        return default
    decoded = getattr(value, "value", value)
    return default if decoded is None else decoded


class SubstrateChain:
    """
    Chain client backed by substrate-interface.

    The websocket connection is opened on first use so that argument
    validation always happens before any network traffic.
    """

    PALLET = "Phala"
    PUSH_COMMAND = "push_command"

    def __init__(
        self,
        url: str = DEFAULT_SUBSTRATE_WS_ENDPOINT,
        ss58_format: int = DEFAULT_SS58_FORMAT,
        substrate: Optional[SubstrateInterface] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.url = url
        self.ss58_format = ss58_format
        self._substrate = substrate
        self.logger = logger or logging.getLogger(__name__)

    @property
    def substrate(self) -> SubstrateInterface:
        if self._substrate is None:
            self.logger.debug(f"Connecting to {self.url}")
            try:
                self._substrate = SubstrateInterface(url=self.url, ss58_format=self.ss58_format)
            except (OSError, WebSocketException) as e:
                raise TransportError(f"Failed to connect to {self.url}: {e}") from e
        return self._substrate

    def close(self) -> None:
        if self._substrate is not None:
            self._substrate.close()
            self._substrate = None

    def create_push_command(self, contract_id: int, payload: str, keypair: Any) -> Any:
        call = self.substrate.compose_call(
            call_module=self.PALLET,
            call_function=self.PUSH_COMMAND,
            call_params={"contract_id": contract_id, "payload": payload}
        )
        return self.substrate.create_signed_extrinsic(call=call, keypair=keypair)

    def submit_extrinsic(self, extrinsic: Any) -> TxReceipt:
        # Acceptance by the node is the success criterion, not inclusion
        receipt = self.substrate.submit_extrinsic(extrinsic, wait_for_inclusion=False)
        self.logger.info(f"Extrinsic submitted: {receipt.extrinsic_hash}")
        return TxReceipt(extrinsic_hash=receipt.extrinsic_hash, block_hash=receipt.block_hash)

    def _query(self, module: str, storage: str, params: Optional[List[Any]] = None, block_hash: Optional[str] = None) -> Any:
        try:
            return self.substrate.query(module, storage, params or [], block_hash=block_hash)
        except (SubstrateRequestException, OSError, WebSocketException) as e:
            raise TransportError(f"Storage query {module}.{storage} failed: {e}") from e

    def free_balance(self, account: str) -> int:
        account_info = unwrap_or(self._query("System", "Account", [account]), {})
        return int(account_info.get("data", {}).get("free", 0))

    def sync_state(self) -> Dict[str, Any]:
        """
        Read the chain head and the node sync status

        Returns:
            Dictionary with the head ``hash``, its ``blockTs`` timestamp (ms),
            the node ``syncState`` and the head ``header``
        """
        try:
            block_hash = self.substrate.get_block_hash()
            header = self.substrate.get_block_header(block_hash)
            sync_state = self.substrate.rpc_request("system_syncState", []).get("result")
        except (SubstrateRequestException, OSError, WebSocketException) as e:
            raise TransportError(f"Failed to read chain head: {e}") from e
        block_ts = unwrap_or(self._query("Timestamp", "Now", block_hash=block_hash), 0)
        return {
            "hash": block_hash,
            "blockTs": int(block_ts),
            "syncState": sync_state,
            "header": header.get("header", header) if isinstance(header, dict) else header,
        }

    def inspect_worker(self, worker_key: str) -> Dict[str, Any]:
        """
        Collect the mining related state of a worker

        Args:
            worker_key: Worker public key in hex, with or without ``0x``

        Returns:
            Dictionary with worker, miner and stake pool info (None when absent)

        Raises:
            FormatError: If the worker key is not hex
        """
        worker_key = parse_worker_key(worker_key)
        worker_info = unwrap_or(self._query("PhalaRegistry", "Workers", [worker_key]))
        miner = unwrap_or(self._query("PhalaMining", "WorkerBindings", [worker_key]))
        pid = unwrap_or(self._query("PhalaStakePool", "WorkerAssignments", [worker_key]))

        miner_info = unwrap_or(self._query("PhalaMining", "Miners", [miner])) if miner is not None else None
        pool_info = unwrap_or(self._query("PhalaStakePool", "StakePools", [pid])) if pid is not None else None

        return {
            "workerInfo": worker_info,
            "miner": miner,
            "pid": pid,
            "minerInfo": miner_info,
            "poolInfo": pool_info,
        }
