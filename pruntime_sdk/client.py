"""
PRuntimeClient - HTTP client for the pRuntime enclave runtime.
"""
import logging
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .encoding import parse_contract_id
from .envelope import decode_envelope, encode_envelope, generate_nonce, unwrap_payload, wrap_plain
from .exceptions import EnvelopeError, TransportError
from .models import QueryBody


class PRuntimeClient:
    """
    Client for the pRuntime HTTP interface.

    This client handles:
    1. Wrapping requests into nonce-tagged envelopes
    2. Unwrapping ok responses and surfacing error envelopes
    3. Anonymous, read-only queries to confidential contracts

    Queries never touch the chain and carry no authentication, so their
    results are not tamper-evident.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the PRuntimeClient

        Args:
            endpoint: pRuntime base URL (e.g., "http://localhost:8000")
            timeout: Timeout for HTTP requests in seconds (None keeps the transport default)
            session: Optional pre-configured requests session
            logger: Optional logger instance to use for debug/info logging
        """
        self.endpoint = endpoint.rstrip('/')
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        # Failed requests are reported to the caller, never replayed
        no_retries = Retry(total=0, raise_on_status=False)
        self.session.mount("http://", HTTPAdapter(max_retries=no_retries))
        self.session.mount("https://", HTTPAdapter(max_retries=no_retries))

    def req(self, method: str, data: Any = None) -> Any:
        """
        Call a pRuntime method

        Args:
            method: Method name, appended to the endpoint path
            data: Method input, defaults to an empty object

        Returns:
            The decoded payload of the ok response

        Raises:
            TransportError: If the request fails or returns an HTTP error status
            EnvelopeError: If the response is not an ok envelope
        """
        body = encode_envelope({} if data is None else data)
        url = f"{self.endpoint}/{method}"
        self.logger.debug(f"POST {url} nonce={body['nonce']['id']}")

        try:
            response = self.session.post(url, json=body, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            self.logger.error(f"pRuntime request {method} failed: {e}")
            raise TransportError(f"pRuntime request {method} failed: {e}", status_code=status_code) from e
        except requests.RequestException as e:
            self.logger.error(f"pRuntime request {method} failed: {e}")
            raise TransportError(f"pRuntime request {method} failed: {e}") from e

        content_type = response.headers.get('Content-Type', '')
        if 'application/json' not in content_type:
            self.logger.warning(f"Unexpected Content-Type: {content_type} (expected application/json)")

        try:
            result = response.json()
        except ValueError as e:
            raise EnvelopeError(f"Invalid JSON response from pRuntime: {e}", response=response.text) from e

        return decode_envelope(result)

    def get_info(self) -> Any:
        """Get the running status of the enclave runtime"""
        return self.req("get_info")

    def query(self, contract_id: int, request: Any) -> Any:
        """
        Send an anonymous query to a confidential contract

        Args:
            contract_id: Confidential contract id (positive integer)
            request: Contract-specific query, any JSON value

        Returns:
            The decoded query response

        Raises:
            FormatError: If contract_id is not a positive integer
            TransportError: If the request fails
            EnvelopeError: If either response layer cannot be decoded
        """
        contract_id = parse_contract_id(contract_id)
        body = QueryBody(contract_id=contract_id, nonce=generate_nonce(), request=request)
        query_data = {"query_payload": wrap_plain(body.model_dump())}

        response = self.req("query", query_data)
        return unwrap_payload(response)
