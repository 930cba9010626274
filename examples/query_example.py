#!/usr/bin/env python3
"""
Simple example of querying a confidential contract through pRuntime.
"""
import os

from pruntime_sdk import PRuntimeClient
from pruntime_sdk.exceptions import PRuntimeError
from pruntime_sdk.pdiem import CONTRACT_PDIEM


def main():
    """
    Demonstrate basic usage of the PRuntimeClient.

    This example shows how to:
    1. Initialize the client
    2. Read the pRuntime status
    3. Query the pDiem contract
    """
    endpoint = os.environ.get("PRUNTIME_ENDPOINT", "http://localhost:8000")
    client = PRuntimeClient(endpoint, timeout=10)

    try:
        info = client.get_info()
        print(f"pRuntime at block {info.get('blocknum')}")

        accounts = client.query(CONTRACT_PDIEM, "AccountData")
        print(f"pDiem accounts: {accounts}")
    except PRuntimeError as e:
        print(f"ERROR: {e}")


if __name__ == "__main__":
    main()
