#!/usr/bin/env python3
"""
Example of pushing a pDiem command on-chain.
"""
import logging
import os

from pruntime_sdk import CommandSubmitter, SubstrateChain, SubstrateKeyring
from pruntime_sdk.exceptions import PRuntimeError, SubmitError
from pruntime_sdk.pdiem import PDiemContract


def main():
    logging.basicConfig(level=logging.INFO)

    endpoint = os.environ.get("ENDPOINT", "ws://localhost:9944")
    suri = os.environ.get("PRIVKEY", "//Alice")

    chain = SubstrateChain(endpoint)
    submitter = CommandSubmitter(chain, SubstrateKeyring())
    pdiem = PDiemContract(submitter=submitter)

    try:
        receipt = pdiem.withdraw("d1fe7c2b1e3a4b6c8d9e0f1a2b3c4d5e", "1.5 XUS", suri)
        print(f"Extrinsic accepted: {receipt.extrinsic_hash}")
    except SubmitError as e:
        print(f"ERROR: {e} (state: {e.state})")
    except PRuntimeError as e:
        print(f"ERROR: {e}")
    finally:
        chain.close()


if __name__ == "__main__":
    main()
