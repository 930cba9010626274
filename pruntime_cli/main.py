"""
Command line console for pRuntime and the Phala chain.
"""
import json
import logging
import pprint
from typing import Any

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

from pruntime_sdk import ConsoleOperations, EndpointConfig, Outcome, __version__, dispatch
from pruntime_sdk.config import DEFAULT_PRUNTIME_ENDPOINT, DEFAULT_SUBSTRATE_WS_ENDPOINT
from pruntime_sdk.dispatch import EXIT_FAILURE

HUMAN_DEPTH = 4
JSON_OUTPUT = "pruntime.json_output"
DEFAULT_SURI = "//Alice"

app = typer.Typer(
    help="Console for pRuntime confidential contracts and the Phala chain.",
    no_args_is_help=True,
    add_completion=False,
)


def format_value(value: Any, json_output: bool = False) -> str:
    """Render an operation result for the terminal."""
    if json_output:
        return json.dumps(value, indent=2, default=str)
    if isinstance(value, str):
        return value
    return pprint.pformat(value, depth=HUMAN_DEPTH, sort_dicts=False)


def print_outcome(outcome: Outcome, json_output: bool = False) -> None:
    if outcome.value is not None:
        typer.echo(format_value(outcome.value, json_output))
    if outcome.message:
        typer.echo(outcome.message, err=True)


def _run(ctx: typer.Context, operation: str, *args: Any) -> None:
    operations = ctx.obj
    outcome = dispatch(getattr(operations, operation), *args)
    print_outcome(outcome, json_output=ctx.meta.get(JSON_OUTPUT, False))
    raise typer.Exit(code=outcome.exit_code)


@app.callback()
def main(
    ctx: typer.Context,
    pruntime_endpoint: str = typer.Option(
        DEFAULT_PRUNTIME_ENDPOINT, "--pruntime-endpoint", envvar="PRUNTIME_ENDPOINT",
        help="pRuntime API endpoint"
    ),
    substrate_ws_endpoint: str = typer.Option(
        DEFAULT_SUBSTRATE_WS_ENDPOINT, "--substrate-ws-endpoint", envvar="ENDPOINT",
        help="Substrate WS endpoint"
    ),
    json_output: bool = typer.Option(False, "--json", help="output regular json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="enable debug logging"),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    ctx.meta[JSON_OUTPUT] = json_output
    if ctx.obj is not None:
        return

    try:
        config = EndpointConfig(
            pruntime_endpoint=pruntime_endpoint,
            substrate_ws_endpoint=substrate_ws_endpoint,
            json_output=json_output,
        )
    except ValidationError as e:
        typer.echo(f"Invalid endpoint configuration: {e}", err=True)
        raise typer.Exit(code=EXIT_FAILURE)
    ctx.obj = ConsoleOperations(config)


# Blockchain operations

@app.command("push-command")
def push_command(
    ctx: typer.Context,
    contract_id: str = typer.Argument(..., help="confidential contract id (number)"),
    plain_command: str = typer.Argument(..., help="the plain command payload (json)"),
    suri: str = typer.Option(DEFAULT_SURI, "--suri", "-s", envvar="PRIVKEY", help="specify sender's privkey"),
):
    """Push an unencrypted command to a confidential contract."""
    _run(ctx, "push_command", contract_id, plain_command, suri)


@app.command("chain-sync-state")
def chain_sync_state(ctx: typer.Context):
    """Show the chain status; exits 0 if it's in sync."""
    _run(ctx, "chain_sync_state")


@app.command("free-balance")
def free_balance(ctx: typer.Context, account: str = typer.Argument(..., help="the account to lookup")):
    """Get the free balance of an account."""
    _run(ctx, "free_balance", account)


@app.command("inspect-worker")
def inspect_worker(ctx: typer.Context, worker_key: str = typer.Argument(..., help="the worker public key in hex")):
    """Get the mining related info of a worker."""
    _run(ctx, "inspect_worker", worker_key)


# pRuntime operations

@app.command("get-info")
def get_info(ctx: typer.Context):
    """Get the pRuntime running status."""
    _run(ctx, "get_info")


@app.command("query")
def query(
    ctx: typer.Context,
    contract_id: str = typer.Argument(..., help="confidential contract id (number)"),
    plain_query: str = typer.Argument(..., help="the plain query payload (json)"),
):
    """Send a query to a confidential contract via pRuntime directly (anonymously)."""
    _run(ctx, "query", contract_id, plain_query)


# pDiem

@app.command("pdiem-balances")
def pdiem_balances(ctx: typer.Context):
    """Get a list of the account info and balances."""
    _run(ctx, "pdiem_balances")


@app.command("pdiem-tx")
def pdiem_tx(ctx: typer.Context):
    """Get a list of the verified transactions."""
    _run(ctx, "pdiem_tx")


@app.command("pdiem-new-account")
def pdiem_new_account(
    ctx: typer.Context,
    seq: str = typer.Argument(..., help="the sequence id of the VASP account"),
    suri: str = typer.Argument(..., help="the SURI of the sender Substrate account (sr25519)"),
):
    """Create a new Diem subaccount for deposit."""
    _run(ctx, "pdiem_new_account", seq, suri)


@app.command("pdiem-withdraw")
def pdiem_withdraw(
    ctx: typer.Context,
    dest: str = typer.Argument(..., help="the withdrawal destination Diem account"),
    amount: str = typer.Argument(..., help='the amount to withdraw, e.g. "1.5 XUS"'),
    suri: str = typer.Argument(..., help="the SURI of the sender Substrate account (sr25519)"),
):
    """Withdraw XUS to a Diem account."""
    _run(ctx, "pdiem_withdraw", dest, amount, suri)


# Utilities

@app.command("verify")
def verify(ctx: typer.Context, text: str = typer.Argument(..., metavar="INPUT", help="the raw input data")):
    """Verify an ss58 address or a SURI; exits 0 if it's valid or else -1."""
    _run(ctx, "verify", text)


@app.command("version")
def version():
    """Print the console version."""
    typer.echo(__version__)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    app()


if __name__ == "__main__":
    run()
