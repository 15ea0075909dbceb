import json, asyncio, time
from dataclasses import asdict
import click
from rich.console import Console
from rich.progress import (
    Progress, BarColumn, TextColumn, TimeElapsedColumn,
    TimeRemainingColumn, MofNCompleteColumn, SpinnerColumn
)
from rich.table import Table

from .adapters.rpc_httpx import HttpxBitcoinRPC
from .application.planning import plan_window
from .application.use_cases import scan_recent
from .domain.errors import ScanError
from .domain.models import BlockSummary, RPCEndpoint
from .log import setup_logging

console = Console()


def _endpoint(ctx: click.Context) -> RPCEndpoint:
    o = ctx.obj
    return RPCEndpoint(url=o["rpc_url"], username=o["rpc_user"], password=o["rpc_password"])


def _run(coro):
    try:
        return asyncio.run(coro)
    except (ScanError, ValueError) as e:
        raise click.ClickException(str(e))


@click.group()
@click.option("--rpc-url", envvar="BITCOIN_RPC_URL", default="http://127.0.0.1:8332",
              show_default=True, help="Node JSON-RPC endpoint")
@click.option("--rpc-user", envvar="BITCOIN_RPC_USER", default="", help="RPC username")
@click.option("--rpc-password", envvar="BITCOIN_RPC_PASSWORD", default="", help="RPC password")
@click.option("--timeout", envvar="BITCOIN_RPC_TIMEOUT", type=float, default=30.0,
              show_default=True, help="Per-request timeout in seconds")
@click.option("--log-level", envvar="CJSCAN_LOG_LEVEL", default="WARNING", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
@click.pass_context
def cli(ctx, rpc_url, rpc_user, rpc_password, timeout, log_level):
    """cjscan: flag CoinJoin-like transactions in recent Bitcoin blocks."""
    setup_logging(log_level)
    ctx.obj = {"rpc_url": rpc_url, "rpc_user": rpc_user,
               "rpc_password": rpc_password, "timeout": timeout}


@cli.command("height")
@click.pass_context
def height_cmd(ctx):
    """Print the current chain tip height."""
    async def run():
        async with HttpxBitcoinRPC(_endpoint(ctx), timeout_s=ctx.obj["timeout"]) as rpc:
            return await rpc.get_latest_height()

    click.echo(_run(run()))


@cli.command("scan")
@click.option("--start-height", type=int, default=None, help="Highest block to scan (default: chain tip)")
@click.option("--range", "range_", type=click.IntRange(min=1), default=10, show_default=True,
              help="Number of blocks to walk downwards")
@click.option("--min-inputs", type=click.IntRange(min=0), default=5, show_default=True)
@click.option("--min-outputs", type=click.IntRange(min=0), default=5, show_default=True)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print results as a JSON array")
@click.pass_context
def scan_cmd(ctx, start_height, range_, min_inputs, min_outputs, as_json):
    """Scan a window of recent blocks and list transactions clearing both thresholds."""
    totals = {"blocks": 0, "txs": 0, "coinbase": 0}

    async def run():
        async with HttpxBitcoinRPC(_endpoint(ctx), timeout_s=ctx.obj["timeout"]) as rpc:
            progress = Progress(SpinnerColumn(),
                                TextColumn("[bold]scanning blocks[/]"),
                                BarColumn(),
                                MofNCompleteColumn(),
                                TextColumn("•"),
                                TimeElapsedColumn(),
                                TextColumn("→"),
                                TimeRemainingColumn(),
                                TextColumn(" • {task.description}"),
                                console=Console(stderr=True),
                                transient=True,
                                disable=as_json,
                                )
            with progress:
                task = progress.add_task(description="resolving tip", total=None)

                def on_block(s: BlockSummary) -> None:
                    if totals["blocks"] == 0:
                        # first block is the top of the window
                        progress.update(task, total=plan_window(s.height, range_).span())
                    totals["blocks"] += 1
                    totals["txs"] += s.tx_count
                    totals["coinbase"] += s.coinbase_count
                    progress.update(task, advance=1, description=f"height {s.height:,}")

                return await scan_recent(rpc, range_, min_inputs, min_outputs,
                                         start_height=start_height, on_block=on_block)

    t0 = time.time()
    found = _run(run())
    elapsed = time.time() - t0

    if as_json:
        click.echo(json.dumps([asdict(s) for s in found], indent=2))
        return

    table = Table(title="CoinJoin-like transactions")
    table.add_column("height", justify="right")
    table.add_column("txid", no_wrap=True)
    table.add_column("inputs", justify="right")
    table.add_column("outputs", justify="right")
    for s in found:
        table.add_row(str(s.block_height), s.txid, str(s.input_count), str(s.output_count))
    if found:
        console.print(table)
    console.print(
        f"[bold]summary[/]: blocks={totals['blocks']}  txs={totals['txs']}  "
        f"[dim]coinbase={totals['coinbase']}[/]  [red]flagged={len(found)}[/]  • {elapsed:.2f}s"
    )


if __name__ == "__main__":
    cli()
