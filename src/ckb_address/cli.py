"""ckb-address command line."""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional, Tuple

import click

from .address import Address, AddressBuilder
from .config import CliConfig
from .crypto.blake2b import blake2b_256
from .errors import AddressError
from .keys import SecretKey
from .types import CodeHashIndex, CodeHashType, Network

logger = logging.getLogger(__name__)

NOTICE = """
NOTICE:

    This utility is very simple, it just prints the secret key to the screen.

    This brings a potential security risk:

        *** This secret key perhaps has been LEAKED ***

        (for example, someone saw it, or there is a camera behind you)

    How to use the secret key depends on yourself.
"""


class HexBytes(click.ParamType):
    name = "hex"

    def convert(self, value, param, ctx):
        if isinstance(value, bytes):
            return value
        text = value[2:] if value.startswith("0x") else value
        try:
            return bytes.fromhex(text)
        except ValueError:
            self.fail(f"{value!r} is not valid hex", param, ctx)


HEX = HexBytes()
NETWORK_CHOICE = click.Choice([str(n) for n in Network])


def _fatal(exc: Exception) -> None:
    click.echo(f"Fatal: {exc}", err=True)
    sys.exit(1)


def _network(ctx: click.Context, name: Optional[str]) -> Network:
    try:
        return Network.from_name(name or ctx.obj.network)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--network")


@click.group()
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Encode, decode and inspect CKB addresses."""
    config = CliConfig.from_env()
    if verbose:
        config.verbose = True
        config.log_level = "DEBUG"
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    ctx.obj = config


@main.command()
@click.option("--secret", type=HEX, default=None, help="Secret key in hex; random if omitted")
@click.option("--show-secret", is_flag=True, help="Print the secret key instead of masking it")
def key(secret: Optional[bytes], show_secret: bool) -> None:
    """Derive secp256k1 + blake160 addresses for a secret key."""
    try:
        sk = SecretKey(secret) if secret is not None else SecretKey.random()
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--secret")
    with sk:
        pk = sk.public_key()
        pkh = sk.pubkey_hash()
        click.echo("Secp256k1 + Blake160:\n")
        click.echo(f"    secret  = {sk.reveal_hex() if show_secret else sk}")
        click.echo(f"    public  = {pk.hex()}")
        click.echo(f"    pk-hash = {pkh.hex()}")
        click.echo(f"    mainnet = {sk.address(Network.MAIN)}")
        click.echo(f"    testnet = {sk.address(Network.TEST)}")
    if show_secret:
        click.echo(NOTICE)


@main.command()
@click.option("--network", type=NETWORK_CHOICE, default=None)
@click.option(
    "--code-hash-index",
    type=click.Choice([i.cli_name for i in CodeHashIndex]),
    default=None,
    help="Registered lock script (short format)",
)
@click.option("--code-hash", type=HEX, default=None, help="32-byte code hash (full format)")
@click.option(
    "--code-hash-type",
    type=click.Choice([t.cli_name for t in CodeHashType]),
    default=CodeHashType.TYPE.cli_name,
    show_default=True,
)
@click.option("--args", "args_", type=HEX, required=True, help="Lock args in hex")
@click.pass_context
def addr(
    ctx: click.Context,
    network: Optional[str],
    code_hash_index: Optional[str],
    code_hash: Optional[bytes],
    code_hash_type: str,
    args_: bytes,
) -> None:
    """Build an address from a code hash and simple args."""
    if code_hash_index is not None and code_hash is not None:
        raise click.UsageError("--code-hash-index and --code-hash are mutually exclusive")
    builder = AddressBuilder().network(_network(ctx, network)).args_simple(args_)
    try:
        if code_hash is not None:
            builder.code_hash_by_data(CodeHashType.from_name(code_hash_type), code_hash)
        else:
            index = CodeHashIndex.from_name(code_hash_index or CodeHashIndex.default().cli_name)
            builder.code_hash_by_index(index)
        address = builder.build()
    except AddressError as exc:
        _fatal(exc)
        return
    click.echo(str(address))


@main.command()
@click.option("--network", type=NETWORK_CHOICE, default=None)
@click.option("--member", "members", type=HEX, multiple=True, required=True, help="20-byte key hash")
@click.option("--first-n", "first_n", type=int, default=0, show_default=True)
@click.option("--threshold", type=int, required=True)
@click.option("--since", type=HEX, default=None, help="8-byte since value (full format only)")
@click.option("--code-hash", type=HEX, default=None, help="Multisig code hash for the full format")
@click.pass_context
def multisig(
    ctx: click.Context,
    network: Optional[str],
    members: Tuple[bytes, ...],
    first_n: int,
    threshold: int,
    since: Optional[bytes],
    code_hash: Optional[bytes],
) -> None:
    """Commit a multisig descriptor into an address."""
    builder = (
        AddressBuilder()
        .network(_network(ctx, network))
        .code_hash_by_index(CodeHashIndex.SECP256K1_MULTISIG)
    )
    try:
        if code_hash is not None:
            builder.code_hash_by_data(CodeHashType.TYPE, code_hash)
        builder.args_multisig(first_n_required=first_n, threshold=threshold, contents=members, since=since)
        address = builder.build()
    except AddressError as exc:
        _fatal(exc)
        return
    click.echo(f"script     = {address.args.script().hex()}")
    click.echo(f"commitment = {address.args.commitment().hex()}")
    click.echo(f"address    = {address}")


@main.command()
@click.argument("address")
@click.option("--json", "as_json", is_flag=True, help="Print the fields as JSON")
def parse(address: str, as_json: bool) -> None:
    """Decode an address and print its fields."""
    try:
        parsed = Address.parse(address)
    except AddressError as exc:
        _fatal(exc)
        return
    info = parsed.describe()
    if as_json:
        click.echo(json.dumps(info, indent=2))
        return
    for name, value in info.items():
        click.echo(f"{name:<16}= {value}")


@main.command("hash")
@click.argument("data", type=HEX)
def hash_(data: bytes) -> None:
    """Print the ckb BLAKE2b-256 digest of hex input."""
    click.echo(f"output = {blake2b_256(data).hex()}")


if __name__ == "__main__":
    main()
