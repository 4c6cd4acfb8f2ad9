"""rawrsa CLI - Main commands."""
import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="rawrsa",
    help="Raw RSA blind-signature server and tools",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def load_service(key: Path):
    """Load the signing service or exit with an error."""
    from rawrsa.core.crypto.rsa import RSAService
    from rawrsa.core.exceptions import KeyLoadError

    try:
        return RSAService.from_pem_file(key)
    except KeyLoadError as e:
        console.print(f"[red]Cannot load key: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def serve(
    key: Path = typer.Option(Path("private.pem"), "--key", "-k", help="Private key file"),
    host: str = typer.Option("0.0.0.0", "--host", help="Interface to bind"),
    port: int = typer.Option(80, "--port", "-p", help="Port to listen on"),
    static: Path = typer.Option(Path("static"), "--static", "-s", help="Static files directory"),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level"),
):
    """Run the HTTP signing server."""
    from rawrsa.core.config import ServerConfig
    from rawrsa.server import run_server

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    config = ServerConfig(
        host=host,
        port=port,
        key_path=str(key),
        static_dir=str(static),
        log_level=level,
    )
    service = load_service(key)
    console.print(f"[green]Serving on http://{host}:{port}[/green]")
    run_server(config, service=service)


@app.command()
def pubkey(
    key: Path = typer.Option(Path("private.pem"), "--key", "-k", help="Private key file"),
):
    """Show the public key in hex."""
    service = load_service(key)
    e, n = service.get_public_key()

    table = Table()
    table.add_column("Field", style="cyan")
    table.add_column("Value", overflow="fold")
    table.add_row("bits", str(n.bit_length()))
    table.add_row("e", format(e, 'x'))
    table.add_row("n", format(n, 'x'))
    console.print(table)


@app.command()
def sign(
    message: str = typer.Argument(..., help="Message as a hex integer"),
    key: Path = typer.Option(Path("private.pem"), "--key", "-k", help="Private key file"),
):
    """Sign a hex integer with textbook RSA."""
    from rawrsa.core.crypto.utils import HexIntEncoder
    from rawrsa.core.exceptions import RawRSAError

    encoder = HexIntEncoder()
    try:
        m = encoder.decode(message)
    except ValueError:
        console.print("[red]message is not a hex integer[/red]")
        raise typer.Exit(1)

    service = load_service(key)
    try:
        signature = service.sign(m)
    except RawRSAError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(encoder.encode(signature), soft_wrap=True)


@app.command()
def verify(
    message: str = typer.Argument(..., help="Message as a hex integer"),
    signature: str = typer.Argument(..., help="Signature as a hex integer"),
    e: str = typer.Option(..., "--e", "-e", help="Public exponent (hex)"),
    n: str = typer.Option(..., "--n", "-n", help="Modulus (hex)"),
):
    """Verify a textbook RSA signature."""
    from rawrsa.core.crypto.rsa import PublicKey, verify as raw_verify
    from rawrsa.core.crypto.utils import HexIntEncoder

    encoder = HexIntEncoder()
    try:
        pub = PublicKey(n=encoder.decode(n), e=encoder.decode(e))
        m = encoder.decode(message)
        s = encoder.decode(signature)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if raw_verify(pub, m, s):
        console.print("[green]✔ Valid signature[/green]")
    else:
        console.print("[red]✗ Invalid signature[/red]")
        raise typer.Exit(1)


@app.command()
def credential(
    url: str = typer.Option("http://localhost", "--url", "-u", help="Signing server URL"),
    output: Path = typer.Option(Path("credentials.json"), "--output", "-o", help="Output file"),
):
    """Obtain a blind-signed credential from a signing server."""
    from rawrsa.client import AsyncSigningClient
    from rawrsa.core.config import ClientConfig
    from rawrsa.core.exceptions import RawRSAError

    async def do_credential():
        async with AsyncSigningClient(ClientConfig(base_url=url)) as client:
            return await client.obtain_credential()

    try:
        result = run_async(do_credential())
    except RawRSAError as e:
        console.print(f"[red]Failed to obtain credential: {e}[/red]")
        raise typer.Exit(1)

    output.write_text(result.to_json())
    console.print(f"[green]Credential saved to {output}[/green]")
    console.print(f"Token: {result.token.hex()}")


if __name__ == "__main__":
    app()
