"""CLI interface for the Cloudinary client using Typer.

Main entry point for the application. Handles command definitions,
argument parsing, upload history and Rich console output.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler
from rich.table import Table

from .config import ConfigError, load_config
from .errors import UsageError
from .models import CloudinaryConfig, UploadResult
from .signing import sign_request, signable_params
from .tags import url_for
from .upload import batch_destroy, batch_upload, init_client
from .utils import (
    console,
    copy_to_clipboard,
    format_output,
    parse_option_pairs,
    print_error,
    print_success,
    print_warning,
)

# Batches kept in the history file
HISTORY_LIMIT = 50


def history_file() -> Path:
    """Location of the upload history file."""
    return Path.home() / ".cloudinary-upload-history.json"


def load_history() -> list[dict]:
    """Load upload history from file."""
    path = history_file()
    if not path.exists():
        return []
    try:
        with open(path, 'r') as f:
            return json.load(f)
    except (json.JSONDecodeError, IOError):
        return []


def save_history(history: list[dict]) -> None:
    """Save upload history to file."""
    with open(history_file(), 'w') as f:
        json.dump(history, f, indent=2, default=str)


def add_batch_to_history(uploads: list[dict]) -> None:
    """Add a batch of uploads to history.

    Args:
        uploads: List of dicts with 'public_id', 'resource_type' and 'url'
    """
    if not uploads:
        return

    history = load_history()
    history.append({
        "timestamp": datetime.now().isoformat(),
        "count": len(uploads),
        "uploads": uploads,
    })

    if len(history) > HISTORY_LIMIT:
        history = history[-HISTORY_LIMIT:]

    save_history(history)


app = typer.Typer(
    name="cloudinary-upload",
    help="Upload, delete and build URLs for Cloudinary assets",
    add_completion=False,
)


@app.callback()
def main_options(
    ctx: typer.Context,
    secrets: Optional[Path] = typer.Option(
        None,
        "--secrets",
        help="Path to secrets.json",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log requests to the console",
    ),
) -> None:
    """Upload, delete and build URLs for Cloudinary assets."""
    ctx.obj = {"secrets": secrets}
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _config(ctx: typer.Context) -> CloudinaryConfig:
    return load_config((ctx.obj or {}).get("secrets"))


@app.command()
def upload(
    ctx: typer.Context,
    files: list[str] = typer.Argument(
        ...,
        help="Local files or remote URLs to upload",
    ),
    public_id: Optional[str] = typer.Option(
        None,
        "--public-id",
        help="Public id for the asset (single file only)",
    ),
    tags: Optional[str] = typer.Option(
        None,
        "--tags",
        "-t",
        help="Comma separated tags",
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        help="Convert to this format on upload",
    ),
    resource_type: str = typer.Option(
        "image",
        "--resource-type",
        "-r",
        help="Resource type: image|raw",
    ),
    output_format: str = typer.Option(
        "plain",
        "--output-format",
        "-o",
        help="Output format: plain|markdown|html",
    ),
) -> None:
    """Upload files to Cloudinary."""
    try:
        if public_id and len(files) > 1:
            raise UsageError("--public-id can only be used with a single file")

        config = _config(ctx)

        with init_client() as client, console.status("[bold green]Uploading..."):
            results = batch_upload(
                client,
                config,
                files,
                public_id=public_id,
                tags=tags,
                format=fmt,
                resource_type=resource_type,
            )

        uploaded = []
        for file, result in zip(files, results):
            if result.ok and result.body:
                uploaded.append(UploadResult.from_body(result.body))
            else:
                print_error(f"Failed to upload {file}: {result.error_message}")

        if not uploaded:
            console.print("[yellow]No files were uploaded[/yellow]")
            raise typer.Exit(1)

        add_batch_to_history([
            {"public_id": r.public_id, "resource_type": resource_type, "url": r.url}
            for r in uploaded
        ])

        output = format_output(uploaded, output_format)
        console.print("\n[bold green]Upload complete![/bold green]\n")
        console.print(output, soft_wrap=True)

        if copy_to_clipboard(output):
            console.print(f"\n[dim]{len(uploaded)} URL(s) copied to clipboard[/dim]")

        if len(uploaded) < len(files):
            raise typer.Exit(1)

    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)
    except UsageError as e:
        print_error(str(e))
        raise typer.Exit(2)


@app.command()
def destroy(
    ctx: typer.Context,
    public_ids: list[str] = typer.Argument(
        ...,
        help="Public ids of the assets to delete",
    ),
    delivery_type: str = typer.Option(
        "upload",
        "--type",
        help="Delivery type of the assets",
    ),
    resource_type: str = typer.Option(
        "image",
        "--resource-type",
        "-r",
        help="Resource type: image|raw",
    ),
) -> None:
    """Delete assets from Cloudinary."""
    try:
        config = _config(ctx)

        with init_client() as client, console.status("[bold red]Deleting..."):
            deleted, failed = batch_destroy(
                client,
                config,
                public_ids,
                type=delivery_type,
                resource_type=resource_type,
            )

        if failed == 0:
            print_success(f"Deleted {deleted} asset(s)")
        else:
            print_warning(f"Deleted {deleted} asset(s), {failed} failed")
            raise typer.Exit(1)

    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)
    except UsageError as e:
        print_error(str(e))
        raise typer.Exit(2)


@app.command()
def url(
    ctx: typer.Context,
    public_id: str = typer.Argument(..., help="Public id, optionally with .format"),
    option: list[str] = typer.Option(
        [],
        "--option",
        "-o",
        help="Transformation as key=value (w=100, crop=fill, ...)",
    ),
    secure: bool = typer.Option(
        False,
        "--secure",
        "-s",
        help="Use the private CDN",
    ),
    resource_type: Optional[str] = typer.Option(
        None,
        "--resource-type",
        "-r",
        help="Resource type: image|raw",
    ),
    delivery_type: Optional[str] = typer.Option(
        None,
        "--type",
        help="Delivery type: upload, facebook, twitter_name, ...",
    ),
) -> None:
    """Print the delivery URL of an asset."""
    try:
        config = _config(ctx)

        options = parse_option_pairs(option)
        if secure:
            options['secure'] = True
        if resource_type:
            options['resource_type'] = resource_type
        if delivery_type:
            options['type'] = delivery_type

        result = url_for(public_id, options, config)
        console.print(result, soft_wrap=True)
        copy_to_clipboard(result)

    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)
    except UsageError as e:
        print_error(str(e))
        raise typer.Exit(2)


@app.command()
def sign(
    ctx: typer.Context,
    params: list[str] = typer.Argument(..., help="Request parameters as key=value"),
) -> None:
    """Show the signature for a set of request parameters."""
    try:
        config = _config(ctx)
        parsed = parse_option_pairs(params)

        signed = signable_params(parsed)
        ignored = sorted(set(parsed) - {key for key, _ in signed})
        if ignored:
            console.print(f"[dim]Not signed: {', '.join(ignored)}[/dim]")

        console.print(sign_request(parsed, config.api_secret))

    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)
    except UsageError as e:
        print_error(str(e))
        raise typer.Exit(2)


@app.command()
def auth(ctx: typer.Context) -> None:
    """Validate the configured credentials."""
    try:
        with console.status("[bold green]Validating configuration..."):
            config = _config(ctx)

        console.print("[green]✓[/green] Configuration valid")
        console.print(f"  Cloud: {config.cloud_name}")
        console.print(f"  API key: {config.api_key}")

        if config.private_cdn:
            console.print(f"  Private CDN: {config.private_cdn}")
        else:
            console.print("[yellow]![/yellow] private_cdn not configured (secure URLs disabled)")

    except ConfigError as e:
        console.print(f"[red]✗[/red] Configuration error: {e}")
        raise typer.Exit(1)


@app.command()
def undo(
    ctx: typer.Context,
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompt",
    ),
) -> None:
    """Delete the most recent batch of uploads from Cloudinary."""
    history = load_history()

    if not history:
        console.print("[yellow]No upload history found[/yellow]")
        raise typer.Exit(0)

    latest = history[-1]
    uploads = latest.get("uploads", [])
    timestamp = latest.get("timestamp", "Unknown")

    if not uploads:
        console.print("[yellow]Latest batch has no uploads to delete[/yellow]")
        raise typer.Exit(0)

    try:
        formatted_time = datetime.fromisoformat(timestamp).strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, TypeError):
        formatted_time = timestamp

    console.print(f"\n[bold]Latest batch ({formatted_time}):[/bold]")
    for item in uploads:
        console.print(f"  • {item['public_id']}")

    if not force:
        console.print("")
        if not typer.confirm("Delete these assets from Cloudinary?", default=False):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    try:
        config = _config(ctx)
    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)

    by_resource_type: dict[str, list[str]] = {}
    for item in uploads:
        by_resource_type.setdefault(item.get("resource_type", "image"), []).append(item["public_id"])

    deleted = failed = 0
    with init_client() as client, console.status("[bold red]Deleting assets..."):
        for resource_type, public_ids in by_resource_type.items():
            ok, bad = batch_destroy(client, config, public_ids, resource_type=resource_type)
            deleted += ok
            failed += bad

    history.pop()
    save_history(history)

    if failed == 0:
        console.print(f"\n[green]✓ Deleted {deleted} assets[/green]")
    else:
        console.print(f"\n[yellow]Deleted {deleted} assets, {failed} failed[/yellow]")


@app.command("history")
def history_cmd(
    count: int = typer.Option(
        5,
        "--count",
        "-n",
        help="Number of recent batches to show",
    ),
) -> None:
    """Show recent upload batches."""
    batches = load_history()

    if not batches:
        console.print("[yellow]No upload history found[/yellow]")
        return

    table = Table(title="Recent Upload Batches")
    table.add_column("#", style="dim")
    table.add_column("Timestamp", style="cyan")
    table.add_column("Assets", justify="right")

    for i, batch in enumerate(reversed(batches[-count:])):
        timestamp = batch.get("timestamp", "Unknown")
        try:
            formatted = datetime.fromisoformat(timestamp).strftime("%Y-%m-%d %H:%M:%S")
        except (ValueError, TypeError):
            formatted = timestamp

        table.add_row(str(i + 1), formatted, str(batch.get("count", len(batch.get("uploads", [])))))

    console.print(table)
    console.print("\n[dim]Use 'cloudinary-upload undo' to delete the most recent batch[/dim]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
