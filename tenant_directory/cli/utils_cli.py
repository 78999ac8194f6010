# tenant_directory/cli/utils_cli.py
import asyncio
import json
from typing import Any, Awaitable, Callable, Dict, Optional

import typer
from pydantic import BaseModel

from ..coordination import CoordinationStoreError, close_coordination_store, get_coordination_store
from ..tenants import (
    CoordinationTenantStore,
    DuplicateTenantError,
    InvalidTenantRequestError,
    StoreUnavailableError,
    TenantDirectoryError,
    TenantNotFoundError,
    TenantService,
)
from .config import TENANT_DIRECTORY_CLI_ACTOR


def run_directory_call(operation: Callable[[TenantService], Awaitable[Any]]) -> Any:
    """
    Runs one directory operation against the configured coordination store.

    Builds the store and service, awaits the operation, and always tears the
    store down again. Directory errors are printed in red and turned into a
    non-zero exit code.
    """

    async def _run() -> Any:
        coordination_store = await get_coordination_store()
        try:
            tenant_store = CoordinationTenantStore(coordination_store, actor=TENANT_DIRECTORY_CLI_ACTOR)
            await tenant_store.initialize()
            return await operation(TenantService(tenant_store))
        finally:
            await close_coordination_store()

    try:
        return asyncio.run(_run())
    except TenantNotFoundError as e:
        typer.secho(f"CLI: Not found - {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except DuplicateTenantError as e:
        typer.secho(f"CLI: Conflict - {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except InvalidTenantRequestError as e:
        typer.secho(f"CLI: Invalid request - {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except (StoreUnavailableError, CoordinationStoreError) as e:
        typer.secho(
            f"CLI: Store Error - Could not reach the coordination store. Is it running? Error: {e}",
            fg=typer.colors.RED
        )
        raise typer.Exit(code=1)
    except TenantDirectoryError as e:
        typer.secho(f"CLI: Directory Error - {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


def echo_model(model: Optional[BaseModel]) -> None:
    """Print a pydantic model as indented JSON."""
    if model is None:
        typer.echo("null")
        return
    typer.echo(model.model_dump_json(indent=2))


def parse_json_option(raw: Optional[str], option_name: str) -> Optional[Dict[str, str]]:
    """Parse a JSON object passed on the command line, exiting on malformed input."""
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        typer.secho(f"Error: Invalid JSON string provided for {option_name}: {raw}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    if not isinstance(value, dict):
        typer.secho(f"Error: {option_name} must be a JSON object.", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    return {str(k): str(v) for k, v in value.items()}
