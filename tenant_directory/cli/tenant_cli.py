# tenant_directory/cli/tenant_cli.py
import typer
from typing import List, Optional
from typing_extensions import Annotated
from uuid import UUID

from ..tenants import TenantCreateRequest
from .config import TENANT_DIRECTORY_CLI_PAGE_SIZE
from .utils_cli import echo_model, parse_json_option, run_directory_call

app = typer.Typer(
    name="tenant",
    help="Manage tenants stored in the coordination store.",
    no_args_is_help=True
)


@app.command("create")
def create_tenant(
    name: Annotated[
        str,
        typer.Option(prompt="Tenant Name", help="Display name for the tenant.")
    ],
    authentication_token: Annotated[
        str,
        typer.Option(prompt="Authentication Token", help="Token devices of this tenant authenticate with.")
    ],
    configuration_template_id: Annotated[
        str,
        typer.Option(prompt="Configuration Template ID", help="Template used to bootstrap tenant configuration.")
    ],
    dataset_template_id: Annotated[
        str,
        typer.Option(prompt="Dataset Template ID", help="Template used to populate the tenant's initial data.")
    ],
    token: Annotated[
        Optional[str],
        typer.Option(help="Unique external token. A random one is assigned when omitted.")
    ] = None,
    authorized_user_ids: Annotated[
        Optional[List[str]],
        typer.Option("--authorized-user", help="User allowed to access the tenant. Repeatable.")
    ] = None,
    metadata_json_str: Annotated[
        Optional[str],
        typer.Option("--metadata-json", help="JSON object of string metadata (e.g., '{\"region\": \"eu\"}').")
    ] = None,
    image_url: Annotated[Optional[str], typer.Option(help="Logo image URL.")] = None,
    icon: Annotated[Optional[str], typer.Option(help="Icon name.")] = None,
    background_color: Annotated[Optional[str], typer.Option(help="Branding background color.")] = None,
    foreground_color: Annotated[Optional[str], typer.Option(help="Branding foreground color.")] = None,
    border_color: Annotated[Optional[str], typer.Option(help="Branding border color.")] = None,
):
    """Create a new tenant."""
    request = TenantCreateRequest(
        token=token,
        name=name,
        authentication_token=authentication_token,
        configuration_template_id=configuration_template_id,
        dataset_template_id=dataset_template_id,
        authorized_user_ids=authorized_user_ids or [],
        metadata=parse_json_option(metadata_json_str, "--metadata-json") or {},
        image_url=image_url,
        icon=icon,
        background_color=background_color,
        foreground_color=foreground_color,
        border_color=border_color,
    )
    echo_model(run_directory_call(lambda service: service.create_tenant(request)))


@app.command("get")
def get_tenant(
    tenant_id: Annotated[UUID, typer.Argument(help="The id of the tenant to retrieve.")]
):
    """Get details for a specific tenant."""
    tenant = run_directory_call(lambda service: service.get_tenant(tenant_id))
    if tenant is None:
        typer.secho(f"Tenant '{tenant_id}' not found.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    echo_model(tenant)


@app.command("get-by-token")
def get_tenant_by_token(
    token: Annotated[str, typer.Argument(help="The token of the tenant to retrieve.")]
):
    """Find a tenant by its token."""
    tenant = run_directory_call(lambda service: service.get_tenant_by_token(token))
    if tenant is None:
        typer.secho(f"No tenant with token '{token}'.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    echo_model(tenant)


@app.command("list")
def list_tenants(
    page: Annotated[
        int,
        typer.Option("--page", help="1-based page number.", min=1)
    ] = 1,
    page_size: Annotated[
        int,
        typer.Option("--page-size", help="Tenants per page, 0 for all.", min=0)
    ] = TENANT_DIRECTORY_CLI_PAGE_SIZE
):
    """List tenants sorted by name."""
    echo_model(run_directory_call(lambda service: service.list_tenants(page_number=page, page_size=page_size)))


@app.command("update")
def update_tenant(
    tenant_id: Annotated[UUID, typer.Argument(help="The id of the tenant to update.")],
    new_name: Annotated[Optional[str], typer.Option("--name", help="New display name.")] = None,
    new_token: Annotated[Optional[str], typer.Option("--token", help="New token.")] = None,
    new_authentication_token: Annotated[
        Optional[str], typer.Option("--authentication-token", help="New authentication token.")
    ] = None,
    new_configuration_template_id: Annotated[
        Optional[str], typer.Option("--configuration-template-id", help="New configuration template id.")
    ] = None,
    new_dataset_template_id: Annotated[
        Optional[str], typer.Option("--dataset-template-id", help="New dataset template id.")
    ] = None,
    new_authorized_user_ids: Annotated[
        Optional[List[str]],
        typer.Option("--authorized-user", help="REPLACES the authorized users. Repeatable.")
    ] = None,
    new_metadata_json_str: Annotated[
        Optional[str],
        typer.Option("--metadata-json", help="NEW JSON object. This will REPLACE all existing metadata.")
    ] = None,
    new_image_url: Annotated[Optional[str], typer.Option("--image-url", help="New logo image URL.")] = None,
    new_icon: Annotated[Optional[str], typer.Option("--icon", help="New icon name.")] = None,
    new_background_color: Annotated[
        Optional[str], typer.Option("--background-color", help="New branding background color.")
    ] = None,
    new_foreground_color: Annotated[
        Optional[str], typer.Option("--foreground-color", help="New branding foreground color.")
    ] = None,
    new_border_color: Annotated[
        Optional[str], typer.Option("--border-color", help="New branding border color.")
    ] = None,
):
    """Update an existing tenant. Only provided fields will be updated."""
    changes = {
        "name": new_name,
        "token": new_token,
        "authentication_token": new_authentication_token,
        "configuration_template_id": new_configuration_template_id,
        "dataset_template_id": new_dataset_template_id,
        "authorized_user_ids": new_authorized_user_ids or None,
        "metadata": parse_json_option(new_metadata_json_str, "--metadata-json"),
        "image_url": new_image_url,
        "icon": new_icon,
        "background_color": new_background_color,
        "foreground_color": new_foreground_color,
        "border_color": new_border_color,
    }
    changes = {key: value for key, value in changes.items() if value is not None}

    # Exit early if no update parameters were provided
    if not changes:
        typer.echo("No update parameters provided. Nothing to do.")
        raise typer.Exit()

    request = TenantCreateRequest(**changes)
    echo_model(run_directory_call(lambda service: service.update_tenant(tenant_id, request)))


@app.command("delete")
def delete_tenant(
    tenant_id: Annotated[UUID, typer.Argument(help="The id of the tenant to delete.")]
):
    """Delete a tenant and all configuration nested under it."""
    echo_model(run_directory_call(lambda service: service.delete_tenant(tenant_id)))


if __name__ == "__main__":
    app()
