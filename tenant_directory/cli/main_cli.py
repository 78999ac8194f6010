# tenant_directory/cli/main_cli.py
import logging
import typer
from . import config  # noqa: F401  Loads .env before settings are read
from . import tenant_cli
from ..settings import settings

# Main CLI application with help enabled when no arguments are provided
app = typer.Typer(
    name="tenant-directory",
    help=f"{settings.app_name} Command Line Interface.",
    no_args_is_help=True
)

# Register tenant commands under 'tenant' subcommand
app.add_typer(tenant_cli.app, name="tenant")


@app.callback()
def main_callback():
    """
    Tenant Directory main CLI application.
    Use 'tenant-directory tenant --help' for tenant commands.
    """
    logging.getLogger("tenant_directory").setLevel(settings.effective_log_level)
    logging.getLogger(__name__).debug(f"{settings.app_name} CLI starting.")


def cli_entry_point():
    """Entry point function for console script registration in pyproject.toml"""
    app()


if __name__ == "__main__":
    cli_entry_point()
