# tenant_directory/cli/config.py
import getpass
import os
from dotenv import load_dotenv
from pathlib import Path

# This cli/config.py file is at <project>/tenant_directory/cli/config.py
# Three .parent calls navigate to the project root directory
project_root = Path(__file__).parent.parent.parent.resolve()

# Load environment variables from .env file, overriding system environment variables
load_dotenv(dotenv_path=project_root / '.env', override=True)


def _default_actor() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "cli"


# Recorded as created_by / updated_by on tenants written through the CLI
TENANT_DIRECTORY_CLI_ACTOR = os.getenv("TENANT_DIRECTORY_CLI_ACTOR") or _default_actor()

# Default page size for 'tenant list'
TENANT_DIRECTORY_CLI_PAGE_SIZE = int(os.getenv("TENANT_DIRECTORY_CLI_PAGE_SIZE", "100"))
