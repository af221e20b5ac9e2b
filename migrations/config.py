import os
from typing import Optional
from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

MIGRATIONS_DIR = os.path.dirname(os.path.abspath(__file__))


def _int_env(name: str, default: Optional[int] = None) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


class MigrationConfig:
    """Settings for a migration run, read from the environment."""

    def __init__(self):
        self.rpc_url = os.getenv("RPC_URL", "http://localhost:8545")
        self.private_key = os.getenv("PRIVATE_KEY")
        self.chain_id = _int_env("CHAIN_ID")

        self.artifacts_dir = os.getenv("ARTIFACTS_DIR", os.path.join("build", "contracts"))
        self.migrations_dir = os.getenv("MIGRATIONS_DIR", MIGRATIONS_DIR)
        self.deployment_file = os.getenv("DEPLOYMENT_FILE", "deployment.json")
        self.log_file = os.getenv("LOG_FILE", "migrations.log")

        self.tx_timeout = _int_env("TX_TIMEOUT", 300)
        self.gas_limit = _int_env("GAS_LIMIT")

        if not self.private_key:
            raise ConfigurationError("PRIVATE_KEY not found in environment")
