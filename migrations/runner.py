#!/usr/bin/env python3
"""
Migration runner
Applies the numbered migration scripts in order against the configured network
"""

import os
import re
import sys
import json
import logging
import importlib.util
from typing import Any, Dict, List, Optional
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from .artifacts import ArtifactRegistry
from .config import MigrationConfig
from .deployer import DeployedInstance, Deployer
from .exceptions import MigrationError

logger = logging.getLogger(__name__)

MIGRATION_PATTERN = re.compile(r'^(\d+)_\w+\.py$')


def discover_migrations(directory: str) -> List[str]:
    """Return migration files in the directory, ordered by their numeric prefix."""
    found = []
    for filename in os.listdir(directory):
        match = MIGRATION_PATTERN.match(filename)
        if match:
            found.append((int(match.group(1)), filename))
    return [os.path.join(directory, filename) for _number, filename in sorted(found)]


def load_migration(path: str):
    """Import a migration file and return its module."""
    module_name = "migration_" + os.path.splitext(os.path.basename(path))[0]
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise MigrationError(f"Cannot load migration {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    if not callable(getattr(module, 'migrate', None)):
        raise MigrationError(f"Migration {path} does not define migrate(deployer, artifacts)")
    return module


class MigrationRunner:
    def __init__(self, config: MigrationConfig, w3: Optional[Web3] = None):
        self.config = config
        self.w3 = w3 if w3 is not None else self._initialize_web3()
        self.deployer = Deployer(
            self.w3,
            config.private_key,
            chain_id=config.chain_id,
            timeout=config.tx_timeout,
            gas_limit=config.gas_limit,
        )
        self.artifacts = ArtifactRegistry(config.artifacts_dir)

    def _initialize_web3(self) -> Web3:
        """Initialize Web3 connection"""
        w3 = Web3(Web3.HTTPProvider(self.config.rpc_url))
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
        if not w3.is_connected():
            raise MigrationError(f"Could not connect to RPC URL: {self.config.rpc_url}")
        logger.info(f"Connected to blockchain at {self.config.rpc_url}")
        return w3

    def run(self) -> List[DeployedInstance]:
        """Run every migration in order. The first failure aborts the run."""
        migrations = discover_migrations(self.config.migrations_dir)
        logger.info(f"Found {len(migrations)} migration(s) in {self.config.migrations_dir}")
        logger.info(f"Using deployer account: {self.deployer.address}")

        for path in migrations:
            name = os.path.basename(path)
            logger.info(f"Running migration {name}...")
            try:
                load_migration(path).migrate(self.deployer, self.artifacts)
            except Exception as e:
                logger.error(f"Migration {name} failed: {e}")
                raise
            logger.info(f"Migration {name} completed")

        self._save_deployment()
        return list(self.deployer.instances)

    def _deployment_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            'network': {
                'chainId': self.deployer.chain_id,
                'rpcUrl': self.config.rpc_url,
            },
            'roles': {'deployer': self.deployer.address},
            'contracts': {},
            'transactions': {},
        }
        # Later deployments of the same contract replace earlier ones
        for instance in self.deployer.instances:
            record['contracts'][instance.name] = instance.address
            record['transactions'][instance.name] = instance.transaction_hash
        return record

    def _save_deployment(self):
        record = self._deployment_record()
        with open(self.config.deployment_file, 'w') as f:
            json.dump(record, f, indent=2)
        logger.info(f"Deployment details saved to {self.config.deployment_file}")


def main():
    """Run all migrations against the configured network"""
    try:
        config = MigrationConfig()
    except MigrationError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(config.log_file),
            logging.StreamHandler()
        ]
    )

    try:
        runner = MigrationRunner(config)
        instances = runner.run()
    except MigrationError as e:
        logger.error(f"Migration run failed: {e}")
        sys.exit(1)

    logger.info(f"Migrations finished, {len(instances)} contract(s) deployed")


if __name__ == "__main__":
    main()
