"""
Contract deployer
Signs constructor transactions locally and waits for their receipts.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from eth_utils import ValidationError
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from .artifacts import ArtifactHandle
from .exceptions import ConfigurationError, DeploymentError, MigrationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeployedInstance:
    """A confirmed contract deployment"""
    name: str
    address: str
    transaction_hash: str
    block_number: int
    abi: List[Dict[str, Any]]


class Deployer:
    def __init__(self, w3: Web3, private_key: str, chain_id: Optional[int] = None,
                 timeout: int = 300, gas_limit: Optional[int] = None):
        self.w3 = w3
        self.private_key = private_key
        try:
            self.account = w3.eth.account.from_key(private_key)
        except (ValueError, ValidationError) as e:
            raise ConfigurationError(f"PRIVATE_KEY is not a valid private key: {e}") from e

        if chain_id is None:
            try:
                chain_id = w3.eth.chain_id
            except (Web3Exception, OSError) as e:
                raise MigrationError(f"Could not read chain id from node: {e}") from e
        self.chain_id = chain_id
        self.timeout = timeout
        self.gas_limit = gas_limit

        self.instances: List[DeployedInstance] = []
        self._latest: Dict[str, DeployedInstance] = {}

    @property
    def address(self) -> str:
        return self.account.address

    def _transaction_params(self) -> Dict[str, Any]:
        params = {
            'from': self.account.address,
            'nonce': self.w3.eth.get_transaction_count(self.account.address, 'pending'),
            'chainId': self.chain_id,
            'gasPrice': self.w3.eth.gas_price,
        }
        if self.gas_limit is not None:
            params['gas'] = self.gas_limit
        return params

    def deploy(self, artifact: ArtifactHandle, *args) -> DeployedInstance:
        """
        Deploy a contract and block until the transaction is confirmed.

        Args:
            artifact: Resolved artifact to deploy
            *args: Constructor arguments

        Returns:
            The confirmed instance

        Raises:
            DeploymentError: if the transaction is rejected, reverts or times out
        """
        if not artifact.is_deployable:
            raise DeploymentError(f"{artifact.name} has no bytecode (interface or abstract contract)")

        logger.info(f"Deploying {artifact.name} from {self.account.address}...")
        factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

        try:
            tx = factory.constructor(*args).build_transaction(self._transaction_params())
            signed_tx = self.w3.eth.account.sign_transaction(tx, self.private_key)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
            logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")

            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.timeout)
        except TimeExhausted as e:
            logger.error(f"Deployment of {artifact.name} not confirmed within {self.timeout}s")
            raise DeploymentError(f"{artifact.name}: transaction not confirmed within {self.timeout}s") from e
        except ContractLogicError as e:
            logger.error(f"Constructor of {artifact.name} reverted: {e}")
            raise DeploymentError(f"{artifact.name}: constructor reverted: {e}") from e
        except (Web3Exception, ValueError) as e:
            logger.error(f"Failed to deploy {artifact.name}: {e}")
            raise DeploymentError(f"{artifact.name}: {e}") from e

        if receipt['status'] != 1:
            raise DeploymentError(f"{artifact.name}: transaction {Web3.to_hex(tx_hash)} reverted")

        contract_address = receipt.get('contractAddress')
        if not contract_address:
            raise DeploymentError(f"{artifact.name}: receipt has no contract address")

        instance = DeployedInstance(
            name=artifact.name,
            address=Web3.to_checksum_address(contract_address),
            transaction_hash=Web3.to_hex(tx_hash),
            block_number=receipt['blockNumber'],
            abi=artifact.abi,
        )
        logger.info(f"{artifact.name} confirmed in block {instance.block_number} at {instance.address}")

        self.instances.append(instance)
        self._latest[artifact.name] = instance
        return instance

    def deployed(self, name: str) -> DeployedInstance:
        """Return the most recent confirmed instance of a contract."""
        try:
            return self._latest[name]
        except KeyError:
            raise DeploymentError(f"{name} has not been deployed") from None

    def contract(self, instance: DeployedInstance):
        """Bind a web3 contract object to a deployed instance."""
        return self.w3.eth.contract(address=instance.address, abi=instance.abi)
