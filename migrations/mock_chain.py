"""Web3 stand-ins and artifact writers shared by the test modules."""

import json
from unittest.mock import MagicMock

DEPLOYER_ADDRESS = "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1"
AMAL_ABI = [{"inputs": [], "stateMutability": "nonpayable", "type": "constructor"}]


def make_w3(contract_addresses, chain_id=1337):
    """Build a Web3 stand-in whose deployments confirm at the given addresses."""
    w3 = MagicMock()
    w3.eth.account.from_key.return_value = MagicMock(address=DEPLOYER_ADDRESS)
    w3.eth.chain_id = chain_id
    w3.eth.gas_price = 1_000_000_000
    w3.eth.get_transaction_count.return_value = 0
    w3.eth.send_raw_transaction.side_effect = [
        bytes([i + 1]) * 32 for i in range(len(contract_addresses))
    ]
    w3.eth.wait_for_transaction_receipt.side_effect = [
        {'status': 1, 'contractAddress': address, 'blockNumber': i + 1}
        for i, address in enumerate(contract_addresses)
    ]
    return w3


def write_artifact(directory, name, bytecode="0x6080604052", abi=None):
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.json"
    path.write_text(json.dumps({
        "contractName": name,
        "abi": AMAL_ABI if abi is None else abi,
        "bytecode": bytecode,
    }))
    return path
