"""Deploy the AMAL contract and report its address."""

CONTRACT_NAME = "AMAL"


def migrate(deployer, artifacts):
    amal = artifacts.resolve(CONTRACT_NAME)

    contract = deployer.deploy(amal)

    print(f"Contract address: {contract.address}")
