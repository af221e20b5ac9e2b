import pytest

from migrations.mock_chain import write_artifact


@pytest.fixture
def build_dir(tmp_path):
    directory = tmp_path / "build" / "contracts"
    write_artifact(directory, "AMAL")
    return directory


@pytest.fixture
def migration_env(monkeypatch, tmp_path, build_dir):
    """Environment for a migration run confined to tmp_path."""
    monkeypatch.setenv("PRIVATE_KEY", "0x" + "11" * 32)
    monkeypatch.setenv("ARTIFACTS_DIR", str(build_dir))
    monkeypatch.setenv("DEPLOYMENT_FILE", str(tmp_path / "deployment.json"))
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "migrations.log"))
    for name in ("RPC_URL", "CHAIN_ID", "MIGRATIONS_DIR", "TX_TIMEOUT", "GAS_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path
