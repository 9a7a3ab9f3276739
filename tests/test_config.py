"""
Unit Tests for deployer configuration
"""

import pytest
from starknet_py.net.models import StarknetChainId

from starknet_deployer.config import DeployerConfig, parse_chain_id
from starknet_deployer.errors import ConfigError


@pytest.fixture
def environ():
    return {
        "RPC_ENDPOINT": "http://127.0.0.1:5050",
        "DEPLOYER_ADDRESS": "0x54b9b1b06e7110f1ef0b0c3467610438311da4680d3c75d557b52788591741",
        "DEPLOYER_PRIVATE_KEY": "0x5ce311283aa15aa3dc58d99fe122cdaa389615e7d800f98fab238c5a7c8d624",
    }


class TestDeployerConfig:
    """Test loading configuration from a mapping"""

    def test_from_env(self, environ):
        config = DeployerConfig.from_env(environ)

        assert config.rpc_endpoint == "http://127.0.0.1:5050"
        assert config.account_address == 0x54b9b1b06e7110f1ef0b0c3467610438311da4680d3c75d557b52788591741
        assert config.private_key == 0x5ce311283aa15aa3dc58d99fe122cdaa389615e7d800f98fab238c5a7c8d624
        assert config.chain_id is None

    def test_missing_credentials_fail_fast(self, environ):
        del environ["DEPLOYER_PRIVATE_KEY"]
        environ["DEPLOYER_ADDRESS"] = "  "

        with pytest.raises(ConfigError) as exc_info:
            DeployerConfig.from_env(environ)

        message = str(exc_info.value)
        assert "DEPLOYER_ADDRESS" in message
        assert "DEPLOYER_PRIVATE_KEY" in message

    def test_missing_endpoint(self, environ):
        del environ["RPC_ENDPOINT"]

        with pytest.raises(ConfigError, match="RPC_ENDPOINT"):
            DeployerConfig.from_env(environ)

    def test_invalid_address(self, environ):
        environ["DEPLOYER_ADDRESS"] = "0xnothex"

        with pytest.raises(ConfigError, match="DEPLOYER_ADDRESS"):
            DeployerConfig.from_env(environ)

    def test_private_key_not_in_repr(self, environ):
        config = DeployerConfig.from_env(environ)

        assert "5ce311283" not in repr(config)
        assert str(config.private_key) not in repr(config)

    def test_negative_values_rejected(self, environ):
        environ["DEPLOYER_ADDRESS"] = "-5"

        with pytest.raises(ConfigError, match="negative"):
            DeployerConfig.from_env(environ)

    def test_reads_dotenv_from_working_directory(self, environ, tmp_path, monkeypatch):
        for name in environ:
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)
        (tmp_path / ".env").write_text(
            "".join(f"{name}={value}\n" for name, value in environ.items())
        )
        monkeypatch.chdir(tmp_path)

        config = DeployerConfig.from_env()

        assert config.rpc_endpoint == environ["RPC_ENDPOINT"]
        assert config.account_address == int(environ["DEPLOYER_ADDRESS"], 16)

    def test_explicit_env_file(self, environ, tmp_path, monkeypatch):
        for name in environ:
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)
        env_file = tmp_path / "deploy.env"
        env_file.write_text(
            "".join(f"{name}={value}\n" for name, value in environ.items())
        )

        config = DeployerConfig.from_env(env_file=str(env_file))

        assert config.private_key == int(environ["DEPLOYER_PRIVATE_KEY"], 16)

    def test_chain_id(self, environ):
        environ["STARKNET_CHAIN_ID"] = "SN_SEPOLIA"

        config = DeployerConfig.from_env(environ)

        assert config.chain_id == StarknetChainId.SEPOLIA


class TestParseChainId:
    """Test chain id parsing"""

    def test_aliases(self):
        assert parse_chain_id("SN_MAIN") == StarknetChainId.MAINNET
        assert parse_chain_id("sepolia") == StarknetChainId.SEPOLIA

    def test_numeric(self):
        assert parse_chain_id("0x534e5f5345504f4c4941") == StarknetChainId.SEPOLIA
        assert parse_chain_id("1") == 1

    def test_short_string(self):
        assert parse_chain_id("KATANA") == int.from_bytes(b"KATANA", "big")

    def test_too_long(self):
        with pytest.raises(ConfigError):
            parse_chain_id("X" * 32)
