"""Contract deployment for compiled Cairo classes."""
from .deployer import ContractDeployer, DeploymentResult, deploy_contract

__all__ = ["ContractDeployer", "DeploymentResult", "deploy_contract"]
