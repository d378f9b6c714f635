"""
Blockchain infrastructure components.
"""

from consigne.infrastructure.blockchain.contract_bridge_client import (
    ContractBridgeClient,
)

__all__ = [
    "ContractBridgeClient",
]
