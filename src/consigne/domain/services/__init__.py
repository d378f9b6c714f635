"""
Domain service interfaces.
"""

from consigne.domain.services.i_contract_gateway import IContractGateway
from consigne.domain.services.i_transaction_signer import ITransactionSigner

__all__ = [
    "IContractGateway",
    "ITransactionSigner",
]
