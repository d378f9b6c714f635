"""
Contract bridge wire schemas.

Request and response models for the bridge that builds, simulates and
broadcasts contract transactions.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# ================================================================
# Request Schemas
# ================================================================


class SimulateRequest(BaseModel):
    """Read-only simulation of a contract method."""

    model_config = ConfigDict(populate_by_name=True)

    contract_id: str = Field(..., alias="contractId")
    method: str
    args: List[Any] = Field(default_factory=list)
    # Bridge-side result parsing fails on this contract's structs
    parse_result: bool = Field(default=False, alias="parseResult")


class PrepareRequest(BaseModel):
    """Build and simulate a state-changing call for signing."""

    model_config = ConfigDict(populate_by_name=True)

    contract_id: str = Field(..., alias="contractId")
    method: str
    args: List[Any] = Field(default_factory=list)
    source: str
    network_passphrase: str = Field(..., alias="networkPassphrase")


class SubmitRequest(BaseModel):
    """Broadcast a signed transaction."""

    model_config = ConfigDict(populate_by_name=True)

    signed_transaction: str = Field(..., alias="signedTransaction")


# ================================================================
# Response Schemas
# ================================================================


class SimulateResponse(BaseModel):
    """Simulation outcome; retval is the raw tagged-value tree."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    retval: Optional[dict] = None
    min_resource_fee: Optional[str] = Field(default=None, alias="minResourceFee")


class PrepareResponse(BaseModel):
    """Unsigned transaction with auth entries and fee applied."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    transaction: str = Field(..., min_length=1)
    fee: Optional[str] = None
    auth_entries: int = Field(default=0, alias="authEntries")


class SubmitResponse(BaseModel):
    """Broadcast outcome."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    hash: str = Field(..., min_length=1)
    status: str = "pending"
    retval: Optional[dict] = None
    ledger: Optional[int] = None


class BridgeErrorResponse(BaseModel):
    """Error body returned with 4xx statuses."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    error: str = "Unknown bridge error"
    contract_error_code: Optional[int] = Field(
        default=None, alias="contractErrorCode"
    )
