from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Case ids are caller-supplied; identities are opaque, compared only for equality
CaseId = Union[int, str]


def is_identity(value: object) -> bool:
    """Caller, defendant and investor identities are non-empty strings."""
    return isinstance(value, str) and bool(value.strip())


class CaseStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class Case(BaseModel):
    case_id: CaseId
    plaintiff: str
    defendant: str
    jurisdiction: str
    details: str
    filing_date: int
    status: CaseStatus = CaseStatus.PENDING
    verifier: Optional[str] = None

    @model_validator(mode="after")
    def _verifier_matches_status(self) -> "Case":
        # verifier is set exactly when the case has been resolved
        if (self.status is CaseStatus.PENDING) != (self.verifier is None):
            raise ValueError(f"verifier must be set iff status != pending (status={self.status.value})")
        return self

    @property
    def is_resolved(self) -> bool:
        return self.status is not CaseStatus.PENDING


class CaseInvestmentPool(BaseModel):
    total_invested: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)
    is_open: bool = False

    @model_validator(mode="after")
    def _totals_agree(self) -> "CaseInvestmentPool":
        if (self.total_invested == 0) != (self.total_tokens == 0):
            raise ValueError("total_invested and total_tokens must be zero together")
        return self


class Investment(BaseModel):
    model_config = ConfigDict(frozen=True)

    investment_id: int = Field(ge=1)
    investor: str
    case_id: CaseId
    amount: int = Field(gt=0)
    tokens_issued: int = Field(ge=0)
    investment_date: int
