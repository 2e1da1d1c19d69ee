"""
Result schemas for key encoding and token verification.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class EncodedKeyPair(BaseModel):
    """PEM containers built from raw key bytes."""
    model_config = ConfigDict(frozen=True)

    public: str = Field(..., description="PUBLIC KEY PEM")
    private: Optional[str] = Field(None, description="EC PRIVATE KEY PEM, if a scalar was supplied")


class VerificationResult(BaseModel):
    """Outcome of a single token verification."""
    model_config = ConfigDict(frozen=True)

    ok: bool = Field(..., description="Whether the token verified")
    claims: Optional[Dict[str, Any]] = Field(None, description="Decoded claims on success")
    error: Optional[str] = Field(None, description="Error class name on failure")
    reason: Optional[str] = Field(None, description="Failure detail")
