from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


TRUE_VALUES = ("1", "true", "yes", "on")


class VerifierConfig(BaseModel):
    """
    Token verification settings.
    """
    leeway: int = Field(default=0, ge=0, description="Clock skew tolerance in seconds")
    audience: Optional[str] = Field(default=None, description="Expected aud claim; not checked when unset")
    issuer: Optional[str] = Field(default=None, description="Expected iss claim; not checked when unset")
    verify_exp: bool = Field(default=True, description="Whether to reject expired tokens")
    required_claims: List[str] = Field(default_factory=list, description="Claims that must be present")

    @classmethod
    def from_env(cls) -> "VerifierConfig":
        """
        Load verification settings from environment variables.

        Environment variables:
            VAPID_LEEWAY: clock skew tolerance in seconds
            VAPID_AUDIENCE: expected audience
            VAPID_ISSUER: expected issuer
            VAPID_VERIFY_EXP: "true"/"false"
            VAPID_REQUIRED_CLAIMS: comma separated claim names

        Returns:
            VerifierConfig instance
        """
        import os

        leeway = int(os.getenv("VAPID_LEEWAY", "0"))
        audience = os.getenv("VAPID_AUDIENCE") or None
        issuer = os.getenv("VAPID_ISSUER") or None
        verify_exp = os.getenv("VAPID_VERIFY_EXP", "true").strip().lower() in TRUE_VALUES
        required_claims = [
            claim.strip()
            for claim in os.getenv("VAPID_REQUIRED_CLAIMS", "").split(",")
            if claim.strip()
        ]

        return cls(
            leeway=leeway,
            audience=audience,
            issuer=issuer,
            verify_exp=verify_exp,
            required_claims=required_claims,
        )


@lru_cache()
def get_verifier_config() -> VerifierConfig:
    """
    Get cached verifier configuration, reading .env first.
    """
    load_dotenv()
    return VerifierConfig.from_env()
