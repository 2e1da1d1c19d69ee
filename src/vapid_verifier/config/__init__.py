from .verifier_config import VerifierConfig, get_verifier_config

__all__ = ["VerifierConfig", "get_verifier_config"]
