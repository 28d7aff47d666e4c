# backend/app/domain/exceptions.py

class ProviderError(Exception):
    """Base exception for failures of an external data provider."""
    pass

class UpstreamUnavailableError(ProviderError):
    """Raised when a provider cannot be reached, times out or answers with an HTTP error."""
    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider} unavailable: {reason}")

class MalformedUpstreamPayloadError(ProviderError):
    """Raised when a provider answers with JSON of an unexpected shape."""
    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider} returned a malformed payload: {reason}")

class FallbackExhaustedError(Exception):
    """Raised when every step of a fallback chain failed."""
    def __init__(self, chain: str):
        self.chain = chain
        super().__init__(f"Fallback chain '{chain}' has no remaining steps.")

class InvalidAssessmentPayloadError(ValueError):
    """Raised when a damage assessment payload cannot be parsed at all."""
    pass
