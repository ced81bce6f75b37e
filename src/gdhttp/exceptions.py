"""
Exception classes for gdhttp
"""

from typing import Optional, Dict, Any


class GdHttpError(Exception):
    """Base exception for all gdhttp errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(GdHttpError):
    """Exception raised for validation failures"""
    pass


class UsageError(GdHttpError):
    """Exception raised for invalid command-line usage"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "USAGE_ERROR", details)


class ConfigReadError(GdHttpError):
    """Exception raised when the credentials file cannot be read or decoded"""

    def __init__(self, message: str, path: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFIG_READ_ERROR", details)
        self.path = path


class MalformedURL(GdHttpError):
    """Exception raised when a URL does not parse after normalization"""

    def __init__(self, url: str, reason: str = "", details: Optional[Dict[str, Any]] = None):
        message = f"malformed URL {url!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, "MALFORMED_URL", details)
        self.url = url


class NetworkError(GdHttpError):
    """Exception raised when the request cannot be sent or the response not received"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "NETWORK_ERROR", details)


class UnsupportedAlgorithm(GdHttpError):
    """Exception raised for an unknown signing algorithm tag"""

    def __init__(self, algorithm: Any):
        super().__init__(
            f"Unsupported signing algorithm: {algorithm}",
            "UNSUPPORTED_ALGORITHM",
            {"algorithm": str(algorithm)}
        )
        self.algorithm = algorithm
