"""Client for the remote reconciliation service."""

from rapprochement.client.api_client import (
    ApiError,
    AuthenticationError,
    ReconciliationClient,
)

__all__ = ["ApiError", "AuthenticationError", "ReconciliationClient"]
