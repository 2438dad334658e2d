"""HTTP client for the reconciliation service.

One client object is built at startup with the service URL and the bearer
token, then handed to whoever needs to talk to the service.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import requests

from rapprochement.domain.entities import FileKind, UploadHandle
from rapprochement.domain.errors import DomainError
from rapprochement.domain.files import check_extension, parse_kind
from rapprochement.domain.results import MatchesPage, ReconcileJob
from rapprochement.domain.rules import ReconciliationRules

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
# Reconciliation of large files can take several minutes
DEFAULT_TIMEOUT = 600


class ApiError(DomainError):
    """The reconciliation service rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(ApiError):
    """The service refused the token (HTTP 401)."""


class ReconciliationClient:
    """Client for the reconciliation service endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Service root URL, without the ``/api`` prefix
            token: Bearer token added to every request
            timeout: Request timeout in seconds
            session: Session to send requests with; a new one by default
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, path: str, failure_message: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"{failure_message}: {e}")

        if response.status_code == 401:
            raise AuthenticationError(
                _error_detail(response) or "Authentication required", status_code=401
            )
        if not response.ok:
            raise ApiError(
                _error_detail(response) or failure_message, status_code=response.status_code
            )
        return response.json()

    def upload_file(self, file_path: Union[str, Path], kind: Union[str, FileKind]) -> UploadHandle:
        """Send an export file to the service for ingestion.

        Raises:
            ValidationError: If the kind or file type is not accepted
            ApiError: If the service rejects the upload
        """
        file_kind = parse_kind(kind)
        path = Path(file_path)
        check_extension(path)
        with open(path, "rb") as f:
            data = self._request(
                "POST",
                f"/api/upload/{file_kind.value}",
                "Upload failed",
                files={"file": (path.name, f)},
            )
        try:
            return UploadHandle(
                upload_id=str(data["uploadId"]),
                filename=data.get("filename", path.name),
                rows_count=int(data.get("rowsCount", 0)),
                preview=tuple(data.get("preview") or ()),
            )
        except KeyError as e:
            raise ApiError(f"Upload response is missing {e}")
        except (TypeError, ValueError, AttributeError) as e:
            raise ApiError(f"Upload response is malformed: {e}")

    def start_reconciliation(
        self,
        bank_upload_id: str,
        accounting_upload_id: str,
        rules: Optional[ReconciliationRules] = None,
    ) -> ReconcileJob:
        """Start matching a bank upload against an accounting upload."""
        if rules is None:
            rules = ReconciliationRules()
        data = self._request(
            "POST",
            "/api/reconcile",
            "Reconciliation failed",
            json={
                "bank_file": bank_upload_id,
                "accounting_file": accounting_upload_id,
                "rules": rules.to_payload(),
            },
        )
        try:
            return ReconcileJob(job_id=str(data["jobId"]), status=str(data.get("status", "")))
        except KeyError as e:
            raise ApiError(f"Reconciliation response is missing {e}")
        except (TypeError, AttributeError) as e:
            raise ApiError(f"Reconciliation response is malformed: {e}")

    def get_matches(self, job_id: str, page: int = 1) -> MatchesPage:
        """Fetch one page of results, checked against the result contract."""
        data = self._request(
            "GET",
            f"/api/reconcile/{job_id}/results",
            "Failed to fetch matches",
            params={"page": page},
        )
        return MatchesPage.from_payload(data)

    def validate_match(
        self, job_id: str, match_id: str, action: str, account_code: Optional[str] = None
    ) -> bool:
        """Accept or reject a proposed match."""
        data = self._request(
            "POST",
            f"/api/reconcile/{job_id}/matches/{match_id}/validate",
            "Validation failed",
            json={"action": action, "accountCode": account_code},
        )
        return bool(data.get("ok"))

    def export_results(self, job_id: str, fmt: str = "excel") -> Any:
        """Ask the service to export a job's results."""
        return self._request(
            "GET",
            f"/api/reconcile/{job_id}/export",
            "Export failed",
            params={"format": fmt},
        )

    def get_regularization_entries(self, job_id: str) -> Any:
        """Fetch the regularization entries proposed for a job."""
        return self._request(
            "GET",
            f"/api/reconcile/{job_id}/regularization",
            "Failed to fetch regularization entries",
        )

    def list_reconciliations(self) -> list:
        """List past reconciliation jobs."""
        return self._request("GET", "/api/reconciliations", "Failed to fetch reconciliations")


def _error_detail(response: requests.Response) -> Optional[str]:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and payload.get("detail"):
        return str(payload["detail"])
    return None
