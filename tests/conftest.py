"""Shared pytest fixtures for rapprochement tests."""

import tempfile
import os
from pathlib import Path
import pytest

from rapprochement.client.api_client import ReconciliationClient
from rapprochement.database.factories import create_sqlite_database
from rapprochement.domain.upload import UploadService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def upload_service(temp_db):
    """Create an UploadService with a temporary database."""
    return UploadService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


class StubResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class StubSession:
    """Records requests and replays canned responses in order."""

    def __init__(self, responses):
        self.headers = {}
        self.calls = []
        self._responses = list(responses)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def make_client():
    """Build a client whose session replays the given responses.

    Each response is a ``(status_code, payload)`` tuple or an exception to raise.
    """

    def _make(*responses, token="test-token"):
        session = StubSession(
            r if isinstance(r, Exception) else StubResponse(*r) for r in responses
        )
        client = ReconciliationClient(
            base_url="http://recon.test", token=token, session=session
        )
        return client, session

    return _make


@pytest.fixture
def matches_payload():
    """A results response that honours the result contract."""
    return {
        "jobId": "job-1",
        "summary": {
            "bankTotal": 474.5,
            "accountingTotal": 474.5,
            "matchedCount": 3,
            "suspenseCount": 1,
            "initialGap": 25.5,
            "residualGap": 0.0,
            "coverageRatio": 0.75,
            "openingBalance": 1000.0,
            "aiAssistedMatches": 1,
        },
        "matches": [
            {"id": "m1", "bankTx": {"libelle": "VIREMENT"}, "accountingTx": {}, "score": 1.0, "rule": "exact", "status": "auto"},
            {"id": "m2", "bankTx": {"libelle": "FRAIS"}, "accountingTx": {}, "score": 0.82, "rule": "fuzzy_strong", "status": "pending"},
            {"id": "m3", "bankTx": {"libelle": "CB"}, "accountingTxs": [{}, {}], "score": 0.7, "rule": "group", "status": "pending"},
        ],
        "suspense": [
            {"transaction": {"libelle": "AGIOS"}, "type": "bank", "reason": "No candidate", "suggestedCategory": "Frais bancaires"},
        ],
        "pagination": {"page": 1, "limit": 50, "total": 3, "totalPages": 1},
    }
