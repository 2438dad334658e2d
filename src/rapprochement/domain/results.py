"""Result contract returned by the reconciliation service.

Matching happens remotely; these classes only read the response and check
the invariants the rest of the tool relies on before showing it.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from rapprochement.domain.errors import ValidationError

MATCH_RULES = frozenset({"exact", "fuzzy_strong", "fuzzy_weak", "ai_assisted", "group"})

COVERAGE_TOLERANCE = 1e-4


def compute_coverage_ratio(matched_count: int, suspense_count: int) -> float:
    """Share of matched items among matched plus suspense items."""
    total = matched_count + suspense_count
    if total == 0:
        return 0.0
    return matched_count / total


@dataclass(frozen=True)
class MatchSummary:
    """Totals and gaps of a reconciliation job."""

    bank_total: float
    accounting_total: float
    matched_count: int
    suspense_count: int
    initial_gap: float
    residual_gap: float
    coverage_ratio: float
    opening_balance: float
    ai_assisted_matches: Optional[int] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "MatchSummary":
        try:
            return cls(
                bank_total=float(data["bankTotal"]),
                accounting_total=float(data["accountingTotal"]),
                matched_count=int(data["matchedCount"]),
                suspense_count=int(data["suspenseCount"]),
                initial_gap=float(data["initialGap"]),
                residual_gap=float(data["residualGap"]),
                coverage_ratio=float(data["coverageRatio"]),
                opening_balance=float(data["openingBalance"]),
                ai_assisted_matches=data.get("aiAssistedMatches"),
            )
        except KeyError as e:
            raise ValidationError(f"Reconciliation summary is missing {e}")
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Reconciliation summary is malformed: {e}")

    def validate(self) -> None:
        """Check the coverage ratio against the counts.

        Raises:
            ValidationError: If counts are negative or the ratio disagrees
        """
        if self.matched_count < 0 or self.suspense_count < 0:
            raise ValidationError("Matched and suspense counts cannot be negative")
        expected = compute_coverage_ratio(self.matched_count, self.suspense_count)
        if not math.isclose(self.coverage_ratio, expected, abs_tol=COVERAGE_TOLERANCE):
            raise ValidationError(
                f"Coverage ratio {self.coverage_ratio} does not match "
                f"{self.matched_count} matched / {self.suspense_count} in suspense"
            )


@dataclass(frozen=True)
class Match:
    """One bank transaction paired with one or more accounting entries."""

    id: str
    bank_tx: Any
    score: float
    rule: str
    status: str
    accounting_tx: Any = None
    accounting_txs: list = field(default_factory=list)
    recon_id: Optional[str] = None
    ai_confidence: Optional[float] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "Match":
        try:
            return cls(
                id=str(data["id"]),
                bank_tx=data.get("bankTx"),
                score=float(data["score"]),
                rule=str(data["rule"]),
                status=str(data.get("status", "")),
                accounting_tx=data.get("accountingTx"),
                accounting_txs=list(data.get("accountingTxs") or []),
                recon_id=data.get("reconId"),
                ai_confidence=data.get("aiConfidence"),
            )
        except KeyError as e:
            raise ValidationError(f"Match is missing {e}")
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Match is malformed: {e}")

    def validate(self) -> None:
        if self.rule not in MATCH_RULES:
            raise ValidationError(
                f"Match {self.id} has unknown rule '{self.rule}'. "
                f"Expected one of: {', '.join(sorted(MATCH_RULES))}"
            )
        if not 0 <= self.score <= 1:
            raise ValidationError(f"Match {self.id} has score {self.score} outside [0, 1]")


@dataclass(frozen=True)
class SuspenseItem:
    """Transaction the matcher could not pair."""

    transaction: Any
    type: str
    reason: str
    suggested_category: Optional[str] = None
    ai_confidence: Optional[float] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "SuspenseItem":
        return cls(
            transaction=data.get("transaction"),
            type=str(data.get("type", "")),
            reason=str(data.get("reason", "")),
            suggested_category=data.get("suggestedCategory"),
            ai_confidence=data.get("aiConfidence"),
        )


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int
    total_pages: int


@dataclass(frozen=True)
class MatchesPage:
    """One page of results for a reconciliation job."""

    job_id: str
    summary: MatchSummary
    matches: list[Match]
    suspense: list[SuspenseItem] = field(default_factory=list)
    pagination: Optional[Pagination] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "MatchesPage":
        """Read a results response and check its invariants.

        Raises:
            ValidationError: If the response breaks the result contract
        """
        if "summary" not in data:
            raise ValidationError("Reconciliation results are missing the summary")

        pagination = None
        if data.get("pagination"):
            p = data["pagination"]
            pagination = Pagination(
                page=int(p.get("page", 1)),
                limit=int(p.get("limit", 0)),
                total=int(p.get("total", 0)),
                total_pages=int(p.get("totalPages", 0)),
            )

        page = cls(
            job_id=str(data.get("jobId", "")),
            summary=MatchSummary.from_payload(data["summary"]),
            matches=[Match.from_payload(m) for m in data.get("matches") or []],
            suspense=[SuspenseItem.from_payload(s) for s in data.get("suspense") or []],
            pagination=pagination,
        )
        page.validate()
        return page

    def validate(self) -> None:
        self.summary.validate()
        for match in self.matches:
            match.validate()


@dataclass(frozen=True)
class ReconcileJob:
    """Handle of a reconciliation started on the service."""

    job_id: str
    status: str
