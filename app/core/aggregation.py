"""Dashboard statistics over paper and mock test rows."""
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from app.models.mock_test import MockTest
from app.models.paper import Paper
from app.models.stats import BranchCount, DerivedStats, SubjectShare

TOP_SUBJECTS = 6
TOP_BRANCHES = 5
RECENT_UPLOAD_WINDOW = timedelta(days=30)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def subject_shares(papers: List[Paper], total_downloads: int, top: int = TOP_SUBJECTS) -> List[SubjectShare]:
    """
    Group downloads by subject, highest first.

    Args:
        papers: Paper rows
        total_downloads: Sum of download_count over ``papers``
        top: Number of subjects to keep

    Returns:
        Up to ``top`` subject shares. Ties keep the order in which subjects
        first appear in ``papers``. Percentages are 0 when nothing was downloaded.
    """
    downloads_by_subject: Dict[str, int] = {}
    for paper in papers:
        downloads_by_subject[paper.subject] = downloads_by_subject.get(paper.subject, 0) + paper.download_count

    ranked = sorted(downloads_by_subject.items(), key=lambda item: item[1], reverse=True)
    return [
        SubjectShare(
            subject=subject,
            downloads=downloads,
            percentage=(downloads / total_downloads * 100) if total_downloads > 0 else 0.0,
        )
        for subject, downloads in ranked[:top]
    ]


def branch_counts(papers: List[Paper], top: int = TOP_BRANCHES) -> List[BranchCount]:
    """Paper count per branch, largest first, ties in first-appearance order."""
    papers_by_branch: Dict[str, int] = {}
    for paper in papers:
        papers_by_branch[paper.branch] = papers_by_branch.get(paper.branch, 0) + 1

    ranked = sorted(papers_by_branch.items(), key=lambda item: item[1], reverse=True)
    return [BranchCount(branch=branch, papers=count) for branch, count in ranked[:top]]


def compute_stats(
    papers: List[Paper],
    tests: List[MockTest],
    session_count: int,
    now: Optional[datetime] = None,
) -> DerivedStats:
    """Fold paper and mock test rows into dashboard statistics.

    ``session_count`` is passed through unchanged as ``active_students``.
    Empty inputs give zero totals and empty groups.
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    total_downloads = sum(p.download_count for p in papers)
    cutoff = now - RECENT_UPLOAD_WINDOW

    return DerivedStats(
        total_papers=len(papers),
        total_downloads=total_downloads,
        per_subject=subject_shares(papers, total_downloads),
        per_branch=branch_counts(papers),
        total_attempts=sum(t.attempt_count for t in tests),
        active_students=session_count,
        total_subjects=len({p.subject for p in papers}),
        total_mock_tests=len(tests),
        recent_uploads=sum(1 for p in papers if _as_utc(p.upload_date) >= cutoff),
    )


def increment_download(paper: Paper) -> Paper:
    """Copy of ``paper`` with one more download. Persisting it is the caller's job."""
    return paper.model_copy(update={"download_count": paper.download_count + 1}, deep=True)


def increment_attempt(test: MockTest) -> MockTest:
    """Copy of ``test`` with one more attempt. Persisting it is the caller's job."""
    return test.model_copy(update={"attempt_count": test.attempt_count + 1}, deep=True)
