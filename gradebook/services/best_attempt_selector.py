"""
gradebook/services/best_attempt_selector.py
Best-attempt selection

For one learner and a set of assessments, keep only the highest percentage
per assessment. Assessments the learner never attempted are absent from the
result; they must not be averaged in as 0.
"""
import logging
from typing import Dict, Optional, Sequence

from gradebook.config import settings
from gradebook.repositories.interfaces import SubmissionStore
from gradebook.services.upstream import call_upstream

logger = logging.getLogger(__name__)


class BestAttemptSelector:

    def __init__(
        self,
        submission_store: SubmissionStore,
        upstream_timeout: Optional[float] = settings.UPSTREAM_TIMEOUT_SECONDS,
    ):
        self.submission_store = submission_store
        self.upstream_timeout = upstream_timeout

    async def select(
        self,
        learner_id: int,
        assessment_ids: Sequence[int],
        course_id: Optional[int] = None,
    ) -> Dict[int, float]:
        """
        Map assessment id -> best percentage.

        An empty id list short-circuits without touching the store.
        """
        if not assessment_ids:
            return {}

        best = await call_upstream(
            "SubmissionStore",
            "best_percentage_per_assessment",
            self.submission_store.best_percentage_per_assessment(learner_id, list(assessment_ids)),
            timeout=self.upstream_timeout,
            course_id=course_id,
        )

        requested = set(assessment_ids)
        return {
            assessment_id: float(percentage)
            for assessment_id, percentage in best.items()
            if assessment_id in requested and percentage is not None
        }
