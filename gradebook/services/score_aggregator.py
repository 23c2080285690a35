"""
gradebook/services/score_aggregator.py
Weighted course scoring

RULES:
- Per kind: average of best-attempt percentages (attempted assessments only)
- Kind score = round(avg percent) / 10  (0-10 scale, one decimal)
- Kind weight = kind.weight if the course has >= 1 assessment of that kind, else 0
  (weight depends on the assessment count, never on whether anything was submitted)
- Total = round(sum(score_or_0 * weight) / sum(weight) * 10) / 10
- Total is None when the course has no assessments at all
"""
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence

from gradebook.orm.assessment import AssessmentKind
from gradebook.utils.rounding import round_half_up


@dataclass(frozen=True)
class KindScore:
    """Scoring inputs and outputs for one assessment kind within one course."""
    kind: AssessmentKind
    assessment_count: int
    best_percentages: Mapping[int, float] = field(default_factory=dict)

    @property
    def weight(self) -> float:
        return self.kind.weight if self.assessment_count > 0 else 0.0

    @property
    def avg_percent(self) -> Optional[float]:
        if not self.best_percentages:
            return None
        values = list(self.best_percentages.values())
        return sum(values) / len(values)

    @property
    def score(self) -> Optional[float]:
        avg = self.avg_percent
        if avg is None:
            return None
        return round_half_up(avg) / 10


@dataclass(frozen=True)
class CourseScore:
    by_kind: Mapping[AssessmentKind, KindScore]

    def kind(self, kind: AssessmentKind) -> KindScore:
        return self.by_kind.get(kind) or KindScore(kind=kind, assessment_count=0)

    @property
    def quiz_score(self) -> Optional[float]:
        return self.kind(AssessmentKind.QUIZ).score

    @property
    def practice_score(self) -> Optional[float]:
        return self.kind(AssessmentKind.PRACTICE).score

    @property
    def total_weight(self) -> float:
        return sum(ks.weight for ks in self.by_kind.values())

    @property
    def total(self) -> Optional[float]:
        """Weighted 0-10 total, one decimal."""
        total_weight = self.total_weight
        if total_weight <= 0:
            return None
        weighted = sum((ks.score or 0.0) * ks.weight for ks in self.by_kind.values())
        return round_half_up(weighted / total_weight * 10) / 10

    @property
    def weighted_percent(self) -> Optional[float]:
        """Same weighting on the unrounded 0-100 averages. None when no assessments."""
        total_weight = self.total_weight
        if total_weight <= 0:
            return None
        weighted = sum((ks.avg_percent or 0.0) * ks.weight for ks in self.by_kind.values())
        return weighted / total_weight


class ScoreAggregator:
    """Folds best attempts into a CourseScore. Pure; no I/O."""

    @staticmethod
    def aggregate(
        assessment_ids: Mapping[AssessmentKind, Sequence[int]],
        best_attempts: Mapping[AssessmentKind, Mapping[int, float]],
    ) -> CourseScore:
        by_kind: Dict[AssessmentKind, KindScore] = {}
        for kind in AssessmentKind:
            ids = assessment_ids.get(kind) or []
            known = set(ids)
            # Only attempts on this kind's own assessments count
            best = {
                aid: pct
                for aid, pct in (best_attempts.get(kind) or {}).items()
                if aid in known
            }
            by_kind[kind] = KindScore(kind=kind, assessment_count=len(ids), best_percentages=best)
        return CourseScore(by_kind=by_kind)
