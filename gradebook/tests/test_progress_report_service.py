"""ProgressReportService over in-memory collaborators (clock fixed at 2024-03-15 12:00 UTC)."""
from datetime import timedelta

import pytest

from gradebook.exceptions import InvalidIdentifierError, UpstreamUnavailableError
from gradebook.orm.assessment import AssessmentKind
from gradebook.orm.enrollment import EnrollmentStatus

QUIZ = AssessmentKind.QUIZ
PRACTICE = AssessmentKind.PRACTICE
LEARNER = 42


def build_course(world, course_id, quizzes=0, practices=0, enroll=True, **course_kwargs):
    world.add_course(course_id, **course_kwargs)
    quiz_ids = [world.add_assessment(course_id, QUIZ) for _ in range(quizzes)]
    practice_ids = [world.add_assessment(course_id, PRACTICE) for _ in range(practices)]
    if enroll:
        world.enroll(LEARNER, course_id)
    return quiz_ids, practice_ids


class TestUserProgressReport:

    @pytest.mark.asyncio
    async def test_reference_course(self, world, progress_service, now):
        (q1, q2), (p1,) = build_course(world, 1, quizzes=2, practices=1, code="CS101", name="Intro")
        world.submit(LEARNER, q1, 80.0, submitted_at=now)
        world.submit(LEARNER, q2, 100.0, submitted_at=now - timedelta(days=1))
        world.submit(LEARNER, p1, 70.0, submitted_at=now - timedelta(days=2))

        report = await progress_service.get_user_progress_report(LEARNER)

        assert report.learner_id == LEARNER
        assert report.streak_days == 3
        assert report.exercises_completed == "3/3"
        assert report.average_score == 7.8
        [card] = report.course_progress
        assert card.code == "CS101"
        assert card.progress_percent == 100
        assert card.exercises_progress == "3/3"
        assert card.study_time == "0h 30m"
        assert card.category == "Good"
        assert card.current_score == 7.8

    @pytest.mark.asyncio
    async def test_failed_attempts_still_complete_an_exercise(self, world, progress_service):
        quizzes, practices = build_course(world, 1, quizzes=3, practices=2)
        world.submit(LEARNER, quizzes[0], 10.0, passed=False)
        world.submit(LEARNER, quizzes[1], 20.0, passed=False)
        world.submit(LEARNER, practices[0], 0.0, passed=False)

        report = await progress_service.get_user_progress_report(LEARNER)

        [card] = report.course_progress
        assert card.exercises_progress == "3/5"
        assert card.progress_percent == 60
        assert card.category == "Average"

    @pytest.mark.asyncio
    async def test_empty_learner(self, progress_service):
        report = await progress_service.get_user_progress_report(LEARNER)
        assert report.streak_days == 0
        assert report.exercises_completed == "0/0"
        assert report.average_score == 0.0
        assert report.course_progress == []

    @pytest.mark.asyncio
    async def test_course_without_assessments_is_left_out_of_average(self, world, progress_service):
        (q,), _ = build_course(world, 1, quizzes=1)
        build_course(world, 2)
        world.submit(LEARNER, q, 90.0)

        report = await progress_service.get_user_progress_report(LEARNER)

        assert report.average_score == 9.0
        assert report.exercises_completed == "1/1"
        assert [c.progress_percent for c in report.course_progress] == [100, 0]
        assert report.course_progress[0].category == "Excellent"

    @pytest.mark.asyncio
    async def test_average_across_courses(self, world, progress_service):
        (q,), _ = build_course(world, 1, quizzes=1)
        _, (p,) = build_course(world, 2, practices=1)
        world.submit(LEARNER, q, 90.0)
        world.submit(LEARNER, p, 65.0)

        report = await progress_service.get_user_progress_report(LEARNER)

        # (90 + 65) / 2 = 77.5 -> 78 -> 7.8
        assert report.average_score == 7.8

    @pytest.mark.asyncio
    async def test_pending_enrollments_are_invisible(self, world, progress_service):
        (q,), _ = build_course(world, 1, quizzes=1, enroll=False)
        world.enroll(LEARNER, 1, status=EnrollmentStatus.PENDING)
        world.submit(LEARNER, q, 90.0)

        report = await progress_service.get_user_progress_report(LEARNER)

        assert report.course_progress == []
        assert report.exercises_completed == "0/0"
        # The streak is learner-wide activity, not tied to enrollments
        assert report.streak_days == 1

    @pytest.mark.asyncio
    async def test_grace_day_streak(self, world, progress_service, now):
        (q,), _ = build_course(world, 1, quizzes=1)
        world.submit(LEARNER, q, 50.0, submitted_at=now - timedelta(days=1))
        world.submit(LEARNER, q, 50.0, submitted_at=now - timedelta(days=3))

        report = await progress_service.get_user_progress_report(LEARNER)
        assert report.streak_days == 1

    @pytest.mark.asyncio
    async def test_invalid_identifier(self, world, progress_service):
        with pytest.raises(InvalidIdentifierError):
            await progress_service.get_user_progress_report("not-an-id")
        assert world.calls == []

    @pytest.mark.asyncio
    async def test_streak_failure_fails_the_report(self, world, progress_service):
        build_course(world, 1, quizzes=1)
        world.failures["recent_submission_timestamps"] = RuntimeError("timeout")

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await progress_service.get_user_progress_report(LEARNER)
        assert exc_info.value.operation == "recent_submission_timestamps"


class TestCourseProgress:

    @pytest.mark.asyncio
    async def test_completed_and_passed_are_separate(self, world, progress_service):
        quizzes, practices = build_course(world, 1, quizzes=2, practices=2)
        world.submit(LEARNER, quizzes[0], 40.0, passed=False)
        world.submit(LEARNER, quizzes[0], 90.0, passed=True)
        world.submit(LEARNER, quizzes[1], 30.0, passed=False)
        world.submit(LEARNER, practices[0], 20.0, passed=False)

        summary = await progress_service.get_course_progress(1, LEARNER)

        assert summary.course_id == 1
        assert summary.learner_id == LEARNER
        assert summary.total_exercises == 4
        assert summary.completed_exercises == 3
        assert summary.quiz_progress.model_dump() == {"total": 2, "completed": 2, "passed": 1}
        assert summary.practice_progress.model_dump() == {"total": 2, "completed": 1, "passed": 0}
        assert summary.progress_percent == 75

    @pytest.mark.asyncio
    async def test_course_without_assessments(self, world, progress_service):
        build_course(world, 1)
        summary = await progress_service.get_course_progress("1", str(LEARNER))
        assert summary.total_exercises == 0
        assert summary.progress_percent == 0
        assert "distinct_submitted_assessments" not in world.calls

    @pytest.mark.asyncio
    async def test_invalid_course_id(self, world, progress_service):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            await progress_service.get_course_progress("xyz", LEARNER)
        assert exc_info.value.field == "course_id"
        assert world.calls == []

    @pytest.mark.asyncio
    async def test_multiple_courses(self, world, progress_service):
        (q,), _ = build_course(world, 1, quizzes=1)
        build_course(world, 2, practices=2)
        world.submit(LEARNER, q, 100.0)

        progress = await progress_service.get_multiple_courses_progress([1, 2, 1], LEARNER)

        assert list(progress) == [1, 2]
        assert progress[1].progress_percent == 100
        assert progress[2].progress_percent == 0

    @pytest.mark.asyncio
    async def test_multiple_courses_fail_fast(self, world, progress_service):
        build_course(world, 1, quizzes=1)
        world.failures["list_assessment_ids"] = RuntimeError("catalog down")

        with pytest.raises(UpstreamUnavailableError):
            await progress_service.get_multiple_courses_progress([1], LEARNER)

    @pytest.mark.asyncio
    async def test_overall_progress(self, world, progress_service):
        quizzes, _ = build_course(world, 1, quizzes=3)
        build_course(world, 2, practices=1)
        world.submit(LEARNER, quizzes[0], 50.0)

        overall = await progress_service.get_user_overall_progress(LEARNER, [1, 2])

        assert overall.total_courses == 2
        assert overall.total_exercises == 4
        assert overall.completed_exercises == 1
        # (33 + 0) / 2 = 16.5 -> 17
        assert overall.average_progress == 17

    @pytest.mark.asyncio
    async def test_overall_progress_without_courses(self, progress_service):
        overall = await progress_service.get_user_overall_progress(LEARNER, [])
        assert overall.total_courses == 0
        assert overall.average_progress == 0
