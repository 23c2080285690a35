"""Report models: documented examples stay valid and reach the JSON schema."""
import pytest

from gradebook.schemas.course import CourseSummary
from gradebook.schemas.grades import GradeSummary
from gradebook.schemas.progress import ProgressReport


@pytest.mark.parametrize("model", [GradeSummary, ProgressReport])
def test_schema_example_validates(model):
    example = model.model_json_schema()["example"]
    report = model.model_validate(example)
    assert report.learner_id == 42
    assert "json_schema_extra" in model.model_config


def test_course_summary_requires_credits():
    course = CourseSummary(id=7, credits=4)
    assert (course.code, course.name) == ("N/A", "Untitled Course")
    with pytest.raises(ValueError):
        CourseSummary(id=7)
