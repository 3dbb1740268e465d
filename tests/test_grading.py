import pytest

from errors import ValidationError
from grading import (
    compute_category_subtotal,
    compute_final_grade,
    compute_midterm_grade,
    default_structure,
    get_remark,
    summarize_student,
    validate_structure,
)
from models import GradeComponent, StudentGrade


def _grade(cp=None, exam=None):
    return StudentGrade(student_id="s1", class_participation_grades=cp or {}, exam_grades=exam or {})


PERFECT = _grade(cp={"q": 100, "a": 100, "att": 100}, exam={"m": 100, "f": 100})


# ── validation ───────────────────────────────────────────────────────────────

def test_default_structure_is_valid():
    validate_structure(default_structure())


def test_valid_structure_passes(structure):
    validate_structure(structure)


def test_component_sum_within_tolerance_passes(structure):
    structure.class_participation.components[0].percentage = 25.005
    validate_structure(structure)


def test_component_sum_mismatch_rejected(structure):
    structure.class_participation.components[0].percentage = 25.02
    with pytest.raises(ValidationError, match="Class Participation components must sum to 70%"):
        validate_structure(structure)


def test_exam_component_sum_mismatch_rejected(structure):
    structure.exam.components[1].percentage = 14
    with pytest.raises(ValidationError, match="Exam components must sum to 30%"):
        validate_structure(structure)


def test_duplicate_component_ids_rejected(structure):
    structure.class_participation.components = [
        GradeComponent(id="1", name="Quizzes", percentage=35),
        GradeComponent(id="1", name="Activities", percentage=35),
    ]
    with pytest.raises(ValidationError, match="Class Participation component ids must be unique: 1"):
        validate_structure(structure)


def test_same_component_id_in_both_categories_allowed():
    validate_structure(default_structure())
    assert default_structure().class_participation.components[0].id == default_structure().exam.components[0].id


def test_category_totals_must_equal_100(structure):
    structure.exam.total = 31
    structure.exam.components.append(GradeComponent(id="x", name="Extra", percentage=1))
    with pytest.raises(ValidationError, match="Total percentage must equal 100%"):
        validate_structure(structure)


# ── computation ──────────────────────────────────────────────────────────────

def test_regression_scenario(structure):
    cp = compute_category_subtotal(structure, "class_participation", PERFECT)
    exam = compute_category_subtotal(structure, "exam", PERFECT)
    final = compute_final_grade(structure, PERFECT)

    assert cp == 70
    assert exam == 30
    assert final == 58
    assert get_remark(final) == "Passing"


def test_missing_scores_count_as_zero(structure):
    grades = _grade(cp={"q": 80})
    assert compute_category_subtotal(structure, "class_participation", grades) == 20
    assert compute_category_subtotal(structure, "exam", grades) == 0


def test_no_grade_record_is_zero(structure):
    assert compute_category_subtotal(structure, "exam", None) == 0
    assert compute_final_grade(structure, None) == 0


def test_scores_are_not_clamped(structure):
    grades = _grade(cp={"q": 200, "a": -40})
    assert compute_category_subtotal(structure, "class_participation", grades) == 50 - 10


def test_subtotal_is_linear_in_each_score(structure):
    base = _grade(cp={"q": 40, "a": 70, "att": 90})
    doubled = _grade(cp={"q": 80, "a": 70, "att": 90})
    delta = (compute_category_subtotal(structure, "class_participation", doubled)
             - compute_category_subtotal(structure, "class_participation", base))
    assert delta == pytest.approx(40 * 25 / 100)


def test_subtotal_ignores_component_order(structure):
    grades = _grade(cp={"q": 73.5, "a": 88.25, "att": 91})
    before = compute_category_subtotal(structure, "class_participation", grades)
    structure.class_participation.components.reverse()
    after = compute_category_subtotal(structure, "class_participation", grades)
    assert after == pytest.approx(before)


def test_unknown_component_scores_ignored(structure):
    grades = _grade(exam={"m": 100, "gone": 100})
    assert compute_category_subtotal(structure, "exam", grades) == 15


@pytest.mark.parametrize("cp,exam", [
    ({"q": 91, "a": 77.5, "att": 100}, {"m": 64, "f": 88}),
    ({"q": 0}, {"f": 12.34}),
    ({}, {}),
])
def test_final_grade_formula(structure, cp, exam):
    grades = _grade(cp=cp, exam=exam)
    expected = (
        compute_category_subtotal(structure, "class_participation", grades) * structure.class_participation.total / 100
        + compute_category_subtotal(structure, "exam", grades) * structure.exam.total / 100
    )
    assert compute_final_grade(structure, grades) == expected


def test_midterm_matches_final(structure):
    grades = _grade(cp={"q": 55, "a": 60}, exam={"m": 70})
    assert compute_midterm_grade(structure, grades) == compute_final_grade(structure, grades)


# ── remarks ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("grade,remark", [
    (100, "Excellent"),
    (90.0, "Excellent"),
    (89.999, "Very Good"),
    (89.99, "Very Good"),
    (80, "Very Good"),
    (79.99, "Good"),
    (70, "Good"),
    (60, "Satisfactory"),
    (58, "Passing"),
    (50, "Passing"),
    (49.99, "Failed"),
    (0, "Failed"),
    (-5, "Failed"),
])
def test_remark_bands(grade, remark):
    assert get_remark(grade) == remark


def test_remark_is_monotonic():
    order = ["Failed", "Passing", "Satisfactory", "Good", "Very Good", "Excellent"]
    ranks = [order.index(get_remark(g / 10)) for g in range(0, 1001)]
    assert ranks == sorted(ranks)


def test_summarize_student(structure):
    summary = summarize_student(structure, "s1", PERFECT)
    assert summary.student_id == "s1"
    assert summary.class_participation_total == 70
    assert summary.exam_total == 30
    assert summary.midterm_grade == summary.final_grade == 58
    assert summary.remark == "Passing"
