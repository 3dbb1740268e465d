"""Grade structure defaults, save-time validation and the grade formula."""
from typing import Optional

from errors import ValidationError
from models import (
    CLASS_PARTICIPATION,
    EXAM,
    GradeCategory,
    GradeComponent,
    GradeStructure,
    GradeSummary,
    StudentGrade,
)


PERCENTAGE_TOLERANCE = 0.01

CATEGORY_LABELS = {
    CLASS_PARTICIPATION: "Class Participation",
    EXAM: "Exam",
}

# (lower bound, remark), highest first
REMARK_BANDS = [
    (90, "Excellent"),
    (80, "Very Good"),
    (70, "Good"),
    (60, "Satisfactory"),
    (50, "Passing"),
]
FAILED_REMARK = "Failed"
REMARKS = [remark for _, remark in REMARK_BANDS] + [FAILED_REMARK]


def default_structure() -> GradeStructure:
    return GradeStructure(
        class_participation=GradeCategory(
            total=70,
            components=[
                GradeComponent(id="1", name="Quizzes", percentage=25),
                GradeComponent(id="2", name="Activities", percentage=25),
                GradeComponent(id="3", name="Attendance", percentage=20),
            ],
        ),
        exam=GradeCategory(
            total=30,
            components=[
                GradeComponent(id="1", name="Midterm Exam", percentage=15),
                GradeComponent(id="2", name="Final Exam", percentage=15),
            ],
        ),
    )


def validate_structure(structure: GradeStructure) -> None:
    """Raise ValidationError unless *structure* is safe to save.

    Component ids must be unique within a category, each category's component
    percentages must add up to the category total, and the two category totals
    must add up to exactly 100.
    """
    for name in (CLASS_PARTICIPATION, EXAM):
        category = structure.category(name)
        ids = [c.id for c in category.components]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValidationError(
                f"{CATEGORY_LABELS[name]} component ids must be unique: {', '.join(duplicates)}"
            )

        component_sum = sum(c.percentage for c in category.components)
        if abs(component_sum - category.total) > PERCENTAGE_TOLERANCE:
            raise ValidationError(
                f"{CATEGORY_LABELS[name]} components must sum to {category.total:g}%"
            )

    if structure.class_participation.total + structure.exam.total != 100:
        raise ValidationError("Total percentage must equal 100%")


def compute_category_subtotal(structure: GradeStructure, category: str,
                              grades: Optional[StudentGrade]) -> float:
    """Weighted sum of the raw scores of one category.

    Each component contributes ``score * percentage / 100``. Components with no
    recorded score count as 0; scores are used as entered, without clamping.
    """
    if grades is None:
        return 0.0
    scores = grades.scores_for(category)
    total = 0.0
    for component in structure.category(category).components:
        score = scores.get(component.id, 0)
        total += (score * component.percentage) / 100
    return total


def compute_final_grade(structure: GradeStructure,
                        grades: Optional[StudentGrade]) -> float:
    """Combine both category subtotals, each scaled by its category total.

    This is the single implementation of the composite grade; the grading
    sheet, the report and the export all go through it.
    """
    cp_grade = compute_category_subtotal(structure, CLASS_PARTICIPATION, grades)
    exam_grade = compute_category_subtotal(structure, EXAM, grades)

    cp_total = (cp_grade * structure.class_participation.total) / 100
    exam_total = (exam_grade * structure.exam.total) / 100
    return cp_total + exam_total


# The midterm column has no separate inputs yet; it reports the composite grade.
compute_midterm_grade = compute_final_grade


def get_remark(final_grade: float) -> str:
    for lower_bound, remark in REMARK_BANDS:
        if final_grade >= lower_bound:
            return remark
    return FAILED_REMARK


def summarize_student(structure: GradeStructure, student_id: str,
                      grades: Optional[StudentGrade]) -> GradeSummary:
    """Unrounded subtotals, grades and remark for one student."""
    final_grade = compute_final_grade(structure, grades)
    return GradeSummary(
        student_id=student_id,
        class_participation_total=compute_category_subtotal(structure, CLASS_PARTICIPATION, grades),
        exam_total=compute_category_subtotal(structure, EXAM, grades),
        midterm_grade=compute_midterm_grade(structure, grades),
        final_grade=final_grade,
        remark=get_remark(final_grade),
    )
