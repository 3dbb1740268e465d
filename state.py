"""Application state and the transitions that change it.

Every transition takes a ``GradebookState`` and returns a new one; the state
passed in is never modified. A transition that fails raises one of the errors
from ``errors`` and produces no new state, so the caller's copy (and whatever
is persisted) stays as it was.
"""
import logging
import uuid
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

from errors import AuthError, DuplicateIdError, GradesLockedError, ValidationError
from grading import default_structure, validate_structure
from models import (
    CATEGORIES,
    GradeStructure,
    Page,
    SessionInfo,
    Student,
    StudentCreate,
    StudentGrade,
)

logger = logging.getLogger(__name__)


class GradebookState(BaseModel):
    grade_structure: Optional[GradeStructure] = None
    students: List[Student] = []
    grades: Dict[str, StudentGrade] = {}
    grades_locked: bool = True
    password: Optional[str] = None
    logged_in: bool = False
    current_page: Page = "parameters"

    def structure(self) -> GradeStructure:
        """The saved grade structure, or the default one if none was saved."""
        return self.grade_structure if self.grade_structure is not None else default_structure()

    def find_student(self, internal_id: str) -> Optional[Student]:
        for student in self.students:
            if student.id == internal_id:
                return student
        return None

    def session_info(self) -> SessionInfo:
        return SessionInfo(
            logged_in=self.logged_in,
            has_password=self.password is not None,
            grades_locked=self.grades_locked,
            current_page=self.current_page,
        )


# ── Grade structure ───────────────────────────────────────────────────────────

def save_grade_structure(state: GradebookState, structure: GradeStructure) -> GradebookState:
    validate_structure(structure)
    return state.model_copy(update={"grade_structure": structure})


# ── Roster ────────────────────────────────────────────────────────────────────

def add_student(state: GradebookState, candidate: StudentCreate,
                new_id: Optional[str] = None) -> GradebookState:
    student_id = candidate.student_id.strip()
    first_name = candidate.first_name.strip()
    last_name = candidate.last_name.strip()
    if not student_id or not first_name or not last_name:
        raise ValidationError("Please fill in all fields")

    if any(s.student_id == student_id for s in state.students):
        raise DuplicateIdError(f"Student ID already exists: {student_id}")

    student = Student(
        id=new_id or uuid.uuid4().hex,
        student_id=student_id,
        first_name=first_name,
        last_name=last_name,
    )
    return state.model_copy(update={"students": state.students + [student]})


def import_students(state: GradebookState, candidates: Iterable[StudentCreate]) -> GradebookState:
    """Add every candidate in order; any invalid or duplicate row rejects the whole import."""
    for candidate in candidates:
        state = add_student(state, candidate)
    return state


def remove_student(state: GradebookState, internal_id: str) -> GradebookState:
    # The student's grade record is left in place; nothing looks it up once
    # the student is gone.
    remaining = [s for s in state.students if s.id != internal_id]
    return state.model_copy(update={"students": remaining})


# ── Scores ────────────────────────────────────────────────────────────────────

def update_score(state: GradebookState, internal_id: str, category: str,
                 component_id: str, value: float) -> GradebookState:
    if state.grades_locked:
        raise GradesLockedError("Grades are locked")
    if category not in CATEGORIES:
        raise ValidationError(f"Unknown grade category: {category}")

    existing = state.grades.get(internal_id) or StudentGrade(student_id=internal_id)
    scores = dict(existing.scores_for(category))
    scores[component_id] = value
    record = existing.model_copy(update={f"{category}_grades": scores})

    grades = dict(state.grades)
    grades[internal_id] = record
    return state.model_copy(update={"grades": grades})


def lock_grades(state: GradebookState) -> GradebookState:
    return state.model_copy(update={"grades_locked": True})


def unlock_grades(state: GradebookState, credential: str) -> GradebookState:
    # Plain equality against the stored shared secret. This is an edit gate,
    # not authentication.
    if state.password is None or credential != state.password:
        raise AuthError("Incorrect password")
    return state.model_copy(update={"grades_locked": False})


# ── Session ───────────────────────────────────────────────────────────────────

def login(state: GradebookState, credential: str) -> GradebookState:
    """Log in, storing *credential* as the shared secret on first login."""
    if not credential:
        raise ValidationError("Password is required")
    if state.password is None:
        logger.info("No password stored yet, storing the first login password")
        return state.model_copy(update={"password": credential, "logged_in": True})
    if credential != state.password:
        raise AuthError("Incorrect password")
    return state.model_copy(update={"logged_in": True})


def logout(state: GradebookState) -> GradebookState:
    return state.model_copy(update={"logged_in": False, "current_page": "parameters"})


def navigate(state: GradebookState, page: Page) -> GradebookState:
    return state.model_copy(update={"current_page": page})
