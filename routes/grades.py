from fastapi import APIRouter, HTTPException
from errors import AuthError, GradesLockedError, ValidationError
from grading import summarize_student
from models import Credential, GradeSummary, ScoreEntry, SessionInfo, StudentGrade
from state import lock_grades, unlock_grades, update_score
from storage import load_state, save_state
from typing import Dict, List
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/grades", response_model=Dict[str, StudentGrade])
def get_grades():
    logger.info("GET /grades — loading all grades")
    grades = load_state().grades
    logger.info("GET /grades — returned grades for %d students", len(grades))
    return grades


@router.post("/grades", response_model=StudentGrade)
def post_grade(entry: ScoreEntry):
    logger.info("POST /grades — student: %s, category: %s, component: %s, score: %s",
                entry.student_id, entry.category, entry.component_id, entry.score)
    try:
        state = update_score(load_state(), entry.student_id, entry.category, entry.component_id, entry.score)
    except GradesLockedError as e:
        logger.warning("POST /grades — rejected, grades are locked")
        raise HTTPException(status_code=423, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    save_state(state)
    logger.info("POST /grades — saved grade for student %s", entry.student_id)
    return state.grades[entry.student_id]


@router.get("/grades/summary", response_model=List[GradeSummary])
def get_grades_summary():
    state = load_state()
    structure = state.structure()
    return [
        summarize_student(structure, student.id, state.grades.get(student.id))
        for student in state.students
    ]


@router.post("/grades/lock", response_model=SessionInfo)
def post_lock():
    state = lock_grades(load_state())
    save_state(state)
    logger.info("POST /grades/lock — grades locked")
    return state.session_info()


@router.post("/grades/unlock", response_model=SessionInfo)
def post_unlock(credential: Credential):
    try:
        state = unlock_grades(load_state(), credential.password)
    except AuthError as e:
        logger.warning("POST /grades/unlock — %s", e)
        raise HTTPException(status_code=401, detail=str(e))
    save_state(state)
    logger.info("POST /grades/unlock — grades unlocked")
    return state.session_info()
