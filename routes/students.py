from fastapi import APIRouter, HTTPException
from errors import DuplicateIdError, ValidationError
from models import RosterImport, Student, StudentCreate
from state import add_student, import_students, remove_student
from storage import load_state, save_state, parse_students_csv
from typing import List
import os
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/students", response_model=List[Student])
def get_students():
    return load_state().students


@router.post("/students", response_model=Student)
def post_student(candidate: StudentCreate):
    logger.info("POST /students — student_id: %s", candidate.student_id)
    try:
        state = add_student(load_state(), candidate)
    except ValidationError as e:
        logger.warning("POST /students — invalid student: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateIdError as e:
        logger.warning("POST /students — %s", e)
        raise HTTPException(status_code=409, detail=str(e))
    save_state(state)
    student = state.students[-1]
    logger.info("POST /students — added %s as %s", student.student_id, student.id)
    return student


@router.delete("/students/{internal_id}")
def delete_student(internal_id: str):
    logger.info("DELETE /students/%s — removing student", internal_id)
    before = load_state()
    state = remove_student(before, internal_id)
    save_state(state)
    logger.info("DELETE /students/%s — remaining: %d", internal_id, len(state.students))
    return {"status": "ok", "removed": len(before.students) - len(state.students)}


@router.post("/students/import", response_model=List[Student])
def post_students_import(roster: RosterImport):
    logger.info("POST /students/import — students_csv: %s", roster.students_csv)
    if not os.path.isfile(roster.students_csv):
        logger.warning("POST /students/import — students_csv does not exist: %s", roster.students_csv)
        raise HTTPException(status_code=400, detail=f"students_csv does not exist: {roster.students_csv}")

    try:
        candidates = parse_students_csv(roster.students_csv)
        logger.info("POST /students/import — parsed %d students from CSV", len(candidates))
    except (KeyError, ValueError) as e:
        logger.error("POST /students/import — failed to parse students CSV: %s", e)
        raise HTTPException(status_code=400, detail=f"Failed to parse students CSV: {e}")

    if not candidates:
        raise HTTPException(status_code=400, detail="Students CSV is empty or contains no valid rows")

    try:
        state = import_students(load_state(), candidates)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateIdError as e:
        raise HTTPException(status_code=409, detail=str(e))
    save_state(state)
    logger.info("POST /students/import — roster now has %d students", len(state.students))
    return state.students
