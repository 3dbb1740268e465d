from fastapi import APIRouter, HTTPException
from errors import ValidationError
from grading import default_structure
from models import GradeStructure
from state import save_grade_structure
from storage import load_state, save_state
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/grade-structure", response_model=GradeStructure)
def get_grade_structure():
    state = load_state()
    if state.grade_structure is None:
        logger.info("GET /grade-structure — nothing saved, returning default structure")
    return state.structure()


@router.put("/grade-structure", response_model=GradeStructure)
def put_grade_structure(structure: GradeStructure):
    logger.info(
        "PUT /grade-structure — class participation: %s%% (%d components), exam: %s%% (%d components)",
        structure.class_participation.total, len(structure.class_participation.components),
        structure.exam.total, len(structure.exam.components),
    )
    try:
        state = save_grade_structure(load_state(), structure)
    except ValidationError as e:
        logger.warning("PUT /grade-structure — rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    save_state(state)
    logger.info("PUT /grade-structure — saved successfully")
    return structure


@router.get("/grade-structure/default", response_model=GradeStructure)
def get_default_grade_structure():
    return default_structure()
