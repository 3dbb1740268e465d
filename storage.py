import json
import csv
import os
import logging
from typing import Any, Dict, List

from pydantic import TypeAdapter, ValidationError as ModelValidationError

from models import GradeStructure, Page, Student, StudentCreate, StudentGrade
from state import GradebookState

logger = logging.getLogger(__name__)

DATA_DIR = "./data"

# key -> value type; each key is stored in DATA_DIR/<key>.json
STATE_KEYS: Dict[str, Any] = {
    "grade_structure": GradeStructure,
    "students": List[Student],
    "grades": Dict[str, StudentGrade],
    "grades_locked": bool,
    "password": str,
    "logged_in": bool,
    "current_page": Page,
}

_MISSING = object()


def _ensure_data_dir():
    os.makedirs(DATA_DIR, exist_ok=True)


def _key_path(key: str) -> str:
    return os.path.join(DATA_DIR, f"{key}.json")


def read_key(key: str, default: Any = None) -> Any:
    """Return the raw JSON value stored under *key*, or *default* if absent or unreadable."""
    path = _key_path(key)
    if not os.path.exists(path):
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("read_key(%s) — unreadable file %s, using default: %s", key, path, e)
        return default


def write_key(key: str, value: Any):
    _ensure_data_dir()
    with open(_key_path(key), "w", encoding="utf-8") as f:
        json.dump(value, f, indent=2)


def delete_key(key: str):
    path = _key_path(key)
    if os.path.exists(path):
        os.remove(path)


def clear_store():
    for key in STATE_KEYS:
        delete_key(key)


def load_state() -> GradebookState:
    """Read the full application state.

    Keys that are missing, not valid JSON, or do not match their expected
    shape fall back to the defaults of ``GradebookState``.
    """
    values = {}
    for key, value_type in STATE_KEYS.items():
        raw = read_key(key, _MISSING)
        if raw is _MISSING:
            continue
        try:
            values[key] = TypeAdapter(value_type).validate_python(raw)
        except ModelValidationError as e:
            logger.warning("load_state — malformed value for %s, using default: %s", key, e.errors()[0]["msg"])
    return GradebookState(**values)


def save_state(state: GradebookState):
    data = state.model_dump(mode="json")
    for key in STATE_KEYS:
        value = data[key]
        if value is None:
            delete_key(key)
        else:
            write_key(key, value)


def parse_students_csv(csv_path: str) -> List[StudentCreate]:
    students = []
    with open(csv_path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        for row in reader:
            students.append(StudentCreate(
                student_id=str(row["student_id"] or "").strip(),
                last_name=str(row["last_name"] or "").strip(),
                first_name=str(row["first_name"] or "").strip(),
            ))
    return students
