import pytest
import storage
from fastapi.testclient import TestClient
from main import app
from models import GradeCategory, GradeComponent, GradeStructure, StudentCreate


@pytest.fixture(autouse=True)
def tmp_data_dir(tmp_path, monkeypatch):
    """Redirect all storage reads/writes to a temporary directory."""
    monkeypatch.setattr(storage, 'DATA_DIR', str(tmp_path))
    return tmp_path


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def structure():
    """Class participation 70 (25/25/20), exam 30 (15/15)."""
    return GradeStructure(
        class_participation=GradeCategory(total=70, components=[
            GradeComponent(id="q", name="Quizzes", percentage=25),
            GradeComponent(id="a", name="Activities", percentage=25),
            GradeComponent(id="att", name="Attendance", percentage=20),
        ]),
        exam=GradeCategory(total=30, components=[
            GradeComponent(id="m", name="Midterm", percentage=15),
            GradeComponent(id="f", name="Final", percentage=15),
        ]),
    )


@pytest.fixture()
def alice():
    return StudentCreate(student_id="2024001", first_name="Alice", last_name="Dupont")
