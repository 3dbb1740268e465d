from pydantic import BaseModel
from typing import Optional, Dict, List, Literal


CLASS_PARTICIPATION = "class_participation"
EXAM = "exam"
CATEGORIES = (CLASS_PARTICIPATION, EXAM)

CategoryName = Literal["class_participation", "exam"]
Page = Literal["parameters", "students", "grading", "report"]


class GradeComponent(BaseModel):
    id: str
    name: str
    percentage: float


class GradeCategory(BaseModel):
    total: float
    components: List[GradeComponent] = []


class GradeStructure(BaseModel):
    class_participation: GradeCategory
    exam: GradeCategory

    def category(self, name: str) -> GradeCategory:
        if name == CLASS_PARTICIPATION:
            return self.class_participation
        if name == EXAM:
            return self.exam
        raise KeyError(name)


class Student(BaseModel):
    id: str
    student_id: str
    first_name: str
    last_name: str


class StudentCreate(BaseModel):
    student_id: str
    first_name: str
    last_name: str


class StudentGrade(BaseModel):
    student_id: str
    class_participation_grades: Dict[str, float] = {}
    exam_grades: Dict[str, float] = {}

    def scores_for(self, category: str) -> Dict[str, float]:
        if category == CLASS_PARTICIPATION:
            return self.class_participation_grades
        if category == EXAM:
            return self.exam_grades
        raise KeyError(category)


class ScoreEntry(BaseModel):
    student_id: str  # internal Student.id
    category: CategoryName
    component_id: str
    score: float


class Credential(BaseModel):
    password: str


class PageChange(BaseModel):
    page: Page


class RosterImport(BaseModel):
    students_csv: str


class SessionInfo(BaseModel):
    logged_in: bool
    has_password: bool
    grades_locked: bool
    current_page: Page


class GradeSummary(BaseModel):
    student_id: str
    class_participation_total: float
    exam_total: float
    midterm_grade: float
    final_grade: float
    remark: str


class ReportRow(BaseModel):
    student_id: str
    last_name: str
    first_name: str
    class_participation_scores: List[float] = []
    class_participation_total: float
    exam_scores: List[float] = []
    exam_total: float
    midterm_grade: float
    final_grade: float
    remark: str

    def cells(self) -> list:
        """Values in export column order."""
        return (
            [self.student_id, self.last_name, self.first_name]
            + list(self.class_participation_scores)
            + [self.class_participation_total]
            + list(self.exam_scores)
            + [self.exam_total, self.midterm_grade, self.final_grade, self.remark]
        )


class RemarkCount(BaseModel):
    remark: str
    count: int


class Report(BaseModel):
    headers: List[str]
    rows: List[ReportRow]
    distribution: List[RemarkCount] = []
    filename: Optional[str] = None
