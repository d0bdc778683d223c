from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator
from typing import Annotated, List


Name = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]

# Stored grades are range-checked when the document is loaded; request bodies
# additionally refuse strings and booleans.
Grade = Annotated[float, Field(ge=0, le=10)]
StrictGrade = Annotated[float, Field(strict=True, ge=0, le=10)]


class Subject(BaseModel):
    name: str
    grades: List[Grade] = []


class Student(BaseModel):
    id: int
    name: str
    subjects: List[Subject] = []


class Collection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    students: List[Student] = []
    next_id: int = Field(default=0, alias="nextId")

    @model_validator(mode="after")
    def _check_ids(self):
        ids = [s.id for s in self.students]
        if len(ids) != len(set(ids)):
            raise ValueError("student ids must be unique")
        floor = max(ids, default=0) + 1
        if self.next_id < floor:
            self.next_id = floor
        return self


class StudentCreate(BaseModel):
    name: Name


class SubjectCreate(BaseModel):
    name: Name


class GradeAdd(BaseModel):
    grade: StrictGrade


class GradeReplace(BaseModel):
    # Only the "newGrade" key is accepted; build it in Python as GradeReplace(newGrade=...).
    new_grade: StrictGrade = Field(validation_alias="newGrade")
