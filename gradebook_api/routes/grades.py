from fastapi import APIRouter, Depends
import logging

from gradebook_api import operations
from gradebook_api.models import GradeAdd, GradeReplace, Student
from gradebook_api.storage import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


# subject_name is already percent-decoded here, e.g. "L%C3%ADngua%20Portuguesa" -> "Língua Portuguesa"
@router.post("/students/{student_id}/subjects/{subject_name}/grades", response_model=Student)
def post_grade(student_id: int, subject_name: str, body: GradeAdd, store: Store = Depends(get_store)):
    logger.info("POST /students/%d/subjects/%s/grades: grade: %s", student_id, subject_name, body.grade)
    return operations.add_grade(store, student_id, subject_name, body)


@router.put("/students/{student_id}/subjects/{subject_name}/grades/{index}", response_model=Student)
def put_grade(
    student_id: int,
    subject_name: str,
    index: int,
    body: GradeReplace,
    store: Store = Depends(get_store),
):
    logger.info(
        "PUT /students/%d/subjects/%s/grades/%d: newGrade: %s",
        student_id, subject_name, index, body.new_grade,
    )
    return operations.replace_grade(store, student_id, subject_name, index, body)
