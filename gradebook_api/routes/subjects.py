from fastapi import APIRouter, Depends
import logging

from gradebook_api import operations
from gradebook_api.models import Student, SubjectCreate
from gradebook_api.storage import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/students/{student_id}/subjects", response_model=Student, status_code=201)
def post_subject(student_id: int, body: SubjectCreate, store: Store = Depends(get_store)):
    logger.info("POST /students/%d/subjects: name: %s", student_id, body.name)
    return operations.create_subject(store, student_id, body)
