from fastapi import APIRouter, Depends, Response
from typing import List
import logging

from gradebook_api import operations
from gradebook_api.models import Student, StudentCreate
from gradebook_api.storage import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/students", response_model=List[Student])
def get_students(store: Store = Depends(get_store)):
    students = operations.list_students(store)
    logger.info("GET /students: returned %d students", len(students))
    return students


@router.get("/students/{student_id}", response_model=Student)
def get_student(student_id: int, store: Store = Depends(get_store)):
    return operations.get_student(store, student_id)


@router.post("/students", response_model=Student, status_code=201)
def post_student(body: StudentCreate, store: Store = Depends(get_store)):
    logger.info("POST /students: name: %s", body.name)
    return operations.create_student(store, body)


@router.delete("/students/{student_id}", status_code=204)
def delete_student(student_id: int, store: Store = Depends(get_store)):
    logger.info("DELETE /students/%d", student_id)
    operations.delete_student(store, student_id)
    return Response(status_code=204)
