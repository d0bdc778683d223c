"""Create/read/update/delete behaviour for students, subjects and grades.

Every function takes the Store explicitly. Mutations run inside a single
``Store.transaction()``: inputs are checked before anything changes, the
file is written exactly once on success, and nothing is written otherwise.
Returned students are copies, safe to serialise after the lock is released.
"""
import logging
from typing import List

from gradebook_api.errors import ConflictError
from gradebook_api.models import (
    GradeAdd,
    GradeReplace,
    Student,
    StudentCreate,
    Subject,
    SubjectCreate,
)
from gradebook_api.resolver import find_student, find_subject, validate_grade_index
from gradebook_api.storage import Store

logger = logging.getLogger(__name__)


def list_students(store: Store) -> List[Student]:
    return store.all()


def get_student(store: Store, student_id: int) -> Student:
    return store.get(student_id)


def create_student(store: Store, body: StudentCreate) -> Student:
    with store.transaction() as collection:
        student = Student(id=collection.next_id, name=body.name, subjects=[])
        collection.next_id += 1
        collection.students.append(student)
        logger.info("Created student %d (%s)", student.id, student.name)
        return student.model_copy(deep=True)


def delete_student(store: Store, student_id: int):
    with store.transaction() as collection:
        find_student(collection, student_id)
        collection.students = [s for s in collection.students if s.id != student_id]
        logger.info("Deleted student %d, %d remaining", student_id, len(collection.students))


def create_subject(store: Store, student_id: int, body: SubjectCreate) -> Student:
    with store.transaction() as collection:
        student = find_student(collection, student_id)
        if any(s.name == body.name for s in student.subjects):
            raise ConflictError(f"Subject '{body.name}' already exists for student {student_id}")
        student.subjects.append(Subject(name=body.name, grades=[]))
        logger.info("Added subject '%s' to student %d", body.name, student_id)
        return student.model_copy(deep=True)


def add_grade(store: Store, student_id: int, subject_name: str, body: GradeAdd) -> Student:
    with store.transaction() as collection:
        student = find_student(collection, student_id)
        subject = find_subject(student, subject_name)
        subject.grades.append(body.grade)
        logger.info(
            "Appended grade %s to '%s' of student %d (now %d grades)",
            body.grade, subject_name, student_id, len(subject.grades),
        )
        return student.model_copy(deep=True)


def replace_grade(
    store: Store, student_id: int, subject_name: str, index: int, body: GradeReplace
) -> Student:
    with store.transaction() as collection:
        student = find_student(collection, student_id)
        subject = find_subject(student, subject_name)
        validate_grade_index(subject, index)
        old = subject.grades[index]
        subject.grades[index] = body.new_grade
        logger.info(
            "Replaced grade %d of '%s' for student %d: %s -> %s",
            index, subject_name, student_id, old, body.new_grade,
        )
        return student.model_copy(deep=True)
