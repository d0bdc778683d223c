"""Locate students, subjects and grades from request identifiers.

Subject names reach these functions already percent-decoded by the HTTP
layer (Starlette decodes path parameters once), so ``Matem%C3%A1tica`` in a
URL arrives here as ``Matemática``. Matching is exact and case-sensitive.
"""
from gradebook_api.errors import NotFoundError, ValidationError
from gradebook_api.models import Collection, Student, Subject


def find_student(collection: Collection, student_id: int) -> Student:
    for student in collection.students:
        if student.id == student_id:
            return student
    raise NotFoundError(f"Student {student_id} not found")


def find_subject(student: Student, name: str) -> Subject:
    for subject in student.subjects:
        if subject.name == name:
            return subject
    raise NotFoundError(f"Subject '{name}' not found for student {student.id}")


def validate_grade_index(subject: Subject, index: int) -> int:
    if index < 0:
        raise ValidationError(f"Grade index must be non-negative, got {index}")
    if index >= len(subject.grades):
        raise NotFoundError(
            f"Grade index {index} out of range for subject '{subject.name}' "
            f"({len(subject.grades)} grades)"
        )
    return index
