"""Data persistence: the collection of students mirrored to one JSON file."""
import copy
import json
import logging
import os
import threading
from contextlib import contextmanager
from typing import Iterator, List

import pydantic
from fastapi import Request

from gradebook_api.errors import PersistenceError
from gradebook_api.models import Collection, Student
from gradebook_api.resolver import find_student

logger = logging.getLogger(__name__)


SEED_DATA = {
    "students": [
        {
            "id": 1,
            "name": "João Silva",
            "subjects": [{"name": "Matemática", "grades": [8.5, 7.0, 9.5]}],
        },
        {
            "id": 2,
            "name": "Maria Oliveira",
            "subjects": [{"name": "Português", "grades": [6.0, 7.5]}],
        },
    ],
    "nextId": 3,
}


class Store:
    """Owns the in-memory collection and its file on disk.

    The file is rewritten in full after every successful mutation, so the
    two never disagree once a request has returned. All access goes through
    one re-entrant lock because FastAPI serves sync handlers from a thread pool.
    """

    def __init__(self, path: str):
        self.path = path
        self.collection = Collection()
        self._lock = threading.RLock()

    # ── Loading ──────────────────────────────────────────────────────────────

    def load(self) -> Collection:
        """Read the collection from disk, seeding it when the file has nothing usable."""
        with self._lock:
            data = self._read()
            if not isinstance(data, dict) or data.get("students") is None:
                logger.info("No stored students in %s, writing seed data", self.path)
                self.collection = Collection.model_validate(copy.deepcopy(SEED_DATA))
                self.persist()
                return self.collection

            try:
                self.collection = Collection.model_validate(data)
            except pydantic.ValidationError as e:
                logger.error("Stored collection in %s is invalid: %s", self.path, e)
                raise PersistenceError(f"Stored collection in {self.path} is invalid: {e}") from e
            logger.info(
                "Loaded %d students from %s (nextId=%d)",
                len(self.collection.students), self.path, self.collection.next_id,
            )
            return self.collection

    def _read(self):
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise PersistenceError(f"Failed to read {self.path}: {e}") from e
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("Could not decode %s: %s", self.path, e)
            raise PersistenceError(f"Failed to decode {self.path}: {e}") from e

    # ── Saving ───────────────────────────────────────────────────────────────

    def persist(self):
        """Overwrite the file with the current collection."""
        payload = self.collection.model_dump(by_alias=True)
        tmp_path = f"{self.path}.tmp"
        try:
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to write %s: %s", self.path, e)
            raise PersistenceError(f"Failed to save data to {self.path}: {e}") from e
        logger.debug("Saved %d students to %s", len(self.collection.students), self.path)

    @contextmanager
    def transaction(self) -> Iterator[Collection]:
        """Yield the collection for mutation, then persist it.

        If the body raises, or the write fails, the collection is restored to
        what it was on entry and the error propagates.
        """
        with self._lock:
            snapshot = self.collection.model_copy(deep=True)
            try:
                yield self.collection
                self.persist()
            except Exception:
                self.collection = snapshot
                raise

    # ── Reading ──────────────────────────────────────────────────────────────

    def all(self) -> List[Student]:
        """Students in insertion order, detached from the live collection."""
        with self._lock:
            return [s.model_copy(deep=True) for s in self.collection.students]

    def get(self, student_id: int) -> Student:
        """One student, detached; raises NotFoundError if the id is unknown."""
        with self._lock:
            return find_student(self.collection, student_id).model_copy(deep=True)


def get_store(request: Request) -> Store:
    return request.app.state.store
