"""Process-lifetime assignment repository."""

from dataclasses import dataclass, field
from threading import Lock
from uuid import UUID

from focal_study.domain.assignments import Assignment
from focal_study.services.assignments import AssignmentRepository


@dataclass
class InMemoryAssignmentRepository(AssignmentRepository):
    """Keeps assignments in a dict keyed by user id; nothing survives restarts."""

    assignments: dict[str, list[Assignment]] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def add_assignment(self, user_id: str, assignment: Assignment) -> None:
        with self._lock:
            self.assignments.setdefault(user_id, []).append(assignment)

    def get_assignment(self, user_id: str, assignment_id: UUID) -> Assignment | None:
        with self._lock:
            for assignment in self.assignments.get(user_id, []):
                if assignment.id == assignment_id:
                    return assignment
        return None

    def list_assignments(self, user_id: str) -> list[Assignment]:
        with self._lock:
            return list(self.assignments.get(user_id, []))

    def count_assignments(self, user_id: str) -> int:
        with self._lock:
            return len(self.assignments.get(user_id, []))

    def replace_assignment(self, user_id: str, assignment: Assignment) -> None:
        with self._lock:
            stored = self.assignments.get(user_id, [])
            for index, existing in enumerate(stored):
                if existing.id == assignment.id:
                    stored[index] = assignment
                    return

    def delete_assignment(self, user_id: str, assignment_id: UUID) -> bool:
        with self._lock:
            stored = self.assignments.get(user_id, [])
            for index, existing in enumerate(stored):
                if existing.id == assignment_id:
                    del stored[index]
                    return True
        return False
