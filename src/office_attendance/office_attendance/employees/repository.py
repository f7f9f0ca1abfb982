from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_ids(self, employee_ids: Iterable[int]) -> Sequence[Employee]:
        """Unknown ids are skipped; order is unspecified."""

        raise NotImplementedError
