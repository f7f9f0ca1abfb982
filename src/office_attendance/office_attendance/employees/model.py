from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object; identity and names come from the upstream
    identity provider, this is only used to label ids in read views.
    """

    employee_id: int
    name: str
    email: str
    department: str
    manager_id: Optional[int] = None
