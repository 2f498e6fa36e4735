from __future__ import annotations

from typing import Optional, Protocol

from .model import ClassSession


class ClassSessionRepository(Protocol):
    def get_by_id(self, class_id: str) -> Optional[ClassSession]:
        raise NotImplementedError
