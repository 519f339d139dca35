from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from ..model import ShiftWindow


class ShiftWindowRepository(ABC):
    @abstractmethod
    def get_shift_window(self, employee_id: str, work_date: date) -> Optional[ShiftWindow]:
        raise NotImplementedError("Implement get_shift_window method")
