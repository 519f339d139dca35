from abc import ABC, abstractmethod
from typing import Optional

from ..model import EnrolledIdentity


class EnrollmentRepository(ABC):
    @abstractmethod
    def get_enrolled_identity(self, employee_id: str) -> Optional[EnrolledIdentity]:
        raise NotImplementedError("Implement get_enrolled_identity method")

    @abstractmethod
    def set_enrolled_identity(self, identity: EnrolledIdentity) -> EnrolledIdentity:
        raise NotImplementedError("Implement set_enrolled_identity method")

    @abstractmethod
    def delete_enrolled_identity(self, employee_id: str) -> bool:
        raise NotImplementedError("Implement delete_enrolled_identity method")

    @abstractmethod
    def get_enrolled_identities(self) -> list[EnrolledIdentity]:
        raise NotImplementedError("Implement get_enrolled_identities method")
