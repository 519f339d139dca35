from abc import ABC, abstractmethod

from ..model import AuditEntry


class AuditLogRepository(ABC):
    @abstractmethod
    def append_audit_entry(self, entry: AuditEntry) -> AuditEntry:
        raise NotImplementedError("Implement append_audit_entry method")
