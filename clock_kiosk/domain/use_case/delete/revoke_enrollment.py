from attrs import define, field, validators

from ...model import AuditEntry
from ...repository import AuditLogRepository, EnrollmentRepository
from ...service import UpstreamCaller
from ....utils import get_logger

logger = get_logger(__name__)


@define
class RevokeEnrollment:
    enrollment_repository: EnrollmentRepository = field(
        validator=validators.instance_of(EnrollmentRepository)
    )
    audit_log_repository: AuditLogRepository = field(
        validator=validators.instance_of(AuditLogRepository)
    )
    upstream_caller: UpstreamCaller = field(
        validator=validators.instance_of(UpstreamCaller)
    )

    def invoke(self, employee_id: str, actor: str) -> bool:
        logger.info(f"Attempting to revoke enrollment for employee ID: {employee_id}")
        removed = self.upstream_caller.call(
            "enrollment store", self.enrollment_repository.delete_enrolled_identity, employee_id
        )
        logger.info(f"Revoke operation result: {removed}")

        self.audit_log_repository.append_audit_entry(
            AuditEntry(
                actor=actor,
                action="revoke",
                subject_employee_id=employee_id,
                metadata={"removed": removed},
            )
        )
        return removed
