from datetime import datetime, timezone

from attrs import define, field, validators

from ...model import AuditEntry, CapturedSample, EnrolledIdentity
from ...repository import AuditLogRepository, EnrollmentRepository
from ...service import UpstreamCaller
from ....utils import get_logger

logger = get_logger(__name__)


@define
class EnrollEmployee:
    enrollment_repository: EnrollmentRepository = field(
        validator=validators.instance_of(EnrollmentRepository)
    )
    audit_log_repository: AuditLogRepository = field(
        validator=validators.instance_of(AuditLogRepository)
    )
    upstream_caller: UpstreamCaller = field(
        validator=validators.instance_of(UpstreamCaller)
    )
    embedding_dimension: int = field(default=128, validator=validators.gt(0))

    def invoke(self, employee_id: str, sample: CapturedSample, actor: str) -> EnrolledIdentity:
        if sample.dimension != self.embedding_dimension:
            raise ValueError(
                f"Expected a {self.embedding_dimension}-dimensional embedding, "
                f"got {sample.dimension}"
            )

        previous = self.upstream_caller.call(
            "enrollment store", self.enrollment_repository.get_enrolled_identity, employee_id
        )
        identity = EnrolledIdentity(
            employee_id=employee_id,
            descriptor=sample.embedding,
            enrolled_at=datetime.now(timezone.utc),
        )
        result = self.upstream_caller.call(
            "enrollment store", self.enrollment_repository.set_enrolled_identity, identity
        )
        logger.info(
            "Employee %s %s by %s",
            employee_id,
            "re-enrolled" if previous else "enrolled",
            actor,
        )

        self.audit_log_repository.append_audit_entry(
            AuditEntry(
                actor=actor,
                action="enroll",
                subject_employee_id=employee_id,
                metadata={"replaced": previous is not None, "dimension": sample.dimension},
            )
        )
        return result
