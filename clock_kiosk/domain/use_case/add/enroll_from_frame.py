from attrs import define, field, validators

from ...model import EnrolledIdentity
from ..internal_logic.capture_sample import CaptureSample
from .enroll_employee import EnrollEmployee


@define
class EnrollFromFrame:
    capture_sample: CaptureSample = field(validator=validators.instance_of(CaptureSample))
    enroll_employee: EnrollEmployee = field(validator=validators.instance_of(EnrollEmployee))

    def invoke(self, employee_id: str, frame, actor: str) -> EnrolledIdentity:
        sample = self.capture_sample.invoke(frame)
        return self.enroll_employee.invoke(employee_id, sample, actor)
