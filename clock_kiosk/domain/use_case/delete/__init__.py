from .revoke_enrollment import RevokeEnrollment

__all__ = ["RevokeEnrollment"]
