"""Role-based access control for audit data. No FastAPI."""

from enum import Enum

from secure_inquiry.security.exceptions import AuthorizationError


class Role(Enum):
    ADMIN = "ADMIN"
    AUDITOR = "AUDITOR"
    OPERATOR = "OPERATOR"


# Permission matrix:
# Role      View redacted  Decrypt original  Reset circuit
# ADMIN     ✓              ✓                 ✓
# AUDITOR   ✓              ✓                 ✗
# OPERATOR  ✓              ✗                 ✓

_ACTION_PERMISSIONS: dict[tuple[Role, str], bool] = {
    (Role.ADMIN, "view_redacted"): True,
    (Role.ADMIN, "decrypt_original"): True,
    (Role.ADMIN, "reset_circuit"): True,
    (Role.AUDITOR, "view_redacted"): True,
    (Role.AUDITOR, "decrypt_original"): True,
    (Role.AUDITOR, "reset_circuit"): False,
    (Role.OPERATOR, "view_redacted"): True,
    (Role.OPERATOR, "decrypt_original"): False,
    (Role.OPERATOR, "reset_circuit"): True,
}


class RBACService:
    """Check permission for role and action. Raise AuthorizationError if invalid."""

    def check_permission(self, role: Role, action: str) -> None:
        """Raises AuthorizationError if role does not have permission for action."""
        key = (role, action)
        if key not in _ACTION_PERMISSIONS or not _ACTION_PERMISSIONS[key]:
            raise AuthorizationError(
                f"Role {role.value} does not have permission for action '{action}'"
            )
