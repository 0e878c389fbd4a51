"""RBAC: permission matrix for audit access and circuit operations."""

import pytest

from secure_inquiry.security.exceptions import AuthorizationError
from secure_inquiry.security.rbac import RBACService, Role


@pytest.mark.parametrize(
    "role, action",
    [
        (Role.ADMIN, "view_redacted"),
        (Role.ADMIN, "decrypt_original"),
        (Role.ADMIN, "reset_circuit"),
        (Role.AUDITOR, "view_redacted"),
        (Role.AUDITOR, "decrypt_original"),
        (Role.OPERATOR, "view_redacted"),
        (Role.OPERATOR, "reset_circuit"),
    ],
)
def test_allowed_actions(role, action):
    RBACService().check_permission(role, action)


@pytest.mark.parametrize(
    "role, action",
    [
        (Role.AUDITOR, "reset_circuit"),
        (Role.OPERATOR, "decrypt_original"),
        (Role.ADMIN, "delete_entry"),
    ],
)
def test_denied_actions(role, action):
    with pytest.raises(AuthorizationError) as exc_info:
        RBACService().check_permission(role, action)
    assert role.value in exc_info.value.message
