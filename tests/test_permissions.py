# =============================================================================
# tests/test_permissions.py - Permission Matrix Tests
# =============================================================================
# The matrix is static config: admins hold every dashboard resource and
# canvassers hold only the field portal.
# =============================================================================

from app.config.permissions_config import (
    MODULES,
    PERMISSION_MATRIX,
    get_permission_matrix,
    get_role_permissions,
)


class TestPermissionMatrix:
    """Tests for generated permission names."""

    def test_names_are_resource_colon_action(self):
        names = {p["name"] for p in PERMISSION_MATRIX["permissions"]}
        assert "leads:create" in names
        assert "form_submissions:update" in names
        assert "field:time_tracking" in names
        # Contact submissions are created anonymously, never through the dashboard
        assert "form_submissions:create" not in names

    def test_every_module_action_has_a_permission(self):
        expected = sum(len(module["actions"]) for module in MODULES.values())
        assert len(PERMISSION_MATRIX["permissions"]) == expected

    def test_field_permissions_have_custom_descriptions(self):
        by_name = {p["name"]: p for p in get_permission_matrix()["permissions"]}
        assert by_name["field:submit_lead"]["description"] == "Record a lead generated in the field"
        assert by_name["inventory:read"]["description"] == "Read inventory"


class TestRolePermissions:
    """Tests for the two fixed roles."""

    def test_admin_has_everything_but_field(self):
        admin = set(get_role_permissions("admin"))
        assert "admins:delete" in admin
        assert "dashboard:read" in admin
        assert not any(name.startswith("field:") for name in admin)

    def test_canvasser_only_has_field(self):
        canvasser = get_role_permissions("canvasser")
        assert sorted(canvasser) == [
            "field:log_activity",
            "field:schedule",
            "field:submit_lead",
            "field:time_tracking",
        ]

    def test_unknown_role_has_nothing(self):
        assert get_role_permissions("salesperson") == []

    def test_returned_list_is_a_copy(self):
        get_role_permissions("canvasser").append("leads:delete")
        assert "leads:delete" not in get_role_permissions("canvasser")
