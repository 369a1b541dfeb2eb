"""Unit tests for auth/redirect.py -- the role to destination rule shared by probe and submit."""

import pytest

from auth.models import Destination
from auth.redirect import ADMIN_ROLES, destination_for, is_admin_role


class TestDestinationFor:
    @pytest.mark.parametrize("role", ["admin", "admn", "  admin", "admn\n", "\tadmin "])
    def test_admin_markers_go_to_admin(self, role):
        assert destination_for(role) is Destination.ADMIN

    @pytest.mark.parametrize("role", ["staff", "Admin", "ADMIN", "administrator", "ad min", "", "adm"])
    def test_everything_else_goes_to_map(self, role):
        assert destination_for(role) is Destination.MAP

    def test_none_role_goes_to_map(self):
        assert destination_for(None) is Destination.MAP

    def test_destination_values_are_routes(self):
        assert destination_for("admin").value == "/admin"
        assert destination_for("staff").value == "/map"


def test_admin_roles_keep_both_literals():
    """"admn" stays accepted until the auth service says otherwise."""
    assert ADMIN_ROLES == {"admin", "admn"}


def test_is_admin_role_trims():
    assert is_admin_role(" admn ")
    assert not is_admin_role("admins")
