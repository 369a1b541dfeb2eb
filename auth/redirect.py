"""
auth/redirect.py -- Role to destination rule shared by the prober and the submitter.
"""

from __future__ import annotations

from typing import Optional

from auth.models import Destination

# "admn" is accepted alongside "admin". Whether it is a legacy typo or a
# second admin tier is up to the auth service; keep both until it says.
ADMIN_ROLES = frozenset({"admin", "admn"})


def is_admin_role(role: Optional[str]) -> bool:
    return (role or "").strip() in ADMIN_ROLES


def destination_for(role: Optional[str]) -> Destination:
    """Return the landing route for a verified user with the given role.

    Comparison is exact after trimming: "Admin" is not an admin marker.
    """
    return Destination.ADMIN if is_admin_role(role) else Destination.MAP
