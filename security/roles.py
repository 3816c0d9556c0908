"""
ROLE DEFINITIONS

Define marketplace roles as carried in the credential payload.

Rules:
- No imports outside typing
- No logic, only declarations
- Roles must be explicit strings
- Used by token_decoder.py and access_guard.py
"""

from typing import FrozenSet, Literal

# Role definitions
CUSTOMER: Literal["customer"] = "customer"
OWNER: Literal["owner"] = "owner"
ADMIN: Literal["admin"] = "admin"

# All roles
ALL_ROLES: FrozenSet[str] = frozenset({CUSTOMER, OWNER, ADMIN})

# Roles a visitor may pick when registering (admins are provisioned server-side)
SELF_SERVICE_ROLES: list[str] = [CUSTOMER, OWNER]
