"""
Caller identity for tenant scoping.

Dependencies: None
System role: Tenant context passed from the API layer to services
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantContext:
    """
    The tenant a request acts for.

    Attributes:
        user_id: Opaque tenant identifier; scopes every record
        email: Lowercased caller email, empty when not supplied
        is_admin: Caller is on the admin allow-list
    """

    user_id: str
    email: str = ""
    is_admin: bool = False
