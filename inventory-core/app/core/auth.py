# app/core/auth.py
import enum

from fastapi import Header

from app.core.errors import PermissionDeniedError


class Role(str, enum.Enum):
    ADMIN = "Admin"
    SALES_REP = "Sales Rep"
    DISTRIBUTOR = "Distributor"
    TECHNICIAN = "Technician"


class Permission(str, enum.Enum):
    FULL_ACCESS = "FullAccess"
    ORDERS_VIEWING = "OrdersViewing"
    INVENTORY_VIEWING = "InventoryViewing"
    INVENTORY_EDITING = "InventoryEditing"
    QR_CODES_BARCODES = "QrCodesBarcodes"
    QUOTING = "Quoting"
    QUOTING_CUSTOM_ITEMS = "QuotingCustomItems"
    MANUFACTURER_ORDERS = "ManufacturerOrders"


ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset(Permission),
    Role.SALES_REP: frozenset({Permission.INVENTORY_VIEWING, Permission.QUOTING}),
    Role.DISTRIBUTOR: frozenset({Permission.INVENTORY_VIEWING, Permission.QUOTING}),
    Role.TECHNICIAN: frozenset({
        Permission.ORDERS_VIEWING,
        Permission.INVENTORY_VIEWING,
        Permission.INVENTORY_EDITING,
        Permission.QR_CODES_BARCODES,
        Permission.QUOTING,
    }),
}


def normalize_role(raw: str | None) -> Role | None:
    if not raw:
        return None
    value = raw.strip().lower().replace("_", " ").replace("-", " ")
    for role in Role:
        if role.value.lower() == value:
            return role
    return None


def has_permission(role: Role, permission: Permission) -> bool:
    granted = ROLE_PERMISSIONS.get(role, frozenset())
    return Permission.FULL_ACCESS in granted or permission in granted


def require_permission(permission: Permission):
    """Build a dependency that rejects callers whose role lacks ``permission``.

    The role arrives already authenticated in the ``X-User-Role`` header; session
    handling lives in front of this service.
    """

    async def dependency(x_user_role: str | None = Header(default=None)) -> Role:
        role = normalize_role(x_user_role)
        if role is None:
            raise PermissionDeniedError("Unauthorized", status_code=401)
        if not has_permission(role, permission):
            raise PermissionDeniedError(f"Role '{role.value}' lacks {permission.value}")
        return role

    return dependency
