from app.core.auth import Permission, Role, has_permission, normalize_role


def test_normalize_role_accepts_loose_spellings():
    assert normalize_role("Admin") == Role.ADMIN
    assert normalize_role("sales_rep") == Role.SALES_REP
    assert normalize_role(" sales-rep ") == Role.SALES_REP
    assert normalize_role("technician") == Role.TECHNICIAN
    assert normalize_role("janitor") is None
    assert normalize_role(None) is None


def test_admin_has_every_permission():
    assert all(has_permission(Role.ADMIN, permission) for permission in Permission)


def test_only_admin_may_apply_manufacturer_orders():
    for role in (Role.SALES_REP, Role.DISTRIBUTOR, Role.TECHNICIAN):
        assert not has_permission(role, Permission.MANUFACTURER_ORDERS)


def test_technician_edits_inventory_but_sales_rep_does_not():
    assert has_permission(Role.TECHNICIAN, Permission.INVENTORY_EDITING)
    assert not has_permission(Role.SALES_REP, Permission.INVENTORY_EDITING)
    assert has_permission(Role.SALES_REP, Permission.QUOTING)
