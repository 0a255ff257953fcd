"""
HTTP layer: authentication, permission guards and error mapping
"""
from wms.models import InventoryItem

from conftest import auth_headers


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_login_and_me(client, worker):
    response = client.post("/api/auth/login", data={"username": "worker_lee", "password": "pass1234"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["permissions"]["can_process_transactions"] is True

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.json()["username"] == "worker_lee"


def test_login_with_wrong_password(client, worker):
    response = client.post("/api/auth/login", data={"username": "worker_lee", "password": "nope"})
    assert response.status_code == 401


def test_requests_without_token_are_rejected(client):
    assert client.get("/api/inventory").status_code == 401


def test_outbound_through_api(client, db, worker):
    db.add_all([
        InventoryItem(code="P-1", name="부품", stock=10, location="A-1-1"),
        InventoryItem(code="P-1", name="부품", stock=5, location="B-1-1"),
    ])
    db.commit()

    response = client.post("/api/transactions", headers=auth_headers(worker), json={
        "type": "outbound", "item_code": "P-1", "item_name": "부품", "quantity": 12
    })

    assert response.status_code == 201
    assert response.json()["from_location"] == "A-1-1, B-1-1"
    assert response.json()["user_id"] == worker.id


def test_insufficient_stock_maps_to_400(client, db, worker):
    db.add(InventoryItem(code="P-1", name="부품", stock=1, location="A-1-1"))
    db.commit()

    response = client.post("/api/transactions", headers=auth_headers(worker), json={
        "type": "outbound", "item_code": "P-1", "item_name": "부품", "quantity": 2
    })

    assert response.status_code == 400
    assert response.json()["error"] == "InsufficientStock"


def test_viewer_cannot_post_transactions(client, viewer):
    response = client.post("/api/transactions", headers=auth_headers(viewer), json={
        "type": "inbound", "item_code": "P-1", "item_name": "부품", "quantity": 1
    })
    assert response.status_code == 403


def test_zero_quantity_is_a_validation_error(client, worker):
    response = client.post("/api/transactions", headers=auth_headers(worker), json={
        "type": "outbound", "item_code": "P-1", "item_name": "부품", "quantity": 0
    })
    assert response.status_code == 422


def test_inventory_create_merges_into_existing_code(client, admin):
    headers = auth_headers(admin)
    first = client.post("/api/inventory", headers=headers, json={"code": "P-1", "name": "부품", "stock": 3})
    second = client.post("/api/inventory", headers=headers, json={"code": "P-1", "name": "부품", "stock": 2})

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["stock"] == 5


def test_reset_requires_super_admin(client, admin, super_admin):
    assert client.post("/api/system/reset", headers=auth_headers(admin)).status_code == 403
    assert client.post("/api/system/reset", headers=auth_headers(super_admin)).status_code == 200


def test_permission_override_through_api(client, super_admin, viewer):
    response = client.put(
        f"/api/users/{viewer.id}/permissions",
        headers=auth_headers(super_admin),
        json={"permissions": {"can_process_transactions": True}},
    )
    assert response.status_code == 200
    assert response.json()["overrides"] == {"can_process_transactions": True}
    assert response.json()["permissions"]["can_process_transactions"] is True


def test_admin_cannot_edit_permissions(client, admin, viewer):
    response = client.put(
        f"/api/users/{viewer.id}/permissions",
        headers=auth_headers(admin),
        json={"permissions": {"can_process_transactions": True}},
    )
    assert response.status_code == 403


def test_super_admin_account_cannot_be_deleted(client, admin, super_admin):
    response = client.delete(f"/api/users/{super_admin.id}", headers=auth_headers(admin))
    assert response.status_code == 403
    assert response.json()["error"] == "Forbidden"


def test_inventory_csv_export(client, db, worker):
    db.add(InventoryItem(code="P-1", name="부품", stock=3, location="A-1-1"))
    db.commit()

    response = client.get("/api/export/inventory", headers=auth_headers(worker))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    text = response.content.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("제품코드,품명")
    assert "P-1" in text


def test_diary_flow_over_http(client, db, worker, admin):
    created = client.post("/api/work-diary", headers=auth_headers(admin), json={
        "title": "재고 실사", "content": "B구역", "work_date": "2026-03-02T09:00:00",
        "assigned_to": [worker.id], "visibility": "public",
    })
    assert created.status_code == 201
    diary_id = created.json()["id"]

    assert client.get("/api/notifications/unread-count", headers=auth_headers(worker)).json() == {"count": 1}

    listed = client.get("/api/work-diary", headers=auth_headers(worker)).json()
    assert listed[0]["status"] == "in_progress"

    done = client.post(f"/api/work-diary/{diary_id}/complete", headers=auth_headers(worker))
    assert done.json()["already_completed"] is False


def test_admin_cannot_create_privileged_accounts(client, admin):
    for role in ("super_admin", "admin"):
        response = client.post("/api/users", headers=auth_headers(admin), json={
            "username": f"new_{role}", "password": "pw", "role": role,
        })
        assert response.status_code == 403


def test_admin_can_create_regular_accounts(client, admin):
    response = client.post("/api/users", headers=auth_headers(admin), json={
        "username": "new_worker", "password": "pw", "role": "user", "department": "창고부",
    })
    assert response.status_code == 201
    assert response.json()["role"] == "user"


def test_super_admin_can_create_admin(client, super_admin):
    response = client.post("/api/users", headers=auth_headers(super_admin), json={
        "username": "second_admin", "password": "pw", "role": "admin",
    })
    assert response.status_code == 201
