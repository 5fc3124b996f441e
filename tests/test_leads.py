from fastapi.testclient import TestClient

from autolead.app.core.security import get_password_hash
from autolead.app.db.session import get_database
from autolead.app.main import app
from autolead.app.models.activity import Activity
from autolead.app.models.dealership import Dealership
from autolead.app.models.lead import Lead
from autolead.app.models.user import User


def create_dealership(name: str) -> int:
    db = get_database().session()
    dealership = Dealership(name=name)
    db.add(dealership)
    db.commit()
    dealership_id = dealership.id
    db.close()
    return dealership_id


def create_user(email: str, role: str, dealership_id: int) -> int:
    db = get_database().session()
    user = User(
        email=email,
        hashed_password=get_password_hash("secret"),
        name=email.split("@")[0],
        role=role,
        dealership_id=dealership_id,
    )
    db.add(user)
    db.commit()
    user_id = user.id
    db.close()
    return user_id


def login(client: TestClient, email: str) -> dict:
    response = client.post("/api/auth/login", json={"email": email, "password": "secret"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


def create_lead(client: TestClient, headers: dict, **fields):
    payload = {"customer_name": "Customer", **fields}
    return client.post("/api/leads", json=payload, headers=headers)


def test_create_lead_applies_defaults():
    client = TestClient(app)
    dealership_id = create_dealership("North")
    rep_id = create_user("rep@example.com", "sales_rep", dealership_id)
    headers = login(client, "rep@example.com")

    response = create_lead(client, headers, customer_name="Pat Doe", vehicle_interest="Ford F-150")
    assert response.status_code == 201
    data = response.json()
    assert data["customer_name"] == "Pat Doe"
    assert data["vehicle_interest"] == "Ford F-150"
    assert data["status"] == "new"
    assert data["priority"] == "medium"
    assert data["source"] == "manual"
    assert data["dealership_id"] == dealership_id
    assert data["assigned_to"] == rep_id


def test_create_lead_requires_auth():
    client = TestClient(app)
    response = client.post("/api/leads", json={"customer_name": "NoAuth"})
    assert response.status_code == 401


def test_create_lead_rejects_invalid_priority():
    client = TestClient(app)
    dealership_id = create_dealership("North")
    create_user("rep@example.com", "sales_rep", dealership_id)
    headers = login(client, "rep@example.com")
    response = create_lead(client, headers, priority="urgent")
    assert response.status_code == 422


def test_create_lead_rejects_assignee_from_other_dealership():
    client = TestClient(app)
    north = create_dealership("North")
    south = create_dealership("South")
    create_user("rep@example.com", "sales_rep", north)
    outsider_id = create_user("outsider@example.com", "sales_rep", south)
    headers = login(client, "rep@example.com")
    response = create_lead(client, headers, assigned_to=outsider_id)
    assert response.status_code == 400


def test_non_admin_only_sees_own_dealership_even_with_query_param():
    client = TestClient(app)
    north = create_dealership("North")
    south = create_dealership("South")
    create_user("north@example.com", "sales_rep", north)
    create_user("south@example.com", "manager", south)
    north_headers = login(client, "north@example.com")
    south_headers = login(client, "south@example.com")
    create_lead(client, north_headers, customer_name="North Lead")
    create_lead(client, south_headers, customer_name="South Lead")

    response = client.get("/api/leads", params={"dealership_id": south}, headers=north_headers)
    assert response.status_code == 200
    data = response.json()
    assert [lead["customer_name"] for lead in data] == ["North Lead"]
    assert all(lead["dealership_id"] == north for lead in data)


def test_admin_sees_all_dealerships_and_can_filter():
    client = TestClient(app)
    north = create_dealership("North")
    south = create_dealership("South")
    create_user("admin@example.com", "admin", north)
    create_user("south@example.com", "sales_rep", south)
    admin_headers = login(client, "admin@example.com")
    south_headers = login(client, "south@example.com")
    create_lead(client, admin_headers, customer_name="North Lead")
    create_lead(client, south_headers, customer_name="South Lead")

    all_leads = client.get("/api/leads", headers=admin_headers).json()
    assert {lead["customer_name"] for lead in all_leads} == {"North Lead", "South Lead"}

    filtered = client.get("/api/leads", params={"dealership_id": south}, headers=admin_headers).json()
    assert [lead["customer_name"] for lead in filtered] == ["South Lead"]


def test_filter_leads_by_status_newest_first():
    client = TestClient(app)
    dealership_id = create_dealership("North")
    create_user("rep@example.com", "sales_rep", dealership_id)
    headers = login(client, "rep@example.com")
    first = create_lead(client, headers, customer_name="First").json()
    create_lead(client, headers, customer_name="Second")
    third = create_lead(client, headers, customer_name="Third").json()
    for lead in (first, third):
        client.put(f"/api/leads/{lead['id']}", json={"status": "contacted"}, headers=headers)

    response = client.get("/api/leads", params={"status": "contacted"}, headers=headers)
    assert response.status_code == 200
    assert [lead["customer_name"] for lead in response.json()] == ["Third", "First"]


def test_update_lead_replaces_only_provided_fields():
    client = TestClient(app)
    dealership_id = create_dealership("North")
    create_user("rep@example.com", "sales_rep", dealership_id)
    headers = login(client, "rep@example.com")
    lead = create_lead(
        client,
        headers,
        customer_name="Pat Doe",
        customer_phone="555-123-4567",
        notes="Wants a test drive",
    ).json()

    response = client.put(
        f"/api/leads/{lead['id']}",
        json={"status": "qualified", "priority": "high"},
        headers=headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "qualified"
    assert data["priority"] == "high"
    assert data["customer_name"] == "Pat Doe"
    assert data["customer_phone"] == "555-123-4567"
    assert data["notes"] == "Wants a test drive"


def test_update_lead_outside_dealership_returns_404():
    client = TestClient(app)
    north = create_dealership("North")
    south = create_dealership("South")
    create_user("north@example.com", "sales_rep", north)
    create_user("south@example.com", "sales_rep", south)
    lead = create_lead(client, login(client, "north@example.com")).json()

    response = client.put(
        f"/api/leads/{lead['id']}",
        json={"status": "contacted"},
        headers=login(client, "south@example.com"),
    )
    assert response.status_code == 404


def test_update_missing_lead_returns_404():
    client = TestClient(app)
    dealership_id = create_dealership("North")
    create_user("rep@example.com", "sales_rep", dealership_id)
    response = client.put("/api/leads/999", json={"notes": "x"}, headers=login(client, "rep@example.com"))
    assert response.status_code == 404


def test_get_lead_outside_scope_returns_404():
    client = TestClient(app)
    north = create_dealership("North")
    south = create_dealership("South")
    create_user("north@example.com", "sales_rep", north)
    create_user("south@example.com", "sales_rep", south)
    lead = create_lead(client, login(client, "north@example.com")).json()

    own = client.get(f"/api/leads/{lead['id']}", headers=login(client, "north@example.com"))
    assert own.status_code == 200
    other = client.get(f"/api/leads/{lead['id']}", headers=login(client, "south@example.com"))
    assert other.status_code == 404


def test_lead_changes_are_recorded_as_activities():
    client = TestClient(app)
    dealership_id = create_dealership("North")
    rep_id = create_user("rep@example.com", "sales_rep", dealership_id)
    headers = login(client, "rep@example.com")
    lead = create_lead(client, headers).json()
    client.put(f"/api/leads/{lead['id']}", json={"status": "contacted", "notes": "Called"}, headers=headers)

    response = client.get(f"/api/leads/{lead['id']}/activities", headers=headers)
    assert response.status_code == 200
    activities = response.json()
    assert [a["activity_type"] for a in activities] == ["lead_created", "status_changed", "lead_updated"]
    assert activities[1]["description"] == "Status changed from new to contacted"
    assert activities[2]["description"] == "Lead updated: notes changed"
    assert all(a["user_id"] == rep_id for a in activities)


def test_unchanged_update_logs_no_activity():
    client = TestClient(app)
    dealership_id = create_dealership("North")
    create_user("rep@example.com", "sales_rep", dealership_id)
    headers = login(client, "rep@example.com")
    lead = create_lead(client, headers, customer_name="Same").json()
    client.put(f"/api/leads/{lead['id']}", json={"customer_name": "Same"}, headers=headers)

    db = get_database().session()
    count = db.query(Activity).filter(Activity.lead_id == lead["id"]).count()
    stored = db.query(Lead).filter(Lead.id == lead["id"]).first()
    assert stored.customer_name == "Same"
    db.close()
    assert count == 1
