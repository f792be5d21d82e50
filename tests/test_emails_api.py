import uuid

from trustlink.models import PendingEmail

USER = "user@example.com"


def _initiate(client, contact):
    r = client.post("/setup/initiate", json={"userEmail": USER, "contactGoogleEmail": contact})
    assert r.status_code == 200


def test_pending_emails_lists_staged_setup_emails(client):
    _initiate(client, "a@example.com")
    _initiate(client, "b@example.com")

    r = client.get("/emails/pending")

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert [e["contactEmail"] for e in body["emails"]] == ["a@example.com", "b@example.com"]
    first = body["emails"][0]
    assert first["status"] == "pending"
    assert first["template_params"]["to_email"] == "a@example.com"
    assert first["template_params"]["setup_link"].startswith("https://trustlink.example.com/setup-drive?token=")


def test_pending_emails_are_capped_at_ten(client):
    for i in range(12):
        _initiate(client, f"contact{i}@example.com")

    assert len(client.get("/emails/pending").json()["emails"]) == 10


def test_mark_sent_removes_email_from_pending(client, session_factory):
    _initiate(client, "a@example.com")
    email_id = client.get("/emails/pending").json()["emails"][0]["id"]

    r = client.post("/emails/mark-sent", json={"emailId": email_id})

    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert client.get("/emails/pending").json()["emails"] == []

    with session_factory() as s:
        row = s.get(PendingEmail, uuid.UUID(email_id))
        assert row.status == "sent"
        assert row.sent_at is not None


def test_mark_sent_twice_keeps_first_timestamp(client, session_factory):
    _initiate(client, "a@example.com")
    email_id = client.get("/emails/pending").json()["emails"][0]["id"]

    client.post("/emails/mark-sent", json={"emailId": email_id})
    with session_factory() as s:
        first = s.get(PendingEmail, uuid.UUID(email_id)).sent_at

    assert client.post("/emails/mark-sent", json={"emailId": email_id}).status_code == 200
    with session_factory() as s:
        assert s.get(PendingEmail, uuid.UUID(email_id)).sent_at == first


def test_mark_sent_unknown_email(client):
    r = client.post("/emails/mark-sent", json={"emailId": str(uuid.uuid4())})

    assert r.status_code == 404
    assert r.json() == {"error": "Email not found"}


def test_mark_sent_requires_valid_id(client):
    r = client.post("/emails/mark-sent", json={"emailId": "42"})
    assert r.status_code == 400
