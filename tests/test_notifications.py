from types import SimpleNamespace

from app.main import app
from app.services import sms_service
from app.services.auth_middleware import get_current_user


def test_email_requires_subject_and_message(client, override_user):
    response = client.post("/notifications/email", json={"email": "someone@example.com", "message": "hi"})

    assert response.status_code == 400
    assert response.json()["message"] == "Subject and message are required"


def test_email_requires_recipient(client, override_user):
    response = client.post("/notifications/email", json={"subject": "Hello", "message": "hi"})

    assert response.status_code == 400


def test_email_is_sent_through_smtp(client, override_user, monkeypatch):
    sent = {}

    class _FakeSMTP:
        def __init__(self, host, port):
            sent["server"] = (host, port)

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def starttls(self):
            sent["tls"] = True

        def login(self, user, password):
            sent["login"] = user

        def send_message(self, msg):
            sent["message"] = msg

    monkeypatch.setattr("app.services.email_services.smtplib.SMTP", _FakeSMTP)

    response = client.post(
        "/notifications/email",
        json={"subject": "Birthday", "message": "Mom's birthday is tomorrow", "email": "me@example.com"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["sent_to"] == "me@example.com"
    assert data["message_id"]
    assert sent["tls"] is True
    assert sent["message"]["To"] == "me@example.com"
    assert sent["message"]["Subject"] == "Birthday"


def test_email_provider_failure_is_server_error(client, override_user, monkeypatch):
    def _refuse(*args, **kwargs):
        raise ConnectionRefusedError("connection refused")

    monkeypatch.setattr("app.services.email_services.smtplib.SMTP", _refuse)

    response = client.post(
        "/notifications/email",
        json={"subject": "Hi", "message": "hello", "email": "me@example.com"},
    )

    assert response.status_code == 500
    assert "connection refused" in response.json()["message"]


def test_sms_unavailable_without_twilio(client, override_user, monkeypatch):
    monkeypatch.setattr(sms_service, "client", None)

    response = client.post("/notifications/sms")

    assert response.status_code == 503


def test_sms_sent_to_user_phone(client, override_user, monkeypatch):
    created = {}

    class _Messages:
        def create(self, body, from_, to):
            created.update(body=body, to=to)
            return SimpleNamespace(sid="SM123")

    monkeypatch.setattr(sms_service, "client", SimpleNamespace(messages=_Messages()))

    response = client.post("/notifications/sms", json={"message": "Don't forget the flowers"})

    assert response.status_code == 200
    assert response.json()["data"] == {"sid": "SM123", "sent_to": "+15550001111"}
    assert created == {"body": "Don't forget the flowers", "to": "+15550001111"}


def test_sms_requires_phone_number(client):
    app.dependency_overrides[get_current_user] = lambda: SimpleNamespace(id="user_x", phone_number=None)
    try:
        response = client.post("/notifications/sms")
    finally:
        app.dependency_overrides.pop(get_current_user, None)

    assert response.status_code == 400
