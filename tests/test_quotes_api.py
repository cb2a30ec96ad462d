import pytest
from fastapi.testclient import TestClient

from fabquote.main import create_app

QUOTES_URL = "/api/v1/quotes"


@pytest.fixture
def client():
    return TestClient(create_app())


def quote_payload(**overrides):
    payload = {
        "timeline": "immediate",
        "projectName": "Enclosure rev B",
        "material": "stainless-steel",
        "materialGrade": "304",
        "quantity": 250,
        "companyName": "Acme Medical",
        "contactName": "Jordan Lee",
        "email": "jordan@acme-medical.com",
        "phone": "+1 (555) 123-4567",
        "fileKeys": ["rfq-uploads/1700000000000-abc-a.pdf"],
    }
    payload.update(overrides)
    return payload


def test_quote_accepted(client):
    response = client.post(QUOTES_URL, json=quote_payload())

    assert response.status_code == 202
    body = response.json()
    assert body["success"] is True
    assert body["fileCount"] == 1
    assert body["quoteId"]


def test_quote_without_files_or_optional_fields(client):
    payload = quote_payload(fileKeys=[])
    for key in ("projectName", "materialGrade", "quantity"):
        payload.pop(key)

    response = client.post(QUOTES_URL, json=payload)

    assert response.status_code == 202
    assert response.json()["fileCount"] == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"timeline": "someday"},
        {"material": "titanium"},
        {"quantity": 0},
        {"companyName": "A"},
        {"email": "not-an-email"},
        {"phone": "555-1234"},
        {"phone": "call me maybe"},
        {"fileKeys": ["uploads/a.pdf"]},
        {"fileKeys": ["rfq-uploads/../secrets/a.pdf"]},
        {"fileKeys": ["rfq-uploads/1-a.pdf", "rfq-uploads/1-a.pdf"]},
        {"fileKeys": [f"rfq-uploads/{i}-a.pdf" for i in range(6)]},
    ],
)
def test_invalid_quote_rejected(client, overrides):
    response = client.post(QUOTES_URL, json=quote_payload(**overrides))
    assert response.status_code == 422
