"""Tests for the /customer JSON API."""
import pytest

from app.crm import create_app
from app.crm.db import create_tables
from app.crm.models import Base


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.delenv("CREATE_TABLES_ON_START", raising=False)

    app = create_app()
    create_tables(app)
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


def _create(client, name):
    r = client.post("/customer", json={"name": name})
    assert r.status_code == 201
    return r.json


def test_create_returns_201_with_assigned_id(client):
    r = client.post("/customer", json={"name": "Ada"})
    assert r.status_code == 201
    assert r.json["name"] == "Ada"
    assert isinstance(r.json["id"], int)
    assert r.headers["Location"].endswith(f"/customer/{r.json['id']}")


def test_end_to_end_lookup_flow(client):
    ada = _create(client, "Ada")

    r = client.get(f"/customer/{ada['id']}")
    assert r.status_code == 200
    assert r.json == ada

    r = client.get("/customer/name", query_string={"name": "Ada"})
    assert r.status_code == 200
    assert r.json == [ada]

    r = client.get("/customer/name", query_string={"name": "Nobody"})
    assert r.status_code == 200
    assert r.json == []

    r = client.get("/customer")
    assert r.status_code == 200
    assert ada in r.json


def test_list_contains_every_created_customer(client):
    created = [_create(client, n) for n in ("A", "B", "C")]
    r = client.get("/customer")
    assert r.status_code == 200
    assert sorted(c["id"] for c in r.json) == sorted(c["id"] for c in created)


def test_get_unknown_id_returns_null(client):
    r = client.get("/customer/9999")
    assert r.status_code == 200
    assert r.is_json
    assert r.json is None


def test_get_non_integer_id_is_404(client):
    r = client.get("/customer/abc")
    assert r.status_code == 404


def test_name_lookup_is_exact(client):
    ada = _create(client, "Ada")
    _create(client, "ada")
    _create(client, "Ada Lovelace")

    r = client.get("/customer/name", query_string={"name": "Ada"})
    assert r.json == [ada]

    r = client.get("/customer/name", query_string={"name": "Ada "})
    assert r.json == []


def test_name_lookup_returns_duplicates(client):
    first = _create(client, "Grace")
    second = _create(client, "Grace")
    r = client.get("/customer/name", query_string={"name": "Grace"})
    assert sorted(c["id"] for c in r.json) == sorted([first["id"], second["id"]])


def test_name_lookup_without_query_param_is_empty(client):
    _create(client, "Ada")
    r = client.get("/customer/name")
    assert r.status_code == 200
    assert r.json == []


def test_client_supplied_id_is_ignored(client):
    r = client.post("/customer", json={"id": 12345, "name": "Ada"})
    assert r.status_code == 201
    assert r.json["id"] != 12345
    assert client.get("/customer/12345").json is None


def test_name_at_limit_is_accepted(client):
    name = "x" * 40
    r = client.post("/customer", json={"name": name})
    assert r.status_code == 201
    assert client.get(f"/customer/{r.json['id']}").json["name"] == name


def test_name_too_long_is_rejected_without_write(client):
    r = client.post("/customer", json={"name": "x" * 41})
    assert r.status_code == 400
    assert r.json["error"] == "validation_error"
    assert r.json["field"] == "name"
    assert client.get("/customer").json == []


@pytest.mark.parametrize("body", [{}, {"name": None}, {"name": 42}])
def test_missing_or_invalid_name_is_rejected(client, body):
    r = client.post("/customer", json=body)
    assert r.status_code == 400
    assert r.json["field"] == "name"
    assert client.get("/customer").json == []


def test_non_json_content_type_is_415(client):
    r = client.post("/customer", data="name=Ada", content_type="application/x-www-form-urlencoded")
    assert r.status_code == 415
    assert client.get("/customer").json == []


def test_malformed_json_is_400(client):
    r = client.post("/customer", data="{not json", content_type="application/json")
    assert r.status_code == 400


def test_json_array_body_is_400(client):
    r = client.post("/customer", json=[{"name": "Ada"}])
    assert r.status_code == 400


def test_storage_failure_is_500(app, client):
    Base.metadata.drop_all(bind=app.extensions["sqlalchemy_engine"])

    r = client.get("/customer")
    assert r.status_code == 500
    assert r.json["error"] == "storage_error"

    r = client.post("/customer", json={"name": "Ada"})
    assert r.status_code == 500
    assert r.json["error"] == "storage_error"


@pytest.mark.parametrize("path", ["/customer/99999999999999999999", f"/customer/{2**63}", f"/customer/{2**63 - 1}"])
def test_get_huge_unknown_id_returns_null(client, path):
    _create(client, "Ada")
    r = client.get(path)
    assert r.status_code == 200
    assert r.json is None


def test_get_by_id_storage_failure_is_500(app, client):
    Base.metadata.drop_all(bind=app.extensions["sqlalchemy_engine"])

    r = client.get("/customer/1")
    assert r.status_code == 500
    assert r.json["error"] == "storage_error"
