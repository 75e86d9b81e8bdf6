from __future__ import annotations

from flask import Blueprint, abort, jsonify, request, url_for

from app.crm.db import db_session
from app.crm.modules.customers.models import Customer
from app.crm.modules.customers.store import CustomerStore

bp = Blueprint("customers", __name__)


def _store() -> CustomerStore:
    return CustomerStore(db_session())


@bp.get("")
def customers_list():
    return jsonify([c.to_dict() for c in _store().list_all()])


@bp.get("/<int:customer_id>")
def customer_detail(customer_id: int):
    c = _store().find_by_id(customer_id)
    return jsonify(c.to_dict() if c else None)


@bp.get("/name")
def customers_by_name():
    name = request.args.get("name")
    if name is None:
        return jsonify([])
    return jsonify([c.to_dict() for c in _store().find_by_name(name)])


@bp.post("")
def customer_create():
    if not request.is_json:
        abort(415, description="Request body must be application/json.")
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Request body must be a JSON object.")

    # Client-supplied ids are ignored; the database assigns one.
    c = Customer(name=payload.get("name"))
    _store().persist(c)

    resp = jsonify(c.to_dict())
    resp.status_code = 201
    resp.headers["Location"] = url_for("customers.customer_detail", customer_id=c.id)
    return resp
