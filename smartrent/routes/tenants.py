# smartrent/routes/tenants.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from ..security import current_caller
from ..services import tenants as service

bp = Blueprint("tenants", __name__)


@bp.get("/tenants")
@jwt_required()
def list_tenants():
    """Owners see every lease; tenants see their own as a one-item list"""
    items = service.list_for_caller(current_caller())
    return jsonify({"success": True, "tenants": [t.serialize() for t in items]}), 200


@bp.post("/tenants")
@jwt_required()
def create_tenant():
    data = request.get_json(silent=True) or {}
    t = service.create_tenant(current_caller(), data)
    return jsonify({
        "success": True,
        "message": "Tenant added successfully",
        "tenant": t.serialize(),
    }), 201


@bp.put("/tenants/<int:tenant_id>")
@jwt_required()
def update_tenant(tenant_id):
    data = request.get_json(silent=True) or {}
    t = service.update_tenant(current_caller(), tenant_id, data)
    return jsonify({
        "success": True,
        "message": "Tenant updated successfully",
        "tenant": t.serialize(),
    }), 200


@bp.delete("/tenants/<int:tenant_id>")
@jwt_required()
def delete_tenant(tenant_id):
    service.delete_tenant(current_caller(), tenant_id)
    return jsonify({"success": True, "message": "Tenant removed successfully"}), 200
