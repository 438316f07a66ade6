# smartrent/routes/maintenance.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from ..security import current_caller
from ..services import maintenance as service

bp = Blueprint("maintenance", __name__)


@bp.get("/maintenance")
@jwt_required()
def list_maintenance():
    items = service.list_for_caller(current_caller())
    return jsonify({"success": True, "maintenance": [m.serialize() for m in items]}), 200


@bp.post("/maintenance")
@jwt_required()
def create_maintenance():
    data = request.get_json(silent=True) or {}
    m = service.create_request(current_caller(), data)
    return jsonify({
        "success": True,
        "message": "Maintenance request submitted successfully",
        "maintenance": m.serialize(),
    }), 201


@bp.put("/maintenance/<int:request_id>")
@jwt_required()
def update_maintenance(request_id):
    data = request.get_json(silent=True) or {}
    m = service.update_request(current_caller(), request_id, data)
    return jsonify({
        "success": True,
        "message": "Maintenance request updated successfully",
        "maintenance": m.serialize(),
    }), 200


@bp.delete("/maintenance/<int:request_id>")
@jwt_required()
def delete_maintenance(request_id):
    service.delete_request(current_caller(), request_id)
    return jsonify({"success": True, "message": "Maintenance request deleted successfully"}), 200
