# smartrent/routes/properties.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from ..security import current_caller
from ..services import properties as service

bp = Blueprint("properties", __name__)


@bp.get("/properties")
def list_properties():
    """Public listing of available properties"""
    props = service.list_available()
    return jsonify({"success": True, "properties": [p.serialize() for p in props]}), 200


@bp.get("/properties/my-properties")
@jwt_required()
def my_properties():
    props = service.list_for_caller(current_caller())
    return jsonify({"success": True, "properties": [p.serialize() for p in props]}), 200


@bp.get("/properties/<int:property_id>")
def get_property(property_id):
    prop = service.get_property(property_id)
    return jsonify({"success": True, "property": prop.serialize()}), 200


@bp.post("/properties")
@jwt_required()
def create_property():
    data = request.get_json(silent=True) or {}
    prop = service.create_property(current_caller(), data)
    return jsonify({
        "success": True,
        "message": "Property added successfully",
        "property": prop.serialize(),
    }), 201


@bp.put("/properties/<int:property_id>")
@jwt_required()
def update_property(property_id):
    data = request.get_json(silent=True) or {}
    prop = service.update_property(current_caller(), property_id, data)
    return jsonify({
        "success": True,
        "message": "Property updated successfully",
        "property": prop.serialize(),
    }), 200


@bp.delete("/properties/<int:property_id>")
@jwt_required()
def delete_property(property_id):
    service.delete_property(current_caller(), property_id)
    return jsonify({"success": True, "message": "Property deleted successfully"}), 200
