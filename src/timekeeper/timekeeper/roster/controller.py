from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..common.validators import require_keys
from ..core.constants import DEFAULT_DEPARTMENT
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.roster_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def employees_list():
        return ok(
            employees=[e.to_dict() for e in service.list_employees()],
            departments=service.departments(),
        )

    @app.route("/api/employees", methods=["POST"], endpoint="employees_add")
    def employees_add():
        data = json_body()
        employee = service.add_employee(
            name=str(data.get("name") or ""),
            job=str(data.get("job") or ""),
            department=str(data.get("department") or DEFAULT_DEPARTMENT),
        )
        return ok(employee=employee.to_dict()), 201

    @app.route("/api/employees/edit", methods=["POST"], endpoint="employees_edit")
    def employees_edit():
        data = require_keys(json_body(), ["oldName"])
        employee = service.edit_employee(
            str(data["oldName"]),
            name=str(data.get("name") or ""),
            job=str(data.get("job") or ""),
            department=str(data.get("department") or ""),
        )
        return ok(employee=employee.to_dict())

    @app.route("/api/employees/remove", methods=["POST"], endpoint="employees_remove")
    def employees_remove():
        data = require_keys(json_body(), ["name"])
        service.remove_employee(str(data["name"]))
        return ok(removed=data["name"])
