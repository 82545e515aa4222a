from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request

from ..core.exceptions import (
    ConflictError,
    DomainError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ConflictError, 409, "conflict"),
    (NotFoundError, 404, "not_found"),
    (InvalidStateError, 409, "invalid_state"),
    (ValidationError, 400, "validation"),
)


def error_response(exc: DomainError):
    status, kind = 400, "domain"
    for cls, code, name in _STATUS_BY_ERROR:
        if isinstance(exc, cls):
            status, kind = code, name
            break

    body = {"success": False, "error": kind, "message": str(exc)}
    if isinstance(exc, ConflictError):
        body["conflict"] = {"kind": exc.kind.value, "slot": exc.conflicting_slot.to_dict()}
    return jsonify(body), status


def json_endpoint(view):
    """Translate domain errors into JSON error bodies; unexpected errors become 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return jsonify({"success": False, "error": "internal", "message": "Internal server error"}), 500

    return wrapper


def date_arg(name: str, default: Optional[date]) -> Optional[date]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return default
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"Invalid {name} (expected YYYY-MM-DD)")
