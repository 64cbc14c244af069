from datetime import date, datetime
from decimal import Decimal
from functools import wraps

import mysql.connector
from flask import current_app, jsonify, request

CATEGORY_COLUMNS = "c.id AS category__id, c.name AS category__name, c.icon AS category__icon, c.is_default AS category__is_default"


class ApiError(Exception):
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


def store_errors(message):
    """Turn store failures inside the view into a logged 500 ``{error: message}``."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except mysql.connector.Error:
                current_app.logger.exception(message)
                return jsonify({"error": message}), 500
        return wrapper
    return decorator


def parse_body(schema):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ApiError("Request body must be a JSON object")
    return schema.model_validate(data)


def parse_query(schema):
    # empty query values count as absent
    return schema.model_validate({k: v for k, v in request.args.items() if v != ''})


def to_json_value(value):
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def serialize_row(row):
    """Coerce a cursor row for JSON and nest the joined category under ``categories``."""
    out = {}
    category = {}
    for key, value in row.items():
        if key.startswith('category__'):
            category[key[len('category__'):]] = to_json_value(value)
        else:
            out[key] = to_json_value(value)
    if category:
        if category.get('id') is None:
            out['categories'] = None
        else:
            if 'is_default' in category:
                category['is_default'] = bool(category['is_default'])
            out['categories'] = category
    if 'is_default' in out:
        out['is_default'] = bool(out['is_default'])
    return out
