from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def json_errors(view):
    """Translate domain errors raised by a view into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return jsonify({"success": False, "message": "Internal error"}), 500

    return wrapper
