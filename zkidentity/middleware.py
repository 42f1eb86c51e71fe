"""Request hooks that guard internal and public endpoints."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Callable

from flask import g, jsonify, request

INTERNAL_AUTH_TOKEN = "token"


def internal_auth_middleware() -> Callable[[], Any]:
    """Return a before-request hook that demands the internal token."""

    def check() -> Any:
        token = request.headers.get("Authorization", "")
        if not token:
            return jsonify({"error": "No Authorization Header Provided"}), HTTPStatus.UNAUTHORIZED
        if token != INTERNAL_AUTH_TOKEN:
            return jsonify({"error": "Wrong auth token"}), HTTPStatus.UNAUTHORIZED
        g.auth_scope = "internal"
        return None

    return check


def public_auth_middleware() -> Callable[[], Any]:
    """Return a before-request hook that lets every request through, marking it public."""

    def check() -> Any:
        g.auth_scope = "public"
        return None

    return check