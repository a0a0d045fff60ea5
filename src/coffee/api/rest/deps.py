"""Request dependencies."""

from __future__ import annotations

from fastapi import Request

from coffee.server.wire import ServiceBundle


def get_services(request: Request) -> ServiceBundle:
    return request.app.state.services
