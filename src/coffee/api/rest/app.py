"""REST API adapter."""

from __future__ import annotations

from typing import Dict

from fastapi import FastAPI

from coffee.api.rest import coffees, orders
from coffee.server.wire import ServiceBundle


def create_app(services: ServiceBundle) -> FastAPI:
    app = FastAPI(title="Coffee Shop (REST)")
    app.state.services = services

    @app.get("/healthz")
    def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    app.include_router(coffees.router)
    app.include_router(orders.router)
    return app
