"""HTTP routers, one per resource."""

from .compliance import router as compliance_router
from .phases import router as phases_router
from .plants import router as plants_router
from .requirements import router as requirements_router

ROUTERS = [requirements_router, phases_router, plants_router, compliance_router]

__all__ = ["ROUTERS"]
