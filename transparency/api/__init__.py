# transparency/api/__init__.py
from .projects import router as projects_router
from .partners import router as partners_router
from .workspaces import router as workspaces_router
from .ledger import router as ledger_router
from .public import router as public_router
from .stream import router as stream_router

__all__ = [
    "projects_router", "partners_router", "workspaces_router",
    "ledger_router", "public_router", "stream_router"
]
