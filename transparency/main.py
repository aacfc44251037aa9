# transparency/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .database import engine
from . import models
from .api import projects, partners, workspaces, ledger, public, stream
from .config import settings
from .services.forms import FormValidationError
from .utils.logging import api_logger

# Create all tables on startup
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="Transparency API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projects.router)
app.include_router(partners.router)
app.include_router(workspaces.router)
app.include_router(ledger.router)
app.include_router(public.router)
app.include_router(stream.router)

@app.exception_handler(FormValidationError)
async def form_validation_handler(request: Request, exc: FormValidationError):
    api_logger.warning("Rejected form submission", extra={
        "path": request.url.path,
        "error": str(exc)
    })
    return JSONResponse(status_code=400, content={"detail": str(exc)})

@app.get("/")
async def root():
    return {"message": "Transparency API is running"}
