"""Main FastAPI application."""
from fastapi import FastAPI
from quickcut.config import settings
from quickcut.api import webhook, create_project, projects, profiles
from quickcut.utils.middleware import PortalCORSMiddleware

app = FastAPI(
    title="QuickCut Pro API",
    description="Client portal backend for QuickCut Pro video editing projects",
    version="0.1.0",
)

# Configure CORS for the client portal; the webhook answers with its own open headers
app.add_middleware(
    PortalCORSMiddleware,
    exempt_prefixes=[f"{webhook.router.prefix}/"],
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers (webhook first so /api/projects/monday/* wins over /api/projects/{id})
app.include_router(webhook.router)
app.include_router(create_project.router)
app.include_router(projects.router)
app.include_router(profiles.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "QuickCut Pro API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
