import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import settings
from .routers import config, health, simulate

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# API metadata for OpenAPI documentation
description = """
## Automatic Acknowledgement Simulator API

Decides, for one email address and a user rule set, whether an automatic
acknowledgement is sent, and explains why.

### Rule Precedence

1. **Inclusions** (addresses, then domains) always force the acknowledgement
2. **Exclusions** (domains, then addresses, then patterns such as `noreply@*`) block it
3. **Organizational domain** (`acme.com` or `*.acme.com`) blocks internal addresses
4. **Default:** every other address receives the acknowledgement

### Quick Start

1. **Health Check:** `GET /health`
2. **Simulate:** `POST /simulate`
3. **Export rules:** `POST /config/export`

### Documentation

* **Interactive API Docs:** [/docs](/docs) (Swagger UI)
* **Alternative Docs:** [/redoc](/redoc) (ReDoc)
"""

app = FastAPI(
    title="Automatic Acknowledgement Simulator API",
    description=description,
    version="1.0.0",
    license_info={
        "name": "MPL-2.0",
        "url": "https://www.mozilla.org/en-US/MPL/2.0/",
    },
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "health",
            "description": "Service health check",
        },
        {
            "name": "simulate",
            "description": "Evaluate addresses against a rule set and explain the verdict",
        },
        {
            "name": "config",
            "description": "Rule list cleanup, JSON export/import and clipboard text",
        },
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(simulate.router, prefix="/simulate", tags=["simulate"])
app.include_router(config.router, prefix="/config", tags=["config"])
