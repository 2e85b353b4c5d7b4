#!/usr/bin/env python3
"""
Reforger Server Configuration API

HTTP surface over the configuration toolkit:
- Configuration validation
- Default configuration generation
- Official scenario lookup
- Workshop mod references
"""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from reforger.config.models import DefaultConfigRequest, HealthResponse
from reforger.core.defaults import create_default_server_config
from reforger.core.identifiers import MalformedIdentifier, parse_resource_reference
from reforger.core.parser import ParseResult, Parser
from reforger.core.scenarios import get_scenario, list_scenarios, scenario_from_code
from reforger.mods import router as mods_router

# =============================================================================
# Configuration
# =============================================================================

API_VERSION = "1.0.0"
API_TOKEN = os.getenv("API_TOKEN", "")
API_AUTH_DISABLED = os.getenv("API_AUTH_DISABLED", "").lower() in ("1", "true", "yes")

security = HTTPBearer(auto_error=False)


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup/shutdown"""
    logging.info("Reforger config API starting...")
    app.state.parser = Parser()

    yield

    logging.info("Reforger config API shutting down...")


# =============================================================================
# Application
# =============================================================================

app = FastAPI(
    title="Reforger Server Config API",
    description="Validation and generation of Arma Reforger server configuration",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Authentication
# =============================================================================


def verify_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),  # noqa: B008
) -> bool:
    """Verify bearer token if authentication is enabled"""
    if API_AUTH_DISABLED:
        return True
    if not API_TOKEN:
        return True
    if not credentials or credentials.credentials != API_TOKEN:
        raise HTTPException(status_code=401, detail="Invalid or missing token")
    return True


def get_parser(request: Request) -> Parser:
    """Get the shared parser, creating it when the lifespan did not run"""
    parser = getattr(request.app.state, "parser", None)
    if parser is None:
        parser = request.app.state.parser = Parser()
    return parser


# Attach mods router
router_mods = mods_router.create_router(verify_token)
app.include_router(router_mods)


# =============================================================================
# Health
# =============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Health check endpoint"""
    return HealthResponse(status="ok", version=API_VERSION)


# =============================================================================
# Configuration
# =============================================================================


@app.post("/config/validate", response_model=ParseResult, tags=["Config"])
async def validate_config(
    request: Request,
    validate: bool = Query(True, description="Run business-rule validation"),
    strict: bool = Query(False, description="Respond 422 when the config has errors"),
    ignore_warnings: list[str] = Query([], description="Warning kinds to drop"),  # noqa: B008
    ignore_errors: list[str] = Query([], description="Error kinds to drop"),  # noqa: B008
    _auth: bool = Depends(verify_token),  # noqa: B008
    parser: Parser = Depends(get_parser),  # noqa: B008
) -> ParseResult:
    """Parse and validate a server configuration (JSON body)"""
    body = await request.body()
    result = parser.parse(
        body,
        validate=validate,
        ignore_warnings=ignore_warnings,
        ignore_errors=ignore_errors,
    )
    if strict and not result.success:
        raise HTTPException(
            status_code=422,
            detail=[e.model_dump(mode="json") for e in result.errors],
        )
    return result


@app.post("/config/default", tags=["Config"])
async def default_config(
    request: DefaultConfigRequest,
    _auth: bool = Depends(verify_token),  # noqa: B008
) -> dict[str, Any]:
    """Generate a complete default configuration"""
    scenario = scenario_from_code(request.scenario)
    if scenario is None:
        try:
            scenario = parse_resource_reference(request.scenario)
        except MalformedIdentifier as e:
            raise HTTPException(
                status_code=400, detail=f"Unknown scenario '{request.scenario}': {e.reason}"
            ) from e

    kwargs: dict[str, Any] = {
        "cross_platform": request.cross_platform,
        "rcon_password": request.rcon_password,
    }
    if request.bind_address:
        kwargs["bind_address"] = request.bind_address
    if request.bind_port:
        kwargs["bind_port"] = request.bind_port

    config = create_default_server_config(request.server_name, scenario, **kwargs)
    return config.to_dict()


# =============================================================================
# Scenarios
# =============================================================================


@app.get("/scenarios", tags=["Scenarios"])
async def get_scenarios() -> dict[str, Any]:
    """List official scenarios"""
    scenarios = [s.to_dict() for s in list_scenarios()]
    return {"scenarios": scenarios, "count": len(scenarios)}


@app.get("/scenarios/{code}", tags=["Scenarios"])
async def get_scenario_by_code(code: str) -> dict[str, str]:
    """Get a single scenario by its code"""
    definition = get_scenario(code)
    if definition is None:
        raise HTTPException(status_code=404, detail=f"Unknown scenario: {code}")
    return definition.to_dict()


class HealthCheckFilter(logging.Filter):
    """Filter health check requests from access logs"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        return "/health" not in message


# Apply filter to uvicorn access logger
logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())


# =============================================================================
# Main
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("API_PORT", "8080"))
    uvicorn.run(app, host="0.0.0.0", port=port)
