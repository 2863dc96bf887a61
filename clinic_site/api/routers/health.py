# This file defines liveness, readiness, and version endpoints for API operations.
# It exists so orchestration and monitoring systems can verify service health quickly.
# The readiness check confirms database connectivity and that every content table exists.
# Version details here help clients match a deployment to its source revision.

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from clinic_site.api.api_config import ApiConfig
from clinic_site.api.db_access import DatabaseClient
from clinic_site.api.dependencies import get_config, get_database_client
from clinic_site.api.schemas.health_schemas import HealthResponse, ReadinessResponse, VersionResponse
from clinic_site.common.schema import metadata

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _git_commit() -> str | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return completed.stdout.strip() or None


@router.get("/health", response_model=HealthResponse)
def health(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(request: Request, db: DBDep) -> dict[str, object]:
    db_connected = db.can_connect()
    missing_tables = (
        [name for name in metadata.tables if not db.table_exists(name)]
        if db_connected
        else sorted(metadata.tables)
    )
    return {
        "request_id": request.state.request_id,
        "db_connected": db_connected,
        "missing_tables": missing_tables,
        "ready": db_connected and not missing_tables,
        "database": "reachable" if db_connected else "unreachable",
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "request_id": request.state.request_id,
        "app_version": config.app_version,
        "git_commit": _git_commit(),
        "project": config.api_name,
        "api_prefix": config.api_prefix,
        "timestamp": _utc_now(),
    }
