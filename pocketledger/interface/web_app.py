"""Mini README: FastAPI service exposing the ledger to the dashboard.

Structure:
    * create_application - application factory wiring storage, routes and errors.
    * lifespan - opens the storage context on startup and closes it on shutdown.

All routes act on the configured default owner because the service has no
authentication. Ledger errors are translated here: validation problems (from
the ledger core or from request parsing) become 400 responses and an
unavailable store becomes 503.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Callable, Optional

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..configuration import PocketledgerSettings, get_settings
from ..ledger import (
    InMemoryLedgerStorage,
    LedgerAggregator,
    LedgerStorage,
    StorageUnavailable,
    ValidationError,
    seed_demo_transactions,
)
from ..logging_utils import configure_root_logger, get_logger
from .schemas import TransactionCreateRequest

LOGGER = get_logger(__name__)


def create_application(
    settings: Optional[PocketledgerSettings] = None,
    storage: Optional[LedgerStorage] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    storage = storage if storage is not None else InMemoryLedgerStorage()
    configure_root_logger(settings.log_level)
    aggregator = LedgerAggregator(
        storage,
        tz=settings.tzinfo,
        clock=clock,
        max_window_days=settings.max_history_days,
    )
    owner = settings.default_owner

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        storage.open()
        if settings.seed_demo_data and not storage.snapshot(owner):
            seed_demo_transactions(aggregator, owner)
        LOGGER.info("Pocketledger ready for owner '%s' (timezone %s)", owner, settings.timezone)
        try:
            yield
        finally:
            storage.close()

    app = FastAPI(title="Pocketledger", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.aggregator = aggregator

    @app.exception_handler(ValidationError)
    async def validation_error_handler(_: Request, error: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid transaction data", "errors": [error.as_dict()]},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        _: Request, error: RequestValidationError
    ) -> JSONResponse:
        errors = []
        for problem in error.errors():
            location = problem.get("loc") or ()
            errors.append(
                {
                    "field": str(location[-1]) if location else None,
                    "message": problem.get("msg", "Invalid value"),
                }
            )
        LOGGER.warning("Rejected malformed request: %s", errors)
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid transaction data", "errors": errors},
        )

    @app.exception_handler(StorageUnavailable)
    async def storage_unavailable_handler(_: Request, error: StorageUnavailable) -> JSONResponse:
        LOGGER.error("Storage unavailable: %s", error)
        return JSONResponse(status_code=503, content={"message": str(error)})

    @app.get("/api/balance")
    async def balance() -> JSONResponse:
        """Return the all-time balance."""

        current = aggregator.current_balance(owner)
        return JSONResponse({"balance": f"{current:.2f}"})

    @app.get("/api/stats")
    async def stats() -> JSONResponse:
        """Return month-to-date income, expenses and count."""

        return JSONResponse(aggregator.monthly_stats(owner).as_dict())

    @app.get("/api/transactions")
    async def transactions(limit: Optional[int] = Query(None)) -> JSONResponse:
        """List transactions newest first, optionally truncated."""

        listed = aggregator.list_transactions(owner, limit=limit)
        return JSONResponse([transaction.as_dict() for transaction in listed])

    @app.post("/api/transactions")
    async def create_transaction(payload: TransactionCreateRequest) -> JSONResponse:
        """Validate and record a new transaction."""

        transaction = aggregator.create_transaction(
            owner,
            payload.kind,
            payload.amount,
            payload.description,
            payload.category,
            occurred_at=payload.date,
        )
        return JSONResponse(transaction.as_dict(), status_code=201)

    @app.get("/api/balance-history")
    async def balance_history(days: Optional[int] = Query(None)) -> JSONResponse:
        """Return one balance point per day over the trailing window."""

        window = settings.history_days if days is None else days
        history = aggregator.balance_history(owner, window_days=window)
        LOGGER.debug("Returning %s balance points", len(history))
        return JSONResponse([point.as_dict() for point in history])

    @app.get("/api/context")
    async def financial_context(limit: Optional[int] = Query(None)) -> JSONResponse:
        """Return the figures an external budgeting advisor works from."""

        recent_limit = settings.recent_limit if limit is None else limit
        context = aggregator.financial_context(owner, recent_limit=recent_limit)
        return JSONResponse(context.as_dict())

    return app
