from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Any, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..domain.errors import MarketplaceError
from ..domain.ports.persistence import RecordStore
from ..infrastructure.persistence.json_store import JsonFileRecordStore
from ..infrastructure.persistence.sqlite import SQLiteRecordStore
from ..infrastructure.repositories.booking_repository import BookingRepository
from ..infrastructure.repositories.property_repository import PropertyRepository
from ..infrastructure.repositories.subscription_repository import SubscriptionRepository
from ..infrastructure.repositories.user_repository import UserRepository
from ..presentation.api.errors import marketplace_error_handler, request_validation_handler
from ..presentation.api.routers import auth as auth_router
from ..presentation.api.routers import bookings as bookings_router
from ..presentation.api.routers import properties as properties_router
from ..presentation.api.routers import subscriptions as subscriptions_router
from ..services.access_service import AccessGate
from ..services.booking_service import BookingService
from ..services.listing_service import ListingService
from ..services.subscription_service import SubscriptionService
from ..services.user_service import UserService

logger = logging.getLogger(__name__)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="StayHub Rental Marketplace", lifespan=_create_lifespan(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(auth_router.router)
    app.include_router(subscriptions_router.router)
    app.include_router(properties_router.router)
    app.include_router(bookings_router.router)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        container: ApplicationContainer = app.state.container  # type: ignore[attr-defined]
        return {"ok": True, "store": container.settings.store_backend}

    return app


def build_record_store(settings: Settings) -> RecordStore:
    if settings.store_backend == "sqlite":
        return SQLiteRecordStore(settings.database_path)
    return JsonFileRecordStore(settings.data_dir)


def build_container(settings: Settings, store: RecordStore) -> ApplicationContainer:
    user_service = UserService(
        UserRepository(store),
        jwt_secret=settings.jwt_secret,
        jwt_algorithm=settings.jwt_algorithm,
        jwt_expiration_hours=settings.jwt_expiration_hours,
    )
    subscription_service = SubscriptionService(SubscriptionRepository(store))
    property_repository = PropertyRepository(store)

    return ApplicationContainer(
        settings=settings,
        store=store,
        user_service=user_service,
        subscription_service=subscription_service,
        access_gate=AccessGate(user_service, subscription_service),
        listing_service=ListingService(property_repository),
        booking_service=BookingService(BookingRepository(store), property_repository),
    )


def _create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        store = build_record_store(settings)
        store.initialize()
        logger.info("Record store ready (%s backend)", settings.store_backend)

        app.state.container = build_container(settings, store)  # type: ignore[attr-defined]

        try:
            yield
        finally:
            store.close()

    return lifespan
