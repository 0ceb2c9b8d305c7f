import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from minewatch.core.config import settings
from minewatch.core.logging import configure_logging
from minewatch.core.exceptions import register_exception_handlers
from minewatch.core.database import AsyncSessionLocal, init_db
from minewatch.middleware import CorrelationIdMiddleware
from minewatch.services.equipment_repository import SqlEquipmentRepository
from minewatch.services.equipment_service import seed_demo_equipment

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)

# Middleware: correlation id
app.add_middleware(CorrelationIdMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Route imports
from minewatch.api.health import router as health_router
from minewatch.api.v1 import equipment as v1_equipment
from minewatch.api.v1 import personnel as v1_personnel

# Register routers
app.include_router(health_router, prefix="/api", tags=["health"])
app.include_router(v1_equipment.router, prefix="/api", tags=["equipment"])
app.include_router(v1_personnel.operators_router, prefix="/api", tags=["operators"])
app.include_router(v1_personnel.supervisors_router, prefix="/api", tags=["supervisors"])

# Exception handlers
register_exception_handlers(app)


@app.on_event("startup")
async def on_startup():
    logger.info("Starting app", extra={"app": settings.APP_NAME})

    if settings.CREATE_TABLES_ON_START:
        logger.info("CREATE_TABLES_ON_START enabled: creating tables")
        await init_db()

    if settings.SEED_DEMO_DATA:
        async with AsyncSessionLocal() as session:
            await seed_demo_equipment(SqlEquipmentRepository(session))


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("Shutting down")
