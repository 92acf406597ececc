import logging
import os

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .database import Base, SessionLocal, engine
from .routers import analytics, buses, compliance, eta, proximity, routes, simulator, system
from .services.seed import seed_demo_data
from .services.simulator import FleetSimulator

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

os.environ["TZ"] = settings.timezone

app = FastAPI(title="BusBuddy API", version="0.1.0")

app.state.fleet_simulator = FleetSimulator(
    SessionLocal,
    interval=settings.simulator_interval_ms / 1000,
    report_every=settings.simulator_report_every,
    tick_timeout=settings.simulator_tick_timeout,
    snap_to_route=settings.simulator_snap_to_route,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies are client errors: 400 rather than FastAPI's default 422
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.on_event("startup")
def on_startup():
    try:
        Base.metadata.create_all(bind=engine)
        logger.info(f"Database OK. Timezone: {settings.timezone}")
        if settings.seed_demo_data:
            db = SessionLocal()
            try:
                seed_demo_data(db)
            finally:
                db.close()
    except Exception as e:
        logger.warning(f"Database not ready: {e}. Start PostgreSQL and restart.")

    if settings.simulator_enabled:
        app.state.fleet_simulator.start()


@app.on_event("shutdown")
def on_shutdown():
    logger.info("Shutting down, stopping the fleet simulator...")
    app.state.fleet_simulator.stop()


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(buses.router)
app.include_router(routes.router)
app.include_router(analytics.router)
app.include_router(eta.router)
app.include_router(compliance.router)
app.include_router(proximity.router)
app.include_router(simulator.router)
app.include_router(system.router)


@app.get("/")
def root():
    return {"message": "BusBuddy API is running"}
