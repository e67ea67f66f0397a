import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from config import settings
from routers import explorer, health
from services.catalog_client import CatalogClient
from services.navigation import NavigationController

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Country Explorer", version="0.1.0")

app.state.limiter = explorer.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(explorer.router)


@app.get("/")
async def root():
    return {
        "name": "Country Explorer API",
        "version": "0.1.0",
        "endpoints": ["/health", "/view", "/directory", "/countries/{name}/select", "/back", "/retry"],
    }


@app.on_event("startup")
async def startup():
    app.state.controller = NavigationController(CatalogClient())
    app.state.controller.start()
    logger.info("Country Explorer API is running against %s", settings.catalog_base_url)


@app.on_event("shutdown")
async def shutdown():
    from utils.http_client import close_client
    await close_client()
