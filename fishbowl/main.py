import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from fishbowl.api.routes import router
from fishbowl.infra.redis_client import create_redis
from fishbowl.runtime import get_runtime, init_runtime
from fishbowl.settings import settings_from_env

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_dotenv(override=False)
    settings = settings_from_env()
    # Tests initialise the runtime themselves (with fakeredis); this is a no-op then.
    rt = init_runtime(settings=settings, r=create_redis())
    logger.info("Fishbowl ready: %s rounds, %ss turns", rt.settings.num_rounds, rt.settings.turn_seconds)
    yield
    get_runtime().timers.cancel_all()
    get_runtime().outbox.cancel_all()


app = FastAPI(title="fishbowl", version="0.1.0", lifespan=lifespan)
app.include_router(router)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "fishbowl", "version": "0.1.0"}
