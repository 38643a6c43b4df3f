import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from videoja.config import settings
from videoja.dependencies import credential_gate
from videoja.errors import VideoJaError
from videoja.routers import credentials, credits, generation, sessions, websocket

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if await credential_gate.check():
        logger.info(f"API key configured, video model {settings.VIDEO_MODEL}")
    else:
        logger.warning("No API key configured; connect one through /api/credentials")

    yield


app = FastAPI(title="VideoJá Studio API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VideoJaError)
async def videoja_error_handler(request: Request, exc: VideoJaError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Include routers
app.include_router(credentials.router)
app.include_router(sessions.router)
app.include_router(credits.router)
app.include_router(generation.router)
app.include_router(websocket.router)


def run() -> None:
    import uvicorn

    uvicorn.run("videoja.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
