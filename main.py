# main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi_limiter import FastAPILimiter
from starlette.middleware.cors import CORSMiddleware
import routes
from config.cache import close_redis, get_redis
from config.settings import settings
from core.schema_registry import registry
from util.enums import Color, Environment
from util.errors import AppError, FlowError
from util.logger import init_logger

logger = logging.getLogger(__name__)


async def _client_ip(request: Request) -> str:
    # Rate-limit key; behind a proxy the first forwarded hop is the caller.
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    init_logger()
    print(f"{Color.GREEN}Starting ScholarLens...{Color.RESET}")
    try:
        await FastAPILimiter.init(await get_redis(), identifier=_client_ip)
    except Exception:
        logger.error("startup.redis.unavailable url_set=%s", bool(settings.REDIS_URL))
        raise
    logger.info(
        "startup.ok env=%s model=%s dimensions=%d",
        settings.APP_ENV,
        settings.ANTHROPIC_MODEL,
        len(registry),
    )
    print(f"{Color.BLUE}Ready{Color.RESET}")

    try:
        yield
    finally:
        try:
            await close_redis()
        except Exception as e:
            logger.warning("shutdown.redis.close_failed err=%s", type(e).__name__)
        print(f"{Color.RED}Stopped{Color.RESET}")


app: FastAPI = FastAPI(title="ScholarLens", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=True,
    # DELETE clears the loaded document
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
)


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.exception_handler(FlowError)
async def flow_error_handler(request: Request, exc: FlowError):
    # Scoped to this request's dimension/query only.
    logger.warning("flow.error path=%s error=%s", request.url.path, exc.code)
    return JSONResponse(status_code=exc.http_status, content=exc.to_payload())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    logger.warning("request.rejected path=%s error=%s", request.url.path, exc.code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(429)
async def rate_limited_handler(request: Request, exc):
    retry_after = str(settings.RATE_LIMIT_SECONDS)
    return JSONResponse(
        status_code=429,
        content={
            "ok": False,
            "error": "rate_limited",
            "message": f"Too many requests. Try again in {retry_after}s.",
        },
        headers={"Retry-After": retry_after},
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.APP_ENV == Environment.DEV,
    )
