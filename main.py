from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import os
import time
import logging

from routes import classes, grades, categories, summary, export, settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

CLIENT_ORIGIN = os.environ.get("CLIENT_ORIGIN", "http://localhost:5173").rstrip("/")

app = FastAPI(title="Gradebook API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[CLIENT_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    t0 = time.perf_counter()
    logger.info("REQUEST  %s %s", request.method, request.url.path)
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - t0) * 1000
    logger.info("RESPONSE %s %s — status: %d, time: %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response

app.include_router(classes.router)
app.include_router(grades.router)
app.include_router(categories.router)
app.include_router(summary.router)
app.include_router(export.router)
app.include_router(settings.router)


@app.get("/health")
def health():
    return {"ok": True, "ts": int(time.time() * 1000)}
