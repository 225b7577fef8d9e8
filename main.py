import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from config import CORS_ORIGINS, LOG_FORMAT, LOG_LEVEL, PORT
from database import check_connection
from routers import ALL_ROUTERS
from utils.logging import setup_logging

setup_logging(LOG_LEVEL, LOG_FORMAT)
logger = logging.getLogger(__name__)

# App instance
app = FastAPI(title="Land Asset Manager")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in ALL_ROUTERS:
    app.include_router(router)


@app.get("/api/health")
def health():
    return {"status": "ok", "database": check_connection()}


# 404 Fallback Middleware
@app.middleware("http")
async def not_found_middleware(request: Request, call_next):
    try:
        response = await call_next(request)
        if response.status_code == 404 and request.scope.get("endpoint") is None:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return response
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=PORT, reload=True)
