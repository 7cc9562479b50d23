import logging
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import APIError
from core.lifespan import lifespan
from core.middleware import CORS_HEADERS, cors_middleware
from core.responses import envelope_response
from routers import favorite, market

logger = logging.getLogger(__name__)

app = FastAPI(lifespan=lifespan)

app.middleware("http")(cors_middleware)

# 라우터 연결
app.include_router(market.router)
app.include_router(favorite.router)

# --- 예외 -> 공통 응답 봉투 ---

@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    return envelope_response(exc.status_code, exc.message, exc.data)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"💡 잘못된 요청 본문 ({request.url.path}): {exc.errors()}")
    return envelope_response(400, "Invalid request body")

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return envelope_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"⛔ 처리되지 않은 예외 ({request.method} {request.url.path}): {exc}", exc_info=True)
    # ServerErrorMiddleware 는 cors_middleware 바깥에서 실행되므로 헤더를 직접 붙인다
    return envelope_response(500, "Internal Server Error", headers=CORS_HEADERS)

@app.get("/")
def read_root():
    return {"status": 200, "message": "Coin Favorites API", "data": None}

if __name__ == "__main__":
    uvicorn.run("main:app",
                host="localhost",
                port=8000,
                reload=True)
