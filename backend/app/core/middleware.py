from fastapi import Request, Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

async def cors_middleware(request: Request, call_next):
    """모든 응답에 CORS 헤더 추가, OPTIONS 프리플라이트는 본문 없이 204"""
    if request.method == "OPTIONS":
        response = Response(status_code=204)
    else:
        response = await call_next(request)

    response.headers.update(CORS_HEADERS)
    return response
