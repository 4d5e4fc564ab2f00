"""CORS for the /api surface: permissive headers and 204 preflight replies."""

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware

API_PREFIX = "/api/"
ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization", "Accept"]

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
    "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
    "Access-Control-Max-Age": "86400",
}


def install_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        max_age=86400,
    )

    # Added last so it runs first: preflights never reach routing or auth
    @app.middleware("http")
    async def answer_api_preflight(request: Request, call_next):
        if request.method == "OPTIONS" and request.url.path.startswith(API_PREFIX):
            return Response(status_code=status.HTTP_204_NO_CONTENT, headers=PREFLIGHT_HEADERS)
        response = await call_next(request)
        if request.url.path.startswith(API_PREFIX):
            response.headers.setdefault("Access-Control-Allow-Origin", "*")
        return response
