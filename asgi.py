"""
asgi.py -- Application assembly for the CYN portal.

This is the ONLY file that imports from both api/ and web/. api/main.py knows
nothing about web/; web/routes.py knows nothing about api/main.py.

The web router ends with a catch-all redirect, so it must be included after
every API route.

A rate-limited POST /login comes back as the login page with a notice; every
other 429 keeps the JSON envelope from api/main.py.

Run with:  uvicorn asgi:app --reload
           python main.py
"""

from fastapi import Request
from fastapi.responses import Response
from slowapi.errors import RateLimitExceeded

from api.main import app, rate_limit_handler
from web.routes import render_rate_limited
from web.routes import router as web_router

app.include_router(web_router, tags=["Web UI"])


@app.exception_handler(RateLimitExceeded)
async def portal_rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    if request.url.path == "/login":
        return render_rate_limited(request, exc)
    return await rate_limit_handler(request, exc)
