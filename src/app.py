"""Kamisori FastAPI application.

Web server that processes commands synchronously via HTTP. Every request is
wrapped in the ordering domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - default      → event_processing = "sync"  (handlers fire after commit, in-process)
#   - "production" → event_processing = "async" (handlers fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ordering.domain import ordering  # noqa: E402
from ordering.utils.logging import bind_request_context, clear_request_context

ordering.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Kamisori API",
    description="E-commerce order processing: cart, checkout, orders and payment slips",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the ordering domain context and bind request details to every log line."""
    bind_request_context(method=request.method, path=request.url.path, user_id=request.headers.get("x-user-id"))
    try:
        with ordering.domain_context():
            response = await call_next(request)
    finally:
        clear_request_context()
    return response


# ---------------------------------------------------------------------------
# Routers and error mapping
# ---------------------------------------------------------------------------
from ordering.api.errors import register_error_handlers  # noqa: E402
from ordering.api.routes import admin_router, cart_router, checkout_router, order_router  # noqa: E402

register_error_handlers(app)

app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(order_router)
app.include_router(admin_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": ordering.name}})
