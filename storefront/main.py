from fastapi import FastAPI
from storefront.version import VERSION
from storefront.api import routes_checkout, routes_orders, routes_shipping
from storefront.core.logging import configure_logging
from prometheus_fastapi_instrumentator import Instrumentator

configure_logging()

# Create instrumentator first
instrumentator = Instrumentator()

app = FastAPI(title="Storefront Checkout", version=VERSION)

# Instrument the app BEFORE adding routes or middleware
instrumentator.instrument(app).expose(
    app,
    include_in_schema=False,
    endpoint="/metrics",
    should_gzip=True,
)

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/v1/_info")
def info():
    return {"service": "storefront", "version": VERSION}

app.include_router(routes_checkout.router, prefix="/api", tags=["checkout"])
app.include_router(routes_orders.router, prefix="/api", tags=["orders"])
app.include_router(routes_shipping.router, prefix="/api", tags=["shipping"])
