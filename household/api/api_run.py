from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from household.api.routes import packages, shopping_lists
from household.domain.errors import ShoppingListNotFoundError, ShoppingListItemNotFoundError
from household.events.web_observers import start as start_event_observers

# Logging
logger = logging.getLogger("household_app")

# Initialize FastAPI app
app = FastAPI(title="Household Shopping List API")

# Include routers
app.include_router(shopping_lists.router)
app.include_router(packages.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web alerts when the app starts."""
    start_event_observers()
    logger.info("Web observers for shopping list events started")


@app.exception_handler(ShoppingListNotFoundError)
@app.exception_handler(ShoppingListItemNotFoundError)
async def _not_found(request: Request, exc: LookupError):
    logger.info("%s %s -> 404: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.get("/health")
def health():
    return {"status": "ok"}
