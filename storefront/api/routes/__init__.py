"""API route registration."""

from fastapi import FastAPI

from storefront.api.routes import admin, chat, contact, products, system


def include_api_routes(app: FastAPI) -> None:
    """Attach all API routers to the application."""

    app.include_router(system.router)
    app.include_router(products.router)
    app.include_router(contact.router)
    app.include_router(chat.router)
    app.include_router(admin.router)
