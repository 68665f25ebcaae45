# storefront/api/__init__.py
from fastapi import FastAPI
from storefront.api.routers import carts, health, orders, products, promotions, reviews, users


def create_app() -> FastAPI:
    app = FastAPI(
        title="Kalana Furniture Storefront",
        version="1.0.0",
    )

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(reviews.router)
    app.include_router(promotions.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app
