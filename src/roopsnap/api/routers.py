from fastapi import FastAPI

from roopsnap.admin.api import router as admin_router
from roopsnap.auth.api import router as auth_router
from roopsnap.contacts.api import router as contacts_router
from roopsnap.health.api import router as health_router
from roopsnap.instagram.api import router as instagram_router
from roopsnap.photos.api import router as photos_router


def configure_routers(app: FastAPI) -> FastAPI:
    app.include_router(admin_router)
    app.include_router(auth_router)
    app.include_router(contacts_router)
    app.include_router(health_router)
    app.include_router(instagram_router)
    app.include_router(photos_router)
    return app
