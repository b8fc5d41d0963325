# routes.py
from fastapi import FastAPI
from controller.classification_controller import classification_router
from controller.document_controller import document_router
from controller.validation_controller import validation_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(validation_router)
    app.include_router(document_router)
    app.include_router(classification_router)
