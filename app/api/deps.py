from fastapi import Depends
from sqlalchemy.orm import Session
from app.core.config import Settings, settings
from app.core.database import get_db
from app.services.checkout import YocoCheckoutClient
from app.services.order_store import OrderStore
from app.services.order_workflow import OrderWorkflow
from app.services.storage import StorageService

# Adapters are built once from the process settings
storage_service = StorageService(settings)
checkout_client = YocoCheckoutClient(settings)


def get_settings() -> Settings:
    return settings


def get_storage_service() -> StorageService:
    return storage_service


def get_checkout_client() -> YocoCheckoutClient:
    return checkout_client


def get_order_workflow(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
    storage: StorageService = Depends(get_storage_service),
    checkout: YocoCheckoutClient = Depends(get_checkout_client)
) -> OrderWorkflow:
    """Dependency to get an OrderWorkflow bound to this request's session"""
    return OrderWorkflow(
        settings=app_settings,
        order_store=OrderStore(db),
        storage=storage,
        checkout_client=checkout
    )
