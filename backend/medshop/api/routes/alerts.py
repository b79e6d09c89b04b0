"""Alerts: list, unread feed, mark read, delete."""
from typing import List

from fastapi import APIRouter, Depends

from medshop.api.deps import ListParams, get_current_user, get_store, list_params, page_response
from medshop.core.exceptions import BusinessError
from medshop.schemas.entities import Alert, User
from medshop.services import alert_service
from medshop.storage.store import PharmacyStore

router = APIRouter()

SEARCH_FIELDS = ["title", "message", "medicine_name"]


@router.get("")
def list_alerts(
    params: ListParams = Depends(list_params),
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return page_response(params.apply(alert_service.list_alerts(store), SEARCH_FIELDS))


@router.get("/unread", response_model=List[Alert])
def unread_alerts(store: PharmacyStore = Depends(get_store), current_user: User = Depends(get_current_user)):
    return alert_service.get_unread_alerts(store)


@router.post("/read-all")
def mark_all_read(store: PharmacyStore = Depends(get_store), current_user: User = Depends(get_current_user)):
    return {"updated": alert_service.mark_all_alerts_as_read(store)}


@router.post("/{alert_id}/read")
def mark_read(
    alert_id: str,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    if not alert_service.mark_alert_as_read(store, alert_id):
        raise BusinessError.not_found("Alert")
    return {"message": "Alert marked as read", "id": alert_id}


@router.delete("/{alert_id}")
def delete_alert(
    alert_id: str,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    if not alert_service.delete_alert(store, alert_id):
        raise BusinessError.not_found("Alert")
    return {"message": "Alert deleted", "id": alert_id}
