# admin/routes.py
import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from errors import AccessDeniedError
from messaging import channels
from messaging.schemas import MessageEnvelope, MessageResult
from state import RetailState, get_state
from storage.database import get_db
from .access import allowed_sections, get_role, require_section
from .crud import save_store_config
from .schemas import (
    AccessResponse,
    AdminRole,
    ApiKeys,
    ApiKeysUpdate,
    ColumnMapping,
    MANAGER_SECTIONS,
    ManagerPermissionsUpdate,
    StoreDetails,
    StoreDetailsUpdate,
    TestMessageRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])

SECRET_FIELDS = ("whatsapp_api_key", "sms_api_key", "email_api_key", "razorpay_key_secret")


def mask(value: str) -> str:
    if not value:
        return ""
    return "*" * max(len(value) - 4, 4) + value[-4:]


def masked_keys(keys: ApiKeys) -> ApiKeys:
    data = keys.model_dump()
    for field in SECRET_FIELDS:
        data[field] = mask(data[field])
    return ApiKeys(**data)


async def persist(state: RetailState, db: AsyncSession, **changes):
    # snapshot-on-write: the merged config replaces the stored one wholesale
    config = state.config.model_copy(update=changes)
    await save_store_config(db, config)
    state.config = config


@router.get("/access", response_model=AccessResponse)
async def my_access(role: AdminRole = Depends(get_role), state: RetailState = Depends(get_state)):
    return AccessResponse(role=role, sections=allowed_sections(role, state.config.manager_permissions))


# ==========================================================
# ✅ STORE DETAILS
# ==========================================================
@router.get("/store-details", response_model=StoreDetails, dependencies=[Depends(require_section("dashboard"))])
async def get_store_details(state: RetailState = Depends(get_state)):
    return state.config.store_details


@router.put("/store-details", response_model=StoreDetails, dependencies=[Depends(require_section("dashboard"))])
async def update_store_details(
    update: StoreDetailsUpdate,
    state: RetailState = Depends(get_state),
    db: AsyncSession = Depends(get_db),
):
    details = state.config.store_details.model_copy(update=update.model_dump(exclude_none=True))
    await persist(state, db, store_details=details)
    return details


# ==========================================================
# ✅ API KEYS
# ==========================================================
@router.get("/api-keys", response_model=ApiKeys, dependencies=[Depends(require_section("api-keys"))])
async def get_api_keys(state: RetailState = Depends(get_state)):
    return masked_keys(state.config.api_keys)


@router.put("/api-keys", response_model=ApiKeys, dependencies=[Depends(require_section("api-keys"))])
async def update_api_keys(
    update: ApiKeysUpdate,
    state: RetailState = Depends(get_state),
    db: AsyncSession = Depends(get_db),
):
    keys = state.config.api_keys.model_copy(update=update.model_dump(exclude_none=True))
    await persist(state, db, api_keys=keys)
    logger.info("API keys updated")
    return masked_keys(keys)


@router.post("/messaging/test", response_model=MessageResult, dependencies=[Depends(require_section("api-keys"))])
async def send_test_message(request: TestMessageRequest, state: RetailState = Depends(get_state)):
    keys = state.config.api_keys
    credentials = {
        "email": (keys.email_api_key, keys.email_api_url),
        "sms": (keys.sms_api_key, None),
        "whatsapp_document": (keys.whatsapp_api_key, None),
        "whatsapp_text": (keys.whatsapp_api_key, keys.whatsapp_api_url),
    }
    api_key, endpoint_url = credentials.get(request.channel, ("", None))
    envelope = MessageEnvelope(
        recipient=request.recipient,
        body=request.body,
        subject=request.subject,
        api_key=api_key,
        endpoint_url=endpoint_url or None,
    )
    return await run_in_threadpool(channels.send, request.channel, envelope)


# ==========================================================
# ✅ CATALOG COLUMN MAPPING
# ==========================================================
@router.get("/column-mapping", response_model=ColumnMapping, dependencies=[Depends(require_section("stock-inward"))])
async def get_column_mapping(state: RetailState = Depends(get_state)):
    return state.config.column_mapping


@router.put("/column-mapping", response_model=ColumnMapping, dependencies=[Depends(require_section("stock-inward"))])
async def update_column_mapping(
    mapping: ColumnMapping,
    state: RetailState = Depends(get_state),
    db: AsyncSession = Depends(get_db),
):
    await persist(state, db, column_mapping=mapping)
    return mapping


# ==========================================================
# ✅ MANAGER PERMISSIONS (owner only)
# ==========================================================
def require_owner(role: AdminRole = Depends(get_role)) -> AdminRole:
    if role != AdminRole.OWNER:
        raise AccessDeniedError(role.value, "manager-access")
    return role


@router.get("/manager-permissions", dependencies=[Depends(require_owner)])
async def get_manager_permissions(state: RetailState = Depends(get_state)):
    return {"available": MANAGER_SECTIONS, "granted": state.config.manager_permissions}


@router.put("/manager-permissions", dependencies=[Depends(require_owner)])
async def update_manager_permissions(
    update: ManagerPermissionsUpdate,
    state: RetailState = Depends(get_state),
    db: AsyncSession = Depends(get_db),
):
    granted = [s for s in MANAGER_SECTIONS if s in update.sections]
    await persist(state, db, manager_permissions=granted)
    return {"available": MANAGER_SECTIONS, "granted": granted}
