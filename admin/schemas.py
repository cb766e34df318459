from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum


class AdminRole(str, Enum):
    OWNER = "owner"
    MANAGER = "manager"
    DEVELOPER = "developer"


# Sections a manager can be granted, in admin tab order
MANAGER_SECTIONS = ["dashboard", "api-keys", "sales", "stock-inward", "inventory", "returns"]


class StoreDetails(BaseModel):
    store_name: str = "Zudio Store"
    gstin: str = "27ABCDE1234F1Z5"
    address: str = "ABC Clothings Store"
    phone_number: str = "9876543210"


class ApiKeys(BaseModel):
    whatsapp_api_url: str = ""
    whatsapp_api_key: str = ""
    sms_api_key: str = ""
    email_api_url: str = ""
    email_api_key: str = ""
    razorpay_key_id: str = ""
    razorpay_key_secret: str = ""


class ColumnMapping(BaseModel):
    id_column: str = "Barcode/RFID"
    name_column: str = "Product Name"
    price_column: str = "Price"
    optional_column1: str = "Optional 1"
    optional_column2: str = "Optional 2"


class StoreConfig(BaseModel):
    store_details: StoreDetails = Field(default_factory=StoreDetails)
    api_keys: ApiKeys = Field(default_factory=ApiKeys)
    column_mapping: ColumnMapping = Field(default_factory=ColumnMapping)
    manager_permissions: List[str] = Field(default_factory=lambda: list(MANAGER_SECTIONS))


class StoreDetailsUpdate(BaseModel):
    store_name: Optional[str] = None
    gstin: Optional[str] = None
    address: Optional[str] = None
    phone_number: Optional[str] = None


class ApiKeysUpdate(BaseModel):
    whatsapp_api_url: Optional[str] = None
    whatsapp_api_key: Optional[str] = None
    sms_api_key: Optional[str] = None
    email_api_url: Optional[str] = None
    email_api_key: Optional[str] = None
    razorpay_key_id: Optional[str] = None
    razorpay_key_secret: Optional[str] = None


class ManagerPermissionsUpdate(BaseModel):
    sections: List[str]


class AccessResponse(BaseModel):
    role: AdminRole
    sections: List[str]


class TestMessageRequest(BaseModel):
    channel: str
    recipient: str
    body: str = "Test message from your store billing system."
    subject: Optional[str] = None
