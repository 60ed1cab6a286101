from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union
from enum import Enum


class PaymentCode(str, Enum):
    ABA = "ABA"
    ACD = "ACD"
    PNG = "PNG"
    WIG = "WIG"
    WIG_VPN = "WIG_VPN"


# ---------------------------------------------------------------------------
#  Caller-facing options
# ---------------------------------------------------------------------------

class PaymentOptions(BaseModel):
    """Channel specific fields; which ones are mandatory depends on the payment code."""
    model_config = ConfigDict(populate_by_name=True)

    account: Optional[str] = None
    account_type: Optional[str] = Field(None, alias="accountType")
    paygo_id: Optional[str] = Field(None, alias="paygoId")
    wing_account: Optional[str] = Field(None, alias="wingAccount")
    wing_security_code: Optional[str] = Field(None, alias="wingSecurityCode")
    password: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        wire = {
            "account": self.account,
            "account_type": self.account_type,
            "point_id": self.paygo_id,
            "wing_account": self.wing_account,
            "wing_security_code": self.wing_security_code,
            "password": self.password,
        }
        return {key: value for key, value in wire.items() if value is not None}


class TransactionItem(BaseModel):
    name: str
    qty: int
    unit_price: str


class CreateTransactionOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uid: str = Field(..., alias="UID")
    total_amount: str = Field(..., alias="totalAmount")
    total_quantity: int = Field(..., alias="totalQuantity")
    payment_code: PaymentCode = Field(..., alias="paymentCode")
    payment_options: PaymentOptions = Field(default_factory=PaymentOptions, alias="paymentOptions")
    description: Optional[str] = None
    ip: Optional[str] = None
    lat: Optional[str] = None
    lng: Optional[str] = None
    device_udid: Optional[str] = Field(None, alias="deviceUDID")
    items: Optional[List[TransactionItem]] = None


class CompleteTransactionOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uid: str = Field(..., alias="UID")
    total_amount: str = Field(..., alias="totalAmount")
    total_quantity: int = Field(..., alias="totalQuantity")
    txid: str
    security_code: str = Field(..., alias="securityCode")
    ip: Optional[str] = None


# ---------------------------------------------------------------------------
#  Gateway responses
# ---------------------------------------------------------------------------

# Gateways are loose about scalar types; ids and counts may arrive as numbers or strings.
Scalar = Union[str, int, float]


class TokenResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    access_token: Optional[str] = None


class Customer(BaseModel):
    model_config = ConfigDict(extra="allow")

    ip: Optional[str] = None
    latitude: Optional[Scalar] = None
    longitude: Optional[Scalar] = None
    udid: Optional[Scalar] = None


class TransactionResponse(BaseModel):
    """Transaction record returned by POST /v1/payments/transactions."""
    model_config = ConfigDict(extra="allow")

    txid: Optional[Scalar] = None
    state: Optional[str] = None
    expires_in_sec: Optional[Scalar] = None
    uid: Optional[Scalar] = None
    description: Optional[str] = None
    total_qty: Optional[Scalar] = None
    total_amt: Optional[Scalar] = None
    currency_code: Optional[str] = None
    payment_transaction_id: Optional[Scalar] = None
    payment_code: Optional[str] = None
    instructions: Optional[Any] = None
    payment_options: Optional[Dict[str, Any]] = None
    customer: Optional[Customer] = None
    items: Optional[List[Dict[str, Any]]] = None


class CompleteTransactionResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    uid: Optional[Scalar] = None
    state: Optional[str] = None
