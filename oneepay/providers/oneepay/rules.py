from oneepay.common.validation import (
    Custom,
    Kind,
    OneOf,
    Required,
    RequiredWhen,
    Ruleset,
    TypeCheck,
)
from oneepay.providers.oneepay.schemas import PaymentCode

STRING = TypeCheck(Kind.STRING)
MONEY = Custom("is_money")

CREATE_TRANSACTION_RULES: Ruleset = {
    "UID": [Required(), STRING],
    "totalAmount": [Required(), STRING, MONEY],
    "totalQuantity": [Required(), TypeCheck(Kind.INTEGER)],
    "paymentCode": [Required(), OneOf(tuple(code.value for code in PaymentCode))],
    "paymentOptions": [Required(), TypeCheck(Kind.OBJECT)],
    "paymentOptions.account": [RequiredWhen("paymentCode", PaymentCode.ACD.value), STRING],
    "paymentOptions.accountType": [RequiredWhen("paymentCode", PaymentCode.ACD.value), STRING],
    "paymentOptions.paygoId": [RequiredWhen("paymentCode", PaymentCode.PNG.value)],
    "paymentOptions.wingAccount": [RequiredWhen("paymentCode", PaymentCode.WIG_VPN.value), STRING],
    "paymentOptions.wingSecurityCode": [
        RequiredWhen("paymentCode", PaymentCode.WIG_VPN.value),
        STRING,
    ],
    "description": [STRING],
    "ip": [STRING],
    "lat": [STRING],
    "lng": [STRING],
    "deviceUDID": [STRING],
    "items": [TypeCheck(Kind.ARRAY)],
}

COMPLETE_TRANSACTION_RULES: Ruleset = {
    "UID": [Required(), STRING],
    "totalAmount": [Required(), STRING, MONEY],
    "totalQuantity": [Required(), TypeCheck(Kind.INTEGER)],
    "txid": [Required(), STRING],
    "securityCode": [Required(), STRING],
    "ip": [STRING],
}
