import httpx
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError

from oneepay.core.config import settings, ClientConfig, ItemQtyStrategy
from oneepay.common.logging import logger
from oneepay.common.exceptions import (
    AuthenticationError,
    ConfigurationError,
    RemoteError,
    ValidationError,
)
from oneepay.common.hashing import digest
from oneepay.common.validation import MONEY_RULE, Ruleset, Validator
from oneepay.providers.oneepay.errors import normalize_error
from oneepay.providers.oneepay.rules import (
    COMPLETE_TRANSACTION_RULES,
    CREATE_TRANSACTION_RULES,
)
from oneepay.providers.oneepay.schemas import (
    CompleteTransactionOptions,
    CompleteTransactionResponse,
    CreateTransactionOptions,
    TokenResponse,
    TransactionItem,
    TransactionResponse,
)
from oneepay.providers.oneepay.signing import sign

Options = Union[Mapping[str, Any], BaseModel]
ModelT = TypeVar("ModelT", bound=BaseModel)


class OneEpayClient:
    """HTTP client for the OneEpay payment gateway.

    Handles:
    - Access token exchange (client_credentials, SHA-1 ``authentication`` header).
    - Signed transaction creation with default substitution.
    - Transaction completion (commit) with the payer's security code.

    Options may be passed as plain mappings using the gateway's camelCase keys
    (``UID``, ``totalAmount``, ``paymentOptions.paygoId`` ...) or as the
    pydantic models from ``oneepay.providers.oneepay.schemas``.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        api_url: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_url: str = (api_url if api_url is not None else settings.API_URL or "").rstrip("/")
        self.client_id: str = client_id if client_id is not None else settings.CLIENT_ID
        self.client_secret: str = (
            client_secret if client_secret is not None else settings.CLIENT_SECRET
        )

        missing = [
            name
            for name, value in (
                ("api_url", self.api_url),
                ("client_id", self.client_id),
                ("client_secret", self.client_secret),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ConfigurationError(f"OneEpay client requires {', '.join(missing)}")

        self.config: ClientConfig = config or ClientConfig()
        self.timeout: float = timeout if timeout is not None else settings.TIMEOUT
        self._transport = transport
        self.validator = Validator({"is_money": MONEY_RULE})

        # Last token handed out by the gateway; concurrent calls may overwrite it.
        self.access_token: Optional[str] = None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def authenticate(self) -> str:
        """POST /v1/oauth/access-token"""
        authentication = digest(f"{self.client_id}:{self.client_secret}")
        data = await self._post_json(
            "/v1/oauth/access-token",
            {"client_id": self.client_id, "permission": "client_credentials"},
            headers={"authentication": authentication},
        )
        resp = self._parse_response(TokenResponse, data)
        if not resp.access_token:
            raise AuthenticationError("OneEpay did not return an access token")

        self.access_token = resp.access_token
        logger.info("OneEpay access token obtained for client=%s", self.client_id)
        return self.access_token

    async def _ensure_token(self) -> str:
        if self.config.reauthenticate or not self.access_token:
            return await self.authenticate()
        return self.access_token

    def _auth_headers(self) -> Dict[str, str]:
        if not self.access_token:
            raise AuthenticationError("OneEpay client is not authenticated")
        return {"X-Auth": f"Bearer {self.access_token}"}

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def create_transaction(self, options: Options) -> TransactionResponse:
        """POST /v1/payments/transactions"""
        await self._ensure_token()
        payload = self._validated(options, CREATE_TRANSACTION_RULES)
        opts = self._parse(CreateTransactionOptions, payload)

        description = opts.description or f"Order #{opts.uid}."
        ip = opts.ip or self.config.default_ip
        latitude = opts.lat or self.config.default_lat
        longitude = opts.lng or self.config.default_lng
        udid = opts.device_udid or self.config.default_device_udid
        items = opts.items if opts.items is not None else [self._default_item(description, opts)]

        signature = self._sign(opts.uid, opts.total_amount, opts.total_quantity, ip)

        body = {
            "order_id": opts.uid,
            "description": description,
            "total_amt": str(opts.total_amount),
            "total_qty": opts.total_quantity,
            "currency_code": self.config.currency_code,
            "signature": signature,
            "payment_code": opts.payment_code.value,
            "payment_options": opts.payment_options.to_wire(),
            "items": [item.model_dump() for item in items],
            "customer": {"ip": ip, "latitude": latitude, "longitude": longitude, "udid": udid},
        }
        data = await self._post_json(
            "/v1/payments/transactions", body, headers=self._auth_headers()
        )
        resp = self._parse_response(TransactionResponse, data)
        logger.info(
            "OneEpay transaction created: order=%s txid=%s state=%s",
            opts.uid,
            resp.txid,
            resp.state,
        )
        return resp

    async def complete_transaction(self, options: Options) -> CompleteTransactionResponse:
        """POST /v1/payments/transactions/commit"""
        await self._ensure_token()
        payload = self._validated(options, COMPLETE_TRANSACTION_RULES)
        opts = self._parse(CompleteTransactionOptions, payload)

        ip = opts.ip or self.config.default_ip
        signature = self._sign(opts.uid, opts.total_amount, opts.total_quantity, ip)

        body = {
            "txid": opts.txid,
            "signature": signature,
            "security_code": opts.security_code,
            "ip": ip,
        }
        data = await self._post_json(
            "/v1/payments/transactions/commit", body, headers=self._auth_headers()
        )
        resp = self._parse_response(CompleteTransactionResponse, data)
        logger.info(
            "OneEpay transaction completed: order=%s txid=%s state=%s",
            opts.uid,
            opts.txid,
            resp.state,
        )
        return resp

    # ------------------------------------------------------------------
    # Request building helpers
    # ------------------------------------------------------------------

    def _sign(self, uid: str, total_amount: str, total_quantity: int, ip: str) -> str:
        return sign(uid, total_amount, total_quantity, ip, self.client_id, self.client_secret)

    def _default_item(self, name: str, opts: CreateTransactionOptions) -> TransactionItem:
        if self.config.item_qty_strategy == ItemQtyStrategy.SINGLE_UNIT:
            qty = 1
        else:
            qty = opts.total_quantity
        return TransactionItem(name=name, qty=qty, unit_price=opts.total_amount)

    def _validated(self, options: Options, ruleset: Ruleset) -> Dict[str, Any]:
        if isinstance(options, BaseModel):
            payload = options.model_dump(by_alias=True, exclude_none=True, mode="json")
        else:
            payload = dict(options)

        result = self.validator.validate(payload, ruleset)
        if not result.passes:
            logger.warning("OneEpay request rejected: %s", result.error)
        result.raise_for_error()
        return payload

    @staticmethod
    def _parse(model: Type[ModelT], payload: Dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(payload)
        except PydanticValidationError as exc:
            # Only reachable for nested shapes the rulesets do not cover (items).
            first = exc.errors()[0]
            path = ".".join(str(part) for part in first["loc"])
            raise ValidationError(f"The {path} field is invalid: {first['msg']}.") from exc

    @staticmethod
    def _parse_response(model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            path = ".".join(str(part) for part in first["loc"]) or "body"
            logger.error("OneEpay unexpected %s: %s", model.__name__, exc)
            raise RemoteError(
                f"OneEpay returned an unexpected response ({path}: {first['msg']})",
                body=data,
            ) from exc

    # ------------------------------------------------------------------
    # Low-level HTTP helpers
    # ------------------------------------------------------------------

    async def _post_json(
        self, path: str, body: Dict[str, Any], headers: Dict[str, str]
    ) -> Dict[str, Any]:
        url = f"{self.api_url}{path}"
        logger.info("OneEpay POST → %s", url)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                resp = await client.post(url, json=body, headers=headers)
                resp.raise_for_status()
                if not resp.content:
                    return {}
                try:
                    return resp.json()
                except ValueError:
                    return {"raw": resp.text}
            except httpx.HTTPStatusError as exc:
                logger.error(
                    "OneEpay HTTP error: %s %s: %s",
                    exc.response.status_code,
                    url,
                    exc.response.text[:500],
                )
                error = normalize_error(exc)
                if error is exc:
                    raise
                raise error from exc
            except httpx.HTTPError as exc:
                logger.error("OneEpay network error: %s: %s", url, exc)
                raise
