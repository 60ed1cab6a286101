"""Declarative, fail-fast validation of request payloads.

A ruleset maps dotted field paths (``"paymentOptions.paygoId"``) to an ordered
list of typed rules. Fields are checked in declaration order and each field's
rules in list order; the first failing rule stops validation and its message,
with ``{{field}}`` replaced by the dotted path, becomes the only error.

Custom rules are looked up by name in the registry handed to ``Validator``:

    validator = Validator({"is_money": MONEY_RULE})
    validator.validate(payload, {"totalAmount": [Required(), Custom("is_money")]})
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from oneepay.common.exceptions import ValidationError

_MISSING = object()


class Kind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    OBJECT = "object"
    ARRAY = "array"


_TYPE_MESSAGES = {
    Kind.STRING: "The {{field}} field must be a string.",
    Kind.INTEGER: "The {{field}} field must be an integer.",
    Kind.OBJECT: "The {{field}} field must be an object.",
    Kind.ARRAY: "The {{field}} field must be an array.",
}


# ---------------------------------------------------------------------------
#  Rules
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Required:
    message: str = "The {{field}} field is mandatory."


@dataclass(frozen=True)
class TypeCheck:
    kind: Kind
    message: Optional[str] = None


@dataclass(frozen=True)
class OneOf:
    choices: Tuple[Any, ...]
    message: str = "The selected {{field}} is invalid."


@dataclass(frozen=True)
class RequiredWhen:
    """Required only while the value at ``field`` (a path from the payload root) equals ``value``."""
    field: str
    value: Any
    message: Optional[str] = None


@dataclass(frozen=True)
class Custom:
    name: str


@dataclass(frozen=True)
class CustomRule:
    predicate: Callable[[Any], bool]
    message: str


Rule = Union[Required, TypeCheck, OneOf, RequiredWhen, Custom]
Ruleset = Mapping[str, Sequence[Rule]]


@dataclass
class ValidationResult:
    error: Optional[str] = None
    field: Optional[str] = None

    @property
    def passes(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise ValidationError(self.error)


# ---------------------------------------------------------------------------
#  Built-in custom rules
# ---------------------------------------------------------------------------

MONEY_PATTERN = re.compile(r"\d*\.\d{2}")


def is_money(value: Any) -> bool:
    return isinstance(value, str) and MONEY_PATTERN.fullmatch(value) is not None


MONEY_RULE = CustomRule(
    predicate=is_money,
    message="The {{field}} field must be an amount with exactly two decimals, e.g. 12.34.",
)


# ---------------------------------------------------------------------------
#  Engine
# ---------------------------------------------------------------------------

def get_path(payload: Any, path: str) -> Any:
    current = payload
    for part in path.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return _MISSING
    return current


def _is_empty(value: Any) -> bool:
    if value is _MISSING or value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _matches_kind(value: Any, kind: Kind) -> bool:
    if kind is Kind.STRING:
        return isinstance(value, str)
    if kind is Kind.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is Kind.OBJECT:
        return isinstance(value, Mapping)
    return isinstance(value, (list, tuple))


class Validator:
    def __init__(self, custom_rules: Optional[Mapping[str, CustomRule]] = None) -> None:
        self.custom_rules: Dict[str, CustomRule] = dict(custom_rules or {})

    def register(self, name: str, rule: CustomRule) -> None:
        self.custom_rules[name] = rule

    def validate(self, payload: Mapping[str, Any], ruleset: Ruleset) -> ValidationResult:
        for path, rules in ruleset.items():
            value = get_path(payload, path)
            for rule in rules:
                message = self._check(rule, value, payload)
                if message is not None:
                    return ValidationResult(error=message.replace("{{field}}", path), field=path)
        return ValidationResult()

    def _check(self, rule: Rule, value: Any, payload: Mapping[str, Any]) -> Optional[str]:
        """Return the unformatted message of a failing rule, ``None`` on pass."""
        if isinstance(rule, Custom):
            try:
                custom = self.custom_rules[rule.name]
            except KeyError:
                raise KeyError(f"Unknown validation rule: {rule.name}") from None
            if _is_empty(value):
                return None
            return None if custom.predicate(value) else custom.message

        if isinstance(rule, Required):
            return rule.message if _is_empty(value) else None

        if isinstance(rule, RequiredWhen):
            if get_path(payload, rule.field) != rule.value or not _is_empty(value):
                return None
            return rule.message or (
                "The {{field}} field is required when " + f"{rule.field} is {rule.value}."
            )

        # Remaining rules only constrain values that are present.
        if _is_empty(value):
            return None

        if isinstance(rule, TypeCheck):
            if _matches_kind(value, rule.kind):
                return None
            return rule.message or _TYPE_MESSAGES[rule.kind]

        if isinstance(rule, OneOf):
            return None if value in rule.choices else rule.message

        raise TypeError(f"Unsupported rule: {rule!r}")


def parse_rules(notation: str) -> List[Rule]:
    """Convert ``"required|string|in:A,B"`` style notation into typed rules.

    Unknown rule names become ``Custom`` references resolved by the validator.
    """
    rules: List[Rule] = []
    for token in notation.split("|"):
        token = token.strip()
        if not token:
            continue
        name, _, arg = token.partition(":")
        if name == "required":
            rules.append(Required())
        elif name in {kind.value for kind in Kind}:
            rules.append(TypeCheck(Kind(name)))
        elif name == "in":
            rules.append(OneOf(tuple(choice.strip() for choice in arg.split(","))))
        elif name == "required_when":
            other, sep, value = arg.partition(",")
            if not other or not sep:
                raise ValueError(f"required_when needs '<field>,<value>', got {arg!r}")
            rules.append(RequiredWhen(other.strip(), value.strip()))
        else:
            rules.append(Custom(name))
    return rules
