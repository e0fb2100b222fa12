from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    key: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "context": {"key": self.key}}


class OrderServiceError(Exception):
    pass


class ValidationError(OrderServiceError):
    """Malformed or missing input; carries one entry per offending field."""

    def __init__(self, errors: list[FieldError] | FieldError):
        if isinstance(errors, FieldError):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.key}: {e.message}" for e in self.errors))

    @classmethod
    def for_field(cls, key: str, message: str) -> ValidationError:
        return cls(FieldError(key=key, message=message))


class UnknownReferenceError(ValidationError):
    def __init__(self, key: str = "product_list", message: str = "Unknown products"):
        super().__init__(FieldError(key=key, message=message))


class InvalidStatusError(ValidationError):
    def __init__(self, value: Any, allowed: list[str]):
        self.value = value
        super().__init__(
            FieldError(key="status", message=f"status must be one of {allowed}, got {value!r}")
        )


class NotFoundError(OrderServiceError):
    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")
