from typing import Any


class HydrimError(Exception):
    ...


class TypeNotFoundError(HydrimError, LookupError):
    def __init__(self, model: Any) -> None:
        self.model = model
        super().__init__(f"Type {model!r} does not exist")


class RequiredFieldMissingError(HydrimError, KeyError):
    def __init__(self, field: str, model: str) -> None:
        self.field = field
        self.model = model
        super().__init__(
            f"Property {field} is required but not provided for {model}"
        )

    def __str__(self) -> str:
        return str(self.args[0])


class UnresolvableFieldTypeError(HydrimError, TypeError):
    def __init__(self, field: str, model: str) -> None:
        self.field = field
        self.model = model
        super().__init__(
            f"Property {field} of {model} has no resolvable type"
        )
