"""SchemaValidator — checks call arguments against a tool's input schema.

Pure logic, no I/O.  Supports the subset of JSON Schema the catalog uses:
``type``, ``properties``, ``required``, ``enum``, ``items``, and ``default``.
Fields the schema does not declare are passed through unchecked.
"""

from __future__ import annotations

import copy
from typing import Any, Literal

from pydantic import BaseModel

from coderabbit_mcp.protocol.errors import ArgumentValidationError

# ---------------------------------------------------------------------------
# Violations
# ---------------------------------------------------------------------------


class _ViolationBase(BaseModel):
    kind: str
    path: str


class MissingField(_ViolationBase):
    kind: Literal["MissingField"] = "MissingField"

    def describe(self) -> str:
        return f"missing required field '{self.path}'"


class TypeMismatch(_ViolationBase):
    kind: Literal["TypeMismatch"] = "TypeMismatch"
    expected: str
    actual: str

    def describe(self) -> str:
        return f"field '{self.path}' must be {self.expected}, got {self.actual}"


class InvalidEnumValue(_ViolationBase):
    kind: Literal["InvalidEnumValue"] = "InvalidEnumValue"
    value: Any = None
    allowed: list[Any] = []

    def describe(self) -> str:
        options = ", ".join(repr(v) for v in self.allowed)
        return f"field '{self.path}' must be one of {options}, got {self.value!r}"


# A single way in which the arguments disagree with the schema
SchemaViolation = MissingField | TypeMismatch | InvalidEnumValue


class ValidationResult(BaseModel):
    """Outcome of :meth:`SchemaValidator.validate`.

    ``arguments`` is a copy of the input with schema defaults filled in; it is
    only meaningful when :attr:`ok` is true.
    """

    arguments: dict[str, Any] = {}
    violations: list[SchemaViolation] = []

    @property
    def ok(self) -> bool:
        return not self.violations

    def raise_for_violations(self, tool_name: str) -> None:
        """Raise :class:`ArgumentValidationError` if any violation was found."""
        if self.violations:
            raise ArgumentValidationError(tool_name, [v.describe() for v in self.violations])


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


def json_type_name(value: Any) -> str:
    """Return the JSON type name of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _matches_type(value: Any, expected: str) -> bool:
    actual = json_type_name(value)
    if expected == "number":
        return actual in ("number", "integer")
    if expected == "integer":
        return actual == "integer" or (actual == "number" and float(value).is_integer())
    return actual == expected


class SchemaValidator:
    """Validate argument mappings against declared input schemas."""

    def validate(self, schema: dict[str, Any], arguments: Any) -> ValidationResult:
        """Check *arguments* against *schema* and collect every violation.

        The input is never mutated; defaults for absent optional top-level
        fields are applied to a deep copy returned in the result.
        """
        violations: list[SchemaViolation] = []
        if not isinstance(arguments, dict):
            violations.append(
                TypeMismatch(path="arguments", expected="object", actual=json_type_name(arguments))
            )
            return ValidationResult(violations=violations)

        self._check_object(schema, arguments, "", violations)
        if violations:
            return ValidationResult(violations=violations)
        return ValidationResult(arguments=self._with_defaults(schema, arguments))

    def _check(
        self,
        schema: dict[str, Any],
        value: Any,
        path: str,
        violations: list[SchemaViolation],
    ) -> None:
        expected = schema.get("type")
        if isinstance(expected, str) and not _matches_type(value, expected):
            violations.append(
                TypeMismatch(path=path, expected=expected, actual=json_type_name(value))
            )
            return

        allowed = schema.get("enum")
        if allowed is not None and value not in allowed:
            violations.append(InvalidEnumValue(path=path, value=value, allowed=list(allowed)))
            return

        if expected == "array" and "items" in schema:
            for index, item in enumerate(value):
                self._check(schema["items"], item, f"{path}[{index}]", violations)
        elif expected == "object" or (expected is None and isinstance(value, dict)):
            self._check_object(schema, value, path, violations)

    def _check_object(
        self,
        schema: dict[str, Any],
        value: dict[str, Any],
        path: str,
        violations: list[SchemaViolation],
    ) -> None:
        properties: dict[str, Any] = schema.get("properties", {})
        for name in schema.get("required", []):
            if name not in value:
                violations.append(MissingField(path=_join(path, name)))

        for name, field_schema in properties.items():
            if name in value:
                self._check(field_schema, value[name], _join(path, name), violations)

    @staticmethod
    def _with_defaults(schema: dict[str, Any], arguments: dict[str, Any]) -> dict[str, Any]:
        result = copy.deepcopy(arguments)
        for name, field_schema in schema.get("properties", {}).items():
            if name not in result and "default" in field_schema:
                result[name] = copy.deepcopy(field_schema["default"])
        return result


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name
