"""Schema validation for the adapter protocol.

The JSON Schemas are derived from the pydantic models, so the models are the
single source of truth for what adapters must send and receive.

An ``OutputValidator`` is constructed once at startup and handed to the
components that need it (see ``leb.cli``); there is no module-level instance.
"""

from typing import Any

from pydantic import BaseModel, ValidationError

from leb.models.adapter_models import AdapterInput, AdapterOutput


class OutputValidationError(ValueError):
    """Raised when data does not match the adapter protocol schema."""

    def __init__(self, model_name: str, errors: list[str]) -> None:
        self.model_name = model_name
        self.errors = errors
        super().__init__(f"Invalid {model_name}:\n" + "\n".join(errors))


def format_errors(error: ValidationError) -> list[str]:
    """Format pydantic validation errors as ``<path>: <message>`` lines."""
    formatted = []
    for item in error.errors():
        loc = "/".join(str(part) for part in item["loc"])
        path = f"/{loc}" if loc else "(root)"
        formatted.append(f"{path}: {item['msg']}")
    return formatted or ["Unknown validation error"]


class OutputValidator:
    """Validates adapter input and output documents.

    Example:
        >>> validator = OutputValidator()
        >>> output = validator.validate_adapter_output(json.loads(stdout))
        >>> output.timings.parse_ms
        [0.12, 0.11, 0.10]
    """

    def __init__(self) -> None:
        self._schemas: dict[str, dict[str, Any]] = {}

    def _validate(self, model: type[BaseModel], data: Any) -> Any:
        if not isinstance(data, dict):
            raise OutputValidationError(
                model.__name__,
                [f"(root): expected object, got {type(data).__name__}"],
            )
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise OutputValidationError(model.__name__, format_errors(e)) from e

    def validate_adapter_output(self, data: Any) -> AdapterOutput:
        """Validate a parsed adapter response.

        Raises:
            OutputValidationError: If the document does not match the schema.
        """
        output: AdapterOutput = self._validate(AdapterOutput, data)
        return output

    def validate_adapter_input(self, data: Any) -> AdapterInput:
        """Validate an adapter request document.

        Raises:
            OutputValidationError: If the document does not match the schema.
        """
        adapter_input: AdapterInput = self._validate(AdapterInput, data)
        return adapter_input

    def is_valid_adapter_output(self, data: Any) -> bool:
        """Return True if ``data`` is a valid adapter response."""
        try:
            self.validate_adapter_output(data)
        except OutputValidationError:
            return False
        return True

    def schema_for(self, model: type[BaseModel]) -> dict[str, Any]:
        """Return (and cache) the JSON Schema for a protocol model."""
        name = model.__name__
        if name not in self._schemas:
            self._schemas[name] = model.model_json_schema()
        return self._schemas[name]

    def adapter_input_schema(self) -> dict[str, Any]:
        """JSON Schema for the adapter request."""
        return self.schema_for(AdapterInput)

    def adapter_output_schema(self) -> dict[str, Any]:
        """JSON Schema for the adapter response."""
        return self.schema_for(AdapterOutput)
