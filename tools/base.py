"""Abstract base class and result envelope for all ledger tools."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError

from core.client import LedgerClient
from core.context import Context, resolve_context

logger = logging.getLogger(__name__)


class OutputParser(str, Enum):
    """Tag telling the host how to render a tool's result."""

    UNTYPED_QUERY = "untyped_query"
    TRANSACTION = "transaction"


@dataclass(frozen=True)
class ToolResult:
    """The {raw, humanMessage} envelope every execute call returns."""

    raw: dict[str, Any] = field(default_factory=dict)
    human_message: str = ""

    @property
    def is_error(self) -> bool:
        return "error" in self.raw

    def to_dict(self) -> dict[str, Any]:
        return {"raw": self.raw, "humanMessage": self.human_message}


class ParameterValidationError(ValueError):
    """Caller arguments did not match the tool's parameter schema."""

    def __init__(self, method: str, errors: list[dict[str, Any]]) -> None:
        self.method = method
        self.errors = errors
        details = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ())) or '<root>'}: {e.get('msg', '')}"
            for e in errors
        )
        super().__init__(f"Invalid parameters for {method}: {details}")


def tool_error_result(
    description: str,
    error: BaseException | None,
    method: str,
    **extra_raw: Any,
) -> ToolResult:
    """Log a failure tagged with the tool method and wrap it in a ToolResult."""
    message = description + (f": {error}" if error is not None and str(error) else "")
    logger.error("[%s] %s", method, message)
    return ToolResult(raw={**extra_raw, "error": message}, human_message=message)


class Tool(ABC):
    """Base class that all ledger tools must extend.

    Subclasses set ``method`` and ``name`` and build their description and
    parameter model from the context in ``__init__``.
    """

    method: str = ""
    name: str = ""
    output_parser: OutputParser = OutputParser.UNTYPED_QUERY

    def __init__(self, context: Context | None = None) -> None:
        self.context = resolve_context(context)
        self.description: str = ""
        self.parameters: type[BaseModel] = BaseModel

    def execution_context(self, context: Context | None) -> Context:
        """Use the caller's context, or the one this tool was built with."""
        return context if context is not None else self.context

    @abstractmethod
    async def execute(
        self, client: LedgerClient, context: Context, params: BaseModel
    ) -> ToolResult:
        """Perform the tool's effect. Must never raise."""

    def parse_params(self, arguments: Mapping[str, Any] | BaseModel | None) -> BaseModel:
        """Validate caller arguments against the parameter model."""
        if isinstance(arguments, self.parameters):
            return arguments
        if isinstance(arguments, BaseModel):
            arguments = arguments.model_dump(exclude_unset=True)
        try:
            return self.parameters.model_validate(dict(arguments or {}))
        except ValidationError as e:
            raise ParameterValidationError(
                self.method, e.errors(include_url=False, include_context=False)
            ) from e

    def to_function_schema(self) -> dict[str, Any]:
        """Convert to the unified function calling schema."""
        return {
            "name": self.method,
            "description": self.description,
            "parameters": self.parameters.model_json_schema(),
        }
