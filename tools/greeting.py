"""Greeting tool — the smallest possible tool, with no ledger access."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.client import LedgerClient
from core.context import Context
from tools.base import OutputParser, Tool, ToolResult, tool_error_result

GREETING_TOOL = "greeting_tool"


def greeting_prompt(context: Context | None = None) -> str:
    return (
        "This tool generates a greeting message.\n"
        "Parameters:\n"
        "- name (str, required): The name to greet\n"
        "- formal (bool, optional): Whether to use formal greeting, defaults to false"
    )


class GreetingParameters(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    name: str = Field(description="The name to greet")
    formal: bool | None = Field(default=None, description="Use formal greeting style")


def greeting_parameters(context: Context | None = None) -> type[GreetingParameters]:
    return GreetingParameters


def post_process(result: dict[str, Any]) -> str:
    return f"{result['greeting']}\n\nWelcome to Hedera, {result['name']}!"


class GreetingTool(Tool):
    """Say hello to someone by name."""

    method = GREETING_TOOL
    name = "Generate Greeting"
    output_parser = OutputParser.UNTYPED_QUERY

    def __init__(self, context: Context | None = None) -> None:
        super().__init__(context)
        self.description = greeting_prompt(self.context)
        self.parameters = greeting_parameters(self.context)

    async def execute(
        self, client: LedgerClient, context: Context | None, params: GreetingParameters
    ) -> ToolResult:
        try:
            if params.formal:
                greeting = f"Good day, {params.name}. It is a pleasure to make your acquaintance."
            else:
                greeting = f"Hey {params.name}! Great to meet you!"

            result = {"greeting": greeting, "name": params.name}
            return ToolResult(raw=result, human_message=post_process(result))
        except Exception as e:
            return tool_error_result("Failed to generate greeting", e, self.method)
