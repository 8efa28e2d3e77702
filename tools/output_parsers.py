"""Host-side renderers selected by a tool's ``output_parser`` tag.

Tools only declare which parser applies; the registry and the HTTP host
call these to turn a result into the envelope sent back to the caller.
"""

import json
import logging
from typing import Any, Callable

from tools.base import OutputParser, ToolResult

logger = logging.getLogger(__name__)

ParsedOutput = dict[str, Any]


def _as_envelope(output: ToolResult | dict[str, Any] | str) -> ParsedOutput:
    """Coerce a result, an envelope dict or its JSON text into an envelope."""
    if isinstance(output, ToolResult):
        return output.to_dict()

    if isinstance(output, str):
        try:
            output = json.loads(output)
        except json.JSONDecodeError:
            logger.warning("Tool output is not valid JSON: %s", output[:200])
            return {
                "raw": {"error": "Malformed tool output"},
                "humanMessage": output,
            }

    if not isinstance(output, dict):
        return {
            "raw": {"error": "Malformed tool output"},
            "humanMessage": str(output),
        }

    raw = output.get("raw")
    if not isinstance(raw, dict):
        raw = {"value": raw} if raw is not None else {}
    human = output.get("humanMessage", output.get("human_message"))
    if human is None:
        human = raw.get("error", "")
    return {"raw": raw, "humanMessage": str(human)}


def untyped_query_output_parser(output: ToolResult | dict[str, Any] | str) -> ParsedOutput:
    """Pass query data through untouched."""
    return _as_envelope(output)


def transaction_tool_output_parser(output: ToolResult | dict[str, Any] | str) -> ParsedOutput:
    """Make sure every transaction envelope carries a status."""
    envelope = _as_envelope(output)
    raw = envelope["raw"]
    if "status" not in raw:
        raw = {**raw, "status": "INVALID_TRANSACTION" if "error" in raw else "SUCCESS"}
    return {"raw": raw, "humanMessage": envelope["humanMessage"]}


PARSERS: dict[OutputParser, Callable[[Any], ParsedOutput]] = {
    OutputParser.UNTYPED_QUERY: untyped_query_output_parser,
    OutputParser.TRANSACTION: transaction_tool_output_parser,
}


def parse_output(parser: OutputParser, output: ToolResult | dict[str, Any] | str) -> ParsedOutput:
    """Render an output with the parser a tool declared."""
    return PARSERS[parser](output)
