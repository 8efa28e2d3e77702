"""Runtime context handed to tool factories by the host."""

import logging
from dataclasses import dataclass
from enum import Enum

from core.config import Config
from core.mirrornode import MirrornodeService

logger = logging.getLogger(__name__)


class AgentMode(str, Enum):
    """How mutation tools submit their transactions."""

    IMMEDIATE = "immediate"
    SCHEDULED = "scheduled"


@dataclass(frozen=True)
class Context:
    """Read-only configuration bag shaping tool descriptions, schemas and defaults."""

    operator_account_id: str | None = None
    mode: AgentMode = AgentMode.IMMEDIATE
    mirrornode_service: MirrornodeService | None = None

    @classmethod
    def from_config(
        cls, config: Config, mirrornode_service: MirrornodeService | None = None
    ) -> "Context":
        """Build a context from the loaded configuration."""
        try:
            mode = AgentMode(config.agent.mode.lower())
        except ValueError:
            logger.warning("Unknown agent mode %r, using immediate", config.agent.mode)
            mode = AgentMode.IMMEDIATE
        return cls(
            operator_account_id=config.network.operator_account_id or None,
            mode=mode,
            mirrornode_service=mirrornode_service,
        )


def resolve_context(context: Context | None) -> Context:
    """Return the context, or the default one when none was supplied."""
    return context if context is not None else Context()
