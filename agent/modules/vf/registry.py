"""Tool registry: maps full tool names to their definitions and handlers.

Names are matched in full (``vf.keys.create`` and ``vf.divt.revoke`` both
have more than one dot), so dispatch never splits on the namespace.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from modules.vf.envelope import to_envelope
from modules.vf.errors import UnknownToolError
from modules.vf.manifest import MANIFEST
from modules.vf.normalizer import normalize_for_tool
from modules.vf.tools import VFTools
from shared.schemas.tools import ModuleManifest, ToolDefinition, ToolResult

Handler = Callable[[dict], Awaitable[Any]]


@dataclass(frozen=True)
class RegisteredTool:
    definition: ToolDefinition
    handler: Handler


def handlers_for(tools: VFTools) -> dict[str, Handler]:
    return {
        "vf.register": tools.register,
        "vf.verify": tools.verify,
        "vf.prompt_receipt.create": tools.prompt_receipt_create,
        "vf.rag_snapshot.create": tools.rag_snapshot_create,
        "vf.agent_action.log": tools.agent_action_log,
        "vf.worldstate.create": tools.worldstate_create,
        "vf.score.privacy": tools.score_privacy,
        "vf.score.full": tools.score_full,
        "vf.keys.create": tools.keys_create,
        "vf.keys.list": tools.keys_list,
        "vf.keys.revoke": tools.keys_revoke,
        "vf.erasure.request": tools.erasure_request,
        "vf.divt.revoke": tools.divt_revoke,
    }


class ToolRegistry:
    """Immutable name -> (definition, handler) mapping built at startup."""

    def __init__(self, tools: VFTools, manifest: ModuleManifest = MANIFEST):
        handlers = handlers_for(tools)
        defined = {t.name for t in manifest.tools}
        if defined != set(handlers):
            raise RuntimeError(
                f"manifest and handlers disagree: {sorted(defined ^ set(handlers))}"
            )
        self.manifest = manifest
        self._tools: Mapping[str, RegisteredTool] = MappingProxyType(
            {t.name: RegisteredTool(t, handlers[t.name]) for t in manifest.tools}
        )

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._tools

    def definitions(self) -> list[ToolDefinition]:
        return [entry.definition for entry in self._tools.values()]

    async def call(self, tool_name: str, arguments: dict | None = None) -> ToolResult:
        """Normalise arguments, run the handler, and wrap the outcome."""
        try:
            entry = self._tools.get(tool_name)
            if entry is None:
                raise UnknownToolError(tool_name)
            result = await entry.handler(normalize_for_tool(tool_name, arguments))
        except Exception as e:
            return to_envelope(tool_name, exc=e)
        return to_envelope(tool_name, result)
