"""Resolve deprecated argument names and values to their canonical form.

Tool arguments have evolved: ``mode`` became ``hash_mode`` (with the legacy
values ``text``/``hash`` renamed to ``content``/``custom``), and
``also_register_divt`` became ``register_divt``. Callers may still send the
old spellings, so each call's arguments pass through
:func:`normalize_arguments` before the handler sees them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_UNSET = object()


@dataclass(frozen=True)
class AliasRule:
    """One renamed field.

    ``canonical`` wins whenever it is present (neither null nor empty);
    otherwise the ``deprecated`` value is adopted under the canonical name.
    ``values`` rewrites legacy enum values regardless of which name carried
    them.
    """

    canonical: str
    deprecated: str
    values: Mapping[str, str] = field(default_factory=dict)
    default: Any = _UNSET


HASH_MODE_RULE = AliasRule(
    canonical="hash_mode",
    deprecated="mode",
    values={"text": "content", "hash": "custom"},
)

REGISTER_DIVT_RULE = AliasRule(
    canonical="register_divt",
    deprecated="also_register_divt",
    default=False,
)

ALIAS_RULES: dict[str, tuple[AliasRule, ...]] = {
    "vf.register": (HASH_MODE_RULE,),
    "vf.verify": (HASH_MODE_RULE,),
    "vf.prompt_receipt.create": (REGISTER_DIVT_RULE,),
    "vf.rag_snapshot.create": (REGISTER_DIVT_RULE,),
    "vf.agent_action.log": (REGISTER_DIVT_RULE,),
}


def _present(arguments: Mapping[str, Any], name: str) -> bool:
    value = arguments.get(name)
    return value is not None and value != ""


def apply_rule(arguments: Mapping[str, Any], rule: AliasRule) -> dict[str, Any]:
    """Return a copy of ``arguments`` with one alias rule applied."""
    resolved = {k: v for k, v in arguments.items() if k != rule.deprecated}

    if not _present(arguments, rule.canonical):
        if _present(arguments, rule.deprecated):
            resolved[rule.canonical] = arguments[rule.deprecated]
        elif rule.default is not _UNSET:
            resolved[rule.canonical] = rule.default

    value = resolved.get(rule.canonical)
    if isinstance(value, str) and value in rule.values:
        resolved[rule.canonical] = rule.values[value]
    return resolved


def normalize_arguments(
    arguments: Mapping[str, Any] | None,
    rules: tuple[AliasRule, ...] = (),
) -> dict[str, Any]:
    """Apply every alias rule in order. Pure and never raises."""
    resolved: dict[str, Any] = dict(arguments or {})
    for rule in rules:
        resolved = apply_rule(resolved, rule)
    return resolved


def normalize_for_tool(tool_name: str, arguments: Mapping[str, Any] | None) -> dict[str, Any]:
    """Normalise arguments using the alias rules registered for ``tool_name``."""
    return normalize_arguments(arguments, ALIAS_RULES.get(tool_name, ()))
