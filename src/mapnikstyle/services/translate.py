"""TranslationService: neutral style documents <-> Mapnik XML.

By default a failing rule aborts the whole document. With
``skip_invalid=True`` rules are translated one at a time and each failure
becomes a warning naming the rule, while the remaining rules are kept.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from mapnikstyle.domain.errors import StyleTranslationError
from mapnikstyle.domain.node import Node
from mapnikstyle.domain.style import Rule, Style, rebuild_nested
from mapnikstyle.domain.types import ElementName
from mapnikstyle.infrastructure.documents import load_style
from mapnikstyle.infrastructure.markup import parse, serialize
from mapnikstyle.services.base import BaseService
from mapnikstyle.services.result import ServiceResult
from mapnikstyle.translation.filters import parse_filter, render_filter
from mapnikstyle.translation.rules import node_to_rule, rule_to_node
from mapnikstyle.translation.styles import assemble_style, find_style_node

logger = logging.getLogger(__name__)


def _skip_warning(exc: StyleTranslationError) -> str:
    where = exc.location.get("rule_name") or f"#{exc.location.get('rule_index')}"
    return f"Skipped rule {where}: {exc.message}"


def filter_to_json(filter_: Any) -> Any:
    """Nested filter tuples as nested lists (the JSON shape)."""
    return rebuild_nested(filter_, list)


class TranslationService(BaseService):
    """Translate whole styles and single filters in either direction."""

    def write_style(
        self,
        source: Style | str,
        *,
        skip_invalid: bool = False,
    ) -> ServiceResult:
        """Translate a neutral style (model or JSON/YAML text) into Mapnik XML.

        Returns data ``{"markup", "name", "rules"}``; ``meta["skipped"]``
        counts rules dropped under *skip_invalid*.
        """
        op = "write_style"
        warnings: list[str] = []
        try:
            style = load_style(source) if isinstance(source, str) else source
            rule_nodes: list[Node] = []
            for index, rule in enumerate(style.rules):
                try:
                    rule_nodes.append(rule_to_node(rule, self._options, index=index))
                except StyleTranslationError as exc:
                    if not skip_invalid:
                        raise
                    logger.debug(
                        "Skipping rule %d on write: %s", index, exc.message, extra=exc.location
                    )
                    warnings.append(_skip_warning(exc))
            markup = serialize(assemble_style(style.name, rule_nodes, self._options))
        except StyleTranslationError as exc:
            return self._failure(op, exc, warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data={"markup": markup, "name": style.name, "rules": len(rule_nodes)},
            warnings=warnings,
            meta={"skipped": len(style.rules) - len(rule_nodes)},
        )

    def read_style(self, markup: str | bytes, *, skip_invalid: bool = False) -> ServiceResult:
        """Translate a Mapnik XML document into a neutral style document.

        Returns data ``{"style", "name", "rules"}`` where ``style`` is the
        JSON-shaped document.
        """
        op = "read_style"
        warnings: list[str] = []
        try:
            style_node = find_style_node(parse(markup))
            rule_elements = style_node.find_all(ElementName.RULE)
            rules: list[Rule] = []
            for index, element in enumerate(rule_elements):
                try:
                    rules.append(node_to_rule(element, index=index))
                except StyleTranslationError as exc:
                    if not skip_invalid:
                        raise
                    logger.debug(
                        "Skipping rule %d on read: %s", index, exc.message, extra=exc.location
                    )
                    warnings.append(_skip_warning(exc))
        except StyleTranslationError as exc:
            return self._failure(op, exc, warnings)

        name = style_node.attributes.get("name")
        style = Style(name="" if name is None else str(name), rules=rules)
        return ServiceResult(
            ok=True,
            op=op,
            data={"style": style.to_document(), "name": style.name, "rules": len(rules)},
            warnings=warnings,
            meta={"skipped": len(rule_elements) - len(rules)},
        )

    def render_filter(self, filter_: Sequence[Any]) -> ServiceResult:
        """Render one neutral filter as expression text."""
        op = "render_filter"
        try:
            expression = render_filter(filter_)
        except StyleTranslationError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data={"expression": expression})

    def parse_filter(self, expression: str) -> ServiceResult:
        """Parse expression text into a neutral filter (as nested lists)."""
        op = "parse_filter"
        try:
            filter_ = parse_filter(expression)
        except StyleTranslationError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data={"filter": filter_to_json(filter_)})
