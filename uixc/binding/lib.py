"""Bind-target classification.

A single whole-program pass collects every root identifier the program
references and every `bind` target with its declared initial value. A pure
reduction then partitions bind targets:

- ExternalProp: both the name and its setter (set + Capitalized name) are
  referenced elsewhere, so the caller evidently passes both down.
- InternalState: anything else; the generated component owns the pair.

Results are frozen values returned to the caller; nothing is accumulated in
module state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from uixc.ir import (
    BIND_TARGET,
    IDENTIFIER_PATH,
    RESERVED_PROPS,
    AppNode,
    ElementNode,
    Expression,
    ForNode,
    IfNode,
    PropValue,
    is_event_key,
    setter_name,
)
from uixc.schema import FailureKind, ValidationFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BindCandidate:
    """A bind target and the initial value declared next to it.

    Attributes:
        name: Bind target (simple identifier).
        initial: Literal initial value, or an Expression to pass through as
            a live reference. Defaults to the empty string.
    """

    name: str
    initial: PropValue = ""

    @property
    def setter(self) -> str:
        return setter_name(self.name)


@dataclass(frozen=True)
class BindingScan:
    """Everything the whole-program pass collected."""

    used_identifiers: frozenset[str] = frozenset()
    candidates: tuple[BindCandidate, ...] = ()
    warnings: tuple[ValidationFailure, ...] = ()

    def get_candidate(self, name: str) -> BindCandidate | None:
        for candidate in self.candidates:
            if candidate.name == name:
                return candidate
        return None


@dataclass(frozen=True)
class Partition:
    """Disjoint split of bind targets into internal state and external props."""

    internal_state: tuple[BindCandidate, ...] = ()
    external_props: tuple[BindCandidate, ...] = ()

    @property
    def internal_names(self) -> list[str]:
        return [c.name for c in self.internal_state]

    @property
    def external_names(self) -> list[str]:
        return [c.name for c in self.external_props]

    def is_internal(self, name: str) -> bool:
        return any(c.name == name for c in self.internal_state)


@dataclass
class _Collector:
    used: set[str] = field(default_factory=set)
    candidates: dict[str, BindCandidate] = field(default_factory=dict)
    warnings: list[ValidationFailure] = field(default_factory=list)

    def reference(self, value: PropValue) -> None:
        if isinstance(value, Expression):
            root = value.root
            if root is not None:
                self.used.add(root)

    def bind(self, node: ElementNode) -> None:
        target = node.props["bind"]
        text = target.text if isinstance(target, Expression) else target
        # Only identifier text qualifies; booleans and numbers are not coerced
        if not isinstance(text, str) or not BIND_TARGET.match(text):
            message = (
                f"'bind' on {node.tag} requires a simple identifier, found {text!r}; "
                "the element is left unbound"
            )
            logger.warning(message)
            self.warnings.append(
                ValidationFailure(
                    kind=FailureKind.MALFORMED_BIND_TARGET,
                    path=f"{node.tag}.bind",
                    message=message,
                    value=text,
                    component=node.tag,
                    prop="bind",
                )
            )
            return
        if text in self.candidates:
            return
        initial = node.props.get("initial", node.props.get("bindDefault", ""))
        self.candidates[text] = BindCandidate(name=text, initial=initial)

    def visit(self, nodes: Iterable[ElementNode | IfNode | ForNode]) -> None:
        for node in nodes:
            if isinstance(node, IfNode):
                self.reference(node.condition)
            elif isinstance(node, ForNode):
                self.reference(node.source)
                self.used.add(node.item)
            else:
                for key, value in node.props.items():
                    if key in RESERVED_PROPS:
                        continue
                    # Event keys render string literals as handler references
                    if is_event_key(key) and isinstance(value, str) and IDENTIFIER_PATH.match(value):
                        value = Expression.of(value)
                    self.reference(value)
                if "bind" in node.props:
                    self.bind(node)
            self.visit(node.children)


def scan_program(program: AppNode) -> BindingScan:
    """Collect used identifiers and bind candidates in one depth-first pass.

    Definition bodies are visited before the top-level body. The first
    occurrence of a bind target wins; later ones are ignored.

    Args:
        program: Program to scan.

    Returns:
        Frozen BindingScan.
    """
    collector = _Collector()
    for definition in program.components:
        collector.visit(definition.body)
    collector.visit(program.body)

    return BindingScan(
        used_identifiers=frozenset(collector.used),
        candidates=tuple(collector.candidates.values()),
        warnings=tuple(collector.warnings),
    )


def classify(scan: BindingScan) -> Partition:
    """Partition bind candidates into internal state and external props.

    A target is external only when both its name and its setter appear in
    the used identifiers; referencing just one of them keeps it internal.

    Example:
        >>> scan = BindingScan(candidates=(BindCandidate("count"),))
        >>> classify(scan).internal_names
        ['count']
    """
    internal: list[BindCandidate] = []
    external: list[BindCandidate] = []
    for candidate in scan.candidates:
        if candidate.name in scan.used_identifiers and candidate.setter in scan.used_identifiers:
            external.append(candidate)
        else:
            internal.append(candidate)
    return Partition(internal_state=tuple(internal), external_props=tuple(external))


def parameter_list(scan: BindingScan, partition: Partition) -> list[str]:
    """Sorted external parameter names: used identifiers minus internal state pairs."""
    owned: set[str] = set()
    for candidate in partition.internal_state:
        owned.add(candidate.name)
        owned.add(candidate.setter)
    return sorted(scan.used_identifiers - owned)


__all__ = [
    "BindCandidate",
    "BindingScan",
    "Partition",
    "scan_program",
    "classify",
    "parameter_list",
]
