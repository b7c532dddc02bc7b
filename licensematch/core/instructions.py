from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

from licensematch.core.errors import UsageError

logger = logging.getLogger(__name__)

TEXT = "text"
VARIABLE = "variable"
OPTIONAL = "optional"


@dataclass(frozen=True)
class VariableRule:
    name: str
    match: str
    example: str = ""


@dataclass(frozen=True)
class Instruction:
    kind: str
    text: Optional[str] = None
    rule: Optional[VariableRule] = None
    parent: Optional[int] = None
    children: Tuple[int, ...] = ()


class InstructionTree:
    """
    Frozen arena of template instructions.

    Every instruction is addressed by its index in `instructions`; parents and
    children refer to each other by index only. `roots` lists the top level
    instructions in document order.
    """

    def __init__(self, instructions: Tuple[Instruction, ...], roots: Tuple[int, ...]) -> None:
        self.instructions = instructions
        self.roots = roots

    def __len__(self) -> int:
        return len(self.instructions)

    def node(self, index: int) -> Instruction:
        return self.instructions[index]

    def children(self, index: int) -> List[Instruction]:
        return [self.instructions[c] for c in self.instructions[index].children]

    def only_text(self, index: int) -> bool:
        kids = self.children(index)
        return bool(kids) and all(k.kind == TEXT for k in kids)

    def to_text(self, index: int) -> str:
        return "".join(k.text or "" for k in self.children(index) if k.kind == TEXT)


@dataclass
class _Node:
    kind: str
    text: Optional[str] = None
    rule: Optional[VariableRule] = None
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)


class InstructionTreeBuilder:
    """
    Absorbs template events in arrival order and produces an InstructionTree.

    Literal and variable events are appended to the innermost open optional
    block, or to the root list when none is open.
    """

    def __init__(self) -> None:
        self._nodes: List[_Node] = []
        self._roots: List[int] = []
        self._current: Optional[int] = None
        self._tree: Optional[InstructionTree] = None

    @property
    def built(self) -> bool:
        return self._tree is not None

    def _append(self, node: _Node) -> int:
        if self._tree is not None:
            raise UsageError("Template events received after parsing was completed")
        idx = len(self._nodes)
        node.parent = self._current
        self._nodes.append(node)
        if self._current is None:
            self._roots.append(idx)
        else:
            self._nodes[self._current].children.append(idx)
        return idx

    def text(self, text: str) -> None:
        self._append(_Node(TEXT, text=text))

    def variable_rule(self, rule: VariableRule) -> None:
        self._append(_Node(VARIABLE, rule=rule))

    def begin_optional(self) -> None:
        self._current = self._append(_Node(OPTIONAL))

    def end_optional(self) -> None:
        if self._tree is not None:
            raise UsageError("Template events received after parsing was completed")
        if self._current is None:
            logger.warning("endOptional without a matching beginOptional; ignoring")
            return
        self._current = self._nodes[self._current].parent

    def build(self) -> InstructionTree:
        if self._tree is not None:
            return self._tree
        if self._current is not None:
            logger.warning("Optional block still open at the end of the template; closing it")
            self._current = None
        frozen = tuple(
            Instruction(n.kind, n.text, n.rule, n.parent, tuple(n.children)) for n in self._nodes
        )
        self._tree = InstructionTree(frozen, tuple(self._roots))
        logger.debug("Built instruction tree: %d instructions, %d at top level", len(frozen), len(self._roots))
        return self._tree
