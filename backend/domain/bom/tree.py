"""
BOM Domain - Tree view of BOM lines.

Lines are linked by ``parent_code`` -> ``electronic_code`` string equality.
Because neither side is enforced, the builder has to cope with dangling
parents, repeated codes and cycles without looping.
"""

from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Set
from uuid import UUID

from .entities import BomLine


@dataclass
class TreeNode:
    line: BomLine
    depth: int
    children: List["TreeNode"] = field(default_factory=list)
    dangling_parent: bool = False
    in_cycle: bool = False


def build_tree(lines: Iterable[BomLine]) -> List[TreeNode]:
    """
    Arrange lines into a forest ordered by ``line_no``.

    Roots are top-level lines and lines whose parent code matches no line
    (flagged ``dangling_parent``). A child whose code is already on the
    current path is emitted as a leaf flagged ``in_cycle``. Lines that can
    only be reached through a cycle are appended as extra roots, also
    flagged ``in_cycle``.
    """
    ordered = sorted(lines, key=lambda line: (line.line_no or 0, str(line.id)))
    known_codes = {line.electronic_code for line in ordered if line.electronic_code}

    children_by_parent: Dict[str, List[BomLine]] = defaultdict(list)
    for line in ordered:
        if line.parent_code:
            children_by_parent[line.parent_code].append(line)

    emitted: Set[UUID] = set()

    def grow(line: BomLine, depth: int, path: FrozenSet[str]) -> TreeNode:
        emitted.add(line.id)
        node = TreeNode(line=line, depth=depth)
        code = line.electronic_code
        if not code:
            return node
        below = path | {code}
        for child in children_by_parent.get(code, ()):
            if child.electronic_code in below:
                emitted.add(child.id)
                node.children.append(TreeNode(line=child, depth=depth + 1, in_cycle=True))
            else:
                node.children.append(grow(child, depth + 1, below))
        return node

    forest: List[TreeNode] = []
    for line in ordered:
        if not line.parent_code:
            forest.append(grow(line, 1, frozenset()))
        elif line.parent_code not in known_codes:
            root = grow(line, 1, frozenset())
            root.dangling_parent = True
            forest.append(root)

    for line in ordered:
        if line.id not in emitted:
            root = grow(line, 1, frozenset())
            root.in_cycle = True
            forest.append(root)

    return forest


def max_depth(forest: Iterable[TreeNode]) -> int:
    """Deepest nesting level in the forest (0 for an empty forest)."""
    deepest = 0
    stack = list(forest)
    while stack:
        node = stack.pop()
        deepest = max(deepest, node.depth)
        stack.extend(node.children)
    return deepest
