"""Dynamic bounding-volume hierarchy for broad-phase collision detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from physecs.bounds import Bounds
from physecs.bounds_util import get_union

NULL = -1


@dataclass
class BVHNode:
    """A tree node: internal nodes use ``left``/``right``, leaves ``entity``."""

    bounds: Bounds = field(default_factory=Bounds)
    parent: int = NULL
    is_leaf: bool = False
    left: int = NULL
    right: int = NULL
    entity: Any = None
    collider_index: int = 0


class BVH:
    """Binary tree of bounds built by surface-area insertion with rotations."""

    def __init__(self) -> None:
        self._nodes: list[BVHNode] = []
        self._free: list[int] = []
        self._root = NULL

    @property
    def nodes(self) -> list[BVHNode]:
        """All node slots, including freed ones awaiting reuse."""
        return self._nodes

    @property
    def root_id(self) -> int:
        return self._root

    def _create(self) -> int:
        if not self._free:
            self._nodes.append(BVHNode())
            return len(self._nodes) - 1
        node_id = self._free.pop()
        self._nodes[node_id] = BVHNode()
        return node_id

    def _branch_and_bound(self, children, bounds: Bounds, inherited_cost: float, best):
        best_id, best_cost, best_bounds = best
        stack = [(child, inherited_cost) for child in reversed(children)]
        while stack:
            node_id, inherited = stack.pop()
            node = self._nodes[node_id]
            new_bounds = get_union(node.bounds, bounds)
            direct_cost = new_bounds.area()
            cost = direct_cost + inherited
            if cost < best_cost:
                best_id, best_cost, best_bounds = node_id, cost, new_bounds
            if node.is_leaf:
                continue
            inherited += direct_cost - node.bounds.area()
            if bounds.area() + inherited < best_cost:
                stack.append((node.right, inherited))
                stack.append((node.left, inherited))
        return best_id, best_cost, best_bounds

    def _rotate(self, node_id: int) -> None:
        node = self._nodes[node_id]
        if node.parent == NULL:
            return
        parent = self._nodes[node.parent]
        sibling_id = parent.right if parent.left == node_id else parent.left
        sibling = self._nodes[sibling_id]
        child1_id, child2_id = node.left, node.right
        child1, child2 = self._nodes[child1_id], self._nodes[child2_id]

        area = node.bounds.area()
        area_swap1 = get_union(child2.bounds, sibling.bounds).area()
        area_swap2 = get_union(child1.bounds, sibling.bounds).area()

        if area_swap1 < area_swap2:
            if area_swap1 < area:
                node.left = sibling_id
                sibling.parent = node_id
                child1.parent = node.parent
                if sibling_id == parent.left:
                    parent.left = child1_id
                else:
                    parent.right = child1_id
                node.bounds = get_union(sibling.bounds, child2.bounds)
        elif area_swap2 < area:
            node.right = sibling_id
            sibling.parent = node_id
            child2.parent = node.parent
            if sibling_id == parent.left:
                parent.left = child2_id
            else:
                parent.right = child2_id
            node.bounds = get_union(child1.bounds, sibling.bounds)

    def _refit(self, node_id: int) -> None:
        refit_id = node_id
        while refit_id != NULL:
            node = self._nodes[refit_id]
            node.bounds = get_union(self._nodes[node.left].bounds, self._nodes[node.right].bounds)
            self._rotate(refit_id)
            refit_id = self._nodes[refit_id].parent

    def insert(self, entity, collider_index: int, bounds: Bounds) -> int:
        """Add a leaf for ``entity``'s collider and return its node id."""
        node_id = self._create()
        leaf = self._nodes[node_id]
        leaf.bounds = bounds
        leaf.is_leaf = True
        leaf.entity = entity
        leaf.collider_index = collider_index

        if self._root == NULL:
            self._root = node_id
            return node_id

        root = self._nodes[self._root]
        new_parent_bounds = get_union(bounds, root.bounds)
        best_cost = new_parent_bounds.area()
        best = (self._root, best_cost, new_parent_bounds)
        if not root.is_leaf:
            inherited = best_cost - root.bounds.area()
            best = self._branch_and_bound((root.left, root.right), bounds, inherited, best)
        sibling_id, _, new_parent_bounds = best

        old_parent_id = self._nodes[sibling_id].parent
        new_parent_id = self._create()
        new_parent = self._nodes[new_parent_id]
        new_parent.parent = old_parent_id
        new_parent.bounds = new_parent_bounds
        new_parent.left = sibling_id
        new_parent.right = node_id
        self._nodes[sibling_id].parent = new_parent_id
        self._nodes[node_id].parent = new_parent_id

        if old_parent_id != NULL:
            old_parent = self._nodes[old_parent_id]
            if old_parent.left == sibling_id:
                old_parent.left = new_parent_id
            else:
                old_parent.right = new_parent_id
        else:
            self._root = new_parent_id

        self._refit(new_parent_id)
        return node_id

    def update(self, node_id: int, bounds: Bounds) -> None:
        """Give a leaf new bounds and refit its ancestors."""
        node = self._nodes[node_id]
        node.bounds = bounds
        self._refit(node.parent)

    def remove(self, node_id: int) -> None:
        """Detach a leaf; its slot and its parent's slot become reusable."""
        if node_id == self._root:
            self._root = NULL
        else:
            node = self._nodes[node_id]
            parent_id = node.parent
            parent = self._nodes[parent_id]
            sibling_id = parent.right if parent.left == node_id else parent.left
            if parent_id == self._root:
                self._root = sibling_id
                self._nodes[sibling_id].parent = NULL
            else:
                grand_parent_id = parent.parent
                grand_parent = self._nodes[grand_parent_id]
                if grand_parent.left == parent_id:
                    grand_parent.left = sibling_id
                else:
                    grand_parent.right = sibling_id
                self._nodes[sibling_id].parent = grand_parent_id
            self._free.append(parent_id)
        self._free.append(node_id)