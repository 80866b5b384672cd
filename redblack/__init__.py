"""
An ordered set of comparable keys kept in a red black tree:

- `insert` adds a key as a red leaf and repairs the colours on the way back
  up. Only a red uncle pushes the repair further up; every other case ends
  after at most two rotations.
- `remove` copies the in-order predecessor's key into the matched node and
  unlinks the predecessor, which has at most one child. Removing a black
  node leaves one side short a black node, which is fixed by borrowing from
  the sibling or, when the sibling has no red child, by pushing the shortage
  one level up.
- `search` is a plain binary search tree descent.
- `sort` returns the keys in ascending order, cached until the next
  modification.

Keys only need `<` and `>`. The tree is not thread safe; callers sharing one
across threads must hold a lock for the duration of every call.
"""
from .rbtree import BLACK, RED, InvariantViolation, Node, RBTree, tree_sort

__all__ = ["BLACK", "RED", "InvariantViolation", "Node", "RBTree", "tree_sort"]
