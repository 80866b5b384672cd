"""
Red black tree with parent links, following the classic construction: new
nodes are inserted red and the tree is repaired bottom up by recolouring and
at most two rotations. Deletion copies the in-order predecessor's key into
the matched node and splices out the predecessor instead, so the node that
is physically unlinked never has two children.

Both fixups are written as loops over a "current node" rather than recursion
so deep trees don't grow the call stack.
"""
import logging

from . import settings

RED = True
BLACK = False

logger = logging.getLogger(__name__)


class InvariantViolation(AssertionError):
    pass


class Node:
    def __init__(self, key, color=RED, parent=None):
        self.key = key
        self.color = color
        # Only used to walk upwards, the children links own the tree.
        self.parent = parent
        self.left = None
        self.right = None

    def __repr__(self):
        color = "R" if self.color == RED else "B"
        return f"<Node {self.key!r} {color}>"


class RBTree:
    def __init__(self, keys=None):
        self.root = None
        self._size = 0
        self._sorted = ()
        self._stale = False

        if keys is not None:
            self.insert_many(keys)

    def __len__(self):
        return self._size

    def __contains__(self, key):
        return self.search(key)

    def __iter__(self):
        """
        Lazy in-order walk using an explicit stack.
        """
        stack = []
        current = self.root

        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            current = stack.pop()
            yield current.key
            current = current.right

    def __repr__(self):
        return f"RBTree({list(self.sort())!r})"

    def size(self):
        return self._size

    def _is_red(self, node):
        if node is None:
            return False
        return node.color == RED

    def _mutated(self):
        self._stale = True
        if settings.VALIDATE_ON_MUTATION:
            self.validate()

    # Search

    def _search_node(self, key):
        current = self.root

        while current is not None:
            if key < current.key:
                current = current.left
            elif key > current.key:
                current = current.right
            else:
                return current

        return None

    def search(self, key):
        return self._search_node(key) is not None

    def _minimum_node(self, node):
        while node.left is not None:
            node = node.left
        return node

    def _maximum_node(self, node):
        while node.right is not None:
            node = node.right
        return node

    def minimum(self):
        if self.root is None:
            raise KeyError("minimum of an empty tree")
        return self._minimum_node(self.root).key

    def maximum(self):
        if self.root is None:
            raise KeyError("maximum of an empty tree")
        return self._maximum_node(self.root).key

    def predecessor(self, key):
        """
        Largest key smaller than `key`. Raises KeyError if `key` isn't in the
        tree or is already the smallest key.
        """
        node = self._search_node(key)
        if node is None:
            raise KeyError(key)

        if node.left is not None:
            return self._maximum_node(node.left).key

        parent = node.parent
        while parent is not None and node is parent.left:
            node = parent
            parent = parent.parent

        if parent is None:
            raise KeyError(f"no predecessor for {key!r}")
        return parent.key

    def successor(self, key):
        """
        Inverse of `predecessor`.
        """
        node = self._search_node(key)
        if node is None:
            raise KeyError(key)

        if node.right is not None:
            return self._minimum_node(node.right).key

        parent = node.parent
        while parent is not None and node is parent.right:
            node = parent
            parent = parent.parent

        if parent is None:
            raise KeyError(f"no successor for {key!r}")
        return parent.key

    # Rotations

    def _replace_child(self, parent, old, new):
        """
        Put `new` where `old` hangs under `parent` (or at the root when
        `parent` is None) and fix up `new`'s back link.
        """
        if parent is None:
            self.root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

        if new is not None:
            new.parent = parent

    def _rotate_left(self, old_root):
        """
        Rotates the root of a subtree so that it's right child
        is the new root and the old root becomes the left child.
        """
        new_root = old_root.right
        assert new_root is not None, "left rotation needs a right child"
        logger.debug("rotate left at %r", old_root.key)

        old_root.right = new_root.left
        if new_root.left is not None:
            new_root.left.parent = old_root

        self._replace_child(old_root.parent, old_root, new_root)
        new_root.left = old_root
        old_root.parent = new_root
        return new_root

    def _rotate_right(self, old_root):
        """
        Inverse of `_rotate_left`.
        """
        new_root = old_root.left
        assert new_root is not None, "right rotation needs a left child"
        logger.debug("rotate right at %r", old_root.key)

        old_root.left = new_root.right
        if new_root.right is not None:
            new_root.right.parent = old_root

        self._replace_child(old_root.parent, old_root, new_root)
        new_root.right = old_root
        old_root.parent = new_root
        return new_root

    # Insertion

    def _bst_insert(self, key):
        """
        Plain binary search tree insert of a red node. Returns None when the
        key is already present.
        """
        parent = None
        current = self.root

        while current is not None:
            parent = current
            if key < current.key:
                current = current.left
            elif key > current.key:
                current = current.right
            else:
                return None

        node = Node(key, color=RED, parent=parent)
        if parent is None:
            self.root = node
        elif key < parent.key:
            parent.left = node
        else:
            parent.right = node
        return node

    def _insert_fixup(self, node):
        while True:
            parent = node.parent

            if parent is None:
                node.color = BLACK
                return

            if parent.color == BLACK:
                return

            # a red parent is never the root, so the grandparent exists
            grandparent = parent.parent
            if parent is grandparent.left:
                uncle = grandparent.right
            else:
                uncle = grandparent.left

            if self._is_red(uncle):
                logger.debug("insert %r: red uncle, recolour", node.key)
                parent.color = BLACK
                uncle.color = BLACK
                grandparent.color = RED
                node = grandparent
                continue

            if parent is grandparent.left and node is parent.right:
                logger.debug("insert %r: zig-zag left/right", node.key)
                self._rotate_left(parent)
                node, parent = parent, node
            elif parent is grandparent.right and node is parent.left:
                logger.debug("insert %r: zig-zag right/left", node.key)
                self._rotate_right(parent)
                node, parent = parent, node

            logger.debug("insert %r: zig-zig", node.key)
            parent.color = BLACK
            grandparent.color = RED
            if node is parent.left:
                self._rotate_right(grandparent)
            else:
                self._rotate_left(grandparent)
            return

    def insert(self, key):
        node = self._bst_insert(key)
        if node is None:
            return

        self._insert_fixup(node)
        self._size += 1
        self._mutated()

    def insert_many(self, keys):
        for key in keys:
            self.insert(key)

    # Deletion

    def _splice(self, node):
        """
        Unlink a node with at most one child, promoting the child into its
        place, then repair the colours.
        """
        assert node.left is None or node.right is None, "splice of a two child node"

        child = node.left if node.left is not None else node.right
        parent = node.parent
        vacated_left = parent is not None and parent.left is node

        self._replace_child(parent, node, child)
        node.parent = node.left = node.right = None

        if node.color == RED:
            return

        if self._is_red(child):
            child.color = BLACK
            return

        if parent is not None:
            self._delete_fixup(parent, vacated_left)

    def _delete_fixup(self, parent, vacated_left):
        """
        The subtree on the `vacated_left` side of `parent` is one black node
        short. Borrow from the sibling's side, or push the shortage upward when
        the sibling has nothing to give.
        """
        while True:
            sibling = parent.right if vacated_left else parent.left
            assert sibling is not None, "deficient side has no sibling"

            if sibling.color == RED:
                logger.debug("remove: red sibling %r", sibling.key)
                parent.color = RED
                sibling.color = BLACK
                if vacated_left:
                    self._rotate_left(parent)
                else:
                    self._rotate_right(parent)
                # parent is one level lower now, with a black sibling
                sibling = parent.right if vacated_left else parent.left
                assert sibling is not None, "deficient side has no sibling"

            if vacated_left:
                near, far = sibling.left, sibling.right
            else:
                near, far = sibling.right, sibling.left

            if not self._is_red(near) and not self._is_red(far):
                logger.debug("remove: black sibling %r with black children", sibling.key)
                sibling.color = RED
                if parent.color == RED or parent.parent is None:
                    parent.color = BLACK
                    return
                grandparent = parent.parent
                vacated_left = parent is grandparent.left
                parent = grandparent
                continue

            if not self._is_red(far):
                logger.debug("remove: black sibling %r with inner red child", sibling.key)
                near.color = BLACK
                sibling.color = RED
                if vacated_left:
                    self._rotate_right(sibling)
                else:
                    self._rotate_left(sibling)
                sibling = parent.right if vacated_left else parent.left
                far = sibling.right if vacated_left else sibling.left

            logger.debug("remove: black sibling %r with outer red child", sibling.key)
            sibling.color = parent.color
            parent.color = BLACK
            far.color = BLACK
            if vacated_left:
                self._rotate_left(parent)
            else:
                self._rotate_right(parent)
            return

    def remove(self, key):
        match = self._search_node(key)
        if match is None:
            return

        target = match
        if match.left is not None:
            target = self._maximum_node(match.left)
            match.key = target.key

        self._splice(target)
        self._size -= 1
        self._mutated()

    # Traversal

    def sort(self):
        """
        Keys in ascending order. The result is cached until the next
        modification, so repeated calls return the same tuple.
        """
        if self._stale:
            self._sorted = tuple(self)
            self._stale = False
        return self._sorted

    def height(self):
        def _height(node):
            if node is None:
                return 0
            return 1 + max(_height(node.left), _height(node.right))

        return _height(self.root)

    # Validation

    def _check(self, node, low, high):
        """
        Returns the black height below `node` and raises InvariantViolation on
        the first broken rule found in its subtree.
        """
        if node is None:
            return 0

        if low is not None and not low.key < node.key:
            raise InvariantViolation(f"{node!r} is not greater than {low!r}")
        if high is not None and not node.key < high.key:
            raise InvariantViolation(f"{node!r} is not less than {high!r}")

        for child in (node.left, node.right):
            if child is not None and child.parent is not node:
                raise InvariantViolation(f"{child!r} has a stale parent link")
            if self._is_red(node) and self._is_red(child):
                raise InvariantViolation(f"red {node!r} has red child {child!r}")

        left = self._check(node.left, low, node)
        right = self._check(node.right, node, high)
        if left != right:
            raise InvariantViolation(
                f"black height differs under {node!r}: {left} != {right}"
            )

        return left + (0 if self._is_red(node) else 1)

    def black_height(self):
        """
        Black nodes on any path from the root down to an empty link, not
        counting the root itself.
        """
        height = self._check(self.root, None, None)
        if self.root is not None and not self._is_red(self.root):
            height -= 1
        return height

    def validate(self):
        if self.root is None:
            if self._size != 0:
                raise InvariantViolation(f"empty tree with size {self._size}")
            return

        if self.root.parent is not None:
            raise InvariantViolation("root has a parent")
        if self._is_red(self.root):
            raise InvariantViolation("root is red")

        self._check(self.root, None, None)

        count = sum(1 for _ in self)
        if count != self._size:
            raise InvariantViolation(f"size is {self._size} but found {count} keys")


def tree_sort(keys):
    """
    Sort `keys` by pushing them through a red black tree. Duplicates collapse.
    """
    return RBTree(keys).sort()
