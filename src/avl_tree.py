import logging
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

# Height of an absent subtree; a leaf has height 0.
NO_HEIGHT = -1

# Depth counting starts here so that the root ends up at depth 0.
MINIMAL_DEPTH = -1

LEFT_NOT_BALANCED = -2
RIGHT_NOT_BALANCED = 2


def _check_key(key: int) -> None:
    if not isinstance(key, int):
        raise TypeError(f"AVLTree keys must be int, not {type(key).__name__}")


class AVLTree:
    """Self-balancing binary search tree over integer keys.

    ``AVLTree()`` builds an empty tree. ``AVLTree(values)`` adds the values
    one by one, so only the first occurrence of a repeated value is kept.
    Passing another ``AVLTree`` produces a deep copy: every key gets a new
    node, although the shape of the copy may differ from the source.
    """

    class Node:
        __slots__ = ('key', 'left', 'right', 'parent', 'height', 'balance')

        def __init__(self, key: int) -> None:
            self.key: int = key
            self.left: Optional['AVLTree.Node'] = None
            self.right: Optional['AVLTree.Node'] = None
            # Back-reference only, None for the root.
            self.parent: Optional['AVLTree.Node'] = None
            self.height: int = 0
            # height(right) - height(left)
            self.balance: int = 0

        def __repr__(self) -> str:
            return f"AVLTree.Node({self.key})"

    def __init__(self, data: Optional[Iterable[int]] = None) -> None:
        self._root: Optional[AVLTree.Node] = None
        self._size: int = 0
        self._version: int = 0
        if data is not None:
            for key in data:
                self.add(key)

    @staticmethod
    def from_array(arr: Iterable[int]) -> 'AVLTree':
        """Build a tree by adding the values in order.

        Note: Later duplicates of a value are ignored.
        """
        return AVLTree(arr)

    def _height(self, node: Optional[Node]) -> int:
        if node is None:
            return NO_HEIGHT
        return node.height

    def _set_balance(self, node: Node) -> None:
        left = self._height(node.left)
        right = self._height(node.right)
        node.height = 1 + max(left, right)
        node.balance = right - left

    def _rotate_right(self, n: Node) -> Node:
        v = n.left
        assert v is not None
        logger.debug("Rotating right around %d", n.key)

        v.parent = n.parent
        n.left = v.right
        if n.left is not None:
            n.left.parent = n
        v.right = n
        n.parent = v

        if v.parent is not None:
            if v.parent.left is n:
                v.parent.left = v
            else:
                v.parent.right = v

        self._set_balance(n)
        self._set_balance(v)
        return v

    def _rotate_left(self, n: Node) -> Node:
        v = n.right
        assert v is not None
        logger.debug("Rotating left around %d", n.key)

        v.parent = n.parent
        n.right = v.left
        if n.right is not None:
            n.right.parent = n
        v.left = n
        n.parent = v

        if v.parent is not None:
            if v.parent.left is n:
                v.parent.left = v
            else:
                v.parent.right = v

        self._set_balance(n)
        self._set_balance(v)
        return v

    def _double_rotate_left_right(self, n: Node) -> Node:
        assert n.left is not None
        n.left = self._rotate_left(n.left)
        return self._rotate_right(n)

    def _double_rotate_right_left(self, n: Node) -> Node:
        assert n.right is not None
        n.right = self._rotate_right(n.right)
        return self._rotate_left(n)

    def _check_balance(self, node: Optional[Node]) -> None:
        """Restore heights and balance from ``node`` up to the root.

        Equal grandchild heights resolve to a single rotation, which decides
        the shape the tree ends up in after deletions.
        """
        while node is not None:
            self._set_balance(node)

            if node.balance == LEFT_NOT_BALANCED:
                assert node.left is not None
                if self._height(node.left.left) >= self._height(node.left.right):
                    node = self._rotate_right(node)
                else:
                    node = self._double_rotate_left_right(node)
            elif node.balance == RIGHT_NOT_BALANCED:
                assert node.right is not None
                if self._height(node.right.right) >= self._height(node.right.left):
                    node = self._rotate_left(node)
                else:
                    node = self._double_rotate_right_left(node)

            if node.parent is None:
                self._root = node
            node = node.parent

    def add(self, key: int) -> bool:
        _check_key(key)
        if self._root is None:
            self._root = AVLTree.Node(key)
            self._size += 1
            self._version += 1
            return True

        node = self._root
        while True:
            if key < node.key:
                if node.left is None:
                    node.left = AVLTree.Node(key)
                    node.left.parent = node
                    break
                node = node.left
            elif key > node.key:
                if node.right is None:
                    node.right = AVLTree.Node(key)
                    node.right.parent = node
                    break
                node = node.right
            else:
                return False

        self._size += 1
        self._version += 1
        self._check_balance(node)
        return True

    def _search(self, node: Optional[Node], key: int) -> Optional[Node]:
        while node is not None:
            if key < node.key:
                node = node.left
            elif key > node.key:
                node = node.right
            else:
                return node
        return None

    def contains(self, key: int) -> int:
        """Return the depth of ``key`` (0 for the root), or -1 if absent."""
        _check_key(key)
        node = self._search(self._root, key)
        if node is None:
            return -1
        depth = MINIMAL_DEPTH
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def _detach(self, node: Node) -> None:
        # node has at most one child
        child = node.left if node.left is not None else node.right
        parent = node.parent
        if child is not None:
            child.parent = parent

        if parent is None:
            self._root = child
        elif parent.left is node:
            parent.left = child
        else:
            parent.right = child

        node.parent = node.left = node.right = None
        self._check_balance(parent)

    def delete(self, key: int) -> bool:
        _check_key(key)
        node = self._search(self._root, key)
        if node is None:
            return False

        if node.left is not None and node.right is not None:
            successor = self._find_min_element(node.right)
            logger.debug("Deleting %d: moving successor %d into its node", key, successor.key)
            node.key = successor.key
            node = successor

        self._detach(node)
        self._size -= 1
        self._version += 1
        return True

    def _find_min_element(self, node: Node) -> Node:
        while node.left is not None:
            node = node.left
        return node

    def _find_max_element(self, node: Node) -> Node:
        while node.right is not None:
            node = node.right
        return node

    def _tree_successor(self, node: Node) -> Optional[Node]:
        if node.right is not None:
            return self._find_min_element(node.right)
        parent = node.parent
        while parent is not None and parent.right is node:
            node = parent
            parent = node.parent
        return parent

    @staticmethod
    def min_nodes_for_height(height: int) -> int:
        """Minimum number of nodes in an AVL tree of the given height.

        Heights count edges, so a single node has height 0.
        """
        if not isinstance(height, int):
            raise TypeError(f"height must be int, not {type(height).__name__}")
        if height < 0:
            raise ValueError("height must be non-negative")
        if height == 0:
            return 1
        smaller, larger = 1, 2
        for _ in range(height - 1):
            smaller, larger = larger, smaller + larger + 1
        return larger

    def min(self) -> int:
        if self._root is None:
            raise ValueError("min from empty tree")
        return self._find_min_element(self._root).key

    def max(self) -> int:
        if self._root is None:
            raise ValueError("max from empty tree")
        return self._find_max_element(self._root).key

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def clear(self) -> None:
        self._root = None
        self._size = 0
        self._version += 1

    def height(self) -> int:
        return self._height(self._root)

    def in_order(self) -> List[int]:
        return list(self)

    def pre_order(self) -> List[int]:
        result: List[int] = []
        if self._root is None:
            return result
        stack: List[AVLTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node.key)
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return result

    def copy(self) -> 'AVLTree':
        return AVLTree(self)

    def _checked_height(self, node: Optional[Node], low: Optional[int], high: Optional[int]) -> Optional[int]:
        if node is None:
            return NO_HEIGHT
        if (low is not None and node.key <= low) or (high is not None and node.key >= high):
            return None
        for child in (node.left, node.right):
            if child is not None and child.parent is not node:
                return None

        left = self._checked_height(node.left, low, node.key)
        right = self._checked_height(node.right, node.key, high)
        if left is None or right is None or abs(right - left) > 1:
            return None
        height = 1 + max(left, right)
        if node.height != height or node.balance != right - left:
            return None
        return height

    def is_balanced(self) -> bool:
        """Check ordering, balance, cached heights and parent links of every node."""
        if self._root is not None and self._root.parent is not None:
            return False
        return self._checked_height(self._root, None, None) is not None

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: int) -> bool:
        return self.contains(key) != -1

    def __iter__(self) -> 'AVLTreeIterator':
        return AVLTreeIterator(self)

    def __repr__(self) -> str:
        return f"AVLTree({self.in_order()})"

    def __str__(self) -> str:
        return f"AVLTree(size={self._size}, height={self.height()})"


class AVLTreeIterator:
    """Ascending, single-pass cursor over the keys of an AVLTree.

    Adding or deleting keys while iterating makes the next call to
    ``__next__`` raise RuntimeError. Removing keys through the iterator is
    not supported.
    """

    def __init__(self, tree: AVLTree) -> None:
        self._tree = tree
        self._version = tree._version
        self._current: Optional[AVLTree.Node] = None
        if tree._root is not None:
            self._current = tree._find_min_element(tree._root)

    def __iter__(self) -> 'AVLTreeIterator':
        return self

    def has_next(self) -> bool:
        return self._current is not None

    def __next__(self) -> int:
        if self._current is None:
            raise StopIteration
        if self._version != self._tree._version:
            raise RuntimeError("AVLTree changed during iteration")
        key = self._current.key
        self._current = self._tree._tree_successor(self._current)
        return key

    def remove(self) -> None:
        raise NotImplementedError("AVLTree iterators do not support remove()")
