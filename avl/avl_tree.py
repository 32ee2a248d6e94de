from collections import deque
from typing import TypeVar, Generic, List, Iterator, Optional, Tuple

from avl.events import TreeObserver, NullObserver

T = TypeVar('T')


class AVLTree(Generic[T]):
    class Node:
        def __init__(self, key: T) -> None:
            self.key: T = key
            self.left: Optional['AVLTree.Node'] = None
            self.right: Optional['AVLTree.Node'] = None
            self.height: int = 1

        def __repr__(self) -> str:
            return f"Node({self.key!r}, h={self.height})"

    def __init__(self, observer: Optional[TreeObserver] = None) -> None:
        self._root: Optional[AVLTree.Node] = None
        self._size: int = 0
        self.observer: TreeObserver = observer if observer is not None else NullObserver()

    @property
    def root(self) -> Optional[Node]:
        return self._root

    def _get_height(self, node: Optional[Node]) -> int:
        if node is None:
            return 0
        return node.height

    def _update_height(self, node: Node) -> None:
        node.height = 1 + max(self._get_height(node.left), self._get_height(node.right))

    def _get_balance(self, node: Optional[Node]) -> int:
        if node is None:
            return 0
        return self._get_height(node.left) - self._get_height(node.right)

    def _right_rotate(self, y: Node) -> Node:
        x = y.left
        assert x is not None, "right rotation requires a left child"
        t2 = x.right

        x.right = y
        y.left = t2

        self._update_height(y)
        self._update_height(x)

        self.observer.on_rotate("right", y.key)
        return x

    def _left_rotate(self, x: Node) -> Node:
        y = x.right
        assert y is not None, "left rotation requires a right child"
        t2 = y.left

        y.left = x
        x.right = t2

        self._update_height(x)
        self._update_height(y)

        self.observer.on_rotate("left", x.key)
        return y

    def _rebalance_after_insert(self, node: Node, key: T) -> Node:
        # A single insertion unbalances at most one node on the path, so the
        # inserted key alone tells which grandchild grew.
        self._update_height(node)
        balance = self._get_balance(node)

        if balance > 1:
            assert node.left is not None
            if key < node.left.key:
                self.observer.on_imbalance(node.key, "left-left")
            else:
                self.observer.on_imbalance(node.key, "left-right")
                node.left = self._left_rotate(node.left)
            return self._right_rotate(node)

        if balance < -1:
            assert node.right is not None
            if key > node.right.key:
                self.observer.on_imbalance(node.key, "right-right")
            else:
                self.observer.on_imbalance(node.key, "right-left")
                node.right = self._right_rotate(node.right)
            return self._left_rotate(node)

        return node

    def _rebalance_after_delete(self, node: Node) -> Node:
        # Child balance of exactly 0 is possible here and takes the single
        # rotation.
        self._update_height(node)
        balance = self._get_balance(node)

        if balance > 1:
            assert node.left is not None
            if self._get_balance(node.left) >= 0:
                self.observer.on_imbalance(node.key, "left-left")
            else:
                self.observer.on_imbalance(node.key, "left-right")
                node.left = self._left_rotate(node.left)
            return self._right_rotate(node)

        if balance < -1:
            assert node.right is not None
            if self._get_balance(node.right) <= 0:
                self.observer.on_imbalance(node.key, "right-right")
            else:
                self.observer.on_imbalance(node.key, "right-left")
                node.right = self._right_rotate(node.right)
            return self._left_rotate(node)

        return node

    def _insert(self, node: Optional[Node], key: T) -> Node:
        if node is None:
            self._size += 1
            self.observer.on_insert(key)
            return AVLTree.Node(key)

        if key < node.key:
            node.left = self._insert(node.left, key)
        elif key > node.key:
            node.right = self._insert(node.right, key)
        else:
            self.observer.on_duplicate(key)
            return node

        return self._rebalance_after_insert(node, key)

    def insert(self, key: T) -> None:
        self._root = self._insert(self._root, key)

    def _find_min_node(self, node: Node) -> Node:
        while node.left is not None:
            node = node.left
        return node

    def _delete(self, node: Optional[Node], key: T) -> Optional[Node]:
        if node is None:
            self.observer.on_delete_miss(key)
            return None

        if key < node.key:
            node.left = self._delete(node.left, key)
        elif key > node.key:
            node.right = self._delete(node.right, key)
        else:
            if node.left is None:
                self._size -= 1
                return node.right
            elif node.right is None:
                self._size -= 1
                return node.left
            else:
                successor = self._find_min_node(node.right)
                self.observer.on_successor(node.key, successor.key)
                node.key = successor.key
                node.right = self._delete(node.right, successor.key)

        return self._rebalance_after_delete(node)

    def delete(self, key: T) -> None:
        before = self._size
        self._root = self._delete(self._root, key)
        if self._size < before:
            self.observer.on_delete(key)

    def search(self, key: T) -> bool:
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif key > node.key:
                node = node.right
            else:
                self.observer.on_search_hit(key)
                return True
        self.observer.on_search_miss(key)
        return False

    def min(self) -> T:
        if self._root is None:
            raise ValueError("min from empty tree")
        return self._find_min_node(self._root).key

    def max(self) -> T:
        if self._root is None:
            raise ValueError("max from empty tree")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.key

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def clear(self) -> None:
        self._root = None
        self._size = 0

    def height(self) -> int:
        return self._get_height(self._root)

    def balance_factor(self) -> int:
        return self._get_balance(self._root)

    def in_order(self) -> List[T]:
        return list(self)

    def pre_order(self) -> List[T]:
        result: List[T] = []
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

    def level_order(self) -> List[Tuple[T, int]]:
        """Breadth-first (key, height) pairs."""
        return [(node.key, node.height) for level in self._levels() for node in level]

    def levels(self) -> List[List[T]]:
        """Keys grouped by depth, root level first."""
        return [[node.key for node in level] for level in self._levels()]

    def _levels(self) -> List[List[Node]]:
        result: List[List[AVLTree.Node]] = []
        if self._root is None:
            return result
        queue = deque([self._root])
        while queue:
            level = list(queue)
            queue.clear()
            for node in level:
                if node.left is not None:
                    queue.append(node.left)
                if node.right is not None:
                    queue.append(node.right)
            result.append(level)
        return result

    def _clone(self, node: Optional[Node]) -> Optional[Node]:
        if node is None:
            return None
        twin = AVLTree.Node(node.key)
        twin.height = node.height
        twin.left = self._clone(node.left)
        twin.right = self._clone(node.right)
        return twin

    def copy(self) -> 'AVLTree[T]':
        """Node-for-node clone sharing this tree's observer."""
        clone: AVLTree[T] = AVLTree(observer=self.observer)
        clone._root = self._clone(self._root)
        clone._size = self._size
        return clone

    def _is_balanced(self, node: Optional[Node]) -> bool:
        if node is None:
            return True
        balance = self._get_balance(node)
        if abs(balance) > 1:
            return False
        return self._is_balanced(node.left) and self._is_balanced(node.right)

    def is_balanced(self) -> bool:
        return self._is_balanced(self._root)

    def _check(self, node: Optional[Node], low: Optional[T], high: Optional[T]) -> int:
        """Return the real height of the subtree, or -1 if any invariant fails."""
        if node is None:
            return 0
        if low is not None and not low < node.key:
            return -1
        if high is not None and not node.key < high:
            return -1
        left = self._check(node.left, low, node.key)
        right = self._check(node.right, node.key, high)
        if left < 0 or right < 0 or abs(left - right) > 1:
            return -1
        height = 1 + max(left, right)
        if node.height != height:
            return -1
        return height

    def is_valid(self) -> bool:
        """Check ordering, balance and stored heights of every node."""
        return self._check(self._root, None, None) >= 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: T) -> bool:
        return self.search(key)

    def __iter__(self) -> Iterator[T]:
        stack: List[AVLTree.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key
            node = node.right

    def __repr__(self) -> str:
        return f"AVLTree({self.in_order()})"

    def __str__(self) -> str:
        return f"AVLTree(size={self._size}, height={self.height()})"
