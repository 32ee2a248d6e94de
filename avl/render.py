"""Text rendering of AVL tree traversals and structure."""

from typing import List, Optional

from avl.avl_tree import AVLTree

EMPTY = "Tree is empty"
INDENT = "    "


def format_in_order(tree: AVLTree) -> str:
    if tree.is_empty():
        return EMPTY
    return " ".join(str(key) for key in tree)


def format_pre_order(tree: AVLTree) -> str:
    if tree.is_empty():
        return EMPTY
    return " ".join(str(key) for key in tree.pre_order())


def format_level_order(tree: AVLTree) -> str:
    if tree.is_empty():
        return EMPTY
    return " ".join(f"{key}(h={height})" for key, height in tree.level_order())


def _structure_lines(node: Optional[AVLTree.Node], prefix: str, lines: List[str]) -> None:
    if node is None:
        return
    _structure_lines(node.right, prefix + INDENT, lines)
    lines.append(f"{prefix}{node.key}(h={node.height})")
    _structure_lines(node.left, prefix + INDENT, lines)


def format_structure(tree: AVLTree) -> str:
    """
    Sideways drawing of the tree: right subtree on top, root at the left
    margin, each level indented by four spaces.
    """
    if tree.is_empty():
        return EMPTY
    lines: List[str] = []
    _structure_lines(tree.root, "", lines)
    return "\n".join(lines)


def format_state(tree: AVLTree) -> str:
    return "\n".join([
        f"In-order traversal: {format_in_order(tree)}",
        f"Level-order traversal: {format_level_order(tree)}",
        "Tree structure:",
        format_structure(tree),
    ])
