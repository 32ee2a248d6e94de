"""
Interactive console driver for the AVL tree.

A thin loop over insert, delete, search and the traversal printers. It owns
input parsing and nothing else; tree semantics live in avl.avl_tree.
"""

import logging
from typing import Callable, Optional

from avl.avl_tree import AVLTree
from avl.events import LoggingObserver
from avl.render import (
    format_in_order,
    format_level_order,
    format_pre_order,
    format_state,
    format_structure,
)

MAX_OPERATIONS = 10

MENU_TEXT = """1. Insert a key
2. Delete a key
3. Search for a key
4. Print In-order Traversal
5. Print Pre-order Traversal
6. Print Level-order Traversal
7. Print Tree Structure
8. Exit"""

EXIT_CHOICE = 8


class Menu:
    def __init__(
        self,
        tree: Optional[AVLTree[int]] = None,
        input_fn: Optional[Callable[[str], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
        max_operations: int = MAX_OPERATIONS,
    ):
        self.tree: AVLTree[int] = tree if tree is not None else AVLTree()
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print
        self.max_operations = max_operations
        self.operation_count = 0

    def _read_choice(self) -> Optional[int]:
        raw = self.input_fn(f"Enter your choice (1-{EXIT_CHOICE}): ")
        try:
            choice = int(raw.strip())
        except ValueError:
            return None
        if 1 <= choice <= EXIT_CHOICE:
            return choice
        return None

    def _read_key(self) -> Optional[int]:
        raw = self.input_fn("Enter an integer value: ")
        try:
            return int(raw.strip())
        except ValueError:
            self.output_fn("Invalid input. Please enter a valid integer.")
            return None

    def insert(self, key: int) -> None:
        self.output_fn(f"\nInserting key {key} into AVL Tree")
        self.tree.insert(key)
        self.output_fn("Insertion complete. Current tree state:")
        self.output_fn(format_state(self.tree))

    def delete(self, key: int) -> None:
        self.output_fn(f"\nDeleting key {key} from AVL Tree")
        self.tree.delete(key)
        self.output_fn("Deletion complete. Current tree state:")
        self.output_fn(format_state(self.tree))

    def search(self, key: int) -> bool:
        self.output_fn(f"\nSearching for key {key} in AVL Tree")
        found = self.tree.search(key)
        if found:
            self.output_fn(f"Key {key} found in the tree")
        else:
            self.output_fn(f"Key {key} not found in the tree")
        return found

    def _dispatch(self, choice: int) -> None:
        if choice in (1, 2, 3):
            key = self._read_key()
            if key is None:
                return
            if choice == 1:
                self.insert(key)
            elif choice == 2:
                self.delete(key)
            else:
                self.search(key)
        elif choice == 4:
            self.output_fn(f"In-order traversal: {format_in_order(self.tree)}")
        elif choice == 5:
            self.output_fn(f"Pre-order traversal: {format_pre_order(self.tree)}")
        elif choice == 6:
            self.output_fn(f"Level-order traversal: {format_level_order(self.tree)}")
        elif choice == 7:
            self.output_fn("Tree structure:")
            self.output_fn(format_structure(self.tree))

    def run(self) -> int:
        """Run until exit, end of input, or the operation limit. Returns operations performed."""
        while self.operation_count < self.max_operations:
            self.output_fn(
                f"\n=== AVL Tree Interactive Menu "
                f"(Operation {self.operation_count + 1}/{self.max_operations}) ==="
            )
            self.output_fn(MENU_TEXT)
            try:
                choice = self._read_choice()
                if choice is None:
                    self.output_fn(f"Invalid input. Please enter a number between 1 and {EXIT_CHOICE}.")
                    continue
                if choice == EXIT_CHOICE:
                    self.output_fn("Exiting interactive menu.")
                    break
                self.operation_count += 1
                self._dispatch(choice)
            except EOFError:
                self.output_fn("\nEnd of input. Exiting interactive menu.")
                break

            if self.operation_count >= self.max_operations:
                self.output_fn("Maximum operations reached. Exiting interactive menu.")
                break
        return self.operation_count


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    tree: AVLTree[int] = AVLTree(observer=LoggingObserver(level=logging.INFO))
    Menu(tree).run()


if __name__ == "__main__":
    main()
