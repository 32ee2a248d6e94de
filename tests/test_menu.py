import logging
import unittest
from unittest.mock import patch
from avl.avl_tree import AVLTree
from avl.events import LoggingObserver
from avl.menu import Menu, main


class ScriptedConsole:
    def __init__(self, *lines: str):
        self.lines = list(lines)
        self.prompts = []
        self.output = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def print(self, text: str) -> None:
        self.output.append(text)

    def text(self) -> str:
        return "\n".join(self.output)


def run(*lines: str, max_operations: int = 10, tree=None):
    console = ScriptedConsole(*lines)
    menu = Menu(tree, input_fn=console.input, output_fn=console.print, max_operations=max_operations)
    count = menu.run()
    return menu, console, count


class TestMenuOperations(unittest.TestCase):
    def test_insert_then_exit(self):
        menu, console, count = run("1", "10", "1", "20", "8")
        self.assertEqual(menu.tree.in_order(), [10, 20])
        self.assertEqual(count, 2)
        self.assertIn("Inserting key 10 into AVL Tree", console.text())
        self.assertIn("Insertion complete. Current tree state:", console.text())
        self.assertIn("Exiting interactive menu.", console.text())

    def test_delete(self):
        tree: AVLTree[int] = AVLTree()
        for key in (1, 2, 3):
            tree.insert(key)
        menu, console, _ = run("2", "2", "8", tree=tree)
        self.assertEqual(menu.tree.in_order(), [1, 3])
        self.assertIn("Deleting key 2 from AVL Tree", console.text())
        self.assertIn("Deletion complete. Current tree state:", console.text())

    def test_search_found_and_not_found(self):
        _, console, _ = run("1", "5", "3", "5", "3", "6", "8")
        self.assertIn("Key 5 found in the tree", console.output)
        self.assertIn("Key 6 not found in the tree", console.output)

    def test_traversal_choices(self):
        _, console, count = run("1", "2", "1", "1", "4", "5", "6", "7", "8")
        self.assertEqual(count, 6)
        self.assertIn("In-order traversal: 1 2", console.output)
        self.assertIn("Pre-order traversal: 2 1", console.output)
        self.assertIn("Level-order traversal: 2(h=2) 1(h=1)", console.output)
        self.assertIn("2(h=2)\n    1(h=1)", console.output)

    def test_traversals_on_empty_tree(self):
        _, console, _ = run("4", "8")
        self.assertIn("In-order traversal: Tree is empty", console.output)

    def test_search_log_lines_differ_from_printed_result(self):
        tree: AVLTree[int] = AVLTree(observer=LoggingObserver(level=logging.INFO))
        tree.insert(5)
        with self.assertLogs("avl.events", level="INFO") as cm:
            _, console, _ = run("3", "5", "3", "6", "8", tree=tree)
        logged = [record.getMessage() for record in cm.records]
        self.assertEqual(logged, [
            "Found node with key 5",
            "Reached null node while searching for 6",
        ])
        self.assertFalse(set(logged) & set(console.output))


class TestMenuInputValidation(unittest.TestCase):
    def test_invalid_choice_is_not_counted(self):
        menu, console, count = run("abc", "0", "9", "8")
        self.assertEqual(count, 0)
        self.assertEqual(
            console.output.count("Invalid input. Please enter a number between 1 and 8."), 3
        )

    def test_invalid_key_is_reported_and_counted(self):
        menu, console, count = run("1", "ten", "8")
        self.assertEqual(count, 1)
        self.assertTrue(menu.tree.is_empty())
        self.assertIn("Invalid input. Please enter a valid integer.", console.output)

    def test_whitespace_around_numbers_is_accepted(self):
        menu, _, _ = run(" 1 ", " -7 ", "8")
        self.assertEqual(menu.tree.in_order(), [-7])


class TestMenuLimits(unittest.TestCase):
    def test_stops_at_max_operations(self):
        menu, console, count = run("4", "4", "4", "1", "99", max_operations=3)
        self.assertEqual(count, 3)
        self.assertTrue(menu.tree.is_empty())
        self.assertEqual(console.output[-1], "Maximum operations reached. Exiting interactive menu.")
        self.assertEqual(console.lines, ["1", "99"])

    def test_header_shows_operation_number(self):
        _, console, _ = run("4", "8", max_operations=5)
        self.assertIn("\n=== AVL Tree Interactive Menu (Operation 1/5) ===", console.output)
        self.assertIn("\n=== AVL Tree Interactive Menu (Operation 2/5) ===", console.output)

    def test_end_of_input_exits(self):
        menu, console, count = run("1", "3")
        self.assertEqual(count, 1)
        self.assertEqual(menu.tree.in_order(), [3])
        self.assertEqual(console.output[-1], "\nEnd of input. Exiting interactive menu.")

    def test_end_of_input_while_reading_key(self):
        menu, console, count = run("1")
        self.assertEqual(count, 1)
        self.assertTrue(menu.tree.is_empty())


class TestMenuMain(unittest.TestCase):
    def test_defaults_are_console_builtins(self):
        menu = Menu()
        self.assertIs(menu.input_fn, input)
        self.assertIs(menu.output_fn, print)

    def test_main_runs_on_stdin(self):
        with patch("builtins.input", side_effect=["1", "42", "8"]), \
                patch("builtins.print") as mock_print:
            main()
        printed = [call.args[0] for call in mock_print.call_args_list if call.args]
        self.assertIn("Exiting interactive menu.", printed)


if __name__ == '__main__':
    unittest.main()
