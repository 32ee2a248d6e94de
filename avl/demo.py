"""
AVL Tree Demo -- Scripted walkthrough, height bound analysis, rotation counts,
and tree drawings.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import logging
import random
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from avl.avl_tree import AVLTree
from avl.events import EventRecorder, LoggingObserver
from avl.render import format_state

SEED = 42
DEMO_KEYS = [10, 20, 30, 40, 50, 25, 15, 5, 60, 70]
DEMO_SEARCHES = [25, 100]
DEMO_DELETES = [20, 30]
SIZES = [2 ** k for k in range(1, 13)]

VIZ_DIR = Path(__file__).parent / "viz"


def avl_height_bound(n: np.ndarray) -> np.ndarray:
    """Worst-case AVL height for n keys: 1.44 * log2(n + 2) - 0.328."""
    return 1.44 * np.log2(np.asarray(n, dtype=np.float64) + 2) - 0.328


def ordered_keys(n: int, order: str, seed: int = SEED) -> List[int]:
    keys = list(range(n))
    if order == "reversed":
        keys.reverse()
    elif order == "shuffled":
        random.Random(seed).shuffle(keys)
    elif order != "sorted":
        raise ValueError(f"unknown order: {order}")
    return keys


def height_profile(sizes: Sequence[int], order: str = "sorted", seed: int = SEED) -> Tuple[np.ndarray, np.ndarray]:
    """Tree height after inserting n keys in the given order, with the AVL bound."""
    heights = []
    for n in sizes:
        tree: AVLTree[int] = AVLTree()
        for key in ordered_keys(n, order, seed):
            tree.insert(key)
        heights.append(tree.height())
    return np.array(heights), avl_height_bound(np.array(sizes))


def rotation_profile(sizes: Sequence[int], order: str = "sorted", seed: int = SEED) -> np.ndarray:
    """Average rotations per insertion, counted through an EventRecorder."""
    rates = []
    for n in sizes:
        recorder = EventRecorder()
        tree: AVLTree[int] = AVLTree(observer=recorder)
        for key in ordered_keys(n, order, seed):
            tree.insert(key)
        rates.append(recorder.count("rotate") / n)
    return np.array(rates)


def tree_layout(tree: AVLTree) -> Dict[int, Tuple[float, float]]:
    """Node positions: x is the in-order rank, y is minus the depth."""
    ranks = {key: i for i, key in enumerate(tree)}
    positions = {}
    for depth, level in enumerate(tree.levels()):
        for key in level:
            positions[key] = (float(ranks[key]), -float(depth))
    return positions


def draw_tree(tree: AVLTree, ax, title: str) -> None:
    positions = tree_layout(tree)
    stack = [tree.root] if tree.root is not None else []
    while stack:
        node = stack.pop()
        for child in (node.left, node.right):
            if child is not None:
                x0, y0 = positions[node.key]
                x1, y1 = positions[child.key]
                ax.plot([x0, x1], [y0, y1], color="gray", linewidth=1.5, zorder=1)
                stack.append(child)
    heights = dict(tree.level_order())
    for key, (x, y) in positions.items():
        ax.scatter([x], [y], s=900, color="steelblue", zorder=2)
        ax.text(x, y, str(key), ha="center", va="center", color="white", fontweight="bold", zorder=3)
        ax.text(x, y - 0.3, f"h={heights[key]}", ha="center", va="top", fontsize=8, color="gray")
    ax.set_title(title)
    ax.axis("off")


def example_1_walkthrough():
    """Insert the demo keys, search, delete, and draw before and after."""
    print("=" * 60)
    print("Example 1: Demonstrating Initial AVL Tree Operations")
    print("=" * 60)

    tree: AVLTree[int] = AVLTree(observer=LoggingObserver(level=logging.INFO))
    for key in DEMO_KEYS:
        print(f"\nInserting key {key} into AVL Tree")
        tree.insert(key)

    print("\nInitial Tree State:")
    print(format_state(tree))

    before = tree.copy()

    for key in DEMO_SEARCHES:
        found = tree.search(key)
        print(f"Key {key} {'found' if found else 'not found'} in the tree")

    for key in DEMO_DELETES:
        print(f"\nDeleting key {key} from AVL Tree")
        tree.delete(key)

    print("\nFinal Tree State after Deletions:")
    print(format_state(tree))
    print(f"Valid AVL tree: {tree.is_valid()}")

    fig, axes = plt.subplots(1, 2, figsize=(14, 6))
    draw_tree(before, axes[0], f"After inserting {DEMO_KEYS}")
    draw_tree(tree, axes[1], f"After deleting {DEMO_DELETES}")
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_walkthrough.png", dpi=150)
    plt.close(fig)

    return fig, (before, tree)


def example_2_height_bound():
    """Measured height against the AVL worst-case bound."""
    print("\n" + "=" * 60)
    print("Example 2: Height vs AVL Bound")
    print("=" * 60)

    sizes = np.array(SIZES)
    fig, ax = plt.subplots(figsize=(8, 6))
    for order, color in (("sorted", "steelblue"), ("reversed", "coral"), ("shuffled", "seagreen")):
        heights, bound = height_profile(SIZES, order)
        print(f"{order:>9}: heights = {heights.tolist()}")
        ax.plot(sizes, heights, "o-", color=color, label=f"{order} insertion")
    ax.plot(sizes, bound, "k--", linewidth=2, label="1.44 log2(n+2) - 0.328")
    ax.plot(sizes, np.ceil(np.log2(sizes + 1)), "k:", label="perfect tree")
    print(f"    bound: {np.round(bound, 2).tolist()}")

    ax.set_xscale("log", base=2)
    ax.set_xlabel("Number of keys (n)")
    ax.set_ylabel("Tree height")
    ax.set_title("AVL Height Stays Logarithmic")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_height_bound.png", dpi=150)
    plt.close(fig)

    return fig, sizes


def example_3_rotation_rate():
    """Rotations per insertion for sorted vs shuffled keys."""
    print("\n" + "=" * 60)
    print("Example 3: Rotations per Insertion")
    print("=" * 60)

    sizes = np.array(SIZES)
    sorted_rates = rotation_profile(SIZES, "sorted")
    shuffled_rates = rotation_profile(SIZES, "shuffled")
    print(f"  sorted: {np.round(sorted_rates, 3).tolist()}")
    print(f"shuffled: {np.round(shuffled_rates, 3).tolist()}")

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(sizes, sorted_rates, "o-", color="steelblue", label="sorted insertion")
    ax.plot(sizes, shuffled_rates, "s-", color="seagreen", label="shuffled insertion")
    ax.set_xscale("log", base=2)
    ax.set_xlabel("Number of keys (n)")
    ax.set_ylabel("Rotations / insertion")
    ax.set_title("Amortized Rotation Cost")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_rotation_rate.png", dpi=150)
    plt.close(fig)

    return fig, (sorted_rates, shuffled_rates)


def example_4_deletion_heights():
    """Height while deleting every key of a shuffled tree."""
    print("\n" + "=" * 60)
    print("Example 4: Height During Deletion")
    print("=" * 60)

    n = 1024
    tree: AVLTree[int] = AVLTree()
    for key in ordered_keys(n, "shuffled"):
        tree.insert(key)

    remaining = []
    heights = []
    for key in ordered_keys(n, "shuffled", seed=SEED + 1):
        tree.delete(key)
        remaining.append(len(tree))
        heights.append(tree.height())
    remaining_arr = np.array(remaining)
    heights_arr = np.array(heights)
    bound = avl_height_bound(remaining_arr)
    violations = int(np.sum(heights_arr > bound))
    print(f"Deleted {n} keys, bound violations: {violations}")

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(remaining_arr, heights_arr, color="steelblue", label="height")
    ax.plot(remaining_arr, bound, "k--", label="AVL bound")
    ax.invert_xaxis()
    ax.set_xlabel("Keys remaining")
    ax.set_ylabel("Tree height")
    ax.set_title("Height During Random Deletion")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "04_deletion.png", dpi=150)
    plt.close(fig)

    return fig, violations


def generate_pdf_report(figures_data):
    """Generate comprehensive PDF report."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = VIZ_DIR.parent / "report.pdf"
    images = sorted(VIZ_DIR.glob("*.png"))

    with PdfPages(pdf_path) as pdf:
        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.6, "AVL Tree", fontsize=36, ha="center", fontweight="bold")
        fig.text(0.5, 0.5, "Self-Balancing Binary Search Tree", fontsize=24, ha="center")
        fig.text(0.5, 0.35, "Demonstration & Analysis Report", fontsize=18, ha="center", style="italic")
        fig.text(0.5, 0.2, f"Seed: {SEED}", fontsize=12, ha="center", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        for (title, _), img_file in zip(figures_data, images):
            fig_copy = plt.figure(figsize=(11, 8.5))
            fig_copy.text(0.5, 0.98, title, fontsize=14, ha="center", fontweight="bold")
            ax = fig_copy.add_axes([0.05, 0.05, 0.9, 0.88])
            ax.imshow(plt.imread(img_file))
            ax.axis("off")
            pdf.savefig(fig_copy)
            plt.close(fig_copy)

    print(f"PDF report saved to: {pdf_path}")
    return pdf_path


def main():
    logging.basicConfig(level=logging.INFO, format="  %(message)s")
    VIZ_DIR.mkdir(exist_ok=True)

    print("\n" + "#" * 60)
    print("#" + " " * 23 + "AVL TREE DEMO" + " " * 22 + "#")
    print("#" * 60)
    print(f"\nRandom seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")

    figures = []

    fig1, _ = example_1_walkthrough()
    figures.append(("Example 1: Walkthrough", fig1))

    fig2, _ = example_2_height_bound()
    figures.append(("Example 2: Height Bound", fig2))

    fig3, _ = example_3_rotation_rate()
    figures.append(("Example 3: Rotation Rate", fig3))

    fig4, _ = example_4_deletion_heights()
    figures.append(("Example 4: Deletion", fig4))

    generate_pdf_report(figures)

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print("\nGenerated files:")
    for f in sorted(VIZ_DIR.glob("*.png")):
        print(f"  - {f.relative_to(VIZ_DIR.parent)}")
    print("  - report.pdf")


if __name__ == "__main__":
    main()
