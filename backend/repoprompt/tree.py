from typing import Dict, Iterable, Tuple

from pyuca import Collator

from .models import PathEntry, TreeNode

STRUCTURE_HEADER = "Repository Structure: \n\n"
LEVEL_PREFIX = "--"

COLLATOR = Collator() # Default Unicode collation element table, loaded once


def build_nested_tree(entries: Iterable[PathEntry]) -> TreeNode:
    """Turns GitHub's flat ``path``/``type`` listing into a nested tree.

    Intermediate directories are created from the path prefixes of each entry,
    once per prefix, in the order they are first seen. ``tree`` entries are not
    materialized on their own, so a directory without any blob below it does
    not appear in the result.
    """
    root = TreeNode(children=[])
    path_index: Dict[str, TreeNode] = {"": root}

    for entry in entries:
        parts = entry.path.split("/")
        current = root

        for i, part in enumerate(parts[:-1]):
            full_path = "/".join(parts[:i + 1])
            directory = path_index.get(full_path)
            if directory is None:
                directory = TreeNode(name=part, children=[])
                current.children.append(directory)
                path_index[full_path] = directory
            current = directory

        if entry.type == "blob":
            current.children.append(TreeNode(name=parts[-1], path=entry.path))

    return root


def locale_sort_key(name: str) -> Tuple[Tuple[int, ...], str]:
    """Unicode collation key: punctuation, then digits, then letters.

    Accents and case only break ties, lowercase first; ``"_"`` sorts before
    ``"-"`` and ``"."``. Names with equal collation keys fall back to code
    points so the order stays total.
    """
    return COLLATOR.sort_key(name), name


def generate_tree_text(node: TreeNode, prefix: str = "") -> str:
    """Renders ``node``'s children as ``"{prefix}- {name}"`` lines.

    Each level of nesting adds ``"--"`` to the prefix. The node itself is not
    printed and its children keep their build order.
    """
    result = []
    for child in sorted(node.children, key=lambda child: locale_sort_key(child.name)):
        result.append(f"{prefix}- {child.name}\n")
        if child.is_dir:
            result.append(generate_tree_text(child, prefix + LEVEL_PREFIX))
    return "".join(result)


def render_repository_structure(root: TreeNode) -> str:
    return STRUCTURE_HEADER + generate_tree_text(root)
