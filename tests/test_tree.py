from __future__ import annotations

import itertools
import unittest

from repoprompt.models import PathEntry
from repoprompt.tree import (
    build_nested_tree,
    generate_tree_text,
    locale_sort_key,
    render_repository_structure,
)


def entries(*paths: str) -> list[PathEntry]:
    """``"src/"`` is a tree entry, anything else a blob."""
    return [
        PathEntry(path=path.rstrip("/"), type="tree" if path.endswith("/") else "blob")
        for path in paths
    ]


class BuildNestedTreeTests(unittest.TestCase):
    def test_directories_are_created_once_per_prefix(self) -> None:
        root = build_nested_tree(entries("src/", "src/a.js", "src/lib/", "src/lib/x.py", "src/b.js", "src/lib/y.py"))

        self.assertEqual([child.name for child in root.children], ["src"])
        src = root.children[0]
        self.assertEqual([child.name for child in src.children], ["a.js", "lib", "b.js"])
        lib = src.children[1]
        self.assertTrue(lib.is_dir)
        self.assertEqual([child.path for child in lib.children], ["src/lib/x.py", "src/lib/y.py"])

    def test_files_listed_before_their_directory_entry(self) -> None:
        root = build_nested_tree(entries("docs/guide.md", "docs/"))
        self.assertEqual(len(root.children), 1)
        self.assertEqual([child.name for child in root.children[0].children], ["guide.md"])

    def test_file_leaves_carry_full_path(self) -> None:
        root = build_nested_tree(entries("a/b/c.txt"))
        leaf = root.children[0].children[0].children[0]
        self.assertEqual((leaf.name, leaf.path), ("c.txt", "a/b/c.txt"))
        self.assertFalse(leaf.is_dir)

    def test_empty_directories_are_dropped(self) -> None:
        root = build_nested_tree(entries("empty/", "README.md"))
        self.assertEqual([child.name for child in root.children], ["README.md"])

    def test_submodule_entries_are_not_files(self) -> None:
        root = build_nested_tree([PathEntry(path="vendor/lib", type="commit")])
        vendor = root.children[0]
        self.assertEqual(vendor.name, "vendor")
        self.assertEqual(vendor.children, [])


class GenerateTreeTextTests(unittest.TestCase):
    def test_each_level_adds_two_dashes(self) -> None:
        text = generate_tree_text(build_nested_tree(entries("a/b/c/d.py")))
        self.assertEqual(text, "- a\n--- b\n----- c\n------- d.py\n")

    def test_siblings_sort_case_insensitively_with_lowercase_first(self) -> None:
        root = build_nested_tree(entries("b.py", "B.py", "a.py", "A.py", "_x.py"))
        self.assertEqual(generate_tree_text(root), "- _x.py\n- a.py\n- A.py\n- b.py\n- B.py\n")

    def test_punctuation_sorts_before_digits_and_letters(self) -> None:
        root = build_nested_tree(entries("test.py", "test_utils.py", "_config.yml", ".github/x.yml", "1abc"))
        self.assertEqual(
            generate_tree_text(root),
            "- _config.yml\n- .github\n--- x.yml\n- 1abc\n- test_utils.py\n- test.py\n",
        )

    def test_underscore_dash_and_dot_order(self) -> None:
        names = sorted([".gitignore", "__init__.py", "-v.txt", "2.md", "a.md"], key=locale_sort_key)
        self.assertEqual(names, ["__init__.py", "-v.txt", ".gitignore", "2.md", "a.md"])

    def test_rendering_keeps_build_order_of_children(self) -> None:
        root = build_nested_tree(entries("z.py", "a.py"))
        generate_tree_text(root)
        self.assertEqual([child.name for child in root.children], ["z.py", "a.py"])

    def test_accented_names_sort_next_to_their_base_letter(self) -> None:
        names = sorted(["f", "é", "e", "d"], key=locale_sort_key)
        self.assertEqual(names, ["d", "e", "é", "f"])

    def test_rendering_is_repeatable(self) -> None:
        root = build_nested_tree(entries("z/1.js", "a/2.js", "m.md"))
        first = generate_tree_text(root)
        self.assertEqual(generate_tree_text(root), first)

    def test_output_does_not_depend_on_entry_order(self) -> None:
        paths = ("src/", "src/a.js", "src/lib/x.py", "README.md", "docs/index.md")
        rendered = {
            generate_tree_text(build_nested_tree(entries(*permutation)))
            for permutation in itertools.permutations(paths)
        }
        self.assertEqual(len(rendered), 1)

    def test_empty_tree_renders_header_only(self) -> None:
        self.assertEqual(render_repository_structure(build_nested_tree([])), "Repository Structure: \n\n")

    def test_structure_lists_every_blob(self) -> None:
        root = build_nested_tree(entries("src/a.js", "src/b.txt", "README.md"))
        self.assertEqual(
            render_repository_structure(root),
            "Repository Structure: \n\n- README.md\n- src\n--- a.js\n--- b.txt\n",
        )


if __name__ == "__main__":
    unittest.main()
