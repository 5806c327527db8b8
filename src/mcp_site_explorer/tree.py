"""Folder hierarchy built from the flat index, and read-only navigation over it."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .models import FolderNode, IndexedItem, LeafRef
from .paths import is_under_root, join_path, root_path, split_path

ROOT_NODE_NAME = "/"


@dataclass(slots=True)
class TreeNode:
    name: str
    children: dict[str, TreeNode] = field(default_factory=dict)
    leaves: list[LeafRef] = field(default_factory=list)


def sort_key(name: str) -> tuple[str, str]:
    """Collation key: case-insensitive first, lowercase before uppercase on ties."""
    return (name.casefold(), name.swapcase())


def tree_reference(item: IndexedItem) -> str:
    """Reference string used for placement: the locator, else the source path."""
    return item.url or item.path


def _leaf_for(item: IndexedItem, segments: tuple[str, ...]) -> LeafRef:
    return LeafRef(
        kind=item.kind,
        display_name=item.identifier or segments[-1],
        url=item.url,
        path=item.path,
        full_path=join_path(segments),
    )


def build_tree(items: Iterable[IndexedItem], root_name: str) -> TreeNode:
    """Build the folder tree for every item living under ``root_name``.

    Items without a usable reference, or outside the content root, are skipped.
    The terminal segment of an item always becomes a leaf, even when a folder
    of the same name exists at that level.
    """
    root = TreeNode(name=ROOT_NODE_NAME)
    for item in items:
        segments = split_path(tree_reference(item))
        if not is_under_root(segments, root_name):
            continue

        node = root
        for seg in segments[:-1]:
            child = node.children.get(seg)
            if child is None:
                child = node.children[seg] = TreeNode(name=seg)
            node = child
        node.leaves.append(_leaf_for(item, segments))
    return root


def resolve(tree: TreeNode, folder_path: str) -> TreeNode | None:
    """Return the node at ``folder_path`` or ``None`` when any segment is missing."""
    node = tree
    for seg in split_path(folder_path):
        node = node.children.get(seg)
        if node is None:
            return None
    return node


def parent_of(folder_path: str, root_name: str) -> str:
    """Parent folder path; never climbs above the content root."""
    parent = split_path(folder_path)[:-1]
    if not parent:
        return root_path(root_name)
    return join_path(parent)


def list_folders(node: TreeNode) -> list[str]:
    return sorted(node.children, key=sort_key)


def list_leaves(node: TreeNode) -> list[LeafRef]:
    return sorted(node.leaves, key=lambda leaf: sort_key(leaf.display_name))


def child_path(folder_path: str, name: str) -> str:
    return join_path((*split_path(folder_path), name))


def tree_snapshot(node: TreeNode, path: str) -> FolderNode:
    """Nested snapshot of ``node`` and everything below it, children sorted."""
    return FolderNode(
        name=node.name,
        path=path,
        leaf_count=len(node.leaves),
        children=[
            tree_snapshot(node.children[name], child_path(path, name)) for name in list_folders(node)
        ],
    )
