"""Tree building utilities for visualizing dispatcher hierarchies."""


def build_node_tree(parents: dict[str, str | None], with_element: set[str] | None = None) -> str:
    """Build a tree-style view of named nodes similar to the `tree` command.

    Nodes in with_element are marked with comment-like "# element".

    Args:
        parents: Mapping of node name to its parent's name (None for roots)
        with_element: Names of nodes that carry a native element

    Returns:
        Formatted tree string representation
    """
    with_element = with_element or set()

    children: dict[str | None, list[str]] = {}
    for name, parent in parents.items():
        children.setdefault(parent, []).append(name)

    def render(name, prefix="", is_last=True):
        connector = "└── " if is_last else "├── "
        marker = " # element" if name in with_element else ""
        lines = [f"{prefix}{connector}{name}{marker}"]
        prefix += "    " if is_last else "│   "

        kids = sorted(children.get(name, []))
        for idx, kid in enumerate(kids):
            lines.extend(render(kid, prefix, idx == len(kids) - 1))
        return lines

    lines = ["."]
    roots = sorted(children.get(None, []))
    for idx, root in enumerate(roots):
        lines.extend(render(root, "", idx == len(roots) - 1))

    return "\n".join(lines)
