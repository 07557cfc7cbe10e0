"""Static Go source reader using tree-sitter.

Extracts the package clause, package doc comment and import paths from
each .go file without compiling or executing anything. Mirrors the two
parse depths of the Go toolchain's own parser:

- imports_only=True: only the file header (package clause, imports)
  must be well-formed; syntax errors in later declarations are ignored.
- imports_only=False: the whole file must parse cleanly.
"""

import logging
import re
from pathlib import Path
from typing import Optional

import tree_sitter
import tree_sitter_go as tsgo

from publisher.analyzer.types import GoSourceFile

logger = logging.getLogger(__name__)

# Initialize the language once at module level
_GO_LANG = tree_sitter.Language(tsgo.language())

# Comment lines the Go toolchain treats as directives, not documentation.
# Matches //go:build, //go:generate, //line, //export, //extern, etc.
_DIRECTIVE_RE = re.compile(r"^(line |extern |export |[a-z0-9]+:[a-z0-9])")


def parse_go_file(path: Path, content: bytes, imports_only: bool = False) -> GoSourceFile:
    """Parse a single Go file into its static declarations."""
    parser = tree_sitter.Parser(_GO_LANG)
    tree = parser.parse(content)
    root = tree.root_node

    package_node = _find_child(root, "package_clause")
    package = _package_name(package_node) if package_node else ""

    if imports_only:
        error_line = _header_error_line(root, package_node)
    else:
        error_line = _first_error_line(root) if root.has_error else None

    if error_line is None and not package:
        # A file without a package clause is malformed at line 1.
        error_line = 1

    return GoSourceFile(
        path=path,
        package=package,
        doc=_package_doc(root, package_node) if package_node else "",
        imports=tuple(_import_paths(root)),
        error_line=error_line,
    )


def parse_dir(source_dir: Path, imports_only: bool = False) -> list[GoSourceFile]:
    """Parse every .go file directly inside source_dir (not recursive).

    Raises OSError if the directory or any file cannot be read.
    Files are returned in name order for deterministic error reporting.
    """
    source_dir = Path(source_dir)
    paths = sorted(
        p for p in source_dir.iterdir()
        if p.suffix == ".go" and p.is_file()
    )
    logger.debug("Parsing %d Go files in %s", len(paths), source_dir)

    return [
        parse_go_file(p, p.read_bytes(), imports_only=imports_only)
        for p in paths
    ]


def _find_child(node: tree_sitter.Node, node_type: str) -> Optional[tree_sitter.Node]:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def _text(node: tree_sitter.Node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _package_name(package_clause: tree_sitter.Node) -> str:
    ident = _find_child(package_clause, "package_identifier")
    return _text(ident) if ident else ""


def _import_paths(root: tree_sitter.Node) -> list[str]:
    """Collect unquoted import paths from all import declarations."""
    paths: list[str] = []
    for decl in root.children:
        if decl.type != "import_declaration":
            continue
        for spec in _iter_import_specs(decl):
            path_node = spec.child_by_field_name("path")
            if path_node is None:
                continue
            paths.append(_unquote(_text(path_node)))
    return paths


def _iter_import_specs(decl: tree_sitter.Node):
    for child in decl.children:
        if child.type == "import_spec":
            yield child
        elif child.type == "import_spec_list":
            for spec in child.children:
                if spec.type == "import_spec":
                    yield spec


def _unquote(literal: str) -> str:
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "\"`":
        return literal[1:-1]
    return literal


def _package_doc(root: tree_sitter.Node, package_clause: tree_sitter.Node) -> str:
    """Return the text of the comment group directly above the package clause.

    A comment group is a run of comments with no blank line between them.
    It is the package doc only if it ends on the line right before
    `package`.
    """
    leading = [
        c for c in root.children
        if c.type == "comment" and c.end_byte <= package_clause.start_byte
    ]
    if not leading:
        return ""

    group: list[tree_sitter.Node] = []
    next_row = package_clause.start_point[0]
    for comment in reversed(leading):
        if comment.end_point[0] != next_row - 1:
            break
        group.append(comment)
        next_row = comment.start_point[0]
    group.reverse()

    lines: list[str] = []
    for comment in group:
        lines.extend(_comment_lines(_text(comment)))

    # Drop trailing blank lines, as go/ast CommentGroup.Text does
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def _comment_lines(raw: str) -> list[str]:
    if raw.startswith("//"):
        body = raw[2:]
        if _DIRECTIVE_RE.match(body):
            return []
        return [body[1:] if body.startswith(" ") else body]

    body = raw[2:-2] if raw.endswith("*/") else raw[2:]
    return [line.rstrip() for line in body.splitlines()]


def _first_error_line(node: tree_sitter.Node) -> int:
    """Return the 1-based line of the first ERROR or missing node."""
    if node.type == "ERROR" or node.is_missing:
        return node.start_point[0] + 1
    for child in node.children:
        if child.has_error:
            return _first_error_line(child)
    return node.start_point[0] + 1


def _header_error_line(
    root: tree_sitter.Node,
    package_clause: Optional[tree_sitter.Node],
) -> Optional[int]:
    """Return the first syntax error within the package/import header.

    Errors inside later declarations are ignored. A top-level ERROR node
    counts as a header error only if it precedes the package clause or
    starts with the import keyword.
    """
    for child in root.children:
        if not child.has_error:
            continue
        if child.type in ("package_clause", "import_declaration"):
            return _first_error_line(child)
        if child.type != "ERROR":
            continue
        text = (child.text or b"").lstrip()
        before_package = package_clause is None or child.start_byte < package_clause.start_byte
        if before_package or text.startswith(b"import"):
            return child.start_point[0] + 1
    return None
