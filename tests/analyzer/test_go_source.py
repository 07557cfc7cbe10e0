"""Tests for the tree-sitter Go source reader.

All tests use in-memory fixtures written to tmp_path.
"""

from pathlib import Path

import pytest

from publisher.analyzer.go_source import parse_dir, parse_go_file


def _parse(content: str, imports_only: bool = False):
    return parse_go_file(Path("main.go"), content.encode("utf-8"), imports_only=imports_only)


HANDLER_SOURCE = """\
//go:build linux

// Command orders consumes order events.
// It runs as the orders Lambda.
package main

import (
	"context"

	"github.com/aws/aws-lambda-go/lambda"
)

func handle(ctx context.Context) error { return nil }

func main() { lambda.Start(handle) }
"""


# ---------------------------------------------------------------------------
# Package clause and imports
# ---------------------------------------------------------------------------

class TestPackageAndImports:
    def test_package_name(self):
        parsed = _parse(HANDLER_SOURCE)
        assert parsed.package == "main"
        assert not parsed.has_error

    def test_import_block_paths_unquoted(self):
        parsed = _parse(HANDLER_SOURCE)
        assert parsed.imports == ("context", "github.com/aws/aws-lambda-go/lambda")

    def test_single_line_and_aliased_imports(self):
        parsed = _parse("""\
package main

import "fmt"
import sdk "github.com/aws/aws-lambda-go/lambda"

func main() { fmt.Println(sdk.Start) }
""")
        assert parsed.imports == ("fmt", "github.com/aws/aws-lambda-go/lambda")

    def test_raw_string_import_path(self):
        parsed = _parse("package main\n\nimport `os`\n\nfunc main() { os.Exit(0) }\n")
        assert parsed.imports == ("os",)

    def test_non_main_package(self):
        parsed = _parse("package util\n\nfunc Helper() {}\n")
        assert parsed.package == "util"


# ---------------------------------------------------------------------------
# Package doc comment
# ---------------------------------------------------------------------------

class TestPackageDoc:
    def test_doc_is_group_above_package(self):
        parsed = _parse(HANDLER_SOURCE)
        assert parsed.doc == "Command orders consumes order events.\nIt runs as the orders Lambda."

    def test_build_directive_excluded(self):
        parsed = _parse("//go:build linux\npackage main\n")
        assert parsed.doc == ""

    def test_blank_line_detaches_comment(self):
        """A comment separated from `package` by a blank line is not doc."""
        parsed = _parse("// Command orders.\n\npackage main\n")
        assert parsed.doc == ""

    def test_block_comment_doc(self):
        parsed = _parse("/*\nCommand billing settles invoices.\n*/\npackage main\n")
        assert "Command billing settles invoices." in parsed.doc

    def test_no_comment(self):
        parsed = _parse("package main\n\nfunc main() {}\n")
        assert parsed.doc == ""


# ---------------------------------------------------------------------------
# Syntax errors
# ---------------------------------------------------------------------------

BODY_ERROR_SOURCE = """\
package main

import "github.com/aws/aws-lambda-go/lambda"

func main() {
	x :=
}
"""


class TestSyntaxErrors:
    def test_body_error_reported_in_full_mode(self):
        parsed = _parse(BODY_ERROR_SOURCE)
        assert parsed.has_error
        assert parsed.error_line is not None

    def test_body_error_ignored_in_imports_only_mode(self):
        parsed = _parse(BODY_ERROR_SOURCE, imports_only=True)
        assert not parsed.has_error
        assert parsed.imports == ("github.com/aws/aws-lambda-go/lambda",)

    def test_missing_package_clause_is_error(self):
        parsed = _parse("func main() {}\n", imports_only=True)
        assert parsed.has_error
        assert parsed.error_line == 1

    def test_empty_file_is_error(self):
        parsed = _parse("")
        assert parsed.has_error


# ---------------------------------------------------------------------------
# Directory parsing
# ---------------------------------------------------------------------------

class TestParseDir:
    def test_only_go_files_in_top_level(self, tmp_path):
        (tmp_path / "main.go").write_text("package main\n", encoding="utf-8")
        (tmp_path / "README.md").write_text("# orders\n", encoding="utf-8")
        sub = tmp_path / "internal"
        sub.mkdir()
        (sub / "helper.go").write_text("package internal\n", encoding="utf-8")

        files = parse_dir(tmp_path)

        assert [f.path.name for f in files] == ["main.go"]

    def test_files_sorted_by_name(self, tmp_path):
        (tmp_path / "z.go").write_text("package main\n", encoding="utf-8")
        (tmp_path / "a.go").write_text("package main\n", encoding="utf-8")

        files = parse_dir(tmp_path)

        assert [f.path.name for f in files] == ["a.go", "z.go"]

    def test_missing_directory_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            parse_dir(tmp_path / "nope")
