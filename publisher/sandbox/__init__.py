"""Sandboxed cross-compilation in a scoped temporary directory."""

from publisher.sandbox.compiler import Compiler, GoCompiler

__all__ = ["Compiler", "GoCompiler"]
