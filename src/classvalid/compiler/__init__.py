# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptor resolution and schema compilation."""

from classvalid.compiler.builder import CompilerError, SchemaCompiler
from classvalid.compiler.resolver import parent_of, resolve_descriptor

__all__ = [
    "CompilerError",
    "SchemaCompiler",
    "parent_of",
    "resolve_descriptor",
]
