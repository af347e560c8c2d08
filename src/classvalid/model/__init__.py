# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constraint descriptor model for classvalid."""

from classvalid.model.descriptors import (
    Bound,
    Conditional,
    FieldDescriptor,
    Replacement,
    SchemaArgs,
    Transform,
    TypeDescriptor,
    as_bound,
    schema_args,
)
from classvalid.model.kinds import Kind, design_of, kind_of

__all__ = [
    "Bound",
    "Conditional",
    "FieldDescriptor",
    "Kind",
    "Replacement",
    "SchemaArgs",
    "Transform",
    "TypeDescriptor",
    "as_bound",
    "design_of",
    "kind_of",
    "schema_args",
]
