# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recording of constraint descriptors on types."""

from classvalid.metadata.annotate import annotate_field, annotate_type, field_design, own_annotations
from classvalid.metadata.store import DescriptorStore

__all__ = [
    "DescriptorStore",
    "annotate_field",
    "annotate_type",
    "field_design",
    "own_annotations",
]
