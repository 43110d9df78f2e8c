"""
Universal Base Layout v1 offsets.

Every attestation kind shares this 131-byte prefix. An off-chain indexer
filters on subject identity, counterparty identity, task reference and
outcome by byte comparison at these exact offsets, so they never move.

    | Offset  | Size | Field                 |
    |---------|------|-----------------------|
    | 0       | 1    | version               |
    | 1-32    | 32   | task_ref              |
    | 33-64   | 32   | subject_identity      |
    | 65-96   | 32   | counterparty_identity |
    | 97      | 1    | outcome               |
    | 98-129  | 32   | data_hash             |
    | 130     | 1    | content_type          |
    | 131+    | var  | content               |
"""

from typing import Final

VERSION: Final = 0
TASK_REF: Final = 1
SUBJECT_IDENTITY: Final = 33
COUNTERPARTY_IDENTITY: Final = 65
OUTCOME: Final = 97
DATA_HASH: Final = 98
CONTENT_TYPE: Final = 130
CONTENT: Final = 131

BASE_LAYOUT_SIZE: Final = CONTENT
"""Minimum encoded size: the fixed prefix with empty content."""
