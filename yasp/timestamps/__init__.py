"""Time-base reconciliation and word/phoneme merging."""
