"""Tabular reports of grouping results."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from note_junction.graph.accessor import GraphAccessor
from note_junction.grouping.types import ResolvedGroup
from note_junction.utils.path_utils import ensure_directory_exists

logger = logging.getLogger(__name__)

GROUP_COLUMNS = ["group_rank", "group_key", "group_name", "tier", "group_size", "member_uid", "member_text"]


def groups_to_frame(groups: Iterable[ResolvedGroup], accessor: GraphAccessor) -> pd.DataFrame:
    """One row per group member, in extraction order.

    ``group_name`` is the text of the key's entity, or the key itself when it
    does not resolve (the fallback group).
    """
    rows = []
    for rank, group in enumerate(groups, start=1):
        key_entity = accessor.resolve_by_identity(group.key)
        group_name = accessor.text(key_entity) if key_entity is not None else group.key
        for member in group.members:
            rows.append(
                {
                    "group_rank": rank,
                    "group_key": group.key,
                    "group_name": group_name,
                    "tier": group.tier.value,
                    "group_size": group.size,
                    "member_uid": accessor.identity(member),
                    "member_text": accessor.text(member),
                }
            )
    return pd.DataFrame(rows, columns=GROUP_COLUMNS)


def group_summary(frame: pd.DataFrame) -> pd.DataFrame:
    """One row per group: rank, key, name, tier and size."""
    if frame.empty:
        return pd.DataFrame(columns=["group_rank", "group_key", "group_name", "tier", "group_size"])
    summary = (
        frame.groupby(["group_rank", "group_key", "group_name", "tier"], sort=True)
        .size()
        .reset_index(name="group_size")
    )
    return summary


def write_groups(frame: pd.DataFrame, path: str) -> None:
    """Write the member table as CSV or JSON depending on the suffix.

    Missing parent directories of ``path`` are created.
    """
    output = Path(path)
    suffix = output.suffix.lower()
    if suffix not in (".csv", ".json"):
        raise ValueError(f"Unsupported output format: {suffix or path}")

    ensure_directory_exists(str(output.parent))
    if suffix == ".csv":
        frame.to_csv(path, index=False)
    else:
        frame.to_json(path, orient="records", indent=2)
    logger.info(f"Wrote {len(frame)} group memberships to {path}")
