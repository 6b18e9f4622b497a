"""Command line entry point: group a graph snapshot by shared references."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import re
import sys
from typing import Optional, Sequence

from note_junction.graph.accessor import StoreGraphAccessor
from note_junction.graph.entity import Entity
from note_junction.graph.snapshot import SnapshotError, load_snapshot
from note_junction.graph.store import GraphStore
from note_junction.grouping.merge import merge_small_groups, pattern_guard
from note_junction.grouping.pipeline import group_entities
from note_junction.grouping.types import GroupingConfig, ResolvedGroup, Tier
from note_junction.report import group_summary, groups_to_frame, write_groups
from note_junction.utils.io_utils import load_settings
from note_junction.utils.logging_utils import setup_logging
from note_junction.utils.path_utils import get_config_path
from note_junction.utils.settings import validate_settings

logger = logging.getLogger(__name__)


def select_entities(store: GraphStore, page_title: Optional[str]) -> list[Entity]:
    """Entities to group: a page's linked references, or every page's top-level blocks.

    Raises:
        ValueError: If ``page_title`` names no page
    """
    if page_title is not None:
        page = store.page_by_title(page_title)
        if page is None:
            raise ValueError(f"Page not found: {page_title!r}")
        return page.backlinks

    entities: list[Entity] = []
    for record in store.pages():
        page = store.entity(record.uid)
        if page is not None:
            entities.extend(page.children)
    return entities


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Group knowledge-base blocks by their most common references",
    )
    parser.add_argument("--snapshot", required=True, help="Graph snapshot file path (JSON/YAML)")
    parser.add_argument("--fallback-key", required=True, help="Group key for entities without usable references")
    parser.add_argument(
        "--page",
        help="Group the linked references of this page (default: top-level blocks of every page)",
    )
    parser.add_argument(
        "--config",
        default=str(get_config_path()),
        help="Configuration file path",
    )
    parser.add_argument(
        "--merge-below",
        type=int,
        help="Merge groups smaller than this into the fallback group (overrides merge.min_size)",
    )
    parser.add_argument("--output", help="Write the member table to this CSV/JSON file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides logging.level from the config)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    settings = load_settings(args.config)
    logging_settings = dict(settings.get("logging", {}))
    if args.log_level:
        logging_settings["level"] = args.log_level
    setup_logging(logging_settings)

    for warning in validate_settings(settings):
        logger.warning(f"Settings: {warning}")

    try:
        config = GroupingConfig.from_settings(settings)
        store = load_snapshot(args.snapshot)
        entities = select_entities(store, args.page)
    except (SnapshotError, ValueError, OSError) as e:
        logger.error(f"Cannot start grouping: {e}")
        return 1

    if args.page is not None:
        # The page every linked reference points to would swallow them all
        config = dataclasses.replace(
            config, exclusions=config.exclusions + (re.compile(f"^{re.escape(args.page)}$"),)
        )

    accessor = StoreGraphAccessor(store)
    result = group_entities(entities, accessor, args.fallback_key, config)
    groups: list[ResolvedGroup] = list(result)

    merge_settings = settings.get("merge", {})
    min_size = args.merge_below if args.merge_below is not None else merge_settings.get("min_size", 2)
    if args.merge_below is not None or merge_settings.get("enabled", False):
        guard = pattern_guard(merge_settings.get("never_merge", []), accessor)
        merged = merge_small_groups(result.as_mapping(), args.fallback_key, min_size, guard)
        tiers = {group.key: group.tier for group in groups}
        groups = [
            ResolvedGroup(key=key, members=members, tier=tiers.get(key, Tier.CLEANUP))
            for key, members in merged.items()
        ]

    frame = groups_to_frame(groups, accessor)
    summary = group_summary(frame)
    print(summary.to_string(index=False) if not summary.empty else "No entities to group")

    if args.output:
        try:
            write_groups(frame, args.output)
        except (ValueError, OSError) as e:
            logger.error(f"Cannot write output: {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
