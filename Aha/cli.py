from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Dict, List, Optional

from pydantic import ValidationError

from .artifacts import article_draft, path_steps, synthesis_text
from .chamber import InsightChamber
from .config import AhaConfig
from .meta_profile import MetaProfileBuilder
from .models import Chamber
from .topic_stats import TopicStatsCalculator

logger = logging.getLogger(__name__)


# -----------------------------
# Demo Seed Messages
# -----------------------------
def demo_messages() -> List[tuple]:
    return [
        ("jobb", "Jeg er alltid stressa på jobb"),
        ("jobb", "Jeg er alltid stressa på jobb"),
        ("jobb", "Jeg må svare på alle mailer før sjefen kommer"),
        ("jobb", "Jeg klarer ikke å si nei når kollega spør om hjelp"),
        ("søvn", "Jeg ligger våken og tenker på alt jeg burde gjort"),
        ("søvn", "Kroppen er sliten og jeg har hodepine om morgenen"),
        ("venner", "Det er gøy å møte venner, jeg blir rolig og fornøyd"),
        ("venner", "Kanskje jeg kan ringe en venn neste gang jeg er lei meg"),
    ]


# -----------------------------
# Chamber Persistence (CLI only)
# -----------------------------
def load_chamber(path: Optional[str]) -> Chamber:
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            return Chamber.from_dict(json.load(f))
    return Chamber()


def save_chamber(chamber: Chamber, path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(chamber.to_dict(), f, ensure_ascii=False, indent=2)


def parse_phases(pairs: Optional[List[str]]) -> Dict[str, str]:
    phases: Dict[str, str] = {}
    for pair in pairs or []:
        topic, sep, phase = pair.partition("=")
        if not sep or not topic.strip():
            raise ValueError(f"expected topic=phase, got {pair!r}")
        phases[topic.strip()] = phase.strip()
    return phases


def _dump(data) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


# -----------------------------
# Modes
# -----------------------------
def ingest_mode(args, config: AhaConfig) -> int:
    engine = InsightChamber(config=config)
    chamber = load_chamber(args.chamber)
    source = open(args.input, "r", encoding="utf-8") if args.input else sys.stdin
    try:
        for line in source:
            if not line.strip():
                continue
            if args.split_sentences:
                engine.ingest_message(chamber, line, args.subject, args.topic)
            else:
                engine.ingest(chamber, engine.create_signal(line, args.subject, args.topic))
    finally:
        if source is not sys.stdin:
            source.close()
    if args.chamber:
        save_chamber(chamber, args.chamber)
    _dump([s.to_dict() for s in TopicStatsCalculator(config=config).topics_overview(chamber)])
    return 0


def profile_mode(args, config: AhaConfig) -> int:
    chamber = load_chamber(args.chamber)
    profile = MetaProfileBuilder(config=config).build(chamber, args.subject, parse_phases(args.phase))
    _dump(profile.to_dict())
    return 0


def artifact_mode(args, config: AhaConfig) -> int:
    chamber = load_chamber(args.chamber)
    insights = InsightChamber.insights_for_topic(chamber, args.subject, args.topic)
    stats = TopicStatsCalculator(config=config).stats_for(insights, args.subject, args.topic)
    _dump({
        "topic_id": args.topic,
        "artifact_type": stats.artifact_type,
        "path": path_steps(insights, max_steps=config.artifacts.path_max_steps),
        "synthesis": synthesis_text(insights, args.topic),
        "article": article_draft(insights, stats, top_n=config.artifacts.article_top_n),
    })
    return 0


def demo_mode(args, config: AhaConfig) -> int:
    engine = InsightChamber(config=config)
    chamber = engine.create_empty_chamber()
    for topic, text in demo_messages():
        engine.ingest(chamber, engine.create_signal(text, args.subject, topic))
    _dump({
        "overview": [s.to_dict() for s in TopicStatsCalculator(config=config).topics_overview(chamber)],
        "meta_profile": MetaProfileBuilder(config=config).build(chamber, args.subject, parse_phases(args.phase)).to_dict(),
    })
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="AHA insight engine")
    parser.add_argument("--mode", default="demo", choices=["ingest", "profile", "artifact", "demo"])
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--chamber", default=None, help="Chamber JSON file to load (and save after ingest)")
    parser.add_argument("--input", default=None, help="Messages, one per line (default: stdin)")
    parser.add_argument("--subject", default="u1")
    parser.add_argument("--topic", default="general")
    parser.add_argument("--split-sentences", action="store_true")
    parser.add_argument("--phase", action="append", help="topic=phase, may be repeated")
    args = parser.parse_args(argv)

    try:
        config = AhaConfig.from_file(args.config) if args.config else AhaConfig()
    except (OSError, ValidationError) as e:
        print(f"Could not load config {args.config}: {e}", file=sys.stderr)
        return 2

    try:
        logging.basicConfig(
            level=(args.log_level or config.log_level).upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        if args.mode == "ingest":
            return ingest_mode(args, config)
        if args.mode == "profile":
            return profile_mode(args, config)
        if args.mode == "artifact":
            return artifact_mode(args, config)
        return demo_mode(args, config)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
