#!/usr/bin/env python
"""Command-line entry point: generate chorded layouts and score them on a text."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from asetniop import Asetniop
from config import DEFAULT_CONFIG_PATH, LAYOUTS, Settings, load_settings
from keyboard import Keyboard, NoSuchChar, SkippingKeyboard
from objective import ObjectiveFunction
from tenboard import VARIANTS, Tenboard

logger = logging.getLogger(__name__)


def build_keyboard(layout: str, seed: int | None = None) -> Keyboard:
    if layout == "asetniop":
        return Asetniop()
    return VARIANTS[layout](seed=seed)


def read_table(path: str | Path, layout: str) -> Tenboard:
    """Load a Tenboard layout saved by ``generate``."""
    if layout not in VARIANTS:
        raise ValueError(f"Only tenboard layouts can be loaded from a table, not '{layout}'")
    with open(path, "r", encoding="utf-8") as fp:
        table = json.load(fp)
    return VARIANTS[layout].from_table(table)


def table_json(keyboard: Tenboard) -> str:
    return json.dumps({ch: str(chord) for ch, chord in keyboard.table().items()}, indent=2, ensure_ascii=False)


def _generate(args: argparse.Namespace, settings: Settings) -> int:
    layout = args.layout or settings.layout
    if layout not in VARIANTS:
        print(f"Error: only tenboard layouts can be generated, not '{layout}'", file=sys.stderr)
        return 1

    keyboard = build_keyboard(layout, args.seed if args.seed is not None else settings.seed)
    text = table_json(keyboard)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        logger.info("wrote %s layout to %s", layout, args.output)
    else:
        print(text)
    return 0


def _score(args: argparse.Namespace, settings: Settings) -> int:
    layout = args.layout or settings.layout
    seed = args.seed if args.seed is not None else settings.seed

    objective = ObjectiveFunction.from_formula(
        args.objective or settings.objective,
        finger_targets=settings.finger_targets,
        hand_targets=settings.hand_targets,
    )

    if args.table:
        keyboard = read_table(args.table, layout)
    else:
        keyboard = build_keyboard(layout, seed)

    text = Path(args.text_file).read_text(encoding="utf-8")

    skip = args.skip or settings.skip_untypeable
    if skip:
        if not isinstance(keyboard, SkippingKeyboard):
            print(f"Error: the {layout} layout cannot skip characters", file=sys.stderr)
            return 1
        chords = keyboard.type_chars_skip(text)
    else:
        try:
            chords = keyboard.try_type_chars(text)
        except NoSuchChar as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    scores = objective.analyze(chords)
    print(f"layout: {layout}")
    print(f"chars: {len(text)}  chords: {len(chords)}")
    for name, score in scores.items():
        print(f"{name:16} {score:12.4f}")
    print(f"{'objective':16} {objective.score(chords):12.4f}   ({objective})")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate chorded keyboard layouts and score them on a text.",
        epilog="Defaults are read from config.toml.",
    )
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="path to the config toml file")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug messages")
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="generate a random tenboard layout and print its table as JSON")
    generate.add_argument("--layout", choices=list(VARIANTS), default=None)
    generate.add_argument("--seed", type=int, default=None)
    generate.add_argument("-o", "--output", default=None, help="write the table to this file instead of stdout")

    score = commands.add_parser("score", help="type a text file and print the metric scores")
    score.add_argument("text_file")
    score.add_argument("--layout", choices=list(LAYOUTS), default=None)
    score.add_argument("--table", default=None, help="tenboard table saved by generate")
    score.add_argument("--seed", type=int, default=None)
    score.add_argument("--objective", default=None, help="formula, e.g. 'finger_alt + 2hand_balance'")
    score.add_argument("--skip", action="store_true", help="drop untypeable characters instead of failing")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(Path(args.config))
        if args.command == "generate":
            return _generate(args, settings)
        return _score(args, settings)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
