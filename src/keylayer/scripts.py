import argparse
import logging
import pathlib
import sys

from .commontypes import ConfigError
from .engine import InputContext
from .layout import AlphabetKey, Appearance
from .modifiers import CapsState
from .overrides import load_override_table
from .settings import Settings

check_layout_parser = argparse.ArgumentParser(description="Validate a text keyboard layout override file.")
check_layout_parser.add_argument("layout", type=pathlib.Path)


def check_layout_cli():
    logging.basicConfig(level=logging.INFO)
    args = check_layout_parser.parse_args()
    try:
        table = load_override_table(args.layout)
    except FileNotFoundError:
        print(f"{args.layout}: no such file", file=sys.stderr)
        sys.exit(1)
    except ConfigError as exc:
        print(f"{exc.path}: malformed layout overrides: {exc.reason}", file=sys.stderr)
        sys.exit(1)
    for context_id, rows in sorted(table.items()):
        print(f"{context_id or '(empty)'}: {len(rows)} rows, {sum(len(row) for row in rows)} keys")


render_parser = argparse.ArgumentParser(description="Print the key labels a text keyboard would show.")
render_parser.add_argument("--settings", type=pathlib.Path, required=True)
render_parser.add_argument("--context", default="default")
render_parser.add_argument("--sub-mode", default="")
render_parser.add_argument("--caps", choices=[state.value for state in CapsState], default=CapsState.NONE.value)
render_parser.add_argument("--debug", action="store_true")


def render_cli():
    args = render_parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    settings = Settings.load(args.settings)
    engine = settings.make_engine()
    engine.on_context_change(InputContext(unique_name=args.context, display_name=args.context, sub_mode_label=args.sub_mode))
    engine.on_punctuation_update(settings.punctuation_mapping)
    caps = CapsState(args.caps)
    if caps is CapsState.ONCE:
        engine.switch_caps()
    elif caps is CapsState.LOCK:
        engine.switch_caps(lock=True)

    displays = iter(engine.displays)
    for row in engine.active_layout:
        labels = []
        for key in row:
            if key.appearance is Appearance.IMAGE:
                labels.append(f"[{type(key).__name__.removesuffix('Key').lower()}]")
                continue
            display = next(displays)
            if isinstance(key, AlphabetKey) and display.alt_text:
                labels.append(f"{display.main_text}/{display.alt_text}")
            else:
                labels.append(display.main_text or "␣")
        print(" ".join(labels))
