"""Command line entry point: ``chipvm ROM``."""

import argparse
import sys
from typing import List, Optional

from chipvm.config import load_config
from chipvm.emulator import load_rom
from chipvm.logging import ConsoleCallback, EmulatorLogger, MetricsCallback
from chipvm.rendering import create_video, save_screenshot
from chipvm.runner import Runner, run_headless
from chipvm.state import create_state

INTERFACES = ("terminal", "graphical", "headless")
DEFAULT_HEADLESS_FRAMES = 600


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chipvm",
        description="Run a CHIP-8 ROM",
    )
    parser.add_argument("rom", help="Path to the ROM file")
    parser.add_argument(
        "--interface",
        choices=INTERFACES,
        default="terminal",
        help="Front-end to run in (default: terminal)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file with runner settings",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a setting, e.g. --set instructions_per_frame=20 (repeatable)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=None,
        help=f"Stop after N frames (headless default: {DEFAULT_HEADLESS_FRAMES})",
    )
    parser.add_argument(
        "--screenshot",
        type=str,
        default=None,
        help="Save the last frame as an image (implies headless)",
    )
    parser.add_argument(
        "--record",
        type=str,
        default=None,
        help="Record all frames to an MP4 file (implies headless)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = list(args.overrides)
    if args.log_level is not None:
        overrides.append(f"log_level={args.log_level}")

    try:
        config = load_config(args.config, overrides)
    except (OSError, ValueError) as e:
        EmulatorLogger().error(f"Invalid configuration: {e}")
        return 2

    logger = EmulatorLogger(log_level=config.log_level)
    if args.frames is not None and args.frames < 1:
        logger.error(f"--frames must be at least 1, got {args.frames}")
        return 2

    state = create_state(seed=config.seed, stack_limit=config.stack_limit)
    try:
        load_rom(state, args.rom)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load ROM: {e}")
        return 1
    logger.info(f"Loaded: {args.rom}")

    metrics = MetricsCallback()
    callbacks = [ConsoleCallback(config.log_interval, logger), metrics]

    headless = args.interface == "headless" or args.screenshot or args.record
    if headless:
        frames = run_headless(
            state,
            args.frames or DEFAULT_HEADLESS_FRAMES,
            config,
            callbacks=callbacks,
            progress=True,
        )
        if args.screenshot and frames:
            save_screenshot(frames[-1], args.screenshot, config.scale, config.color_scheme)
            logger.info(f"Screenshot saved: {args.screenshot}")
        if args.record and frames:
            create_video(frames, args.record, fps=float(config.fps or 60), scale=config.scale, color_scheme=config.color_scheme)
            logger.info(f"Video saved: {args.record} ({len(frames)} frames)")
    else:
        if args.interface == "graphical":
            from chipvm.interfaces.graphical import GraphicalInterface
            interface = GraphicalInterface(config.scale, config.color_scheme)
        else:
            from chipvm.interfaces.terminal import TerminalInterface
            interface = TerminalInterface()
        Runner(state, interface, config, callbacks).run(max_frames=args.frames)

    return 1 if metrics.fault_count and config.halt_on_fault else 0


if __name__ == "__main__":
    sys.exit(main())
