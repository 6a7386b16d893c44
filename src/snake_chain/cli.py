"""CLI for headless snake simulation runs."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-chain",
        description="Headless segment-chain snake simulation tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- run ---
    run_p = sub.add_parser(
        "run", help="Replay a key script frame by frame and print the state.",
    )
    run_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override it).",
    )
    run_p.add_argument(
        "--keys", type=str, default="",
        help="Comma-separated key per frame, e.g. 'd,,space,w'.",
    )
    run_p.add_argument("--frames", type=int, default=None)
    run_p.add_argument("--frame-dt", type=float, default=None)
    run_p.add_argument("--length", type=int, default=None)
    run_p.add_argument("--period", type=float, default=None)

    # --- config ---
    cfg_p = sub.add_parser("config", help="Print or save the default config.")
    cfg_p.add_argument(
        "--output", type=str, default=None,
        help="Write the config to this path instead of stdout.",
    )

    return parser


def _run_simulation(args: argparse.Namespace) -> int:
    from snake_chain.config import SimulationConfig
    from snake_chain.engine import Simulation

    config = (
        SimulationConfig.load(args.config)
        if args.config else SimulationConfig()
    )

    overrides: dict = {}
    if args.length is not None:
        overrides["initial_length"] = args.length
    if args.period is not None:
        overrides["tick_period"] = args.period
    if overrides:
        d = config.to_dict()
        d.update(overrides)
        config = SimulationConfig(**d)

    keys = args.keys.split(",") if args.keys else []
    frames = args.frames if args.frames is not None else len(keys)
    if frames < 0:
        logger.error("--frames must not be negative.")
        return 2
    frame_dt = args.frame_dt if args.frame_dt is not None else config.frame_interval

    sim = Simulation(config)
    for frame in range(frames):
        key = keys[frame] if frame < len(keys) else ""
        if key and not sim.press(key):
            logger.warning("Ignoring unbound key %r at frame %d.", key, frame)
        sim.advance(frame_dt)

    logger.info(
        "Ran %d frame(s), %d tick(s); final length %d.",
        frames, sim.tick_count, len(sim.chain),
    )
    print(json.dumps(sim.get_state(), indent=2))  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from snake_chain.config import SimulationConfig

    config = SimulationConfig()
    if args.output:
        config.save(args.output)
    else:
        print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-chain`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "run": _run_simulation,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
