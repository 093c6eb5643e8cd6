"""
CLI entry point for the Van der Pol phase-plane sonifier.

Usage:
    vanderscope [options]
    python -m vanderscope [options]
"""

import argparse
import sys

import pygame

from vanderscope.app import AppConfig, VanDerPolApp
from vanderscope.core.events import GateConfig
from vanderscope.core.notes import NoteEvent
from vanderscope.core.oscillator import VARIANTS
from vanderscope.render.canvas import CanvasConfig
from vanderscope.render.loop import LoopConfig
from vanderscope.simulation import InitialConditions

# Window size presets
PROFILES = {
    "low": {"width": 800, "height": 600},
    "medium": {"width": 1280, "height": 720},
    "high": {"width": 1920, "height": 1080},
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vanderscope",
        description="Van der Pol oscillator phase plane with zero-crossing notes",
    )

    # Initial conditions; kept as text so junk falls back to defaults
    parser.add_argument("--x", type=str, default="0.1", help="Initial x (default: 0.1)")
    parser.add_argument("--y", type=str, default="0.0", help="Initial y (default: 0.0)")
    parser.add_argument("--mu", type=str, default="1.5", help="Base damping mu (default: 1.5)")

    # Window
    parser.add_argument(
        "-p", "--profile", type=str, default="medium",
        choices=list(PROFILES),
        help="Window size (low: 800x600, medium: 1280x720, high: 1920x1080)",
    )
    parser.add_argument("--width", type=int, default=None, help="Window width (overrides profile)")
    parser.add_argument("--height", type=int, default=None, help="Window height (overrides profile)")
    parser.add_argument("-f", "--fps", type=int, default=60, help="Frame rate cap (default: 60)")

    # Dynamics
    parser.add_argument(
        "--variant", type=str, default="canonical",
        choices=list(VARIANTS),
        help="mu modulation preset (default: canonical)",
    )
    parser.add_argument(
        "--max-step", type=float, default=0.005,
        help="Largest Euler step in seconds (default: 0.005)",
    )
    parser.add_argument(
        "--min-interval", type=float, default=0.15,
        help="Base minimum time between notes in seconds (default: 0.15)",
    )

    # Output
    parser.add_argument("--no-audio", action="store_true", help="Start with audio off")
    parser.add_argument("--no-axes", action="store_true", help="Hide axes and tick labels")
    parser.add_argument("--no-hud", action="store_true", help="Hide the x/y readout")

    # Limits
    parser.add_argument(
        "--max-duration", type=float, default=None,
        help="Exit after N seconds",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print every note")

    return parser


def config_from_args(args: argparse.Namespace) -> AppConfig:
    p_cfg = PROFILES[args.profile]
    simple = args.variant == "simple"

    canvas = CanvasConfig(
        width=args.width or p_cfg["width"],
        height=args.height or p_cfg["height"],
        show_axes=not (args.no_axes or simple),
        show_hud=not (args.no_hud or simple),
    )

    return AppConfig(
        canvas=canvas,
        loop=LoopConfig(max_step=args.max_step),
        params=VARIANTS[args.variant],
        gate=GateConfig(min_interval=args.min_interval),
        initial=InitialConditions.parse(args.x, args.y, args.mu),
        fps=args.fps,
        audio_enabled=not args.no_audio,
        max_duration=args.max_duration,
    )


def _print_note(note: NoteEvent):
    print(
        f"[vanderscope] note {note.pitch} ({note.frequency:.1f} Hz) vel {note.velocity:.0f}",
        flush=True,
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    ic = config.initial
    print(f"Van der Pol: x0={ic.x:g} y0={ic.y:g} mu={ic.mu_base:g} ({args.variant})")
    print(f"  Window: {config.canvas.width}x{config.canvas.height} @ {config.fps}fps")
    print(f"  Audio: {'on' if config.audio_enabled else 'off'}", flush=True)

    app = None
    try:
        app = VanDerPolApp(config, on_note=_print_note if args.verbose else None)
        frames = app.run()
    except pygame.error as e:
        hint = "" if args.no_audio else " (try --no-audio)"
        print(f"Error: {e}{hint}", file=sys.stderr)
        sys.exit(1)
    finally:
        if app is not None:
            app.tone.output.close()

    print(f"\nDone! {frames} frames, {app.sim.notes_fired} notes")


if __name__ == "__main__":
    main()
