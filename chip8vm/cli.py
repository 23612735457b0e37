"""Command line entry point: load a ROM and run it."""

import argparse
import sys
import time
from typing import Optional, Sequence

import jax

from chip8vm.constants import CYCLE_DELAY, TIMER_HZ
from chip8vm.emulator import load_rom
from chip8vm.errors import Chip8Error
from chip8vm.logging import LEVELS, get_logger, set_log_level
from chip8vm.machine import Machine, NullDisplay, NullInput
from chip8vm.rendering import COLOR_SCHEMES
from chip8vm.state import create_state

logger = get_logger("chip8vm")


def positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8vm", description="Run a CHIP-8 program."
    )
    parser.add_argument("rom", help="Path to a raw CHIP-8 program image")
    parser.add_argument(
        "--scale", type=int, default=8, help="Window pixels per CHIP-8 pixel"
    )
    parser.add_argument(
        "--color-scheme", choices=COLOR_SCHEMES, default="classic",
        help="Foreground/background colours",
    )
    parser.add_argument(
        "--cycle-delay", type=positive_float, default=CYCLE_DELAY,
        help="Seconds to sleep after each instruction",
    )
    parser.add_argument(
        "--timer-hz", type=positive_float, default=TIMER_HZ,
        help="Delay/sound timer decrement rate",
    )
    parser.add_argument(
        "--modern", action="store_true",
        help="Use SUPER-CHIP readings of BNNN, 8XY6/8XYE and FX55/FX65",
    )
    parser.add_argument("--seed", type=int, default=0, help="Seed for CXNN")
    parser.add_argument(
        "--headless", action="store_true", help="Run without a window or keyboard"
    )
    parser.add_argument(
        "--cycles", type=int, default=None,
        help="Stop after this many cycles (required with --headless)",
    )
    parser.add_argument(
        "--log-level", choices=list(LEVELS), default="INFO", type=str.upper,
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the emulator.

    Returns 0 when the user quits or a headless run finishes, 1 on a fatal
    emulator error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.headless and args.cycles is None:
        parser.error("--headless requires --cycles")

    set_log_level(args.log_level)

    display = None
    try:
        state = create_state(jax.random.PRNGKey(args.seed), modern_mode=args.modern)
        state = load_rom(state, args.rom)

        sleep = time.sleep
        if args.headless:
            display, input_source = NullDisplay(), NullInput()
            sleep = lambda _: None
        else:
            from chip8vm.drivers import PygameDisplay, PygameInput
            display = PygameDisplay(args.scale, args.color_scheme, caption=f"CHIP-8 - {args.rom}")
            input_source = PygameInput()

        machine = Machine(
            state, display, input_source,
            cycle_delay=args.cycle_delay, timer_hz=args.timer_hz, sleep=sleep,
        )
        machine.run(max_cycles=args.cycles, progress=args.headless)
    except Chip8Error as e:
        logger.critical(f"{type(e).__name__}: {e}")
        return 1
    finally:
        if hasattr(display, "close"):
            display.close()

    logger.info("Exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
