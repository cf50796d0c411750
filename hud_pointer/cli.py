"""
Command-line entry point for the HUD pointer.
"""
import argparse
import asyncio
import sys

from dotenv import load_dotenv

from .config import configure_logging, load_config
from .errors import HudPointerError


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hand-tracking HUD pointer")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--no-camera", action="store_true", help="Drive the pointer with the mouse only")
    parser.add_argument("--log-level", help="Override the configured log level")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    """Entry point for the application."""
    load_dotenv()
    args = parse_args(argv)

    try:
        config = load_config(args.config)
        configure_logging(args.log_level or config.logging.level)
    except HudPointerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Imported here so config errors are reported even without the camera extra
    from .main import HudApp

    app = HudApp(config=config, use_camera=not args.no_camera)
    try:
        await app.run()
    except asyncio.CancelledError:
        # Ctrl-C cancels the main task; run() has already released the camera
        app.quit()
        raise
    return 0


def cli(argv=None) -> None:
    try:
        code = asyncio.run(main(argv))
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    cli()
