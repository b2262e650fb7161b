"""Main entry point for the Screenkit CLI."""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from screenkit.cli import __version__
from screenkit.kernel.actions import RecordingCapabilities
from screenkit.kernel.composer import compose
from screenkit.kernel.config import settings
from screenkit.kernel.errors import ConfigError
from screenkit.kernel.html import render_html
from screenkit.kernel.models import load_screen, parse_screen
from screenkit.kernel.types import PLATFORMS, RenderContext, RenderOptions

logger = logging.getLogger("screenkit.cli")


def print_help():
    """Print help message."""
    print(f"""
Screenkit CLI v{__version__}

Usage:
  screenkit [options] <command> FILE [KEY]

Commands:
  render FILE        Compose a screen document and print it
  check FILE         Load leniently and list every problem found
  dispatch FILE KEY  Dry-run the CTA rendered under KEY and print the
                     capability calls it makes

Options:
  --platform P       web | ios | android (default: {settings.DEFAULT_PLATFORM})
  --width PX         Viewport width in px (default: {settings.VIEWPORT_WIDTH_PX})
  --format F         html | json (render only, default: html)
  --strict           Reject the whole document on any error
  -o, --output PATH  Write render output to PATH instead of stdout
  -h, --help         Show this help
  -v, --version      Show version

Environment:
  SCREENKIT_LOG_LEVEL           Logging level (default: WARNING)
  SCREENKIT_LINK_COLOR_POLICY   fixed | priority
  SCREENKIT_LINK_COLOR          Link CTA color when policy is fixed

Examples:
  screenkit render screen.json -o screen.html
  screenkit render screen.json --platform ios --width 390 --format json
  screenkit dispatch screen.json hero_left/contact_am
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None (render, check, dispatch)
        file: str | None
        key: str | None
        platform: str
        width: int
        format: str
        strict: bool
        output: str | None
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "file": None,
        "key": None,
        "platform": settings.DEFAULT_PLATFORM,
        "width": settings.VIEWPORT_WIDTH_PX,
        "format": "html",
        "strict": False,
        "output": None,
        "show_help": False,
        "show_version": False,
    }

    def value_for(flag: str, i: int) -> str:
        if i + 1 < len(args):
            return args[i + 1]
        print(f"Error: {flag} requires a value")
        sys.exit(1)

    positional: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "--platform":
            result["platform"] = value_for(arg, i)
            if result["platform"] not in PLATFORMS:
                print(f"Error: --platform must be one of {', '.join(PLATFORMS)}")
                sys.exit(1)
            i += 1
        elif arg == "--width":
            raw = value_for(arg, i)
            try:
                result["width"] = int(raw)
            except ValueError:
                print(f"Error: --width must be an integer, got {raw!r}")
                sys.exit(1)
            i += 1
        elif arg == "--format":
            result["format"] = value_for(arg, i)
            if result["format"] not in ("html", "json"):
                print("Error: --format must be html or json")
                sys.exit(1)
            i += 1
        elif arg in ("--output", "-o"):
            result["output"] = value_for(arg, i)
            i += 1
        elif arg == "--strict":
            result["strict"] = True
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'screenkit --help' for usage.")
            sys.exit(1)
        else:
            positional.append(arg)

        i += 1

    if positional:
        result["command"] = positional[0]
    if len(positional) > 1:
        result["file"] = positional[1]
    if len(positional) > 2:
        result["key"] = positional[2]

    return result


def load_document(path: str, strict: bool):
    """Read and load a screen document. Returns (screen, load errors)."""
    text = Path(path).read_text(encoding="utf-8")
    if strict:
        return parse_screen(text), []
    loaded = load_screen(text)
    return loaded.screen, loaded.errors


def run_render(args: dict) -> int:
    screen, load_errors = load_document(args["file"], args["strict"])
    context = RenderContext(platform=args["platform"], viewport_width_px=args["width"])
    tree = compose(screen, context, RenderOptions.from_settings(settings))

    if args["format"] == "json":
        output = json.dumps(tree.to_dict(), indent=2, ensure_ascii=False)
    else:
        output = render_html(tree)

    if args["output"]:
        Path(args["output"]).write_text(output, encoding="utf-8")
        print(f"Wrote {args['output']}")
    else:
        print(output)

    for err in [*load_errors, *tree.errors]:
        print(f"  Warning: {err}", file=sys.stderr)
    return 0


def run_check(args: dict) -> int:
    screen, load_errors = load_document(args["file"], strict=False)
    context = RenderContext(platform=args["platform"], viewport_width_px=args["width"])
    tree = compose(screen, context, RenderOptions.from_settings(settings))

    problems = [*load_errors, *tree.errors]
    for err in problems:
        print(f"  Error: {err}")
    for warning in tree.warnings:
        print(f"  Note: {warning}")

    if problems:
        print(f"{len(problems)} problem(s) in {args['file']}")
        return 1
    print(f"{args['file']}: OK ({len(tree.section_order())} section(s) rendered)")
    return 0


def run_dispatch(args: dict) -> int:
    if not args["key"]:
        print("Error: dispatch requires a CTA key (e.g. hero_left/contact_am)")
        return 1

    screen, _ = load_document(args["file"], args["strict"])
    context = RenderContext(platform=args["platform"], viewport_width_px=args["width"])
    tree = compose(screen, context, RenderOptions.from_settings(settings))

    if args["key"] not in tree.bindings:
        print(f"No CTA rendered under '{args['key']}'. Available:")
        for key in tree.bindings:
            print(f"  {key}")
        return 1

    caps = RecordingCapabilities()
    result = tree.activate(args["key"], caps)
    for name, call_args in caps.calls:
        rendered = ", ".join(repr(a) for a in call_args)
        print(f"  {name}({rendered})")
    if result.error:
        print(f"  Error: {result.error}")
        return 1
    return 0


COMMANDS = {
    "render": run_render,
    "check": run_check,
    "dispatch": run_dispatch,
}


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    # Handle help and version first
    if args["show_version"]:
        print(f"screenkit {__version__}")
        return

    if args["show_help"] or args["command"] is None:
        print_help()
        return

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    runner = COMMANDS.get(args["command"])
    if runner is None:
        print(f"Unknown command: {args['command']}")
        print("Run 'screenkit --help' for usage.")
        sys.exit(1)

    if not args["file"]:
        print(f"Error: {args['command']} requires a FILE")
        sys.exit(1)

    try:
        code = runner(args)
    except FileNotFoundError:
        print(f"Error: {args['file']} not found")
        sys.exit(1)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
