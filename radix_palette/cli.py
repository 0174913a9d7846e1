"""
Command line entry: generate one palette, or run the HTTP API.
"""

import argparse
import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path

from .config import load_settings
from .errors import PaletteError
from .harmony import Scheme
from .service import PaletteService


def write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


async def generate_async(args: argparse.Namespace) -> int:
    settings = load_settings()
    settings = replace(
        settings,
        debug_browser=args.debug or settings.debug_browser,
        parallel=settings.parallel and not args.sequential,
        keep_browser_alive=False,
    )
    if args.timeout is not None:
        settings = replace(settings, request_timeout_ms=int(args.timeout * 1000))

    service = PaletteService(settings)
    print(f"🎨 Generating {args.scheme} palette for {args.hex}...")
    try:
        palette = await service.generate_palette(args.hex, Scheme.parse(args.scheme), harmonized=args.harmonized)
    except PaletteError as exc:
        print(f"❌ {exc}")
        return 1
    finally:
        await service.shutdown()

    data = palette.to_dict()
    if args.output:
        output_path = Path(args.output)
        write_json(output_path, data)
        print(f"Palette: {output_path}")
    else:
        print(json.dumps(data, indent=2))

    if palette.degraded:
        print(f"⚠️ Fallback steps used: {palette.fallback_steps}")
    print("\n✅ Palette complete")
    return 0


def serve(args: argparse.Namespace) -> int:
    import uvicorn

    from .server import create_app

    settings = load_settings()
    port = args.port or settings.port
    print(f"🎨 Playwright Palette API running on port {port}")
    print(f"Health check: http://localhost:{port}/health")
    uvicorn.run(create_app(settings), host=args.host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate Radix color scales from a seed color")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING)")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate one palette and print it as JSON")
    gen.add_argument("hex", help="Seed color, #RGB or #RRGGBB")
    gen.add_argument(
        "--scheme",
        default=Scheme.ANALOGOUS.value,
        choices=[s.value for s in Scheme],
        help="Harmony scheme used to derive gray and background seeds",
    )
    gen.add_argument(
        "--harmonized",
        action="store_true",
        help="Use the scheme-adjusted accent instead of the seed color itself",
    )
    gen.add_argument("--sequential", action="store_true", help="Extract light then dark instead of both at once")
    gen.add_argument("--debug", action="store_true", help="Show the browser window and slow it down")
    gen.add_argument("--timeout", type=float, help="Overall timeout in seconds")
    gen.add_argument("--output", "-o", help="Write the palette JSON to this file")

    srv = sub.add_parser("serve", help="Run the HTTP API")
    srv.add_argument("--host", default="0.0.0.0", help="Bind address")
    srv.add_argument("--port", type=int, help="Port (defaults to $PORT or 3000)")
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command == "serve":
        raise SystemExit(serve(args))
    raise SystemExit(asyncio.run(generate_async(args)))


if __name__ == "__main__":
    main()
