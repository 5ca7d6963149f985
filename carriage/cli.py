from __future__ import annotations

import argparse
import sys
import os
from pathlib import Path

from .config import CarriageConfig, merge_config, read_config_file
from .line_buffer import render


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="carriage",
        description=(
            "Show captured output the way a terminal would display it.\n"
            "Lines redrawn with carriage returns (progress bars, spinners)\n"
            "collapse to their final state; everything else is left as is."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="store_true", help="Print version and exit"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a TOML config file (default: $CARRIAGE_CONFIG)",
    )
    parser.add_argument("--encoding", type=str, default=None, help="Encoding of input and output")
    parser.add_argument(
        "--errors",
        type=str,
        default=None,
        help="How to treat undecodable input: replace (default), strict, ignore, ...",
    )

    subparsers = parser.add_subparsers(dest="command")

    ren_p = subparsers.add_parser(
        "render",
        help="Collapse carriage-return overwrites in a log",
        description="Read a raw log and write what a terminal would show.",
    )
    ren_p.add_argument(
        "input", nargs="?", default="-", help="Raw log path, or - for stdin (default)"
    )
    ren_p.add_argument("-o", "--out", type=str, default=None, help="Rendered log path (default: stdout)")

    return parser


def load_config(args: argparse.Namespace) -> CarriageConfig:
    path = args.config or os.environ.get("CARRIAGE_CONFIG")
    return merge_config(
        read_config_file(path),
        os.environ,
        {"encoding": args.encoding, "errors": args.errors},
    )


def read_input(path: str, cfg: CarriageConfig) -> str:
    if path == "-":
        stream = getattr(sys.stdin, "buffer", None)
        if stream is None:
            # Already text (e.g. a replaced sys.stdin)
            return sys.stdin.read()
        data = stream.read()
    else:
        data = Path(path).read_bytes()
    # Decode bytes ourselves; text mode would translate \r into \n
    return data.decode(cfg.encoding, errors=cfg.errors)


def write_output(text: str, path: str | None, cfg: CarriageConfig) -> None:
    data = text.encode(cfg.encoding, errors=cfg.errors)
    if path is None:
        stream = getattr(sys.stdout, "buffer", None)
        if stream is None:
            sys.stdout.write(text)
        else:
            stream.write(data)
        sys.stdout.flush()
        return
    Path(path).write_bytes(data)


def render_command(args: argparse.Namespace, cfg: CarriageConfig) -> int:
    try:
        raw_text = read_input(args.input, cfg)
    except (OSError, UnicodeError) as e:
        print(f"[carriage] render: failed to read input: {e}", file=sys.stderr)
        return 2
    rendered = render(raw_text)
    try:
        write_output(rendered, args.out, cfg)
    except (OSError, UnicodeError) as e:
        print(f"[carriage] render: failed to write output: {e}", file=sys.stderr)
        return 2
    if args.out:
        print(f"[carriage] rendered → {args.out}", file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    # Parse args, but convert argparse-triggered exits (e.g., --help) into return codes
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return int(e.code or 0)

    if args.version:
        from . import __version__

        print(__version__)
        return 0

    if not args.command:
        parser.print_help()
        return 0

    try:
        cfg = load_config(args)
    except (OSError, ValueError, RuntimeError) as e:
        print(f"[carriage] config: {e}", file=sys.stderr)
        return 2

    if args.command == "render":
        return render_command(args, cfg)

    parser.print_help()
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
