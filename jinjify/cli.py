from __future__ import annotations

import argparse
import logging
import sys

from .config import TransformOptions, load_options
from .errors import CompileError
from .transform import transform_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jinjify", description="Precompile a template into a CommonJS module.")
    parser.add_argument("input", type=str, nargs="?", default="-", help="Template file path or '-' for stdin")
    parser.add_argument("-o", "--output", type=str, default="-", help="Output file path or '-' for stdout")
    parser.add_argument("-c", "--config", type=str, default=None, help="YAML file with transform options")
    parser.add_argument("--path", type=str, default=None, help="Path used for extension matching and the template id")
    parser.add_argument("--relative-path", action="store_true", help="Register the template under __filename at load time")
    parser.add_argument("--no-minify", action="store_true", help="Disable markup minification")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def build_options(args: argparse.Namespace) -> TransformOptions:
    options = load_options(args.config) if args.config else TransformOptions()
    data = options.model_dump(exclude_unset=True)
    if args.relative_path:
        data["relative_path"] = True
    if args.no_minify:
        data["minify"] = False
    return TransformOptions.model_validate(data)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    path = args.path or args.input
    if path == "-":
        parser.error("--path is required when reading from stdin")

    try:
        options = build_options(args)
    except (OSError, ValueError) as e:
        logger.error("Invalid options: %s", e)
        return 2

    src = dst = None
    try:
        src = sys.stdin.buffer if args.input == "-" else open(args.input, "rb")
        dst = sys.stdout.buffer if args.output == "-" else open(args.output, "wb")
        transform_file(path, options).process_stream(src, dst)
        return 0
    except CompileError:
        return 1
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 2
    finally:
        if src is not None and args.input != "-":
            src.close()
        if dst is not None and args.output != "-":
            dst.close()


if __name__ == "__main__":
    raise SystemExit(main())
