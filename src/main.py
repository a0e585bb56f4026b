# src/main.py - v1
"""CLI entry point: render and validate commands.

Usage:
    claudia-messages render --model <name> --user <text> [options]
    claudia-messages validate <file|-> [--kind request|response]

JSON documents are written to stdout, logs to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from pathlib import Path

from claudia.config.settings import ConfigurationError, Settings, load_settings
from claudia.logging.context import set_command_context, set_request_context
from claudia.logging.logger import setup_logging
from claudia.messages.builder import RequestBuilder
from claudia.messages.codec import available_kinds, deserialize, to_json
from claudia.messages.errors import SchemaError
from claudia.messages.models import Roles, media_type_for
from claudia.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    _setup_logging(settings, args.verbose)
    set_command_context(args.command)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except SchemaError as exc:
        logger.error("%s", exc)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="claudia-messages",
        description=f"claudia v{__version__}: Messages API request/response schema",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- render ---
    p_render = subparsers.add_parser(
        "render", help="Build a request from flags and print its JSON",
    )
    p_render.add_argument("--model", default=None, help="Model name (default: CLAUDIA_DEFAULT_MODEL)")
    p_render.add_argument(
        "--max-tokens", type=int, default=None,
        help="Maximum output tokens (default: CLAUDIA_DEFAULT_MAX_TOKENS)",
    )
    p_render.add_argument("--system", default=None, help="System prompt")
    p_render.add_argument(
        "--user", dest="turns", action="append",
        type=lambda text: (Roles.USER, text),
        help="User turn text (repeatable, order preserved)",
    )
    p_render.add_argument(
        "--assistant", dest="turns", action="append",
        type=lambda text: (Roles.ASSISTANT, text),
        help="Assistant turn text (repeatable, order preserved)",
    )
    p_render.add_argument(
        "--image", action="append", type=Path, default=[],
        help="Image file attached to the last user turn (repeatable)",
    )
    p_render.add_argument(
        "--stop", action="append", default=None,
        help="Stop sequence (repeatable)",
    )
    p_render.add_argument("--stream", action="store_true", default=None, help="Request streaming")
    p_render.add_argument("--temperature", type=float, default=None)
    p_render.add_argument("--top-p", type=float, default=None)
    p_render.add_argument("--top-k", type=int, default=None)
    p_render.add_argument("--user-id", default=None, help="Opaque end-user identifier")
    p_render.add_argument("--indent", type=int, default=None, help="Pretty-print indent")
    p_render.set_defaults(func=_cmd_render)

    # --- validate ---
    p_validate = subparsers.add_parser(
        "validate", help="Parse a JSON document and print its canonical form",
    )
    p_validate.add_argument("file", help="Path to JSON document, or - for stdin")
    p_validate.add_argument(
        "--kind", choices=available_kinds(), default="request",
        help="Document kind (default: request)",
    )
    p_validate.add_argument("--indent", type=int, default=None, help="Pretty-print indent")
    p_validate.set_defaults(func=_cmd_validate)

    return parser


def _setup_logging(settings: Settings, verbose: bool) -> None:
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


def _cmd_render(args: argparse.Namespace, settings: Settings) -> int:
    """Assemble a Request from command-line flags."""
    builder = RequestBuilder(settings)
    if args.model is not None:
        builder.model(args.model)
    if args.max_tokens is not None:
        builder.max_tokens(args.max_tokens)
    if args.system is not None:
        builder.system(args.system)

    turns = args.turns or []
    last_user = max((i for i, (role, _) in enumerate(turns) if role == Roles.USER), default=-1)
    if args.image and last_user < 0:
        logger.error("--image requires at least one --user turn")
        return 1

    for i, (role, text) in enumerate(turns):
        if role == Roles.USER:
            builder.user(text)
            if i == last_user:
                for path in args.image:
                    _attach_image(builder, path)
        else:
            builder.assistant(text)

    if args.stop:
        builder.stop_sequences(*args.stop)
    if args.stream:
        builder.stream()
    if args.temperature is not None:
        builder.temperature(args.temperature)
    if args.top_p is not None:
        builder.top_p(args.top_p)
    if args.top_k is not None:
        builder.top_k(args.top_k)
    if args.user_id is not None:
        builder.user_id(args.user_id)

    request = builder.build()
    set_request_context(uuid.uuid4().hex[:12], request.model)
    logger.info("Rendered request with %d message(s)", len(request.messages))
    print(to_json(request, indent=args.indent))
    return 0


def _attach_image(builder: RequestBuilder, path: Path) -> None:
    media_type = media_type_for(path)
    if media_type is None:
        raise ValueError(f"Unsupported image type: {path.suffix!r} ({path})")
    builder.image(media_type, path.read_bytes())


def _cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    """Deserialize a document and echo it back in canonical form."""
    if args.file == "-":
        text = sys.stdin.read()
    else:
        text = Path(args.file).read_text(encoding="utf-8")

    model = deserialize(text, kind=args.kind)
    logger.info("Valid %s document", args.kind)
    print(to_json(model, indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
