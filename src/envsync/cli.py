from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from envsync import __version__
from envsync.config import Settings, get_settings
from envsync.domain.errors import EnvSyncException
from envsync.infrastructure.terminal_prompt import TerminalPrompt
from envsync.repositories.env_file_repository import EnvFileRepository
from envsync.services.template_service import TemplateService
from envsync.services.update_service import UpdateService
from envsync.utils.logging import configure_logging, get_module_logger

logger = get_module_logger()

EXIT_IO_ERROR = 74
EXIT_INTERRUPTED = 130


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="envsync", description="Keep an env file in sync with its template")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    update = subparsers.add_parser("update", help="Read settings from INPUT and update OUTPUT")
    update.add_argument(
        "input",
        nargs="?",
        default=settings.update.input_path,
        help=f"File to load as input (default: {settings.update.input_path})",
    )
    update.add_argument(
        "output",
        nargs="?",
        default=settings.update.output_path,
        help=f"File to load as output (default: {settings.update.output_path})",
    )
    update.add_argument(
        "-e", "--only-empty",
        action="store_true",
        default=settings.update.only_empty,
        help="Skip already filled variables",
    )
    update.add_argument(
        "-f", "--only-filled",
        action="store_true",
        default=settings.update.only_filled,
        help="Skip unfilled variables",
    )
    update.add_argument(
        "--dry-run",
        action="store_true",
        default=settings.update.dry_run,
        help="Print the result to stdout instead of writing OUTPUT",
    )

    template = subparsers.add_parser("template", help="Write a value-free template of SOURCE to TARGET")
    template.add_argument(
        "source",
        nargs="?",
        default=settings.template.source_path,
        help=f"Env file holding real values (default: {settings.template.source_path})",
    )
    template.add_argument(
        "target",
        nargs="?",
        default=settings.template.target_path,
        help=f"Template file to write (default: {settings.template.target_path})",
    )
    template.add_argument(
        "--placeholder",
        default=settings.template.placeholder,
        help=f"Value written for every key (default: {settings.template.placeholder})",
    )
    template.add_argument("--dry-run", action="store_true", help="Print the template instead of writing it")

    return parser


def _run_update(args: argparse.Namespace, settings: Settings, prompt: TerminalPrompt) -> int:
    config = settings.update.model_copy(update={
        "input_path": args.input,
        "output_path": args.output,
        "only_empty": args.only_empty,
        "only_filled": args.only_filled,
        "dry_run": args.dry_run,
    })
    service = UpdateService(config, EnvFileRepository(settings.storage))
    result = service.run(prompt)
    if result.written:
        print(f"Updated {result.output_path} from {config.input_path}", file=sys.stderr)
    else:
        sys.stdout.write(result.content)
    return 0


def _run_template(args: argparse.Namespace, settings: Settings) -> int:
    config = settings.template.model_copy(update={
        "source_path": args.source,
        "target_path": args.target,
        "placeholder": args.placeholder,
    })
    service = TemplateService(config, EnvFileRepository(settings.storage))
    result = service.sync(dry_run=args.dry_run)
    if result.written:
        print(f"Wrote {result.target_path} ({len(result.keys)} keys)", file=sys.stderr)
    else:
        sys.stdout.write(result.content)
    return 0


def main(argv: Optional[List[str]] = None, prompt: Optional[TerminalPrompt] = None) -> int:
    settings = get_settings()
    configure_logging()

    parser = build_parser(settings)
    args = parser.parse_args(argv)

    try:
        if args.command == "update":
            return _run_update(args, settings, prompt or TerminalPrompt())
        return _run_template(args, settings)
    except EnvSyncException as exc:
        logger.debug("Command failed", command=args.command, **exc.to_dict())
        print(f"envsync: {exc.message}", file=sys.stderr)
        return exc.exit_code
    except OSError as exc:
        print(f"envsync: {exc}", file=sys.stderr)
        return EXIT_IO_ERROR
    except KeyboardInterrupt:
        print("\nenvsync: interrupted, nothing written", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    raise SystemExit(main())
