"""CLI entrypoints for readmegen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .errors import ReadmeGenError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .stats import format_bytes, language_stats, largest_files


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readmegen",
        description="Generate README files for GitHub repositories using a hosted language model.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .readmegen.yml or the directory containing it (defaults to the current directory).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Load a repository and generate its README.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument("url", help="GitHub repository URL.")
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("README.md"),
        help="File (or directory) to write the README to (defaults to ./README.md).",
    )
    generate_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the generated README instead of writing it.",
    )

    stats_parser = subparsers.add_parser(
        "stats",
        help="Load a repository and print language and file size statistics.",
    )
    _add_verbose_option(stats_parser, suppress_default=True)
    stats_parser.add_argument("url", help="GitHub repository URL.")
    stats_parser.add_argument(
        "--by-size",
        action="store_true",
        help="Order languages by total bytes instead of file count.",
    )

    history_parser = subparsers.add_parser(
        "history",
        help="Show or edit recently requested repository URLs.",
    )
    _add_verbose_option(history_parser, suppress_default=True)
    history_group = history_parser.add_mutually_exclusive_group()
    history_group.add_argument("--clear", action="store_true", help="Forget all URLs.")
    history_group.add_argument("--remove", metavar="URL", help="Forget a single URL.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for readmegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port, config=config)
        return

    orchestrator = Orchestrator(config)

    if args.command == "generate":
        try:
            output = None if args.stdout else args.output
            doc = orchestrator.run(args.url, output=output)
        except (ReadmeGenError, OSError) as exc:
            parser.exit(1, f"readmegen generate failed: {exc}\nRun with --verbose for more details.\n")
        if args.stdout:
            sys.stdout.write(doc.content)
            if not doc.content.endswith("\n"):
                sys.stdout.write("\n")
        else:
            print(f"README written to {_relativize(_output_path(args.output))}")
    elif args.command == "stats":
        try:
            repository = orchestrator.load(args.url)
        except ReadmeGenError as exc:
            parser.exit(1, f"readmegen stats failed: {exc}\n")
        print(f"{repository.name}: {len(repository.files)} entries")
        print("Languages:")
        for stat in language_stats(repository.files, by_size=args.by_size):
            print(
                f"  {stat.language:<12} {stat.count:>5} files  "
                f"{stat.count_share * 100:5.1f}%  {format_bytes(stat.bytes)}"
            )
        print("Largest files:")
        for item in largest_files(repository.files):
            print(f"  {item.path}  {format_bytes(item.size, precision=2)}")
    elif args.command == "history":
        history = orchestrator.history
        if args.clear:
            history.clear()
            print("History cleared")
        elif args.remove:
            history.remove(args.remove)
            print(f"Removed {args.remove}")
        elif not history.entries:
            print("No repositories requested yet")
        else:
            for url in history.entries:
                print(url)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _output_path(output: Path) -> Path:
    return output / "README.md" if output.is_dir() else output


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
