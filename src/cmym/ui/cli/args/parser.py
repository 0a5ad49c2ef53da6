"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from cmym.config.config import Config
from cmym.platform.filesystem import ensure_directory
from cmym.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from cmym.ui.cli.args.options import CLIArgs, ReviewArgs, StagesArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            description="CMYM (Curate My Music) - Review and correct music tags stage by stage.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        review_parser = subparsers.add_parser(
            "review",
            help="Review tag proposals for a music directory",
        )
        _ = review_parser.add_argument(
            "music_path",
            type=str,
            help="Directory holding the music files to review",
            metavar="MUSIC_DIR",
        )
        _ = review_parser.add_argument(
            "--snapshot",
            type=str,
            help="JSON snapshot to resume from (when present) and save to afterwards",
            metavar="FILE",
        )
        _ = review_parser.add_argument(
            "--save",
            action="store_true",
            help="Write the reviewed tags back into the audio files",
        )
        _ = review_parser.add_argument(
            "--rename-root",
            type=str,
            help="Move files under this root using the configured rename template",
            metavar="DIR",
        )
        _ = review_parser.add_argument(
            "--stages",
            type=str,
            help="Comma separated stage ids to run (default: all)",
            metavar="IDS",
        )
        _ = review_parser.add_argument(
            "--offline",
            action="store_true",
            help="Skip the remote cover art search",
        )
        _ = review_parser.add_argument(
            "--preview-file",
            type=str,
            help="Write the cover image being previewed to this file",
            metavar="FILE",
        )
        verbosity = review_parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

        _ = subparsers.add_parser(
            "stages",
            help="List the review stages in order",
        )

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If required paths don't exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command

        if command == "review":
            return ArgumentParser._process_review(parsed_args)

        if command == "stages":
            return StagesArgs(command="stages")

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _process_review(parsed_args: argparse.Namespace) -> ReviewArgs:
        music_path = Path(parsed_args.music_path)
        if not music_path.is_dir():
            logger.error("Music directory does not exist: %s", music_path)
            sys.exit(1)

        rename_root: Path | None = None
        if parsed_args.rename_root:
            rename_root = ensure_directory(Path(parsed_args.rename_root)).resolve()

        stages = (
            [stage.strip() for stage in str(parsed_args.stages).split(",") if stage.strip()]
            if parsed_args.stages
            else None
        )

        return ReviewArgs(
            command="review",
            music_path=music_path.resolve(),
            snapshot=Path(parsed_args.snapshot) if parsed_args.snapshot else None,
            save=parsed_args.save,
            rename_root=rename_root,
            stages=stages or None,
            offline=parsed_args.offline,
            preview_file=Path(parsed_args.preview_file) if parsed_args.preview_file else None,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )
