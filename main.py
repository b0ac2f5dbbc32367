"""
Bilingual Subtitle Aligner — CLI Entry Point

Usage:
    python main.py convert ep1-kr.xml -l kr
    python main.py combine ep1-kr.xml ep1-ch.xml -n ep1-combined
    python main.py combine ep1-kr.xml ep1-ch.xml --strategy timeline
    python main.py default
    python main.py batch episodes/ --parallel
"""

import sys
import argparse
import logging
from pathlib import Path

from config import load_config
from subalign.errors import InvalidConfiguration
from subalign.orchestrator import SubtitlePipeline


def setup_logging(level: str = "INFO", log_file: str = None):
    """Configure logging for the application."""
    log_format = (
        "%(asctime)s | %(levelname)-7s | %(name)-20s | %(message)s"
    )
    date_format = "%H:%M:%S"

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        datefmt=date_format,
        handlers=handlers
    )


def _add_common_options(parser: argparse.ArgumentParser):
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output directory (default: from config.yaml, usually './output')"
    )
    parser.add_argument(
        "--strategy",
        default=None,
        choices=["timeline", "paired"],
        help="Alignment strategy for combined output (default: paired)"
    )
    parser.add_argument(
        "--max-gap",
        type=float,
        default=None,
        help="Paired mode: maximum start-time gap in seconds (default: 1.0)"
    )
    parser.add_argument(
        "--search-window",
        type=int,
        default=None,
        help="Paired mode: secondary cues considered per primary cue (default: 10)"
    )
    parser.add_argument(
        "--backtrack",
        type=int,
        default=None,
        help="Paired mode: cues the search may step back from the cursor (default: 2)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to custom config.yaml file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log warnings and errors"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subalign",
        description="Convert XML subtitle files to SRT and TXT, and combine "
                    "two languages into one bilingual subtitle.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py convert ep1-kr.xml -l kr             # Single file → SRT + TXT
  python main.py combine ep1-kr.xml ep1-ch.xml        # Korean + Chinese
  python main.py combine a.xml b.xml -n ep2 -o out    # Custom name and directory
  python main.py combine a.xml b.xml --max-gap 0.5    # Stricter pairing
  python main.py default                              # ep1-kr.xml + ep1-ch.xml
  python main.py batch episodes/ --parallel           # Every episode pair
        """
    )
    sub = parser.add_subparsers(dest="command")

    convert = sub.add_parser("convert", help="Convert a single XML file to SRT and TXT")
    convert.add_argument("xml_file", type=Path, help="Path to the XML file")
    convert.add_argument(
        "-l", "--language",
        default="kr",
        choices=["kr", "ch"],
        help="Language/layout of the XML file (default: kr)"
    )
    _add_common_options(convert)

    combine = sub.add_parser("combine", help="Combine two XML files into SRT and TXT")
    combine.add_argument("xml_file1", type=Path, help="Path to the first (primary) XML file")
    combine.add_argument("xml_file2", type=Path, help="Path to the second XML file")
    combine.add_argument(
        "-l1", "--language1",
        default=None,
        choices=["kr", "ch"],
        help="Language of the first XML file (default: kr)"
    )
    combine.add_argument(
        "-l2", "--language2",
        default=None,
        choices=["kr", "ch"],
        help="Language of the second XML file (default: ch)"
    )
    combine.add_argument(
        "-n", "--name",
        default=None,
        help="Base name for the output files (default: combined)"
    )
    _add_common_options(combine)

    default = sub.add_parser("default", help="Process ep1-kr.xml and ep1-ch.xml in the current directory")
    _add_common_options(default)

    batch = sub.add_parser("batch", help="Combine every <name>-kr.xml / <name>-ch.xml pair in a directory")
    batch.add_argument("input_dir", type=Path, help="Directory holding the XML files")
    batch.add_argument(
        "--parallel",
        action="store_true",
        help="Process episode pairs concurrently"
    )
    batch.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads in parallel mode (default: 4)"
    )
    _add_common_options(batch)

    return parser


def run(args) -> int:
    """Execute a parsed command. Returns the process exit code."""
    config = load_config(args.config)
    config.update_from_args(args)

    log_level = "DEBUG" if args.verbose else ("WARNING" if args.quiet else config.logging.level)
    setup_logging(level=log_level, log_file=config.logging.file)

    output_dir = Path(config.output.directory)
    pipeline = SubtitlePipeline(config)

    if args.command == "convert":
        if not args.xml_file.exists():
            print(f"Error: File {args.xml_file} does not exist.")
            return 1
        pipeline.convert(args.xml_file, output_dir, args.language)
        print(f"Successfully converted {args.xml_file} to SRT and TXT formats.")

    elif args.command == "combine":
        for path in (args.xml_file1, args.xml_file2):
            if not path.exists():
                print(f"Error: File {path} does not exist.")
                return 1
        result = pipeline.combine(
            args.xml_file1, args.xml_file2, output_dir,
            args.language1 or config.input.language1,
            args.language2 or config.input.language2,
            name=args.name,
        )
        print(
            f"Successfully combined {args.xml_file1} and {args.xml_file2} "
            f"into SRT and TXT formats ({len(result.entries)} entries)."
        )
        if result.skipped:
            print(f"  [WARN] {len(result.skipped)} cues skipped (invalid times)")

    elif args.command == "default":
        pipeline.process_default(Path.cwd(), output_dir)
        print("All conversions completed successfully!")

    elif args.command == "batch":
        report = pipeline.batch(args.input_dir, output_dir)
        print(f"Processed {report.total} episode pairs: "
              f"{len(report.succeeded)} succeeded, {len(report.failed)} failed.")
        for episode, reason in sorted(report.failed.items()):
            print(f"  [ERROR] {episode}: {reason}")
        if report.failed:
            return 1

    return 0


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    try:
        sys.exit(run(args))
    except KeyboardInterrupt:
        print("\n\n  [WARN] Processing interrupted by user.")
        sys.exit(130)
    except FileNotFoundError as e:
        print(f"\n  [ERROR] File error: {e}")
        sys.exit(1)
    except InvalidConfiguration as e:
        print(f"\n  [ERROR] Invalid configuration: {e}")
        sys.exit(1)
    except Exception as e:
        logging.exception("Unexpected error")
        print(f"\n  [ERROR] Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
