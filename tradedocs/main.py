import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from tradedocs.config.settings import Settings
from tradedocs.extraction.catalog import supported_document_types
from tradedocs.logging.logger import Log
from tradedocs.processor.processor import build_processor


def log_progress(step: int, total_steps: int, name: str, description: str) -> None:
    Log.info(f"Step {step}/{total_steps} - {name}: {description}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tradedocs",
        description="Extract structured data from an import document PDF.",
    )
    parser.add_argument("pdf", type=Path, help="Path to the PDF document")
    parser.add_argument(
        "--type",
        dest="document_type",
        required=True,
        help=(
            "Document type: "
            f"{', '.join(supported_document_types())}; "
            "other values use the generic single-step extraction"
        ),
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the JSON result (default: OUTPUT_DIR setting)",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Abort the run after this many seconds",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse arguments -> build dependencies -> process one document."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        processor = build_processor(
            settings,
            on_progress=log_progress,
            output_dir=args.output_dir,
            deadline_seconds=args.deadline,
        )
        context = processor.process(args.pdf, args.document_type)
    except KeyboardInterrupt:
        Log.warning("Interrupted by user")
        return 130
    except Exception as exc:
        Log.error(f"Extraction failed: {exc}")
        return 1

    Log.info(f"Result written to {context.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
