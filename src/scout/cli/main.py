"""
CLI to triage a tip from the command line.

Usage:
    scout --text "Call +1 212-555-1234, ask for Jane Doe"
    scout --file tip.json --pretty
    scout --text "..." --image ./photo.jpg --image "data:image/png;base64,..."
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from scout import __version__
from scout.config import ScoutSettings, load_settings
from scout.core.scout import Scout
from scout.errors import ScoutError
from scout.imaging.loader import describe_source
from scout.schemas.base import RedactionMode

logger = logging.getLogger("scout.cli")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="scout",
        description="Extract identifiers, redact PII and fingerprint images from a tip",
    )

    parser.add_argument(
        "-t",
        "--text",
        help="Tip text to scan",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        help="JSON tip file with tip_text, images and mode keys",
    )
    parser.add_argument(
        "-i",
        "--image",
        action="append",
        default=[],
        help="Image to fingerprint: local path, data URI or URL (repeatable)",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=[m.value for m in RedactionMode],
        help="Redaction mode (default: SCOUT_REDACTION_MODE or strict)",
    )
    parser.add_argument(
        "--show-entities",
        action="store_true",
        help="Include the unredacted entity set in the output",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty print JSON output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def read_tip_file(path: Path) -> Dict[str, Any]:
    """Load a tip JSON file; only known keys are kept."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Tip file must contain a JSON object")
    images = data.get("images") or []
    if isinstance(images, str):
        images = [images]
    return {
        "tip_text": data.get("tip_text") or "",
        "images": list(images),
        "mode": data.get("mode"),
    }


def resolve_image_source(value):
    """Local files become Paths; data URIs and URLs pass through as strings."""
    if not isinstance(value, str):
        return value
    candidate = Path(value).expanduser()
    if "://" not in value and not value.startswith("data:") and candidate.exists():
        return candidate
    return value


def run(args: argparse.Namespace, settings: Optional[ScoutSettings] = None) -> Dict[str, Any]:
    tip_text = args.text or ""
    images: List[str] = list(args.image)
    mode: Optional[str] = args.mode

    if args.file:
        tip = read_tip_file(args.file)
        tip_text = tip_text or tip["tip_text"]
        images = images or tip["images"]
        mode = mode or tip["mode"]

    scout = Scout(settings=settings or load_settings())

    scan_result = scout.scan_text(tip_text, mode=mode)
    output = scan_result.to_dict(include_entities=args.show_entities)

    fingerprints = []
    for image in images:
        source = resolve_image_source(image)
        phash = scout.fingerprint(source)
        fingerprints.append({"source": describe_source(source), **phash.to_dict()})
    output["images"] = fingerprints

    return output


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.text and not args.file and not args.image:
        parser.error("No input provided. Use --text, --image or --file.")

    if args.file and not args.file.is_file():
        print(f"Error: Tip file not found: {args.file}", file=sys.stderr)
        sys.exit(1)

    try:
        settings = load_settings()
        logging.basicConfig(
            level="DEBUG" if args.verbose else settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
        output = run(args, settings)
    except (ScoutError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    indent = 2 if args.pretty else None
    rendered = json.dumps(output, indent=indent, ensure_ascii=False)

    if args.output:
        args.output.write_text(rendered + "\n", encoding="utf-8")
        logger.info("Wrote triage output to %s", args.output)
    else:
        print(rendered)


if __name__ == "__main__":
    main()
