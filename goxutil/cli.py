"""Command line dump of .gox files."""

import argparse
import logging
import sys
from typing import Optional

from goxutil.errors import ParseError
from goxutil.goxfile import Chunk, GoxFile, LayerChunk
from goxutil.options import STRICT, DecodeOptions

logger = logging.getLogger("goxutil")


def setup_logging(log_level: int = logging.INFO) -> None:
    """Send goxutil logging to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(log_level)


def describe_chunk(chunk: Chunk) -> str:
    """One line summary of a chunk."""
    name = type(chunk).__name__
    if isinstance(chunk, LayerChunk):
        keys = ", ".join(sorted(chunk.dict))
        return f"{name}: {len(chunk.blocks)} blocks, dict [{keys}]"
    if hasattr(chunk, "data"):
        return f"{name}: {len(chunk.data)} bytes"
    return f"{name}: dict [{', '.join(sorted(chunk.dict))}]"


def dump(path: str, options: DecodeOptions) -> None:
    """Decode the file at `path` and print its chunks."""
    gox_file = GoxFile.read(path, options)

    print(f"{path}: version {gox_file.version}, {len(gox_file.chunks)} chunks")
    for i, chunk in enumerate(gox_file.chunks):
        print(f"  [{i}] {describe_chunk(chunk)}")
    if gox_file.remaining:
        print(f"  {len(gox_file.remaining)} trailing bytes ignored")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Dump the contents of .gox files")
    parser.add_argument("files", nargs="+", help=".gox files to read")
    parser.add_argument(
        "--strict-size",
        action="store_true",
        help="Decode chunk bodies inside their declared size",
    )
    parser.add_argument(
        "--verify-checksum",
        action="store_true",
        help="Check each chunk's trailing crc32",
    )
    parser.add_argument(
        "--reject-trailing",
        action="store_true",
        help="Fail on bytes after the last recognized chunk",
    )
    parser.add_argument(
        "--strict", action="store_true", help="Enable every strict check"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.strict:
        options = STRICT
    else:
        options = DecodeOptions(
            strict_size=args.strict_size,
            verify_checksum=args.verify_checksum,
            reject_trailing_data=args.reject_trailing,
        )

    status = 0
    for path in args.files:
        try:
            dump(path, options)
        except (OSError, ParseError) as e:
            logger.error(f"Failed to read {path}: {e}")
            status = 1

    return status


if __name__ == "__main__":
    sys.exit(main())
