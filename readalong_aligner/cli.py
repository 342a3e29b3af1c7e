"""Command-line interface for the read-along aligner.

WHY: Alignments are normally built inside the TTS job handler, but
re-running one by hand (to debug a bad highlight, or to regenerate a
snapshot after changing the text) should not require the job system.
The CLI runs the same pipeline over files on disk.

HOW: argparse takes the original text file and the transcription JSON
(a provider ``verbose_json`` response, or a bare list of segments).
The text is tokenized once to enforce the word bound, then the pipeline
runs and every selected formatter's output is saved next to the text
file (or to --output-dir). Status messages go to stderr.

RULES:
- Positional arguments: text file (UTF-8), transcription JSON file
- --formats: comma-separated formatter keys (default: READALONG_DEFAULT_FORMATS
  or all registered)
- --max-words: reject texts with more source words than this
  (default: READALONG_MAX_SOURCE_WORDS)
- Output naming: {stem}{suffix}, numeric suffix for conflicts
  (-alignment-2.json)
- Errors print "Error: ..." to stderr and exit with status 1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from readalong_aligner.api.models import AsrSegment, TranscriptionResponse
from readalong_aligner.config import DEFAULT_FORMATS, LOG_LEVEL, load_max_source_words
from readalong_aligner.core.pipeline import build_alignment_result
from readalong_aligner.core.tokenizer import tokenize_original
from readalong_aligner.formatters import FORMATTERS
from readalong_aligner.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. article-alignment.json)
    - Conflict: insert a counter before the extension, starting at 2
      (e.g. article-alignment-2.json)
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    if isinstance(output.content, bytes):
        path.write_bytes(output.content)
    else:
        path.write_text(output.content, encoding="utf-8")
    return path


def load_segments(data: Any) -> List[AsrSegment]:
    """Accept either a full transcription response or a bare segment list.

    Raises:
        TranscriptionFormatError: If a response object has no segments.
    """
    if isinstance(data, list):
        return [AsrSegment.from_dict(s) for s in data if isinstance(s, dict)]
    return TranscriptionResponse.from_dict(data).segments


def _select_formats(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(FORMATTERS.keys())
    keys = [k.strip() for k in raw.split(",") if k.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise ValueError("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def _run(args: argparse.Namespace) -> None:
    text_path = Path(args.text_file).resolve()
    asr_path = Path(args.transcription_file).resolve()

    for path in (text_path, asr_path):
        if not path.is_file():
            _fail("File not found: {}".format(path))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else text_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    try:
        format_keys = _select_formats(args.formats or DEFAULT_FORMATS)
        max_words = args.max_words if args.max_words is not None else load_max_source_words()

        text = text_path.read_text(encoding="utf-8")
        word_count = len(tokenize_original(text))
        if word_count > max_words:
            raise ValueError(
                "Text has {} words, more than the limit of {}. "
                "Split the text or raise --max-words.".format(word_count, max_words)
            )

        _status("Loading transcription...")
        with open(asr_path, encoding="utf-8") as f:
            segments = load_segments(json.load(f))
        _status("  {} segments".format(len(segments)))

        _status("Aligning {} words...".format(word_count))
        result = build_alignment_result(text, segments)
        timed = sum(1 for w in result.words if w.start is not None)
        _status("  {} of {} words timed, {} chunks".format(timed, len(result.words), len(result.chunks)))

        stem = text_path.stem
        saved: List[Path] = []
        for key in format_keys:
            formatter = FORMATTERS[key]()
            _status("  Running {} formatter...".format(formatter.name))
            for output in formatter.format(result):
                saved_path = _save_output(output, stem, output_dir)
                saved.append(saved_path)
                _status("  Saved: {}".format(saved_path.name))
    except (ValueError, OSError) as e:
        logger.debug("Alignment command failed", exc_info=True)
        _fail(str(e))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved), output_dir))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="readalong_aligner",
        description="Align a time-stamped ASR transcription to its original text "
                    "and write word/chunk timing for read-along highlighting.",
    )

    parser.add_argument(
        "text_file",
        help="Path to the original text (UTF-8) that was synthesized.",
    )

    parser.add_argument(
        "transcription_file",
        help="Path to the transcription JSON (verbose_json response or a list of segments).",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as the text file).",
    )

    parser.add_argument(
        "--max-words",
        type=int,
        default=None,
        help="Reject texts with more words than this (default: READALONG_MAX_SOURCE_WORDS or 20000).",
    )

    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m readalong_aligner``.

    argv=None means use sys.argv; explicit argv is for testing.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _run(args)


if __name__ == "__main__":
    main()
