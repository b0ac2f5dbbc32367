"""
Pipeline Orchestrator — File-level subtitle workflows.

Stages for every run:
  1. Read the XML document(s)
  2. Extract cues (per-document tick rate)
  3. Align (timeline merge or paired match)
  4. Write SRT and/or TXT output
"""

import re
import time
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Union

from .aligner import build_strategy
from .extraction import TrackFormat, extract_cues, read_document
from .models import AlignmentResult
from .timeline import TimelineStrategy
from .writer import SubtitleWriter

logger = logging.getLogger(__name__)

DEFAULT_EPISODE = "ep1"

FormatLike = Union[str, TrackFormat]


@dataclass
class BatchReport:
    """Outcome of a batch run, keyed by episode name."""
    succeeded: Dict[str, AlignmentResult] = field(default_factory=dict)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)


class SubtitlePipeline:
    """
    Converts and combines subtitle documents.

    Usage:
        config = load_config()
        pipeline = SubtitlePipeline(config)
        pipeline.combine("ep1-kr.xml", "ep1-ch.xml", "output")
    """

    def __init__(self, config):
        self.config = config
        # Fails fast on bad alignment options, before any file is read
        self.strategy = build_strategy(config.align)
        self.writer = SubtitleWriter()

    def convert(self, xml_path: Path, output_dir: Path,
                track_format: FormatLike = TrackFormat.FORMAT_A) -> AlignmentResult:
        """
        Convert a single document to <stem>.srt and <stem>.txt.

        Args:
            xml_path: Input XML document.
            output_dir: Directory for the output files.
            track_format: Layout of the document.

        Returns:
            AlignmentResult for the converted track.
        """
        xml_path = Path(xml_path)
        cues = extract_cues(read_document(xml_path), track_format)

        # A single track is a timeline merge with nothing to interleave
        result = TimelineStrategy().align(cues, [])

        for diag in result.skipped:
            logger.warning(f"{xml_path.stem}: skipped {diag}")

        self._write_outputs(result, Path(output_dir), xml_path.stem)
        logger.info(f"Converted {xml_path} ({len(result.entries)} entries)")
        return result

    def combine(self, xml_path1: Path, xml_path2: Path, output_dir: Path,
                format1: FormatLike = TrackFormat.FORMAT_A,
                format2: FormatLike = TrackFormat.FORMAT_B,
                name: str = None) -> AlignmentResult:
        """
        Combine two documents into <name>.srt and <name>.txt.

        The first document is the primary track: with the paired strategy
        it supplies the timing and first line of every entry.
        """
        xml_path1 = Path(xml_path1)
        xml_path2 = Path(xml_path2)
        name = name or self.config.output.name

        # Both inputs must exist before any work starts
        doc1 = read_document(xml_path1)
        doc2 = read_document(xml_path2)

        start_time = time.monotonic()
        cues1 = extract_cues(doc1, format1)
        cues2 = extract_cues(doc2, format2)
        result = self.strategy.align(cues1, cues2)

        for diag in result.skipped:
            logger.warning(f"{name}: skipped {diag}")

        self._write_outputs(result, Path(output_dir), name)

        elapsed = time.monotonic() - start_time
        logger.info(
            f"Combined {xml_path1.name} + {xml_path2.name} → {name} "
            f"({len(result.entries)} entries, {self.strategy.name}, {elapsed:.2f}s)"
        )

        preview = self.writer.write_preview(result.entries, max_entries=5)
        if preview:
            logger.debug(f"Preview:\n{preview}")

        return result

    def process_default(self, work_dir: Path, output_dir: Path) -> AlignmentResult:
        """
        Process ep1-kr.xml and ep1-ch.xml from work_dir.

        Writes each language on its own and the combined episode.
        """
        work_dir = Path(work_dir)
        output_dir = Path(output_dir)
        kr_path = work_dir / f"{DEFAULT_EPISODE}-{TrackFormat.FORMAT_A.value}.xml"
        ch_path = work_dir / f"{DEFAULT_EPISODE}-{TrackFormat.FORMAT_B.value}.xml"

        for path in (kr_path, ch_path):
            if not path.exists():
                raise FileNotFoundError(f"Subtitle file not found: {path}")

        self.convert(kr_path, output_dir, TrackFormat.FORMAT_A)
        self.convert(ch_path, output_dir, TrackFormat.FORMAT_B)
        return self.combine(
            kr_path, ch_path, output_dir,
            TrackFormat.FORMAT_A, TrackFormat.FORMAT_B,
            name=f"{DEFAULT_EPISODE}-combined",
        )

    def batch(self, input_dir: Path, output_dir: Path,
              suffix1: str = None, suffix2: str = None,
              format1: FormatLike = None, format2: FormatLike = None) -> BatchReport:
        """
        Combine every <name>-<suffix1>.xml / <name>-<suffix2>.xml pair.

        Suffixes only select files; the document layouts come from
        format1/format2 (input.language1/2 by default) and are checked
        once, before any pair runs.

        Pairs are independent: a failing pair is logged and recorded in
        the report while the others proceed. In parallel mode the pairs
        run on a thread pool.
        """
        suffix1 = suffix1 or self.config.input.suffix1
        suffix2 = suffix2 or self.config.input.suffix2
        format1 = TrackFormat.parse(format1 or self.config.input.language1)
        format2 = TrackFormat.parse(format2 or self.config.input.language2)
        pairs = self.discover_pairs(Path(input_dir), suffix1, suffix2)
        report = BatchReport()

        if not pairs:
            logger.warning(f"No '-{suffix1}.xml' / '-{suffix2}.xml' pairs in {input_dir}")
            return report

        logger.info(f"Batch: {len(pairs)} episode pairs ({self.config.threading_mode})")

        def run(episode: str, first: Path, second: Path) -> AlignmentResult:
            return self.combine(first, second, output_dir, format1, format2,
                                name=f"{episode}-combined")

        if self.config.threading_mode == "parallel":
            workers = max(1, self.config.threading.max_workers)
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(run, episode, first, second): episode
                    for episode, first, second in pairs
                }
                for future in as_completed(futures):
                    self._record(report, futures[future], future)
        else:
            for episode, first, second in pairs:
                try:
                    report.succeeded[episode] = run(episode, first, second)
                except (OSError, ValueError) as e:
                    logger.error(f"{episode}: {e}")
                    report.failed[episode] = str(e)

        logger.info(
            f"Batch complete: {len(report.succeeded)} succeeded, "
            f"{len(report.failed)} failed"
        )
        return report

    @staticmethod
    def discover_pairs(input_dir: Path, suffix1: str,
                       suffix2: str) -> List[Tuple[str, Path, Path]]:
        """Find (episode, first, second) document pairs in a directory."""
        if not input_dir.is_dir():
            raise FileNotFoundError(f"Input directory not found: {input_dir}")

        pattern = re.compile(rf"^(.+)-{re.escape(suffix1)}\.xml$")
        pairs = []
        for first in sorted(input_dir.glob(f"*-{suffix1}.xml")):
            match = pattern.match(first.name)
            if not match:
                continue
            episode = match.group(1)
            second = input_dir / f"{episode}-{suffix2}.xml"
            if second.exists():
                pairs.append((episode, first, second))
            else:
                logger.warning(f"{episode}: no matching {second.name}, skipping")
        return pairs

    # ── Utilities ──

    @staticmethod
    def _record(report: BatchReport, episode: str, future):
        try:
            report.succeeded[episode] = future.result()
        except (OSError, ValueError) as e:
            logger.error(f"{episode}: {e}")
            report.failed[episode] = str(e)

    def _write_outputs(self, result: AlignmentResult, output_dir: Path, name: str):
        """Write the enabled output formats for one result."""
        if self.config.output.write_srt:
            self.writer.write_srt(result.entries, output_dir / f"{name}.srt")
        if self.config.output.write_txt:
            self.writer.write_txt(result.entries, output_dir / f"{name}.txt")
