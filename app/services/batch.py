"""Batch processing of uploaded resumes.

Each document is decoded and run through the extraction engine in a worker
thread. Documents are independent: a failure is recorded against that one
file and the rest of the batch carries on.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from app.config import settings
from app.models.schemas import ExtractedRecord
from app.services.extractor import extract_resume_data
from app.services.parser import parse_resume, resolve_file_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncomingFile:
    file_name: str
    content: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class ProcessedFile:
    """Outcome for one file: either ``record`` or ``error`` is set."""

    file: IncomingFile
    file_type: str | None = None
    record: ExtractedRecord | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def process_document(file: IncomingFile, max_size: int | None = None) -> tuple[str, ExtractedRecord]:
    """Decode one file and extract its record.

    Returns:
        The canonical content type and the extracted record.

    Raises:
        ValueError: If the file is empty, too large, of an unsupported type,
            unreadable, or contains no text.
    """
    if not file.content:
        raise ValueError("Empty file")

    max_size = settings.max_file_size_bytes if max_size is None else max_size
    if len(file.content) > max_size:
        raise ValueError(f"File exceeds the maximum size of {max_size} bytes")

    file_type = resolve_file_type(file.file_name, file.content_type)
    raw_text = parse_resume(file.content, file.file_name, file_type)
    if not raw_text.strip():
        raise ValueError("No text could be extracted from the file")

    return file_type, extract_resume_data(raw_text)


async def process_batch(
    files: Sequence[IncomingFile],
    concurrency: int | None = None,
    max_size: int | None = None,
) -> list[ProcessedFile]:
    """Process many files concurrently, isolating per-file failures.

    At most *concurrency* files are decoded at once. Results come back in the
    same order as *files*.
    """
    semaphore = asyncio.Semaphore(concurrency or settings.batch_concurrency)

    async def process_one(file: IncomingFile) -> ProcessedFile:
        async with semaphore:
            try:
                file_type, record = await asyncio.to_thread(process_document, file, max_size)
            except Exception as exc:
                logger.error("Failed to process file '%s': %s", file.file_name, exc)
                return ProcessedFile(file=file, error=str(exc))
        return ProcessedFile(file=file, file_type=file_type, record=record)

    results = await asyncio.gather(*(process_one(f) for f in files))

    failed = sum(not r.ok for r in results)
    logger.info(
        "Processed batch of %d file(s): %d succeeded, %d failed",
        len(results),
        len(results) - failed,
        failed,
    )
    return list(results)
