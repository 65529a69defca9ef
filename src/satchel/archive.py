"""Compressed image archive writer."""

import logging
import zlib
from pathlib import Path

import aiofiles

from .core.daemon_client import ImageExportStream
from .exceptions import ArchiveWriteError, CompressionError, FileCreateError

logger = logging.getLogger(__name__)

# wbits=31 makes zlib emit a gzip container instead of a raw zlib stream
GZIP_WBITS = 16 + zlib.MAX_WBITS
BEST_COMPRESSION = 9


async def archive_images(stream: ImageExportStream, output_path: Path) -> int:
    """Write an image export stream to a gzip archive.

    The output file is created or truncated. The export stream and the file
    are both closed before this returns, whether or not the copy succeeds.
    A partially written file is left in place on failure.

    Args:
        stream: Export stream from the daemon
        output_path: Archive path to write

    Returns:
        Number of compressed bytes written

    Raises:
        FileCreateError: If the output file cannot be created
        CompressionError: If the encoder fails
        ArchiveWriteError: If writing to disk fails
        SaveError: If reading the export stream fails
    """
    try:
        try:
            out_file = await aiofiles.open(output_path, "wb")
        except OSError as e:
            raise FileCreateError(
                f"Error creating image file {output_path}: {e}"
            ) from e

        try:
            written = await _copy_compressed(stream, out_file, output_path)
        finally:
            # Closing flushes buffered data, so it can hit a full disk too
            try:
                await out_file.close()
            except OSError as e:
                raise ArchiveWriteError(
                    f"Error writing archive {output_path}: {e}"
                ) from e
        return written
    finally:
        await stream.close()


async def _copy_compressed(stream, out_file, output_path: Path) -> int:
    compressor = zlib.compressobj(BEST_COMPRESSION, zlib.DEFLATED, GZIP_WBITS)
    written = 0

    async for chunk in stream.iter_chunks():
        try:
            data = compressor.compress(chunk)
        except zlib.error as e:
            raise CompressionError(
                f"Error compressing archive {output_path}: {e}"
            ) from e
        written += await _write(out_file, data, output_path)

    try:
        data = compressor.flush()
    except zlib.error as e:
        raise CompressionError(f"Error compressing archive {output_path}: {e}") from e
    written += await _write(out_file, data, output_path)

    logger.debug("Wrote %d compressed bytes to %s", written, output_path)
    return written


async def _write(out_file, data: bytes, output_path: Path) -> int:
    if not data:
        return 0
    try:
        await out_file.write(data)
    except OSError as e:
        raise ArchiveWriteError(f"Error writing archive {output_path}: {e}") from e
    return len(data)
