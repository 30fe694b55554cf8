"""File-level driving of the minifier: single files, directories, watch mode."""
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from jsminify.minify import Minifier
from jsminify.stats import MinificationStats

logger = logging.getLogger(__name__)

JS_GLOB = '*.js'
MIN_SUFFIX = '.min'
DEFAULT_INTERVAL = 1.0

# what a single unreadable or unwritable file can raise
FILE_ERRORS = (OSError, UnicodeDecodeError)


def default_output_path(input_path):
    """``dir/app.js`` -> ``dir/app.min.js``"""
    path = Path(input_path)
    return path.with_name(f'{path.stem}{MIN_SUFFIX}{path.suffix}')


def find_sources(directory):
    return sorted(
        path for path in Path(directory).glob(JS_GLOB)
        if path.is_file() and not path.stem.endswith(MIN_SUFFIX)
    )


def process_file(input_path, output_path=None, minifier=None) -> MinificationStats:
    """Minify one file and write the result; I/O errors propagate."""
    start = time.perf_counter()
    minifier = minifier or Minifier()
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path else default_output_path(input_path)

    source = input_path.read_bytes().decode('utf-8')
    minified = minifier.minify(source)
    output_path.write_bytes(minified.encode('utf-8'))

    elapsed = time.perf_counter() - start
    logger.debug("Minified %s -> %s in %.2f ms", input_path, output_path, elapsed * 1000)
    return MinificationStats.measure(input_path, output_path, source, minified, elapsed)


def minify_directory(directory, minifier=None, workers=None):
    """Minify every source file in ``directory`` on a bounded thread pool.

    Yields stats in completion order. A file that fails is logged and
    skipped; the rest of the batch carries on.
    """
    minifier = minifier or Minifier()
    sources = find_sources(directory)
    if not sources:
        logger.warning("No %s files found in %s", JS_GLOB, directory)
        return

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='jsminify') as pool:
        futures = {pool.submit(process_file, path, None, minifier): path for path in sources}
        for future in as_completed(futures):
            try:
                yield future.result()
            except FILE_ERRORS as e:
                logger.error("Error processing %s: %s", futures[future], e)


def poll_changes(directory, minifier, seen):
    """Minify files whose mtime moved past the one recorded in ``seen``.

    ``seen`` maps path -> last processed mtime and is updated in place,
    including for files that failed, so a broken file is not retried until
    it changes again.
    """
    results = []
    for path in find_sources(directory):
        try:
            mtime = path.stat().st_mtime_ns
        except OSError:
            continue
        if path in seen and mtime <= seen[path]:
            continue
        logger.info("Processing modified file: %s", path)
        seen[path] = mtime
        try:
            stats = process_file(path, None, minifier)
        except FILE_ERRORS as e:
            logger.error("Error processing %s: %s", path, e)
            continue
        logger.info(
            "Reduced by %.2f%% (%d → %d bytes)",
            stats.reduction_percentage, stats.original_size, stats.minified_size,
        )
        results.append(stats)
    return results


def watch_directory(directory, minifier=None, interval=DEFAULT_INTERVAL,
                    on_stats=None, cycles=None, sleep=time.sleep):
    """Poll ``directory`` every ``interval`` seconds and re-minify changes.

    Runs forever unless ``cycles`` bounds the number of scans.
    """
    minifier = minifier or Minifier()
    seen = {}
    count = 0
    logger.info("Watching directory: %s", directory)
    while cycles is None or count < cycles:
        for stats in poll_changes(directory, minifier, seen):
            if on_stats is not None:
                on_stats(stats)
        count += 1
        if cycles is None or count < cycles:
            sleep(interval)
