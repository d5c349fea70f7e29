#!/usr/bin/env python
"""Build a JSON index of the text files under a directory.

Walk -> filter by suffix -> bounded read -> summarize -> one item per file.
A failure while indexing one file is recorded on that file's item and never
stops the walk; only failing to write the index aborts the run.
"""

import argparse
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set

import yaml
from pydantic import ValidationError
from tqdm import tqdm

from text_indexer.core.contract import Index, IndexItem
from text_indexer.core.errors import ParseError, SummarizationError
from text_indexer.core.store.filesystem import save_index
from text_indexer.indexing.core.config import (
    DEFAULT_INCLUDE,
    DEFAULT_MAX_BYTES,
    DEFAULT_TIMEOUT,
    PROVIDERS,
    IndexerConfig,
    load_yaml_config,
)
from text_indexer.indexing.core.llm_factory import get_summarizer
from text_indexer.indexing.summarizer.base import BaseSummarizer
from text_indexer.indexing.utils.file import (
    has_suffix,
    is_special_file,
    normalize_suffixes,
    to_relative_posix,
    walk_dir,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def _mtime_iso(st_mtime: float) -> str:
    return datetime.fromtimestamp(st_mtime, tz=timezone.utc).isoformat()


def read_preview(path: Path, max_bytes: int) -> str:
    """First ``max_bytes`` bytes of ``path`` as text; the rest is ignored."""
    with path.open("rb") as f:
        data = f.read(max_bytes)
    return data.decode("utf-8", errors="replace")


def index_file(
    path: Path,
    root: Path,
    summarizer: BaseSummarizer,
    model: str,
    *,
    max_bytes: int = DEFAULT_MAX_BYTES,
    timeout: float = DEFAULT_TIMEOUT,
) -> IndexItem:
    item = IndexItem(path=to_relative_posix(path, root))

    try:
        st = path.stat()
    except OSError as exc:
        return item.fail(str(exc))
    item.size = st.st_size
    item.mod_time = _mtime_iso(st.st_mtime)

    try:
        preview = read_preview(path, max_bytes)
    except OSError as exc:
        return item.fail(str(exc))

    # fresh deadline for every file
    try:
        summary, keywords = summarizer.summarize(model, item.path, preview, timeout=timeout)
    except SummarizationError as exc:
        if isinstance(exc, ParseError) and exc.raw:
            logger.debug("Unparsed reply for %s: %.500s", item.path, exc.raw)
        return item.fail(str(exc))

    item.summary = summary
    item.keywords = list(keywords)
    return item


def collect_items(
    root: Path,
    summarizer: BaseSummarizer,
    model: str,
    *,
    suffixes: Set[str],
    max_bytes: int = DEFAULT_MAX_BYTES,
    timeout: float = DEFAULT_TIMEOUT,
    show_progress: bool = False,
) -> List[IndexItem]:
    items: List[IndexItem] = []
    progress = tqdm(desc="Indexing", unit="file", disable=not show_progress)

    def _visit(path: Path, is_dir: bool, error: Optional[OSError]) -> None:
        if error is not None:
            logger.debug("Skipping %s: %s", path, error)
            return
        if is_dir or not has_suffix(path, suffixes):
            return
        if is_special_file(path):
            logger.debug("Skipping %s: not a regular file", path)
            return
        item = index_file(path, root, summarizer, model, max_bytes=max_bytes, timeout=timeout)
        if item.error is not None:
            logger.warning("Failed to index %s: %s", item.path, item.error)
        items.append(item)
        progress.update(1)

    try:
        walk_dir(root, _visit)
    finally:
        progress.close()
    return items


def build_index(config: IndexerConfig, summarizer: Optional[BaseSummarizer] = None) -> Index:
    root = Path(os.path.abspath(config.dir))
    if summarizer is None:
        summarizer = get_summarizer(config)
    model = summarizer.resolve_model(config.model)
    logger.info("Indexing %s with %s (model=%s)", root, summarizer.get_metadata(), model)

    items = collect_items(
        root,
        summarizer,
        model,
        suffixes=normalize_suffixes(config.include),
        max_bytes=config.max_bytes,
        timeout=config.timeout,
        show_progress=config.show_progress,
    )
    return Index(dir=str(root), generated=_utc_now_iso(), model=model, items=items)


def run(config: IndexerConfig, summarizer: Optional[BaseSummarizer] = None) -> Index:
    index = build_index(config, summarizer)
    save_index(config.out, index)
    logger.info(
        "Indexed %d files under %s (%d failed)", len(index.items), index.dir, index.error_count
    )
    return index


def _silence_noisy_loggers() -> None:
    for name in ("urllib3", "requests"):
        logging.getLogger(name).setLevel(logging.WARNING)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config", type=str, default="")
    pre_args, _ = pre_parser.parse_known_args(argv)

    config_data: Dict[str, Any] = {}
    if pre_args.config:
        config_data = load_yaml_config(pre_args.config)

    parser = argparse.ArgumentParser(description="Build a JSON index of text files with LLM summaries.")
    parser.add_argument("--config", type=str, default=pre_args.config, help="Path to YAML config file")
    parser.add_argument("--dir", type=str, default=".", help="Directory to index.")
    parser.add_argument("--out", type=str, default="index.json", help="Output JSON file.")
    parser.add_argument(
        "--max", dest="max_bytes", type=int, default=DEFAULT_MAX_BYTES, help="Max bytes read per file."
    )
    parser.add_argument(
        "--include", type=str, default=DEFAULT_INCLUDE, help="Comma-separated text file extensions."
    )
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_TIMEOUT, help="Per-file LLM timeout in seconds."
    )

    # None means "fall back to the environment"
    parser.add_argument("--provider", type=str, default=None, choices=PROVIDERS)
    parser.add_argument("--model", type=str, default=None)
    parser.add_argument("--api_key", type=str, default=None)
    parser.add_argument("--openai_base", type=str, default=None)
    parser.add_argument("--ollama_base", type=str, default=None)
    parser.add_argument("--temperature", type=float, default=None)

    parser.add_argument("--show_progress", action="store_true", help="Show a progress bar.")
    parser.add_argument("--log_level", type=str, default="INFO")

    valid_keys = {action.dest for action in parser._actions}
    unknown_keys = [k for k in config_data.keys() if k not in valid_keys]
    if unknown_keys:
        logger.warning("Unknown config keys ignored: %s", sorted(unknown_keys))

    config_filtered = {k: v for k, v in config_data.items() if k in valid_keys}
    if config_filtered:
        parser.set_defaults(**config_filtered)

    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace, environ=None) -> IndexerConfig:
    overrides = {k: v for k, v in vars(args).items() if k not in ("config", "help")}
    return IndexerConfig.from_env(environ, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> None:
    try:
        args = parse_args(argv)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error("Invalid --config file: %s", exc)
        sys.exit(2)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    _silence_noisy_loggers()

    try:
        config = config_from_args(args)
    except ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(2)

    try:
        index = run(config)
    except OSError as exc:
        logger.error("write error: %s", exc)
        sys.exit(1)

    print(f"OK -> {config.out} items: {len(index.items)}", flush=True)


if __name__ == "__main__":
    main()
