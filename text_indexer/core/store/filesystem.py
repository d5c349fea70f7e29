import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Union

from text_indexer.core.contract import Index

logger = logging.getLogger(__name__)


def _tmp_path(target: Path) -> Path:
    return target.with_name(target.name + ".tmp")


def write_json_atomic(path: Union[str, Path], payload: Dict[str, Any]) -> Path:
    """Write ``payload`` next to ``path`` and rename it into place.

    The destination is either the previous file or the complete new one,
    never a partial write. On failure the temporary file is removed and the
    error is re-raised.
    """
    target = Path(path)
    tmp = _tmp_path(target)
    try:
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp, target)
    except Exception:
        try:
            if tmp.exists():
                tmp.unlink()
        except OSError as cleanup_exc:
            logger.warning("Failed to remove temporary file %s: %s", tmp, cleanup_exc)
        raise
    return target


def save_index(path: Union[str, Path], index: Index) -> Path:
    target = write_json_atomic(path, index.to_dict())
    logger.debug("Wrote %d items to %s", len(index.items), target)
    return target


def load_index(path: Union[str, Path]) -> Dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)
