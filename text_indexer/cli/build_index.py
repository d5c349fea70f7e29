import sys
from typing import Optional, Sequence

from text_indexer.indexing import build_index


def main(argv: Optional[Sequence[str]] = None) -> None:
    build_index.main(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    main()
