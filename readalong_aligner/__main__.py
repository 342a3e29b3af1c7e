"""Package entry point for ``python -m readalong_aligner``."""

from readalong_aligner.cli import main

if __name__ == "__main__":
    main()
