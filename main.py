"""CLI entrypoint for the word search solver and generator."""

from wordsearch.cli import main


if __name__ == "__main__":  # pragma: no cover
    main()
