"""Entry point for the documentation metadata extractor."""

from docmeta.cli.commands import extract


def main() -> None:
    """Launch the CLI."""
    extract(prog_name="docmeta")


if __name__ == "__main__":
    main()
