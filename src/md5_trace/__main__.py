"""Main entry point for the md5_trace package."""
from md5_trace.cli import cli


def main():
    """Main entry point function."""
    cli()


if __name__ == "__main__":
    main()
