"""Allow running the CLI with `python -m user_directory.cli`."""

from user_directory.cli.main import main


if __name__ == "__main__":
    main()
