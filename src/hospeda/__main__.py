"""Entry point for 'python -m hospeda' command."""

from hospeda.cli import main

if __name__ == "__main__":
    main()
