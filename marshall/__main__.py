"""Entry point for marshall."""

from marshall.cli import main

if __name__ == "__main__":
    main()
