"""Run the Gipfelkreuzer CLI with ``python -m gipfelkreuzer``."""

from gipfelkreuzer.cli.main import main

if __name__ == "__main__":
    main()
