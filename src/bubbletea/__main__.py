"""Command-line interface."""
from bubbletea.main import main

if __name__ == "__main__":
    main()
