"""Entry point for running cmdconsole as a module.

This allows running: python -m cmdconsole
"""

from .cli import main

if __name__ == "__main__":
    main()
