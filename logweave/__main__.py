"""
Entry point for python -m logweave
"""

import sys

from logweave.cli import main

if __name__ == '__main__':
    sys.exit(main())
