"""
Run with: python -m voronoiblend
"""
import sys

from voronoiblend.main import main

if __name__ == "__main__":
    sys.exit(main())
