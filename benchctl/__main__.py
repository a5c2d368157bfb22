"""Allow running as: python -m benchctl"""

from benchctl.cli import run

if __name__ == "__main__":
    run()
