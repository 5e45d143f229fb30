"""Start the PlantStation dashboard from a source checkout."""

import sys

if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")

from plantstation.server import main

if __name__ == "__main__":
    raise SystemExit(main())
