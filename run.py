from __future__ import annotations

from dvdsaver.screensaver import main


if __name__ == "__main__":
    main()
