from __future__ import annotations

from clipnorm.cli.process import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
