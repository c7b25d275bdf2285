from __future__ import annotations

from stackvm.main import main

raise SystemExit(main())
