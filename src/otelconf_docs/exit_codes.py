from __future__ import annotations

OK = 0
ERR_USAGE = 2
ERR_CONFIG = 10
ERR_VALIDATION = 13
ERR_DOCS = 15
ERR_DRIFT = 17
ERR_INTERNAL = 99
