from __future__ import annotations

OK = 0
ERR_USAGE = 2
ERR_CONFIG = 10
ERR_PREREQ = 11
ERR_VCS = 12
ERR_BUILD = 13
ERR_ARTIFACT = 14
ERR_INTERNAL = 99
