import os
from typing import Optional, List


def getenv_str_list(name: str, default: Optional[List[str]] = None) -> List[str]:
    val = os.getenv(name)
    if val and val.strip():
        return [x.strip() for x in val.split(",") if x.strip()]
    return list(default or [])
