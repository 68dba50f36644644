"""
Common utilities for tgmarkup.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def debugDump(title: str, text: str) -> str:
    """
    Get short description of a string for logs: title, length and first 60 characters.

    Example:
        >>> debugDump("MarkdownV2", "*bold*")
        '[MarkdownV2] len=6 head="*bold*"'
    """
    head = json.dumps(text[:60], ensure_ascii=False)
    return f"[{title}] len={len(text)} head={head}"


def jsonDumps(data: Any, compact: Optional[bool] = None, **kwargs) -> str:
    dumpKwargs = {
        "ensure_ascii": False,
        "default": str,
        "sort_keys": True,
    }

    if compact is None:
        # Pretty-printed output was asked for if indent is passed
        compact = "indent" not in kwargs

    if compact:
        dumpKwargs["separators"] = (",", ":")
    dumpKwargs.update(kwargs)
    return json.dumps(data, **dumpKwargs)


def load_dotenv(path: str = ".env", populateEnv: bool = True) -> Dict[str, str]:
    """
    Simple dotenv file loader.
    Just read file line by line and put key-value pairs into dictionary.
    Missing file is not an error, empty dictionary is returned.

    Args:
        path: Path to .env file (default ".env")
        populateEnv: Whether to populate environment variables (default True)

    Returns:
        Dictionary of key-value pairs from .env file
    """
    ret: Dict[str, str] = {}
    envFile = Path(path)
    if not envFile.is_file():
        logger.debug(f"No dotenv file at {path}")
        return ret

    with open(envFile, "rt", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            key, sep, value = line.partition("=")
            if not sep:
                continue
            ret[key.strip()] = value.strip().strip('"')

    if populateEnv:
        for k, v in ret.items():
            os.environ.setdefault(k, v)
    return ret
