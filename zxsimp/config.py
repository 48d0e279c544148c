"""
Environment based configuration.

Values are read from the process environment, after loading a ``.env`` file
from the working directory if there is one:

- ``ZXSIMP_RULES``: comma separated rule names for :func:`zxsimp.simplify.simplify`
- ``ZXSIMP_MAX_ITERATIONS``: cap on the number of passes per rule
- ``ZXSIMP_QUIET``: ``0``/``false`` to print progress
- ``NEO4J_URI``, ``NEO4J_USER``, ``NEO4J_PASSWORD``, ``NEO4J_DATABASE``: diagram store
"""

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_RULES = ("spider_fusion", "self_loop_removal", "bialgebra")
DEFAULT_MAX_ITERATIONS = 1000


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


@dataclass
class SimplifyConfig:
    rules: List[str]
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    quiet: bool = True

    @classmethod
    def from_env(cls) -> "SimplifyConfig":
        raw_rules = os.getenv("ZXSIMP_RULES", "")
        rules = [r.strip().lower() for r in raw_rules.split(",") if r.strip()]
        raw_max = os.getenv("ZXSIMP_MAX_ITERATIONS", "").strip()
        try:
            max_iterations = int(raw_max) if raw_max else DEFAULT_MAX_ITERATIONS
        except ValueError:
            raise ValueError(f"ZXSIMP_MAX_ITERATIONS must be an integer, got '{raw_max}'")
        if max_iterations < 1:
            raise ValueError("ZXSIMP_MAX_ITERATIONS must be at least 1")
        return cls(
            rules=rules or list(DEFAULT_RULES),
            max_iterations=max_iterations,
            quiet=_env_bool("ZXSIMP_QUIET", True),
        )


@dataclass
class Neo4jConfig:
    uri: str
    user: str
    password: str
    database: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Neo4jConfig":
        return cls(
            uri=os.getenv("NEO4J_URI", ""),
            user=os.getenv("NEO4J_USER", ""),
            password=os.getenv("NEO4J_PASSWORD", ""),
            database=os.getenv("NEO4J_DATABASE") or None,
        )

    def is_complete(self) -> bool:
        return bool(self.uri and self.user and self.password)
