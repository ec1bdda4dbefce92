"""
Runtime defaults, read from the environment via pydantic-settings.

Every value can be overridden with a ``CPU_SCHEDULER_``-prefixed environment
variable (e.g. ``CPU_SCHEDULER_DEFAULT_QUANTUM=4``) or a ``.env`` file in the
working directory. CLI flags take precedence over these. ``AGING_INTERVAL`` is
also the default interval of ``effective_priority`` and ``schedule_priority``.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Policies ────────────────────────────────────────────────
    DEFAULT_QUANTUM: int = 2           # round-robin time slice
    AGING_INTERVAL: int = 5            # waiting time units per priority step

    # ── Workload ────────────────────────────────────────────────
    DEFAULT_WORKLOAD: Optional[str] = None  # None means the built-in set

    # ── App ─────────────────────────────────────────────────────
    LOG_LEVEL: str = "WARNING"

    model_config = {
        "env_prefix": "CPU_SCHEDULER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
