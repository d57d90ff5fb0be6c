"""Router configuration.

Frozen after creation; every option is a typed field.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(api_prefix="/v1/", handlers_dir="app/routes")
    """

    # Routing
    api_prefix: str = "/api/"
    handlers_dir: str | Path = "routes"
    handler_suffix: str = ".py"

    # Route cache
    cache_dir: str | Path = "cache"
    cache_filename: str = "routes.json"
    use_cache: bool = True

    # Auth: what to do when a route declares @auth but no predicate is set
    auth_fail_open: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    def __post_init__(self) -> None:
        # Prefix always ends with a slash so "/api/users" strips to "users"
        if not self.api_prefix.endswith("/"):
            object.__setattr__(self, "api_prefix", self.api_prefix + "/")

    @property
    def cache_path(self) -> Path:
        """Location of the cached route table."""
        return Path(self.cache_dir) / self.cache_filename
