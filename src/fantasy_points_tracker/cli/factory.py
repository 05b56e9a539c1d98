from collections.abc import Iterator
from contextlib import contextmanager

from fantasy_points_tracker.config import create_config, load_settings
from fantasy_points_tracker.services.container import ServiceContainer


@contextmanager
def build_container(config_path: str = "fpt.yaml", *, db_path: str | None = None) -> Iterator[ServiceContainer]:
    overrides: dict[str, object] = {}
    if db_path is not None:
        overrides["database"] = {"path": db_path}
    settings = load_settings(create_config(yaml_path=config_path, overrides=overrides))
    container = ServiceContainer(settings)
    try:
        yield container
    finally:
        container.close()
