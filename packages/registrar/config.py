"""Runtime configuration: where the data files live.

Resolution order for the data directory:

1. the explicit ``data_dir`` argument (CLI ``--data-dir``),
2. the ``REGISTRAR_DATA_DIR`` environment variable (``.env`` is loaded by the
   CLI before this runs),
3. the current working directory.
"""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    data_dir: Path
    mountains_file: str = "MountainList.csv"
    registrations_file: str = "registrations.dat"
    menus_file: str = "FeastMenu.csv"
    customers_file: str = "customers.dat"
    orders_file: str = "feast_orders.dat"

    @field_validator("data_dir")
    @classmethod
    def _absolute(cls, v: Path) -> Path:
        return v.expanduser().resolve()

    @property
    def mountains_path(self) -> Path:
        return self.data_dir / self.mountains_file

    @property
    def registrations_path(self) -> Path:
        return self.data_dir / self.registrations_file

    @property
    def menus_path(self) -> Path:
        return self.data_dir / self.menus_file

    @property
    def customers_path(self) -> Path:
        return self.data_dir / self.customers_file

    @property
    def orders_path(self) -> Path:
        return self.data_dir / self.orders_file


def load_settings(data_dir: str | PathLike[str] | None = None) -> Settings:
    if data_dir is not None:
        return Settings(data_dir=Path(data_dir))
    env = os.getenv("REGISTRAR_DATA_DIR")
    if env and env.strip():
        return Settings(data_dir=Path(env.strip()))
    return Settings(data_dir=Path.cwd())


__all__ = ["Settings", "load_settings"]
