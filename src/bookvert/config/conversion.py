"""Conversion defaults read from the environment."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

from .env import env_int, env_path

DEFAULT_ARCHIVE_EXTENSION: Final[str] = "cbz"
OUTPUT_DIR_ENV: Final[str] = "BOOKVERT_OUTPUT_DIR"
NUMBER_WIDTH_ENV: Final[str] = "BOOKVERT_NUMBER_WIDTH"


@dataclass(frozen=True, slots=True)
class ConversionConfig:
    output_dir: Path = Path()
    number_width: int = 0
    archive_extension: str = DEFAULT_ARCHIVE_EXTENSION

    def with_overrides(
        self,
        *,
        output_dir: Path | None = None,
        number_width: int | None = None,
    ) -> ConversionConfig:
        """Return a copy where explicitly given values replace the defaults."""

        return replace(
            self,
            output_dir=output_dir if output_dir is not None else self.output_dir,
            number_width=number_width if number_width is not None else self.number_width,
        )

    def target_path(self, output_name: str) -> Path:
        return self.output_dir / f"{output_name}.{self.archive_extension}"


def get_conversion_config() -> ConversionConfig:
    return ConversionConfig(
        output_dir=env_path(OUTPUT_DIR_ENV, default=Path()),
        number_width=env_int(NUMBER_WIDTH_ENV, default=0, minimum=0),
    )
