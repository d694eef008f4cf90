"""JSON persistence for pydantic models (the bridge config file).

Reads turn pydantic and I/O failures into configuration errors with
recovery hints. Writes keep the previous file as ``<name>.bak`` and go
through a temp file that replaces the target in one step.
"""

import logging
import shutil
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from pedalbridge.exceptions import ConfigFileInvalidError, wrap_pydantic_error

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _sibling(path: Path, extension: str) -> Path:
    return path.with_suffix(path.suffix + extension)


class PydanticPersistence:
    """Stateless load/save helpers."""

    @staticmethod
    def load_json(path: Path, model_type: type[M]) -> M:
        """
        Read and validate a model.

        Raises:
            FileNotFoundError: If there is no file at `path`
            ConfigFileInvalidError: If the file is empty, unreadable or not JSON
            ConfigValidationError: If a value fails validation
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileInvalidError(str(path), f"Could not read file: {e}") from e

        if not text.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            model = model_type.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Rejected {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {model_type.__name__} from {path}")
        return model

    @staticmethod
    def save_json(data: BaseModel, path: Path, indent: int = 2, backup: bool = True) -> None:
        """
        Write a model, creating parent directories as needed.

        Raises:
            OSError: If the file can't be written
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        if backup and path.exists():
            shutil.copy2(path, _sibling(path, ".bak"))

        temp_path = _sibling(path, ".tmp")
        try:
            temp_path.write_text(data.model_dump_json(indent=indent), encoding="utf-8")
            temp_path.replace(path)
        except OSError as e:
            logger.error(f"Could not save {path}: {e}")
            raise
        finally:
            temp_path.unlink(missing_ok=True)

        logger.debug(f"Saved {type(data).__name__} to {path}")

    @staticmethod
    def load_json_or_default(path: Path, model_type: type[M]) -> M:
        """
        Like load_json(), but a missing file gives `model_type()`.

        The default is not written back to disk.
        """
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            logger.info(f"No file at {path}, using default {model_type.__name__}")
            return model_type()
