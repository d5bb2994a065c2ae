"""
Requirement loading and caching.

This module loads requirement documents from disk and registers them in a
Directory per block class, caching each Directory so that a class is only
read and parsed once.
"""

import logging
from pathlib import Path

import yaml

from ..config import REQUIREMENT_FILE_SUFFIXES, REQUIREMENTS_DIR
from ..errors import RequirementDocumentError
from .directory import Directory
from .parser import RequirementParser

logger = logging.getLogger(__name__)


class RequirementLoader:
    """
    Loads and caches requirement Directories.

    LAYOUT:
    -------
        requirements/
          primary/
            cs-hons-2020.yml        -> block "cs-hons-2020"
            faculty/soc-2020.yml    -> block "faculty/soc-2020"
          second/
          minor/

    The block ID of a document is its path relative to the block class
    directory, without the suffix, always with "/" separators.

    WHY CACHING: Verifying a plan compiles the requested block and every
    block it refers to, so the whole class has to be in memory. Loading it
    once lets the CLI verify several blocks (or list, then verify) without
    re-reading every YAML file.

    Usage:
        loader = RequirementLoader()
        directory = loader.load_directory("primary")
        directory.retrieve_selectable()
    """

    def __init__(self, requirements_dir: Path = REQUIREMENTS_DIR):
        self.requirements_dir = Path(requirements_dir)
        self.parser = RequirementParser()
        self._directories = {}  # Keyed by block class

    def load_document(self, path: Path, block_id: str = "") -> dict:
        """
        Read one YAML requirement document.

        Raises:
            RequirementDocumentError: if the file is not YAML or not a mapping
        """
        with open(path, "r", encoding="utf-8") as f:
            try:
                contents = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise RequirementDocumentError(f"{block_id or path}: invalid YAML: {e}") from e
            except UnicodeDecodeError as e:
                raise RequirementDocumentError(f"{block_id or path}: not UTF-8 text: {e}") from e
        if contents is None:
            raise RequirementDocumentError(f"{block_id or path}: document is empty")
        if not isinstance(contents, dict):
            raise RequirementDocumentError(f"{block_id or path}: document should be a mapping")
        return contents

    def block_id_for(self, block_class: str, path: Path) -> str:
        relative = Path(path).relative_to(self.requirements_dir / block_class)
        return relative.with_suffix("").as_posix()

    def document_paths(self, block_class: str) -> list:
        class_dir = self.requirements_dir / block_class
        if not class_dir.is_dir():
            raise FileNotFoundError(f"No requirements found for block class: {block_class}")
        return sorted(
            path for path in class_dir.rglob("*")
            if path.is_file() and path.suffix in REQUIREMENT_FILE_SUFFIXES
        )

    def load_directory(self, block_class: str) -> Directory:
        """
        Load every document of a block class into a Directory.

        Raises:
            FileNotFoundError: if the block class has no directory
            RequirementDocumentError: if a document is malformed
            DuplicateBlockError: if two documents produce the same block ID
        """
        if block_class not in self._directories:
            directory = Directory()
            paths = self.document_paths(block_class)
            for path in paths:
                block_id = self.block_id_for(block_class, path)
                contents = self.load_document(path, block_id)
                directory.add_block(block_id, self.parser.parse_block(contents, block_id))
            logger.info(
                "Loaded %d document(s) (%d blocks) for block class '%s'",
                len(paths), len(directory), block_class,
            )
            self._directories[block_class] = directory
        return self._directories[block_class]

    def list_block_classes(self) -> list:
        """List the block classes that have a directory on disk."""
        if not self.requirements_dir.is_dir():
            return []
        return sorted(p.name for p in self.requirements_dir.iterdir() if p.is_dir())

    def init_directories(self) -> dict:
        """Load a Directory for every block class present on disk."""
        return {
            block_class: self.load_directory(block_class)
            for block_class in self.list_block_classes()
        }
