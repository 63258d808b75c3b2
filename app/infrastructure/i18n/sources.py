"""Message sources: where message documents come from.

Defines the contract the message store uses to fetch one document per
(locale, namespace) pair, and provides file-based and in-memory sources.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

import structlog
from infrastructure.i18n.models import Locale, MessageTree, Namespace

logger = structlog.get_logger()

DOCUMENT_SUFFIXES = (".json", ".yml", ".yaml")


class MessageSource(ABC):
    """Abstract base for message sources.

    Implementations return the message tree for one (locale, namespace)
    pair, or None when no document exists. Missing or malformed documents
    are never fatal.
    """

    @abstractmethod
    async def fetch_document(
        self, locale: Locale, namespace: Namespace
    ) -> Optional[MessageTree]:
        """Fetch the message document for a locale and namespace.

        Args:
            locale: Locale code.
            namespace: Namespace to fetch.

        Returns:
            The parsed message tree, or None when not found or unusable.
        """
        pass

    def clear(self) -> None:
        """Drop any documents the source itself keeps in memory."""
        return None


class FileMessageSource(MessageSource):
    """Source reading JSON or YAML message documents from a directory.

    Two layouts are supported, tried in order:

    - per-namespace: ``<dir>/<locale>/<namespace>.json`` (or .yml/.yaml)
    - single file per locale: ``<dir>/<locale>.json`` (or .yml/.yaml) whose
      top-level keys are namespaces

    Attributes:
        messages_dir: Directory holding the documents.
    """

    def __init__(self, messages_dir: Path):
        """Initialize file message source.

        Args:
            messages_dir: Directory with message documents.

        Raises:
            ValueError: If the directory does not exist.
        """
        self.messages_dir = Path(messages_dir)
        self._locale_files: Dict[Locale, Optional[Dict[str, Any]]] = {}

        if not self.messages_dir.exists():
            raise ValueError(f"Messages directory not found: {self.messages_dir}")

        logger.info(
            "initialized_file_message_source", messages_dir=str(self.messages_dir)
        )

    async def fetch_document(
        self, locale: Locale, namespace: Namespace
    ) -> Optional[MessageTree]:
        return await asyncio.to_thread(self._read_document, locale, namespace)

    def _read_document(
        self, locale: Locale, namespace: Namespace
    ) -> Optional[MessageTree]:
        for suffix in DOCUMENT_SUFFIXES:
            path = self.messages_dir / locale / f"{namespace.value}{suffix}"
            if path.is_file():
                return self._parse_file(path)

        locale_document = self._read_locale_file(locale)
        if locale_document is None:
            return None

        tree = locale_document.get(namespace.value)
        if tree is None:
            return None
        if not isinstance(tree, dict):
            logger.warning(
                "invalid_namespace_format",
                locale=locale,
                namespace=namespace.value,
                expected="dict",
            )
            return None
        return tree

    def _read_locale_file(self, locale: Locale) -> Optional[Dict[str, Any]]:
        if locale in self._locale_files:
            return self._locale_files[locale]

        document = None
        for suffix in DOCUMENT_SUFFIXES:
            path = self.messages_dir / f"{locale}{suffix}"
            if path.is_file():
                document = self._parse_file(path)
                break

        self._locale_files[locale] = document
        return document

    def _parse_file(self, path: Path) -> Optional[Dict[str, Any]]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
            logger.warning("message_document_parse_error", file=str(path), error=str(e))
            return None
        except OSError as e:
            logger.warning("message_document_read_error", file=str(path), error=str(e))
            return None

        if not isinstance(data, dict):
            logger.warning("invalid_message_document", file=str(path), expected="dict")
            return None

        return data

    def clear(self) -> None:
        self._locale_files.clear()

    def available_locales(self) -> list[Locale]:
        """Locales with at least one document on disk."""
        found = set()
        for entry in self.messages_dir.iterdir():
            if entry.is_dir():
                found.add(entry.name)
            elif entry.suffix in DOCUMENT_SUFFIXES:
                found.add(entry.stem)
        return sorted(found)


class InMemoryMessageSource(MessageSource):
    """Source serving documents from a dict, for tests and development.

    Attributes:
        documents: {locale: {namespace: tree}} mapping.
        fetch_counts: Number of fetches per (locale, namespace) pair.
    """

    def __init__(
        self,
        documents: Optional[Mapping[Locale, Mapping[str, Any]]] = None,
        delay: float = 0.0,
    ):
        """Initialize in-memory source.

        Args:
            documents: {locale: {namespace: tree}} mapping. Non-dict trees
                are treated as malformed.
            delay: Seconds to sleep before answering, to simulate I/O.
        """
        self.documents: Dict[Locale, Mapping[str, Any]] = dict(documents or {})
        self.delay = delay
        self.fetch_counts: Counter[Tuple[Locale, str]] = Counter()

    async def fetch_document(
        self, locale: Locale, namespace: Namespace
    ) -> Optional[MessageTree]:
        self.fetch_counts[(locale, namespace.value)] += 1
        if self.delay:
            await asyncio.sleep(self.delay)

        tree = self.documents.get(locale, {}).get(namespace.value)
        if tree is None:
            return None
        if not isinstance(tree, Mapping):
            logger.warning(
                "invalid_namespace_format",
                locale=locale,
                namespace=namespace.value,
                expected="dict",
            )
            return None
        return tree
