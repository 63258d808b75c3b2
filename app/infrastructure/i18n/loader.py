"""Message store: loads, merges and caches message trees per namespace.

Trees for a non-default locale are deep-merged over the default locale's
tree so any key missing in the locale falls back to the default value.
"""

import asyncio
import functools
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

import structlog
from infrastructure.i18n.manifest import RouteManifest
from infrastructure.i18n.models import (
    Locale,
    LoadedMessageSet,
    MessageTree,
    Namespace,
    freeze_tree,
)
from infrastructure.i18n.registry import LocaleRegistry
from infrastructure.i18n.sources import MessageSource

logger = structlog.get_logger()

CacheKey = Tuple[Locale, Namespace]


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep merge two message trees.

    Values from ``override`` win, except None values which never replace
    a value from ``base``. Nested mappings are merged recursively; neither
    input is modified.

    Args:
        base: Tree supplying fallback values (the default locale).
        override: Tree whose values take precedence (the requested locale).

    Returns:
        A new merged dict.
    """
    result: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if value is None:
            continue
        current = result.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


class MessageStore:
    """Process-wide store of merged message trees.

    Each (locale, namespace) cache entry is either absent, in flight
    (an asyncio.Task shared by every concurrent caller) or a completed,
    read-only tree. Completed entries are never modified.

    Attributes:
        source: MessageSource documents are fetched from.
        registry: LocaleRegistry used to normalize locales.
        manifest: Optional RouteManifest for per-route loading.
        diagnostics: Whether to log missing namespaces (non-production).
    """

    def __init__(
        self,
        source: MessageSource,
        registry: LocaleRegistry,
        manifest: Optional[RouteManifest] = None,
        diagnostics: bool = False,
    ):
        """Initialize message store.

        Args:
            source: MessageSource to fetch documents from.
            registry: LocaleRegistry for locale validation and defaults.
            manifest: Optional route manifest for load_route_namespaces().
            diagnostics: Emit development diagnostics for missing data.
        """
        self.source = source
        self.registry = registry
        self.manifest = manifest
        self.diagnostics = diagnostics
        self._cache: Dict[CacheKey, Union[MessageTree, "asyncio.Task[MessageTree]"]] = {}
        self._stats = {"hits": 0, "misses": 0, "coalesced": 0}

        logger.info(
            "initialized_message_store",
            source=type(source).__name__,
            default_locale=registry.default_locale,
            has_manifest=manifest is not None,
        )

    async def load_namespace(
        self, locale: Locale, namespace: Union[str, Namespace]
    ) -> MessageTree:
        """Load the merged message tree for one namespace.

        Unsupported locales are served the default locale's tree. Concurrent
        calls for the same (locale, namespace) await one shared load.

        Args:
            locale: Locale code.
            namespace: Namespace or its identifier.

        Returns:
            Read-only message tree (possibly empty).

        Raises:
            ValueError: If ``namespace`` is not a known namespace.
        """
        locale = self.registry.normalize(locale)
        namespace = Namespace.coerce(namespace)
        cache_key = (locale, namespace)

        entry = self._cache.get(cache_key)
        if entry is not None:
            if not isinstance(entry, asyncio.Task):
                self._stats["hits"] += 1
                return entry
            if entry.done() and not entry.cancelled() and entry.exception() is None:
                self._stats["hits"] += 1
                return entry.result()
            if not entry.done():
                self._stats["coalesced"] += 1
                return await asyncio.shield(entry)

        self._stats["misses"] += 1
        task = asyncio.get_running_loop().create_task(self._load(locale, namespace))
        self._cache[cache_key] = task
        task.add_done_callback(functools.partial(self._on_load_done, cache_key))
        return await asyncio.shield(task)

    def _on_load_done(self, cache_key: CacheKey, task: "asyncio.Task[MessageTree]") -> None:
        if self._cache.get(cache_key) is not task:
            return
        if task.cancelled() or task.exception() is not None:
            # Evict so a later call retries the load.
            del self._cache[cache_key]
            return
        self._cache[cache_key] = task.result()

    async def _load(self, locale: Locale, namespace: Namespace) -> MessageTree:
        if locale == self.registry.default_locale:
            tree = await self._fetch(locale, namespace) or {}
            merged = freeze_tree(tree)
        else:
            tree, default_tree = await asyncio.gather(
                self._fetch(locale, namespace),
                self.load_namespace(self.registry.default_locale, namespace),
            )
            merged = freeze_tree(deep_merge(default_tree, tree or {}))

        if not merged and self.diagnostics:
            logger.warning(
                "namespace_missing",
                locale=locale,
                namespace=namespace.value,
                default_locale=self.registry.default_locale,
            )

        logger.debug(
            "namespace_loaded",
            locale=locale,
            namespace=namespace.value,
            key_count=len(merged),
        )
        return merged

    async def _fetch(self, locale: Locale, namespace: Namespace) -> Optional[MessageTree]:
        try:
            return await self.source.fetch_document(locale, namespace)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(
                "message_source_error",
                locale=locale,
                namespace=namespace.value,
                error=str(e),
            )
            return None

    async def load_namespaces(
        self, locale: Locale, namespaces: Iterable[Union[str, Namespace]]
    ) -> LoadedMessageSet:
        """Load several namespaces in parallel.

        Args:
            locale: Locale code.
            namespaces: Namespaces to load; duplicates are collapsed.

        Returns:
            LoadedMessageSet keyed by exactly the requested namespaces.
        """
        locale = self.registry.normalize(locale)
        requested = list(dict.fromkeys(Namespace.coerce(ns) for ns in namespaces))
        trees = await asyncio.gather(
            *(self.load_namespace(locale, namespace) for namespace in requested)
        )
        return LoadedMessageSet(locale=locale, messages=dict(zip(requested, trees)))

    async def load_all_namespaces(self, locale: Locale) -> LoadedMessageSet:
        """Load every namespace for a locale (full catalog)."""
        return await self.load_namespaces(locale, list(Namespace))

    async def load_route_namespaces(
        self,
        locale: Locale,
        path: str,
        manifest: Optional[RouteManifest] = None,
        full_catalog: bool = False,
    ) -> LoadedMessageSet:
        """Load the namespaces a page route needs.

        The route's declared namespaces plus the registry defaults are
        loaded; a route missing from the manifest gets the defaults only.
        Without a manifest, or when ``full_catalog`` is set (development),
        the full catalog is loaded.

        Args:
            locale: Locale code.
            path: Request path, with or without the locale prefix.
            manifest: Manifest overriding the store's own.
            full_catalog: Load every namespace regardless of the manifest.

        Returns:
            LoadedMessageSet for the route.
        """
        manifest = manifest or self.manifest
        if full_catalog or manifest is None:
            return await self.load_all_namespaces(locale)

        declared = manifest.namespaces_for(path)
        if not declared:
            logger.debug("route_not_in_manifest", path=path)

        return await self.load_namespaces(
            locale, list(self.registry.default_namespaces) + list(declared)
        )

    def clear_cache(self) -> None:
        """Clear all cached trees."""
        self._cache.clear()
        self._stats = {"hits": 0, "misses": 0, "coalesced": 0}
        self.source.clear()
        logger.info("cleared_message_cache")

    def get_stats(self) -> Dict[str, Any]:
        """Cache statistics.

        Returns:
            Dict with hits, misses, coalesced waits, completed and in-flight
            entry counts.
        """
        in_flight = sum(
            1
            for entry in self._cache.values()
            if isinstance(entry, asyncio.Task) and not entry.done()
        )
        return {
            **self._stats,
            "entries": len(self._cache) - in_flight,
            "in_flight": in_flight,
        }
