"""Route manifest: which namespaces each page route declares.

Production pages load only the namespaces their route declares plus the
registry's default set. The manifest document looks like::

    {"routes": {"/admin/finance": {"namespaces": ["dashboard_admin"]},
                "/p2p/offer/[id]": {"namespaces": ["ext", "ext_p2p"]}}}
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

import yaml

import structlog
from infrastructure.i18n.models import Namespace

logger = structlog.get_logger()

_DYNAMIC_SEGMENT = re.compile(r"^\[\.{0,3}([^\]]+)\]$")


def normalize_route(route: str) -> str:
    """Normalize a route pattern: leading slash, no trailing slash,
    ``[param]`` segments reduced to ``param``."""
    parts = []
    for part in route.split("/"):
        if not part:
            continue
        match = _DYNAMIC_SEGMENT.match(part)
        parts.append(match.group(1) if match else part)
    return "/" + "/".join(parts)


@dataclass(frozen=True)
class RouteManifest:
    """Maps page routes to the namespaces they declare.

    Attributes:
        routes: Normalized route -> namespaces.
        locales: Locale codes stripped from the front of looked-up paths.
    """

    routes: Mapping[str, tuple[Namespace, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    locales: tuple[str, ...] = ()

    @classmethod
    def from_mapping(
        cls, data: Mapping, locales: Iterable[str] = ()
    ) -> "RouteManifest":
        """Build a manifest from a parsed document.

        Unknown namespace names are skipped with a warning.
        """
        routes: dict[str, tuple[Namespace, ...]] = {}
        for route, entry in (data.get("routes") or {}).items():
            names = entry.get("namespaces", []) if isinstance(entry, Mapping) else entry
            namespaces = []
            for name in names or []:
                try:
                    namespaces.append(Namespace.from_string(name))
                except ValueError:
                    logger.warning("unknown_manifest_namespace", route=route, namespace=name)
            routes[normalize_route(route)] = tuple(dict.fromkeys(namespaces))
        return cls(routes=MappingProxyType(routes), locales=tuple(locales))

    @classmethod
    def from_file(cls, path: Path, locales: Iterable[str] = ()) -> "RouteManifest":
        """Load a JSON or YAML manifest document.

        Raises:
            ValueError: If the document cannot be parsed or is not a mapping.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f) if path.suffix == ".json" else yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Failed to parse route manifest {path}: {e}") from e

        if not isinstance(data, Mapping):
            raise ValueError(f"Route manifest must be a mapping: {path}")

        manifest = cls.from_mapping(data, locales=locales)
        logger.info("loaded_route_manifest", path=str(path), route_count=len(manifest.routes))
        return manifest

    def _route_for_path(self, path: str) -> str:
        parts = [part for part in path.split("?", 1)[0].split("/") if part]
        if parts and parts[0] in self.locales:
            parts = parts[1:]
        return "/" + "/".join(parts)

    def namespaces_for(self, path: str) -> tuple[Namespace, ...]:
        """Namespaces declared by the route serving ``path``.

        Tries the exact route, then each parent route, then "/".

        Returns:
            The declared namespaces, or () when no route matches.
        """
        route = self._route_for_path(path)
        if route in self.routes:
            return self.routes[route]

        parts = [part for part in route.split("/") if part]
        while parts:
            parts.pop()
            parent = "/" + "/".join(parts)
            if parent in self.routes:
                return self.routes[parent]

        return ()
