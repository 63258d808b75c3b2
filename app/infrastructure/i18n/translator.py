"""Resolution engine: turns a message tree, a dotted key and parameters into
display text.

Resolution order is plural selection first, then ``{name}`` interpolation,
so placeholders inside the chosen plural form are still substituted. A key
that cannot be resolved is returned unchanged.
"""

import re
from typing import Any, Callable, Dict, Mapping, Optional, Union

from infrastructure.i18n.loader import MessageStore
from infrastructure.i18n.models import Locale, MessageTree, Namespace
from infrastructure.logging import get_module_logger

logger = get_module_logger()

Params = Mapping[str, Any]
Lookup = Callable[..., str]

_PLURAL_START = re.compile(r"\{\s*(\w+)\s*,\s*plural\s*,")
_FORM_SELECTOR = re.compile(r"\s*(=\d+|\w+)\s*\{")
_PLACEHOLDER = re.compile(r"\{(\w+)\}")

# Forms chosen only on an exact numeric match.
_EXACT_FORMS = {0: "zero", 1: "one", 2: "two"}


def get_nested_value(tree: Optional[MessageTree], key: str) -> Optional[str]:
    """Walk a tree along a dotted key.

    Returns:
        The string at the end of the path, or None if any segment is
        missing or the terminal value is not a string.
    """
    if tree is None:
        return None

    current: Any = tree
    for segment in key.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return None
        current = current[segment]

    return current if isinstance(current, str) else None


def has_key(tree: Optional[MessageTree], key: str) -> bool:
    """Check whether a dotted key resolves to a template."""
    return get_nested_value(tree, key) is not None


def _as_count(value: Any) -> Optional[Union[int, float]]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if number.is_integer() else number
    return None


def _format_count(count: Union[int, float]) -> str:
    if isinstance(count, float) and count.is_integer():
        return str(int(count))
    return str(count)


def _parse_plural_block(
    template: str, start: int
) -> Optional[tuple[int, str, Dict[str, str]]]:
    """Parse ``{countKey, plural, form {text} ...}`` starting at ``start``.

    Returns:
        (end index, count key, forms) or None when the text at ``start`` is
        not a well-formed plural block.
    """
    match = _PLURAL_START.match(template, start)
    if not match:
        return None

    count_key = match.group(1)
    forms: Dict[str, str] = {}
    pos = match.end()
    length = len(template)

    while True:
        while pos < length and template[pos].isspace():
            pos += 1
        if pos >= length:
            return None
        if template[pos] == "}":
            return (pos + 1, count_key, forms) if forms else None

        selector = _FORM_SELECTOR.match(template, pos)
        if not selector:
            return None

        text_start = selector.end()
        depth = 1
        i = text_start
        while i < length and depth:
            if template[i] == "{":
                depth += 1
            elif template[i] == "}":
                depth -= 1
            i += 1
        if depth:
            return None

        forms[selector.group(1)] = template[text_start : i - 1]
        pos = i


def select_plural_form(forms: Mapping[str, str], count: Union[int, float]) -> Optional[str]:
    """Pick the form text for a count.

    An ``=N`` form matches the count N exactly and wins over the named
    forms. ``zero``/``one``/``two`` apply only when the count equals 0, 1
    or 2 and the form is present; everything else falls through to
    ``other``.
    """
    literal = f"={_format_count(count)}"
    if literal in forms:
        return forms[literal]

    exact = _EXACT_FORMS.get(count)
    if exact and exact in forms:
        return forms[exact]
    return forms.get("other")


def apply_plural(template: str, params: Params) -> str:
    """Replace plural blocks whose count parameter is defined.

    Blocks that cannot be parsed, whose count is missing or not numeric, or
    that have no applicable form are left untouched.
    """
    result = []
    pos = 0
    search_from = 0

    while True:
        start = template.find("{", search_from)
        if start == -1:
            break

        parsed = _parse_plural_block(template, start)
        if parsed is None:
            search_from = start + 1
            continue

        end, count_key, forms = parsed
        count = _as_count(params.get(count_key))
        text = select_plural_form(forms, count) if count is not None else None

        if text is not None:
            result.append(template[pos:start])
            result.append(text.replace("#", _format_count(count)))
            pos = end
        search_from = end

    result.append(template[pos:])
    return "".join(result)


def interpolate(template: str, params: Params) -> str:
    """Substitute ``{name}`` placeholders present in params.

    Placeholders without a matching parameter are left verbatim.
    """

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in params:
            return str(params[name])
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


def resolve(
    tree: Optional[MessageTree],
    key: str,
    params: Optional[Params] = None,
    *,
    namespace: Optional[Union[str, Namespace]] = None,
    locale: Optional[Locale] = None,
    diagnostics: bool = False,
) -> str:
    """Resolve a dotted key to display text.

    Args:
        tree: Message tree for one namespace.
        key: Dotted key path (e.g. "buttons.submit").
        params: Values for the plural count and ``{name}`` placeholders.
        namespace: Namespace of ``tree`` (diagnostics only).
        locale: Active locale (diagnostics only).
        diagnostics: Log a missing-translation event (non-production).

    Returns:
        The resolved text, or ``key`` itself when the key is missing.
    """
    template = get_nested_value(tree, key)

    if template is None:
        if diagnostics:
            logger.warning(
                "translation_missing",
                key=f"{namespace}.{key}" if namespace else key,
                locale=locale,
            )
        return key

    if not params:
        return template

    return interpolate(apply_plural(template, params), params)


def bind(
    tree: Optional[MessageTree],
    namespace: Optional[Union[str, Namespace]] = None,
    locale: Optional[Locale] = None,
    diagnostics: bool = False,
) -> Lookup:
    """Bind resolve() to one tree.

    Returns:
        A ``lookup(key, params=None) -> str`` callable.
    """

    def lookup(key: str, params: Optional[Params] = None) -> str:
        return resolve(
            tree,
            key,
            params,
            namespace=namespace,
            locale=locale,
            diagnostics=diagnostics,
        )

    return lookup


class Translator:
    """Resolves messages against trees served by a MessageStore.

    Attributes:
        store: MessageStore the trees come from.
        diagnostics: Log missing translations (non-production).
    """

    def __init__(self, store: MessageStore, diagnostics: bool = False):
        """Initialize Translator.

        Args:
            store: MessageStore instance for loading namespaces.
            diagnostics: Emit missing-translation diagnostics.
        """
        self.store = store
        self.diagnostics = diagnostics
        logger.info(
            "initialized_translator",
            default_locale=store.registry.default_locale,
            diagnostics=diagnostics,
        )

    def bind(
        self,
        tree: Optional[MessageTree],
        namespace: Union[str, Namespace],
        locale: Locale,
    ) -> Lookup:
        """Bind a lookup to an already loaded tree."""
        return bind(tree, Namespace.coerce(namespace), locale, self.diagnostics)

    async def get_lookup(self, locale: Locale, namespace: Union[str, Namespace]) -> Lookup:
        """Load a namespace and bind a lookup to it.

        Args:
            locale: Locale code; unsupported codes use the default locale.
            namespace: Namespace or its identifier.

        Returns:
            A ``lookup(key, params=None) -> str`` callable.
        """
        locale = self.store.registry.normalize(locale)
        namespace = Namespace.coerce(namespace)
        tree = await self.store.load_namespace(locale, namespace)
        return self.bind(tree, namespace, locale)

    async def translate_message(
        self,
        locale: Locale,
        namespace: Union[str, Namespace],
        key: str,
        params: Optional[Params] = None,
    ) -> str:
        """Resolve one key.

        Returns:
            Translated text, or the key when missing.
        """
        lookup = await self.get_lookup(locale, namespace)
        return lookup(key, params)
