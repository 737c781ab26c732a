"""Template rendering engine.

Templates are written in a Handlebars dialect, translated to Jinja2 source and
rendered against a property set. Helpers are explicit per-render objects: each
call to `render_template` or `render_template_string` builds its own
environment and helper scope, so nothing leaks between renders.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from jinja2 import Environment, TemplateError, TemplateSyntaxError
from markupsafe import Markup

from mjml_preview.exceptions import PartialNotFoundError, TemplateCompileError
from mjml_preview.utils import get_logger

from ._environment import EnvironmentConfig, create_environment
from ._translate import BLOCK_HELPERS, HELPERS_NAME, INCLUDE_HELPER, ROOT_NAME, translate
from ._values import is_missing, is_truthy, js_string, loose_equals

PARTIAL_EXTENSION = ".mjml"

_RESERVED_HELPERS = BLOCK_HELPERS | {INCLUDE_HELPER, "else", "this"}

HelperFunction = Callable[..., object]


@dataclass(frozen=True, slots=True)
class TemplateHelpers:
    """Helpers available to a single render.

    Attributes:
        extra: Inline helpers callable as ``{{name arg1 arg2}}``. Return
            ``markupsafe.Markup`` to skip escaping.
        partial_extension: Extension appended to partial names.
    """

    extra: Mapping[str, HelperFunction] = field(default_factory=dict)
    partial_extension: str = PARTIAL_EXTENSION

    def __post_init__(self) -> None:
        clashes = sorted(set(self.extra) & _RESERVED_HELPERS)
        if clashes:
            msg = f"Helper names are reserved: {', '.join(clashes)}"
            raise ValueError(msg)

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self.extra)

    def partial_path(self, name: str, base_dir: Path | None) -> Path:
        """Resolve a partial name relative to the including document's directory.

        The extension is always appended, so ``header.mjml`` names
        ``header.mjml.mjml``.
        """
        return (base_dir or Path()) / f"{name}{self.partial_extension}"


@dataclass(slots=True)
class _Render:
    env: Environment
    properties: Mapping[str, object]
    helpers: TemplateHelpers

    def render(
        self,
        source: str,
        *,
        source_name: str,
        base_dir: Path | None,
        chain: tuple[Path, ...],
    ) -> str:
        jinja_source = translate(source, source_name=source_name, helper_names=self.helpers.names)
        try:
            template = self.env.from_string(jinja_source)
        except TemplateSyntaxError as e:
            msg = f"Invalid template syntax: {e.message}"
            raise TemplateCompileError(msg, source=source_name, line=e.lineno, cause=e) from e

        scope = _HelperScope(self, base_dir=base_dir, chain=chain)
        try:
            return cast("str", template.render({ROOT_NAME: self.properties, HELPERS_NAME: scope}))
        except TemplateError as e:
            msg = f"Template rendering failed: {e}"
            raise TemplateCompileError(msg, source=source_name, cause=e) from e


class _HelperScope:
    """Runtime helper object bound to ``_hb`` inside translated templates."""

    def __init__(self, render: _Render, *, base_dir: Path | None, chain: tuple[Path, ...]) -> None:
        self._render = render
        self._base_dir = base_dir
        self._chain = chain

    def lookup(self, value: object, key: str) -> object:
        """Resolve one path segment.

        Only mapping keys, sequence indexes and ``length`` on sequences and
        strings resolve; anything else (Python attributes included) is
        undefined.
        """
        if isinstance(value, Mapping):
            mapping = cast("Mapping[str, object]", value)
            if key in mapping:
                return mapping[key]
        elif isinstance(value, (list, tuple, str)):
            if key == "length":
                return len(cast("str | list[object]", value))
            if key.isdigit() and not isinstance(value, str):
                items = cast("list[object]", value)
                index = int(key)
                if index < len(items):
                    return items[index]
        return self._render.env.undefined(obj=value, name=key)

    @staticmethod
    def truthy(value: object) -> bool:
        return is_truthy(value)

    @staticmethod
    def equals(left: object, right: object) -> bool:
        return loose_equals(left, right)

    @staticmethod
    def each(value: object) -> list[tuple[object, object]]:
        if isinstance(value, Mapping):
            return list(cast("Mapping[object, object]", value).items())
        if isinstance(value, (list, tuple)):
            return list(enumerate(cast("list[object]", value)))
        return []

    @staticmethod
    def raw(value: object) -> Markup:
        if isinstance(value, Markup):
            return value
        return Markup(js_string(value))  # noqa: S704

    def call(self, name: str, *args: object) -> object:
        helper = self._render.helpers.extra[name]
        return helper(*(None if is_missing(arg) else arg for arg in args))

    def include(self, name: str) -> Markup:
        path = self._render.helpers.partial_path(name, self._base_dir)
        if not path.is_file():
            msg = f"Partial {name!r} not found: {path}"
            raise PartialNotFoundError(msg, name=name, path=path)

        resolved = path.resolve()
        if resolved in self._chain:
            cycle = " -> ".join(str(p) for p in (*self._chain, resolved))
            msg = f"Partial include cycle: {cycle}"
            raise TemplateCompileError(msg, source=str(path))

        get_logger().debug("partial_included", name=name, path=str(path))
        rendered = self._render.render(
            path.read_text(encoding="utf-8"),
            source_name=str(path),
            base_dir=path.parent,
            chain=(*self._chain, resolved),
        )
        # partial markup is trusted and spliced in unescaped
        return Markup(rendered)  # noqa: S704


def render_template_string(
    template_str: str,
    properties: Mapping[str, object],
    *,
    base_dir: Path | None = None,
    source_name: str = "<string>",
    source_path: Path | None = None,
    helpers: TemplateHelpers | None = None,
    config: EnvironmentConfig | None = None,
) -> str:
    """Render a template string against a property set.

    Args:
        template_str: The template text.
        properties: Merged property set; never mutated.
        base_dir: Directory partials are resolved against. Defaults to the
            current working directory.
        source_name: Name used in error messages.
        source_path: File the template was read from, used to detect include
            cycles back to it.
        helpers: Per-render helpers. Defaults to the built-in set.
        config: Optional environment configuration.

    Returns:
        Rendered text.

    Raises:
        TemplateCompileError: If the template syntax is invalid or rendering fails.
        PartialNotFoundError: If an included partial does not exist.
    """
    render = _Render(
        env=create_environment(config=config),
        properties=properties,
        helpers=helpers or TemplateHelpers(),
    )
    chain = (source_path.resolve(),) if source_path is not None else ()
    result = render.render(template_str, source_name=source_name, base_dir=base_dir, chain=chain)
    get_logger().debug("template_rendered", source=source_name, length=len(result))
    return result


def render_template(
    template_path: Path,
    properties: Mapping[str, object],
    *,
    helpers: TemplateHelpers | None = None,
    config: EnvironmentConfig | None = None,
) -> str:
    """Render a template file against a property set.

    Partials are resolved relative to the template's directory.

    Args:
        template_path: Path to the template file.
        properties: Merged property set; never mutated.
        helpers: Per-render helpers. Defaults to the built-in set.
        config: Optional environment configuration.

    Returns:
        Rendered text.

    Raises:
        FileNotFoundError: If template file does not exist.
        TemplateCompileError: If the template syntax is invalid or rendering fails.
        PartialNotFoundError: If an included partial does not exist.
    """
    content = template_path.read_text(encoding="utf-8")
    return render_template_string(
        content,
        properties,
        base_dir=template_path.parent,
        source_name=str(template_path),
        source_path=template_path,
        helpers=helpers,
        config=config,
    )
