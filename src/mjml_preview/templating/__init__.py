r"""mjml-preview templating.

Resolves Handlebars-style directives in MJML documents against a property set
merged from the document's sibling ``email-theme.json`` and
``<name>.sample.json`` files.

Basic usage:
    from pathlib import Path

    from mjml_preview.templating import render_template, resolve_properties

    path = Path("emails/welcome.mjml")
    properties = resolve_properties(path)
    markup = render_template(path, properties)

Supported directives:
    {{user.name}}                     escaped interpolation
    {{{user.bio}}}                    raw interpolation
    {{#ifEquals plan "pro"}}...{{else}}...{{/ifEquals}}
    {{#if x}} / {{#unless x}} / {{#each items}}
    {{include "header"}} / {{> header}}   splice header.mjml from the same directory
"""

from ._environment import EnvironmentConfig, create_environment
from ._properties import (
    SAMPLE_FILE_SUFFIX,
    THEME_FILE_NAME,
    load_property_file,
    merge_properties,
    resolve_properties,
    sample_file_for,
    theme_file_for,
)
from ._renderer import (
    PARTIAL_EXTENSION,
    TemplateHelpers,
    render_template,
    render_template_string,
)
from ._translate import translate
from ._values import is_truthy, js_string, loose_equals

__all__ = [
    "PARTIAL_EXTENSION",
    "SAMPLE_FILE_SUFFIX",
    "THEME_FILE_NAME",
    "EnvironmentConfig",
    "TemplateHelpers",
    "create_environment",
    "is_truthy",
    "js_string",
    "load_property_file",
    "loose_equals",
    "merge_properties",
    "render_template",
    "render_template_string",
    "resolve_properties",
    "sample_file_for",
    "theme_file_for",
    "translate",
]
