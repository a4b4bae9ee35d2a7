# tplrender — template rendering adapter for web applications
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Template rendering adapter backed by Jinja2.

Usage::

    from tplrender import JinjaRenderer, TEMPLATE_ALL

    renderer = JinjaRenderer("templates", "tpl")
    renderer.add_path("templates/emails", "emails")
    renderer.add_default_param(TEMPLATE_ALL, {"site": "Example"})
    html = renderer.render("emails::welcome", {"name": "Ada"})
"""

from tplrender.config import RendererSettings, create_renderer
from tplrender.engine import Folder, TemplateEngine
from tplrender.paths import TemplatePath
from tplrender.renderer import (
    TEMPLATE_ALL,
    DuplicatePathWarning,
    InvalidArgumentError,
    JinjaRenderer,
    TemplateNotFoundError,
    TemplateRenderer,
    TemplateScope,
)

__all__ = [
    "TEMPLATE_ALL",
    "DuplicatePathWarning",
    "Folder",
    "InvalidArgumentError",
    "JinjaRenderer",
    "RendererSettings",
    "TemplateEngine",
    "TemplateNotFoundError",
    "TemplatePath",
    "TemplateRenderer",
    "TemplateScope",
    "create_renderer",
]
