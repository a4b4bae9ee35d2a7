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

"""Renderer settings and factory.

Settings come from explicit arguments, falling back to environment
variables:

* ``TPLRENDER_TEMPLATE_DIR`` — base template directory
* ``TPLRENDER_TEMPLATE_EXT`` — template file extension (default ``tpl``)
* ``TPLRENDER_TEMPLATE_PATHS`` — namespaced directories as ``ns=dir``
  pairs separated by ``os.pathsep``
* ``TPLRENDER_AUTOESCAPE`` — ``1``/``true``/``yes``/``on`` to enable
  HTML autoescaping
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from tplrender.renderer import JinjaRenderer

logger = logging.getLogger(__name__)

ENV_PREFIX = "TPLRENDER_"
DEFAULT_EXTENSION = "tpl"
_TRUE_VALUES = {"1", "true", "yes", "on"}


def _parse_paths(raw: str) -> dict[str, str]:
    """Parse ``ns=dir`` pairs separated by ``os.pathsep``."""
    paths: dict[str, str] = {}
    for entry in raw.split(os.pathsep):
        entry = entry.strip()
        if not entry:
            continue
        namespace, sep, directory = entry.partition("=")
        namespace, directory = namespace.strip(), directory.strip()
        if not sep or not namespace or not directory:
            raise ValueError(
                f"Invalid template path entry {entry!r}; expected 'namespace=directory'"
            )
        paths[namespace] = directory
    return paths


@dataclass
class RendererSettings:
    """Configuration for :func:`create_renderer`."""

    template_dir: str | None = None
    template_ext: str = DEFAULT_EXTENSION
    defaults: dict[str, Any] = field(default_factory=dict)
    paths: dict[str, str] = field(default_factory=dict)
    autoescape: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RendererSettings:
        """Build settings from ``TPLRENDER_*`` environment variables."""
        env = os.environ if environ is None else environ
        settings = cls(
            template_dir=env.get(f"{ENV_PREFIX}TEMPLATE_DIR") or None,
            template_ext=env.get(f"{ENV_PREFIX}TEMPLATE_EXT") or DEFAULT_EXTENSION,
            paths=_parse_paths(env.get(f"{ENV_PREFIX}TEMPLATE_PATHS", "")),
            autoescape=env.get(f"{ENV_PREFIX}AUTOESCAPE", "").strip().lower() in _TRUE_VALUES,
        )
        logger.info(
            "Renderer settings from environment: dir=%s ext=%s namespaces=%s",
            settings.template_dir, settings.template_ext, sorted(settings.paths),
        )
        return settings


def create_renderer(settings: RendererSettings | None = None) -> JinjaRenderer:
    """Build a :class:`JinjaRenderer` from *settings* (or the environment)."""
    if settings is None:
        settings = RendererSettings.from_env()
    renderer = JinjaRenderer(
        settings.template_dir,
        settings.template_ext,
        settings.defaults,
        autoescape=settings.autoescape,
    )
    for namespace, directory in settings.paths.items():
        renderer.add_path(directory, namespace)
    return renderer
